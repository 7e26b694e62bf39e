# wizard.py
from __future__ import annotations
from typing import Callable, Dict, Optional

import prompts
from conf.paths import Paths
from logger import log
from network.hosted import HostedMenderClient
from state import WizardState
from steps.common import Step
from steps.s01_device_type import ask_device_type
from steps.s02_hosted_mender import ask_hosted_mender
from steps.s03_demo_server import ask_demo_server
from steps.s04_server_url import ask_server_url
from steps.s05_server_ip import ask_server_ip
from steps.s06_server_cert import ask_server_cert
from steps.s07_credentials import ask_hosted_credentials
from steps.s08_polling import ask_polling_intervals
from terminal import Terminal

Handler = Callable[["SetupWizard"], Step]

HANDLERS: Dict[Step, Handler] = {
    Step.DEVICE_TYPE: ask_device_type,
    Step.HOSTED_MENDER: ask_hosted_mender,
    Step.DEMO_SERVER: ask_demo_server,
    Step.SERVER_URL: ask_server_url,
    Step.SERVER_IP: ask_server_ip,
    Step.SERVER_CERT: ask_server_cert,
    Step.CREDENTIALS: ask_hosted_credentials,
    Step.POLLING: ask_polling_intervals,
}

_unhandled = set(Step) - set(HANDLERS) - {Step.DONE}
if _unhandled:
    raise RuntimeError(f"No handler for steps: {sorted(s.name for s in _unhandled)}")


class SetupWizard:
    """Walks the setup steps, filling in `state` from flags or prompts."""

    def __init__(
        self,
        state: WizardState,
        terminal: Terminal,
        paths: Paths,
        quiet: bool = False,
        hosted: Optional[HostedMenderClient] = None,
    ) -> None:
        self.state = state
        self.terminal = terminal
        self.paths = paths
        self.quiet = quiet
        self.hosted = hosted or HostedMenderClient()

    def run(self) -> WizardState:
        if not self.quiet:
            self.terminal.say(prompts.WIZARD)
        step = Step.DEVICE_TYPE
        while step is not Step.DONE:
            log.debug("Entering step %s", step.name)
            step = HANDLERS[step](self)
        log.info("Wizard complete")
        return self.state
