# steps/s03_demo_server.py
from __future__ import annotations
from typing import TYPE_CHECKING

import prompts
from logger import log
from steps.common import Step, ask_yes_no

if TYPE_CHECKING:
    from wizard import SetupWizard


def ask_demo_server(wizard: SetupWizard) -> Step:
    state = wizard.state
    if not state.is_set("demo_server"):
        state.demo_server = ask_yes_no(wizard.terminal, prompts.DEMO_SERVER, default=True)
    log.info("Step demo server: %s", state.demo_server)

    if state.hosted_mender:
        return Step.DONE if state.demo_intervals else Step.POLLING
    return Step.SERVER_IP if state.demo_server else Step.SERVER_URL
