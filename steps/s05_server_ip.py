# steps/s05_server_ip.py
from __future__ import annotations
from typing import TYPE_CHECKING

import prompts
from logger import log
from steps.common import Step, ask_until_valid
from validators import DEFAULT_SERVER_IP, DEFAULT_SERVER_URL, validate_server_ip

if TYPE_CHECKING:
    from wizard import SetupWizard


def ask_server_ip(wizard: SetupWizard) -> Step:
    state = wizard.state
    if not state.is_set("server_url"):
        state.server_url = DEFAULT_SERVER_URL

    if state.server_ip:
        ok, msg = validate_server_ip(state.server_ip)
        if ok:
            log.info("Step server IP: %s (from flags)", state.server_ip)
            return Step.POLLING
        log.warning("Ignoring --server-ip: %s", msg)

    state.server_ip = ask_until_valid(
        wizard.terminal,
        prompts.SERVER_IP,
        validate_server_ip,
        lambda value: prompts.RSP_INVALID_IP,
        default=DEFAULT_SERVER_IP,
    )
    log.info("Step server IP: %s", state.server_ip)
    return Step.POLLING
