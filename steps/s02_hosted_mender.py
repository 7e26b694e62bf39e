# steps/s02_hosted_mender.py
from __future__ import annotations
from typing import TYPE_CHECKING

import prompts
from logger import log
from steps.common import Step, ask_yes_no
from validators import HOSTED_MENDER_URL

if TYPE_CHECKING:
    from wizard import SetupWizard


def ask_hosted_mender(wizard: SetupWizard) -> Step:
    state = wizard.state
    if not state.is_set("hosted_mender"):
        state.hosted_mender = ask_yes_no(wizard.terminal, prompts.HOSTED_MENDER, default=True)
    log.info("Step hosted mender: %s", state.hosted_mender)

    if state.hosted_mender:
        state.server_url = HOSTED_MENDER_URL
        return Step.CREDENTIALS
    return Step.DEMO_SERVER
