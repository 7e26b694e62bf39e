# steps/s04_server_url.py
from __future__ import annotations
from typing import TYPE_CHECKING, Optional

import prompts
from logger import log
from steps.common import Step, ask_until_valid
from validators import DEFAULT_SERVER_URL, validate_url

if TYPE_CHECKING:
    from wizard import SetupWizard


def ask_server_url(wizard: SetupWizard) -> Step:
    state = wizard.state
    # A URL from the flags is checked like a typed one; if it is bad the
    # user is asked again.
    given: Optional[str] = state.server_url if state.is_set("server_url") else None
    state.server_url = ask_until_valid(
        wizard.terminal,
        prompts.SERVER_URL,
        validate_url,
        lambda value: prompts.RSP_INVALID_URL,
        default=DEFAULT_SERVER_URL,
        answer=given,
    )
    log.info("Step server URL: %s", state.server_url)
    return Step.SERVER_CERT
