# steps/s06_server_cert.py
from __future__ import annotations
from typing import TYPE_CHECKING

import prompts
from logger import log
from steps.common import Step, ask_until_valid
from validators import validate_cert_path

if TYPE_CHECKING:
    from wizard import SetupWizard


def ask_server_cert(wizard: SetupWizard) -> Step:
    state = wizard.state
    if state.is_set("server_cert"):
        ok, msg = validate_cert_path(state.server_cert)
        if ok:
            log.info("Step server certificate: %r (from flags)", state.server_cert)
            return Step.POLLING
        log.warning("Ignoring --server-cert: %s", msg)

    state.server_cert = ask_until_valid(
        wizard.terminal,
        prompts.SERVER_CERT,
        validate_cert_path,
        lambda value: prompts.RSP_FILE_NOT_EXIST.format(value=value),
        default="",
    )
    log.info("Step server certificate: %r", state.server_cert)
    return Step.POLLING
