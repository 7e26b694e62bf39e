# steps/s01_device_type.py
from __future__ import annotations
from typing import TYPE_CHECKING

import prompts
from conf.config import get_device_type
from conf.paths import Paths
from errors import ManifestError
from logger import log
from steps.common import Step, ask_until_valid
from validators import validate_device_type

if TYPE_CHECKING:
    from wizard import SetupWizard


def default_device_type(paths: Paths) -> str:
    """Device manifest first, then the host name, then "unknown"."""
    try:
        device_type = get_device_type(paths.device_type_file)
    except (OSError, ManifestError) as e:
        log.debug("No device type in %s: %s", paths.device_type_file, e)
        device_type = ""
    if device_type:
        return device_type
    try:
        return paths.hostname_file.read_text(encoding="utf-8").strip("\n") or "unknown"
    except (OSError, UnicodeDecodeError):
        return "unknown"


def ask_device_type(wizard: SetupWizard) -> Step:
    state = wizard.state
    if state.device_type:
        ok, msg = validate_device_type(state.device_type)
        if ok:
            log.info("Step device type: %s (from flags)", state.device_type)
            return Step.HOSTED_MENDER
        log.warning("Ignoring --device-type: %s", msg)

    default = default_device_type(wizard.paths)
    state.device_type = ask_until_valid(
        wizard.terminal,
        prompts.DEVICE_TYPE.format(default=default),
        validate_device_type,
        lambda value: prompts.RSP_INVALID_DEVICE.format(value=value, default=default),
        default=default,
    )
    log.info("Step device type: %s", state.device_type)
    return Step.HOSTED_MENDER
