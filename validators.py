# validators.py
from __future__ import annotations
import os
import re
from functools import lru_cache
from typing import Pattern, Tuple

from errors import SetupError

MINIMUM_POLL_INTERVAL = 5

VALID_DEVICE_TYPE_REGEX = r"^[A-Za-z0-9-_]+$"
VALID_URL_REGEX = (
    r"(http|https)://(\w+:?\w*@)?(\S+)(:[0-9]+)?((/\S+?/)*)"
    r"(/|/([\w#!:.?+=&%@!\-/]))?"
)
VALID_IP_REGEX = r"^([0-9]{1,3}\.){3}[0-9]{1,3}(:[0-9]{1,5})?$"
VALID_INTEGER_REGEX = r"^[+-]?[0-9]+\Z"
# RFC 5322
VALID_EMAIL_REGEX = (
    r"(?:[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*|"
    r'"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21\x23-\x5b\x5d-\x7f]|'
    r'\\[\x01-\x09\x0b\x0c\x0e-\x7f])*")'
    r"@(?:(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?|"
    r"\[(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?|[a-z0-9-]*[a-z0-9]:"
    r"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21-\x5a\x53-\x7f]|"
    r"\\[\x01-\x09\x0b\x0c\x0e-\x7f])+)\])"
)

# -- Defaults -----------------------------------------------------------------

DEFAULT_SERVER_IP = "127.0.0.1"
DEFAULT_SERVER_URL = "https://docker.mender.io"
DEFAULT_INVENTORY_POLL = 28800
DEFAULT_RETRY_POLL = 300
DEFAULT_UPDATE_POLL = 1800
DEMO_INVENTORY_POLL = 5
DEMO_RETRY_POLL = 30
DEMO_UPDATE_POLL = 5
DEMO_CONTROL_MAP_EXPIRATION = 90
DEMO_CONTROL_MAP_BOOT_EXPIRATION = 45
HOSTED_MENDER_URL = "https://hosted.mender.io"


@lru_cache(maxsize=None)
def compile_regex(pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise SetupError(f"Unable to compile regex {pattern!r}: {e}") from e


def validate_device_type(value: str) -> Tuple[bool, str]:
    if compile_regex(VALID_DEVICE_TYPE_REGEX).search(value):
        return True, ""
    return False, f"'{value}' contains spaces or special characters."


def validate_url(value: str) -> Tuple[bool, str]:
    if compile_regex(VALID_URL_REGEX).search(value):
        return True, ""
    return False, f"'{value}' is not a valid server URL."


def validate_server_ip(value: str) -> Tuple[bool, str]:
    if compile_regex(VALID_IP_REGEX).search(value):
        return True, ""
    return False, f"'{value}' is not a valid IP address."


def validate_email(value: str) -> Tuple[bool, str]:
    if compile_regex(VALID_EMAIL_REGEX).search(value):
        return True, ""
    return False, f"'{value}' does not appear to be a valid email address."


def validate_cert_path(value: str) -> Tuple[bool, str]:
    """Empty means no certificate; anything else must exist on disk."""
    if value == "" or os.path.exists(value):
        return True, ""
    return False, f"The file '{value}' does not exist."


def validate_poll_interval(value: str) -> Tuple[bool, str]:
    if not compile_regex(VALID_INTEGER_REGEX).search(value):
        return False, f"'{value}' is not an integer number."
    seconds = int(value)
    if seconds < MINIMUM_POLL_INTERVAL:
        return False, (
            f"Polling interval too short; minimum is "
            f"{MINIMUM_POLL_INTERVAL} seconds."
        )
    return True, ""
