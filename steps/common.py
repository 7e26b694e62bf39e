# steps/common.py
from __future__ import annotations
from enum import Enum
from typing import Callable, Optional, Tuple

import prompts
from logger import log
from terminal import Terminal


class Step(Enum):
    DEVICE_TYPE = "device_type"
    HOSTED_MENDER = "hosted_mender"
    DEMO_SERVER = "demo_server"
    SERVER_URL = "server_url"
    SERVER_IP = "server_ip"
    SERVER_CERT = "server_cert"
    CREDENTIALS = "credentials"
    POLLING = "polling"
    DONE = "done"


def ask_yes_no(terminal: Terminal, prompt: str, default: bool = True) -> bool:
    """Y/y or N/n; an empty answer takes the default."""
    answer = terminal.prompt_line(prompt)
    while True:
        if answer in ("Y", "y"):
            return True
        if answer in ("N", "n"):
            return False
        if answer == "":
            return default
        answer = terminal.prompt_line(prompts.RSP_SELECT_YN)


def ask_until_valid(
    terminal: Terminal,
    prompt: str,
    validate: Callable[[str], Tuple[bool, str]],
    retry_prompt: Callable[[str], str],
    default: Optional[str] = None,
    answer: Optional[str] = None,
    echo: bool = True,
) -> str:
    """Prompt until `validate` accepts the answer.

    An empty answer is replaced by `default` (when there is one) and the
    default is validated like any other answer. A pre-filled `answer`
    skips the first prompt.
    """
    if answer is None:
        answer = terminal.prompt_line(prompt, echo=echo)
    while True:
        if answer == "" and default is not None:
            answer = default
        ok, msg = validate(answer)
        if ok:
            return answer
        log.info("Rejected answer: %s", msg)
        answer = terminal.prompt_line(retry_prompt(answer), echo=echo)
