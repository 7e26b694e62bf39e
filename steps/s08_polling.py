# steps/s08_polling.py
from __future__ import annotations
from typing import TYPE_CHECKING

import prompts
from logger import log
from steps.common import Step, ask_until_valid, ask_yes_no
from validators import (
    DEFAULT_INVENTORY_POLL, DEFAULT_RETRY_POLL, DEFAULT_UPDATE_POLL,
    DEMO_INVENTORY_POLL, DEMO_RETRY_POLL, DEMO_UPDATE_POLL,
    MINIMUM_POLL_INTERVAL, VALID_INTEGER_REGEX, compile_regex,
    validate_poll_interval,
)

if TYPE_CHECKING:
    from wizard import SetupWizard


def _retry_prompt(value: str) -> str:
    if not compile_regex(VALID_INTEGER_REGEX).search(value):
        return prompts.RSP_NOT_SECONDS
    return prompts.RSP_INVALID_INTERVAL


def _ask_interval(wizard: SetupWizard, flag: str, current: int, prompt: str, default: int) -> int:
    if wizard.state.is_set(flag) and current >= MINIMUM_POLL_INTERVAL:
        return current
    answer = ask_until_valid(
        wizard.terminal,
        prompt,
        validate_poll_interval,
        _retry_prompt,
        default=str(default),
    )
    return int(answer)


def ask_polling_intervals(wizard: SetupWizard) -> Step:
    state = wizard.state
    if not state.is_set("demo_polling"):
        state.demo_intervals = ask_yes_no(wizard.terminal, prompts.DEMO_INTERVALS, default=True)

    if state.demo_intervals:
        state.update_poll_interval = DEMO_UPDATE_POLL
        state.inv_poll_interval = DEMO_INVENTORY_POLL
        state.retry_poll_interval = DEMO_RETRY_POLL
    else:
        state.update_poll_interval = _ask_interval(
            wizard, "update_poll", state.update_poll_interval,
            prompts.UPDATE_POLL, DEFAULT_UPDATE_POLL,
        )
        state.inv_poll_interval = _ask_interval(
            wizard, "inventory_poll", state.inv_poll_interval,
            prompts.INVENTORY_POLL, DEFAULT_INVENTORY_POLL,
        )
        state.retry_poll_interval = _ask_interval(
            wizard, "retry_poll", state.retry_poll_interval,
            prompts.RETRY_POLL, DEFAULT_RETRY_POLL,
        )

    log.info(
        "Step polling: demo=%s update=%s inventory=%s retry=%s",
        state.demo_intervals, state.update_poll_interval,
        state.inv_poll_interval, state.retry_poll_interval,
    )
    return Step.DONE
