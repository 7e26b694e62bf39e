# steps/s07_credentials.py
from __future__ import annotations
from typing import TYPE_CHECKING, Tuple

import prompts
from errors import AuthenticationError, ConnectivityError
from logger import log
from steps.common import Step, ask_until_valid
from validators import validate_email

if TYPE_CHECKING:
    from wizard import SetupWizard


def _password_ok(value: str) -> Tuple[bool, str]:
    return (value != "", "password is blank")


def ask_credentials(wizard: SetupWizard) -> None:
    state = wizard.state
    terminal = wizard.terminal
    state.username = ask_until_valid(
        terminal,
        prompts.EMAIL,
        validate_email,
        lambda value: prompts.RSP_INVALID_EMAIL.format(value=value),
    )
    state.password = ask_until_valid(
        terminal,
        prompts.PASSWORD,
        _password_ok,
        lambda value: prompts.RSP_BLANK_PASSWORD + prompts.PASSWORD,
        echo=False,
    )


def ask_hosted_credentials(wizard: SetupWizard) -> Step:
    """Log in to hosted Mender and keep the tenant token of the account."""
    state = wizard.state
    terminal = wizard.terminal
    if state.is_set("tenant_token"):
        log.info("Step credentials: tenant token given by flags")
        return Step.POLLING

    if not (state.is_set("username") and state.is_set("password")):
        terminal.say(prompts.CREDENTIALS)
        ask_credentials(wizard)
    elif not validate_email(state.username)[0]:
        terminal.say(prompts.RSP_INVALID_EMAIL.format(value=state.username))
        ask_credentials(wizard)

    while True:
        try:
            state.tenant_token = wizard.hosted.get_tenant_token(
                state.username, state.password
            )
            break
        except AuthenticationError:
            log.warning("Login rejected for %s", state.username)
            terminal.say(prompts.RSP_HM_LOGIN)
        except ConnectivityError as e:
            log.warning("Could not reach hosted Mender: %s", e)
            terminal.say(prompts.RSP_CONNECTION_ERROR)
        ask_credentials(wizard)

    log.info("Step credentials: tenant token obtained for %s", state.username)
    return Step.POLLING
