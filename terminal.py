# terminal.py
from __future__ import annotations
import getpass
from typing import Protocol

from errors import TerminalError


class Terminal(Protocol):
    """What the wizard needs from whoever is answering the questions."""

    def prompt_line(self, prompt: str, echo: bool = True) -> str: ...

    def say(self, message: str) -> None: ...


class StdinTerminal:
    """Line based prompts on stdin/stdout; echo is turned off for secrets."""

    def prompt_line(self, prompt: str, echo: bool = True) -> str:
        try:
            if echo:
                return input(prompt)
            answer = getpass.getpass(prompt)
            print()
            return answer
        except (EOFError, OSError, UnicodeDecodeError) as e:
            raise TerminalError("Error reading from stdin.") from e

    def say(self, message: str) -> None:
        print(message, flush=True)
