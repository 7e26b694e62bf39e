# app.py
from __future__ import annotations
from concurrent.futures import Future
from typing import Optional, Set

from textual.app import App

from conf.paths import Paths
from errors import SetupError, TerminalError
from logger import log
from screens.question import QuestionScreen
from screens.transcript import TranscriptScreen
from state import WizardState
from wizard import SetupWizard


class TextualTerminal:
    """Terminal used by the wizard thread; every call hops to the UI thread."""

    def __init__(self, app: "SetupApp") -> None:
        self._app = app

    def prompt_line(self, prompt: str, echo: bool = True) -> str:
        answer: Future = Future()
        try:
            self._app.call_from_thread(self._app.ask, prompt, not echo, answer)
        except RuntimeError as e:
            raise TerminalError("The setup screen has been closed.") from e
        value = answer.result()
        if value is None:
            raise TerminalError("Input cancelled.")
        return value

    def say(self, message: str) -> None:
        try:
            self._app.call_from_thread(self._app.say, message)
        except RuntimeError:
            log.info("Dropped message, setup screen closed: %s", message)


class SetupApp(App):
    """Mender client setup, asked one question per screen."""

    CSS = """
    Screen {
        background: $surface;
    }
    #content {
        margin: 1 2;
    }
    #question {
        margin-bottom: 1;
    }
    RichLog {
        margin: 1 2;
        border: solid $primary;
    }
    Input {
        margin-bottom: 1;
    }
    """

    def __init__(self, state: WizardState, paths: Paths, quiet: bool = False) -> None:
        super().__init__()
        self.state = state
        self.wizard = SetupWizard(state, TextualTerminal(self), paths, quiet=quiet)
        self.transcript = TranscriptScreen()
        self.error: Optional[SetupError] = None
        self.completed = False
        self._pending: Set[Future] = set()
        log.info("SetupApp started")

    async def on_mount(self) -> None:
        await self.push_screen(self.transcript)
        self.run_worker(self._run_wizard, thread=True, exclusive=True, name="wizard")

    def _run_wizard(self) -> None:
        try:
            self.wizard.run()
            self.completed = True
        except SetupError as e:
            log.error("Setup aborted: %s", e)
            self.error = e
        try:
            self.call_from_thread(self.exit)
        except RuntimeError:
            log.debug("App already closed when the wizard finished")

    def ask(self, prompt: str, password: bool, answer: Future) -> None:
        self._pending.add(answer)

        def _resolve(value: Optional[str]) -> None:
            self._pending.discard(answer)
            if not answer.done():
                answer.set_result(value)

        self.push_screen(QuestionScreen(prompt, password=password), callback=_resolve)

    def say(self, message: str) -> None:
        self.transcript.write(message)

    def exit(self, *args, **kwargs) -> None:
        # Release a wizard thread still waiting for an answer.
        for answer in list(self._pending):
            if not answer.done():
                answer.set_result(None)
        self._pending.clear()
        super().exit(*args, **kwargs)
