# screens/question.py
from __future__ import annotations
from typing import Optional
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Input, Static
from textual.containers import Vertical
from widgets.mender_header import MenderHeader


class QuestionScreen(Screen[Optional[str]]):
    """One wizard question. Dismisses with the answer, or None on Escape."""

    BINDINGS = [
        ("escape", "cancel", "Cancel setup"),
    ]

    def __init__(self, prompt: str, password: bool = False) -> None:
        super().__init__()
        self._prompt = prompt
        self._password = password

    def compose(self) -> ComposeResult:
        yield MenderHeader()
        with Vertical(id="content"):
            yield Static(self._prompt.strip("\n"), id="question", markup=False)
            yield Input(id="inp_answer", password=self._password)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#inp_answer", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)
