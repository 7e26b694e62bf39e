# screens/transcript.py
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, RichLog
from widgets.mender_header import MenderHeader


class TranscriptScreen(Screen):
    """Running log of what the wizard has told the user so far."""

    def compose(self) -> ComposeResult:
        yield MenderHeader()
        yield RichLog(id="transcript", wrap=True, markup=False)
        yield Footer()

    def write(self, message: str) -> None:
        self.query_one("#transcript", RichLog).write(message)
