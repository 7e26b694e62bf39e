# tests/conftest.py
import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typing import List, Optional, Tuple

import pytest
from conf.paths import Paths
from errors import TerminalError
from state import WizardState


class FakeTerminal:
    """Scripted answers; records every prompt and message."""

    def __init__(self, answers: Optional[List[str]] = None) -> None:
        self.answers = list(answers or [])
        self.prompts: List[Tuple[str, bool]] = []
        self.messages: List[str] = []

    def prompt_line(self, prompt: str, echo: bool = True) -> str:
        self.prompts.append((prompt, echo))
        if not self.answers:
            raise TerminalError("Error reading from stdin.")
        return self.answers.pop(0)

    def say(self, message: str) -> None:
        self.messages.append(message)


class FakeHosted:
    """Stands in for HostedMenderClient; results are returned or raised in order."""

    def __init__(self, *results) -> None:
        self.results = list(results) or ["tenant-token"]
        self.calls: List[Tuple[str, str]] = []

    def get_tenant_token(self, username: str, password: str) -> str:
        self.calls.append((username, password))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def state():
    return WizardState()


@pytest.fixture
def paths(tmp_path):
    etc = tmp_path / "etc"
    etc.mkdir()
    (etc / "hostname").write_text("testhost\n")
    (etc / "hosts").write_text("127.0.0.1 localhost\n")
    return Paths(
        conf_dir=etc / "mender",
        data_store=tmp_path / "var" / "lib" / "mender",
        data_dir=tmp_path / "usr" / "share" / "mender",
        demo_cert_dir=tmp_path / "examples",
        local_trust_dir=tmp_path / "ca-certificates" / "mender",
        hosts_file=etc / "hosts",
        hostname_file=etc / "hostname",
    )


@pytest.fixture
def terminal():
    return FakeTerminal()
