# errors.py
from __future__ import annotations


class SetupError(Exception):
    """Fatal error that aborts the setup run."""


class TerminalError(SetupError):
    """User input could not be read."""


class ConflictingArgumentsError(SetupError):
    def __init__(self, first: str, second: str) -> None:
        super().__init__(
            "Conflicting arguments given, only one of the following flags "
            f'may be given: {{"{first}", "{second}"}}'
        )
        self.flags = (first, second)


class ConfigError(SetupError):
    """Configuration or identity file could not be read or written."""


class ManifestError(SetupError):
    """Device manifest file is malformed."""


class RemoteProtocolError(SetupError):
    """Hosted service answered with something we cannot use."""


# -- Recoverable, never leave the credentials step ---------------------------

class AuthenticationError(Exception):
    """Hosted service rejected the credentials (HTTP 401)."""


class ConnectivityError(Exception):
    """Hosted service could not be reached."""
