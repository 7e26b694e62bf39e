# state.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet

from errors import ConflictingArgumentsError
from validators import (
    DEFAULT_INVENTORY_POLL, DEFAULT_RETRY_POLL, DEFAULT_SERVER_URL,
    DEFAULT_UPDATE_POLL,
)

POLL_FLAGS = ("update_poll", "inventory_poll", "retry_poll")


@dataclass(frozen=True)
class FlagSnapshot:
    """Values handed over by the command line, and which of them were given."""

    device_type: str = ""
    username: str = ""
    password: str = ""
    server_url: str = DEFAULT_SERVER_URL
    server_ip: str = ""
    server_cert: str = ""
    tenant_token: str = ""
    inventory_poll: int = DEFAULT_INVENTORY_POLL
    retry_poll: int = DEFAULT_RETRY_POLL
    update_poll: int = DEFAULT_UPDATE_POLL
    hosted_mender: bool = False
    demo: bool = False  # deprecated
    demo_server: bool = False
    demo_polling: bool = False
    explicit: FrozenSet[str] = frozenset()

    def is_set(self, name: str) -> bool:
        return name in self.explicit


@dataclass
class WizardState:
    device_type: str = ""
    hosted_mender: bool = False
    demo_server: bool = False
    demo_intervals: bool = False
    server_url: str = ""
    server_ip: str = ""
    server_cert: str = ""
    username: str = ""
    password: str = ""
    tenant_token: str = ""
    inv_poll_interval: int = DEFAULT_INVENTORY_POLL
    retry_poll_interval: int = DEFAULT_RETRY_POLL
    update_poll_interval: int = DEFAULT_UPDATE_POLL

    # Flag names whose value was supplied externally; gates prompting.
    explicit: FrozenSet[str] = frozenset()

    def is_set(self, name: str) -> bool:
        return name in self.explicit


def normalize_flags(flags: FlagSnapshot) -> WizardState:
    """Resolve implied flags and build the initial WizardState.

    Pure: the same snapshot always yields an equal state.
    """
    explicit = set(flags.explicit)
    hosted_mender = flags.hosted_mender
    demo_server = flags.demo_server
    demo_intervals = flags.demo_polling

    if flags.is_set("demo") and flags.demo:
        # --demo implies both --demo-server and --demo-polling
        demo_server = demo_intervals = True
        explicit |= {"demo_server", "demo_polling"}

    if any(flags.is_set(name) for name in POLL_FLAGS):
        demo_intervals = False
        explicit.add("demo_polling")

    url_set = flags.is_set("server_url")
    ip_set = flags.is_set("server_ip")
    if url_set and ip_set:
        raise ConflictingArgumentsError("server-url", "server-ip")
    if ip_set:
        demo_server = True
        explicit.add("demo_server")
    elif url_set and flags.server_url != DEFAULT_SERVER_URL:
        demo_server = False
        explicit.add("demo_server")
    if url_set or ip_set:
        hosted_mender = False
        explicit.add("hosted_mender")

    return WizardState(
        device_type=flags.device_type,
        hosted_mender=hosted_mender,
        demo_server=demo_server,
        demo_intervals=demo_intervals,
        server_url=flags.server_url,
        server_ip=flags.server_ip,
        server_cert=flags.server_cert,
        username=flags.username,
        password=flags.password,
        tenant_token=flags.tenant_token,
        inv_poll_interval=flags.inventory_poll,
        retry_poll_interval=flags.retry_poll,
        update_poll_interval=flags.update_poll,
        explicit=frozenset(explicit),
    )
