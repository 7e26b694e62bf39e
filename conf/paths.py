# conf/paths.py
from __future__ import annotations
import os
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path

from errors import ConfigError
from logger import log


def _getenv(key: str, fallback: str) -> str:
    return os.environ.get(key) or fallback


@dataclass(frozen=True)
class Paths:
    """Filesystem locations used by a setup run.

    Everything defaults to the locations of a stock device; tests and
    partially read-only systems construct their own.
    """

    conf_dir: Path = Path("/etc/mender")
    data_store: Path = Path("/var/lib/mender")
    data_dir: Path = Path("/usr/share/mender")
    demo_cert_dir: Path = Path("/usr/share/doc/mender-auth/examples")
    local_trust_dir: Path = Path("/usr/local/share/ca-certificates/mender")
    hosts_file: Path = Path("/etc/hosts")
    hostname_file: Path = Path("/etc/hostname")

    @classmethod
    def from_env(cls) -> "Paths":
        return cls(
            conf_dir=Path(_getenv("MENDER_CONF_DIR", "/etc/mender")),
            data_store=Path(_getenv("MENDER_DATASTORE_DIR", "/var/lib/mender")),
            data_dir=Path(_getenv("MENDER_DATA_DIR", "/usr/share/mender")),
        )

    def with_data_store(self, data_store: str) -> "Paths":
        return replace(self, data_store=Path(data_store))

    @property
    def config_file(self) -> Path:
        return self.conf_dir / "mender.conf"

    @property
    def fallback_config_file(self) -> Path:
        return self.data_store / "mender.conf"

    @property
    def device_type_file(self) -> Path:
        return self.data_store / "device_type"

    @property
    def demo_cert_path(self) -> Path:
        return self.demo_cert_dir / "demo.crt"


def check_write_permissions(directory: Path) -> None:
    """Create `directory` if needed and make sure we can write to it."""
    log.debug("Checking the permissions for: %s", directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f'Error creating directory "{directory}": {e}') from e
    try:
        probe = tempfile.mkdtemp(prefix="temporaryFile", dir=directory)
    except PermissionError as e:
        raise ConfigError(
            f'User does not have permission to write to directory "{directory}"'
        ) from e
    except OSError as e:
        raise ConfigError(f'Error checking write permissions to directory "{directory}": {e}') from e
    os.rmdir(probe)
