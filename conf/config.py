# conf/config.py
"""Client configuration file (mender.conf) and device manifest access."""
from __future__ import annotations
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from errors import ConfigError, ManifestError
from logger import log

DEFAULT_UPDATE_CONTROL_MAP_BOOT_EXPIRATION = 600

# Key order of the client's configuration structure. Keys not listed here
# are kept and written after these, in the order they were read.
FIELD_ORDER = (
    "ArtifactVerifyKey",
    "ArtifactVerifyKeys",
    "HttpsClient",
    "Security",
    "Connectivity",
    "RootfsPartA",
    "RootfsPartB",
    "BootUtilitiesSetActivePart",
    "BootUtilitiesGetNextActivePart",
    "DeviceTypeFile",
    "UpdateControlMapExpirationTimeSeconds",
    "UpdateControlMapBootExpirationTimeSeconds",
    "UpdatePollIntervalSeconds",
    "InventoryPollIntervalSeconds",
    "SkipVerify",
    "RetryPollIntervalSeconds",
    "RetryPollCount",
    "StateScriptTimeoutSeconds",
    "StateScriptRetryTimeoutSeconds",
    "StateScriptRetryIntervalSeconds",
    "ModuleTimeoutSeconds",
    "ServerCertificate",
    "ServerURL",
    "UpdateLogPath",
    "TenantToken",
    "Servers",
    "DaemonLogLevel",
)

PathLike = Union[str, Path]


class MenderConfig:
    """Mapping of configuration keys; zero values are left out when saved."""

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def pop(self, key: str) -> Any:
        return self.data.pop(key, None)

    def _ordered_keys(self) -> Iterator[str]:
        for key in FIELD_ORDER:
            if key in self.data:
                yield key
        for key in self.data:
            if key not in FIELD_ORDER:
                yield key

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in self._ordered_keys():
            value = _omit_empty(self.data[key])
            if _is_zero(value):
                continue
            out[key] = value
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)


def _is_zero(value: Any) -> bool:
    return value is None or (not value and isinstance(value, (str, int, float, list, dict)))


def _omit_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: v for k, v in value.items() if not _is_zero(v)}
    return value


# -- Load ----------------------------------------------------------------------

def _load_config_file(path: Path, config: MenderConfig) -> bool:
    """Merge one file into config. A missing file is not an error."""
    if not path.exists():
        log.debug("Configuration file does not exist: %s", path)
        return False

    log.debug("Reading Mender configuration from file %s", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        log.error("Error loading configuration from file: %s (%s)", path, e)
        raise ConfigError(f"Error reading configuration file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        log.error("Error loading configuration from file: %s (%s)", path, e)
        raise ConfigError(f"Error parsing mender configuration file: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Error parsing config file: {path} is not a JSON object")

    config.data.update(data)
    if config.get("ArtifactVerifyKey"):
        if config.get("ArtifactVerifyKeys"):
            raise ConfigError("both ArtifactVerifyKey and ArtifactVerifyKeys are set")
        # Keep a single list form of the verification keys.
        config["ArtifactVerifyKeys"] = [config.pop("ArtifactVerifyKey")]

    log.info("Loaded configuration file: %s", path)
    return True


def load_config(main_path: PathLike, fallback_path: Optional[PathLike] = None) -> MenderConfig:
    """Load the fallback file, then the main file on top of it."""
    config = MenderConfig()
    loaded = 0
    if fallback_path:
        loaded += _load_config_file(Path(fallback_path), config)
    loaded += _load_config_file(Path(main_path), config)
    log.debug("Loaded %d configuration file(s)", loaded)

    if not config.get("UpdateControlMapExpirationTimeSeconds"):
        log.info(
            "'UpdateControlMapExpirationTimeSeconds' is not set in the Mender "
            "configuration file. Falling back to the default of "
            "2*UpdatePollIntervalSeconds"
        )
    if not config.get("UpdateControlMapBootExpirationTimeSeconds"):
        log.info(
            "'UpdateControlMapBootExpirationTimeSeconds' is not set in the Mender "
            "configuration file. Falling back to the default of %d seconds",
            DEFAULT_UPDATE_CONTROL_MAP_BOOT_EXPIRATION,
        )
    if loaded == 0:
        log.info("No configuration files present. Using defaults")
    return config


# -- Save ----------------------------------------------------------------------

def save_config(config: MenderConfig, path: PathLike) -> None:
    path = Path(path)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(config.to_json())
        # An existing file keeps its old mode through O_CREAT.
        os.chmod(path, 0o600)
    except OSError as e:
        raise ConfigError(f"Error writing configuration file {path}: {e}") from e
    log.info("Wrote configuration to %s", path)


# -- Device manifest -------------------------------------------------------------

def get_manifest_data(key: str, manifest_file: PathLike) -> str:
    """Return the value of `key` in a `key=value` manifest, "" if absent.

    Raises OSError if the file cannot be read and ManifestError if it is
    malformed or names the key twice.
    """
    log.debug("Reading data from the device manifest file: %s", manifest_file)
    found: Optional[str] = None
    with open(manifest_file, encoding="utf-8") as f:
        try:
            lines = f.readlines()
        except UnicodeDecodeError as e:
            log.error("Device manifest file is not valid text: %s", manifest_file)
            raise ManifestError(f"Broken device manifest file {manifest_file}: {e}") from e
    for raw in lines:
        line = raw.strip()
        if line.startswith("#"):
            continue
        parts = line.split("=", 1)
        if len(parts) != 2:
            log.error("Broken device manifest file: %s", parts)
            raise ManifestError(f"Broken device manifest file: {parts}")
        if parts[0] == key:
            if found is not None:
                raise ManifestError(
                    f"More than one instance of {key} found in manifest "
                    f"file {manifest_file}."
                )
            found = parts[1].strip()
    return found or ""


def get_device_type(device_type_file: PathLike) -> str:
    return get_manifest_data("device_type", device_type_file)
