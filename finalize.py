# finalize.py
"""Turn a finished WizardState into mender.conf and the device identity file."""
from __future__ import annotations
import os
from pathlib import Path
from typing import Union

from conf.config import MenderConfig, save_config
from conf.paths import Paths
from errors import ConfigError
from logger import log
from state import WizardState
from system.hosts import add_host_lookup
from system.trust import install_demo_certificate
from validators import (
    DEMO_CONTROL_MAP_BOOT_EXPIRATION, DEMO_CONTROL_MAP_EXPIRATION,
    DEMO_INVENTORY_POLL, DEMO_RETRY_POLL, DEMO_UPDATE_POLL,
    validate_device_type,
)


def server_certificate(state: WizardState, paths: Paths) -> str:
    if state.demo_server and not state.hosted_mender:
        if state.is_set("server_cert"):
            return state.server_cert
        return str(paths.demo_cert_path)
    if state.hosted_mender:
        return ""
    return state.server_cert


def apply_to_config(state: WizardState, config: MenderConfig, paths: Paths) -> MenderConfig:
    """Copy the answers into config. Keys the wizard does not own are left alone."""
    if state.demo_intervals:
        config["UpdatePollIntervalSeconds"] = DEMO_UPDATE_POLL
        config["InventoryPollIntervalSeconds"] = DEMO_INVENTORY_POLL
        config["RetryPollIntervalSeconds"] = DEMO_RETRY_POLL
        config["UpdateControlMapExpirationTimeSeconds"] = DEMO_CONTROL_MAP_EXPIRATION
        config["UpdateControlMapBootExpirationTimeSeconds"] = DEMO_CONTROL_MAP_BOOT_EXPIRATION
    else:
        config["UpdatePollIntervalSeconds"] = state.update_poll_interval
        config["InventoryPollIntervalSeconds"] = state.inv_poll_interval
        config["RetryPollIntervalSeconds"] = state.retry_poll_interval

    config["ServerCertificate"] = server_certificate(state, paths)
    config["TenantToken"] = state.tenant_token

    if not config.get("DeviceTypeFile"):
        config["DeviceTypeFile"] = str(paths.device_type_file)
    config["Servers"] = [{"ServerURL": state.server_url}]
    # A single ServerURL left over from an old config would conflict with Servers.
    config.pop("ServerURL")
    return config


def write_device_type(device_type: str, path: Union[str, Path]) -> None:
    ok, msg = validate_device_type(device_type)
    if not ok:
        raise ConfigError(f"Refusing to write device type: {msg}")
    try:
        with open(path, "w") as f:
            f.write(f"device_type={device_type}\n")
        os.chmod(path, 0o644)
    except OSError as e:
        raise ConfigError(f"Error writing to devicefile {path}: {e}") from e
    log.info("Wrote device type %s to %s", device_type, path)


def finalize(
    state: WizardState,
    config: MenderConfig,
    config_path: Union[str, Path],
    paths: Paths,
) -> MenderConfig:
    apply_to_config(state, config, paths)
    save_config(config, config_path)
    write_device_type(state.device_type, config["DeviceTypeFile"])

    if state.demo_server and not state.hosted_mender:
        add_host_lookup(paths.hosts_file, state.server_ip, state.server_url)

    if state.demo_server and config.get("ServerCertificate") == str(paths.demo_cert_path):
        try:
            install_demo_certificate(paths.demo_cert_path, paths.local_trust_dir)
        except OSError as e:
            log.warning("Unable to install Mender demo cert in local trust: %s", e)
    return config
