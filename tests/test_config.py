# tests/test_config.py
import json
import os
import stat

import pytest

from conf.config import (
    MenderConfig, get_device_type, get_manifest_data, load_config, save_config,
)
from conf.paths import Paths, check_write_permissions
from errors import ConfigError, ManifestError


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------

def test_load_missing_files_gives_empty_config(tmp_path):
    config = load_config(tmp_path / "mender.conf", tmp_path / "fallback.conf")
    assert config.to_dict() == {}


def test_main_file_overrides_fallback(tmp_path):
    fallback = tmp_path / "fallback.conf"
    main = tmp_path / "mender.conf"
    fallback.write_text(json.dumps({"RootfsPartA": "/dev/mmcblk0p2", "TenantToken": "old"}))
    main.write_text(json.dumps({"TenantToken": "new"}))
    config = load_config(main, fallback)
    assert config["RootfsPartA"] == "/dev/mmcblk0p2"
    assert config["TenantToken"] == "new"


def test_invalid_json_is_config_error(tmp_path):
    main = tmp_path / "mender.conf"
    main.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config(main)


def test_undecodable_config_is_config_error(tmp_path):
    main = tmp_path / "mender.conf"
    main.write_bytes(b'{"RootfsPartA": "\xff"}')
    with pytest.raises(ConfigError, match="parsing"):
        load_config(main)


def test_non_object_is_config_error(tmp_path):
    main = tmp_path / "mender.conf"
    main.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(main)


def test_single_verify_key_is_folded(tmp_path):
    main = tmp_path / "mender.conf"
    main.write_text(json.dumps({"ArtifactVerifyKey": "/etc/mender/key.pem"}))
    config = load_config(main)
    assert "ArtifactVerifyKey" not in config
    assert config["ArtifactVerifyKeys"] == ["/etc/mender/key.pem"]


def test_both_verify_key_forms_conflict(tmp_path):
    main = tmp_path / "mender.conf"
    main.write_text(json.dumps({
        "ArtifactVerifyKey": "/a.pem", "ArtifactVerifyKeys": ["/b.pem"],
    }))
    with pytest.raises(ConfigError, match="ArtifactVerifyKey"):
        load_config(main)


def test_save_orders_fields_and_omits_zero_values(tmp_path):
    path = tmp_path / "mender.conf"
    config = MenderConfig({
        "CustomKey": "kept",
        "TenantToken": "",
        "Servers": [{"ServerURL": "https://acme.io"}],
        "UpdatePollIntervalSeconds": 5,
        "ServerCertificate": "",
        "DeviceTypeFile": "/var/lib/mender/device_type",
        "SkipVerify": False,
        "HttpsClient": {"Certificate": "", "Key": ""},
    })
    save_config(config, path)

    text = path.read_text()
    data = json.loads(text)
    assert list(data) == ["DeviceTypeFile", "UpdatePollIntervalSeconds", "Servers", "CustomKey"]
    assert '\n    "DeviceTypeFile"' in text
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_save_round_trip_keeps_unknown_keys(tmp_path):
    path = tmp_path / "mender.conf"
    path.write_text(json.dumps({"DaemonLogLevel": "debug", "Vendor": {"x": 1}}))
    save_config(load_config(path), path)
    assert json.loads(path.read_text()) == {"DaemonLogLevel": "debug", "Vendor": {"x": 1}}


def test_save_creates_file_owner_only(tmp_path, monkeypatch):
    path = tmp_path / "mender.conf"
    monkeypatch.setattr("os.chmod", lambda *args, **kwargs: None)
    old_umask = os.umask(0)
    try:
        save_config(MenderConfig({"TenantToken": "secret"}), path)
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_save_tightens_existing_file(tmp_path):
    path = tmp_path / "mender.conf"
    path.write_text("{}")
    path.chmod(0o644)
    save_config(MenderConfig({"TenantToken": "secret"}), path)
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_save_to_missing_directory_is_config_error(tmp_path):
    with pytest.raises(ConfigError):
        save_config(MenderConfig({"TenantToken": "t"}), tmp_path / "nope" / "mender.conf")


# ---------------------------------------------------------------------------
# Device manifest
# ---------------------------------------------------------------------------

def test_manifest_lookup(tmp_path):
    manifest = tmp_path / "device_type"
    manifest.write_text("# written by the build\ndevice_type=rpi3\nartifact_name=release-1\n")
    assert get_manifest_data("artifact_name", manifest) == "release-1"
    assert get_device_type(manifest) == "rpi3"
    assert get_manifest_data("missing", manifest) == ""


def test_manifest_value_may_contain_equals(tmp_path):
    manifest = tmp_path / "device_type"
    manifest.write_text("device_type=a=b\n")
    assert get_device_type(manifest) == "a=b"


def test_broken_manifest(tmp_path):
    manifest = tmp_path / "device_type"
    manifest.write_text("device_type rpi3\n")
    with pytest.raises(ManifestError, match="Broken device manifest"):
        get_device_type(manifest)


def test_undecodable_manifest(tmp_path):
    manifest = tmp_path / "device_type"
    manifest.write_bytes(b"device_type=\xff\xfe\n")
    with pytest.raises(ManifestError, match="Broken device manifest"):
        get_device_type(manifest)


def test_duplicate_manifest_key(tmp_path):
    manifest = tmp_path / "device_type"
    manifest.write_text("device_type=a\ndevice_type=b\n")
    with pytest.raises(ManifestError, match="More than one instance"):
        get_device_type(manifest)


def test_missing_manifest_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        get_device_type(tmp_path / "device_type")


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

def test_paths_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("MENDER_CONF_DIR", str(tmp_path / "conf"))
    monkeypatch.setenv("MENDER_DATASTORE_DIR", str(tmp_path / "store"))
    monkeypatch.delenv("MENDER_DATA_DIR", raising=False)
    paths = Paths.from_env()
    assert paths.config_file == tmp_path / "conf" / "mender.conf"
    assert paths.device_type_file == tmp_path / "store" / "device_type"
    assert paths.fallback_config_file == tmp_path / "store" / "mender.conf"
    assert str(paths.data_dir) == "/usr/share/mender"


def test_paths_with_data_store(tmp_path):
    paths = Paths().with_data_store(str(tmp_path))
    assert paths.device_type_file == tmp_path / "device_type"
    assert paths.conf_dir == Paths().conf_dir


def test_check_write_permissions_creates_directory(tmp_path):
    target = tmp_path / "a" / "b"
    check_write_permissions(target)
    assert target.is_dir()
    assert list(target.iterdir()) == []


def test_check_write_permissions_on_file_fails(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(ConfigError):
        check_write_permissions(blocker / "sub")
