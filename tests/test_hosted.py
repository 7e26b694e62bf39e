# tests/test_hosted.py
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from errors import AuthenticationError, ConnectivityError, RemoteProtocolError
from network.hosted import LOGIN_PATH, TENANT_PATH, HostedMenderClient


def _response(status=200, text="", json_data=None):
    response = MagicMock()
    response.status_code = status
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


def _client(session, base_url="https://hosted.mender.io"):
    session.__enter__.return_value = session
    return HostedMenderClient(base_url, session_factory=lambda: session)


def test_tenant_token_flow():
    session = MagicMock()
    session.post.return_value = _response(text="user-jwt\n")
    session.get.return_value = _response(json_data={"tenant_token": "tenant-123"})

    token = _client(session).get_tenant_token("a@b.io", "pw")

    assert token == "tenant-123"
    session.post.assert_called_once_with(
        "https://hosted.mender.io" + LOGIN_PATH, auth=("a@b.io", "pw"))
    session.get.assert_called_once_with(
        "https://hosted.mender.io" + TENANT_PATH,
        headers={"Authorization": "Bearer user-jwt"})
    session.__exit__.assert_called_once()


def test_base_url_trailing_slash():
    session = MagicMock()
    session.post.return_value = _response(text="jwt")
    session.get.return_value = _response(json_data={"tenant_token": "t"})
    _client(session, base_url="https://example.io/").get_tenant_token("a@b.io", "pw")
    assert session.post.call_args[0][0] == "https://example.io" + LOGIN_PATH


def test_unauthorized_login():
    session = MagicMock()
    session.post.return_value = _response(status=401)
    with pytest.raises(AuthenticationError):
        _client(session).get_tenant_token("a@b.io", "wrong")
    session.get.assert_not_called()


def test_login_unexpected_status():
    session = MagicMock()
    session.post.return_value = _response(status=500)
    with pytest.raises(RemoteProtocolError, match="Unexpected statuscode 500"):
        _client(session).get_tenant_token("a@b.io", "pw")


def test_connection_error_is_recoverable():
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("no route to host")
    with pytest.raises(ConnectivityError):
        _client(session).get_tenant_token("a@b.io", "pw")


def test_other_request_failure_is_fatal():
    session = MagicMock()
    session.post.side_effect = requests.Timeout("slow")
    with pytest.raises(RemoteProtocolError):
        _client(session).get_tenant_token("a@b.io", "pw")


def test_tls_failure_is_fatal():
    session = MagicMock()
    session.post.side_effect = requests.exceptions.SSLError("certificate verify failed")
    with pytest.raises(RemoteProtocolError, match="TLS"):
        _client(session).get_tenant_token("a@b.io", "pw")


def test_tenant_request_unexpected_status():
    session = MagicMock()
    session.post.return_value = _response(text="jwt")
    session.get.return_value = _response(status=403)
    with pytest.raises(RemoteProtocolError, match="tenant token request"):
        _client(session).get_tenant_token("a@b.io", "pw")


@pytest.mark.parametrize("json_data", [
    ValueError("not json"),
    {},
    {"tenant_token": 42},
    ["tenant_token"],
])
def test_tenant_request_malformed_body(json_data):
    session = MagicMock()
    session.post.return_value = _response(text="jwt")
    session.get.return_value = _response(json_data=json_data)
    with pytest.raises(RemoteProtocolError, match="parsing JSON"):
        _client(session).get_tenant_token("a@b.io", "pw")
