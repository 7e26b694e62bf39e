# network/hosted.py
from __future__ import annotations
from typing import Callable

import requests

from errors import AuthenticationError, ConnectivityError, RemoteProtocolError
from logger import log
from validators import HOSTED_MENDER_URL

LOGIN_PATH = "/api/management/v1/useradm/auth/login"
TENANT_PATH = "/api/management/v1/tenantadm/user/tenant"


class HostedMenderClient:
    """Exchanges hosted Mender user credentials for the account's tenant token."""

    def __init__(
        self,
        base_url: str = HOSTED_MENDER_URL,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session_factory = session_factory

    def get_tenant_token(self, username: str, password: str) -> str:
        """Log in, then fetch the tenant token of the logged in user.

        Raises AuthenticationError on rejected credentials and
        ConnectivityError when the server cannot be reached; both are
        worth asking the user again. Anything else is RemoteProtocolError.
        """
        with self._session_factory() as session:
            user_token = self._login(session, username, password)
            return self._tenant_token(session, user_token)

    def _login(self, session: requests.Session, username: str, password: str) -> str:
        url = self.base_url + LOGIN_PATH
        try:
            response = session.post(url, auth=(username, password))
        except requests.exceptions.SSLError as e:
            raise RemoteProtocolError(f"TLS error in authentication request: {e}") from e
        except requests.ConnectionError as e:
            raise ConnectivityError(str(e)) from e
        except requests.RequestException as e:
            raise RemoteProtocolError(f"Authentication request failed: {e}") from e

        if response.status_code == 401:
            raise AuthenticationError(username)
        if response.status_code != 200:
            raise RemoteProtocolError(
                f"Unexpected statuscode {response.status_code} from authentication request"
            )
        log.info("Logged in to %s as %s", self.base_url, username)
        return response.text.strip()

    def _tenant_token(self, session: requests.Session, user_token: str) -> str:
        url = self.base_url + TENANT_PATH
        try:
            response = session.get(url, headers={"Authorization": f"Bearer {user_token}"})
        except requests.RequestException as e:
            raise RemoteProtocolError(f"Tenant token request FAILED: {e}") from e

        if response.status_code != 200:
            raise RemoteProtocolError(
                f"Unexpected statuscode {response.status_code} from tenant token request"
            )
        try:
            token = response.json()["tenant_token"]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteProtocolError(f"Error parsing JSON response: {e}") from e
        if not isinstance(token, str):
            raise RemoteProtocolError("Error parsing JSON response: tenant_token is not a string")
        log.info("Successfully requested tenant token.")
        return token
