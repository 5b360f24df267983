# cars_cli/remote/session.py
"""Explicit sessions for control-plane requests"""

from dataclasses import dataclass
from typing import Optional

import requests
from requests.auth import AuthBase

from ..constants import DEFAULT_REQUEST_TIMEOUT
from ..models.config import ClientConfig


@dataclass(frozen=True)
class Credentials:
    """Identity presented to a control plane"""
    identity_key: Optional[str] = None
    auth_token: Optional[str] = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> 'Credentials':
        return cls(identity_key=config.identity_key, auth_token=config.auth_token)


class IdentityAuth(AuthBase):
    """Attach identity headers to every request of a session"""

    def __init__(self, credentials: Credentials):
        self.credentials = credentials

    def __call__(self, request):
        if self.credentials.identity_key:
            request.headers['X-Identity-Key'] = self.credentials.identity_key
        if self.credentials.auth_token:
            request.headers['Authorization'] = f"Bearer {self.credentials.auth_token}"
        return request


class RemoteSession:
    """One authenticated conversation with one control plane

    A session is created per command and passed to every remote call.
    Operations needing another identity build a new session rather than
    altering this one.
    """

    def __init__(self, base_url: str, credentials: Optional[Credentials] = None,
                 timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 http: Optional[requests.Session] = None):
        """
        Initialize remote session

        Args:
            base_url: Control-plane base URL
            credentials: Identity to present
            timeout: Request timeout in seconds
            http: Underlying requests session (created if omitted)
        """
        self.base_url = base_url.rstrip('/')
        self.credentials = credentials or Credentials()
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.auth = IdentityAuth(self.credentials)

    @classmethod
    def from_config(cls, base_url: str, config: ClientConfig) -> 'RemoteSession':
        return cls(base_url, Credentials.from_config(config), timeout=config.request_timeout)

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> 'RemoteSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
