# cars_cli/models/config.py
"""User configuration model"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..constants import (
    DEFAULT_CLOUD_URLS,
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_REQUEST_TIMEOUT,
)


@dataclass
class ClientConfig:
    """Settings from ~/.cars/config.yaml and the environment

    Attributes:
        package_manager: Executable used for install and named steps
        request_timeout: Timeout in seconds for control-plane requests
        identity_key: Identity presented to the control plane
        auth_token: Bearer token presented to the control plane
        cloud_urls: Control-plane URLs offered when adding a target
    """
    package_manager: str = DEFAULT_PACKAGE_MANAGER
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    identity_key: Optional[str] = None
    auth_token: Optional[str] = None
    cloud_urls: List[str] = field(default_factory=lambda: list(DEFAULT_CLOUD_URLS))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'package_manager': self.package_manager,
            'request_timeout': self.request_timeout,
            'cloud_urls': self.cloud_urls,
        }
        if self.identity_key:
            data['identity_key'] = self.identity_key
        if self.auth_token:
            data['auth_token'] = self.auth_token
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClientConfig':
        """Create from dictionary"""
        return cls(
            package_manager=data.get('package_manager') or DEFAULT_PACKAGE_MANAGER,
            request_timeout=float(data.get('request_timeout', DEFAULT_REQUEST_TIMEOUT)),
            identity_key=data.get('identity_key'),
            auth_token=data.get('auth_token'),
            cloud_urls=list(data.get('cloud_urls') or DEFAULT_CLOUD_URLS)
        )
