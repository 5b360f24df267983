"""Control-plane access for cars-cli"""

from .session import Credentials, IdentityAuth, RemoteSession
from .client import ControlPlaneClient, upload_artifact

__all__ = [
    "Credentials",
    "IdentityAuth",
    "RemoteSession",
    "ControlPlaneClient",
    "upload_artifact",
]
