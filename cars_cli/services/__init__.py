"""Service layer for cars-cli"""

from .build_service import BuildService
from .artifact_service import ArtifactService
from .remote_service import RemoteService
from .target_service import TargetService

__all__ = [
    "BuildService",
    "ArtifactService",
    "RemoteService",
    "TargetService",
]
