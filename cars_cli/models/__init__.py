# cars_cli/models/__init__.py
"""Data models for cars-cli"""

from .config import ClientConfig
from .manifest import ContractsSpec, FrontendSpec, ProjectManifest
from .result import Artifact, BuildOutputs, BuildResult
from .target import DeploySet, DeploymentTarget

__all__ = [
    # Manifest models
    "ProjectManifest",
    "FrontendSpec",
    "ContractsSpec",

    # Target models
    "DeploymentTarget",
    "DeploySet",

    # Result models
    "Artifact",
    "BuildOutputs",
    "BuildResult",

    # Config models
    "ClientConfig",
]
