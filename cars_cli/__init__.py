"""cars-cli - build and release tool for CARS-hosted applications.

This tool reads a project's deployment-info.json, builds the backend and
frontend subsystems a deployment target asks for, and packages them into a
timestamped artifact ready to be released to a CARS control plane.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .api.builder import Builder, build

# Data models
from .models.manifest import ProjectManifest
from .models.target import DeploymentTarget, DeploySet
from .models.result import Artifact, BuildOutputs, BuildResult

# Exceptions
from .api.exceptions import (
    CarsError,
    ManifestError,
    ManifestMissingError,
    ManifestInvalidError,
    InvalidSchemaError,
    TargetError,
    TargetNotFoundError,
    TargetNotEligibleError,
    BuildError,
    LanguageContractError,
    StepFailedError,
    StagingError,
    ArchiveError,
    RemoteRequestError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Builder",

    # Core API functions
    "build",

    # Data models
    "ProjectManifest",
    "DeploymentTarget",
    "DeploySet",
    "Artifact",
    "BuildOutputs",
    "BuildResult",

    # Exceptions
    "CarsError",
    "ManifestError",
    "ManifestMissingError",
    "ManifestInvalidError",
    "InvalidSchemaError",
    "TargetError",
    "TargetNotFoundError",
    "TargetNotEligibleError",
    "BuildError",
    "LanguageContractError",
    "StepFailedError",
    "StagingError",
    "ArchiveError",
    "RemoteRequestError",
]
