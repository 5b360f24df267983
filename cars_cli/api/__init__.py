# cars_cli/api/__init__.py
"""API layer for cars-cli

The programmatic entry points (:class:`Builder`, :func:`build`) live in
``cars_cli.api.builder`` and are re-exported from the top-level package.
"""

from .exceptions import (
    CarsError,
    ManifestError,
    ManifestMissingError,
    ManifestInvalidError,
    InvalidSchemaError,
    TargetError,
    TargetNotFoundError,
    TargetNotEligibleError,
    NoEligibleTargetError,
    AmbiguousTargetError,
    MissingProjectIdError,
    MissingCloudUrlError,
    BuildError,
    LanguageContractError,
    BackendMissingError,
    UnsupportedContractLanguageError,
    MissingCompileStepError,
    FrontendLanguageUnsetError,
    HtmlEntryMissingError,
    UnsupportedFrontendLanguageError,
    FrontendPackageMissingError,
    ReactOutputMissingError,
    StepFailedError,
    DependencyInstallError,
    BackendCompileError,
    BackendBuildError,
    ReactBuildError,
    StagingError,
    StagingSourceMissingError,
    ArchiveError,
    ArtifactError,
    ArtifactNotFoundError,
    NoArtifactError,
    RemoteRequestError,
    RemoteProjectNotFoundError,
    ConfigError,
    UserCancelledError,
)

__all__ = [
    # Base
    "CarsError",

    # Manifest
    "ManifestError",
    "ManifestMissingError",
    "ManifestInvalidError",
    "InvalidSchemaError",

    # Targets
    "TargetError",
    "TargetNotFoundError",
    "TargetNotEligibleError",
    "NoEligibleTargetError",
    "AmbiguousTargetError",
    "MissingProjectIdError",
    "MissingCloudUrlError",

    # Build
    "BuildError",
    "LanguageContractError",
    "BackendMissingError",
    "UnsupportedContractLanguageError",
    "MissingCompileStepError",
    "FrontendLanguageUnsetError",
    "HtmlEntryMissingError",
    "UnsupportedFrontendLanguageError",
    "FrontendPackageMissingError",
    "ReactOutputMissingError",
    "StepFailedError",
    "DependencyInstallError",
    "BackendCompileError",
    "BackendBuildError",
    "ReactBuildError",

    # Staging and packaging
    "StagingError",
    "StagingSourceMissingError",
    "ArchiveError",

    # Artifacts
    "ArtifactError",
    "ArtifactNotFoundError",
    "NoArtifactError",

    # Remote
    "RemoteRequestError",
    "RemoteProjectNotFoundError",

    # Misc
    "ConfigError",
    "UserCancelledError",
]
