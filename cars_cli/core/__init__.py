"""Core functionality for cars-cli"""

from .path_resolver import PathResolver
from .validation_engine import ValidationEngine, ValidationResult
from .manifest_store import ManifestStore
from .target_registry import TargetRegistry, ResolvedTarget
from .step_runner import StepRunner, NpmStepRunner
from .build_orchestrator import BuildOrchestrator, BuildPlan, BuildStep
from .artifact_stager import ArtifactStager
from .archive_packager import (
    ArchivePackager,
    artifact_filename,
    parse_artifact_timestamp,
    is_artifact_name,
)
from .config_loader import load_client_config, default_config_path

__all__ = [
    "PathResolver",
    "ValidationEngine",
    "ValidationResult",
    "ManifestStore",
    "TargetRegistry",
    "ResolvedTarget",
    "StepRunner",
    "NpmStepRunner",
    "BuildOrchestrator",
    "BuildPlan",
    "BuildStep",
    "ArtifactStager",
    "ArchivePackager",
    "artifact_filename",
    "parse_artifact_timestamp",
    "is_artifact_name",
    "load_client_config",
    "default_config_path",
]
