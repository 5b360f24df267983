"""Staging of build outputs ahead of archiving"""

import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..api.exceptions import StagingError, StagingSourceMissingError
from ..constants import (
    ARTIFACT_EXTENSION,
    ARTIFACT_PREFIX,
    BACKEND_DIR,
    DEFAULT_FRONTEND_DIR,
    FRONTEND_LANGUAGE_HTML,
    FRONTEND_LANGUAGE_REACT,
    LOCK_FILES,
    STAGING_DIR_PREFIX,
)
from ..models.manifest import ProjectManifest
from ..models.result import BuildOutputs
from ..models.target import DeploymentTarget
from ..utils.file_utils import copy_directory, copy_if_exists, safe_remove
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)

# Pipeline byproducts living in the project root, never copied into an artifact
BUILD_BYPRODUCTS = (f"{STAGING_DIR_PREFIX}*", f"{ARTIFACT_PREFIX}*{ARTIFACT_EXTENSION}")


class ArtifactStager:
    """Copy exactly the files an artifact ships into a fresh directory

    Staging layout::

        deployment-info.json
        package.json, package-lock.json   (when present)
        backend/                          (full source tree)
        frontend/                         (react build output or html sources)
    """

    def __init__(self, path_resolver: PathResolver, staging_root: Optional[Path] = None):
        """
        Initialize artifact stager

        Args:
            path_resolver: Resolver for the project root
            staging_root: Parent of staging directories (default: project root)
        """
        self.path_resolver = path_resolver
        self.staging_root = staging_root or path_resolver.project_root

    def stage(self, manifest: ProjectManifest, target: DeploymentTarget,
              outputs: BuildOutputs) -> Path:
        """
        Create a staging directory for one pipeline run

        Every source is re-checked here, even when the build orchestrator
        already checked it. On failure the staging directory is removed
        before the error propagates.

        Args:
            manifest: Project manifest
            target: Target whose deploy set decides what is included
            outputs: Outputs reported by the build orchestrator

        Returns:
            Path to the new staging directory

        Raises:
            StagingSourceMissingError: If a required source does not exist
            StagingError: If the directory cannot be created or filled
        """
        try:
            staging = Path(tempfile.mkdtemp(prefix=STAGING_DIR_PREFIX, dir=self.staging_root))
        except OSError as e:
            raise StagingError(f"Cannot create staging directory in {self.staging_root}: {e}")

        logger.debug(f"Staging into {staging}")

        try:
            self._fill(staging, manifest, target, outputs)
        except BaseException:
            safe_remove(staging)
            raise

        return staging

    def _fill(self, staging: Path, manifest: ProjectManifest, target: DeploymentTarget,
              outputs: BuildOutputs) -> None:
        resolver = self.path_resolver
        root = resolver.project_root

        manifest_path = resolver.manifest_path
        if not manifest_path.is_file():
            raise StagingSourceMissingError(str(resolver.make_relative(manifest_path)))

        try:
            copy_if_exists(manifest_path, staging)
            for name in LOCK_FILES:
                copy_if_exists(root / name, staging)

            if target.deploy.backend:
                backend_dir = outputs.backend_dir or resolver.backend_dir
                self._require_dir(backend_dir)
                copy_directory(backend_dir, staging / BACKEND_DIR, exclude=BUILD_BYPRODUCTS)

            if target.deploy.frontend:
                self._stage_frontend(staging, manifest, outputs)

        except OSError as e:
            raise StagingError(f"Failed to copy files into staging directory: {e}")

    def _stage_frontend(self, staging: Path, manifest: ProjectManifest,
                        outputs: BuildOutputs) -> None:
        resolver = self.path_resolver
        language = outputs.frontend_language or manifest.frontend_language

        if language == FRONTEND_LANGUAGE_REACT:
            source = outputs.frontend_dir or resolver.react_build_dir(manifest)
            self._require_dir(source)
        elif language == FRONTEND_LANGUAGE_HTML:
            source = outputs.frontend_dir or resolver.frontend_dir(manifest)
            entry = resolver.html_entry(manifest)
            if not entry.is_file():
                raise StagingSourceMissingError(str(resolver.make_relative(entry)))
        else:
            raise StagingError(f"Cannot stage frontend with language: {language}")

        copy_directory(source, staging / DEFAULT_FRONTEND_DIR, exclude=BUILD_BYPRODUCTS)

    def _require_dir(self, path: Path) -> None:
        if not path.is_dir():
            raise StagingSourceMissingError(str(self.path_resolver.make_relative(path)))
