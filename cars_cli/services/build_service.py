# cars_cli/services/build_service.py
"""Build pipeline service"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from ..core import (
    ArchivePackager,
    ArtifactStager,
    BuildOrchestrator,
    ManifestStore,
    NpmStepRunner,
    PathResolver,
    StepRunner,
    TargetRegistry,
)
from ..core.target_registry import TargetChooser
from ..models import BuildResult
from ..utils.file_utils import safe_remove

logger = logging.getLogger(__name__)


class BuildService:
    """Run manifest load, target selection, build, staging and packaging

    Each stage's output feeds the next. The first error aborts the run and
    propagates unchanged; its ``stage`` attribute names where it happened.
    """

    def __init__(self,
                 path_resolver: Optional[Union[PathResolver, str, Path]] = None,
                 step_runner: Optional[StepRunner] = None,
                 chooser: Optional[TargetChooser] = None,
                 clock: Optional[Callable[[], int]] = None):
        """
        Initialize build service

        Args:
            path_resolver: Resolver, or project root path (default: current directory)
            step_runner: Runner for install and named steps (default: npm)
            chooser: Callback choosing among several eligible targets
            clock: Source of epoch milliseconds for artifact names
        """
        if not isinstance(path_resolver, PathResolver):
            path_resolver = PathResolver(path_resolver)

        self.path_resolver = path_resolver
        self.step_runner = step_runner or NpmStepRunner()
        self.chooser = chooser
        self.manifest_store = ManifestStore(path_resolver)
        self.orchestrator = BuildOrchestrator(path_resolver, self.step_runner)
        self.stager = ArtifactStager(path_resolver)
        self.packager = ArchivePackager(path_resolver.project_root, clock=clock)

    def build(self, identifier: Optional[str] = None) -> BuildResult:
        """
        Build and package one deployment target

        Args:
            identifier: Target ordinal or name; chosen automatically or
                interactively when omitted

        Returns:
            BuildResult with the new artifact

        Raises:
            CarsError: Subclass identifying the failing stage
        """
        start_time = datetime.now()

        # 1. Load manifest (may migrate the legacy targets key)
        manifest = self.manifest_store.load()

        # 2. Select target
        registry = TargetRegistry(manifest)
        resolved = registry.select(identifier, chooser=self.chooser)
        logger.info(f"Building configuration \"{resolved.name}\"")

        # 3. Build subsystems
        outputs = self.orchestrator.build(manifest, resolved.target)

        # 4. Stage and 5. package
        staging = self.stager.stage(manifest, resolved.target, outputs)
        try:
            artifact = self.packager.package(staging)
        finally:
            safe_remove(staging)

        result = BuildResult(
            artifact=artifact,
            target=resolved.target,
            outputs=outputs,
            start_time=start_time
        )
        result.complete()

        logger.info(f"Artifact ready: {artifact.name}")
        return result
