"""Builder API for build operations"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core import NpmStepRunner, StepRunner, load_client_config
from ..core.target_registry import TargetChooser
from ..models import Artifact, BuildResult
from ..services import ArtifactService, BuildService


class Builder:
    """Builder class for build operations"""

    def __init__(self,
                 project_root: Optional[Union[str, Path]] = None,
                 config: Optional[Dict[str, Any]] = None,
                 step_runner: Optional[StepRunner] = None):
        """
        Initialize builder

        Args:
            project_root: Directory holding deployment-info.json
                (default: current directory)
            config: Overrides for the user configuration, e.g.
                ``{'package_manager': 'pnpm'}``
            step_runner: Runner for install and named steps
        """
        client_config = load_client_config()
        for key, value in (config or {}).items():
            setattr(client_config, key, value)

        self.config = client_config
        self.step_runner = step_runner or NpmStepRunner(client_config.package_manager)
        self.project_root = project_root

    def build(self, identifier: Optional[str] = None,
              chooser: Optional[TargetChooser] = None) -> BuildResult:
        """
        Build and package a deployment target

        Args:
            identifier: Target ordinal or name
            chooser: Callback choosing among several eligible targets

        Returns:
            BuildResult: Build result with the new artifact

        Raises:
            CarsError: If any pipeline stage fails
        """
        service = BuildService(self.project_root, step_runner=self.step_runner, chooser=chooser)
        return service.build(identifier)

    def artifacts(self) -> List[Artifact]:
        """List local artifacts, oldest first"""
        return ArtifactService(self.project_root).list()


# Convenience functions

def build(identifier: Optional[str] = None,
          project_root: Optional[Union[str, Path]] = None,
          **options) -> BuildResult:
    """
    Build and package a deployment target

    Args:
        identifier: Target ordinal or name; required when several
            CARS targets exist
        project_root: Directory holding deployment-info.json
        **options: Passed to :class:`Builder`

    Returns:
        BuildResult

    Example:
        >>> from cars_cli import build
        >>> result = build("production")
        >>> print(result.artifact.name)
    """
    builder = Builder(project_root=project_root, **options)
    return builder.build(identifier)
