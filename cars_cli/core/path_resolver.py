"""Path resolution module for cars-cli"""

import os
from pathlib import Path
from typing import Optional, Union

from ..constants import (
    BACKEND_DIR,
    DEFAULT_FRONTEND_DIR,
    ENV_PROJECT_ROOT,
    HTML_ENTRY_FILE,
    MANIFEST_FILE,
    PACKAGE_FILE,
    REACT_BUILD_DIR,
)
from ..models.manifest import ProjectManifest


class PathResolver:
    """Resolves paths within a project root

    The project root is the directory holding the manifest. It is never
    searched for: it is the invocation directory unless given explicitly.
    """

    def __init__(self, project_root: Optional[Union[str, Path]] = None):
        """Initialize path resolver

        Args:
            project_root: Root directory of the project. Defaults to
                ``$CARS_PROJECT_ROOT`` or the current directory.
        """
        if project_root is None:
            project_root = os.environ.get(ENV_PROJECT_ROOT) or Path.cwd()
        self.project_root = Path(project_root).resolve()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to project root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Resolved absolute path
        """
        path = Path(path)

        if path.is_absolute():
            return path

        return (self.project_root / path).resolve()

    def make_relative(self, path: Union[str, Path]) -> Path:
        """Express a path relative to the project root when possible"""
        path = Path(path)
        try:
            return path.resolve().relative_to(self.project_root)
        except ValueError:
            return path

    @property
    def manifest_path(self) -> Path:
        return self.project_root / MANIFEST_FILE

    @property
    def backend_dir(self) -> Path:
        return self.project_root / BACKEND_DIR

    def frontend_dir(self, manifest: Optional[ProjectManifest] = None) -> Path:
        """Get the frontend source directory declared by the manifest

        Args:
            manifest: Manifest whose ``frontend.sourceDirectory`` applies

        Returns:
            Frontend source directory
        """
        source = DEFAULT_FRONTEND_DIR
        if manifest is not None and manifest.frontend is not None:
            source = manifest.frontend.directory
        return self.resolve(source)

    def react_build_dir(self, manifest: Optional[ProjectManifest] = None) -> Path:
        return self.frontend_dir(manifest) / REACT_BUILD_DIR

    def html_entry(self, manifest: Optional[ProjectManifest] = None) -> Path:
        return self.frontend_dir(manifest) / HTML_ENTRY_FILE

    @staticmethod
    def package_file(directory: Path) -> Path:
        """Get the package descriptor inside a directory"""
        return directory / PACKAGE_FILE
