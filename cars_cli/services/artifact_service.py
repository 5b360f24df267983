# cars_cli/services/artifact_service.py
"""Local artifact management"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..api.exceptions import ArtifactNotFoundError, NoArtifactError
from ..core import PathResolver
from ..core.archive_packager import parse_artifact_timestamp
from ..models import Artifact

logger = logging.getLogger(__name__)


class ArtifactService:
    """List and delete artifacts in the project root"""

    def __init__(self, path_resolver: Optional[Union[PathResolver, str, Path]] = None):
        if not isinstance(path_resolver, PathResolver):
            path_resolver = PathResolver(path_resolver)
        self.path_resolver = path_resolver

    @property
    def directory(self) -> Path:
        return self.path_resolver.project_root

    def list(self) -> List[Artifact]:
        """
        List artifacts, oldest first

        Filenames carry fixed-width timestamps, so sorting by name is
        sorting by creation time.

        Returns:
            Artifacts found in the project root
        """
        artifacts = []
        for path in sorted(self.directory.iterdir(), key=lambda p: p.name):
            timestamp_ms = parse_artifact_timestamp(path.name)
            if timestamp_ms is None or not path.is_file():
                continue
            artifacts.append(Artifact(path=path, timestamp_ms=timestamp_ms,
                                      size=path.stat().st_size))
        return artifacts

    def latest(self) -> Artifact:
        """
        Most recent artifact

        Raises:
            NoArtifactError: If no artifact has been built
        """
        artifacts = self.list()
        if not artifacts:
            raise NoArtifactError()
        return artifacts[-1]

    def get(self, name: str) -> Artifact:
        """
        Look up an artifact by filename

        Raises:
            ArtifactNotFoundError: If the name is not a listed artifact
        """
        for artifact in self.list():
            if artifact.name == name:
                return artifact
        raise ArtifactNotFoundError(name)

    def delete(self, name: str) -> Artifact:
        """
        Delete an artifact

        Only files listed by :meth:`list` can be deleted, so a name cannot
        reach outside the project root.

        Raises:
            ArtifactNotFoundError: If the name is not a listed artifact
        """
        artifact = self.get(name)
        artifact.path.unlink()
        logger.info(f"Deleted artifact {name}")
        return artifact
