"""Archive packaging of staged build outputs"""

import logging
import tarfile
import time
from pathlib import Path
from typing import Callable, Optional

from ..api.exceptions import ArchiveError
from ..constants import ARTIFACT_EXTENSION, ARTIFACT_PREFIX, ARTIFACT_TIMESTAMP_WIDTH
from ..models.result import Artifact
from ..utils.file_utils import safe_remove

logger = logging.getLogger(__name__)


def current_millis() -> int:
    """Milliseconds since the epoch"""
    return time.time_ns() // 1_000_000


def artifact_filename(timestamp_ms: int) -> str:
    """
    Build an artifact filename

    The timestamp is zero-padded to a fixed width so that lexicographic
    order of filenames equals chronological order.

    Args:
        timestamp_ms: Milliseconds since the epoch

    Returns:
        Filename such as ``cars_artifact_1700000000000.tgz``
    """
    if timestamp_ms < 0 or len(str(timestamp_ms)) > ARTIFACT_TIMESTAMP_WIDTH:
        raise ValueError(f"Timestamp out of range for artifact names: {timestamp_ms}")
    return f"{ARTIFACT_PREFIX}{timestamp_ms:0{ARTIFACT_TIMESTAMP_WIDTH}d}{ARTIFACT_EXTENSION}"


def parse_artifact_timestamp(name: str) -> Optional[int]:
    """
    Extract the timestamp from an artifact filename

    Args:
        name: Filename

    Returns:
        Milliseconds since the epoch, or None if this is not an artifact name
    """
    if not (name.startswith(ARTIFACT_PREFIX) and name.endswith(ARTIFACT_EXTENSION)):
        return None
    stamp = name[len(ARTIFACT_PREFIX):len(name) - len(ARTIFACT_EXTENSION)]
    if not (stamp.isascii() and stamp.isdigit()):
        return None
    return int(stamp)


def is_artifact_name(name: str) -> bool:
    return parse_artifact_timestamp(name) is not None


class ArchivePackager:
    """Compress a staging directory into a timestamped artifact"""

    def __init__(self, output_dir: Path, clock: Optional[Callable[[], int]] = None):
        """
        Initialize archive packager

        Args:
            output_dir: Directory receiving artifacts
            clock: Source of epoch milliseconds (default: wall clock)
        """
        self.output_dir = Path(output_dir)
        self.clock = clock or current_millis

    def package(self, staging_path: Path) -> Artifact:
        """
        Write a gzip tar of the staging directory's contents

        Archive members are the entries inside the staging directory, with
        no wrapping directory. The staging directory is removed afterwards,
        whether or not packaging succeeded.

        Args:
            staging_path: Directory produced by the artifact stager

        Returns:
            The new Artifact

        Raises:
            ArchiveError: If the archive cannot be written
        """
        try:
            return self._package(Path(staging_path))
        finally:
            if not safe_remove(Path(staging_path)):
                logger.warning(f"Could not remove staging directory {staging_path}")

    def _package(self, staging_path: Path) -> Artifact:
        if not staging_path.is_dir():
            raise ArchiveError(f"Staging directory not found: {staging_path}")

        timestamp_ms = self.clock()
        while True:
            archive_path = self.output_dir / artifact_filename(timestamp_ms)
            try:
                handle = open(archive_path, 'xb')
            except FileExistsError:
                # Same millisecond as an existing artifact
                timestamp_ms += 1
                continue
            except OSError as e:
                raise ArchiveError(f"Cannot create {archive_path}: {e}")
            break

        try:
            with handle:
                with tarfile.open(fileobj=handle, mode='w:gz') as tar:
                    for entry in sorted(staging_path.iterdir()):
                        tar.add(entry, arcname=entry.name)
        except (OSError, tarfile.TarError) as e:
            safe_remove(archive_path)
            raise ArchiveError(f"Failed to write {archive_path.name}: {e}")
        except BaseException:
            safe_remove(archive_path)
            raise

        size = archive_path.stat().st_size
        logger.info(f"Created {archive_path.name} ({size} bytes)")

        return Artifact(path=archive_path, timestamp_ms=timestamp_ms, size=size)
