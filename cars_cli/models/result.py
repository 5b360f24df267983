"""Result models for build operations"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .target import DeploymentTarget


@dataclass
class BuildOutputs:
    """What the build orchestrator produced for the stager

    Attributes:
        backend_dir: Backend tree to ship, if the backend was built
        frontend_dir: Directory whose contents become ``frontend/`` in the
            archive (react build output or html source tree)
        frontend_language: Normalized frontend language, if built
        steps: Steps that ran, in order, as ``"<subsystem>:<step>"``
    """
    backend_dir: Optional[Path] = None
    frontend_dir: Optional[Path] = None
    frontend_language: Optional[str] = None
    steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'backend_dir': str(self.backend_dir) if self.backend_dir else None,
            'frontend_dir': str(self.frontend_dir) if self.frontend_dir else None,
            'frontend_language': self.frontend_language,
            'steps': list(self.steps),
        }


@dataclass(frozen=True)
class Artifact:
    """Compressed archive produced by one pipeline run"""
    path: Path
    timestamp_ms: int
    size: int = 0

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def created_at(self) -> datetime:
        """Creation time in local time"""
        return datetime.fromtimestamp(self.timestamp_ms / 1000)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'path': str(self.path),
            'timestamp_ms': self.timestamp_ms,
            'created_at': self.created_at.isoformat(),
            'size': self.size,
        }


@dataclass
class BuildResult:
    """Result of a full build pipeline run"""
    artifact: Artifact
    target: DeploymentTarget
    outputs: BuildOutputs
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def duration(self) -> Optional[float]:
        """Pipeline duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def complete(self) -> None:
        """Mark the run as complete"""
        self.end_time = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'artifact': self.artifact.to_dict(),
            'target': self.target.name,
            'outputs': self.outputs.to_dict(),
            'duration': self.duration,
        }
