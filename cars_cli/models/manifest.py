# cars_cli/models/manifest.py
"""Project manifest models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..constants import (
    DEFAULT_FRONTEND_DIR,
    DEFAULT_SCHEMA_VERSION,
    MANIFEST_SCHEMA,
    TARGETS_KEY,
)
from .target import DeploymentTarget

_MANIFEST_KEYS = {'schema', 'schemaVersion', 'frontend', 'contracts', TARGETS_KEY}


@dataclass(frozen=True)
class FrontendSpec:
    """Frontend declaration"""
    language: Optional[str] = None
    # None when the manifest leaves it out; the build then uses frontend/
    source_directory: Optional[str] = None

    @property
    def normalized_language(self) -> Optional[str]:
        """Language in lower case, as matched by the build pipeline"""
        return self.language.lower() if self.language else None

    @property
    def directory(self) -> str:
        """Source directory relative to the project root"""
        return self.source_directory or DEFAULT_FRONTEND_DIR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {}
        if self.language is not None:
            data['language'] = self.language
        if self.source_directory is not None:
            data['sourceDirectory'] = self.source_directory
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FrontendSpec':
        """Create from dictionary"""
        return cls(
            language=data.get('language') or None,
            source_directory=data.get('sourceDirectory') or None
        )


@dataclass(frozen=True)
class ContractsSpec:
    """Smart contract declaration"""
    language: Optional[str] = None
    base_directory: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {}
        if self.language is not None:
            data['language'] = self.language
        if self.base_directory is not None:
            data['baseDirectory'] = self.base_directory
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContractsSpec':
        """Create from dictionary"""
        return cls(
            language=data.get('language') or None,
            base_directory=data.get('baseDirectory')
        )


@dataclass
class ProjectManifest:
    """Declarative descriptor of a project's build and deploy shape"""
    schema: str = MANIFEST_SCHEMA
    schema_version: Optional[str] = DEFAULT_SCHEMA_VERSION
    frontend: Optional[FrontendSpec] = None
    contracts: Optional[ContractsSpec] = None
    targets: List[DeploymentTarget] = field(default_factory=list)
    # Keys this client does not interpret (topicManagers, lookupServices, ...)
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {'schema': self.schema}
        if self.schema_version is not None:
            data['schemaVersion'] = self.schema_version
        data.update(self.extras)
        if self.frontend is not None:
            data['frontend'] = self.frontend.to_dict()
        if self.contracts is not None:
            data['contracts'] = self.contracts.to_dict()
        data[TARGETS_KEY] = [t.to_dict() for t in self.targets]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectManifest':
        """Create from dictionary"""
        frontend = data.get('frontend')
        contracts = data.get('contracts')
        return cls(
            schema=data.get('schema'),
            schema_version=data.get('schemaVersion'),
            frontend=FrontendSpec.from_dict(frontend) if frontend else None,
            contracts=ContractsSpec.from_dict(contracts) if contracts else None,
            targets=[DeploymentTarget.from_dict(t) for t in data.get(TARGETS_KEY) or []],
            extras={k: v for k, v in data.items() if k not in _MANIFEST_KEYS}
        )

    @property
    def contract_language(self) -> Optional[str]:
        return self.contracts.language if self.contracts else None

    @property
    def frontend_language(self) -> Optional[str]:
        return self.frontend.normalized_language if self.frontend else None
