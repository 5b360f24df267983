# cars_cli/models/target.py
"""Deployment target models"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from ..constants import CARS_PROVIDER, Subsystem

logger = logging.getLogger(__name__)

# Keys understood by DeploymentTarget; everything else round-trips via extras
_TARGET_KEYS = {
    'name', 'provider', 'network', 'projectID', 'CARSCloudURL',
    'deploy', 'frontendHostingMethod'
}


@dataclass(frozen=True)
class DeploySet:
    """Subset of subsystems a target builds and packages"""
    subsystems: FrozenSet[Subsystem] = frozenset()
    # Original ordering, kept so that saving does not reorder the user's list
    order: tuple = ()

    @classmethod
    def from_list(cls, values: Optional[Iterable[str]]) -> 'DeploySet':
        """Create from the manifest's list of subsystem tags

        Unknown tags are ignored with a warning.
        """
        subsystems = []
        for value in values or []:
            try:
                subsystem = Subsystem(value)
            except ValueError:
                logger.warning(f"Ignoring unknown deploy entry: {value!r}")
                continue
            if subsystem not in subsystems:
                subsystems.append(subsystem)
        return cls(subsystems=frozenset(subsystems), order=tuple(subsystems))

    @classmethod
    def of(cls, *values: str) -> 'DeploySet':
        """Create from subsystem tags, e.g. ``DeploySet.of('backend')``"""
        return cls.from_list(values)

    def to_list(self) -> List[str]:
        """Convert to the manifest's list representation"""
        order = self.order or sorted(self.subsystems, key=lambda s: s.value)
        return [s.value for s in order]

    @property
    def backend(self) -> bool:
        return Subsystem.BACKEND in self.subsystems

    @property
    def frontend(self) -> bool:
        return Subsystem.FRONTEND in self.subsystems

    def __contains__(self, item) -> bool:
        if isinstance(item, str):
            item = Subsystem(item)
        return item in self.subsystems

    def __len__(self) -> int:
        return len(self.subsystems)


@dataclass(frozen=True)
class DeploymentTarget:
    """One named deployment profile from the manifest"""
    name: str
    provider: str
    network: Optional[str] = None
    project_id: Optional[str] = None
    cloud_url: Optional[str] = None
    deploy: DeploySet = field(default_factory=DeploySet)
    frontend_hosting_method: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_cars(self) -> bool:
        """Whether this client can run remote operations against the target"""
        return self.provider == CARS_PROVIDER

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'name': self.name,
            'provider': self.provider,
        }
        if self.network is not None:
            data['network'] = self.network
        if self.project_id is not None:
            data['projectID'] = self.project_id
        if self.cloud_url is not None:
            data['CARSCloudURL'] = self.cloud_url
        data['deploy'] = self.deploy.to_list()
        if self.frontend_hosting_method is not None:
            data['frontendHostingMethod'] = self.frontend_hosting_method
        data.update(self.extras)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeploymentTarget':
        """Create from dictionary"""
        return cls(
            name=data['name'],
            provider=data.get('provider', ''),
            network=data.get('network'),
            project_id=data.get('projectID'),
            cloud_url=data.get('CARSCloudURL'),
            deploy=DeploySet.from_list(data.get('deploy')),
            frontend_hosting_method=data.get('frontendHostingMethod'),
            extras={k: v for k, v in data.items() if k not in _TARGET_KEYS}
        )

    def describe(self) -> str:
        """One-line description for listings"""
        if self.is_cars:
            return (f"{self.name} [CARS] (CloudURL: {self.cloud_url}, "
                    f"ProjectID: {self.project_id or 'none'})")
        return f"{self.name} (Provider: {self.provider}, Non-CARS)"
