"""Registry of the manifest's deployment targets"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..api.exceptions import (
    AmbiguousTargetError,
    MissingCloudUrlError,
    MissingProjectIdError,
    NoEligibleTargetError,
    TargetNotEligibleError,
    TargetNotFoundError,
)
from ..constants import CARS_PROVIDER
from ..models.manifest import ProjectManifest
from ..models.target import DeploymentTarget


@dataclass(frozen=True)
class ResolvedTarget:
    """A target that passed the provider capability check

    Remote operations only accept this type, so the provider check is done
    once, when the target is resolved.
    """
    index: int
    target: DeploymentTarget

    @property
    def name(self) -> str:
        return self.target.name

    @property
    def project_id(self) -> str:
        """Project ID, required by every remote project operation"""
        if not self.target.project_id:
            raise MissingProjectIdError(self.target.name)
        return self.target.project_id

    @property
    def cloud_url(self) -> str:
        """Control-plane base URL"""
        if not self.target.cloud_url:
            raise MissingCloudUrlError(self.target.name)
        return self.target.cloud_url


# Chooser receives eligible candidates and returns the one picked
TargetChooser = Callable[[Sequence[ResolvedTarget]], ResolvedTarget]


class TargetRegistry:
    """Resolve deployment targets by ordinal, name or interactive choice"""

    def __init__(self, manifest: ProjectManifest, provider: str = CARS_PROVIDER):
        """
        Initialize target registry

        Args:
            manifest: Manifest holding the ordered target list
            provider: Provider tag this client operates on
        """
        self.manifest = manifest
        self.provider = provider

    def list_all(self) -> List[DeploymentTarget]:
        """All targets in manifest order, whatever their provider"""
        return list(self.manifest.targets)

    def is_eligible(self, target: DeploymentTarget) -> bool:
        return target.provider == self.provider

    def list_eligible(self) -> List[ResolvedTarget]:
        """Targets whose provider matches this client, with their ordinals"""
        return [
            ResolvedTarget(index, target)
            for index, target in enumerate(self.manifest.targets)
            if self.is_eligible(target)
        ]

    def find(self, identifier: str) -> Optional[ResolvedTarget]:
        """Look up a target by ordinal position or name

        A non-negative integer string within range is an ordinal; anything
        else, including an out-of-range number, is matched by exact name.
        Duplicate names resolve to the first match.

        Args:
            identifier: Ordinal or name

        Returns:
            Matching target or None
        """
        targets = self.manifest.targets
        identifier = str(identifier)

        if identifier.isascii() and identifier.isdigit():
            index = int(identifier)
            if index < len(targets):
                return ResolvedTarget(index, targets[index])

        for index, target in enumerate(targets):
            if target.name == identifier:
                return ResolvedTarget(index, target)

        return None

    def resolve(self, identifier: str) -> ResolvedTarget:
        """Resolve a target of any provider

        Raises:
            TargetNotFoundError: If nothing matches
        """
        resolved = self.find(identifier)
        if resolved is None:
            raise TargetNotFoundError(identifier)
        return resolved

    def resolve_eligible(self, identifier: str) -> ResolvedTarget:
        """Resolve a target and check that this client can operate on it

        Raises:
            TargetNotFoundError: If nothing matches
            TargetNotEligibleError: If the target has another provider
        """
        resolved = self.resolve(identifier)
        if not self.is_eligible(resolved.target):
            raise TargetNotEligibleError(identifier, resolved.target.provider)
        return resolved

    def select(self, identifier: Optional[str] = None,
               chooser: Optional[TargetChooser] = None) -> ResolvedTarget:
        """Select the target a command operates on

        Args:
            identifier: Explicit ordinal or name, if given
            chooser: Callback picking among several eligible targets

        Returns:
            Selected eligible target

        Raises:
            NoEligibleTargetError: If no identifier is given and no target is eligible
            AmbiguousTargetError: If several are eligible and there is no chooser
        """
        if identifier is not None and identifier != "":
            return self.resolve_eligible(identifier)

        eligible = self.list_eligible()
        if not eligible:
            raise NoEligibleTargetError()
        if len(eligible) == 1:
            return eligible[0]
        if chooser is None:
            raise AmbiguousTargetError([r.name for r in eligible])
        return chooser(eligible)

    def cloud_urls(self) -> List[str]:
        """Distinct control-plane URLs of eligible targets, in manifest order"""
        urls = []
        for resolved in self.list_eligible():
            url = resolved.target.cloud_url
            if url and url not in urls:
                urls.append(url)
        return urls

    # Mutations, persisted by the caller through the manifest store

    def add(self, target: DeploymentTarget) -> ResolvedTarget:
        self.manifest.targets.append(target)
        return ResolvedTarget(len(self.manifest.targets) - 1, target)

    def replace(self, index: int, target: DeploymentTarget) -> ResolvedTarget:
        self.manifest.targets[index] = target
        return ResolvedTarget(index, target)

    def remove(self, index: int) -> DeploymentTarget:
        return self.manifest.targets.pop(index)
