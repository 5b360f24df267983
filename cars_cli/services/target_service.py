# cars_cli/services/target_service.py
"""Deployment target management"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..api.exceptions import ConfigError
from ..constants import CARS_PROVIDER, DEFAULT_NETWORK, FRONTEND_HOSTING_METHODS, Subsystem
from ..core import ManifestStore, PathResolver, ResolvedTarget, TargetRegistry
from ..models import DeploySet, DeploymentTarget
from .remote_service import RemoteService

logger = logging.getLogger(__name__)


class TargetService:
    """Add, edit and delete CARS targets in the manifest"""

    def __init__(self,
                 path_resolver: Optional[Union[PathResolver, str, Path]] = None,
                 remote: Optional[RemoteService] = None):
        """
        Initialize target service

        Args:
            path_resolver: Resolver, or project root path
            remote: Service used to validate or create project IDs
        """
        if not isinstance(path_resolver, PathResolver):
            path_resolver = PathResolver(path_resolver)
        self.path_resolver = path_resolver
        self.manifest_store = ManifestStore(path_resolver)
        self._remote = remote

    @property
    def remote(self) -> RemoteService:
        if self._remote is None:
            self._remote = RemoteService()
        return self._remote

    def list(self) -> List[ResolvedTarget]:
        """All targets with their ordinals, whatever their provider"""
        manifest = self.manifest_store.load()
        return [ResolvedTarget(i, t) for i, t in enumerate(manifest.targets)]

    def add(self, name: str, cloud_url: str,
            network: str = DEFAULT_NETWORK,
            deploy: Iterable[str] = (Subsystem.FRONTEND.value, Subsystem.BACKEND.value),
            frontend_hosting_method: Optional[str] = None,
            project_id: Optional[str] = None) -> ResolvedTarget:
        """
        Add a CARS target

        The project ID is checked against the control plane; when omitted a
        new project is created there.

        Args:
            name: Target name
            cloud_url: Control-plane URL
            network: Network name
            deploy: Subsystems to build and release
            frontend_hosting_method: HTTPS or UHRP; ``none`` stores nothing
            project_id: Existing project ID

        Returns:
            The new target with its ordinal

        Raises:
            ConfigError: If an argument is invalid
            RemoteProjectNotFoundError: If the project ID is unknown to the server
        """
        manifest = self.manifest_store.load()
        registry = TargetRegistry(manifest)

        target = self._make_target(name, cloud_url, network, deploy, frontend_hosting_method)
        project_id = self.remote.choose_project(target.cloud_url, project_id)

        resolved = registry.add(replace(target, project_id=project_id))
        self.manifest_store.save(manifest)

        logger.info(f'CARS configuration "{resolved.name}" created')
        return resolved

    def edit(self, identifier: str,
             name: Optional[str] = None,
             cloud_url: Optional[str] = None,
             network: Optional[str] = None,
             deploy: Optional[Iterable[str]] = None,
             frontend_hosting_method: Optional[str] = None,
             project_id: Optional[str] = None,
             new_project: bool = False) -> ResolvedTarget:
        """
        Edit a CARS target in place

        Arguments left as None keep their current value. The project ID is
        re-validated against the (possibly new) control plane.

        Args:
            identifier: Ordinal or name of the target
            new_project: Create a new project instead of keeping the current one

        Returns:
            The updated target

        Raises:
            TargetNotFoundError: If nothing matches
            TargetNotEligibleError: If the target is not a CARS target
        """
        manifest = self.manifest_store.load()
        registry = TargetRegistry(manifest)
        resolved = registry.resolve_eligible(identifier)
        index, current = resolved.index, resolved.target

        if frontend_hosting_method is None:
            frontend_hosting_method = current.frontend_hosting_method or 'none'

        target = self._make_target(
            name if name is not None else current.name,
            cloud_url if cloud_url is not None else current.cloud_url,
            network if network is not None else current.network,
            deploy if deploy is not None else current.deploy.to_list(),
            frontend_hosting_method
        )

        if new_project:
            project_id = None
        elif project_id is None:
            project_id = current.project_id
        project_id = self.remote.choose_project(target.cloud_url, project_id)

        resolved = registry.replace(
            index, replace(target, project_id=project_id, extras=current.extras)
        )
        self.manifest_store.save(manifest)

        logger.info(f'CARS configuration "{resolved.name}" updated')
        return resolved

    def delete(self, identifier: str) -> DeploymentTarget:
        """
        Delete a CARS target

        Raises:
            TargetNotFoundError: If nothing matches
            TargetNotEligibleError: If the target is not a CARS target
        """
        manifest = self.manifest_store.load()
        registry = TargetRegistry(manifest)
        resolved = registry.resolve_eligible(identifier)

        removed = registry.remove(resolved.index)
        self.manifest_store.save(manifest)

        logger.info(f'CARS configuration "{removed.name}" deleted')
        return removed

    @staticmethod
    def _make_target(name: str, cloud_url: Optional[str], network: Optional[str],
                     deploy: Iterable[str],
                     frontend_hosting_method: Optional[str]) -> DeploymentTarget:
        name = (name or '').strip()
        if not name:
            raise ConfigError("Name is required.")

        cloud_url = (cloud_url or '').strip()
        if not cloud_url:
            raise ConfigError("CARS Cloud URL is required.")

        deploy = list(deploy)
        unknown = [d for d in deploy if d not in {s.value for s in Subsystem}]
        if unknown:
            raise ConfigError(f"Unknown deploy entries: {', '.join(unknown)}")

        if frontend_hosting_method is not None and frontend_hosting_method not in FRONTEND_HOSTING_METHODS:
            raise ConfigError(
                f"Frontend hosting method must be one of: {', '.join(FRONTEND_HOSTING_METHODS)}"
            )

        deploy_set = DeploySet.from_list(deploy)
        # Hosting method only applies to a released frontend; 'none' is not stored
        if not deploy_set.frontend or frontend_hosting_method == 'none':
            frontend_hosting_method = None

        return DeploymentTarget(
            name=name,
            provider=CARS_PROVIDER,
            network=(network or DEFAULT_NETWORK).strip(),
            cloud_url=cloud_url,
            deploy=deploy_set,
            frontend_hosting_method=frontend_hosting_method
        )
