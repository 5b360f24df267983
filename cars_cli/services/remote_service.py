# cars_cli/services/remote_service.py
"""Control-plane operations for resolved targets"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from ..api.exceptions import ArtifactNotFoundError, RemoteProjectNotFoundError
from ..core import ResolvedTarget, load_client_config
from ..models import Artifact, ClientConfig
from ..remote import ControlPlaneClient, RemoteSession, upload_artifact

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str, ClientConfig], RemoteSession]


class RemoteService:
    """Project, admin and release operations against a control plane

    Every operation opens its own session from the user configuration and
    closes it when done. Operations on a project take a ResolvedTarget, so
    the provider check has already happened.
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 session_factory: Optional[SessionFactory] = None):
        """
        Initialize remote service

        Args:
            config: User configuration (default: loaded from disk)
            session_factory: Builds a session for a base URL
        """
        self.config = config or load_client_config()
        self.session_factory = session_factory or RemoteSession.from_config

    @contextmanager
    def client(self, cloud_url: str) -> Iterator[ControlPlaneClient]:
        """Open a client for one control plane"""
        with self.session_factory(cloud_url, self.config) as session:
            yield ControlPlaneClient(session)

    # Registration and projects

    def register(self, cloud_url: str) -> None:
        with self.client(cloud_url) as client:
            client.register()
        logger.debug(f"Registered with {cloud_url}")

    def list_projects(self, cloud_url: str) -> List[str]:
        with self.client(cloud_url) as client:
            client.register()
            return client.list_projects()

    def choose_project(self, cloud_url: str, project_id: Optional[str] = None) -> str:
        """
        Validate an existing project ID or create a new project

        Args:
            cloud_url: Control-plane URL
            project_id: Existing project ID; a new project is created if omitted

        Returns:
            Project ID to store in the target

        Raises:
            RemoteProjectNotFoundError: If the given ID is not listed by the server
        """
        with self.client(cloud_url) as client:
            client.register()

            if project_id:
                project_id = project_id.strip()
                if project_id not in client.list_projects():
                    raise RemoteProjectNotFoundError(project_id, cloud_url)
                return project_id

            project_id = client.create_project()
            logger.info(f"Created project {project_id} on {cloud_url}")
            return project_id

    def add_admin(self, resolved: ResolvedTarget, identity_key: str) -> None:
        with self.client(resolved.cloud_url) as client:
            client.add_admin(resolved.project_id, identity_key)

    def remove_admin(self, resolved: ResolvedTarget, identity_key: str) -> None:
        with self.client(resolved.cloud_url) as client:
            client.remove_admin(resolved.project_id, identity_key)

    def list_admins(self, resolved: ResolvedTarget) -> List[str]:
        with self.client(resolved.cloud_url) as client:
            return client.list_admins(resolved.project_id)

    def project_logs(self, resolved: ResolvedTarget) -> str:
        with self.client(resolved.cloud_url) as client:
            return client.project_logs(resolved.project_id)

    # Releases

    def list_releases(self, resolved: ResolvedTarget) -> List[str]:
        with self.client(resolved.cloud_url) as client:
            return client.list_releases(resolved.project_id)

    def create_release(self, resolved: ResolvedTarget) -> Dict[str, str]:
        with self.client(resolved.cloud_url) as client:
            return client.create_release(resolved.project_id)

    def release_logs(self, resolved: ResolvedTarget, release_id: str) -> str:
        with self.client(resolved.cloud_url) as client:
            return client.release_logs(release_id)

    def upload(self, upload_url: str, artifact_path: Path) -> None:
        """
        Upload an artifact file to a release upload URL

        Raises:
            ArtifactNotFoundError: If the file does not exist
            RemoteRequestError: If the upload fails
        """
        artifact_path = Path(artifact_path)
        if not artifact_path.is_file():
            raise ArtifactNotFoundError(str(artifact_path))
        upload_artifact(upload_url, artifact_path, timeout=self.config.request_timeout)

    def release_now(self, resolved: ResolvedTarget, artifact: Artifact) -> Dict[str, str]:
        """
        Create a release and upload an artifact to it

        Args:
            resolved: Target whose project receives the release
            artifact: Artifact to upload

        Returns:
            Release info with ``url`` and ``deploymentId``
        """
        # Check before creating a release that would never receive files
        project_id = resolved.project_id
        release = self.create_release(resolved)
        logger.info(f"Release {release['deploymentId']} created for project {project_id}")
        self.upload(release['url'], artifact.path)
        return release
