# cars_cli/remote/client.py
"""Control-plane API client"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from ..api.exceptions import RemoteRequestError
from .session import RemoteSession

logger = logging.getLogger(__name__)


class ControlPlaneClient:
    """Thin wrapper over the control-plane REST API

    Every endpoint is a POST with a JSON body. The session is explicit and
    owned by the caller.
    """

    def __init__(self, session: RemoteSession):
        """
        Initialize control-plane client

        Args:
            session: Session carrying base URL, credentials and timeout
        """
        self.session = session

    def request(self, endpoint: str, body: Optional[Dict[str, Any]] = None,
                context: Optional[str] = None) -> Dict[str, Any]:
        """
        POST to an endpoint and decode the JSON response

        Args:
            endpoint: Path below the base URL
            body: JSON body (default: empty object)
            context: Message prefix for errors

        Returns:
            Decoded response object

        Raises:
            RemoteRequestError: On transport errors, error responses or
                undecodable bodies
        """
        context = context or f"Request to {endpoint} failed"
        url = self.session.url(endpoint)
        logger.debug(f"POST {url}")

        try:
            response = self.session.http.post(url, json=body or {}, timeout=self.session.timeout)
        except requests.RequestException as e:
            raise RemoteRequestError(context, str(e))

        data = self._decode(response)

        if response.status_code >= 400 or (isinstance(data, dict) and data.get('status') == 'error'):
            server_error = None
            if isinstance(data, dict):
                server_error = data.get('error') or data.get('description') or data.get('message')
            raise RemoteRequestError(
                context,
                server_error or f"HTTP {response.status_code}",
                status_code=response.status_code
            )

        if not isinstance(data, dict):
            raise RemoteRequestError(context, "Invalid response from server",
                                     status_code=response.status_code)

        return data

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    # Registration and projects

    def register(self) -> Dict[str, Any]:
        return self.request('/api/v1/register', context="Registration failed")

    def list_projects(self) -> List[str]:
        data = self.request('/api/v1/projects/list', context="Failed to list projects")
        return self._string_list(data, 'projects', "Failed to list projects")

    def create_project(self) -> str:
        data = self.request('/api/v1/project/create', context="Failed to create new project")
        project_id = data.get('projectId')
        if not project_id:
            raise RemoteRequestError("Failed to create new project", "No projectId returned")
        return project_id

    def add_admin(self, project_id: str, identity_key: str) -> Dict[str, Any]:
        return self.request(f'/api/v1/project/{project_id}/addAdmin',
                            {'identityKey': identity_key}, context="Failed to add admin")

    def remove_admin(self, project_id: str, identity_key: str) -> Dict[str, Any]:
        return self.request(f'/api/v1/project/{project_id}/removeAdmin',
                            {'identityKey': identity_key}, context="Failed to remove admin")

    def list_admins(self, project_id: str) -> List[str]:
        data = self.request(f'/api/v1/project/{project_id}/admins/list',
                            context="Failed to list admins")
        return self._string_list(data, 'admins', "Failed to list admins")

    def project_logs(self, project_id: str) -> str:
        data = self.request(f'/api/v1/project/{project_id}/logs/show',
                            context="Failed to retrieve project logs")
        return data.get('logs') or ''

    # Releases

    def list_releases(self, project_id: str) -> List[str]:
        data = self.request(f'/api/v1/project/{project_id}/deploys/list',
                            context="Failed to list releases")
        return self._string_list(data, 'deploys', "Failed to list releases")

    def create_release(self, project_id: str) -> Dict[str, str]:
        """
        Create a release and obtain its upload URL

        Returns:
            Dict with ``url`` and ``deploymentId``
        """
        data = self.request(f'/api/v1/project/{project_id}/deploy',
                            context="Failed to create release")
        if not data.get('url') or not data.get('deploymentId'):
            raise RemoteRequestError("Failed to create release",
                                     "Response is missing url or deploymentId")
        return {'url': data['url'], 'deploymentId': data['deploymentId']}

    def release_logs(self, release_id: str) -> str:
        data = self.request(f'/api/v1/deploy/{release_id}/logs/show',
                            context="Failed to retrieve release logs")
        return data.get('logs') or ''

    @staticmethod
    def _string_list(data: Dict[str, Any], key: str, context: str) -> List[str]:
        values = data.get(key)
        if not isinstance(values, list):
            raise RemoteRequestError(context, f"Response is missing '{key}'")
        return [str(v) for v in values]


def upload_artifact(upload_url: str, artifact_path: Path,
                    timeout: Optional[float] = None,
                    http: Optional[requests.Session] = None) -> None:
    """
    Upload an artifact as an opaque byte blob

    The upload URL is pre-authorized; no credentials are sent.

    Args:
        upload_url: URL returned by ``create_release``
        artifact_path: Artifact file
        timeout: Request timeout in seconds (default: none)
        http: requests session to use

    Raises:
        RemoteRequestError: If the upload fails
    """
    http = http or requests.Session()
    with open(artifact_path, 'rb') as f:
        try:
            response = http.post(
                upload_url,
                data=f,
                headers={'Content-Type': 'application/octet-stream'},
                timeout=timeout
            )
        except requests.RequestException as e:
            raise RemoteRequestError("Artifact upload failed", str(e))

    if response.status_code >= 400:
        raise RemoteRequestError("Artifact upload failed", f"HTTP {response.status_code}",
                                 status_code=response.status_code)

    logger.info(f"Uploaded {artifact_path.name} to {upload_url}")
