"""Tests for the control-plane client and sessions"""

from unittest.mock import MagicMock

import pytest
import requests

from cars_cli.api.exceptions import RemoteRequestError
from cars_cli.constants import PipelineStage
from cars_cli.remote import (
    ControlPlaneClient,
    Credentials,
    IdentityAuth,
    RemoteSession,
    upload_artifact,
)


def make_response(payload=None, status_code=200):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if payload is None:
        response.json.side_effect = ValueError('no json')
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    session = RemoteSession('https://cars.example.com/', Credentials('key-1'), timeout=5, http=http)
    return ControlPlaneClient(session)


def test_request_posts_json_to_joined_url(client, http):
    http.post.return_value = make_response({'status': 'success'})

    client.request('/api/v1/register', {'a': 1})

    http.post.assert_called_once_with('https://cars.example.com/api/v1/register',
                                      json={'a': 1}, timeout=5)


def test_session_installs_identity_auth(http):
    RemoteSession('https://cars.example.com', Credentials('key-1', 'tok'), http=http)

    assert isinstance(http.auth, IdentityAuth)
    request = requests.Request('POST', 'https://cars.example.com/x').prepare()
    http.auth(request)
    assert request.headers['X-Identity-Key'] == 'key-1'
    assert request.headers['Authorization'] == 'Bearer tok'


def test_anonymous_session_sends_no_identity():
    request = requests.Request('POST', 'https://cars.example.com/x').prepare()
    IdentityAuth(Credentials())(request)
    assert 'X-Identity-Key' not in request.headers
    assert 'Authorization' not in request.headers


@pytest.mark.parametrize('payload, status, expected', [
    ({'status': 'error', 'error': 'nope'}, 200, 'Registration failed: nope'),
    ({'description': 'bad key'}, 401, 'Registration failed: bad key'),
    (None, 502, 'Registration failed: HTTP 502'),
    ([1, 2], 200, 'Registration failed: Invalid response from server'),
])
def test_error_responses(client, http, payload, status, expected):
    http.post.return_value = make_response(payload, status)

    with pytest.raises(RemoteRequestError) as exc_info:
        client.register()

    assert exc_info.value.message == expected
    assert exc_info.value.stage == PipelineStage.REMOTE


def test_transport_error(client, http):
    http.post.side_effect = requests.ConnectionError('refused')

    with pytest.raises(RemoteRequestError) as exc_info:
        client.list_projects()

    assert exc_info.value.message.startswith('Failed to list projects: ')


def test_project_endpoints(client, http):
    http.post.side_effect = [
        make_response({'projects': ['p1', 'p2']}),
        make_response({'projectId': 'p3'}),
        make_response({'admins': ['k1']}),
        make_response({'logs': 'line\n'}),
        make_response({}),
    ]

    assert client.list_projects() == ['p1', 'p2']
    assert client.create_project() == 'p3'
    assert client.list_admins('p3') == ['k1']
    assert client.project_logs('p3') == 'line\n'
    assert client.project_logs('p3') == ''

    urls = [call.args[0] for call in http.post.call_args_list]
    assert urls == [
        'https://cars.example.com/api/v1/projects/list',
        'https://cars.example.com/api/v1/project/create',
        'https://cars.example.com/api/v1/project/p3/admins/list',
        'https://cars.example.com/api/v1/project/p3/logs/show',
        'https://cars.example.com/api/v1/project/p3/logs/show',
    ]


def test_admin_changes_send_identity_key(client, http):
    http.post.return_value = make_response({'status': 'success'})

    client.add_admin('p1', 'key-2')
    client.remove_admin('p1', 'key-2')

    first, second = http.post.call_args_list
    assert first.args[0].endswith('/api/v1/project/p1/addAdmin')
    assert first.kwargs['json'] == {'identityKey': 'key-2'}
    assert second.args[0].endswith('/api/v1/project/p1/removeAdmin')


def test_missing_list_key_is_an_error(client, http):
    http.post.return_value = make_response({'status': 'success'})

    with pytest.raises(RemoteRequestError):
        client.list_admins('p1')


def test_release_endpoints(client, http):
    http.post.side_effect = [
        make_response({'deploys': ['r1', 'r2']}),
        make_response({'url': 'https://upload.example.com/r3', 'deploymentId': 'r3'}),
        make_response({'logs': 'deployed'}),
    ]

    assert client.list_releases('p1') == ['r1', 'r2']
    assert client.create_release('p1') == {'url': 'https://upload.example.com/r3',
                                           'deploymentId': 'r3'}
    assert client.release_logs('r3') == 'deployed'
    assert http.post.call_args.args[0] == 'https://cars.example.com/api/v1/deploy/r3/logs/show'


def test_create_release_requires_url(client, http):
    http.post.return_value = make_response({'deploymentId': 'r1'})

    with pytest.raises(RemoteRequestError):
        client.create_release('p1')


def test_upload_artifact(tmp_path, http):
    artifact = tmp_path / 'cars_artifact_1700000000000.tgz'
    artifact.write_bytes(b'archive')
    http.post.return_value = make_response(status_code=200)

    upload_artifact('https://upload.example.com/r1', artifact, timeout=10, http=http)

    call = http.post.call_args
    assert call.args[0] == 'https://upload.example.com/r1'
    assert call.kwargs['headers'] == {'Content-Type': 'application/octet-stream'}
    assert call.kwargs['timeout'] == 10


def test_upload_artifact_failure(tmp_path, http):
    artifact = tmp_path / 'cars_artifact_1700000000000.tgz'
    artifact.write_bytes(b'archive')
    http.post.return_value = make_response(status_code=403)

    with pytest.raises(RemoteRequestError) as exc_info:
        upload_artifact('https://upload.example.com/r1', artifact, http=http)

    assert exc_info.value.status_code == 403
