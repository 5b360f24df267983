"""Tests for the command line interface"""

import importlib

import pytest
from click.testing import CliRunner

from cars_cli.cli.main import Context, cli
from cars_cli.models import ClientConfig

main_module = importlib.import_module("cars_cli.cli.main")


class FakeRemote:
    """Records control-plane calls made by commands"""

    def __init__(self):
        self.calls = []
        self.releases = ['r1', 'r2']

    def list_projects(self, cloud_url):
        self.calls.append(('list_projects', cloud_url))
        return ['p1', 'p2']

    def choose_project(self, cloud_url, project_id=None):
        self.calls.append(('choose_project', cloud_url, project_id))
        return project_id or 'created-1'

    def add_admin(self, resolved, identity_key):
        self.calls.append(('add_admin', resolved.project_id, identity_key))

    def remove_admin(self, resolved, identity_key):
        self.calls.append(('remove_admin', resolved.project_id, identity_key))

    def list_admins(self, resolved):
        return ['admin-key']

    def project_logs(self, resolved):
        return 'project started'

    def list_releases(self, resolved):
        return list(self.releases)

    def create_release(self, resolved):
        resolved.project_id
        return {'url': 'https://up.example.com/r3', 'deploymentId': 'r3'}

    def release_logs(self, resolved, release_id):
        self.calls.append(('release_logs', release_id))
        return f'log of {release_id}'

    def upload(self, upload_url, artifact_path):
        self.calls.append(('upload', upload_url, artifact_path.name))

    def release_now(self, resolved, artifact):
        self.calls.append(('release_now', resolved.name, artifact.name))
        return {'url': 'https://up.example.com/r4', 'deploymentId': 'r4'}


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def run(project, step_runner, remote):
    """Invoke the CLI non-interactively against the temporary project"""
    def invoke(*args):
        obj = Context(config=ClientConfig(), remote=remote,
                      step_runner=step_runner, interactive=False)
        runner = CliRunner()
        return runner.invoke(cli, ['--project-root', str(project.root)] + list(args), obj=obj)
    return invoke


def test_version(run):
    result = run('--version')
    assert result.exit_code == 0
    assert 'cars' in result.output


def test_bare_invocation_creates_manifest(run, project):
    result = run()

    assert result.exit_code == 0
    assert project.read_manifest()['schema'] == 'bsv-app'
    assert 'Usage:' in result.output


def test_init(run, project):
    result = run('init')
    assert result.exit_code == 0
    assert project.manifest_path.exists()

    result = run('init')
    assert result.exit_code == 0
    assert 'already exists' in result.output


def test_init_force_overwrites(run, project):
    project.manifest()

    result = run('init', '--force')

    assert result.exit_code == 0
    assert project.read_manifest()['configs'] == []


def test_build_html_target(run, project, step_runner):
    project.html_frontend()
    project.manifest(frontend={'language': 'html'}, targets=[project.target(deploy=['frontend'])])

    result = run('build')

    assert result.exit_code == 0, result.output
    assert 'Artifact built successfully' in result.output
    assert len(project.artifacts()) == 1
    assert project.staging_dirs() == []


def test_build_without_manifest(run, project):
    result = run('build')

    assert result.exit_code == 1
    assert 'Build failed during manifest' in result.output
    assert project.artifacts() == []


def test_build_step_failure(run, project, step_runner):
    project.react_frontend()
    project.manifest(frontend={'language': 'react'}, targets=[project.target(deploy=['frontend'])])
    step_runner.fail[('frontend', 'build')] = 1

    result = run('build', 'production')

    assert result.exit_code == 1
    assert 'Build failed during build' in result.output
    assert project.artifacts() == []
    assert project.staging_dirs() == []


def test_build_needs_target_name_without_terminal(run, project):
    project.manifest(targets=[project.target('a', deploy=[]), project.target('b', deploy=[])])

    result = run('build')

    assert result.exit_code == 1
    assert 'Build failed during target' in result.output


def test_build_non_cars_target(run, project):
    project.manifest(targets=[project.target('lars', provider='LARS')])

    result = run('build', 'lars')

    assert result.exit_code == 1
    assert 'Build failed during target' in result.output


def test_config_ls(run, project):
    project.manifest(targets=[project.target('prod'), project.target('lars', provider='LARS')])

    result = run('config', 'ls')

    assert result.exit_code == 0
    assert 'prod' in result.output
    assert 'lars' in result.output


def test_config_add_non_interactive(run, project, remote):
    project.manifest(targets=[])

    result = run('config', 'add', '--name', 'staging', '--cloud-url', 'https://cars.example.com',
                 '--deploy', 'backend', '--network', 'testnet')

    assert result.exit_code == 0, result.output
    stored = project.read_manifest()['configs']
    assert stored == [{
        'name': 'staging',
        'provider': 'CARS',
        'network': 'testnet',
        'projectID': 'created-1',
        'CARSCloudURL': 'https://cars.example.com',
        'deploy': ['backend'],
    }]
    assert remote.calls == [('choose_project', 'https://cars.example.com', None)]


def test_config_add_requires_name_without_terminal(run, project):
    project.manifest(targets=[])

    result = run('config', 'add', '--cloud-url', 'https://cars.example.com')

    assert result.exit_code == 1
    assert '--name and --cloud-url are required' in result.output
    assert project.read_manifest()['configs'] == []


def test_config_edit(run, project):
    project.manifest(targets=[project.target('prod')])

    result = run('config', 'edit', '0', '--network', 'testnet')

    assert result.exit_code == 0, result.output
    assert project.read_manifest()['configs'][0]['network'] == 'testnet'


def test_config_delete(run, project):
    project.manifest(targets=[project.target('prod'), project.target('other')])

    result = run('config', 'delete', 'prod', '--yes')

    assert result.exit_code == 0
    assert [t['name'] for t in project.read_manifest()['configs']] == ['other']


def test_commands_require_manifest(run):
    result = run('config', 'ls')

    assert result.exit_code == 1
    assert 'No deployment-info.json' in result.output


def test_project_ls_uses_only_cloud_url(run, project, remote):
    project.manifest(targets=[project.target('a'), project.target('b')])

    result = run('project', 'ls')

    assert result.exit_code == 0
    assert 'p2' in result.output
    assert remote.calls == [('list_projects', 'https://cars.example.com')]


def test_project_admins(run, project, remote):
    project.manifest()

    assert run('project', 'add-admin', 'key-9').exit_code == 0
    assert run('project', 'remove-admin', 'key-9', 'production').exit_code == 0
    result = run('project', 'list-admins')

    assert 'admin-key' in result.output
    assert remote.calls == [('add_admin', 'proj-1', 'key-9'), ('remove_admin', 'proj-1', 'key-9')]


def test_project_command_without_project_id(run, project):
    project.manifest(targets=[project.target(project_id=None)])

    result = run('release', 'get-upload-url')

    assert result.exit_code == 1
    assert 'No project ID' in result.output


def test_release_get_upload_url(run, project):
    project.manifest()

    result = run('release', 'get-upload-url')

    assert result.exit_code == 0
    assert 'Release ID: r3' in result.output
    assert 'https://up.example.com/r3' in result.output


def test_release_upload_files(run, project, remote):
    artifact = project.root / 'cars_artifact_1700000000000.tgz'
    artifact.write_bytes(b'archive')

    result = run('release', 'upload-files', 'https://up.example.com/r3', str(artifact))

    assert result.exit_code == 0
    assert remote.calls == [('upload', 'https://up.example.com/r3', artifact.name)]


def test_release_now_uses_latest_artifact(run, project, remote):
    project.manifest()
    for stamp in ('1700000000100', '1700000000200'):
        (project.root / f'cars_artifact_{stamp}.tgz').write_bytes(b'archive')

    result = run('release', 'now')

    assert result.exit_code == 0, result.output
    assert 'Release ID: r4' in result.output
    assert remote.calls == [('release_now', 'production', 'cars_artifact_1700000000200.tgz')]


def test_release_now_without_artifact(run, project, remote):
    project.manifest()

    result = run('release', 'now')

    assert result.exit_code == 1
    assert 'No artifact found' in result.output
    assert remote.calls == []


def test_release_logs(run, project, remote):
    project.manifest()

    result = run('release', 'logs', 'r1')

    assert result.exit_code == 0
    assert 'log of r1' in result.output


def test_release_logs_needs_id_without_terminal(run, project, remote):
    project.manifest()

    result = run('release', 'logs')

    assert result.exit_code == 1
    assert 'RELEASE_ID is required' in result.output
    assert remote.calls == []


def test_release_logs_without_releases(run, project, remote):
    project.manifest()
    remote.releases = []

    result = run('release', 'logs')

    assert result.exit_code == 0
    assert 'No releases found' in result.output


def test_artifact_ls_and_delete(run, project):
    (project.root / 'cars_artifact_1700000000100.tgz').write_bytes(b'archive')

    result = run('artifact', 'ls')
    assert 'cars_artifact_1700000000100.tgz' in result.output

    result = run('artifact', 'delete', 'cars_artifact_1700000000100.tgz')
    assert result.exit_code == 0
    assert project.artifacts() == []

    result = run('artifact', 'delete', 'cars_artifact_1700000000100.tgz')
    assert result.exit_code == 1
    assert 'not found' in result.output


def test_main_exits_130_on_interrupt(monkeypatch):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt()

    monkeypatch.setattr(main_module.cli, 'main', interrupted)

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 130
