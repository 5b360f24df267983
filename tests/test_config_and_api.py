"""Tests for user configuration loading, the npm runner and the Python API"""

import subprocess

import pytest

from cars_cli import Builder, build
from cars_cli.api.exceptions import ConfigError
from cars_cli.constants import DEFAULT_CLOUD_URLS
from cars_cli.core import NpmStepRunner, load_client_config
from cars_cli.core.step_runner import COMMAND_NOT_FOUND


def test_missing_config_file_gives_defaults(tmp_path):
    config = load_client_config(tmp_path / 'config.yaml')

    assert config.package_manager == 'npm'
    assert config.request_timeout == 30
    assert config.identity_key is None
    assert config.cloud_urls == DEFAULT_CLOUD_URLS


def test_config_file_and_environment(tmp_path, monkeypatch):
    path = tmp_path / 'config.yaml'
    path.write_text(
        "package_manager: pnpm\n"
        "request_timeout: 5\n"
        "identity_key: ${MY_IDENTITY}\n"
        "cloud_urls:\n"
        "  - https://cars.example.com\n"
    )
    monkeypatch.setenv('MY_IDENTITY', 'key-from-env')
    monkeypatch.setenv('CARS_PACKAGE_MANAGER', 'yarn')

    config = load_client_config(path)

    assert config.package_manager == 'yarn'
    assert config.request_timeout == 5.0
    assert config.identity_key == 'key-from-env'
    assert config.cloud_urls == ['https://cars.example.com']


def test_config_env_path(tmp_path, monkeypatch):
    path = tmp_path / 'custom.yaml'
    path.write_text("auth_token: tok\n")
    monkeypatch.setenv('CARS_CONFIG', str(path))

    assert load_client_config().auth_token == 'tok'


@pytest.mark.parametrize('content', ['- a\n- b\n', 'key: [unclosed\n', 'request_timeout: soon\n'])
def test_invalid_config_file(tmp_path, content):
    path = tmp_path / 'config.yaml'
    path.write_text(content)

    with pytest.raises(ConfigError):
        load_client_config(path)


def test_npm_runner_reads_scripts(tmp_path):
    (tmp_path / 'package.json').write_text('{"scripts": {"build": "tsc", "compile": ""}}')
    runner = NpmStepRunner()

    assert runner.has_step(tmp_path, 'build')
    assert not runner.has_step(tmp_path, 'compile')
    assert not runner.has_step(tmp_path / 'missing', 'build')


def test_npm_runner_unparseable_package(tmp_path):
    (tmp_path / 'package.json').write_text('{not json')
    assert not NpmStepRunner().has_step(tmp_path, 'build')


def test_npm_runner_invokes_package_manager(tmp_path, monkeypatch):
    commands = []

    def fake_run(command, cwd):
        commands.append((command, cwd))
        return subprocess.CompletedProcess(command, 3)

    monkeypatch.setattr(subprocess, 'run', fake_run)
    runner = NpmStepRunner('pnpm')

    assert runner.install(tmp_path) == 3
    assert runner.run_step(tmp_path, 'build') == 3
    assert commands == [(['pnpm', 'install'], tmp_path), (['pnpm', 'run', 'build'], tmp_path)]


def test_npm_runner_missing_executable(tmp_path):
    runner = NpmStepRunner('definitely-not-a-package-manager')
    assert runner.install(tmp_path) == COMMAND_NOT_FOUND


def test_builder_api(project, step_runner):
    project.html_frontend()
    project.manifest(frontend={'language': 'html'}, targets=[project.target(deploy=['frontend'])])

    builder = Builder(project.root, config={'package_manager': 'pnpm'}, step_runner=step_runner)
    result = builder.build()

    assert builder.config.package_manager == 'pnpm'
    assert [a.name for a in builder.artifacts()] == [result.artifact.name]


def test_build_function(project, step_runner):
    project.manifest(targets=[project.target(deploy=[])])

    result = build('0', project_root=project.root, step_runner=step_runner)

    assert result.artifact.path.parent == project.root
