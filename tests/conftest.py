"""Shared fixtures for cars-cli tests"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from cars_cli.core import PathResolver, StepRunner


class FakeStepRunner(StepRunner):
    """Step runner that records calls instead of launching npm

    Steps are keyed by the working directory relative to the project root
    (``"."`` for the root itself). A successful ``build`` leaves behind the
    output a real build would.
    """

    def __init__(self, root: Path):
        self.root = root
        self.calls: List[tuple] = []
        self.fail: Dict[tuple, int] = {}
        self.produce_output = True

    def install(self, cwd: Path) -> int:
        return self._record(cwd, 'install')

    def has_step(self, cwd: Path, name: str) -> bool:
        package_file = Path(cwd) / 'package.json'
        if not package_file.is_file():
            return False
        scripts = json.loads(package_file.read_text()).get('scripts') or {}
        return name in scripts

    def run_step(self, cwd: Path, name: str) -> int:
        status = self._record(cwd, name)
        if status == 0 and name == 'build' and self.produce_output:
            cwd = Path(cwd)
            if cwd.name == 'backend':
                (cwd / 'dist').mkdir(exist_ok=True)
                (cwd / 'dist' / 'index.js').write_text('module.exports = {}\n')
            else:
                (cwd / 'build').mkdir(exist_ok=True)
                (cwd / 'build' / 'index.html').write_text('<html>built</html>\n')
        return status

    def _record(self, cwd: Path, name: str) -> int:
        key = (self.key(cwd), name)
        self.calls.append(key)
        return self.fail.get(key, 0)

    def key(self, cwd: Path) -> str:
        return Path(cwd).relative_to(self.root).as_posix()


class ProjectFactory:
    """Writes project trees into a temporary project root"""

    def __init__(self, root: Path):
        self.root = root

    @property
    def manifest_path(self) -> Path:
        return self.root / 'deployment-info.json'

    @staticmethod
    def target(name: str = 'production',
               provider: str = 'CARS',
               deploy=('backend', 'frontend'),
               project_id: Optional[str] = 'proj-1',
               cloud_url: Optional[str] = 'https://cars.example.com',
               **extra) -> Dict[str, Any]:
        data = {'name': name, 'provider': provider, 'network': 'mainnet', 'deploy': list(deploy)}
        if project_id is not None:
            data['projectID'] = project_id
        if cloud_url is not None:
            data['CARSCloudURL'] = cloud_url
        data.update(extra)
        return data

    def manifest(self, targets: Optional[List[Dict[str, Any]]] = None,
                 frontend: Optional[Dict[str, Any]] = None,
                 contracts: Optional[Dict[str, Any]] = None,
                 key: str = 'configs',
                 schema: Optional[str] = 'bsv-app',
                 **extra) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if schema is not None:
            data['schema'] = schema
        data['schemaVersion'] = '1.0'
        if frontend is not None:
            data['frontend'] = frontend
        if contracts is not None:
            data['contracts'] = contracts
        data[key] = targets if targets is not None else [self.target()]
        data.update(extra)
        self.write_json(self.manifest_path, data)
        return data

    def read_manifest(self) -> Dict[str, Any]:
        return json.loads(self.manifest_path.read_text())

    def backend(self, scripts: Optional[Dict[str, str]] = None) -> Path:
        backend = self.root / 'backend'
        (backend / 'src').mkdir(parents=True, exist_ok=True)
        (backend / 'src' / 'index.ts').write_text('export const ok = true\n')
        self.write_json(backend / 'package.json', {
            'name': 'backend',
            'scripts': scripts if scripts is not None else {'build': 'tsc'}
        })
        return backend

    def react_frontend(self, directory: str = 'frontend') -> Path:
        frontend = self.root / directory
        (frontend / 'src').mkdir(parents=True, exist_ok=True)
        (frontend / 'src' / 'App.js').write_text('export default () => null\n')
        self.write_json(frontend / 'package.json', {
            'name': 'frontend',
            'scripts': {'build': 'react-scripts build'}
        })
        return frontend

    def html_frontend(self, directory: str = 'frontend') -> Path:
        frontend = self.root / directory
        (frontend / 'css').mkdir(parents=True, exist_ok=True)
        (frontend / 'index.html').write_text('<html>hello</html>\n')
        (frontend / 'css' / 'style.css').write_text('body {}\n')
        return frontend

    def root_package(self) -> None:
        self.write_json(self.root / 'package.json', {'name': 'app', 'scripts': {}})
        self.write_json(self.root / 'package-lock.json', {'lockfileVersion': 3})

    def staging_dirs(self) -> List[Path]:
        return sorted(self.root.glob('cars_tmp_build_*'))

    def artifacts(self) -> List[Path]:
        return sorted(self.root.glob('cars_artifact_*.tgz'))

    @staticmethod
    def write_json(path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + '\n')


@pytest.fixture
def project_root(tmp_path) -> Path:
    root = tmp_path / 'app'
    root.mkdir()
    return root.resolve()


@pytest.fixture
def project(project_root) -> ProjectFactory:
    return ProjectFactory(project_root)


@pytest.fixture
def resolver(project_root) -> PathResolver:
    return PathResolver(project_root)


@pytest.fixture
def step_runner(project_root) -> FakeStepRunner:
    return FakeStepRunner(project_root)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's configuration and environment out of tests"""
    for name in ('CARS_CONFIG', 'CARS_IDENTITY_KEY', 'CARS_AUTH_TOKEN',
                 'CARS_PACKAGE_MANAGER', 'CARS_LOG_LEVEL', 'CARS_PROJECT_ROOT'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('CARS_CONFIG', str(tmp_path / 'no-such-config.yaml'))
