"""Tests for loading, migrating and saving deployment-info.json"""

import json

import pytest

from cars_cli.api.exceptions import (
    InvalidSchemaError,
    ManifestInvalidError,
    ManifestMissingError,
)
from cars_cli.constants import PipelineStage
from cars_cli.core import ManifestStore


def test_load_parses_targets_and_specs(project, resolver):
    project.manifest(
        targets=[project.target('prod'), project.target('other', provider='LARS')],
        frontend={'language': 'React', 'sourceDirectory': 'web'},
        contracts={'language': 'sCrypt', 'baseDirectory': 'backend/src/contracts'}
    )

    manifest = ManifestStore(resolver).load()

    assert [t.name for t in manifest.targets] == ['prod', 'other']
    assert manifest.targets[0].is_cars
    assert not manifest.targets[1].is_cars
    assert manifest.frontend_language == 'react'
    assert manifest.frontend.source_directory == 'web'
    assert manifest.contract_language == 'sCrypt'


def test_missing_manifest(resolver):
    with pytest.raises(ManifestMissingError) as exc_info:
        ManifestStore(resolver).load()
    assert exc_info.value.stage == PipelineStage.MANIFEST
    assert 'deployment-info.json' in exc_info.value.message


def test_unparseable_manifest(project, resolver):
    project.manifest_path.write_text('{"schema": "bsv-app",')
    with pytest.raises(ManifestInvalidError):
        ManifestStore(resolver).load()


def test_manifest_root_must_be_object(project, resolver):
    project.manifest_path.write_text('[1, 2, 3]')
    with pytest.raises(ManifestInvalidError):
        ManifestStore(resolver).load()


@pytest.mark.parametrize('schema', [None, 'bsv-lib', 'BSV-APP'])
def test_schema_sentinel_is_required(project, resolver, schema):
    project.manifest(schema=schema)
    with pytest.raises(InvalidSchemaError) as exc_info:
        ManifestStore(resolver).load()
    assert isinstance(exc_info.value, ManifestInvalidError)


def test_shape_errors_are_reported(project, resolver):
    project.write_json(project.manifest_path, {'schema': 'bsv-app', 'configs': {'name': 'x'}})
    with pytest.raises(ManifestInvalidError) as exc_info:
        ManifestStore(resolver).load()
    assert 'configs' in exc_info.value.message


def test_target_without_name_is_rejected(project, resolver):
    project.manifest(targets=[{'provider': 'CARS'}])
    with pytest.raises(ManifestInvalidError):
        ManifestStore(resolver).load()


def test_legacy_key_is_migrated_once(project, resolver):
    project.manifest(key='deployments')
    store = ManifestStore(resolver)

    manifest = store.load()
    migrated = project.manifest_path.read_text()

    assert [t.name for t in manifest.targets] == ['production']
    data = json.loads(migrated)
    assert 'deployments' not in data
    assert data['configs'][0]['name'] == 'production'

    store.load()
    assert project.manifest_path.read_text() == migrated


def test_migration_happens_before_schema_check(project, resolver):
    project.manifest(key='deployments', schema='something-else')
    with pytest.raises(InvalidSchemaError):
        ManifestStore(resolver).load()
    assert 'configs' in project.read_manifest()


def test_current_key_wins_over_legacy(project, resolver):
    project.manifest(targets=[project.target('current')],
                     deployments=[project.target('legacy')])
    before = project.manifest_path.read_text()

    manifest = ManifestStore(resolver).load()

    assert [t.name for t in manifest.targets] == ['current']
    assert project.manifest_path.read_text() == before


def test_save_preserves_unknown_keys(project, resolver):
    project.manifest(
        targets=[project.target('prod', authentication={'policy': 'x'})],
        topicManagers={'tm_meter': './backend/src/topic-managers/MeterTopicManager.ts'},
        frontend={'language': 'html'}
    )
    store = ManifestStore(resolver)

    store.save(store.load())
    data = project.read_manifest()

    assert data['topicManagers'] == {'tm_meter': './backend/src/topic-managers/MeterTopicManager.ts'}
    assert data['configs'][0]['authentication'] == {'policy': 'x'}
    assert data['configs'][0]['projectID'] == 'proj-1'
    assert data['frontend'] == {'language': 'html'}


def test_create_default(project, resolver):
    store = ManifestStore(resolver)
    assert not store.exists()

    store.create_default()

    assert project.read_manifest() == {'schema': 'bsv-app', 'schemaVersion': '1.0', 'configs': []}
    assert store.load().targets == []


def test_duplicate_names_only_warn(project, resolver, caplog):
    project.manifest(targets=[project.target('dup'), project.target('dup', project_id='proj-2')])

    manifest = ManifestStore(resolver).load()

    assert len(manifest.targets) == 2
    assert "Duplicate configuration name 'dup'" in caplog.text


def test_absent_optional_keys_stay_absent_on_save(project, resolver):
    original = {
        'schema': 'bsv-app',
        'frontend': {'language': 'html'},
        'configs': [project.target('prod')],
    }
    project.write_json(project.manifest_path, original)
    store = ManifestStore(resolver)

    manifest = store.load()
    store.save(manifest)

    assert manifest.frontend.directory == 'frontend'
    assert resolver.frontend_dir(manifest) == project.root / 'frontend'
    assert project.read_manifest() == original


def test_null_lists_load_as_empty(project, resolver):
    project.write_json(project.manifest_path, {'schema': 'bsv-app', 'configs': None})
    assert ManifestStore(resolver).load().targets == []

    target = project.target('prod')
    target['deploy'] = None
    project.write_json(project.manifest_path, {'schema': 'bsv-app', 'configs': [target]})

    manifest = ManifestStore(resolver).load()

    assert [t.name for t in manifest.targets] == ['prod']
    assert manifest.targets[0].deploy.to_list() == []
