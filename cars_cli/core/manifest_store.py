"""Manifest store for the project's deployment-info.json"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..api.exceptions import (
    InvalidSchemaError,
    ManifestInvalidError,
    ManifestMissingError,
)
from ..constants import (
    DEFAULT_SCHEMA_VERSION,
    LEGACY_TARGETS_KEY,
    MANIFEST_SCHEMA,
    TARGETS_KEY,
)
from ..models.manifest import ProjectManifest
from .path_resolver import PathResolver
from .validation_engine import ValidationEngine

logger = logging.getLogger(__name__)


class ManifestStore:
    """Load, validate and persist the project manifest

    There is at most one manifest per project root and it is read fresh
    by every command. Concurrent edits are not guarded against.
    """

    def __init__(self, path_resolver: PathResolver,
                 validation_engine: Optional[ValidationEngine] = None):
        """Initialize manifest store

        Args:
            path_resolver: Resolver for the project root
            validation_engine: Engine validating the manifest shape
        """
        self.path_resolver = path_resolver
        self.validation_engine = validation_engine or ValidationEngine()

    @property
    def path(self) -> Path:
        return self.path_resolver.manifest_path

    def exists(self) -> bool:
        """Check whether the manifest file exists"""
        return self.path.is_file()

    def load(self) -> ProjectManifest:
        """Load and validate the manifest

        Note:
            This may write to disk. When the legacy ``deployments`` key is
            present and ``configs`` is not, the key is renamed and the file
            is rewritten before validation. Loading an already migrated
            manifest leaves the file untouched.

        Returns:
            Parsed manifest

        Raises:
            ManifestMissingError: If the manifest file does not exist
            ManifestInvalidError: If it is not valid JSON or has the wrong shape
            InvalidSchemaError: If the schema sentinel is not ``bsv-app``
        """
        data = self.load_raw()

        if self._migrate(data):
            self._write(data)
            logger.info(f"Migrated '{LEGACY_TARGETS_KEY}' to '{TARGETS_KEY}' in {self.path.name}")

        if data.get('schema') != MANIFEST_SCHEMA:
            raise InvalidSchemaError(data.get('schema'), MANIFEST_SCHEMA)

        result = self.validation_engine.validate_manifest(data)
        if not result.is_valid:
            raise ManifestInvalidError(
                f"Invalid {self.path.name}: " + "; ".join(result.errors)
            )
        for warning in result.warnings:
            logger.warning(warning)

        return ProjectManifest.from_dict(data)

    def load_raw(self) -> Dict[str, Any]:
        """Read the manifest document without migration or validation

        Raises:
            ManifestMissingError: If the manifest file does not exist
            ManifestInvalidError: If the content is not a JSON object
        """
        if not self.exists():
            raise ManifestMissingError(self.path.name)

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestInvalidError(f"{self.path.name} is not valid JSON: {e}")
        except UnicodeDecodeError as e:
            raise ManifestInvalidError(f"{self.path.name} is not valid UTF-8: {e}")

        if not isinstance(data, dict):
            raise ManifestInvalidError(f"{self.path.name} must contain a JSON object")

        return data

    def save(self, manifest: ProjectManifest) -> Path:
        """Overwrite the manifest file

        Args:
            manifest: Manifest to persist

        Returns:
            Path to the manifest file
        """
        self._write(manifest.to_dict())
        return self.path

    def create_default(self) -> ProjectManifest:
        """Write a minimal manifest with no targets"""
        manifest = ProjectManifest(
            schema=MANIFEST_SCHEMA,
            schema_version=DEFAULT_SCHEMA_VERSION
        )
        self.save(manifest)
        return manifest

    def _migrate(self, data: Dict[str, Any]) -> bool:
        """Rename the legacy targets key in place

        Returns:
            True if the document changed
        """
        if LEGACY_TARGETS_KEY not in data:
            return False

        if TARGETS_KEY in data:
            logger.warning(
                f"{self.path.name} has both '{TARGETS_KEY}' and '{LEGACY_TARGETS_KEY}'; "
                f"ignoring '{LEGACY_TARGETS_KEY}'"
            )
            return False

        data[TARGETS_KEY] = data.pop(LEGACY_TARGETS_KEY)
        return True

    def _write(self, data: Dict[str, Any]) -> None:
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write('\n')
