# cars_cli/core/validation_engine.py
"""Validation engine for manifest structure"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import jsonschema

from ..constants import LEGACY_TARGETS_KEY, TARGETS_KEY

_STRING_OR_NULL = {"type": ["string", "null"]}

TARGET_SCHEMA = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "provider": {"type": "string"},
        "network": _STRING_OR_NULL,
        "projectID": _STRING_OR_NULL,
        "CARSCloudURL": _STRING_OR_NULL,
        "deploy": {"type": ["array", "null"], "items": {"type": "string"}},
        "frontendHostingMethod": _STRING_OR_NULL,
    },
}

MANIFEST_SCHEMA = {
    "type": "object",
    "properties": {
        "schema": {"type": "string"},
        "schemaVersion": {"type": "string"},
        "frontend": {
            "type": "object",
            "properties": {
                "language": {"type": "string"},
                "sourceDirectory": {"type": "string"},
            },
        },
        "contracts": {
            "type": "object",
            "properties": {
                "language": {"type": "string"},
                "baseDirectory": {"type": "string"},
            },
        },
        TARGETS_KEY: {"type": ["array", "null"], "items": TARGET_SCHEMA},
        LEGACY_TARGETS_KEY: {"type": ["array", "null"]},
    },
}


@dataclass
class ValidationResult:
    """Validation result container"""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add warning message"""
        self.warnings.append(message)


class ValidationEngine:
    """Execute manifest validation operations"""

    def __init__(self):
        self._validator = jsonschema.Draft7Validator(MANIFEST_SCHEMA)

    def validate_manifest(self, data: Any) -> ValidationResult:
        """
        Validate manifest structure against the manifest JSON schema

        Args:
            data: Parsed manifest document

        Returns:
            ValidationResult
        """
        result = ValidationResult()

        for error in sorted(self._validator.iter_errors(data), key=lambda e: list(e.path)):
            location = "/".join(str(p) for p in error.path) or "<root>"
            result.add_error(f"{location}: {error.message}")

        if result.is_valid:
            self._check_duplicate_names(data, result)

        return result

    @staticmethod
    def _check_duplicate_names(data: Dict[str, Any], result: ValidationResult) -> None:
        """Warn about duplicate target names; lookups resolve to the first"""
        seen = set()
        for target in data.get(TARGETS_KEY) or []:
            name = target.get('name')
            if name in seen:
                result.add_warning(
                    f"Duplicate configuration name '{name}': name lookups use the first match"
                )
            seen.add(name)
