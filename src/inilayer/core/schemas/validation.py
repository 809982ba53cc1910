"""Schema validation for structured settings.

Schemas are JSON Schema documents stored as YAML under
``inilayer.data/schemas/`` and validated with ``jsonschema`` (Draft 2020-12).
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from inilayer.core.exceptions import SettingsError
from inilayer.core.utils.io import read_yaml
from inilayer.data import get_data_path


class SchemaValidationError(SettingsError):
    """Raised when a payload does not match its schema."""

    def __init__(self, message: str, *, errors: List[str]) -> None:
        super().__init__(message, context={"errors": list(errors)})
        self.errors = list(errors)


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload(payload: Dict[str, Any], schema_name: str) -> None:
    """Validate ``payload`` against a bundled schema.

    Every violation is collected (sorted by location) into a single
    :class:`SchemaValidationError`.
    """
    validator = Draft202012Validator(load_schema(schema_name))

    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: str(e.path)):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)

    if errors:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': " + "; ".join(errors),
            errors=errors,
        )


__all__ = ["SchemaValidationError", "load_schema", "validate_payload"]
