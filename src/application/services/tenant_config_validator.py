"""
Tenant configuration schema.

Tenant config is free-form JSON, but a few well-known sections have a fixed
shape. Unknown top-level keys are allowed.
"""

from typing import Any

import jsonschema

from src.domain.exceptions import ValidationException

TENANT_CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "theme": {"type": "string", "enum": ["light", "dark", "auto"]},
        "language": {"type": "string", "minLength": 2, "maxLength": 10},
        "timezone": {"type": "string", "minLength": 1},
        "features": {
            "type": "object",
            "additionalProperties": {"type": "boolean"},
        },
        "limits": {
            "type": "object",
            "additionalProperties": {"type": "number", "minimum": 0},
        },
    },
    "additionalProperties": True,
}


def validate_tenant_config(config: dict[str, Any]) -> list[str]:
    """
    Validate a tenant config against the schema without raising.

    Returns a list of validation errors (empty list if valid), each
    prefixed with the JSON path of the offending value.
    """
    validator = jsonschema.Draft7Validator(TENANT_CONFIG_SCHEMA)
    errors = []
    for error in sorted(validator.iter_errors(config), key=lambda e: list(e.path)):
        location = ".".join(str(p) for p in error.path) or "config"
        errors.append(f"{location}: {error.message}")
    return errors


def ensure_valid_tenant_config(config: dict[str, Any]) -> None:
    errors = validate_tenant_config(config)
    if errors:
        raise ValidationException(
            f"Invalid tenant configuration: {'; '.join(errors)}", field="config"
        )
