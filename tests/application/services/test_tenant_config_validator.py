"""Tests for tenant configuration validation"""

import pytest

from src.application.services.tenant_config_validator import (
    ensure_valid_tenant_config, validate_tenant_config)
from src.domain.exceptions import ValidationException


def test_valid_config_with_unknown_keys():
    """Test known sections validate and unknown keys are allowed"""
    config = {
        "theme": "dark",
        "language": "en",
        "features": {"sso": True},
        "limits": {"users": 50},
        "custom": {"anything": [1, 2, 3]},
    }

    assert validate_tenant_config(config) == []
    ensure_valid_tenant_config(config)


def test_errors_are_prefixed_with_path():
    """Test each error names the offending location"""
    errors = validate_tenant_config({"theme": "neon", "limits": {"users": -1}})

    assert len(errors) == 2
    assert errors[0].startswith("limits.users:")
    assert errors[1].startswith("theme:")


def test_non_object_config():
    """Test a non-object config is reported at the root"""
    errors = validate_tenant_config(["not", "a", "dict"])

    assert errors and errors[0].startswith("config:")


def test_ensure_raises_validation_exception():
    """Test invalid config raises with the config field"""
    with pytest.raises(ValidationException) as exc_info:
        ensure_valid_tenant_config({"features": {"sso": "yes"}})

    assert exc_info.value.field == "config"
    assert "features.sso" in exc_info.value.message
