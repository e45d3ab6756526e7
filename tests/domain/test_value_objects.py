"""Tests for domain value objects"""

import pytest

from src.domain.exceptions import ValidationException
from src.domain.value_objects import (DeviceToken, EmailAddress, EmailSubject,
                                      EntityCode, EntityId, Scope, TenantCode,
                                      TenantDomain, TenantName, Username)


class TestTenantName:
    def test_trims_and_accepts_cjk(self):
        """Test names are trimmed and may contain CJK ideographs"""
        assert TenantName("  Acme Corp ").value == "Acme Corp"
        assert TenantName("测试 租户").value == "测试 租户"

    @pytest.mark.parametrize(
        "value", ["", "   ", "A", "Acme  Corp", "Acme!", "x" * 101, "Acme\tCorp", "Acme\nCorp"]
    )
    def test_rejects_invalid_names(self, value):
        """Test empty, short, long, doubled-space, control and symbol names are rejected"""
        with pytest.raises(ValidationException) as exc_info:
            TenantName(value)
        assert exc_info.value.field == "name"


class TestTenantCode:
    def test_normalizes_to_lowercase(self):
        """Test codes are lowercased"""
        assert TenantCode("ACME-Corp").value == "acme-corp"

    @pytest.mark.parametrize("value", ["ab", "a" * 31, "acme--corp", "-acme", "acme_corp"])
    def test_rejects_invalid_codes(self, value):
        """Test length and hyphen placement rules"""
        with pytest.raises(ValidationException):
            TenantCode(value)


class TestTenantDomain:
    def test_subdomain_is_first_label_of_three_or_more(self):
        """Test the subdomain is only derived when a third label exists"""
        assert TenantDomain("App.Acme.com").value == "app.acme.com"
        assert TenantDomain("app.acme.com").subdomain == "app"
        assert TenantDomain("acme.com").subdomain is None

    @pytest.mark.parametrize("value", ["acme", "acme.c", "ac--me.com", "-acme.com", "a b.com"])
    def test_rejects_invalid_domains(self, value):
        """Test malformed hostnames are rejected"""
        with pytest.raises(ValidationException):
            TenantDomain(value)


def test_email_address_is_lowercased():
    """Test addresses are normalized and expose their domain"""
    email = EmailAddress(" Jane.Doe@Example.COM ")

    assert email.value == "jane.doe@example.com"
    assert email.domain == "example.com"


@pytest.mark.parametrize("value", ["", "no-at-sign", "a@b", "a@@b.com"])
def test_email_address_rejects_malformed(value):
    """Test malformed addresses are rejected"""
    with pytest.raises(ValidationException):
        EmailAddress(value)


def test_email_subject_collapses_whitespace():
    """Test whitespace runs collapse to single spaces"""
    assert EmailSubject("  Your   invoice  is ready ").value == "Your invoice is ready"


@pytest.mark.parametrize("value", ["", "Hello <b>", "Tom & Jerry", "Line\nbreak", "x" * 999])
def test_email_subject_rejects_forbidden_content(value):
    """Test markup characters, control characters and overlong subjects"""
    with pytest.raises(ValidationException) as exc_info:
        EmailSubject(value)
    assert exc_info.value.field == "subject"


def test_device_token_length_bounds():
    """Test tokens must be 64-152 characters"""
    assert DeviceToken("a" * 64).value == "a" * 64
    assert DeviceToken("fcm:" + "b" * 148).value.startswith("fcm:")

    for value in ("a" * 63, "a" * 153, "a" * 63 + "!"):
        with pytest.raises(ValidationException):
            DeviceToken(value)


def test_entity_id_parse_reports_field():
    """Test invalid UUIDs name the offending field"""
    assert EntityId.parse("6F1C2D3E-4A5B-4C6D-8E7F-901234567890", "tenant_id").value == (
        "6f1c2d3e-4a5b-4c6d-8e7f-901234567890"
    )

    with pytest.raises(ValidationException) as exc_info:
        EntityId.parse("not-a-uuid", "template_id")
    assert exc_info.value.field == "template_id"


def test_entity_code_and_username_rules():
    """Test code and username character sets"""
    assert EntityCode("ENG_core-1").value == "ENG_core-1"
    assert Username("jane.doe").value == "jane.doe"

    with pytest.raises(ValidationException):
        EntityCode("has space")
    with pytest.raises(ValidationException):
        Username("jd")


class TestScope:
    def test_department_requires_organization(self):
        """Test a department scope without an organization is rejected"""
        with pytest.raises(ValidationException):
            Scope(tenant_id="t1", department_id="d1")

    def test_contains(self):
        """Test nested scopes are contained by their parents"""
        tenant = Scope(tenant_id="t1")
        organization = Scope(tenant_id="t1", organization_id="o1")
        department = Scope(tenant_id="t1", organization_id="o1", department_id="d1")

        assert tenant.contains(department)
        assert organization.contains(department)
        assert not department.contains(organization)
        assert not tenant.contains(Scope(tenant_id="t2"))
