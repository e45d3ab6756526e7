"""Tests for the tenant aggregate"""

import pytest

from src.domain.entities.tenant import TenantEntity
from src.domain.enums import TenantStatus, TenantType
from src.domain.events import (TenantActivated, TenantConfigChanged,
                               TenantCreated, TenantSuspended)
from src.domain.exceptions import (InvalidStatusTransitionException,
                                   StateConflictException, ValidationException)


def make_tenant(**overrides) -> TenantEntity:
    fields = {
        "name": "Acme Corp",
        "code": "acme",
        "domain": "acme.example.com",
        "tenant_type": "organization",
        "created_by": "admin-1",
    }
    fields.update(overrides)
    return TenantEntity.create(**fields)


class TestTenantCreation:
    def test_create_starts_pending_and_records_event(self):
        """
        GIVEN valid tenant input
        WHEN the tenant is created
        THEN it is PENDING and a TenantCreated event is pending
        """
        # GIVEN / WHEN
        tenant = make_tenant(config={"theme": "dark"})

        # THEN
        assert tenant.status == TenantStatus.PENDING
        assert tenant.type == TenantType.ORGANIZATION
        assert tenant.created_by == "admin-1"
        assert tenant.domain.subdomain == "acme"

        events = tenant.collect_domain_events()
        assert len(events) == 1
        assert isinstance(events[0], TenantCreated)
        assert events[0].aggregate_id == tenant.id
        assert events[0].aggregate_type == "Tenant"
        assert tenant.collect_domain_events() == []

    def test_create_rejects_unknown_type(self):
        """
        GIVEN an unknown tenant type
        WHEN the tenant is created
        THEN a ValidationException names the type field
        """
        with pytest.raises(ValidationException) as exc_info:
            make_tenant(tenant_type="galactic")
        assert exc_info.value.field == "type"

    def test_limits_and_features_follow_type(self):
        """Test quotas and feature flags are derived from the tenant type"""
        enterprise = make_tenant(tenant_type="enterprise")
        personal = make_tenant(tenant_type="personal")

        assert enterprise.limits.max_users == 10000
        assert personal.limits.max_organizations == 1
        assert enterprise.has_feature("sso")
        assert not personal.has_feature("api")


class TestTenantLifecycle:
    def test_activate_suspend_resume(self):
        """
        GIVEN a pending tenant
        WHEN it is activated, suspended and resumed
        THEN each step records an event with the previous status
        """
        # GIVEN
        tenant = make_tenant()
        tenant.collect_domain_events()

        # WHEN
        tenant.activate(updated_by="admin-2")
        tenant.suspend(reason="billing")
        tenant.resume()

        # THEN
        assert tenant.status == TenantStatus.ACTIVE
        events = tenant.collect_domain_events()
        assert [e.event_type for e in events] == [
            "TenantActivated",
            "TenantSuspended",
            "TenantResumed",
        ]
        assert isinstance(events[0], TenantActivated)
        assert events[0].previous_status == TenantStatus.PENDING
        assert isinstance(events[1], TenantSuspended)
        assert events[1].reason == "billing"

    def test_activate_only_from_pending(self):
        """
        GIVEN a suspended tenant
        WHEN activate is called
        THEN a StateConflictException is raised (resume is the way back)
        """
        tenant = make_tenant()
        tenant.activate()
        tenant.suspend()

        with pytest.raises(StateConflictException):
            tenant.activate()
        assert tenant.status == TenantStatus.SUSPENDED

    def test_suspend_requires_active(self):
        """Test a pending tenant cannot be suspended"""
        tenant = make_tenant()

        with pytest.raises(StateConflictException) as exc_info:
            tenant.suspend()
        assert exc_info.value.current_status == "pending"

    def test_deleted_is_terminal(self):
        """Test a deleted tenant can neither be deleted again nor resumed"""
        tenant = make_tenant()
        tenant.delete()

        assert tenant.status == TenantStatus.DELETED
        with pytest.raises(InvalidStatusTransitionException):
            tenant.delete()
        with pytest.raises(StateConflictException):
            tenant.resume()


class TestTenantConfig:
    def test_update_config_merges_keys(self):
        """
        GIVEN a tenant with a theme
        WHEN a language is added
        THEN both keys are kept and the event carries old and new config
        """
        tenant = make_tenant(config={"theme": "dark"})
        tenant.collect_domain_events()

        tenant.update_config({"language": "en"}, updated_by="admin-3")

        assert tenant.config == {"theme": "dark", "language": "en"}
        assert tenant.updated_by == "admin-3"
        (event,) = tenant.collect_domain_events()
        assert isinstance(event, TenantConfigChanged)
        assert event.previous_config == {"theme": "dark"}
        assert event.new_config == {"theme": "dark", "language": "en"}

    def test_update_config_rejects_empty_config(self):
        """Test an empty update is a validation error"""
        with pytest.raises(ValidationException):
            make_tenant().update_config({})

    def test_update_config_on_deleted_tenant(self):
        """Test a deleted tenant's configuration is frozen"""
        tenant = make_tenant()
        tenant.delete()

        with pytest.raises(StateConflictException):
            tenant.update_config({"theme": "light"})
