"""Tests for OrganizationService and DepartmentService"""

from unittest.mock import AsyncMock

import pytest

from src.application.events.event_bus import EventBus
from src.application.services.department_service import DepartmentService
from src.application.services.organization_service import OrganizationService
from src.domain.entities import TenantEntity
from src.domain.enums import LifecycleStatus
from src.domain.events import DepartmentMoved
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException, ValidationException)
from tests.fakes import (InMemoryDepartmentRepository,
                         InMemoryOrganizationRepository,
                         InMemoryTenantRepository)


@pytest.fixture
def tenant():
    return TenantEntity.create("Acme Corp", "acme", "acme.example.com", "enterprise")


@pytest.fixture
def tenant_repo(tenant):
    return InMemoryTenantRepository([tenant])


@pytest.fixture
def organization_repo():
    return InMemoryOrganizationRepository()


@pytest.fixture
def department_repo():
    return InMemoryDepartmentRepository()


@pytest.fixture
def event_bus():
    bus = EventBus()
    bus.publish_all = AsyncMock()
    return bus


@pytest.fixture
def organization_service(organization_repo, tenant_repo, event_bus):
    return OrganizationService(organization_repo, tenant_repo, event_bus)


@pytest.fixture
def department_service(department_repo, organization_repo, event_bus):
    return DepartmentService(department_repo, organization_repo, event_bus)


@pytest.fixture
async def organization(organization_service, tenant):
    result = await organization_service.create(
        tenant_id=tenant.id, name="Acme HQ", code="HQ", organization_type="business", created_by="admin-1"
    )
    return result.data


class TestOrganizationService:
    async def test_create_in_unknown_tenant(self, organization_service):
        """Test the tenant must exist"""
        with pytest.raises(ResourceNotFoundException):
            await organization_service.create(
                tenant_id="missing", name="Acme HQ", code="HQ", organization_type="business",
                created_by="admin-1",
            )

    async def test_code_unique_per_tenant(self, organization_service, organization, tenant):
        """Test a second organization with the same code is rejected"""
        with pytest.raises(DuplicateResourceException):
            await organization_service.create(
                tenant_id=tenant.id, name="Other", code="HQ", organization_type="business",
                created_by="admin-1",
            )

    async def test_update_without_changes_skips_save(self, organization_service, organization_repo, organization):
        """Test an update with identical values does not persist"""
        saves = len(organization_repo.saved)

        result = await organization_service.update(organization.id, name="Acme HQ")

        assert result.message == "No changes applied"
        assert len(organization_repo.saved) == saves

    async def test_lifecycle(self, organization_service, organization_repo, organization):
        """Test activate then suspend persists the status"""
        await organization_service.activate(organization.id)
        await organization_service.suspend(organization.id)

        assert organization_repo.entities[organization.id].status == LifecycleStatus.SUSPENDED


class TestDepartmentService:
    async def create_department(self, service, organization, code, parent_id=None):
        result = await service.create(
            tenant_id=organization.tenant_id,
            organization_id=organization.id,
            name=f"Department {code}",
            code=code,
            department_type="technical",
            created_by="admin-1",
            parent_id=parent_id,
        )
        return result.data

    async def test_organization_must_belong_to_tenant(self, department_service, organization):
        """Test an organization from another tenant is treated as missing"""
        with pytest.raises(ResourceNotFoundException):
            await department_service.create(
                tenant_id="another-tenant",
                organization_id=organization.id,
                name="Engineering",
                code="ENG",
                department_type="technical",
                created_by="admin-1",
            )

    async def test_duplicate_code_in_organization(self, department_service, organization):
        """Test department codes are unique per organization"""
        await self.create_department(department_service, organization, "ENG")

        with pytest.raises(DuplicateResourceException):
            await self.create_department(department_service, organization, "ENG")

    async def test_missing_parent(self, department_service, organization):
        """Test a parent id that does not exist raises not found"""
        with pytest.raises(ResourceNotFoundException):
            await self.create_department(department_service, organization, "ENG", parent_id="nope")

    async def test_move_rebases_descendants(self, department_service, department_repo, organization, event_bus):
        """
        GIVEN engineering > platform > storage and a separate operations root
        WHEN platform moves under operations
        THEN platform and storage get new paths and levels
        """
        # GIVEN
        engineering = await self.create_department(department_service, organization, "ENG")
        platform = await self.create_department(department_service, organization, "PLAT", engineering.id)
        storage = await self.create_department(department_service, organization, "STOR", platform.id)
        operations = await self.create_department(department_service, organization, "OPS")
        assert storage.level == 3

        # WHEN
        result = await department_service.move(platform.id, operations.id)

        # THEN
        moved = department_repo.entities[platform.id]
        rebased = department_repo.entities[storage.id]
        assert result.data.parent_id == operations.id
        assert moved.path == f"/{operations.id}/{platform.id}"
        assert moved.level == 2
        assert rebased.path == f"/{operations.id}/{platform.id}/{storage.id}"
        assert rebased.level == 3
        assert department_repo.entities[engineering.id].path == f"/{engineering.id}"

        (events,) = event_bus.publish_all.await_args.args
        assert isinstance(events[0], DepartmentMoved)

    async def test_move_to_root_shifts_levels(self, department_service, department_repo, organization):
        """Test moving to the root raises every descendant one level"""
        engineering = await self.create_department(department_service, organization, "ENG")
        platform = await self.create_department(department_service, organization, "PLAT", engineering.id)
        storage = await self.create_department(department_service, organization, "STOR", platform.id)

        await department_service.move(platform.id, None)

        assert department_repo.entities[platform.id].level == 1
        assert department_repo.entities[storage.id].level == 2
        assert department_repo.entities[storage.id].path == f"/{platform.id}/{storage.id}"

    async def test_move_under_own_descendant(self, department_service, organization):
        """Test cycles are rejected by the service"""
        engineering = await self.create_department(department_service, organization, "ENG")
        platform = await self.create_department(department_service, organization, "PLAT", engineering.id)

        with pytest.raises(ValidationException):
            await department_service.move(engineering.id, platform.id)
