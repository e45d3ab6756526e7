"""Department use cases, including hierarchy moves."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.application.services.base import ApplicationService
from src.application.services.results import OperationResult
from src.domain.entities.department import DepartmentEntity
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException)

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.repositories import (DepartmentRepositoryPort,
                                         OrganizationRepositoryPort)

logger = logging.getLogger(__name__)


class DepartmentService(ApplicationService):
    def __init__(
        self,
        department_repo: DepartmentRepositoryPort,
        organization_repo: OrganizationRepositoryPort,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(event_bus)
        self.department_repo = department_repo
        self.organization_repo = organization_repo

    async def create(
        self,
        tenant_id: str,
        organization_id: str,
        name: str,
        code: str,
        department_type: str,
        created_by: str | None = None,
        parent_id: str | None = None,
        description: str | None = None,
        manager_id: str | None = None,
    ) -> OperationResult[DepartmentEntity]:
        if organization_id:
            organization = await self.organization_repo.find_by_id(organization_id)
            if organization is None or organization.tenant_id != tenant_id:
                raise ResourceNotFoundException("Organization", organization_id)

        parent = await self._load(parent_id, "Parent department") if parent_id else None
        department = DepartmentEntity.create(
            tenant_id=tenant_id,
            organization_id=organization_id,
            name=name,
            code=code,
            department_type=department_type,
            created_by=self.actor(created_by),
            parent=parent,
            description=description,
            manager_id=manager_id,
        )
        if await self.department_repo.find_by_code(organization_id, department.code.value):
            raise DuplicateResourceException("Department", "code", department.code.value)

        await self._save_and_publish(self.department_repo, department)
        logger.info(
            f"Created department {department.id} at level {department.level} "
            f"in organization {organization_id}"
        )
        return OperationResult.ok(department, "Department created successfully")

    async def get(self, department_id: str) -> OperationResult[DepartmentEntity]:
        return OperationResult.ok(await self._load(department_id))

    async def update(
        self,
        department_id: str,
        name: str | None = None,
        description: str | None = None,
        manager_id: str | None = None,
        updated_by: str | None = None,
    ) -> OperationResult[DepartmentEntity]:
        department = await self._load(department_id)
        changes = department.update_info(
            updated_by=self.actor(updated_by),
            name=name,
            description=description,
            manager_id=manager_id,
        )
        if changes:
            await self._save_and_publish(self.department_repo, department)
        return OperationResult.ok(
            department, "Department updated" if changes else "No changes applied"
        )

    async def move(
        self, department_id: str, parent_id: str | None, updated_by: str | None = None
    ) -> OperationResult[DepartmentEntity]:
        """
        Re-parent a department (None moves it to the root).

        Descendants keep their relative position: their paths are rebased
        onto the new path and their levels shift by the same delta.
        """
        department = await self._load(department_id)
        parent = await self._load(parent_id, "Parent department") if parent_id else None

        old_path, old_level = department.path, department.level
        descendants = await self.department_repo.find_descendants(old_path)
        department.move_to(parent, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.department_repo, department)

        level_delta = department.level - old_level
        for descendant in descendants:
            descendant.rebase(old_path, department.path, level_delta)
            await self.department_repo.save(descendant)

        logger.info(
            f"Moved department {department_id} to {parent_id or 'root'} "
            f"({len(descendants)} descendants rebased)"
        )
        return OperationResult.ok(department, "Department moved")

    async def activate(self, department_id: str, updated_by: str | None = None) -> OperationResult[DepartmentEntity]:
        department = await self._load(department_id)
        department.activate(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.department_repo, department)
        return OperationResult.ok(department, "Department activated")

    async def suspend(self, department_id: str, updated_by: str | None = None) -> OperationResult[DepartmentEntity]:
        department = await self._load(department_id)
        department.suspend(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.department_repo, department)
        return OperationResult.ok(department, "Department suspended")

    async def deactivate(self, department_id: str, updated_by: str | None = None) -> OperationResult[DepartmentEntity]:
        department = await self._load(department_id)
        department.deactivate(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.department_repo, department)
        return OperationResult.ok(department, "Department deactivated")

    async def _load(self, department_id: str, label: str = "Department") -> DepartmentEntity:
        department = await self.department_repo.find_by_id(department_id)
        if department is None:
            raise ResourceNotFoundException(label, department_id)
        return department
