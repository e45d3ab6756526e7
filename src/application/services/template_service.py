"""Notification template use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from src.application.services.base import ApplicationService
from src.application.services.results import OperationResult
from src.domain.entities.template import TemplateEntity, TemplateVersion
from src.domain.enums import TemplateStatus, TemplateType
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException,
                                   ValidationException)
from src.domain.value_objects.messaging import TemplateName

if TYPE_CHECKING:
    from src.application.events.event_bus import EventBus
    from src.domain.repositories import TemplateRepositoryPort

logger = logging.getLogger(__name__)

# Status operations exposed as POST /templates/{id}/<action>
STATUS_ACTIONS = ("activate", "deactivate", "archive")


class TemplateService(ApplicationService):
    def __init__(self, template_repo: TemplateRepositoryPort, event_bus: EventBus | None = None) -> None:
        super().__init__(event_bus)
        self.template_repo = template_repo

    async def create(
        self,
        tenant_id: str,
        name: str,
        template_type: str,
        content: str,
        category: str,
        subject: str | None = None,
        variables: list[str] | None = None,
        language: str = "en",
        tags: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
        created_by: str | None = None,
    ) -> OperationResult[TemplateEntity]:
        template = TemplateEntity.create(
            tenant_id=tenant_id,
            name=name,
            template_type=template_type,
            content=content,
            category=category,
            created_by=self.actor(created_by),
            subject=subject,
            variables=variables,
            language=language,
            tags=tags,
            metadata=metadata,
        )
        await self._ensure_name_free(tenant_id, template.name.value)

        await self._save_and_publish(self.template_repo, template)
        logger.info(f"Created template {template.id} ({template.name.value}) for tenant {tenant_id}")
        return OperationResult.ok(template, "Template created successfully")

    async def get(self, template_id: str) -> OperationResult[TemplateEntity]:
        return OperationResult.ok(await self._load(template_id))

    async def list_templates(
        self, tenant_id: str, status: str | None = None, template_type: str | None = None
    ) -> OperationResult[list[TemplateEntity]]:
        templates = await self.template_repo.list_templates(
            tenant_id,
            status=_parse(TemplateStatus, status, "status"),
            template_type=_parse(TemplateType, template_type, "type"),
        )
        return OperationResult.ok(templates)

    async def update_content(
        self,
        template_id: str,
        content: str,
        variables: list[str] | None = None,
        subject: str | None = None,
        updated_by: str | None = None,
    ) -> OperationResult[TemplateEntity]:
        template = await self._load(template_id)
        changes = template.update_content(
            content, variables=variables, subject=subject, updated_by=self.actor(updated_by)
        )
        if not changes:
            return OperationResult.ok(template, "No changes applied")
        await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(template, f"Template version {template.template_version} created")

    async def update_details(
        self,
        template_id: str,
        name: str | None = None,
        category: str | None = None,
        language: str | None = None,
        tags: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
        updated_by: str | None = None,
    ) -> OperationResult[TemplateEntity]:
        template = await self._load(template_id)
        if name is not None:
            await self._ensure_name_free(template.tenant_id, TemplateName(name).value, template.id)

        changes = template.update_details(
            updated_by=self.actor(updated_by),
            name=name,
            category=category,
            language=language,
            tags=tags,
            metadata=metadata,
        )
        if changes:
            await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(template, "Template updated" if changes else "No changes applied")

    async def get_version(self, template_id: str, version: int) -> OperationResult[TemplateVersion]:
        template = await self._load(template_id)
        snapshot = template.get_version(version)
        if snapshot is None:
            raise ResourceNotFoundException("Template version", str(version))
        return OperationResult.ok(snapshot)

    async def revert(
        self, template_id: str, version: int, updated_by: str | None = None
    ) -> OperationResult[TemplateEntity]:
        template = await self._load(template_id)
        template.revert_to_version(version, updated_by=self.actor(updated_by))
        await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(template, f"Template reverted to version {version}")

    async def submit_for_review(
        self, template_id: str, updated_by: str | None = None
    ) -> OperationResult[TemplateEntity]:
        template = await self._load(template_id)
        template.submit_for_review(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(template, "Template submitted for review")

    async def approve(
        self, template_id: str, comments: str | None = None, reviewer_id: str | None = None
    ) -> OperationResult[TemplateEntity]:
        template = await self._load(template_id)
        template.approve(self.actor(reviewer_id), comments)
        await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(template, "Template approved")

    async def reject(
        self, template_id: str, comments: str, reviewer_id: str | None = None
    ) -> OperationResult[TemplateEntity]:
        template = await self._load(template_id)
        template.reject(self.actor(reviewer_id), comments)
        await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(template, "Template rejected")

    async def change_status(
        self, template_id: str, action: str, updated_by: str | None = None
    ) -> OperationResult[TemplateEntity]:
        """Apply one of STATUS_ACTIONS"""
        template = await self._load(template_id)
        getattr(template, action)(updated_by=self.actor(updated_by))
        await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(template, f"Template status is {template.status.value}")

    async def render(self, template_id: str, data: dict[str, Any]) -> OperationResult[dict[str, Any]]:
        """Render an active template and count the use"""
        template = await self._load(template_id)
        template.increment_usage()
        rendered = {
            "subject": template.subject,
            "content": template.render(data),
            "template_version": template.template_version,
        }
        await self._save_and_publish(self.template_repo, template)
        return OperationResult.ok(rendered)

    async def delete(self, template_id: str, deleted_by: str | None = None) -> OperationResult[None]:
        template = await self._load(template_id)
        template.delete(deleted_by=self.actor(deleted_by))
        await self.template_repo.delete(template_id)
        await self._publish_after_commit(self.template_repo, template.collect_domain_events())
        logger.info(f"Template {template_id} deleted")
        return OperationResult.ok(None, "Template deleted")

    async def _ensure_name_free(self, tenant_id: str, name: str, template_id: str | None = None) -> None:
        existing = await self.template_repo.find_by_name(tenant_id, name)
        if existing is not None and existing.id != template_id:
            raise DuplicateResourceException("Template", "name", name)

    async def _load(self, template_id: str) -> TemplateEntity:
        template = await self.template_repo.find_by_id(template_id)
        if template is None:
            raise ResourceNotFoundException("Template", template_id)
        return template


def _parse(enum_type: Any, value: str | None, field_name: str) -> Any:
    if value is None:
        return None
    try:
        return enum_type(value)
    except ValueError as e:
        raise ValidationException(
            f"{field_name} must be one of {enum_type.values()}", field=field_name
        ) from e
