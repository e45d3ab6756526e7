"""Template mappers; the version history is stored as a list of plain dicts."""

from typing import Any

from src.domain.entities.template import TemplateEntity, TemplateVersion
from src.domain.enums import (TemplateReviewStatus, TemplateStatus,
                              TemplateType)
from src.domain.value_objects.messaging import TemplateName
from src.infrastructure.persistence.mappers.base import Document, Mapper
from src.infrastructure.persistence.models.template import Template
from src.shared.utils.datetime import ensure_utc, from_iso, to_iso


def _history_to_list(history: list[TemplateVersion]) -> list[dict[str, Any]]:
    return [version.to_dict() for version in history]


def _history_from_list(items: list[dict[str, Any]] | None) -> list[TemplateVersion]:
    return [TemplateVersion.from_dict(item) for item in items or []]


class TemplateRowMapper(Mapper[Template, TemplateEntity]):
    def to_domain(self, source: Template) -> TemplateEntity:
        return TemplateEntity(
            id=source.id,
            tenant_id=source.tenant_id,
            name=TemplateName(source.name),
            type=TemplateType(source.type),
            content=source.content,
            category=source.category,
            subject=source.subject,
            variables=list(source.variables or []),
            language=source.language,
            tags=list(source.tags or []),
            metadata=dict(source.metadata_ or {}),
            status=TemplateStatus(source.status),
            review_status=TemplateReviewStatus(source.review_status),
            reviewer_id=source.reviewer_id,
            reviewed_at=ensure_utc(source.reviewed_at),
            review_comments=source.review_comments,
            template_version=source.template_version,
            version_history=_history_from_list(source.version_history),
            usage_count=source.usage_count,
            last_used_at=ensure_utc(source.last_used_at),
            created_by=source.created_by,
            updated_by=source.updated_by,
            created_at=ensure_utc(source.created_at),
            updated_at=ensure_utc(source.updated_at),
            revision=source.revision,
        )

    def to_persistence(self, entity: TemplateEntity) -> Template:
        return Template(
            id=entity.id,
            tenant_id=entity.tenant_id,
            name=entity.name.value,
            type=entity.type.value,
            content=entity.content,
            category=entity.category,
            subject=entity.subject,
            variables=list(entity.variables),
            language=entity.language,
            tags=list(entity.tags),
            metadata_=dict(entity.metadata),
            status=entity.status.value,
            review_status=entity.review_status.value,
            reviewer_id=entity.reviewer_id,
            reviewed_at=entity.reviewed_at,
            review_comments=entity.review_comments,
            template_version=entity.template_version,
            version_history=_history_to_list(entity.version_history),
            usage_count=entity.usage_count,
            last_used_at=entity.last_used_at,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            revision=entity.revision,
        )


class TemplateDocumentMapper(Mapper[Document, TemplateEntity]):
    def to_domain(self, source: Document) -> TemplateEntity:
        return TemplateEntity(
            id=source["id"],
            tenant_id=source["tenant_id"],
            name=TemplateName(source["name"]),
            type=TemplateType(source["type"]),
            content=source["content"],
            category=source["category"],
            subject=source.get("subject"),
            variables=list(source.get("variables") or []),
            language=source.get("language", "en"),
            tags=list(source.get("tags") or []),
            metadata=dict(source.get("metadata") or {}),
            status=TemplateStatus(source["status"]),
            review_status=TemplateReviewStatus(source["review_status"]),
            reviewer_id=source.get("reviewer_id"),
            reviewed_at=from_iso(source.get("reviewed_at")),
            review_comments=source.get("review_comments"),
            template_version=source.get("template_version", 1),
            version_history=_history_from_list(source.get("version_history")),
            usage_count=source.get("usage_count", 0),
            last_used_at=from_iso(source.get("last_used_at")),
            created_by=source.get("created_by", "system"),
            updated_by=source.get("updated_by"),
            created_at=from_iso(source["created_at"]),
            updated_at=from_iso(source["updated_at"]),
            revision=source.get("revision", 1),
        )

    def to_persistence(self, entity: TemplateEntity) -> Document:
        return {
            "id": entity.id,
            "tenant_id": entity.tenant_id,
            "name": entity.name.value,
            "type": entity.type.value,
            "content": entity.content,
            "category": entity.category,
            "subject": entity.subject,
            "variables": list(entity.variables),
            "language": entity.language,
            "tags": list(entity.tags),
            "metadata": dict(entity.metadata),
            "status": entity.status.value,
            "review_status": entity.review_status.value,
            "reviewer_id": entity.reviewer_id,
            "reviewed_at": to_iso(entity.reviewed_at),
            "review_comments": entity.review_comments,
            "template_version": entity.template_version,
            "version_history": _history_to_list(entity.version_history),
            "usage_count": entity.usage_count,
            "last_used_at": to_iso(entity.last_used_at),
            "created_by": entity.created_by,
            "updated_by": entity.updated_by,
            "created_at": to_iso(entity.created_at),
            "updated_at": to_iso(entity.updated_at),
            "revision": entity.revision,
        }


def template_to_dto(entity: TemplateEntity) -> Document:
    document = TemplateDocumentMapper().to_persistence(entity)
    document["is_valid"] = entity.validate_content()
    document["is_latest_version"] = True
    return document
