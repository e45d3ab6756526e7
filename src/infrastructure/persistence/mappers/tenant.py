"""Tenant mappers."""

from src.domain.entities.tenant import TenantEntity
from src.domain.enums import TenantStatus, TenantType
from src.domain.value_objects.core import TenantCode, TenantDomain, TenantName
from src.infrastructure.persistence.mappers.base import Document, Mapper
from src.infrastructure.persistence.models.tenant import Tenant
from src.shared.utils.datetime import ensure_utc, from_iso, to_iso


class TenantRowMapper(Mapper[Tenant, TenantEntity]):
    def to_domain(self, source: Tenant) -> TenantEntity:
        return TenantEntity(
            id=source.id,
            name=TenantName(source.name),
            code=TenantCode(source.code),
            domain=TenantDomain(source.domain),
            type=TenantType(source.type),
            status=TenantStatus(source.status),
            config=dict(source.config or {}),
            description=source.description,
            created_by=source.created_by,
            updated_by=source.updated_by,
            created_at=ensure_utc(source.created_at),
            updated_at=ensure_utc(source.updated_at),
            revision=source.revision,
        )

    def to_persistence(self, entity: TenantEntity) -> Tenant:
        return Tenant(
            id=entity.id,
            name=entity.name.value,
            code=entity.code.value,
            domain=entity.domain.value,
            type=entity.type.value,
            status=entity.status.value,
            config=dict(entity.config),
            description=entity.description,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            revision=entity.revision,
        )


class TenantDocumentMapper(Mapper[Document, TenantEntity]):
    def to_domain(self, source: Document) -> TenantEntity:
        return TenantEntity(
            id=source["id"],
            name=TenantName(source["name"]),
            code=TenantCode(source["code"]),
            domain=TenantDomain(source["domain"]),
            type=TenantType(source["type"]),
            status=TenantStatus(source["status"]),
            config=dict(source.get("config") or {}),
            description=source.get("description"),
            created_by=source.get("created_by", "system"),
            updated_by=source.get("updated_by"),
            created_at=from_iso(source["created_at"]),
            updated_at=from_iso(source["updated_at"]),
            revision=source.get("revision", 1),
        )

    def to_persistence(self, entity: TenantEntity) -> Document:
        return {
            "id": entity.id,
            "name": entity.name.value,
            "code": entity.code.value,
            "domain": entity.domain.value,
            "type": entity.type.value,
            "status": entity.status.value,
            "config": dict(entity.config),
            "description": entity.description,
            "created_by": entity.created_by,
            "updated_by": entity.updated_by,
            "created_at": to_iso(entity.created_at),
            "updated_at": to_iso(entity.updated_at),
            "revision": entity.revision,
        }


def tenant_to_dto(entity: TenantEntity) -> Document:
    limits = entity.limits
    return {
        **TenantDocumentMapper().to_persistence(entity),
        "subdomain": entity.domain.subdomain,
        "limits": {
            "max_users": limits.max_users,
            "max_organizations": limits.max_organizations,
            "max_storage_gb": limits.max_storage_gb,
        },
    }
