"""
Organization and department mappers.

Row and document mappers share one flat field layout; they differ only in
how timestamps are encoded (datetime columns vs ISO strings).
"""

from typing import Any

from src.domain.entities.department import DepartmentEntity
from src.domain.entities.organization import OrganizationEntity
from src.domain.enums import DepartmentType, LifecycleStatus, OrganizationType
from src.domain.value_objects.core import EntityCode, EntityName, Scope
from src.infrastructure.persistence.mappers.base import Document, Mapper
from src.infrastructure.persistence.models.organization import (Department,
                                                                Organization)
from src.shared.utils.datetime import ensure_utc, from_iso, to_iso

_TIMESTAMPS = ("created_at", "updated_at")
_AUDIT_COLUMNS = ("created_by", "updated_by", "created_at", "updated_at", "revision")

ORGANIZATION_COLUMNS = (
    "id", "tenant_id", "name", "code", "type", "status", "description",
    "parent_organization_id", "manager_id", *_AUDIT_COLUMNS,
)
DEPARTMENT_COLUMNS = (
    "id", "tenant_id", "organization_id", "name", "code", "type", "status", "description",
    "parent_id", "level", "path", "manager_id", *_AUDIT_COLUMNS,
)


def _organization_fields(entity: OrganizationEntity) -> dict[str, Any]:
    return {
        "id": entity.id,
        "tenant_id": entity.tenant_id,
        "name": entity.name.value,
        "code": entity.code.value,
        "type": entity.type.value,
        "status": entity.status.value,
        "description": entity.description,
        "parent_organization_id": entity.parent_organization_id,
        "manager_id": entity.manager_id,
        "metadata": dict(entity.metadata),
        "created_by": entity.created_by,
        "updated_by": entity.updated_by,
        "created_at": entity.created_at,
        "updated_at": entity.updated_at,
        "revision": entity.revision,
    }


def _organization_from_fields(data: dict[str, Any]) -> OrganizationEntity:
    return OrganizationEntity(
        id=data["id"],
        scope=Scope(tenant_id=data["tenant_id"]),
        name=EntityName(data["name"]),
        code=EntityCode(data["code"]),
        type=OrganizationType(data["type"]),
        status=LifecycleStatus(data["status"]),
        description=data.get("description"),
        parent_organization_id=data.get("parent_organization_id"),
        manager_id=data.get("manager_id"),
        metadata=dict(data.get("metadata") or {}),
        created_by=data.get("created_by", "system"),
        updated_by=data.get("updated_by"),
        created_at=data["created_at"],
        updated_at=data["updated_at"],
        revision=data.get("revision", 1),
    )


def _department_fields(entity: DepartmentEntity) -> dict[str, Any]:
    return {
        "id": entity.id,
        "tenant_id": entity.tenant_id,
        "organization_id": entity.organization_id,
        "name": entity.name.value,
        "code": entity.code.value,
        "type": entity.type.value,
        "status": entity.status.value,
        "description": entity.description,
        "parent_id": entity.parent_id,
        "level": entity.level,
        "path": entity.path,
        "manager_id": entity.manager_id,
        "metadata": dict(entity.metadata),
        "created_by": entity.created_by,
        "updated_by": entity.updated_by,
        "created_at": entity.created_at,
        "updated_at": entity.updated_at,
        "revision": entity.revision,
    }


def _department_from_fields(data: dict[str, Any]) -> DepartmentEntity:
    return DepartmentEntity(
        id=data["id"],
        scope=Scope(tenant_id=data["tenant_id"], organization_id=data["organization_id"]),
        name=EntityName(data["name"]),
        code=EntityCode(data["code"]),
        type=DepartmentType(data["type"]),
        status=LifecycleStatus(data["status"]),
        description=data.get("description"),
        parent_id=data.get("parent_id"),
        level=data["level"],
        path=data["path"],
        manager_id=data.get("manager_id"),
        metadata=dict(data.get("metadata") or {}),
        created_by=data.get("created_by", "system"),
        updated_by=data.get("updated_by"),
        created_at=data["created_at"],
        updated_at=data["updated_at"],
        revision=data.get("revision", 1),
    )


def _row_fields(fields: dict[str, Any]) -> dict[str, Any]:
    # "metadata" is reserved on declarative models; the attribute is metadata_
    row = dict(fields)
    row["metadata_"] = row.pop("metadata")
    return row


def _from_row(row: Organization | Department, keys: tuple[str, ...]) -> dict[str, Any]:
    data = {key: getattr(row, key) for key in keys}
    data["metadata"] = row.metadata_
    for key in _TIMESTAMPS:
        data[key] = ensure_utc(data[key])
    return data


def _to_document(fields: dict[str, Any]) -> Document:
    return {**fields, **{key: to_iso(fields[key]) for key in _TIMESTAMPS}}


def _from_document(document: Document) -> dict[str, Any]:
    return {**document, **{key: from_iso(document[key]) for key in _TIMESTAMPS}}


class OrganizationRowMapper(Mapper[Organization, OrganizationEntity]):
    def to_domain(self, source: Organization) -> OrganizationEntity:
        return _organization_from_fields(_from_row(source, ORGANIZATION_COLUMNS))

    def to_persistence(self, entity: OrganizationEntity) -> Organization:
        return Organization(**_row_fields(_organization_fields(entity)))


class OrganizationDocumentMapper(Mapper[Document, OrganizationEntity]):
    def to_domain(self, source: Document) -> OrganizationEntity:
        return _organization_from_fields(_from_document(source))

    def to_persistence(self, entity: OrganizationEntity) -> Document:
        return _to_document(_organization_fields(entity))


class DepartmentRowMapper(Mapper[Department, DepartmentEntity]):
    def to_domain(self, source: Department) -> DepartmentEntity:
        return _department_from_fields(_from_row(source, DEPARTMENT_COLUMNS))

    def to_persistence(self, entity: DepartmentEntity) -> Department:
        return Department(**_row_fields(_department_fields(entity)))


class DepartmentDocumentMapper(Mapper[Document, DepartmentEntity]):
    def to_domain(self, source: Document) -> DepartmentEntity:
        return _department_from_fields(_from_document(source))

    def to_persistence(self, entity: DepartmentEntity) -> Document:
        return _to_document(_department_fields(entity))


def organization_to_dto(entity: OrganizationEntity) -> Document:
    return _to_document(_organization_fields(entity))


def department_to_dto(entity: DepartmentEntity) -> Document:
    return _to_document(_department_fields(entity))
