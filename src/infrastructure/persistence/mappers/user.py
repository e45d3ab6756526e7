"""User mappers."""

from typing import Any

from src.domain.entities.user import UserEntity
from src.domain.enums import UserStatus
from src.domain.value_objects.core import EmailAddress, Scope, Username
from src.infrastructure.persistence.mappers.base import Document, Mapper
from src.infrastructure.persistence.models.user import User
from src.shared.utils.datetime import ensure_utc, from_iso, to_iso


def _user_from_fields(data: dict[str, Any], created_at, updated_at) -> UserEntity:
    return UserEntity(
        id=data["id"],
        scope=Scope(
            tenant_id=data["tenant_id"],
            organization_id=data.get("organization_id"),
            department_id=data.get("department_id"),
        ),
        username=Username(data["username"]),
        email=EmailAddress(data["email"]),
        display_name=data.get("display_name"),
        status=UserStatus(data["status"]),
        metadata=dict(data.get("metadata") or {}),
        created_by=data.get("created_by", "system"),
        updated_by=data.get("updated_by"),
        created_at=created_at,
        updated_at=updated_at,
        revision=data.get("revision", 1),
    )


def _user_fields(entity: UserEntity) -> dict[str, Any]:
    return {
        "id": entity.id,
        "tenant_id": entity.scope.tenant_id,
        "organization_id": entity.scope.organization_id,
        "department_id": entity.scope.department_id,
        "username": entity.username.value,
        "email": entity.email.value,
        "display_name": entity.display_name,
        "status": entity.status.value,
        "metadata": dict(entity.metadata),
        "created_by": entity.created_by,
        "updated_by": entity.updated_by,
        "revision": entity.revision,
    }


class UserRowMapper(Mapper[User, UserEntity]):
    def to_domain(self, source: User) -> UserEntity:
        data = {
            "id": source.id,
            "tenant_id": source.tenant_id,
            "organization_id": source.organization_id,
            "department_id": source.department_id,
            "username": source.username,
            "email": source.email,
            "display_name": source.display_name,
            "status": source.status,
            "metadata": source.metadata_,
            "created_by": source.created_by,
            "updated_by": source.updated_by,
            "revision": source.revision,
        }
        return _user_from_fields(data, ensure_utc(source.created_at), ensure_utc(source.updated_at))

    def to_persistence(self, entity: UserEntity) -> User:
        fields = _user_fields(entity)
        fields["metadata_"] = fields.pop("metadata")
        return User(**fields, created_at=entity.created_at, updated_at=entity.updated_at)


class UserDocumentMapper(Mapper[Document, UserEntity]):
    def to_domain(self, source: Document) -> UserEntity:
        return _user_from_fields(source, from_iso(source["created_at"]), from_iso(source["updated_at"]))

    def to_persistence(self, entity: UserEntity) -> Document:
        return {
            **_user_fields(entity),
            "created_at": to_iso(entity.created_at),
            "updated_at": to_iso(entity.updated_at),
        }


def user_to_dto(entity: UserEntity) -> Document:
    return UserDocumentMapper().to_persistence(entity)
