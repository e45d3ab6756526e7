"""
Query side: reads served from projection read models.

Queries validate their own parameters on construction so that a bad
request never reaches the store.
"""

from dataclasses import dataclass
from typing import Any

from src.application.interfaces.services import IReadModelStore
from src.application.projections.notification_projection import (
    NOTIFICATION_STATS, empty_stats)
from src.application.projections.tenant_projection import TENANT_SUMMARIES
from src.application.projections.user_projection import USER_READ_MODELS
from src.domain.enums import UserStatus
from src.domain.exceptions import ResourceNotFoundException, ValidationException


@dataclass(frozen=True)
class GetUsersByTenantQuery:
    tenant_id: str
    limit: int = 20
    offset: int = 0
    sort_order: str = "asc"
    status: UserStatus | None = None

    def __post_init__(self):
        if not self.tenant_id:
            raise ValidationException("tenant_id is required", field="tenant_id")
        if not 1 <= self.limit <= 100:
            raise ValidationException("limit must be between 1 and 100", field="limit")
        if self.offset < 0:
            raise ValidationException("offset must not be negative", field="offset")
        if self.sort_order not in ("asc", "desc"):
            raise ValidationException("sort_order must be 'asc' or 'desc'", field="sort_order")


@dataclass(frozen=True)
class UserPage:
    items: list[dict[str, Any]]
    total: int
    limit: int
    offset: int


class ReadModelQueries:
    """Query handlers over the read-model store"""

    def __init__(self, store: IReadModelStore):
        self.store = store

    async def get_users_by_tenant(self, query: GetUsersByTenantQuery) -> UserPage:
        filters: dict[str, Any] = {"tenant_id": query.tenant_id}
        if query.status is not None:
            filters["status"] = query.status.value

        users = await self.store.find(USER_READ_MODELS, filters)
        users.sort(key=lambda u: u["username"].lower(), reverse=query.sort_order == "desc")
        return UserPage(
            items=users[query.offset : query.offset + query.limit],
            total=len(users),
            limit=query.limit,
            offset=query.offset,
        )

    async def get_tenant_summary(self, tenant_id: str) -> dict[str, Any]:
        summary = await self.store.get(TENANT_SUMMARIES, tenant_id)
        if summary is None:
            raise ResourceNotFoundException("Tenant summary", tenant_id)
        return summary

    async def get_notification_stats(self, tenant_id: str) -> dict[str, Any]:
        return await self.store.get(NOTIFICATION_STATS, tenant_id) or empty_stats(tenant_id)
