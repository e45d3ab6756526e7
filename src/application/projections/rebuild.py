"""
Rebuild read models from the write side.

Projections only see events published while the process runs. On startup
the read models are recomputed from the repositories so an empty
in-memory store, or a Redis store that missed events, matches the data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from src.application.projections.notification_projection import (
    NOTIFICATION_STATS, empty_stats)
from src.application.projections.tenant_projection import TENANT_SUMMARIES
from src.application.projections.user_projection import USER_READ_MODELS

if TYPE_CHECKING:
    from src.application.interfaces.services import IReadModelStore
    from src.domain.entities import TenantEntity, UserEntity
    from src.domain.entities.notification import NotificationEntity
    from src.domain.repositories import (Repository, TenantRepositoryPort,
                                         UserRepositoryPort)

logger = logging.getLogger(__name__)


def tenant_summary(tenant: TenantEntity) -> dict[str, Any]:
    return {
        "id": tenant.id,
        "name": tenant.name.value,
        "code": tenant.code.value,
        "domain": tenant.domain.value,
        "type": tenant.type.value,
        "status": tenant.status.value,
        "config_keys": sorted(tenant.config),
        "last_event_at": tenant.updated_at.isoformat(),
    }


def user_read_model(user: UserEntity) -> dict[str, Any]:
    return {
        "id": user.id,
        "tenant_id": user.tenant_id,
        "organization_id": user.scope.organization_id,
        "department_id": user.scope.department_id,
        "username": user.username.value,
        "email": user.email.value,
        "display_name": user.display_name,
        "status": user.status.value,
        "created_at": user.created_at.isoformat(),
        "updated_at": user.updated_at.isoformat(),
    }


def notification_stats(notifications: Iterable[NotificationEntity]) -> dict[str, dict[str, Any]]:
    """Per-tenant counters, retries being the retries already spent"""
    stats: dict[str, dict[str, Any]] = {}
    for notification in notifications:
        counters = stats.setdefault(notification.tenant_id, empty_stats(notification.tenant_id))
        counters["total"] += 1
        counters[notification.status.value] += 1
        counters["retries"] += notification.retry_count
    return stats


class ReadModelRebuilder:
    """Recomputes every read-model collection from its repositories"""

    def __init__(
        self,
        store: IReadModelStore,
        tenant_repo: TenantRepositoryPort,
        user_repo: UserRepositoryPort,
        notification_repos: Iterable[Repository],
    ):
        self.store = store
        self.tenant_repo = tenant_repo
        self.user_repo = user_repo
        self.notification_repos = list(notification_repos)

    async def rebuild(self) -> dict[str, int]:
        """Replace every read model; returns the document count per collection"""
        tenants = {t.id: tenant_summary(t) for t in await self.tenant_repo.find_all()}
        users = {u.id: user_read_model(u) for u in await self.user_repo.find_all()}
        notifications: list[NotificationEntity] = []
        for repository in self.notification_repos:
            notifications.extend(await repository.find_all())
        stats = notification_stats(notifications)

        counts = {
            TENANT_SUMMARIES: await self._replace(TENANT_SUMMARIES, tenants, "id"),
            USER_READ_MODELS: await self._replace(USER_READ_MODELS, users, "id"),
            NOTIFICATION_STATS: await self._replace(NOTIFICATION_STATS, stats, "tenant_id"),
        }
        logger.info(f"Rebuilt read models: {counts}")
        return counts

    async def _replace(self, collection: str, documents: dict[str, dict], key_field: str) -> int:
        for existing in await self.store.find(collection):
            if existing.get(key_field) not in documents:
                await self.store.delete(collection, existing[key_field])
        for key, document in documents.items():
            await self.store.put(collection, key, document)
        return len(documents)
