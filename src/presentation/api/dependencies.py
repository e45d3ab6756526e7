from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.events.event_bus import ALL_EVENTS, EventBus
from src.application.interfaces.services import (IEventPublisher,
                                                 IReadModelStore)
from src.application.projections import (ReadModelRebuilder,
                                         register_projections)
from src.application.queries import ReadModelQueries
from src.application.services import (DepartmentService,
                                      EmailNotificationService,
                                      OrganizationService, PlatformService,
                                      PushNotificationService,
                                      SmsNotificationService, TemplateService,
                                      TenantService, UserService,
                                      WebhookNotificationService)
from src.domain.repositories import (
    DepartmentRepositoryPort, EmailNotificationRepositoryPort,
    OrganizationRepositoryPort, PlatformRepositoryPort,
    PushNotificationRepositoryPort, SmsNotificationRepositoryPort,
    TemplateRepositoryPort, TenantRepositoryPort, UserRepositoryPort,
    WebhookNotificationRepositoryPort)
from src.domain.services.notification_policy import NotificationPolicy
from src.infrastructure.cache.redis_cache import CacheService
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.documents import (DepartmentDocumentRepository,
                                          EmailNotificationDocumentRepository,
                                          OrganizationDocumentRepository,
                                          PlatformDocumentRepository,
                                          PushNotificationDocumentRepository,
                                          RedisDocumentStore,
                                          SmsNotificationDocumentRepository,
                                          TemplateDocumentRepository,
                                          TenantDocumentRepository,
                                          UserDocumentRepository,
                                          WebhookNotificationDocumentRepository)
from src.infrastructure.persistence.database import get_db_transactional
from src.infrastructure.persistence.repositories import (
    DepartmentRepository, EmailNotificationRepository, OrganizationRepository,
    PlatformRepository, PushNotificationRepository, SmsNotificationRepository,
    TemplateRepository, TenantRepository, UserRepository,
    WebhookNotificationRepository)
from src.infrastructure.read_models import InMemoryReadModelStore

# Process-wide singletons; everything else is built per request
_cache_service: CacheService | None = None
_event_bus: EventBus | None = None
_read_model_store: IReadModelStore | None = None


def get_cache_service() -> CacheService:
    """
    Cache service dependency (singleton)

    Connected on app startup in main.py; until then it behaves as a
    disabled cache.
    """
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService(get_settings())
    return _cache_service


def set_cache_service(cache_service: CacheService | None) -> None:
    """Set global cache service (called on app startup)"""
    global _cache_service
    _cache_service = cache_service


def init_read_side(
    store: IReadModelStore | None = None,
    publisher: IEventPublisher | None = None,
) -> EventBus:
    """
    Build the event bus with projections wired to the read-model store.

    The optional publisher receives every event after the projections.
    """
    global _event_bus, _read_model_store
    _read_model_store = store if store is not None else InMemoryReadModelStore()
    _event_bus = EventBus()
    register_projections(_event_bus, _read_model_store)
    if publisher is not None:
        _event_bus.subscribe(ALL_EVENTS, publisher.publish_event)
    return _event_bus


def get_event_bus() -> EventBus:
    if _event_bus is None:
        return init_read_side()
    return _event_bus


def get_read_model_store() -> IReadModelStore:
    if _read_model_store is None:
        init_read_side()
    if _read_model_store is None:
        raise RuntimeError("Read model store is not initialized")
    return _read_model_store


SessionDep = Annotated[AsyncSession, Depends(get_db_transactional)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
CacheDep = Annotated[CacheService, Depends(get_cache_service)]
EventBusDep = Annotated[EventBus, Depends(get_event_bus)]


def _uses_documents(settings: Settings) -> bool:
    return settings.persistence_backend == "document"


def get_document_store(settings: SettingsDep, cache: CacheDep) -> RedisDocumentStore:
    return RedisDocumentStore(cache.redis, prefix=settings.document_key_prefix)


DocumentStoreDep = Annotated[RedisDocumentStore, Depends(get_document_store)]


# Repository dependencies. The relational session is lazy: in document mode
# it never acquires a connection.
def get_tenant_repo(
    db: SessionDep, settings: SettingsDep, cache: CacheDep, documents: DocumentStoreDep
) -> TenantRepositoryPort:
    if _uses_documents(settings):
        return TenantDocumentRepository(documents)
    return TenantRepository(db, cache)


def get_organization_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> OrganizationRepositoryPort:
    if _uses_documents(settings):
        return OrganizationDocumentRepository(documents)
    return OrganizationRepository(db)


def get_department_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> DepartmentRepositoryPort:
    if _uses_documents(settings):
        return DepartmentDocumentRepository(documents)
    return DepartmentRepository(db)


def get_user_repo(db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep) -> UserRepositoryPort:
    if _uses_documents(settings):
        return UserDocumentRepository(documents)
    return UserRepository(db)


def get_platform_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> PlatformRepositoryPort:
    if _uses_documents(settings):
        return PlatformDocumentRepository(documents)
    return PlatformRepository(db)


def get_email_notification_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> EmailNotificationRepositoryPort:
    if _uses_documents(settings):
        return EmailNotificationDocumentRepository(documents)
    return EmailNotificationRepository(db)


def get_push_notification_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> PushNotificationRepositoryPort:
    if _uses_documents(settings):
        return PushNotificationDocumentRepository(documents)
    return PushNotificationRepository(db)


def get_sms_notification_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> SmsNotificationRepositoryPort:
    if _uses_documents(settings):
        return SmsNotificationDocumentRepository(documents)
    return SmsNotificationRepository(db)


def get_webhook_notification_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> WebhookNotificationRepositoryPort:
    if _uses_documents(settings):
        return WebhookNotificationDocumentRepository(documents)
    return WebhookNotificationRepository(db)


def get_template_repo(
    db: SessionDep, settings: SettingsDep, documents: DocumentStoreDep
) -> TemplateRepositoryPort:
    if _uses_documents(settings):
        return TemplateDocumentRepository(documents)
    return TemplateRepository(db)


def build_read_model_rebuilder(
    store: IReadModelStore, settings: Settings, db: AsyncSession, documents: RedisDocumentStore
) -> ReadModelRebuilder:
    """Rebuilder over the configured backend's repositories (run on startup)"""
    return ReadModelRebuilder(
        store,
        get_tenant_repo(db, settings, get_cache_service(), documents),
        get_user_repo(db, settings, documents),
        [
            get_email_notification_repo(db, settings, documents),
            get_push_notification_repo(db, settings, documents),
            get_sms_notification_repo(db, settings, documents),
            get_webhook_notification_repo(db, settings, documents),
        ],
    )


# Service dependencies
def get_tenant_service(
    repo: Annotated[TenantRepositoryPort, Depends(get_tenant_repo)], bus: EventBusDep
) -> TenantService:
    return TenantService(repo, bus)


def get_organization_service(
    repo: Annotated[OrganizationRepositoryPort, Depends(get_organization_repo)],
    tenant_repo: Annotated[TenantRepositoryPort, Depends(get_tenant_repo)],
    bus: EventBusDep,
) -> OrganizationService:
    return OrganizationService(repo, tenant_repo, bus)


def get_department_service(
    repo: Annotated[DepartmentRepositoryPort, Depends(get_department_repo)],
    organization_repo: Annotated[OrganizationRepositoryPort, Depends(get_organization_repo)],
    bus: EventBusDep,
) -> DepartmentService:
    return DepartmentService(repo, organization_repo, bus)


def get_user_service(
    repo: Annotated[UserRepositoryPort, Depends(get_user_repo)],
    tenant_repo: Annotated[TenantRepositoryPort, Depends(get_tenant_repo)],
    organization_repo: Annotated[OrganizationRepositoryPort, Depends(get_organization_repo)],
    department_repo: Annotated[DepartmentRepositoryPort, Depends(get_department_repo)],
    bus: EventBusDep,
) -> UserService:
    return UserService(repo, tenant_repo, organization_repo, department_repo, bus)


def get_platform_service(
    repo: Annotated[PlatformRepositoryPort, Depends(get_platform_repo)], bus: EventBusDep
) -> PlatformService:
    return PlatformService(repo, bus)


def get_template_service(
    repo: Annotated[TemplateRepositoryPort, Depends(get_template_repo)], bus: EventBusDep
) -> TemplateService:
    return TemplateService(repo, bus)


def get_notification_policy() -> NotificationPolicy:
    return NotificationPolicy()


PolicyDep = Annotated[NotificationPolicy, Depends(get_notification_policy)]


def get_email_notification_service(
    repo: Annotated[EmailNotificationRepositoryPort, Depends(get_email_notification_repo)],
    bus: EventBusDep,
    policy: PolicyDep,
) -> EmailNotificationService:
    return EmailNotificationService(repo, bus, policy)


def get_push_notification_service(
    repo: Annotated[PushNotificationRepositoryPort, Depends(get_push_notification_repo)],
    bus: EventBusDep,
    policy: PolicyDep,
) -> PushNotificationService:
    return PushNotificationService(repo, bus, policy)


def get_sms_notification_service(
    repo: Annotated[SmsNotificationRepositoryPort, Depends(get_sms_notification_repo)],
    bus: EventBusDep,
    policy: PolicyDep,
) -> SmsNotificationService:
    return SmsNotificationService(repo, bus, policy)


def get_webhook_notification_service(
    repo: Annotated[WebhookNotificationRepositoryPort, Depends(get_webhook_notification_repo)],
    bus: EventBusDep,
    policy: PolicyDep,
) -> WebhookNotificationService:
    return WebhookNotificationService(repo, bus, policy)


def get_read_model_queries(
    store: Annotated[IReadModelStore, Depends(get_read_model_store)],
) -> ReadModelQueries:
    return ReadModelQueries(store)
