import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.cache.redis_cache import CacheService
from src.infrastructure.config.settings import get_settings
from src.infrastructure.documents import RedisDocumentStore
from src.infrastructure.messaging.redis_pubsub import RedisEventPublisher
from src.infrastructure.persistence.database import (AsyncSessionLocal,
                                                     create_all, engine,
                                                     get_db)
from src.infrastructure.rate_limit import (FixedWindowRateLimiter,
                                           InMemoryCounterStore,
                                           RedisCounterStore)
from src.infrastructure.read_models import (InMemoryReadModelStore,
                                            RedisReadModelStore)
from src.presentation.api.dependencies import (build_read_model_rebuilder,
                                               get_cache_service,
                                               init_read_side,
                                               set_cache_service)
from src.presentation.api.exception_handlers import \
    register_exception_handlers
from src.presentation.api.v1.routes import (departments, notifications,
                                            organizations, platforms,
                                            templates, tenants, users)
from src.presentation.middleware import (CorrelationIDMiddleware,
                                         RateLimitMiddleware)
from src.shared.telemetry.logging import setup_logging
from src.shared.telemetry.telemetry import TelemetryConfig

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for application initialization and cleanup"""
    setup_logging()

    telemetry: TelemetryConfig | None = None
    if settings.telemetry_enabled:
        try:
            telemetry = TelemetryConfig(
                service_name=settings.app_name,
                service_version=settings.app_version,
                enabled=True,
            )
            telemetry.setup_telemetry(
                exporter_type=settings.telemetry_exporter,
                otlp_endpoint=settings.telemetry_otlp_endpoint,
            )
            telemetry.instrument_fastapi(app)
            telemetry.instrument_sqlalchemy(engine)
            if settings.redis_enabled:
                telemetry.instrument_redis()
            logger.info(f"Distributed tracing initialized: exporter={settings.telemetry_exporter}")
        except Exception as e:
            logger.warning(f"Telemetry initialization failed: {e}. Continuing without tracing.")
            telemetry = None
    else:
        logger.info("Distributed tracing disabled in configuration")

    cache_service = CacheService(settings)
    await cache_service.connect()
    set_cache_service(cache_service)
    redis_client = cache_service.redis if cache_service.is_available() else None

    document_store = RedisDocumentStore(redis_client, settings.document_key_prefix)
    if settings.persistence_backend == "document":
        if redis_client is None:
            logger.error("Document persistence selected but Redis is unavailable")
    else:
        # Schema is created on startup; no migrations are shipped
        await create_all()

    # Read models survive restarts in Redis; without it they live in process
    if redis_client is not None:
        read_store = RedisReadModelStore(document_store)
    else:
        read_store = InMemoryReadModelStore()
    try:
        async with AsyncSessionLocal() as session:
            await build_read_model_rebuilder(read_store, settings, session, document_store).rebuild()
    except Exception as e:
        logger.error(f"Read model rebuild failed: {e}. Continuing with live projections only.")

    publisher = None
    if settings.event_publishing_enabled and redis_client is not None:
        publisher = RedisEventPublisher(redis_client)
    init_read_side(read_store, publisher)

    if settings.rate_limit_enabled:
        counter_store = RedisCounterStore(redis_client) if redis_client is not None else InMemoryCounterStore()
        app.state.rate_limiter = FixedWindowRateLimiter(
            counter_store,
            limit=settings.rate_limit_per_window,
            window_seconds=settings.rate_limit_window_seconds,
        )
        logger.info(
            f"Rate limiting: {settings.rate_limit_per_window} requests per "
            f"{settings.rate_limit_window_seconds}s ({type(counter_store).__name__})"
        )

    yield

    if telemetry is not None:
        try:
            telemetry.shutdown()
        except Exception as e:
            logger.warning(f"Error during telemetry shutdown: {e}")

    await cache_service.disconnect()
    set_cache_service(None)

    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware order matters: the last one added runs first.
# Rate limiting needs the actor that the correlation middleware sets.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(tenants.router, prefix="/api/tenants", tags=["tenants"])
app.include_router(organizations.router, prefix="/api/organizations", tags=["organizations"])
app.include_router(departments.router, prefix="/api/departments", tags=["departments"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(platforms.router, prefix="/api/platforms", tags=["platforms"])
app.include_router(templates.router, prefix="/api/templates", tags=["templates"])
app.include_router(
    notifications.email_router, prefix="/api/notifications/email", tags=["notifications"]
)
app.include_router(
    notifications.push_router, prefix="/api/notifications/push", tags=["notifications"]
)
app.include_router(
    notifications.sms_router, prefix="/api/notifications/sms", tags=["notifications"]
)
app.include_router(
    notifications.webhook_router, prefix="/api/notifications/webhook", tags=["notifications"]
)
app.include_router(
    notifications.stats_router, prefix="/api/notifications/stats", tags=["notifications"]
)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint for load balancers and monitoring.

    The database is required for the relational backend and Redis for the
    document backend; otherwise Redis is optional.

    Returns:
    - 200 OK if healthy
    - 503 Service Unavailable if unhealthy
    """
    checks: dict[str, Any] = {
        "api": True,
        "database": None,
        "cache": None,  # None = not configured, True = healthy, False = unhealthy
    }
    documents = settings.persistence_backend == "document"

    if not documents:
        try:
            await db.execute(text("SELECT 1"))
            checks["database"] = True
        except SQLAlchemyError as e:
            checks["database"] = False
            checks["error"] = str(e)

    if settings.redis_enabled:
        checks["cache"] = get_cache_service().is_available()

    is_healthy = checks["cache"] is True if documents else checks["database"] is True
    if is_healthy:
        return {"status": "healthy", "checks": checks}
    return JSONResponse(status_code=503, content={"status": "unhealthy", "checks": checks})
