from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.application.queries import ReadModelQueries
from src.application.services import TenantService
from src.domain.enums import TenantStatus
from src.infrastructure.persistence.mappers import tenant_to_dto
from src.presentation.api.dependencies import (get_read_model_queries,
                                               get_tenant_service)
from src.presentation.api.v1.schemas.common import ApiResponse, ok
from src.presentation.api.v1.schemas.tenant import (TenantConfigUpdate,
                                                    TenantCreate,
                                                    TenantResponse,
                                                    TenantSummaryResponse,
                                                    TenantSuspend)

router = APIRouter()

TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]


@router.post("", response_model=ApiResponse[TenantResponse], status_code=status.HTTP_201_CREATED)
async def create_tenant(data: TenantCreate, service: TenantServiceDep):
    """
    Create a new tenant in PENDING status.

    Code, domain and name must be unique across tenants (409 otherwise).
    """
    result = await service.create(
        name=data.name,
        code=data.code,
        domain=data.domain,
        tenant_type=data.type,
        config=data.config,
        description=data.description,
    )
    return ok(tenant_to_dto(result.data), result.message)


@router.get("", response_model=ApiResponse[list[TenantResponse]])
async def list_tenants(
    service: TenantServiceDep,
    tenant_status: Annotated[TenantStatus | None, Query(alias="status")] = None,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List tenants, oldest first, optionally filtered by status"""
    result = await service.list_tenants(status=tenant_status, limit=limit, offset=offset)
    return ok([tenant_to_dto(tenant) for tenant in result.data])


@router.get("/{tenant_id}", response_model=ApiResponse[TenantResponse])
async def get_tenant(tenant_id: str, service: TenantServiceDep):
    result = await service.get(tenant_id)
    return ok(tenant_to_dto(result.data))


@router.get("/{tenant_id}/summary", response_model=ApiResponse[TenantSummaryResponse])
async def get_tenant_summary(
    tenant_id: str, queries: Annotated[ReadModelQueries, Depends(get_read_model_queries)]
):
    """Tenant summary from the read model"""
    return ok(await queries.get_tenant_summary(tenant_id))


@router.put("/{tenant_id}/config", response_model=ApiResponse[TenantResponse])
async def update_tenant_config(tenant_id: str, data: TenantConfigUpdate, service: TenantServiceDep):
    """Merge the given keys into the tenant configuration"""
    result = await service.update_config(tenant_id, data.config)
    return ok(tenant_to_dto(result.data), result.message)


@router.post("/{tenant_id}/activate", response_model=ApiResponse[TenantResponse])
async def activate_tenant(tenant_id: str, service: TenantServiceDep):
    result = await service.activate(tenant_id)
    return ok(tenant_to_dto(result.data), result.message)


@router.post("/{tenant_id}/suspend", response_model=ApiResponse[TenantResponse])
async def suspend_tenant(tenant_id: str, service: TenantServiceDep, data: TenantSuspend | None = None):
    result = await service.suspend(tenant_id, reason=data.reason if data else None)
    return ok(tenant_to_dto(result.data), result.message)


@router.post("/{tenant_id}/resume", response_model=ApiResponse[TenantResponse])
async def resume_tenant(tenant_id: str, service: TenantServiceDep):
    result = await service.resume(tenant_id)
    return ok(tenant_to_dto(result.data), result.message)


@router.delete("/{tenant_id}", response_model=ApiResponse[TenantResponse])
async def delete_tenant(tenant_id: str, service: TenantServiceDep):
    """Soft delete; the tenant is kept with status DELETED"""
    result = await service.delete(tenant_id)
    return ok(tenant_to_dto(result.data), result.message)
