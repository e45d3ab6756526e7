from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.application.queries import GetUsersByTenantQuery, ReadModelQueries
from src.application.services import UserService
from src.domain.enums import UserStatus
from src.infrastructure.persistence.mappers import user_to_dto
from src.presentation.api.dependencies import (get_read_model_queries,
                                               get_user_service)
from src.presentation.api.v1.schemas.common import ApiResponse, ok
from src.presentation.api.v1.schemas.user import (UserCreate,
                                                  UserPageResponse,
                                                  UserResponse,
                                                  UserStatusReason, UserUpdate)

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(data: UserCreate, service: UserServiceDep):
    """Create a user; username and email must be unique within the tenant"""
    result = await service.create(
        tenant_id=data.tenant_id,
        username=data.username,
        email=data.email,
        display_name=data.display_name,
        organization_id=data.organization_id,
        department_id=data.department_id,
    )
    return ok(user_to_dto(result.data), result.message)


@router.get("", response_model=ApiResponse[UserPageResponse])
async def list_users(
    tenant_id: str,
    queries: Annotated[ReadModelQueries, Depends(get_read_model_queries)],
    limit: int = 20,
    offset: int = 0,
    sort_order: str = "asc",
    user_status: Annotated[UserStatus | None, Query(alias="status")] = None,
):
    """
    List a tenant's users from the read model, sorted by username.

    limit must be 1-100, offset non-negative, sort_order asc or desc.
    """
    query = GetUsersByTenantQuery(
        tenant_id=tenant_id,
        limit=limit,
        offset=offset,
        sort_order=sort_order,
        status=user_status,
    )
    page = await queries.get_users_by_tenant(query)
    return ok(
        {"items": page.items, "total": page.total, "limit": page.limit, "offset": page.offset}
    )


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: str, service: UserServiceDep):
    result = await service.get(user_id)
    return ok(user_to_dto(result.data))


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(user_id: str, data: UserUpdate, service: UserServiceDep):
    result = await service.update_profile(
        user_id,
        display_name=data.display_name,
        email=data.email,
        metadata=data.metadata,
    )
    return ok(user_to_dto(result.data), result.message)


@router.post("/{user_id}/activate", response_model=ApiResponse[UserResponse])
async def activate_user(user_id: str, service: UserServiceDep):
    result = await service.activate(user_id)
    return ok(user_to_dto(result.data), result.message)


@router.post("/{user_id}/suspend", response_model=ApiResponse[UserResponse])
async def suspend_user(user_id: str, service: UserServiceDep, data: UserStatusReason | None = None):
    result = await service.suspend(user_id, reason=data.reason if data else None)
    return ok(user_to_dto(result.data), result.message)


@router.post("/{user_id}/lock", response_model=ApiResponse[UserResponse])
async def lock_user(user_id: str, service: UserServiceDep, data: UserStatusReason | None = None):
    result = await service.lock(user_id, reason=data.reason if data else None)
    return ok(user_to_dto(result.data), result.message)


@router.post("/{user_id}/expire", response_model=ApiResponse[UserResponse])
async def expire_user(user_id: str, service: UserServiceDep):
    result = await service.expire(user_id)
    return ok(user_to_dto(result.data), result.message)


@router.delete("/{user_id}", response_model=ApiResponse[UserResponse])
async def delete_user(user_id: str, service: UserServiceDep, hard: bool = False):
    """Soft delete by default; ?hard=true removes the user"""
    result = await service.delete(user_id, hard=hard)
    return ok(user_to_dto(result.data), result.message)
