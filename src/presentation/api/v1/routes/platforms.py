from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.application.services import PlatformService
from src.infrastructure.persistence.mappers import platform_to_dto
from src.presentation.api.dependencies import get_platform_service
from src.presentation.api.v1.schemas.common import ApiResponse, ok
from src.presentation.api.v1.schemas.platform import (PlatformConfigUpsert,
                                                      PlatformCreate,
                                                      PlatformMetadataValue,
                                                      PlatformResponse,
                                                      PlatformUpdate)

router = APIRouter()

PlatformServiceDep = Annotated[PlatformService, Depends(get_platform_service)]


@router.post("", response_model=ApiResponse[PlatformResponse], status_code=status.HTTP_201_CREATED)
async def create_platform(data: PlatformCreate, service: PlatformServiceDep):
    """Register a platform; it starts INITIALIZING"""
    result = await service.create(
        name=data.name,
        version=data.version,
        platform_type=data.type,
        description=data.description,
    )
    return ok(platform_to_dto(result.data), result.message)


@router.get("/{platform_id}", response_model=ApiResponse[PlatformResponse])
async def get_platform(platform_id: str, service: PlatformServiceDep):
    result = await service.get(platform_id)
    return ok(platform_to_dto(result.data))


@router.patch("/{platform_id}", response_model=ApiResponse[PlatformResponse])
async def update_platform(platform_id: str, data: PlatformUpdate, service: PlatformServiceDep):
    result = await service.update(
        platform_id,
        name=data.name,
        description=data.description,
        version=data.version,
        platform_type=data.type,
    )
    return ok(platform_to_dto(result.data), result.message)


@router.put("/{platform_id}/config/{key}", response_model=ApiResponse[PlatformResponse])
async def set_platform_config(
    platform_id: str, key: str, data: PlatformConfigUpsert, service: PlatformServiceDep
):
    """Create or replace one configuration item; its value is checked against its rules"""
    result = await service.set_config(platform_id, key, data.model_dump())
    return ok(platform_to_dto(result.data), result.message)


@router.delete("/{platform_id}/config/{key}", response_model=ApiResponse[PlatformResponse])
async def remove_platform_config(platform_id: str, key: str, service: PlatformServiceDep):
    result = await service.remove_config(platform_id, key)
    return ok(platform_to_dto(result.data), result.message)


@router.put("/{platform_id}/metadata/{key}", response_model=ApiResponse[PlatformResponse])
async def set_platform_metadata(
    platform_id: str, key: str, data: PlatformMetadataValue, service: PlatformServiceDep
):
    result = await service.set_metadata(platform_id, key, data.value)
    return ok(platform_to_dto(result.data), result.message)


async def _change_status(platform_id: str, action: str, service: PlatformService):
    result = await service.change_status(platform_id, action)
    return ok(platform_to_dto(result.data), result.message)


@router.post("/{platform_id}/activate", response_model=ApiResponse[PlatformResponse])
async def activate_platform(platform_id: str, service: PlatformServiceDep):
    return await _change_status(platform_id, "activate", service)


@router.post("/{platform_id}/suspend", response_model=ApiResponse[PlatformResponse])
async def suspend_platform(platform_id: str, service: PlatformServiceDep):
    return await _change_status(platform_id, "suspend", service)


@router.post("/{platform_id}/deactivate", response_model=ApiResponse[PlatformResponse])
async def deactivate_platform(platform_id: str, service: PlatformServiceDep):
    return await _change_status(platform_id, "deactivate", service)


@router.post("/{platform_id}/maintenance", response_model=ApiResponse[PlatformResponse])
async def start_platform_maintenance(platform_id: str, service: PlatformServiceDep):
    return await _change_status(platform_id, "maintenance", service)


@router.delete("/{platform_id}", response_model=ApiResponse[PlatformResponse])
async def delete_platform(platform_id: str, service: PlatformServiceDep):
    """Soft delete; allowed from any non-deleted status"""
    result = await service.delete(platform_id)
    return ok(platform_to_dto(result.data), result.message)
