from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.application.services import OrganizationService
from src.infrastructure.persistence.mappers import organization_to_dto
from src.presentation.api.dependencies import get_organization_service
from src.presentation.api.v1.schemas.common import ApiResponse, ok
from src.presentation.api.v1.schemas.organization import (
    OrganizationCreate, OrganizationResponse, OrganizationUpdate)

router = APIRouter()

OrganizationServiceDep = Annotated[OrganizationService, Depends(get_organization_service)]


@router.post("", response_model=ApiResponse[OrganizationResponse], status_code=status.HTTP_201_CREATED)
async def create_organization(data: OrganizationCreate, service: OrganizationServiceDep):
    """Create an organization inside an existing tenant (code unique per tenant)"""
    result = await service.create(
        tenant_id=data.tenant_id,
        name=data.name,
        code=data.code,
        organization_type=data.type,
        description=data.description,
        parent_organization_id=data.parent_organization_id,
        manager_id=data.manager_id,
    )
    return ok(organization_to_dto(result.data), result.message)


@router.get("/{organization_id}", response_model=ApiResponse[OrganizationResponse])
async def get_organization(organization_id: str, service: OrganizationServiceDep):
    result = await service.get(organization_id)
    return ok(organization_to_dto(result.data))


@router.patch("/{organization_id}", response_model=ApiResponse[OrganizationResponse])
async def update_organization(
    organization_id: str, data: OrganizationUpdate, service: OrganizationServiceDep
):
    result = await service.update(
        organization_id,
        name=data.name,
        description=data.description,
        manager_id=data.manager_id,
    )
    return ok(organization_to_dto(result.data), result.message)


@router.post("/{organization_id}/activate", response_model=ApiResponse[OrganizationResponse])
async def activate_organization(organization_id: str, service: OrganizationServiceDep):
    result = await service.activate(organization_id)
    return ok(organization_to_dto(result.data), result.message)


@router.post("/{organization_id}/suspend", response_model=ApiResponse[OrganizationResponse])
async def suspend_organization(organization_id: str, service: OrganizationServiceDep):
    result = await service.suspend(organization_id)
    return ok(organization_to_dto(result.data), result.message)


@router.post("/{organization_id}/deactivate", response_model=ApiResponse[OrganizationResponse])
async def deactivate_organization(organization_id: str, service: OrganizationServiceDep):
    result = await service.deactivate(organization_id)
    return ok(organization_to_dto(result.data), result.message)
