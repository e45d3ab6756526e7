from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.application.services import DepartmentService
from src.infrastructure.persistence.mappers import department_to_dto
from src.presentation.api.dependencies import get_department_service
from src.presentation.api.v1.schemas.common import ApiResponse, ok
from src.presentation.api.v1.schemas.organization import (DepartmentCreate,
                                                          DepartmentMove,
                                                          DepartmentResponse,
                                                          DepartmentUpdate)

router = APIRouter()

DepartmentServiceDep = Annotated[DepartmentService, Depends(get_department_service)]


@router.post("", response_model=ApiResponse[DepartmentResponse], status_code=status.HTTP_201_CREATED)
async def create_department(data: DepartmentCreate, service: DepartmentServiceDep):
    """
    Create a department.

    With parent_id the department is nested one level below its parent;
    without it the department is a root (level 1).
    """
    result = await service.create(
        tenant_id=data.tenant_id,
        organization_id=data.organization_id,
        name=data.name,
        code=data.code,
        department_type=data.type,
        parent_id=data.parent_id,
        description=data.description,
        manager_id=data.manager_id,
    )
    return ok(department_to_dto(result.data), result.message)


@router.get("/{department_id}", response_model=ApiResponse[DepartmentResponse])
async def get_department(department_id: str, service: DepartmentServiceDep):
    result = await service.get(department_id)
    return ok(department_to_dto(result.data))


@router.patch("/{department_id}", response_model=ApiResponse[DepartmentResponse])
async def update_department(department_id: str, data: DepartmentUpdate, service: DepartmentServiceDep):
    result = await service.update(
        department_id,
        name=data.name,
        description=data.description,
        manager_id=data.manager_id,
    )
    return ok(department_to_dto(result.data), result.message)


@router.post("/{department_id}/move", response_model=ApiResponse[DepartmentResponse])
async def move_department(department_id: str, data: DepartmentMove, service: DepartmentServiceDep):
    """Re-parent a department; descendants move with it"""
    result = await service.move(department_id, data.parent_id)
    return ok(department_to_dto(result.data), result.message)


@router.post("/{department_id}/activate", response_model=ApiResponse[DepartmentResponse])
async def activate_department(department_id: str, service: DepartmentServiceDep):
    result = await service.activate(department_id)
    return ok(department_to_dto(result.data), result.message)


@router.post("/{department_id}/suspend", response_model=ApiResponse[DepartmentResponse])
async def suspend_department(department_id: str, service: DepartmentServiceDep):
    result = await service.suspend(department_id)
    return ok(department_to_dto(result.data), result.message)


@router.post("/{department_id}/deactivate", response_model=ApiResponse[DepartmentResponse])
async def deactivate_department(department_id: str, service: DepartmentServiceDep):
    result = await service.deactivate(department_id)
    return ok(department_to_dto(result.data), result.message)
