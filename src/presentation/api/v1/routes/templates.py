from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.application.services import TemplateService
from src.infrastructure.persistence.mappers import template_to_dto
from src.presentation.api.dependencies import get_template_service
from src.presentation.api.v1.schemas.common import ApiResponse, ok
from src.presentation.api.v1.schemas.template import (TemplateContentUpdate,
                                                      TemplateCreate,
                                                      TemplateDetailsUpdate,
                                                      TemplateRender,
                                                      TemplateRenderResponse,
                                                      TemplateResponse,
                                                      TemplateReview,
                                                      TemplateRevert,
                                                      TemplateVersionResponse)

router = APIRouter()

TemplateServiceDep = Annotated[TemplateService, Depends(get_template_service)]


@router.post("", response_model=ApiResponse[TemplateResponse], status_code=status.HTTP_201_CREATED)
async def create_template(data: TemplateCreate, service: TemplateServiceDep):
    """
    Create a DRAFT template pending review.

    Names are unique per tenant (409 otherwise).
    """
    result = await service.create(
        tenant_id=data.tenant_id,
        name=data.name,
        template_type=data.type,
        content=data.content,
        category=data.category,
        subject=data.subject,
        variables=data.variables,
        language=data.language,
        tags=data.tags,
        metadata=data.metadata,
    )
    return ok(template_to_dto(result.data), result.message)


@router.get("", response_model=ApiResponse[list[TemplateResponse]])
async def list_templates(
    service: TemplateServiceDep,
    tenant_id: str,
    template_status: Annotated[str | None, Query(alias="status")] = None,
    template_type: Annotated[str | None, Query(alias="type")] = None,
):
    """List a tenant's templates by name"""
    result = await service.list_templates(tenant_id, status=template_status, template_type=template_type)
    return ok([template_to_dto(template) for template in result.data])


@router.get("/{template_id}", response_model=ApiResponse[TemplateResponse])
async def get_template(template_id: str, service: TemplateServiceDep):
    result = await service.get(template_id)
    return ok(template_to_dto(result.data))


@router.put("/{template_id}/content", response_model=ApiResponse[TemplateResponse])
async def update_template_content(
    template_id: str, data: TemplateContentUpdate, service: TemplateServiceDep
):
    """Start a new version; the template goes back to DRAFT and needs review again"""
    result = await service.update_content(
        template_id, content=data.content, variables=data.variables, subject=data.subject
    )
    return ok(template_to_dto(result.data), result.message)


@router.patch("/{template_id}", response_model=ApiResponse[TemplateResponse])
async def update_template(template_id: str, data: TemplateDetailsUpdate, service: TemplateServiceDep):
    result = await service.update_details(
        template_id,
        name=data.name,
        category=data.category,
        language=data.language,
        tags=data.tags,
        metadata=data.metadata,
    )
    return ok(template_to_dto(result.data), result.message)


@router.get("/{template_id}/versions/{version}", response_model=ApiResponse[TemplateVersionResponse])
async def get_template_version(template_id: str, version: int, service: TemplateServiceDep):
    result = await service.get_version(template_id, version)
    return ok(result.data.to_dict())


@router.post("/{template_id}/revert", response_model=ApiResponse[TemplateResponse])
async def revert_template(template_id: str, data: TemplateRevert, service: TemplateServiceDep):
    result = await service.revert(template_id, data.version)
    return ok(template_to_dto(result.data), result.message)


@router.post("/{template_id}/submit", response_model=ApiResponse[TemplateResponse])
async def submit_template(template_id: str, service: TemplateServiceDep):
    result = await service.submit_for_review(template_id)
    return ok(template_to_dto(result.data), result.message)


@router.post("/{template_id}/approve", response_model=ApiResponse[TemplateResponse])
async def approve_template(template_id: str, data: TemplateReview, service: TemplateServiceDep):
    result = await service.approve(template_id, comments=data.comments)
    return ok(template_to_dto(result.data), result.message)


@router.post("/{template_id}/reject", response_model=ApiResponse[TemplateResponse])
async def reject_template(template_id: str, data: TemplateReview, service: TemplateServiceDep):
    """Comments are required when rejecting"""
    result = await service.reject(template_id, comments=data.comments or "")
    return ok(template_to_dto(result.data), result.message)


async def _change_status(template_id: str, action: str, service: TemplateService):
    result = await service.change_status(template_id, action)
    return ok(template_to_dto(result.data), result.message)


@router.post("/{template_id}/activate", response_model=ApiResponse[TemplateResponse])
async def activate_template(template_id: str, service: TemplateServiceDep):
    """Only approved templates with valid content can be activated"""
    return await _change_status(template_id, "activate", service)


@router.post("/{template_id}/deactivate", response_model=ApiResponse[TemplateResponse])
async def deactivate_template(template_id: str, service: TemplateServiceDep):
    return await _change_status(template_id, "deactivate", service)


@router.post("/{template_id}/archive", response_model=ApiResponse[TemplateResponse])
async def archive_template(template_id: str, service: TemplateServiceDep):
    return await _change_status(template_id, "archive", service)


@router.post("/{template_id}/render", response_model=ApiResponse[TemplateRenderResponse])
async def render_template(template_id: str, data: TemplateRender, service: TemplateServiceDep):
    """Render an ACTIVE template with the given variables"""
    result = await service.render(template_id, data.data)
    return ok(result.data)


@router.delete("/{template_id}", response_model=ApiResponse[None])
async def delete_template(template_id: str, service: TemplateServiceDep):
    """Active templates must be deactivated first"""
    result = await service.delete(template_id)
    return ok(None, result.message)
