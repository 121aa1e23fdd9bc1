from fastapi import APIRouter, Depends, Body

from memo_resources.config import get_settings
from memo_resources.core.dependencies import get_resource_service
from memo_resources.core.services.resource_service import ResourceService
from memo_resources.core.dtos.common import ErrorResponse
from memo_resources.core.dtos.resource import (
    ResourceCreate,
    UpdateResourceRequest,
    ListResourcesResponse,
    ResourceEnvelope,
    DeleteResourceResponse
)

settings = get_settings()

router = APIRouter(
    prefix=f"{settings.API_PREFIX}/resources",
    tags=["Resources"],
    responses={500: {"model": ErrorResponse}}
)


@router.get("", response_model=ListResourcesResponse)
async def list_resources(
    service: ResourceService = Depends(get_resource_service)
):
    resources = await service.list_resources()
    return ListResourcesResponse(resources=resources)


@router.post("", response_model=ResourceEnvelope, status_code=201)
async def create_resource(
    resource_data: ResourceCreate = Body(...),
    service: ResourceService = Depends(get_resource_service)
):
    resource = await service.create_resource(resource_data)
    return ResourceEnvelope(resource=resource)


@router.get(
    "/{resource_id}",
    response_model=ResourceEnvelope,
    responses={404: {"model": ErrorResponse}}
)
async def get_resource(
    resource_id: int,
    service: ResourceService = Depends(get_resource_service)
):
    resource = await service.get_resource(resource_id)
    return ResourceEnvelope(resource=resource)


@router.patch(
    "/{resource_id}",
    response_model=ResourceEnvelope,
    responses={404: {"model": ErrorResponse}}
)
async def update_resource(
    resource_id: int,
    request: UpdateResourceRequest = Body(...),
    service: ResourceService = Depends(get_resource_service)
):
    resource = await service.update_resource(
        resource_id, request.resource, request.update_mask
    )
    return ResourceEnvelope(resource=resource)


@router.delete(
    "/{resource_id}",
    response_model=DeleteResourceResponse,
    responses={404: {"model": ErrorResponse}}
)
async def delete_resource(
    resource_id: int,
    service: ResourceService = Depends(get_resource_service)
):
    await service.delete_resource(resource_id)
    return DeleteResourceResponse()
