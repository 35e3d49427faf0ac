# backend/drivedesk/routes/v1/resources.py
"""Learning resource routes - API v1 (plain CRUD)."""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_current_user_id, get_resource_service
from ...schemas.resource import ResourceCreate, ResourceResponse, ResourceUpdate
from ...services.resource_service import ResourceService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["resources-v1"])


@router.get("", response_model=List[ResourceResponse])
async def list_resources(
    user_id: str = Depends(get_current_user_id),
    resource_service: ResourceService = Depends(get_resource_service),
) -> List[ResourceResponse]:
    resources = await asyncio.to_thread(resource_service.list_resources, user_id)
    return [ResourceResponse.model_validate(r) for r in resources]


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    payload: ResourceCreate,
    user_id: str = Depends(get_current_user_id),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    resource = await asyncio.to_thread(resource_service.create_resource, user_id, payload)
    return ResourceResponse.model_validate(resource)


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: str,
    user_id: str = Depends(get_current_user_id),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    resource = await asyncio.to_thread(resource_service.get_resource, user_id, resource_id)
    return ResourceResponse.model_validate(resource)


@router.patch("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: str,
    payload: ResourceUpdate,
    user_id: str = Depends(get_current_user_id),
    resource_service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    resource = await asyncio.to_thread(
        resource_service.update_resource, user_id, resource_id, payload
    )
    return ResourceResponse.model_validate(resource)


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: str,
    user_id: str = Depends(get_current_user_id),
    resource_service: ResourceService = Depends(get_resource_service),
) -> Response:
    await asyncio.to_thread(resource_service.delete_resource, user_id, resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
