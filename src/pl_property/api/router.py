"""pl_property REST endpoints.

POST   /properties                 — create (auth)
GET    /properties                 — search with filters + offset pagination (cached)
GET    /properties/{property_id}   — detail
PUT    /properties/{property_id}   — partial update (owner only)
DELETE /properties/{property_id}   — delete (owner only)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_cache.dependencies import get_cache
from src.pl_cache.facade import CacheFacade
from src.pl_common.database import get_db_session
from src.pl_common.response import ApiResponse, success_response
from src.pl_gateway.api.router import get_request_id
from src.pl_gateway.auth.dependencies import get_current_user
from src.pl_gateway.user.db_models import UserModel
from src.pl_property.application.schemas import (
    PropertyCreateRequest,
    PropertySearchParams,
    PropertyUpdateRequest,
)
from src.pl_property.application.service import PropertyApplicationService

router = APIRouter(prefix="/properties", tags=["properties"])


def get_property_service(
    cache: Annotated[CacheFacade, Depends(get_cache)],
) -> PropertyApplicationService:
    return PropertyApplicationService(cache)


ServiceDep = Annotated[PropertyApplicationService, Depends(get_property_service)]
SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
UserDep = Annotated[UserModel, Depends(get_current_user)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
async def create_property(
    request: Request,
    body: PropertyCreateRequest,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.create_property(db, current_user.id, body)
    resp = success_response(result.model_dump(), message="Property created")
    resp.request_id = get_request_id(request)
    return resp


@router.get("", response_model=ApiResponse)
async def list_properties(
    request: Request,
    params: Annotated[PropertySearchParams, Query()],
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.list_properties(db, params)
    resp = success_response(result)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/{property_id}", response_model=ApiResponse)
async def get_property(
    property_id: uuid.UUID,
    request: Request,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.get_property(db, property_id)
    resp = success_response(result.model_dump())
    resp.request_id = get_request_id(request)
    return resp


@router.put("/{property_id}", response_model=ApiResponse)
async def update_property(
    property_id: uuid.UUID,
    request: Request,
    body: PropertyUpdateRequest,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.update_property(db, property_id, current_user.id, body)
    resp = success_response(result.model_dump(), message="Property updated")
    resp.request_id = get_request_id(request)
    return resp


@router.delete("/{property_id}", response_model=ApiResponse)
async def delete_property(
    property_id: uuid.UUID,
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    await service.delete_property(db, property_id, current_user.id)
    resp = success_response({"id": str(property_id)}, message="Property deleted successfully")
    resp.request_id = get_request_id(request)
    return resp
