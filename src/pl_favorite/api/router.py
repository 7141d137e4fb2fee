"""pl_favorite REST endpoints (all require auth).

POST   /favorites/{property_id}        — add to favorites
GET    /favorites                      — list own favorites (cached)
GET    /favorites/check/{property_id}  — is the property a favorite?
DELETE /favorites/{property_id}        — remove from favorites
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_cache.dependencies import get_cache
from src.pl_cache.facade import CacheFacade
from src.pl_common.database import get_db_session
from src.pl_common.response import ApiResponse, success_response
from src.pl_favorite.application.service import FavoriteApplicationService
from src.pl_gateway.api.router import get_request_id
from src.pl_gateway.auth.dependencies import get_current_user
from src.pl_gateway.user.db_models import UserModel

router = APIRouter(prefix="/favorites", tags=["favorites"])


def get_favorite_service(
    cache: Annotated[CacheFacade, Depends(get_cache)],
) -> FavoriteApplicationService:
    return FavoriteApplicationService(cache)


ServiceDep = Annotated[FavoriteApplicationService, Depends(get_favorite_service)]
SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
UserDep = Annotated[UserModel, Depends(get_current_user)]


@router.post("/{property_id}", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
async def add_favorite(
    property_id: uuid.UUID,
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.add_favorite(db, current_user.id, property_id)
    resp = success_response(result.model_dump(), message="Property added to favorites")
    resp.request_id = get_request_id(request)
    return resp


@router.get("", response_model=ApiResponse)
async def list_favorites(
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ApiResponse:
    result = await service.list_favorites(db, current_user.id, page, limit)
    resp = success_response(result)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/check/{property_id}", response_model=ApiResponse)
async def check_favorite(
    property_id: uuid.UUID,
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.check_favorite(db, current_user.id, property_id)
    resp = success_response(result.model_dump())
    resp.request_id = get_request_id(request)
    return resp


@router.delete("/{property_id}", response_model=ApiResponse)
async def remove_favorite(
    property_id: uuid.UUID,
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    await service.remove_favorite(db, current_user.id, property_id)
    resp = success_response(
        {"property_id": str(property_id)}, message="Property removed from favorites"
    )
    resp.request_id = get_request_id(request)
    return resp
