"""pl_recommendation REST endpoints (all require auth).

POST   /recommendations                  — recommend a property to another user
GET    /recommendations/received         — recommendations addressed to me (cached)
GET    /recommendations/sent             — recommendations I sent (cached)
PATCH  /recommendations/{id}/read        — mark as read (recipient only)
DELETE /recommendations/{id}             — delete (sender or recipient)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.pl_cache.dependencies import get_cache
from src.pl_cache.facade import CacheFacade
from src.pl_common.database import get_db_session
from src.pl_common.enums import RecommendationBox
from src.pl_common.response import ApiResponse, success_response
from src.pl_gateway.api.router import get_request_id
from src.pl_gateway.auth.dependencies import get_current_user
from src.pl_gateway.user.db_models import UserModel
from src.pl_recommendation.application.schemas import RecommendRequest
from src.pl_recommendation.application.service import RecommendationApplicationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def get_recommendation_service(
    cache: Annotated[CacheFacade, Depends(get_cache)],
) -> RecommendationApplicationService:
    return RecommendationApplicationService(cache)


ServiceDep = Annotated[RecommendationApplicationService, Depends(get_recommendation_service)]
SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
UserDep = Annotated[UserModel, Depends(get_current_user)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
async def recommend(
    request: Request,
    body: RecommendRequest,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.recommend(db, current_user.id, body)
    resp = success_response(result.model_dump(), message="Recommendation sent")
    resp.request_id = get_request_id(request)
    return resp


async def _list(
    request: Request,
    box: RecommendationBox,
    current_user: UserModel,
    db: AsyncSession,
    service: RecommendationApplicationService,
    page: int,
    limit: int,
) -> ApiResponse:
    result = await service.list_recommendations(db, current_user.id, box, page, limit)
    resp = success_response(result)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/received", response_model=ApiResponse)
async def list_received(
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ApiResponse:
    return await _list(request, RecommendationBox.RECEIVED, current_user, db, service, page, limit)


@router.get("/sent", response_model=ApiResponse)
async def list_sent(
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ApiResponse:
    return await _list(request, RecommendationBox.SENT, current_user, db, service, page, limit)


@router.patch("/{recommendation_id}/read", response_model=ApiResponse)
async def mark_read(
    recommendation_id: uuid.UUID,
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.mark_read(db, recommendation_id, current_user.id)
    resp = success_response(result.model_dump(), message="Recommendation marked as read")
    resp.request_id = get_request_id(request)
    return resp


@router.delete("/{recommendation_id}", response_model=ApiResponse)
async def delete_recommendation(
    recommendation_id: uuid.UUID,
    request: Request,
    current_user: UserDep,
    db: SessionDep,
    service: ServiceDep,
) -> ApiResponse:
    await service.delete(db, recommendation_id, current_user.id)
    resp = success_response(
        {"id": str(recommendation_id)}, message="Recommendation deleted successfully"
    )
    resp.request_id = get_request_id(request)
    return resp
