"""Auth API router: register, login, refresh, me.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pl_common.database import get_db_session
from src.pl_common.response import ApiResponse, success_response
from src.pl_gateway.auth.dependencies import get_current_user
from src.pl_gateway.user.db_models import UserModel
from src.pl_gateway.user.schemas import (
    LoginRequest,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    TokenResponse,
    UserInfo,
)
from src.pl_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()


def get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


def _user_info(user: UserModel) -> UserInfo:
    return UserInfo(user_id=str(user.id), name=user.name, email=user.email)


def _token_response(user: UserModel, access_token: str, refresh_token: str) -> TokenResponse:
    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=_user_info(user),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="User registration",
)
async def register(
    request: Request,
    body: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    async with db.begin():
        user = await _service.register(body.name, body.email, body.password, db)

    data = _token_response(user, *_service.issue_tokens(user))
    resp = success_response(data.model_dump(), message="User registered successfully")
    resp.request_id = get_request_id(request)
    return resp


@router.post("/login", response_model=ApiResponse, summary="User login")
async def login(
    request: Request,
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user, access_token, refresh_token = await _service.login(body.email, body.password, db)

    data = _token_response(user, access_token, refresh_token)
    resp = success_response(data.model_dump(), message="Login successful")
    resp.request_id = get_request_id(request)
    return resp


@router.post("/refresh", response_model=ApiResponse, summary="Refresh access token")
async def refresh_token(request: Request, body: RefreshRequest) -> ApiResponse:
    new_access_token = await _service.refresh(body.refresh_token)

    data = RefreshResponse(
        access_token=new_access_token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )
    resp = success_response(data.model_dump(), message="Token refreshed")
    resp.request_id = get_request_id(request)
    return resp


@router.get("/me", response_model=ApiResponse, summary="Current user")
async def me(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> ApiResponse:
    resp = success_response(_user_info(current_user).model_dump())
    resp.request_id = get_request_id(request)
    return resp
