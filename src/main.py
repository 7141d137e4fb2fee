"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from src.pl_cache.facade import CacheFacade
from src.pl_cache.redis_client import close_redis, create_redis
from src.pl_common.database import engine
from src.pl_common.errors import (
    AppError,
    InvalidCredentialsError,
    RequestValidationFailedError,
    StoreUnavailableError,
)
from src.pl_common.response import error_response
from src.pl_favorite.api.router import router as favorite_router
from src.pl_gateway.api.router import get_request_id
from src.pl_gateway.api.router import router as auth_router
from src.pl_gateway.middleware.request_log import RequestLogMiddleware
from src.pl_property.api.router import router as property_router
from src.pl_recommendation.api.router import router as recommendation_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB, build the cache facade. Shutdown: dispose."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))

    redis = create_redis()
    app.state.cache = CacheFacade(redis)
    if not await app.state.cache.ping():
        # Cache outages degrade reads to the store; startup continues
        logger.warning("Cache not reachable at startup: %s", settings.REDIS_URL)
    yield
    await engine.dispose()
    await close_redis(redis)


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _error_json(exc: AppError, request: Request, data: object = None) -> JSONResponse:
    resp = error_response(exc.code, exc.message, data)
    resp.request_id = get_request_id(request)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_json(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Framework-raised errors (missing bearer token, unknown route) share the envelope
    code = InvalidCredentialsError().code if exc.status_code == 401 else exc.status_code
    resp = error_response(code, str(exc.detail))
    resp.request_id = get_request_id(request)
    return JSONResponse(
        status_code=exc.status_code,
        content=resp.model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = jsonable_encoder(exc.errors(), exclude={"ctx"})
    return _error_json(RequestValidationFailedError(), request, {"errors": errors})


@app.exception_handler(OperationalError)
@app.exception_handler(InterfaceError)
async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Store unavailable on %s: %s", request.url.path, exc)
    return _error_json(StoreUnavailableError(), request)


app.include_router(auth_router, prefix="/api/v1")
app.include_router(property_router, prefix="/api/v1")
app.include_router(favorite_router, prefix="/api/v1")
app.include_router(recommendation_router, prefix="/api/v1")


@app.get("/health")
async def health(request: Request) -> dict[str, str]:
    cache_ok = await request.app.state.cache.ping()
    return {
        "status": "ok",
        "cache": "ok" if cache_ok else "unavailable",
        "version": "0.1.0",
    }
