"""Tests for pl_common.errors and pl_common.response."""

import pytest

from src.pl_common.errors import (
    AppError,
    CacheUnavailableError,
    FavoriteExistsError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    RecommendationNotFoundError,
    RequestValidationFailedError,
    SelfRecommendationError,
    StoreUnavailableError,
)
from src.pl_common.pagination import page_count
from src.pl_common.response import error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert (err.code, err.message, err.http_status) == (9002, "Internal error", 500)
        assert isinstance(err, Exception)

    @pytest.mark.parametrize(
        "err,code,status",
        [
            (RequestValidationFailedError(), 9001, 422),
            (SelfRecommendationError(), 4001, 422),
            (PropertyOwnershipError("p1"), 2002, 403),
            (PropertyNotFoundError("p1"), 2001, 404),
            (RecommendationNotFoundError("r1"), 4002, 404),
            (FavoriteExistsError("p1"), 3001, 409),
            (StoreUnavailableError(), 9003, 503),
        ],
    )
    def test_taxonomy(self, err: AppError, code: int, status: int) -> None:
        assert (err.code, err.http_status) == (code, status)

    def test_cache_error_keeps_operation(self) -> None:
        err = CacheUnavailableError("get", "timeout")
        assert err.operation == "get"
        assert "timeout" in err.message


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"id": "abc"})
        assert (resp.code, resp.message, resp.data) == (0, "success", {"id": "abc"})

    def test_error_carries_details(self) -> None:
        resp = error_response(9001, "Request validation failed", {"errors": []})
        assert resp.code == 9001
        assert resp.data == {"errors": []}

    def test_serialization(self) -> None:
        d = success_response({"price": 65}).model_dump()
        assert set(d) == {"code", "message", "data", "timestamp", "request_id"}


@pytest.mark.parametrize("total,limit,pages", [(0, 10, 0), (10, 10, 1), (21, 10, 3)])
def test_page_count(total: int, limit: int, pages: int) -> None:
    assert page_count(total, limit) == pages
