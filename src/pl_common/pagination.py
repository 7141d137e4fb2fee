"""Offset pagination envelope shared by every listing endpoint."""

import math
from typing import Any

from pydantic import BaseModel


class Pagination(BaseModel):
    total: int
    page: int
    pages: int


class PageResponse(BaseModel):
    items: list[dict[str, Any]]
    pagination: Pagination


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit
