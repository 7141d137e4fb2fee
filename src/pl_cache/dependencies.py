"""FastAPI dependencies exposing the cache constructed at startup."""

from fastapi import Request

from src.pl_cache.facade import CacheFacade


def get_cache(request: Request) -> CacheFacade:
    """Return the CacheFacade the lifespan stored on app.state."""
    return request.app.state.cache
