from __future__ import annotations

from fastapi import Request

from ..cache.store import CacheStore
from ..providers.base import PlaceProvider


def get_cache_store(request: Request) -> CacheStore:
    """Return the cache store owned by the running application."""
    return request.app.state.cache_store


def get_provider(request: Request) -> PlaceProvider:
    return request.app.state.provider


def get_search_ttl(request: Request) -> int:
    return request.app.state.search_ttl
