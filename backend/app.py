from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .cache.config import DEFAULT_CACHE_CONFIG, CacheConfig
from .cache.store import CacheStore
from .providers.base import PlaceProvider, build_provider
from .providers.config import DEFAULT_PROVIDER_CONFIG, ProviderConfig
from .providers.errors import ProviderError
from .search.dependencies import get_cache_store, get_provider, get_search_ttl
from .search.models import SearchResponse
from .search.service import search_items
from .search.validation import SearchValidationError, validate_search_params

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/external/items", response_model=SearchResponse)
async def external_items(
    location: str | None = None,
    latitude: str | None = None,
    longitude: str | None = None,
    term: str | None = None,
    categories: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
    cache: CacheStore = Depends(get_cache_store),
    provider: PlaceProvider = Depends(get_provider),
    ttl: int = Depends(get_search_ttl),
) -> SearchResponse:
    # Parameters arrive as raw strings so range errors and malformed values
    # get distinct codes.
    query = validate_search_params({
        "location": location,
        "latitude": latitude,
        "longitude": longitude,
        "term": term,
        "categories": categories,
        "limit": limit,
        "offset": offset,
    })
    return await search_items(query, cache=cache, provider=provider, ttl=ttl)


# ── Diagnostics ──────────────────────────────────────────────────────────


@router.get("/cache/stats")
def cache_stats(cache: CacheStore = Depends(get_cache_store)) -> dict:
    return {**cache.stats(), "keys": cache.list_keys()}


@router.delete("/cache")
def flush_cache(cache: CacheStore = Depends(get_cache_store)) -> dict:
    cache.flush()
    return {"status": "flushed"}


# ── Error handlers ───────────────────────────────────────────────────────


def _error_body(code: str, message: str, **extra) -> dict:
    error = {"code": code, "message": message}
    error.update({k: v for k, v in extra.items() if v})
    return {"error": error}


async def _validation_error_handler(request: Request, exc: SearchValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=_error_body(exc.code, exc.message, field=exc.field),
    )


async def _provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    logger.warning(
        "Provider %s failed: %s (%s)", exc.provider, exc.message, exc.code
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            exc.code, exc.message, provider=exc.provider, details=exc.details
        ),
    )


# ── Application factory ─────────────────────────────────────────────────


async def _sweep_periodically(store: CacheStore, period: int) -> None:
    while True:
        await asyncio.sleep(period)
        store.sweep_expired()


def create_app(
    cache_store: CacheStore | None = None,
    provider: PlaceProvider | None = None,
    cache_config: CacheConfig = DEFAULT_CACHE_CONFIG,
    provider_config: ProviderConfig = DEFAULT_PROVIDER_CONFIG,
) -> FastAPI:
    """
    Build the API with an explicit cache store and provider.

    Both default to fresh instances built from configuration. The lifespan
    owns them: it starts the expiry sweep and, on shutdown, stops it, closes
    the provider and flushes the store.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = cache_store if cache_store is not None else CacheStore(
            default_ttl=cache_config.default_ttl
        )
        place_provider = provider if provider is not None else build_provider(provider_config)
        if not place_provider.is_configured:
            logger.error(
                "FATAL ERROR: API key for places provider '%s' is not configured.",
                place_provider.name,
            )

        app.state.cache_store = store
        app.state.provider = place_provider
        app.state.search_ttl = cache_config.search_ttl

        sweeper = None
        if cache_config.check_period > 0:
            sweeper = asyncio.create_task(
                _sweep_periodically(store, cache_config.check_period)
            )
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await sweeper
            await place_provider.aclose()
            store.flush()

    app = FastAPI(title="Local Places API", version="1.0.0", lifespan=lifespan)
    app.add_exception_handler(SearchValidationError, _validation_error_handler)
    app.add_exception_handler(ProviderError, _provider_error_handler)
    app.include_router(router)
    return app


app = create_app()
