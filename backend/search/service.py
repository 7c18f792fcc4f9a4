from __future__ import annotations

import logging
import time

from ..cache.config import DEFAULT_CACHE_CONFIG
from ..cache.keys import generate_cache_key
from ..cache.store import CacheStore
from ..classification.classifier import classify_all
from ..classification.rules import RuleTable
from ..providers.base import PlaceProvider
from .models import RequestParams, SearchQuery, SearchResponse

logger = logging.getLogger(__name__)

SEARCH_CACHE_NAMESPACE = "external-items"
CACHE_SOURCE = "cache"


def search_cache_key(query: SearchQuery, provider_name: str) -> str:
    return generate_cache_key(
        f"{SEARCH_CACHE_NAMESPACE}:{provider_name}", query.cache_params()
    )


def _read_cache(cache: CacheStore, key: str) -> SearchResponse | None:
    # A broken cache read is treated as a miss.
    try:
        cached = cache.get(key)
    except Exception:
        logger.warning("Cache read failed for %s, fetching live", key, exc_info=True)
        return None
    if cached is None:
        return None
    if not isinstance(cached, SearchResponse):
        logger.warning("Discarding unexpected cache payload for %s", key)
        return None
    return cached


def _write_cache(cache: CacheStore, key: str, response: SearchResponse, ttl: int) -> None:
    try:
        if not cache.set(key, response, ttl):
            logger.error("Failed to cache search response for %s", key)
    except Exception:
        logger.warning("Cache write failed for %s", key, exc_info=True)


async def search_items(
    query: SearchQuery,
    *,
    cache: CacheStore,
    provider: PlaceProvider,
    ttl: int = DEFAULT_CACHE_CONFIG.search_ttl,
    rules: RuleTable | None = None,
) -> SearchResponse:
    """
    Cache-aside search.

    A hit returns the stored response re-labelled with ``source="cache"``.
    A miss calls the provider, classifies its places and caches the result
    for ``ttl`` seconds. ``total_results_from_source`` is always the
    provider's raw count, before unclassified places are dropped.
    """
    start_time = time.time()
    key = search_cache_key(query, provider.name)

    cached = _read_cache(cache, key)
    if cached is not None:
        logger.info(
            "Search served from cache key=%s items=%d", key, len(cached.items)
        )
        return cached.model_copy(update={"source": CACHE_SOURCE})

    result = await provider.search(query.to_provider_params())
    items = classify_all(result, rules)

    response = SearchResponse(
        items=items,
        total_results_from_source=result.total,
        source=provider.name,
        request_params=RequestParams(limit=query.limit, offset=query.offset),
    )
    _write_cache(cache, key, response, ttl)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Search fetched from %s key=%s places=%d items=%d in %sms",
        provider.name,
        key,
        len(result.places),
        len(items),
        elapsed_ms,
    )
    return response
