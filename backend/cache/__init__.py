"""
In-memory cache layer.

Responsibilities:
- Hold opaque payloads under string keys with a per-entry TTL.
- Derive deterministic cache keys from request parameters.
- Report hit/miss statistics for diagnostics.
"""

from .keys import generate_cache_key
from .store import CacheStore

__all__ = ["CacheStore", "generate_cache_key"]
