"""
External item search.

Responsibilities:
- Validate inbound query parameters before any cache or network access.
- Derive the cache key and serve repeated searches from the cache.
- On a miss, call the place provider, classify its places and cache the
  response.
"""
