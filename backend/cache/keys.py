from __future__ import annotations

import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_DELIMITER = ":"


def _stringify(value: Any) -> str:
    # Whole floats render without a trailing ".0" so 40.0 and 40 share a key.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def generate_cache_key(namespace: str, params: Mapping[str, Any]) -> str:
    """
    Build a deterministic cache key from the significant request parameters.

    Absent and blank values are skipped, keys and values are trimmed and
    lower-cased, and the surviving pairs are sorted by key so that parameter
    order and casing never change the result.
    """
    significant: dict[str, str] = {}
    for raw_key, raw_value in params.items():
        if raw_value is None:
            continue
        value = _stringify(raw_value).strip()
        if not value:
            continue
        significant[str(raw_key).strip().lower()] = value.lower()

    # Values are not escaped: "a:term=b" as one value yields the same key as
    # two separate parameters.
    param_string = _DELIMITER.join(
        f"{k}={significant[k]}" for k in sorted(significant)
    )
    key = f"{namespace}{_DELIMITER}{param_string}"
    logger.debug("Generated cache key %s", key)
    return key
