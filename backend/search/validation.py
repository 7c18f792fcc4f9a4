from __future__ import annotations

import math
from typing import Mapping

from .models import DEFAULT_LIMIT, MAX_LIMIT, SearchQuery


class SearchValidationError(ValueError):
    """An inbound search parameter is missing, malformed or out of range."""

    def __init__(self, code: str, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.field = field


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def _coordinate(raw: str, field: str, bound: float) -> float:
    name = field.upper()
    try:
        value = float(raw)
    except ValueError:
        raise SearchValidationError(
            f"INVALID_{name}", f"{field} must be a number", field
        ) from None
    if not math.isfinite(value):
        raise SearchValidationError(f"INVALID_{name}", f"{field} must be a number", field)
    if not -bound <= value <= bound:
        raise SearchValidationError(
            f"{name}_OUT_OF_RANGE",
            f"{field} must be between {-bound:g} and {bound:g}",
            field,
        )
    return value


def _bounded_int(
    raw: str | None, field: str, default: int, minimum: int, maximum: int | None = None
) -> int:
    name = field.upper()
    if not _present(raw):
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise SearchValidationError(
            f"INVALID_{name}", f"{field} must be an integer", field
        ) from None
    if value < minimum or (maximum is not None and value > maximum):
        upper = f" and {maximum}" if maximum is not None else ""
        qualifier = "between" if maximum is not None else "at least"
        raise SearchValidationError(
            f"{name}_OUT_OF_RANGE",
            f"{field} must be {qualifier} {minimum}{upper}",
            field,
        )
    return value


def validate_search_params(raw: Mapping[str, str | None]) -> SearchQuery:
    """
    Turn raw query-string values into a ``SearchQuery``.

    A location name or a latitude/longitude pair is required. Integers that
    parse but fall outside their bounds are reported as out of range, never
    as malformed.
    """
    location = raw.get("location")
    if location is not None:
        location = location.strip()
        if not location:
            raise SearchValidationError(
                "LOCATION_BLANK", "location must not be blank", "location"
            )

    lat_raw, lon_raw = raw.get("latitude"), raw.get("longitude")
    latitude = longitude = None
    if _present(lat_raw) or _present(lon_raw):
        if not (_present(lat_raw) and _present(lon_raw)):
            raise SearchValidationError(
                "COORDINATES_INCOMPLETE",
                "latitude and longitude must be provided together",
                "longitude" if _present(lat_raw) else "latitude",
            )
        latitude = _coordinate(lat_raw, "latitude", 90)
        longitude = _coordinate(lon_raw, "longitude", 180)

    if location is None and latitude is None:
        raise SearchValidationError(
            "LOCATION_REQUIRED",
            "Either location or both latitude and longitude are required",
            "location",
        )

    term = raw.get("term")
    if term is not None:
        term = term.strip()
        if not term:
            raise SearchValidationError("TERM_BLANK", "term must not be blank", "term")

    categories = raw.get("categories")
    if categories is not None:
        categories = categories.strip() or None

    limit = _bounded_int(raw.get("limit"), "limit", DEFAULT_LIMIT, 1, MAX_LIMIT)
    offset = _bounded_int(raw.get("offset"), "offset", 0, 0)

    return SearchQuery(
        location=location,
        latitude=latitude,
        longitude=longitude,
        term=term,
        categories=categories,
        limit=limit,
        offset=offset,
    )
