from __future__ import annotations

import pytest

from backend.search.validation import SearchValidationError, validate_search_params


def _error(params: dict) -> SearchValidationError:
    with pytest.raises(SearchValidationError) as exc:
        validate_search_params(params)
    return exc.value


def test_location_only_uses_defaults():
    query = validate_search_params({"location": "  CacheCity "})
    assert query.location == "CacheCity"
    assert query.limit == 20
    assert query.offset == 0
    assert query.latitude is None


def test_coordinates_only():
    query = validate_search_params({"latitude": "40.7", "longitude": "-74"})
    assert query.latitude == 40.7
    assert query.longitude == -74.0
    assert query.location is None


def test_missing_location_and_coordinates():
    assert _error({}).code == "LOCATION_REQUIRED"


def test_latitude_without_longitude():
    err = _error({"latitude": "40.7"})
    assert err.code == "COORDINATES_INCOMPLETE"
    assert err.field == "longitude"


@pytest.mark.parametrize("value", ["91", "-90.5"])
def test_latitude_out_of_range(value):
    err = _error({"latitude": value, "longitude": "0"})
    assert err.code == "LATITUDE_OUT_OF_RANGE"
    assert err.field == "latitude"


def test_longitude_out_of_range():
    assert _error({"latitude": "0", "longitude": "180.1"}).code == "LONGITUDE_OUT_OF_RANGE"


@pytest.mark.parametrize("value", ["north", "nan"])
def test_malformed_latitude(value):
    assert _error({"latitude": value, "longitude": "0"}).code == "INVALID_LATITUDE"


@pytest.mark.parametrize("value", ["51", "0", "-5"])
def test_limit_out_of_bounds(value):
    err = _error({"location": "x", "limit": value})
    assert err.code == "LIMIT_OUT_OF_RANGE"
    assert err.field == "limit"


def test_limit_not_an_integer():
    assert _error({"location": "x", "limit": "ten"}).code == "INVALID_LIMIT"


def test_limit_bounds_inclusive():
    assert validate_search_params({"location": "x", "limit": "1"}).limit == 1
    assert validate_search_params({"location": "x", "limit": "50"}).limit == 50


def test_negative_offset():
    assert _error({"location": "x", "offset": "-1"}).code == "OFFSET_OUT_OF_RANGE"


def test_blank_location_and_term():
    assert _error({"location": "   "}).code == "LOCATION_BLANK"
    assert _error({"location": "x", "term": " "}).code == "TERM_BLANK"


def test_blank_categories_are_ignored():
    assert validate_search_params({"location": "x", "categories": "  "}).categories is None
