from __future__ import annotations

from backend.cache.keys import generate_cache_key


def test_key_is_sorted_and_normalised():
    key = generate_cache_key("external-items", {"term": " Pizza ", "Location": "NYC"})
    assert key == "external-items:location=nyc:term=pizza"


def test_parameter_order_and_case_do_not_matter():
    p1 = {"location": "New York", "term": "Pizza", "limit": 10}
    p2 = {" LIMIT ": 10, "Term": "pizza ", "LOCATION": " new york"}
    assert generate_cache_key("ns", p1) == generate_cache_key("ns", p2)


def test_blank_and_absent_values_are_dropped():
    key = generate_cache_key(
        "ns", {"location": "Paris", "term": "   ", "categories": None, "offset": ""}
    )
    assert key == "ns:location=paris"
    assert "term" not in key
    assert "categories" not in key
    assert "offset" not in key


def test_different_significant_values_differ():
    a = generate_cache_key("ns", {"location": "Paris", "limit": 10})
    b = generate_cache_key("ns", {"location": "Paris", "limit": 11})
    assert a != b


def test_numbers_use_natural_representation():
    key = generate_cache_key("ns", {"latitude": 40.7, "longitude": -74.0, "limit": 5})
    assert key == "ns:latitude=40.7:limit=5:longitude=-74"


def test_zero_is_significant():
    assert generate_cache_key("ns", {"offset": 0}) == "ns:offset=0"


def test_namespace_prefix_with_no_params():
    assert generate_cache_key("ns", {}) == "ns:"


def test_delimiters_inside_values_are_not_escaped():
    # Free text holding ':' or '=' can share a key with a differently split request.
    assert generate_cache_key("ns", {"location": "a:term=b"}) == generate_cache_key(
        "ns", {"location": "a", "term": "b"}
    )
