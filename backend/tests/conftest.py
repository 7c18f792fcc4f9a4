from __future__ import annotations

import pytest

from backend.cache.store import CacheStore
from backend.providers.base import PlaceProvider
from backend.providers.models import ProviderSearchParams, ProviderSearchResult


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubProvider(PlaceProvider):
    """Returns canned results and records every call."""

    name = "foursquare"

    def __init__(self, result: ProviderSearchResult | None = None, error: Exception | None = None):
        self.result = result or ProviderSearchResult(provider=self.name)
        self.error = error
        self.calls: list[ProviderSearchParams] = []

    async def search(self, params: ProviderSearchParams) -> ProviderSearchResult:
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> CacheStore:
    return CacheStore(default_ttl=3600, clock=clock)


@pytest.fixture
def stub_provider_cls() -> type[StubProvider]:
    return StubProvider
