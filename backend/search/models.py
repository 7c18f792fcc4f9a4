from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..items.models import CamelModel, DomainItem
from ..providers.models import ProviderSearchParams

DEFAULT_LIMIT = 20
MAX_LIMIT = 50


class SearchQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    term: str | None = None
    categories: str | None = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    offset: int = Field(default=0, ge=0)

    def cache_params(self) -> dict[str, Any]:
        return self.model_dump()

    def to_provider_params(self) -> ProviderSearchParams:
        return ProviderSearchParams(
            location=self.location,
            latitude=self.latitude,
            longitude=self.longitude,
            query=self.term,
            categories=self.categories,
            limit=self.limit,
            offset=self.offset,
        )


class RequestParams(CamelModel):
    limit: int
    offset: int


class SearchResponse(CamelModel):
    items: list[DomainItem]
    total_results_from_source: int
    source: str
    request_params: RequestParams
