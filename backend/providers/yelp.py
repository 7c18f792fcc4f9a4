"""Yelp Fusion business search adapter.

Required env vars:
  YELP_API_KEY: sent as a bearer token
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .base import HttpPlaceProvider
from .models import (
    ProviderAddress,
    ProviderCategory,
    ProviderPhoto,
    ProviderPlace,
    ProviderSearchParams,
    ProviderSearchResult,
)


class YelpCategory(BaseModel):
    alias: str
    title: str


class YelpCoordinates(BaseModel):
    latitude: float
    longitude: float


class YelpLocation(BaseModel):
    address1: str | None = None
    city: str | None = None
    zip_code: str | None = None
    state: str | None = None
    country: str | None = None


class YelpBusiness(BaseModel):
    id: str
    name: str
    image_url: str | None = None
    url: str | None = None
    categories: list[YelpCategory] | None = None
    rating: float | None = None  # 1-5 scale
    coordinates: YelpCoordinates
    price: str | None = None  # "$".."$$$$"
    location: YelpLocation = Field(default_factory=YelpLocation)

    def to_provider_place(self) -> ProviderPlace:
        return ProviderPlace(
            source=YelpProvider.name,
            id=self.id,
            name=self.name,
            categories=[
                ProviderCategory(key=c.alias, label=c.title) for c in self.categories or []
            ],
            latitude=self.coordinates.latitude,
            longitude=self.coordinates.longitude,
            address=ProviderAddress(
                street=self.location.address1 or None,
                city=self.location.city,
                state=self.location.state,
                zipcode=self.location.zip_code or None,
            ),
            rating=self.rating,
            rating_scale=5.0,
            price=self.price,
            website=self.url,
            photos=[ProviderPhoto(url=self.image_url)] if self.image_url else [],
        )


class YelpSearchResponse(BaseModel):
    businesses: list[YelpBusiness] = Field(default_factory=list)
    total: int | None = None


class YelpProvider(HttpPlaceProvider):
    name = "yelp"
    base_url = "https://api.yelp.com/v3"
    search_path = "/businesses/search"

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _build_query(self, params: ProviderSearchParams) -> dict[str, Any]:
        query: dict[str, Any] = {"limit": params.limit}
        if params.has_coordinates:
            query["latitude"] = params.latitude
            query["longitude"] = params.longitude
        elif params.location:
            query["location"] = params.location
        if params.query:
            query["term"] = params.query
        if params.categories:
            query["categories"] = params.categories
        if params.offset:
            query["offset"] = params.offset
        return query

    def _error_code(self, payload: dict[str, Any]) -> tuple[str | None, str | None]:
        error = payload.get("error")
        if isinstance(error, dict):
            return error.get("code"), error.get("description")
        return None, payload.get("message")

    def _parse_results(self, payload: Any) -> ProviderSearchResult:
        parsed = YelpSearchResponse.model_validate(payload)
        places = [b.to_provider_place() for b in parsed.businesses]
        total = parsed.total if parsed.total is not None else len(places)
        return ProviderSearchResult(provider=self.name, places=places, total=total)
