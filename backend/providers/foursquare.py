"""Foursquare Places API (v3) adapter.

Required env vars:
  FOURSQUARE_API_KEY: sent verbatim in the ``Authorization`` header
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


class FoursquareCategory(BaseModel):
    id: int
    name: str


class FoursquareLocation(BaseModel):
    address: str | None = None
    locality: str | None = None
    region: str | None = None
    postcode: str | None = None
    country: str | None = None
    formatted_address: str | None = None


class FoursquareLatLng(BaseModel):
    latitude: float
    longitude: float


class FoursquareGeocodes(BaseModel):
    main: FoursquareLatLng


class FoursquarePhoto(BaseModel):
    prefix: str
    suffix: str


class FoursquarePlace(BaseModel):
    fsq_id: str
    name: str
    categories: list[FoursquareCategory] = Field(default_factory=list)
    geocodes: FoursquareGeocodes
    location: FoursquareLocation = Field(default_factory=FoursquareLocation)
    description: str | None = None
    rating: float | None = None  # 0-10 scale
    website: str | None = None
    photos: list[FoursquarePhoto] = Field(default_factory=list)
    price: int | None = None  # 1-4

    def to_provider_place(self) -> ProviderPlace:
        return ProviderPlace(
            source=FoursquareProvider.name,
            id=self.fsq_id,
            name=self.name,
            categories=[
                ProviderCategory(key=str(c.id), label=c.name) for c in self.categories
            ],
            latitude=self.geocodes.main.latitude,
            longitude=self.geocodes.main.longitude,
            address=ProviderAddress(
                street=self.location.address,
                city=self.location.locality,
                state=self.location.region,
                zipcode=self.location.postcode,
            ),
            description=self.description,
            rating=self.rating,
            rating_scale=10.0,
            price=self.price,
            website=self.website,
            photos=[ProviderPhoto(prefix=p.prefix, suffix=p.suffix) for p in self.photos],
        )


class FoursquareSearchResponse(BaseModel):
    results: list[FoursquarePlace] = Field(default_factory=list)


class FoursquareProvider(HttpPlaceProvider):
    name = "foursquare"
    base_url = "https://api.foursquare.com/v3"
    search_path = "/places/search"

    def __init__(self, api_key: str, *, fields: str | None = None, **kwargs: Any) -> None:
        super().__init__(api_key, **kwargs)
        self.fields = fields

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": self.api_key}

    def _build_query(self, params: ProviderSearchParams) -> dict[str, Any]:
        query: dict[str, Any] = {"limit": params.limit}
        if params.has_coordinates:
            query["ll"] = f"{params.latitude},{params.longitude}"
        elif params.location:
            query["near"] = params.location
        if params.query:
            query["query"] = params.query
        if params.categories:
            query["categories"] = params.categories
        if self.fields:
            query["fields"] = self.fields
        return query

    def _parse_results(self, payload: Any) -> ProviderSearchResult:
        parsed = FoursquareSearchResponse.model_validate(payload)
        places = [p.to_provider_place() for p in parsed.results]
        # Foursquare does not report a total; the page size is all we know.
        return ProviderSearchResult(provider=self.name, places=places, total=len(places))
