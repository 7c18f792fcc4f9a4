from __future__ import annotations

from pydantic import BaseModel, Field


class ProviderSearchParams(BaseModel):
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    query: str | None = None
    categories: str | None = None
    limit: int = 20
    offset: int = 0

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class ProviderCategory(BaseModel):
    key: str
    label: str


class ProviderAddress(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None


class ProviderPhoto(BaseModel):
    """Either a ``prefix``/``suffix`` template or a ready ``url``."""

    prefix: str | None = None
    suffix: str | None = None
    url: str | None = None

    def build_url(self, size: str) -> str | None:
        if self.url:
            return self.url
        if self.prefix and self.suffix:
            return f"{self.prefix}{size}{self.suffix}"
        return None


class ProviderPlace(BaseModel):
    source: str
    id: str
    name: str
    categories: list[ProviderCategory] = Field(default_factory=list)
    latitude: float
    longitude: float
    address: ProviderAddress = Field(default_factory=ProviderAddress)
    description: str | None = None
    rating: float | None = None
    rating_scale: float = 5.0
    price: int | str | None = None
    website: str | None = None
    photos: list[ProviderPhoto] = Field(default_factory=list)


class ProviderSearchResult(BaseModel):
    provider: str
    places: list[ProviderPlace] = Field(default_factory=list)
    total: int = 0
