from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PriceRange = Literal["$", "$$", "$$$", "$$$$"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemLocation(CamelModel):
    latitude: float
    longitude: float
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None


class BaseItem(CamelModel):
    id: str
    name: str
    description: str
    location: ItemLocation
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    image_url: str | None = None
    website: str | None = None
    source_api: str
    api_specific_id: str


class Restaurant(BaseItem):
    type: Literal["Restaurant"] = "Restaurant"
    cuisine_type: str
    price_range: PriceRange | None = None


class Park(BaseItem):
    type: Literal["Park"] = "Park"
    park_type: str
    amenities: list[str] = Field(default_factory=list)


class Event(BaseItem):
    type: Literal["Event"] = "Event"
    event_type: str
    # Providers carry no scheduling data; this is the request time.
    start_date: datetime


DomainItem = Annotated[Union[Restaurant, Park, Event], Field(discriminator="type")]
