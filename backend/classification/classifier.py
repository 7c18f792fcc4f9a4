from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable

from pydantic import BaseModel

from ..items.models import (
    DomainItem,
    Event,
    ItemLocation,
    Park,
    PriceRange,
    Restaurant,
)
from ..providers.models import ProviderPlace, ProviderSearchResult
from .rules import ItemKind, RuleMatch, RuleTable, load_rule_table

logger = logging.getLogger(__name__)

PHOTO_SIZE = "400x400"
_PRICE_LABELS: tuple[PriceRange, ...] = ("$", "$$", "$$$", "$$$$")


class ClassificationOutcome(str, Enum):
    classified = "classified"
    unclassified = "unclassified"


class ClassificationResult(BaseModel):
    outcome: ClassificationOutcome
    item: DomainItem | None = None
    reason: str | None = None

    @property
    def is_classified(self) -> bool:
        return self.outcome is ClassificationOutcome.classified


def _rescale_rating(place: ProviderPlace) -> float | None:
    if place.rating is None or place.rating_scale <= 0:
        return None
    scaled = place.rating * 5.0 / place.rating_scale
    return round(max(0.0, min(5.0, scaled)), 1)


def _price_label(price: int | str | None) -> PriceRange | None:
    """Map a 1-4 tier or a ``$``..``$$$$`` symbol onto a price label."""
    if price is None:
        return None
    if isinstance(price, int):
        if 1 <= price <= len(_PRICE_LABELS):
            return _PRICE_LABELS[price - 1]
        return None
    symbol = price.strip()
    return symbol if symbol in _PRICE_LABELS else None


def _image_url(place: ProviderPlace, size: str) -> str | None:
    if not place.photos:
        return None
    return place.photos[0].build_url(size)


def _base_fields(place: ProviderPlace, photo_size: str) -> dict:
    labels = [c.label for c in place.categories]
    return {
        "id": place.id,
        "api_specific_id": place.id,
        "source_api": place.source,
        "name": place.name,
        "description": place.description or ", ".join(labels),
        "location": ItemLocation(
            latitude=place.latitude,
            longitude=place.longitude,
            street=place.address.street,
            city=place.address.city,
            state=place.address.state,
            zipcode=place.address.zipcode,
        ),
        "rating": _rescale_rating(place),
        "website": place.website,
        "image_url": _image_url(place, photo_size),
    }


def _build_item(
    place: ProviderPlace,
    match: RuleMatch,
    photo_size: str,
    now: Callable[[], datetime],
) -> DomainItem:
    base = _base_fields(place, photo_size)
    primary = match.category.label or match.rule.label

    if match.kind is ItemKind.restaurant:
        return Restaurant(**base, cuisine_type=primary, price_range=_price_label(place.price))
    if match.kind is ItemKind.park:
        return Park(**base, park_type=primary, amenities=[c.label for c in place.categories])
    return Event(**base, event_type=primary, start_date=now())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def classify_place(
    place: ProviderPlace,
    rules: RuleTable | None = None,
    *,
    photo_size: str = PHOTO_SIZE,
    now: Callable[[], datetime] = _utcnow,
) -> ClassificationResult:
    """
    Classify a provider place as a Restaurant, Park or Event.

    Places without categories, or whose categories match no rule, come back
    as ``unclassified`` rather than being forced into a default kind.
    """
    if not place.categories:
        return ClassificationResult(
            outcome=ClassificationOutcome.unclassified, reason="no categories"
        )

    table = rules or load_rule_table()
    match = table.match(place.source, place.categories)
    if match is None:
        logger.info(
            "Could not determine type for %s place: %s with categories: %s",
            place.source,
            place.name,
            [c.label for c in place.categories],
        )
        return ClassificationResult(
            outcome=ClassificationOutcome.unclassified, reason="no matching category rule"
        )

    return ClassificationResult(
        outcome=ClassificationOutcome.classified,
        item=_build_item(place, match, photo_size, now),
    )


def classify(place: ProviderPlace, rules: RuleTable | None = None, **kwargs) -> DomainItem | None:
    return classify_place(place, rules, **kwargs).item


def classify_all(
    response: ProviderSearchResult | Iterable[ProviderPlace],
    rules: RuleTable | None = None,
    **kwargs,
) -> list[DomainItem]:
    """Classify every place in order, dropping the unclassified ones."""
    places = response.places if isinstance(response, ProviderSearchResult) else response
    items: list[DomainItem] = []
    for place in places:
        item = classify(place, rules, **kwargs)
        if item is not None:
            items.append(item)
    return items
