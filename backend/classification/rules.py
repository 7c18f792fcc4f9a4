from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable

from ..providers.models import ProviderCategory

_RULES_JSON = Path(__file__).resolve().parent / "data" / "category_rules.json"


class ItemKind(str, Enum):
    event = "Event"
    park = "Park"
    restaurant = "Restaurant"


# Checked in this order; the first family that matches wins.
KIND_PRIORITY: tuple[ItemKind, ...] = (ItemKind.event, ItemKind.park, ItemKind.restaurant)


def _thousands_parent(key: str) -> str | None:
    """Foursquare ids nest by thousands: 13065 (Italian) sits under 13000."""
    if not key.isdigit():
        return None
    return str(int(key) // 1000 * 1000)


_HIERARCHIES: dict[str, Callable[[str], str | None]] = {
    "thousands": _thousands_parent,
}


@dataclass(frozen=True)
class CategoryRule:
    key: str
    kind: ItemKind
    label: str
    match_descendants: bool = False


@dataclass(frozen=True)
class RuleMatch:
    kind: ItemKind
    rule: CategoryRule
    category: ProviderCategory


@dataclass
class ProviderRules:
    provider: str
    rules: dict[ItemKind, dict[str, CategoryRule]]
    parent_of: Callable[[str], str | None] | None = None

    def lookup(self, kind: ItemKind, category: ProviderCategory) -> CategoryRule | None:
        family = self.rules.get(kind, {})
        rule = family.get(category.key)
        if rule is not None:
            return rule
        if self.parent_of is None:
            return None
        parent = self.parent_of(category.key)
        if parent is None or parent == category.key:
            return None
        rule = family.get(parent)
        if rule is not None and rule.match_descendants:
            return rule
        return None


@dataclass
class RuleTable:
    version: int
    providers: dict[str, ProviderRules] = field(default_factory=dict)

    def match(self, provider: str, categories: list[ProviderCategory]) -> RuleMatch | None:
        """
        Walk ``categories`` in order and return the first rule hit.

        For each category the Event, Park and Restaurant families are tried
        in that order, so the earliest recognised category decides the kind.
        """
        rules = self.providers.get(provider)
        if rules is None:
            return None
        for category in categories:
            for kind in KIND_PRIORITY:
                rule = rules.lookup(kind, category)
                if rule is not None:
                    return RuleMatch(kind=kind, rule=rule, category=category)
        return None


def parse_rule_table(raw: dict[str, Any]) -> RuleTable:
    providers: dict[str, ProviderRules] = {}
    for provider, entry in raw.get("providers", {}).items():
        hierarchy = entry.get("hierarchy")
        if hierarchy is not None and hierarchy not in _HIERARCHIES:
            raise ValueError(f"Unknown category hierarchy '{hierarchy}' for provider {provider}")
        families: dict[ItemKind, dict[str, CategoryRule]] = {}
        for kind in KIND_PRIORITY:
            entries = entry.get(kind.name, [])
            families[kind] = {
                str(e["key"]): CategoryRule(
                    key=str(e["key"]),
                    kind=kind,
                    label=e.get("label", str(e["key"])),
                    match_descendants=bool(e.get("match_descendants", False)),
                )
                for e in entries
            }
        providers[provider] = ProviderRules(
            provider=provider,
            rules=families,
            parent_of=_HIERARCHIES[hierarchy] if hierarchy else None,
        )
    return RuleTable(version=int(raw.get("version", 1)), providers=providers)


@lru_cache(maxsize=None)
def load_rule_table(path: Path = _RULES_JSON) -> RuleTable:
    """Return the rule table shipped with the package, loading it once."""
    with path.open(encoding="utf-8") as fh:
        return parse_rule_table(json.load(fh))
