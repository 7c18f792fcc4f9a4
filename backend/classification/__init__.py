"""
Place classification.

Responsibilities:
- Load the per-provider category rule table.
- Map a provider place onto exactly one domain variant, or reject it.
- Normalise ratings, prices, photos and addresses into the domain model.
"""

from .classifier import (
    ClassificationOutcome,
    ClassificationResult,
    classify,
    classify_all,
    classify_place,
)
from .rules import ItemKind, RuleTable, load_rule_table

__all__ = [
    "ClassificationOutcome",
    "ClassificationResult",
    "ItemKind",
    "RuleTable",
    "classify",
    "classify_all",
    "classify_place",
    "load_rule_table",
]
