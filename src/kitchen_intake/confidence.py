"""Confidence scoring for extracted and matched records.

Field-presence heuristic (single product records):
  base                    0.50
  name longer than 5      +0.20
  brand present           +0.10
  category present        +0.10
  size present            +0.05
  description present     +0.05

The weights are fixed: downstream review thresholds ("< 0.7 needs review")
depend on them.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .schemas import Product

BASE_CONFIDENCE = 0.5
NAME_WEIGHT = 0.2
BRAND_WEIGHT = 0.1
CATEGORY_WEIGHT = 0.1
SIZE_WEIGHT = 0.05
DESCRIPTION_WEIGHT = 0.05

DEFAULT_CONFIDENCE = 0.5


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def score_fields(
    name: str | None,
    brand: str | None = None,
    category: str | None = None,
    size: str | None = None,
    description: str | None = None,
) -> float:
    score = BASE_CONFIDENCE
    if name and len(name) > 5:
        score += NAME_WEIGHT
    if _present(brand):
        score += BRAND_WEIGHT
    if _present(category):
        score += CATEGORY_WEIGHT
    if _present(size):
        score += SIZE_WEIGHT
    if _present(description):
        score += DESCRIPTION_WEIGHT
    return round(clamp(score), 2)


def score_product(product: Product) -> float:
    return score_fields(
        product.name,
        brand=product.brand,
        category=product.category,
        size=product.size,
        description=product.description,
    )


def clamp_confidence(value: object, default: float = DEFAULT_CONFIDENCE) -> float:
    """Coerce an extractor-supplied confidence to a float in [0, 1].

    Numbers and numeric strings are clamped; anything else gets ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    if math.isnan(number):
        return default
    return clamp(number)


def average_confidence(values: Iterable[float]) -> float:
    """Mean confidence of the entries of an extraction, 0.0 when empty."""
    items = list(values)
    if not items:
        return 0.0
    return clamp(sum(items) / len(items))
