"""Duplicate detection for newly created product records.

Two strategies, unioned:
1. Exact name (case-insensitive)               → similarity 1.0, "exact_name"
2. Same brand + name contains first name word  → Levenshtein ratio, "brand_similarity"

Results are de-duplicated by record id, kept only above the similarity
threshold (default 0.7), sorted by similarity and capped (default 5).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .barcode import barcodes_equal
from .config import Settings, settings as default_settings
from .schemas import InventoryCandidate, Product
from .similarity import levenshtein_similarity

logger = logging.getLogger(__name__)

EXACT_NAME = "exact_name"
BRAND_SIMILARITY = "brand_similarity"


@dataclass(frozen=True)
class DuplicateCandidate:
    record: InventoryCandidate
    similarity: float
    match_type: str  # exact_name / brand_similarity


def _same_identity(product: Product, record: InventoryCandidate) -> bool:
    if product.id and product.id == record.id:
        return True
    return barcodes_equal(product.barcode, record.barcode)


class DuplicateDetector:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings

    def find(
        self, product: Product, existing: Iterable[InventoryCandidate],
    ) -> list[DuplicateCandidate]:
        if not isinstance(product, Product):
            raise TypeError(f"product must be a Product, got {type(product).__name__}")

        name = (product.name or "").strip()
        if not name:
            return []
        name_lower = name.lower()
        first_word = name_lower.split()[0]
        brand = (product.brand or "").strip().lower()

        records = [r for r in existing if not _same_identity(product, r)]

        found: list[DuplicateCandidate] = []
        # Strategy 1: exact name
        for record in records:
            if record.name.strip().lower() == name_lower:
                found.append(DuplicateCandidate(record, 1.0, EXACT_NAME))

        # Strategy 2: same brand, fuzzy name
        if brand:
            for record in records:
                if (record.brand or "").strip().lower() != brand:
                    continue
                if first_word not in record.name.lower():
                    continue
                similarity = levenshtein_similarity(name, record.name)
                found.append(DuplicateCandidate(record, similarity, BRAND_SIMILARITY))

        seen: set[str] = set()
        unique: list[DuplicateCandidate] = []
        for dup in found:
            if dup.record.id in seen:
                continue
            seen.add(dup.record.id)
            unique.append(dup)

        threshold = self._settings.duplicate_similarity_threshold
        result = sorted(
            (d for d in unique if d.similarity > threshold),
            key=lambda d: d.similarity,
            reverse=True,
        )[: self._settings.duplicate_max_results]

        if result:
            logger.info(
                "Found %d potential duplicate(s) for %r", len(result), product.name,
            )
        return result


def find_duplicates(
    product: Product, existing: Iterable[InventoryCandidate],
) -> list[DuplicateCandidate]:
    return DuplicateDetector().find(product, existing)
