"""Rank existing inventory records against a candidate product.

Handles:
- Exact barcode hits (short-circuit, always ranked first)
- Retrieval through an injected "name contains term" search, using the
  product name, the brand and "{brand} {name}" as search terms
- De-duplication of candidates retrieved by several terms

Scoring weights:
  Name token Jaccard      → 0.60 * similarity
  Brand present           → +0.30  (candidate name contains the brand, or
                                    candidate brand equals it)
  Unit equal              → +0.10  (case-insensitive)

Final score is capped at 1.0.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .barcode import barcodes_equal
from .config import Settings, settings as default_settings
from .schemas import InventoryCandidate, Product
from .similarity import token_jaccard

logger = logging.getLogger(__name__)

NAME_WEIGHT = 0.6
BRAND_WEIGHT = 0.3
UNIT_WEIGHT = 0.1

EXACT_BARCODE = "exact_barcode"
NAME_SIMILARITY = "name_similarity"

SearchFn = Callable[[str], Iterable[InventoryCandidate]]


@dataclass(frozen=True)
class MatchResult:
    """One ranked inventory candidate for a product."""

    product: Product
    candidate: InventoryCandidate
    score: float            # 0.0 – 1.0
    match_type: str         # exact_barcode / name_similarity


def search_terms(product: Product) -> list[str]:
    """Name, brand and "{brand} {name}", blanks and repeats removed."""
    terms: list[str] = []
    combined = f"{product.brand or ''} {product.name or ''}".strip()
    for term in (product.name, product.brand, combined):
        term = (term or "").strip()
        if term and term not in terms:
            terms.append(term)
    return terms


def _brand_hit(product: Product, candidate: InventoryCandidate) -> bool:
    brand = (product.brand or "").strip().lower()
    if not brand:
        return False
    if brand in candidate.name.lower():
        return True
    return bool(candidate.brand) and candidate.brand.strip().lower() == brand


def _unit_hit(product: Product, candidate: InventoryCandidate) -> bool:
    if not product.unit or not candidate.unit:
        return False
    return product.unit.strip().lower() == candidate.unit.strip().lower()


def calculate_match_score(product: Product, candidate: InventoryCandidate) -> float:
    """Weighted name/brand/unit score between a product and one candidate."""
    score = NAME_WEIGHT * token_jaccard(product.name, candidate.name)
    if _brand_hit(product, candidate):
        score += BRAND_WEIGHT
    if _unit_hit(product, candidate):
        score += UNIT_WEIGHT
    return min(1.0, score)


def substring_search(candidates: Iterable[InventoryCandidate]) -> SearchFn:
    """Build an in-memory case-insensitive "name contains term" search."""
    pool = list(candidates)

    def search(term: str) -> list[InventoryCandidate]:
        needle = term.lower()
        return [c for c in pool if needle in c.name.lower()]

    return search


class ProductMatcher:
    """Ranks inventory candidates for a product.

    ``search`` is the storage layer's substring search; when it is omitted the
    candidates passed to :meth:`match` are treated as already retrieved.
    """

    def __init__(self, search: SearchFn | None = None, settings: Settings | None = None) -> None:
        self._search = search
        self._settings = settings or default_settings

    def _retrieve(
        self, product: Product, candidates: Iterable[InventoryCandidate] | None,
    ) -> list[InventoryCandidate]:
        retrieved: list[InventoryCandidate] = []
        if candidates is not None:
            retrieved.extend(candidates)
        if self._search is not None:
            for term in search_terms(product):
                retrieved.extend(self._search(term))
        return retrieved

    def match(
        self,
        product: Product,
        candidates: Iterable[InventoryCandidate] | None = None,
        limit: int | None = None,
    ) -> list[MatchResult]:
        if not isinstance(product, Product):
            raise TypeError(f"product must be a Product, got {type(product).__name__}")

        seen: set[str] = set()
        results: list[MatchResult] = []
        for candidate in self._retrieve(product, candidates):
            if candidate.id in seen:
                continue
            seen.add(candidate.id)
            if barcodes_equal(product.barcode, candidate.barcode):
                results.append(MatchResult(product, candidate, 1.0, EXACT_BARCODE))
            else:
                score = calculate_match_score(product, candidate)
                results.append(MatchResult(product, candidate, score, NAME_SIMILARITY))

        # Stable: equal scores keep retrieval order; barcode hits lead.
        results.sort(key=lambda r: (r.match_type != EXACT_BARCODE, -r.score))

        limit = self._settings.match_max_results if limit is None else limit
        logger.debug(
            "Matched %r against %d candidates, returning top %d",
            product.name, len(results), limit,
        )
        return results[:limit]


def match_product(
    product: Product,
    candidates: Iterable[InventoryCandidate],
    limit: int | None = None,
) -> list[MatchResult]:
    """Rank an already-retrieved candidate list for ``product``."""
    return ProductMatcher().match(product, candidates, limit=limit)
