"""Product enrichment and review hints for barcode-sourced products.

Enrichment steps (each recorded in ``enrichment_applied`` when it changes
something):
- unit_extraction        unit derived from the size text
- brand_standardization  known brand spellings folded ("coca cola" → "Coca-Cola")
- categorization         keyword category when none was supplied
- nutritional_scoring    0–100 score when nutrition facts are present

Confidence is always recomputed with the field-presence heuristic.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .categorizer import categorize_product
from .config import settings
from .confidence import score_fields
from .duplicates import DuplicateCandidate
from .matcher import MatchResult
from .schemas import EnrichmentResult, InventoryCandidate, NutritionFacts, Product
from .units import extract_unit_from_size, parse_quantity_from_size, parse_unit_from_size

logger = logging.getLogger(__name__)

_BRAND_STANDARDIZATIONS: dict[str, str] = {
    "coca cola": "Coca-Cola",
    "coca-cola": "Coca-Cola",
    "pepsi cola": "PepsiCo",
    "kraft": "Kraft Heinz",
    "general mills": "General Mills",
    "kelloggs": "Kellogg's",
    "campbells": "Campbell's",
}


def standardize_brand_name(brand: str | None) -> str | None:
    if not brand:
        return brand
    return _BRAND_STANDARDIZATIONS.get(brand.strip().lower(), brand)


def calculate_nutritional_score(nutrition: NutritionFacts | None) -> int:
    """Rough 0–100 score: protein and fiber help; sugar, sat. fat and sodium hurt."""
    if nutrition is None:
        return 0
    score = 50
    if (nutrition.proteins or 0) > 5:
        score += 10
    if (nutrition.fiber or 0) > 3:
        score += 10
    if (nutrition.sugars or 0) > 10:
        score -= 10
    if (nutrition.saturated_fat or 0) > 5:
        score -= 10
    if (nutrition.sodium or 0) > 500:
        score -= 10
    return max(0, min(100, score))


def enrich_product(product: Product) -> EnrichmentResult:
    """Fill in unit, brand spelling and category; rescore confidence."""
    applied: list[str] = []
    updates: dict[str, object] = {}
    estimated_quantity = None

    if product.size:
        estimated_quantity = parse_quantity_from_size(product.size)
        if not product.unit:
            updates["unit"] = extract_unit_from_size(product.size) or parse_unit_from_size(product.size)
            applied.append("unit_extraction")

    brand = standardize_brand_name(product.brand)
    if brand != product.brand:
        updates["brand"] = brand
        applied.append("brand_standardization")

    if not product.category:
        updates["category"] = categorize_product(product.name, brand, product.description)
        applied.append("categorization")

    nutritional_score = None
    if product.nutrition is not None:
        nutritional_score = calculate_nutritional_score(product.nutrition)
        applied.append("nutritional_scoring")

    enriched = product.model_copy(update=updates)
    enriched = enriched.model_copy(update={
        "confidence": score_fields(
            enriched.name,
            brand=enriched.brand,
            category=enriched.category,
            size=enriched.size,
            description=enriched.description,
        ),
    })
    logger.debug("Enriched %r: %s", product.name, ", ".join(applied) or "no changes")
    return EnrichmentResult(
        product=enriched,
        estimated_quantity=estimated_quantity,
        nutritional_score=nutritional_score,
        enrichment_applied=applied,
    )


# ---------------------------------------------------------------------------
# Review hints
# ---------------------------------------------------------------------------


def product_recommendations(
    product: Product,
    duplicates: Sequence[DuplicateCandidate] = (),
    matches: Sequence[MatchResult] = (),
    is_verified: bool = False,
) -> list[str]:
    """Data-quality hints shown next to a newly saved barcode product."""
    recommendations: list[str] = []

    if duplicates:
        recommendations.append(
            f"{len(duplicates)} potential duplicate(s) found - review for data quality"
        )
    if matches:
        recommendations.append(f"{len(matches)} inventory item(s) may match this product")
    if not is_verified:
        recommendations.append("Product data not verified - review and verify for accuracy")
    if product.confidence < settings.low_confidence_threshold:
        recommendations.append("Low confidence score - enrich product data for better accuracy")
    if not product.category or product.category == "general":
        recommendations.append("Generic category assigned - consider more specific categorization")
    return recommendations


def barcode_update_suggestions(
    product: Product | None,
    matches: Sequence[MatchResult] = (),
    linked_item: InventoryCandidate | None = None,
) -> list[str]:
    """What to do with a scanned barcode: update, link, or create an item."""
    if linked_item is not None:
        return [
            f'Barcode is linked to "{linked_item.name}" - you can update quantities directly'
        ]
    if matches:
        best = matches[0]
        if best.score > settings.high_match_threshold:
            return [f'High match found: "{best.candidate.name}" - consider linking this barcode']
        return [f"{len(matches)} potential matches found - review and link if appropriate"]
    if product is not None:
        return [f'Product found: "{product.name}" - you can create a new inventory item']
    return ["Unknown barcode - you can create a new inventory item manually"]
