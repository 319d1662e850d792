"""Match recipe ingredients to inventory items.

Scoring ladder (on normalized names):
- exact                                   1.0
- one name contains the other             0.95
- shared words (>= 3 chars)               0.85 + 0.1 * shared / max(word count)
- otherwise Levenshtein similarity, +0.2 for a known kitchen variant pair

Normalization drops prep, size, cooking-state and sourcing qualifiers so
"fresh chopped basil" and "Basil, Fresh" compare as "basil".
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Sequence

from .config import Settings, settings as default_settings
from .conversions import convert_unit
from .schemas import IngredientMatch, InventoryCandidate, MatchedIngredient, ParsedIngredient
from .similarity import levenshtein_similarity
from .units import fraction_to_decimal

logger = logging.getLogger(__name__)

_QUALIFIER_RES = [
    # prep
    re.compile(
        r"\b(fresh|frozen|canned|dried|chopped|diced|sliced|minced|grated|shredded"
        r"|whole|ground|crushed|finely|coarsely|roughly)\b"
    ),
    # size
    re.compile(r"\b(large|medium|small|extra|jumbo|baby)\b"),
    # cooking state
    re.compile(r"\b(raw|cooked|boiled|steamed|roasted|grilled|fried)\b"),
    # sourcing
    re.compile(r"\b(organic|free-range|cage-free|grass-fed|wild-caught)\b"),
]
_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")

VARIANT_BOOST = 0.2

# Pairs are checked by containment, in both directions
_VARIANT_PAIRS: list[tuple[str, str]] = [
    ("tomato", "tomatoes"),
    ("onion", "onions"),
    ("potato", "potatoes"),
    ("carrot", "carrots"),
    ("bell pepper", "pepper"),
    ("chicken breast", "chicken"),
    ("ground beef", "beef"),
    ("heavy cream", "cream"),
    ("butter", "unsalted butter"),
    ("olive oil", "extra virgin olive oil"),
    ("all purpose flour", "flour"),
    ("kosher salt", "salt"),
    ("black pepper", "pepper"),
    ("garlic clove", "garlic"),
    ("roma tomato", "tomato"),
    ("yellow onion", "onion"),
    ("russet potato", "potato"),
    ("salmon fillet", "salmon"),
    ("pork chop", "pork"),
    ("lamb chop", "lamb"),
    ("shrimp", "prawns"),
    ("scallop", "sea scallop"),
    ("whole milk", "milk"),
    ("skim milk", "milk"),
    ("cheddar cheese", "cheese"),
    ("mozzarella cheese", "mozzarella"),
    ("parmesan cheese", "parmesan"),
    ("fresh basil", "basil"),
    ("dried oregano", "oregano"),
    ("fresh thyme", "thyme"),
    ("ground cumin", "cumin"),
    ("smoked paprika", "paprika"),
]


def normalize_ingredient_name(name: str | None) -> str:
    text = (name or "").lower().strip()
    for pattern in _QUALIFIER_RES:
        text = pattern.sub("", text)
    text = _PUNCT_RE.sub(" ", text)
    return _SPACE_RE.sub(" ", text).strip()


def _is_variant_pair(a: str, b: str) -> bool:
    return any(
        (v1 in a and v2 in b) or (v2 in a and v1 in b)
        for v1, v2 in _VARIANT_PAIRS
    )


def ingredient_similarity(a: str, b: str) -> float:
    """Similarity of two already-normalized ingredient names."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    if a in b or b in a:
        return 0.95

    words_a = [w for w in a.split(" ") if len(w) > 2]
    words_b = [w for w in b.split(" ") if len(w) > 2]
    common = [w for w in words_a if w in words_b]
    if common:
        return 0.85 + 0.1 * len(common) / max(len(words_a), len(words_b))

    score = levenshtein_similarity(a, b)
    if _is_variant_pair(a, b):
        score += VARIANT_BOOST
    return min(score, 1.0)


def match_reason(confidence: float) -> str:
    if confidence >= 1.0:
        return "Exact match"
    if confidence >= 0.95:
        return "Contains match"
    if confidence >= 0.85:
        return "Word match"
    if confidence >= 0.7:
        return "Similar name"
    if confidence >= 0.5:
        return "Possible match"
    return "Weak match"


def find_ingredient_matches(
    name: str | None,
    inventory: Iterable[InventoryCandidate],
    threshold: float | None = None,
) -> list[IngredientMatch]:
    """Inventory items scoring above ``threshold``, best first."""
    if threshold is None:
        threshold = default_settings.ingredient_match_threshold
    normalized = normalize_ingredient_name(name)
    if not normalized:
        return []

    matches: list[IngredientMatch] = []
    for item in inventory:
        score = ingredient_similarity(normalized, normalize_ingredient_name(item.name))
        if score <= threshold:
            continue
        matches.append(IngredientMatch(
            id=item.id,
            item_name=item.name,
            brand=item.brand,
            category=item.category,
            confidence=round(score, 4),
            match_reason=match_reason(score),
        ))
    matches.sort(key=lambda m: -m.confidence)
    return matches


def convert_for_inventory(
    ingredient: ParsedIngredient, item: InventoryCandidate,
) -> tuple[float | None, str | None]:
    """Ingredient quantity in the inventory item's unit (grams when it has none)."""
    amount = fraction_to_decimal(ingredient.quantity)
    if amount is None or not math.isfinite(amount) or not ingredient.unit:
        return None, None
    conversion = convert_unit(amount, ingredient.unit, item.unit or "g", ingredient.ingredient)
    if not conversion.success:
        return None, None
    converted = round(conversion.converted_amount, 2)
    notes = (
        f"Converted from {ingredient.quantity} {ingredient.unit} "
        f"to {converted:.2f} {conversion.to_unit}"
    )
    return converted, notes


def match_ingredients_to_inventory(
    ingredients: Sequence[ParsedIngredient],
    inventory: Sequence[InventoryCandidate],
    settings: Settings | None = None,
) -> list[MatchedIngredient]:
    """Attach the best inventory item and top suggestions to each ingredient."""
    cfg = settings or default_settings
    by_id = {item.id: item for item in inventory}
    results: list[MatchedIngredient] = []
    for ingredient in ingredients:
        matches = find_ingredient_matches(
            ingredient.ingredient, inventory, threshold=cfg.ingredient_match_threshold,
        )
        best = matches[0] if matches else None
        converted, notes = (
            convert_for_inventory(ingredient, by_id[best.id]) if best else (None, None)
        )
        results.append(MatchedIngredient(
            ingredient=ingredient,
            inventory_item_id=best.id if best else None,
            match_confidence=best.confidence if best else 0.0,
            suggestions=matches[:cfg.ingredient_max_suggestions],
            converted_amount=converted,
            conversion_notes=notes,
        ))

    linked = sum(1 for r in results if r.inventory_item_id)
    logger.info("Matched %d/%d ingredients to inventory", linked, len(results))
    return results
