"""Keyword-based product categorization and menu label normalization.

Scoring: every keyword contained (plain substring) in the combined
name/brand/description text counts one hit for its category.  The category
with the most hits wins; ties keep the category listed first; no hits at all
yields ``"general"``.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"

# Canonical keyword table shared by enrichment, lookup adapters and the
# recipe/menu normalizers.  Dict order is the tie-break order.
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "meat_poultry": (
        "chicken", "beef", "pork", "turkey", "lamb", "meat", "poultry",
        "sausage", "bacon", "steak",
    ),
    "seafood": (
        "fish", "salmon", "tuna", "shrimp", "crab", "lobster", "seafood",
        "shellfish",
    ),
    "produce": (
        "vegetable", "fruit", "lettuce", "tomato", "apple", "banana", "carrot",
        "onion", "produce",
    ),
    "dairy": (
        "milk", "cheese", "butter", "yogurt", "cream", "dairy",
        "cottage cheese",
    ),
    "grains_bakery": (
        "bread", "flour", "rice", "pasta", "cereal", "bakery", "grain", "wheat",
    ),
    "condiments_spices": (
        "sauce", "spice", "seasoning", "salt", "pepper", "oil", "vinegar",
        "ketchup",
    ),
    "beverages": (
        "juice", "soda", "water", "coffee", "tea", "beverage", "drink", "beer",
        "wine",
    ),
    "frozen": ("frozen", "ice cream", "popsicle"),
    "snacks": ("chips", "crackers", "nuts", "candy", "snack", "chocolate"),
    "cleaning": (
        "soap", "detergent", "cleaner", "sanitizer", "paper towel", "tissue",
    ),
    "personal_care": ("shampoo", "toothpaste", "deodorant", "soap", "lotion"),
}

CATEGORIES = frozenset(CATEGORY_KEYWORDS) | {DEFAULT_CATEGORY}


def category_scores(text: str) -> dict[str, int]:
    """Keyword hit count per category for already-combined text."""
    lower = text.lower()
    return {
        category: sum(1 for k in keywords if k in lower)
        for category, keywords in CATEGORY_KEYWORDS.items()
    }


def categorize_product(
    name: str | None,
    brand: str | None = None,
    description: str | None = None,
) -> str:
    """Assign a coarse inventory category from name, brand and description."""
    text = f"{name or ''} {brand or ''} {description or ''}"
    best_category = DEFAULT_CATEGORY
    best_score = 0
    for category, score in category_scores(text).items():
        if score > best_score:
            best_score = score
            best_category = category
    logger.debug("Categorized %r as %s (%d hits)", name, best_category, best_score)
    return best_category


# ---------------------------------------------------------------------------
# Menu labels
# ---------------------------------------------------------------------------

_MENU_CATEGORY_MAP: dict[str, str] = {
    "Appetizer": "Appetizers",
    "App": "Appetizers",
    "Starter": "Appetizers",
    "Entree": "Entrees",
    "Main": "Entrees",
    "Main Course": "Entrees",
    "Side": "Sides",
    "Side Dish": "Sides",
    "Dessert": "Desserts",
    "Sweet": "Desserts",
    "Beverage": "Beverages",
    "Drink": "Beverages",
    "Wine": "Wine & Spirits",
    "Beer": "Beer",
    "Cocktail": "Cocktails",
    "Soup": "Soups",
    "Salad": "Salads",
}

_ABBREVIATIONS = {"Bbq": "BBQ", "Diy": "DIY", "Ny": "NY", "La": "LA"}

_WORD_RE = re.compile(r"\w\S*")


def _title_case(text: str) -> str:
    collapsed = re.sub(r"\s+", " ", text.strip())
    return _WORD_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), collapsed)


def normalize_item_name(name: str | None) -> str:
    """Title-case a menu item name, keeping common abbreviations upper-case."""
    if not name:
        return ""
    result = _title_case(name)
    for wrong, right in _ABBREVIATIONS.items():
        result = re.sub(rf"\b{wrong}\b", right, result)
    return result


def normalize_menu_category(category: str | None) -> str | None:
    """Title-case a menu section name and fold common variants."""
    if not category or not isinstance(category, str) or not category.strip():
        return None
    normalized = _title_case(category)
    return _MENU_CATEGORY_MAP.get(normalized, normalized)
