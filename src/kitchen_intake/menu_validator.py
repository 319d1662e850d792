"""Validate parsed menu items before import.

Checks, in order:
1. required fields   (name, price)
2. pricing           (price range, target food-cost range, precision)
3. duplicates        (existing menu items, exact or near-identical name)
4. recipe linking    (exact or near-identical recipe name) and food-cost analysis
5. confidence tiers  (< 0.6 error, < 0.8 warning)

Any error → "error", else any warning → "warning", else "good".
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from .config import Settings, settings as default_settings
from .schemas import (
    ExistingMenuItem,
    MenuItemValidation,
    ParsedMenuItem,
    RecipeCost,
    ValidationSummary,
)
from .similarity import levenshtein_similarity

logger = logging.getLogger(__name__)

GOOD = "good"
WARNING = "warning"
ERROR = "error"

UNCATEGORIZED = "Uncategorized"
DEFAULT_FOOD_COST_PCT = 30
FOOD_COST_TOLERANCE = 5
ERROR_CONFIDENCE = 0.6
WARNING_CONFIDENCE = 0.8

# Typical food-cost percentage per menu section
INDUSTRY_FOOD_COST_PCT: dict[str, int] = {
    "appetizers": 25,
    "salads": 28,
    "soups": 30,
    "pizza": 25,
    "pasta": 30,
    "seafood": 32,
    "steaks": 35,
    "chicken": 28,
    "pork": 30,
    "beef": 32,
    "lamb": 35,
    "vegetarian": 25,
    "desserts": 22,
    "beverages": 20,
    "cocktails": 18,
    "wine": 25,
    "beer": 20,
}


def industry_target_food_cost(category: str | None) -> int:
    if not category:
        return DEFAULT_FOOD_COST_PCT
    return INDUSTRY_FOOD_COST_PCT.get(category.strip().lower(), DEFAULT_FOOD_COST_PCT)


@dataclass
class FoodCostAnalysis:
    actual_food_cost_pct: float
    warning: str | None = None
    suggested_price: float | None = None
    recommendation: str | None = None


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def _check_basic_fields(item: ParsedMenuItem, errors: list[str], warnings: list[str]) -> None:
    name = item.item_name.strip()
    if not name:
        errors.append("Item name is required")
        return
    if not item.price:
        errors.append("Valid price is required")
        return
    if len(name) < 3:
        warnings.append("Very short item name - please verify")
    if len(name) > 100:
        warnings.append("Very long item name - consider shortening")
    lowered = name.lower()
    if "todo" in lowered or "tbd" in lowered:
        warnings.append("Item name appears incomplete")


def _decimal_places(value: float) -> int:
    text = repr(float(value))
    if "e" in text or "." not in text:
        return 0
    return len(text.split(".")[1].rstrip("0"))


def _check_pricing(item: ParsedMenuItem, warnings: list[str]) -> None:
    price = item.price
    if price == 0:
        warnings.append("Price is $0.00 - is this intentional?")
    elif price < 1:
        warnings.append(f"Very low price (${price:.2f}) - please verify")
    elif price > 200:
        warnings.append(f"Very high price (${price:.2f}) - please verify")

    target = item.target_food_cost_pct
    if target is not None:
        if target < 15:
            warnings.append(f"Very low target food cost ({target:g}%) - may be difficult to achieve")
        elif target > 50:
            warnings.append(f"High target food cost ({target:g}%) - may impact profitability")

    if _decimal_places(price) > 2:
        warnings.append("Price has more than 2 decimal places - will be rounded")


def _check_duplicates(
    item: ParsedMenuItem,
    existing: Sequence[ExistingMenuItem],
    warnings: list[str],
    threshold: float,
) -> None:
    name = item.item_name.strip().lower()
    if not name:
        return
    for other in existing:
        if other.item_name.strip().lower() == name:
            warnings.append(
                f'Exact duplicate: "{other.item_name}" already exists (${other.price:.2f})'
            )
            return
    for other in existing:
        if levenshtein_similarity(name, other.item_name.strip().lower()) > threshold:
            warnings.append(
                f'Similar item: "{other.item_name}" already exists (${other.price:.2f})'
            )
            return


def find_matching_recipe(
    item: ParsedMenuItem, recipes: Sequence[RecipeCost], threshold: float,
) -> RecipeCost | None:
    """Exact name match first, else the most similar recipe above ``threshold``."""
    name = item.item_name.strip().lower()
    if not name:
        return None
    for recipe in recipes:
        if recipe.name.strip().lower() == name:
            return recipe

    best: RecipeCost | None = None
    best_score = threshold
    for recipe in recipes:
        score = levenshtein_similarity(name, recipe.name.strip().lower())
        if score > best_score:
            best, best_score = recipe, score
    return best


def analyze_food_cost(item: ParsedMenuItem, recipe: RecipeCost) -> FoodCostAnalysis:
    """Compare the recipe's cost share of the price with the target.

    Without a target the category's industry figure is used, and only an
    overrun is reported.
    """
    cost = recipe.cost_per_portion
    price = item.price
    if not cost or not price:
        return FoodCostAnalysis(actual_food_cost_pct=0.0)

    actual = cost / price * 100
    target = item.target_food_cost_pct
    result = FoodCostAnalysis(actual_food_cost_pct=round(actual, 2))

    if target:
        variance = actual - target
        if abs(variance) <= FOOD_COST_TOLERANCE:
            return result
        if variance > 0:
            suggested = cost / (target / 100)
            result.warning = f"Food cost ({actual:.1f}%) exceeds target ({target:g}%)"
            result.suggested_price = round(suggested, 2)
            result.recommendation = (
                f"Consider raising price to ${suggested:.2f} to achieve {target:g}% food cost"
            )
        else:
            result.warning = f"Food cost ({actual:.1f}%) is well below target ({target:g}%)"
            result.recommendation = "Current pricing achieves better margins than target"
        return result

    industry = industry_target_food_cost(item.category)
    if actual - industry > FOOD_COST_TOLERANCE:
        suggested = cost / (industry / 100)
        result.warning = f"Food cost ({actual:.1f}%) exceeds industry standard (~{industry}%)"
        result.suggested_price = round(suggested, 2)
        result.recommendation = f"Consider raising price to ${suggested:.2f} for better margins"
    return result


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def validate_menu_item(
    item: ParsedMenuItem,
    existing_items: Sequence[ExistingMenuItem] = (),
    recipes: Sequence[RecipeCost] = (),
    settings: Settings | None = None,
) -> MenuItemValidation:
    cfg = settings or default_settings
    warnings: list[str] = []
    errors: list[str] = []

    _check_basic_fields(item, errors, warnings)
    _check_pricing(item, warnings)
    _check_duplicates(item, existing_items, warnings, cfg.menu_similar_item_threshold)

    recipe = find_matching_recipe(item, recipes, cfg.recipe_link_threshold)
    analysis = analyze_food_cost(item, recipe) if recipe else None
    if analysis and analysis.warning:
        warnings.append(analysis.warning)

    pct = round(item.confidence * 100)
    if item.confidence < ERROR_CONFIDENCE:
        errors.append(f"Low confidence ({pct}%) - please review")
    elif item.confidence < WARNING_CONFIDENCE:
        warnings.append(f"Medium confidence ({pct}%) - please verify")

    status = ERROR if errors else WARNING if warnings else GOOD
    if not item.category.strip():
        item = item.model_copy(update={"category": UNCATEGORIZED})

    return MenuItemValidation(
        item=item,
        validation_status=status,
        validation_message="; ".join(errors + warnings),
        warnings=warnings,
        errors=errors,
        recipe_id=recipe.id if recipe else None,
        recipe_name=recipe.name if recipe else None,
        actual_food_cost_pct=analysis.actual_food_cost_pct if analysis else None,
        suggested_price=analysis.suggested_price if analysis else None,
        price_recommendation=analysis.recommendation if analysis else None,
    )


def validate_menu_items(
    items: Sequence[ParsedMenuItem],
    existing_items: Sequence[ExistingMenuItem] = (),
    recipes: Sequence[RecipeCost] = (),
    settings: Settings | None = None,
) -> list[MenuItemValidation]:
    results = [validate_menu_item(i, existing_items, recipes, settings) for i in items]
    logger.info(
        "Validated %d menu items: %d with errors",
        len(results), sum(1 for r in results if r.validation_status == ERROR),
    )
    return results


_ISSUE_SPLIT_RE = re.compile(r"[-:]")


def generate_validation_summary(results: Sequence[MenuItemValidation]) -> ValidationSummary:
    """Status counts plus the five most frequent issue types."""
    total = len(results)
    issues: Counter[str] = Counter()
    for r in results:
        for message in r.warnings + r.errors:
            issues[_ISSUE_SPLIT_RE.split(message, maxsplit=1)[0].strip()] += 1

    return ValidationSummary(
        total=total,
        good=sum(1 for r in results if r.validation_status == GOOD),
        warnings=sum(1 for r in results if r.validation_status == WARNING),
        errors=sum(1 for r in results if r.validation_status == ERROR),
        recipes_linked=sum(1 for r in results if r.recipe_id),
        avg_confidence=sum(r.item.confidence for r in results) / total if total else 0.0,
        common_issues=[f"{issue} ({count})" for issue, count in issues.most_common(5)],
    )
