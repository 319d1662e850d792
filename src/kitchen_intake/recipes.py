"""Validate and normalize recipe extraction output.

Input is the extractor's JSON contract::

    {"recipe_name": str, "servings": number | null, "ingredients": [
        {"quantity": str, "unit": str, "ingredient": str,
         "preparation": str | null, "confidence": number}, ...],
     "instructions": [str, ...], "notes": ..., "category": ..., ...}

Every field is clamped or defaulted; nothing here raises for bad input.
Overall confidence is the mean of the ingredient confidences (0.0 with no
ingredients); the extractor's own overall figure is ignored.
"""

from __future__ import annotations

import logging

from .categorizer import categorize_product
from .config import settings
from .confidence import average_confidence, clamp_confidence
from .extraction import (
    as_list,
    as_mapping,
    optional_number,
    optional_str,
    parse_extraction_response,
    required_str,
)
from .schemas import ParsedIngredient, ParsedRecipe
from .units import (
    normalize_quantity,
    parse_unit_from_size,
    split_quantity_unit,
    standardize_recipe_unit,
)

logger = logging.getLogger(__name__)

UNTITLED_RECIPE = "Untitled Recipe"
IMPORTED_RECIPE = "Imported Recipe"
FALLBACK_NOTE = "Failed to parse automatically. Please review and edit."


def normalize_ingredient(raw: object) -> ParsedIngredient:
    """Coerce one extracted ingredient entry; never raises."""
    if isinstance(raw, str):
        raw = {"ingredient": raw}
    data = as_mapping(raw)

    quantity = normalize_quantity(data.get("quantity"))
    unit = standardize_recipe_unit(required_str(data.get("unit")))
    if not unit and quantity:
        # "2 cups" squeezed into the quantity field
        qty, parsed_unit = split_quantity_unit(quantity)
        if parsed_unit:
            quantity, unit = qty, parsed_unit
        else:
            unit = parse_unit_from_size(quantity)

    name = required_str(data.get("ingredient"))
    preparation = optional_str(data.get("preparation"))
    category = optional_str(data.get("category")) or categorize_product(
        name, None, preparation,
    )

    return ParsedIngredient(
        quantity=quantity,
        unit=unit,
        ingredient=name,
        preparation=preparation,
        category=category,
        confidence=clamp_confidence(data.get("confidence")),
    )


def _non_negative(value: object) -> float | None:
    number = optional_number(value)
    if number is None or number < 0:
        return None
    return number


def generate_parsing_warnings(
    recipe: ParsedRecipe, low_confidence: float | None = None,
) -> list[str]:
    """Human-readable review hints for a normalized recipe."""
    threshold = settings.low_confidence_threshold if low_confidence is None else low_confidence
    warnings: list[str] = []

    if recipe.confidence < threshold:
        warnings.append("Low overall parsing confidence - please review all fields carefully")

    if not recipe.servings:
        warnings.append("Could not detect serving size - please specify")

    low = [i for i in recipe.ingredients if i.confidence < threshold]
    if low:
        warnings.append(f"{len(low)} ingredient(s) have low confidence - review before saving")

    if not recipe.ingredients:
        warnings.append("No ingredients detected - please add manually")

    if not recipe.instructions:
        warnings.append("No instructions detected - please add manually")

    if not recipe.recipe_name or recipe.recipe_name == UNTITLED_RECIPE:
        warnings.append("Recipe name not detected - please provide a name")

    return warnings


def normalize_recipe(raw: object) -> ParsedRecipe:
    """Validate a recipe extraction dict into a :class:`ParsedRecipe`."""
    data = as_mapping(raw)
    extra_warnings: list[str] = []
    if not isinstance(raw, dict):
        extra_warnings.append("Extraction output was not a JSON object")

    ingredients: list[ParsedIngredient] = []
    skipped = 0
    for entry in as_list(data.get("ingredients")):
        ingredient = normalize_ingredient(entry)
        if not ingredient.ingredient:
            skipped += 1
            continue
        ingredients.append(ingredient)
    if skipped:
        extra_warnings.append(f"{skipped} ingredient(s) without a name skipped")

    instructions = [
        step.strip()
        for step in as_list(data.get("instructions"))
        if isinstance(step, str) and step.strip()
    ]

    recipe = ParsedRecipe(
        recipe_name=required_str(data.get("recipe_name")) or UNTITLED_RECIPE,
        servings=_non_negative(data.get("servings")),
        portion_size=optional_str(data.get("portion_size")),
        prep_time_minutes=_non_negative(data.get("prep_time_minutes")),
        cook_time_minutes=_non_negative(data.get("cook_time_minutes")),
        total_time_minutes=_non_negative(data.get("total_time_minutes")),
        ingredients=ingredients,
        instructions=instructions,
        notes=optional_str(data.get("notes")),
        category=optional_str(data.get("category")),
        source=optional_str(data.get("source")),
        confidence=average_confidence(i.confidence for i in ingredients),
    )
    warnings = extra_warnings + generate_parsing_warnings(recipe)
    logger.debug(
        "Normalized recipe %r: %d ingredients, confidence %.2f, %d warnings",
        recipe.recipe_name, len(ingredients), recipe.confidence, len(warnings),
    )
    return recipe.model_copy(update={"warnings": warnings})


def fallback_recipe(raw_text: str | None) -> ParsedRecipe:
    """Keep the raw lines as instructions when extraction output is unusable."""
    lines = [line.strip() for line in (raw_text or "").splitlines() if line.strip()]
    recipe = ParsedRecipe(
        recipe_name=IMPORTED_RECIPE,
        instructions=lines,
        notes=FALLBACK_NOTE,
        confidence=0.0,
    )
    return recipe.model_copy(update={"warnings": generate_parsing_warnings(recipe)})


def parse_recipe_response(response_text: str | None, raw_text: str | None = None) -> ParsedRecipe:
    """Normalize extractor response text, falling back to the raw source text."""
    parsed = parse_extraction_response(response_text)
    if parsed is None:
        logger.warning("Recipe extraction unusable, falling back to raw text")
        return fallback_recipe(raw_text)
    return normalize_recipe(parsed)
