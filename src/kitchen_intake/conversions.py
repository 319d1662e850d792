"""Recipe unit conversion.

Steps, first hit wins:
- same unit after normalization                     1.0
- Fahrenheit <-> Celsius by formula                  1.0
- table factor, or its reciprocal                    1.0
- caller-supplied factor (``lookup``)                0.9
- via a shared base unit (g, ml, units)              0.95
- density estimate, volume -> weight                 0.7

Every table unit maps onto its base: weights onto g, volumes onto ml, counts
onto units. Stored per-user conversions live with the caller and come in
through ``lookup(from_unit, to_unit) -> factor | None``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from .schemas import ConversionResult
from .units import standardize_recipe_unit

logger = logging.getLogger(__name__)

DIRECT = "direct"
DATABASE = "database"
CALCULATED = "calculated"
ESTIMATED = "estimated"

COUNT_UNIT = "units"
FAHRENHEIT = "fahrenheit"
CELSIUS = "celsius"

# unit → (base unit, factor)
STANDARD_CONVERSIONS: dict[str, tuple[str, float]] = {
    # weight
    "kg": ("g", 1000.0),
    "lb": ("g", 453.592),
    "oz": ("g", 28.3495),
    # volume
    "l": ("ml", 1000.0),
    "cup": ("ml", 240.0),
    "tbsp": ("ml", 15.0),
    "tsp": ("ml", 5.0),
    "fl oz": ("ml", 29.5735),
    "pint": ("ml", 473.176),
    "quart": ("ml", 946.353),
    "gallon": ("ml", 3785.41),
    # count
    "dozen": (COUNT_UNIT, 12.0),
    "pair": (COUNT_UNIT, 2.0),
}

# Grams per cup
DENSITY_ESTIMATES: dict[str, float] = {
    "flour": 120.0,
    "sugar": 200.0,
    "rice": 180.0,
    "oats": 80.0,
}
_CUP_ML = 240.0

# Recipe vocabulary (after standardize_recipe_unit) → conversion code
_CONVERSION_CODES: dict[str, str] = {
    "kilogram": "kg", "gram": "g", "pound": "lb", "ounce": "oz",
    "liter": "l", "milliliter": "ml",
    "tablespoon": "tbsp", "teaspoon": "tsp", "fluid ounce": "fl oz",
    "each": COUNT_UNIT, "piece": COUNT_UNIT, "unit": COUNT_UNIT,
    "item": COUNT_UNIT, "items": COUNT_UNIT,
    "f": FAHRENHEIT, "°f": FAHRENHEIT,
    "°c": CELSIUS, "centigrade": CELSIUS,
}

_SUGGESTIONS: dict[str, list[str]] = {
    "g": ["kg", "oz", "lb"],
    "kg": ["g", "lb", "oz"],
    "lb": ["kg", "g", "oz"],
    "oz": ["g", "lb", "kg"],
    "ml": ["l", "cup", "fl oz", "tbsp", "tsp"],
    "l": ["ml", "cup", "fl oz", "quart", "gallon"],
    "cup": ["ml", "l", "fl oz", "tbsp"],
    "tbsp": ["tsp", "ml", "cup"],
    "tsp": ["tbsp", "ml"],
    CELSIUS: [FAHRENHEIT],
    FAHRENHEIT: [CELSIUS],
    COUNT_UNIT: ["dozen", "pair"],
}


def normalize_conversion_unit(unit: str | None) -> str:
    """Map a unit onto its conversion code ("Tablespoons" → "tbsp").

    Blank units count as ``units``. A bare "c" is a cup, as in recipes;
    Celsius has to be spelled out or written "°C".
    """
    if not unit or not unit.strip():
        return COUNT_UNIT
    standard = standardize_recipe_unit(unit)
    return _CONVERSION_CODES.get(standard, standard)


def convert_temperature(amount: float, from_unit: str, to_unit: str) -> float | None:
    if from_unit == FAHRENHEIT and to_unit == CELSIUS:
        return (amount - 32) * 5 / 9
    if from_unit == CELSIUS and to_unit == FAHRENHEIT:
        return amount * 9 / 5 + 32
    return None


def _direct_factor(from_unit: str, to_unit: str) -> float | None:
    entry = STANDARD_CONVERSIONS.get(from_unit)
    if entry and entry[0] == to_unit:
        return entry[1]
    return None


def _intermediate_factor(from_unit: str, to_unit: str) -> tuple[float, str] | None:
    source = STANDARD_CONVERSIONS.get(from_unit)
    target = STANDARD_CONVERSIONS.get(to_unit)
    if source and target and source[0] == target[0]:
        return source[1] / target[1], source[0]
    return None


def _base_of(unit: str) -> tuple[str, float] | None:
    if unit in STANDARD_CONVERSIONS:
        return STANDARD_CONVERSIONS[unit]
    if unit in ("g", "ml", COUNT_UNIT):
        return unit, 1.0
    return None


def _density_estimate(from_unit: str, to_unit: str, ingredient: str) -> tuple[float, str] | None:
    source = _base_of(from_unit)
    target = _base_of(to_unit)
    if not source or not target or source[0] != "ml" or target[0] != "g":
        return None
    lowered = ingredient.lower()
    for name, grams_per_cup in DENSITY_ESTIMATES.items():
        if name in lowered:
            return source[1] / _CUP_ML * grams_per_cup / target[1], name
    return None


def _converted(
    amount: float,
    from_unit: str,
    to_unit: str,
    factor: float,
    conversion_type: str,
    confidence: float,
    notes: str | None = None,
) -> ConversionResult:
    return ConversionResult(
        success=True,
        converted_amount=amount * factor,
        from_unit=from_unit,
        to_unit=to_unit,
        conversion_factor=factor,
        conversion_type=conversion_type,
        confidence=confidence,
        notes=notes,
    )


def convert_unit(
    amount: float,
    from_unit: str | None,
    to_unit: str | None,
    ingredient: str | None = None,
    lookup: Callable[[str, str], float | None] | None = None,
) -> ConversionResult:
    """Convert ``amount`` between units; unsupported pairs give ``success=False``.

    ``ingredient`` enables the density estimate (e.g. cups of flour to grams).
    ``lookup`` is consulted after the standard table and before the
    intermediate step, with normalized unit codes.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise TypeError(f"amount must be a number, got {type(amount).__name__}")
    amount = float(amount)
    source = normalize_conversion_unit(from_unit)
    target = normalize_conversion_unit(to_unit)

    if source == target:
        return _converted(amount, source, target, 1.0, DIRECT, 1.0)

    temperature = convert_temperature(amount, source, target)
    if temperature is not None:
        return ConversionResult(
            success=True,
            converted_amount=temperature,
            from_unit=source,
            to_unit=target,
            conversion_type=DIRECT,
            confidence=1.0,
            notes="Temperature formula",
        )

    factor = _direct_factor(source, target)
    if factor is not None:
        return _converted(amount, source, target, factor, DIRECT, 1.0)
    factor = _direct_factor(target, source)
    if factor is not None:
        return _converted(amount, source, target, 1 / factor, DIRECT, 1.0)

    if lookup is not None:
        factor = lookup(source, target)
        if factor is not None:
            return _converted(amount, source, target, factor, DATABASE, 0.9)

    via = _intermediate_factor(source, target)
    if via is not None:
        factor, base = via
        return _converted(amount, source, target, factor, CALCULATED, 0.95, f"Via {base}")

    if ingredient:
        estimate = _density_estimate(source, target, ingredient)
        if estimate is not None:
            factor, name = estimate
            return _converted(
                amount, source, target, factor, ESTIMATED, 0.7,
                f"Estimated based on typical {name} density",
            )

    logger.debug("No conversion from %s to %s", source, target)
    return ConversionResult(
        success=False,
        converted_amount=amount,
        from_unit=source,
        to_unit=target,
        confidence=0.0,
        notes=f"No conversion available from {source} to {target}",
    )


def batch_convert_units(
    requests: Iterable[Sequence],
    lookup: Callable[[str, str], float | None] | None = None,
) -> list[ConversionResult]:
    """Convert ``(amount, from_unit, to_unit[, ingredient])`` tuples in order."""
    results = [convert_unit(*request, lookup=lookup) for request in requests]
    converted = sum(1 for r in results if r.success)
    logger.info("Converted %d/%d quantities", converted, len(results))
    return results


def conversion_suggestions(unit: str | None) -> list[str]:
    """Units worth offering as conversion targets for ``unit``."""
    return list(_SUGGESTIONS.get(normalize_conversion_unit(unit), []))
