"""Unit and quantity normalization for size text and recipe quantities.

Two unit vocabularies are in play:
- Inventory units (oz, lb, kg, g, ml, l, gal, qt, pt, cup, pack, each) for
  product size strings such as "2.5 oz" or "12 pack".
- Recipe units (teaspoon, tablespoon, cup, ounce, pound, gram, …) for
  ingredient lines coming out of recipe extraction.
"""

from __future__ import annotations

import math
import re

DEFAULT_UNIT = "each"

# ---------------------------------------------------------------------------
# Keyword-based unit detection (inventory units)
# ---------------------------------------------------------------------------
# Order matters: first hit wins.  "gal" sits before "g"/"l" and "ml" before
# "l" so that every unit in the vocabulary maps back to itself.

_UNIT_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("oz", ("oz", "ounce")),
    ("lb", ("lb", "pound")),
    ("kg", ("kg", "kilogram")),
    ("gal", ("gal", "gallon")),
    ("ml", ("ml", "milliliter", "millilitre")),
    ("qt", ("qt", "quart")),
    ("pt", ("pt", "pint")),
    ("cup", ("cup",)),
    ("pack", ("pack", "pk", "count")),
    ("g", ("g", "gram")),
    ("l", ("l", "liter", "litre")),
]

INVENTORY_UNITS = frozenset(unit for unit, _ in _UNIT_KEYWORDS) | {DEFAULT_UNIT}


def parse_unit_from_size(size: str | None) -> str:
    """Map free-text size to an inventory unit by keyword containment."""
    if not size:
        return DEFAULT_UNIT
    text = size.lower()
    for unit, keywords in _UNIT_KEYWORDS:
        if any(k in text for k in keywords):
            return unit
    return DEFAULT_UNIT


_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")


def parse_quantity_from_size(size: str | None) -> float:
    """Return the first number found in ``size``, or 1."""
    if not size:
        return 1.0
    m = _NUMBER_RE.search(size)
    return float(m.group(1)) if m else 1.0


# ---------------------------------------------------------------------------
# Regex-based unit extraction (number must precede the unit)
# ---------------------------------------------------------------------------

_NUM = r"\d+(?:\.\d+)?\s*"

_UNIT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("oz", re.compile(_NUM + r"(?:fl\.?\s*)?(?:oz|ounces?)\b", re.IGNORECASE)),
    ("lb", re.compile(_NUM + r"(?:lbs?|pounds?)\b", re.IGNORECASE)),
    ("kg", re.compile(_NUM + r"(?:kg|kilograms?)\b", re.IGNORECASE)),
    ("g", re.compile(_NUM + r"(?:g|grams?)\b", re.IGNORECASE)),
    ("ml", re.compile(_NUM + r"(?:ml|millilit(?:er|re)s?)\b", re.IGNORECASE)),
    ("l", re.compile(_NUM + r"(?:l|lit(?:er|re)s?)\b", re.IGNORECASE)),
    ("gal", re.compile(_NUM + r"(?:gal|gallons?)\b", re.IGNORECASE)),
    ("qt", re.compile(_NUM + r"(?:qt|quarts?)\b", re.IGNORECASE)),
    ("pt", re.compile(_NUM + r"(?:pt|pints?)\b", re.IGNORECASE)),
    ("cup", re.compile(_NUM + r"cups?\b", re.IGNORECASE)),
    ("pack", re.compile(_NUM + r"(?:pack|pk|count|ct)s?\b", re.IGNORECASE)),
]


def extract_unit_from_size(size: str | None) -> str | None:
    """Stricter unit extraction: only a unit that follows a quantity counts."""
    if not size:
        return None
    for unit, pattern in _UNIT_PATTERNS:
        if pattern.search(size):
            return unit
    return None


# ---------------------------------------------------------------------------
# Fractions and recipe quantities
# ---------------------------------------------------------------------------

FRACTION_TABLE: dict[str, float] = {
    "1/2": 0.5,
    "1/4": 0.25,
    "3/4": 0.75,
    "1/3": 0.33,
    "2/3": 0.67,
}

_VULGAR_FRACTIONS = {
    "½": "1/2", "¼": "1/4", "¾": "3/4", "⅓": "1/3", "⅔": "2/3",
    "⅛": "1/8", "⅜": "3/8", "⅝": "5/8", "⅞": "7/8",
}

_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)/(\d+)$")
_FRACTION_RE = re.compile(r"^(\d+)/(\d+)$")
_DECIMAL_RE = re.compile(r"^\d+(?:\.\d+)?$")


def _expand_vulgar(text: str) -> str:
    for symbol, plain in _VULGAR_FRACTIONS.items():
        text = text.replace(symbol, f" {plain}")
    return re.sub(r"\s+", " ", text).strip()


def _simple_fraction(num: str, den: str) -> float | None:
    try:
        numerator, denominator = int(num), int(den)
    except ValueError:
        # past the int() digit limit
        return math.inf
    key = f"{numerator}/{denominator}"
    if key in FRACTION_TABLE:
        return FRACTION_TABLE[key]
    if denominator == 0:
        return None
    try:
        return round(numerator / denominator, 2)
    except OverflowError:
        return math.inf


def fraction_to_decimal(text: str | None) -> float | None:
    """Convert "1/2", "1 1/2", "¾" or "2.25" to a float.

    None if not numeric; ``inf`` when the number is past float range.
    """
    if not text:
        return None
    s = _expand_vulgar(text)

    m = _MIXED_RE.match(s)
    if m:
        frac = _simple_fraction(m.group(2), m.group(3))
        if frac is None:
            return None
        try:
            return round(int(m.group(1)) + frac, 2)
        except (ValueError, OverflowError):
            return math.inf

    m = _FRACTION_RE.match(s)
    if m:
        return _simple_fraction(m.group(1), m.group(2))

    if _DECIMAL_RE.match(s):
        return float(s)
    return None


def format_quantity(value: float) -> str:
    """Render a number without trailing zeros: 2.0 → "2", 0.333 → "0.33"."""
    if not math.isfinite(value):
        return ""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)


def normalize_quantity(value: object) -> str:
    """Coerce an extracted quantity to its string form; never raises."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        if not value >= 0:
            return ""
        try:
            return format_quantity(float(value))
        except OverflowError:
            return ""
    text = str(value).strip()
    if not text:
        return ""
    number = fraction_to_decimal(text)
    if number is not None:
        return format_quantity(number)
    return text


# ---------------------------------------------------------------------------
# Recipe unit vocabulary
# ---------------------------------------------------------------------------

_RECIPE_UNIT_ALIASES: dict[str, str] = {
    "tsp": "teaspoon", "t": "teaspoon",
    "tbsp": "tablespoon", "tbs": "tablespoon", "tbl": "tablespoon",
    "c": "cup",
    "oz": "ounce", "fl oz": "fluid ounce",
    "lb": "pound", "lbs": "pound",
    "g": "gram", "gr": "gram",
    "kg": "kilogram",
    "ml": "milliliter", "millilitre": "milliliter",
    "l": "liter", "litre": "liter",
    "qt": "quart", "pt": "pint", "gal": "gallon",
    "pk": "pack", "ea": "each",
}

RECIPE_UNITS = frozenset(_RECIPE_UNIT_ALIASES.values()) | {
    "bottle", "bunch", "can", "clove", "dash", "each", "head", "jar",
    "package", "piece", "pinch", "slice", "sprig", "stick", "whole",
}


def standardize_recipe_unit(unit: str | None) -> str:
    """Map an extracted unit onto the recipe vocabulary (tbsp → tablespoon)."""
    if not unit:
        return ""
    s = unit.strip().rstrip(".")
    if s == "T":
        return "tablespoon"
    low = re.sub(r"\s+", " ", s.lower())
    if low in _RECIPE_UNIT_ALIASES:
        return _RECIPE_UNIT_ALIASES[low]
    if low in RECIPE_UNITS:
        return low
    # Plurals: "pinches" → "pinch", "cups" → "cup", "tbsps" → "tablespoon"
    for suffix in ("es", "s"):
        if low.endswith(suffix) and len(low) > len(suffix):
            stem = low[: -len(suffix)]
            if stem in RECIPE_UNITS:
                return stem
            if stem in _RECIPE_UNIT_ALIASES:
                return _RECIPE_UNIT_ALIASES[stem]
    return low


_QTY_UNIT_RE = re.compile(
    r"^\s*(?P<qty>\d+\s+\d+/\d+|\d+[½¼¾⅓⅔⅛⅜⅝⅞]|\d+/\d+|\d+(?:\.\d+)?|[½¼¾⅓⅔⅛⅜⅝⅞])"
    r"\s*(?P<unit>[^\d\s].*)?$"
)


def split_quantity_unit(text: str | None) -> tuple[str, str | None]:
    """Split "2 cups" into ("2", "cup"); unparseable text is returned as-is."""
    if not text:
        return "", None
    m = _QTY_UNIT_RE.match(text)
    if not m:
        return text.strip(), None
    quantity = normalize_quantity(m.group("qty"))
    raw_unit = (m.group("unit") or "").strip()
    return quantity, standardize_recipe_unit(raw_unit) if raw_unit else None
