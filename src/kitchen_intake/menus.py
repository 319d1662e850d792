"""Validate and normalize menu extraction output from spreadsheet dumps.

Extractor contract::

    {"items": [{"item_name": str, "category": str, "price": number | str,
                "target_food_cost_pct": number | str, "description": str,
                "confidence": number, "raw_data": str}, ...],
     "warnings": [str, ...], "errors": [str, ...]}

Parse confidence is the mean of the item confidences, the same policy the
recipe normalizer uses.
"""

from __future__ import annotations

import logging
import math
import re

from .categorizer import categorize_product, normalize_item_name, normalize_menu_category
from .config import settings
from .confidence import average_confidence, clamp_confidence
from .extraction import as_list, as_mapping, optional_number, optional_str, parse_extraction_response
from .schemas import MenuFormat, MenuParseResult, ParsedMenuItem

logger = logging.getLogger(__name__)


def parse_price(value: object) -> float:
    """Strip currency formatting ("$1,234.50" → 1234.5); bad or negative → 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        cleaned = re.sub(r"[^\d.]", "", value)
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def parse_percentage(value: object) -> float | None:
    """Parse "28%" or 0.28 as 28; clamped to 0–100, None when unreadable."""
    if isinstance(value, str):
        value = value.replace("%", "").strip()
    number = optional_number(value)
    if number is None:
        return None
    if 0 < number <= 1:
        return float(round(number * 100))
    return max(0.0, min(100.0, number))


def normalize_menu_item(raw: object) -> ParsedMenuItem:
    """Coerce one extracted menu row; never raises."""
    data = as_mapping(raw)
    name = normalize_item_name(optional_str(data.get("item_name")))
    description = optional_str(data.get("description"))
    category = normalize_menu_category(data.get("category")) or categorize_product(
        name, None, description,
    )
    return ParsedMenuItem(
        item_name=name,
        category=category,
        price=parse_price(data.get("price")),
        target_food_cost_pct=parse_percentage(data.get("target_food_cost_pct")),
        description=description,
        raw_data=optional_str(data.get("raw_data")),
        confidence=clamp_confidence(data.get("confidence")),
    )


def _string_list(value: object) -> list[str]:
    return [s.strip() for s in as_list(value) if isinstance(s, str) and s.strip()]


def normalize_menu(raw: object, low_confidence: float | None = None) -> MenuParseResult:
    """Validate a menu extraction dict into a :class:`MenuParseResult`."""
    threshold = settings.low_confidence_threshold if low_confidence is None else low_confidence
    data = as_mapping(raw)
    warnings = _string_list(data.get("warnings"))
    errors = _string_list(data.get("errors"))
    if not isinstance(raw, dict):
        warnings.append("Extraction output was not a JSON object")

    items: list[ParsedMenuItem] = []
    skipped = 0
    for entry in as_list(data.get("items")):
        item = normalize_menu_item(entry)
        if not item.item_name:
            skipped += 1
            continue
        items.append(item)

    parse_confidence = average_confidence(i.confidence for i in items)

    if skipped:
        warnings.append(f"{skipped} row(s) without an item name skipped")
    if not items:
        warnings.append("No menu items detected - check the spreadsheet layout")
    elif parse_confidence < threshold:
        warnings.append(
            f"Low confidence score ({round(parse_confidence * 100)}%) - review items before importing"
        )
    unpriced = [i for i in items if i.price == 0]
    if unpriced:
        warnings.append(f"{len(unpriced)} item(s) missing a valid price")

    logger.debug(
        "Normalized menu: %d items, confidence %.2f, %d warnings",
        len(items), parse_confidence, len(warnings),
    )
    return MenuParseResult(
        items=items,
        total_detected=len(items),
        parse_confidence=parse_confidence,
        warnings=warnings,
        errors=errors,
    )


def parse_menu_response(response_text: str | None) -> MenuParseResult:
    """Normalize extractor response text; unusable text yields an empty result."""
    parsed = parse_extraction_response(response_text)
    if parsed is None:
        return MenuParseResult(
            errors=["Failed to parse menu extraction response as JSON"],
            warnings=["No menu items detected - check the spreadsheet layout"],
        )
    return normalize_menu(parsed)


# ---------------------------------------------------------------------------
# Spreadsheet layout detection
# ---------------------------------------------------------------------------

_COLUMN_PATTERNS: dict[str, re.Pattern[str]] = {
    "name": re.compile(r"^(item|name|product|dish|menu)", re.IGNORECASE),
    "price": re.compile(r"^(price|cost|amount|\$)", re.IGNORECASE),
    "category": re.compile(r"^(category|type|section|group)", re.IGNORECASE),
    "description": re.compile(r"^(desc|description|notes|details)", re.IGNORECASE),
    "food_cost": re.compile(r"^(food.?cost|cost.?%|margin)", re.IGNORECASE),
}

_PRICE_CELL_RE = re.compile(r"\$?\d+\.?\d*")
_POS_HEADER_RE = re.compile(r"pos|export|system", re.IGNORECASE)


def detect_menu_format(rows: list[list[object]]) -> MenuFormat:
    """Guess the spreadsheet layout from its header row and first data rows."""
    if not rows:
        return MenuFormat(format="unknown", confidence=0.0, suggestions=["No data provided"])

    header = ["" if cell is None else str(cell) for cell in rows[0]]
    samples = [["" if c is None else str(c) for c in row] for row in rows[1:4]]

    detected: list[str] = []
    kinds: set[str] = set()
    for index, cell in enumerate(header):
        for kind, pattern in _COLUMN_PATTERNS.items():
            if pattern.search(cell):
                detected.append(f"{kind}: column {index + 1} ({cell})")
                kinds.add(kind)

    price_seen = any(_PRICE_CELL_RE.search(c) for row in samples for c in row)
    name_seen = any(
        len(c) > 3 and re.search(r"[a-zA-Z]", c) for row in samples for c in row
    )

    suggestions: list[str] = []
    fmt, confidence = "unknown", 0.0
    if len(detected) >= 2 and price_seen and name_seen:
        if "food_cost" in kinds:
            fmt, confidence = "menu_engineering", 0.9
        elif len(detected) >= 4:
            fmt, confidence = "detailed", 0.85
        elif any(_POS_HEADER_RE.search(h) for h in header):
            fmt, confidence = "pos_export", 0.8
        else:
            fmt, confidence = "simple", 0.7
    else:
        suggestions.append("Consider adding clear column headers")
        suggestions.append("Ensure price and item name columns are present")

    if not price_seen:
        suggestions.append("No price data detected - check price column format")
    if not name_seen:
        suggestions.append("No menu item names detected - check item name column")

    return MenuFormat(
        format=fmt,
        confidence=confidence,
        detected_columns=detected,
        suggestions=suggestions,
    )
