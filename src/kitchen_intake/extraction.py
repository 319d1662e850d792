"""Helpers for consuming text-extraction (LLM/OCR) output.

The extractor returns JSON text, sometimes wrapped in markdown code fences or
surrounded by prose.  Everything here degrades to ``None``/defaults instead of
raising: the results feed a human-review screen.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\n?")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def parse_extraction_response(text: str | None) -> dict[str, Any] | None:
    """Parse extractor output into a dict; None when no JSON object is found."""
    if not text:
        return None
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        m = _OBJECT_RE.search(text)
        if not m:
            logger.warning("Extraction response contained no JSON object")
            return None
        try:
            parsed = json.loads(m.group(0))
        except json.JSONDecodeError as e:
            logger.warning("Extraction response is not valid JSON: %s", e)
            return None
    if not isinstance(parsed, dict):
        logger.warning("Extraction response is %s, not an object", type(parsed).__name__)
        return None
    return parsed


def as_mapping(raw: object) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def as_list(value: object) -> list:
    return value if isinstance(value, list) else []


def optional_str(value: object) -> str | None:
    """Non-blank strings survive (stripped); everything else becomes None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def required_str(value: object) -> str:
    return optional_str(value) or ""


def optional_number(value: object) -> float | None:
    """Numbers and numeric strings → float; bools, blanks and junk → None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None
