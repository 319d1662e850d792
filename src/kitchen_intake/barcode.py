"""Barcode format detection and checksum validation.

Supported formats by digit count (after stripping spaces and hyphens):
  12 → UPC-A   (weights 3/1, check digit last)
  13 → EAN-13  (weights 1/3, check digit last)
   8 → EAN-8   (weights 3/1, check digit last)
   6 → UPC-E   (format only, no checksum)

Validation never raises for customer input: an unusable code comes back as
``is_valid=False`` with a human-readable reason.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

UPC_A = "UPC-A"
EAN_13 = "EAN-13"
EAN_8 = "EAN-8"
UPC_E = "UPC-E"

_STRIP_RE = re.compile(r"[\s-]")
_DIGITS_RE = re.compile(r"^[0-9]+$")

# Weight applied to even-indexed digits; odd indexes get the other one.
_EVEN_WEIGHT = {UPC_A: 3, EAN_8: 3, EAN_13: 1}

_CHECKSUM_FORMATS = {12: UPC_A, 13: EAN_13, 8: EAN_8}


@dataclass(frozen=True)
class BarcodeValidation:
    """Result of validating one barcode string."""

    is_valid: bool
    code: str
    format: str | None = None
    reason: str | None = None


def clean_barcode(barcode: str) -> str:
    """Remove spaces and hyphens from a scanned barcode."""
    return _STRIP_RE.sub("", barcode)


def compute_check_digit(payload: str, fmt: str) -> int:
    """Compute the check digit for ``payload`` (all digits except the check digit)."""
    even_weight = _EVEN_WEIGHT[fmt]
    odd_weight = 4 - even_weight
    total = 0
    for i, ch in enumerate(payload):
        total += int(ch) * (even_weight if i % 2 == 0 else odd_weight)
    return (10 - total % 10) % 10


def _checksum_ok(code: str, fmt: str) -> bool:
    return compute_check_digit(code[:-1], fmt) == int(code[-1])


def validate_barcode(barcode: str) -> BarcodeValidation:
    """Validate barcode format and checksum."""
    if not isinstance(barcode, str):
        raise TypeError(f"barcode must be a str, got {type(barcode).__name__}")

    code = clean_barcode(barcode)
    if not _DIGITS_RE.match(code):
        return BarcodeValidation(
            is_valid=False, code=code, reason="Barcode must contain only digits",
        )

    length = len(code)
    fmt = _CHECKSUM_FORMATS.get(length)
    if fmt is not None:
        if _checksum_ok(code, fmt):
            return BarcodeValidation(is_valid=True, code=code, format=fmt)
        return BarcodeValidation(
            is_valid=False, code=code, reason=f"Invalid {fmt} checksum",
        )

    if length == 6:
        return BarcodeValidation(is_valid=True, code=code, format=UPC_E)

    return BarcodeValidation(
        is_valid=False,
        code=code,
        reason=f"Unsupported barcode length: {length} digits",
    )


def barcodes_equal(a: str | None, b: str | None) -> bool:
    """True when both barcodes are present and identical after cleaning."""
    if not a or not b:
        return False
    ca, cb = clean_barcode(a), clean_barcode(b)
    return bool(ca) and ca == cb
