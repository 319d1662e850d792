"""Tests for unit and quantity normalization."""

import math

import pytest

from kitchen_intake.units import (
    DEFAULT_UNIT,
    INVENTORY_UNITS,
    extract_unit_from_size,
    format_quantity,
    fraction_to_decimal,
    normalize_quantity,
    parse_quantity_from_size,
    parse_unit_from_size,
    split_quantity_unit,
    standardize_recipe_unit,
)


class TestParseUnitFromSize:
    @pytest.mark.parametrize(
        ("size", "unit"),
        [
            ("500ml", "ml"),
            ("16 oz", "oz"),
            ("2 lbs", "lb"),
            ("1 gallon", "gal"),
            ("12 pack", "pack"),
            ("24 count", "pack"),
            ("2 liters", "l"),
            ("1 kg", "kg"),
        ],
    )
    def test_keywords(self, size, unit):
        assert parse_unit_from_size(size) == unit

    def test_default(self):
        assert parse_unit_from_size(None) == DEFAULT_UNIT
        assert parse_unit_from_size("") == DEFAULT_UNIT
        assert parse_unit_from_size("assorted") == DEFAULT_UNIT

    @pytest.mark.parametrize("unit", sorted(INVENTORY_UNITS))
    def test_idempotent(self, unit):
        assert parse_unit_from_size(unit) == unit
        assert parse_unit_from_size(parse_unit_from_size(unit)) == unit


class TestParseQuantityFromSize:
    def test_integer(self):
        assert parse_quantity_from_size("500ml") == 500

    def test_decimal(self):
        assert parse_quantity_from_size("2.5 oz") == 2.5

    def test_default(self):
        assert parse_quantity_from_size("each") == 1
        assert parse_quantity_from_size(None) == 1


class TestExtractUnitFromSize:
    def test_requires_number(self):
        assert extract_unit_from_size("ounces") is None

    def test_fluid_ounces(self):
        assert extract_unit_from_size("12 fl oz") == "oz"

    def test_word_boundary(self):
        assert extract_unit_from_size("1 gal") == "gal"
        assert extract_unit_from_size("500ml") == "ml"

    def test_count_abbreviation(self):
        assert extract_unit_from_size("24 ct") == "pack"

    def test_missing(self):
        assert extract_unit_from_size(None) is None


class TestFractions:
    @pytest.mark.parametrize(
        ("text", "value"),
        [
            ("1/2", 0.5),
            ("1 1/2", 1.5),
            ("1/3", 0.33),
            ("2 2/3", 2.67),
            ("½", 0.5),
            ("1½", 1.5),
            ("2.25", 2.25),
            ("3", 3.0),
        ],
    )
    def test_values(self, text, value):
        assert fraction_to_decimal(text) == pytest.approx(value)

    def test_not_numeric(self):
        assert fraction_to_decimal("to taste") is None
        assert fraction_to_decimal("1/0") is None
        assert fraction_to_decimal(None) is None

    def test_past_float_range(self):
        assert fraction_to_decimal("9" * 400 + "/1") == math.inf
        assert fraction_to_decimal("1/" + "9" * 400) == 0.0


class TestNormalizeQuantity:
    def test_missing(self):
        assert normalize_quantity(None) == ""

    def test_number(self):
        assert normalize_quantity(2) == "2"
        assert normalize_quantity(0.333) == "0.33"

    def test_fraction_text(self):
        assert normalize_quantity("1 1/2") == "1.5"

    def test_free_text_kept(self):
        assert normalize_quantity("a pinch") == "a pinch"

    def test_negative_dropped(self):
        assert normalize_quantity(-1) == ""

    def test_past_float_range(self):
        assert normalize_quantity(10**400) == ""
        assert normalize_quantity("9" * 400 + "/1") == ""
        assert normalize_quantity("9" * 400 + " 1/2") == ""

    def test_format(self):
        assert format_quantity(2.0) == "2"
        assert format_quantity(float("nan")) == ""


class TestRecipeUnits:
    @pytest.mark.parametrize(
        ("raw", "unit"),
        [
            ("tsp", "teaspoon"),
            ("Tbsp", "tablespoon"),
            ("T", "tablespoon"),
            ("cups", "cup"),
            ("lbs", "pound"),
            ("pinches", "pinch"),
            ("cloves", "clove"),
            ("oz.", "ounce"),
        ],
    )
    def test_standardize(self, raw, unit):
        assert standardize_recipe_unit(raw) == unit

    def test_unknown_lowercased(self):
        assert standardize_recipe_unit("Handful") == "handful"

    def test_blank(self):
        assert standardize_recipe_unit(None) == ""

    def test_split(self):
        assert split_quantity_unit("2 cups") == ("2", "cup")
        assert split_quantity_unit("1 1/2 tbsp") == ("1.5", "tablespoon")
        assert split_quantity_unit("3") == ("3", None)

    def test_split_unparseable(self):
        assert split_quantity_unit("some") == ("some", None)
