"""Tests for recipe unit conversion."""

import logging

import pytest

from kitchen_intake.conversions import (
    CALCULATED,
    CELSIUS,
    DATABASE,
    DIRECT,
    ESTIMATED,
    FAHRENHEIT,
    batch_convert_units,
    conversion_suggestions,
    convert_temperature,
    convert_unit,
    normalize_conversion_unit,
)


class TestNormalizeConversionUnit:
    @pytest.mark.parametrize(
        ("raw", "code"),
        [
            ("Tablespoons", "tbsp"),
            ("T", "tbsp"),
            ("tsp", "tsp"),
            ("grams", "g"),
            ("lbs", "lb"),
            ("fluid ounces", "fl oz"),
            ("c", "cup"),
            ("pieces", "units"),
            ("°F", FAHRENHEIT),
            ("Celsius", CELSIUS),
        ],
    )
    def test_codes(self, raw, code):
        assert normalize_conversion_unit(raw) == code

    def test_blank_is_count(self):
        assert normalize_conversion_unit("") == "units"
        assert normalize_conversion_unit(None) == "units"


class TestConvertUnit:
    def test_same_unit(self):
        result = convert_unit(2, "cups", "cup")
        assert result.success
        assert result.converted_amount == 2.0
        assert result.conversion_factor == 1.0
        assert result.confidence == 1.0

    def test_direct(self):
        result = convert_unit(2, "lb", "g")
        assert result.converted_amount == pytest.approx(907.184)
        assert result.conversion_factor == 453.592
        assert result.conversion_type == DIRECT
        assert result.confidence == 1.0

    def test_long_names(self):
        result = convert_unit(1, "Tablespoons", "milliliters")
        assert result.from_unit == "tbsp"
        assert result.to_unit == "ml"
        assert result.converted_amount == 15.0

    def test_reverse(self):
        result = convert_unit(500, "g", "kg")
        assert result.converted_amount == pytest.approx(0.5)
        assert result.conversion_type == DIRECT
        assert result.confidence == 1.0

    def test_via_grams(self):
        result = convert_unit(1, "kg", "lb")
        assert result.converted_amount == pytest.approx(2.20462, abs=1e-5)
        assert result.conversion_type == CALCULATED
        assert result.confidence == 0.95
        assert result.notes == "Via g"

    def test_via_milliliters(self):
        result = convert_unit(3, "tsp", "tbsp")
        assert result.converted_amount == pytest.approx(1.0)
        assert result.notes == "Via ml"

    def test_count(self):
        assert convert_unit(2, "dozen", "each").converted_amount == 24.0

    def test_temperature(self):
        to_celsius = convert_unit(350, "°F", "celsius")
        assert to_celsius.converted_amount == pytest.approx(176.667, abs=1e-3)
        assert to_celsius.conversion_factor is None
        assert to_celsius.confidence == 1.0
        assert convert_unit(100, "Celsius", "F").converted_amount == pytest.approx(212.0)

    def test_density_estimate(self):
        result = convert_unit(2, "cup", "g", ingredient="All-Purpose Flour")
        assert result.converted_amount == pytest.approx(240.0)
        assert result.conversion_type == ESTIMATED
        assert result.confidence == 0.7
        assert result.notes == "Estimated based on typical flour density"

    def test_density_from_other_volume(self):
        result = convert_unit(1, "tbsp", "g", ingredient="granulated sugar")
        assert result.converted_amount == pytest.approx(12.5)

    def test_density_needs_ingredient(self):
        result = convert_unit(1, "cup", "g")
        assert not result.success
        assert result.converted_amount == 1.0
        assert result.confidence == 0.0
        assert result.notes == "No conversion available from cup to g"

    def test_unknown_ingredient_density(self):
        assert not convert_unit(1, "cup", "g", ingredient="honey").success

    def test_lookup(self):
        factors = {("pack", "units"): 6.0}
        result = convert_unit(2, "pack", "each", lookup=lambda s, t: factors.get((s, t)))
        assert result.converted_amount == 12.0
        assert result.conversion_type == DATABASE
        assert result.confidence == 0.9

    def test_lookup_after_table(self):
        calls = []
        result = convert_unit(1, "lb", "g", lookup=lambda s, t: calls.append((s, t)))
        assert result.conversion_type == DIRECT
        assert calls == []

    def test_lookup_miss_falls_through(self):
        result = convert_unit(1, "kg", "lb", lookup=lambda s, t: None)
        assert result.conversion_type == CALCULATED

    @pytest.mark.parametrize("amount", ["2", True, None])
    def test_non_number_raises(self, amount):
        with pytest.raises(TypeError):
            convert_unit(amount, "cup", "ml")


class TestConvertTemperature:
    def test_freezing(self):
        assert convert_temperature(32, FAHRENHEIT, CELSIUS) == 0.0
        assert convert_temperature(0, CELSIUS, FAHRENHEIT) == 32.0

    def test_not_temperature(self):
        assert convert_temperature(1, "cup", "ml") is None


class TestBatchConvertUnits:
    def test_in_order(self, caplog):
        with caplog.at_level(logging.INFO, logger="kitchen_intake.conversions"):
            results = batch_convert_units([
                (1, "kg", "g"),
                (2, "cup", "g", "rice"),
                (1, "pack", "g"),
            ])
        assert [r.converted_amount for r in results] == pytest.approx([1000.0, 360.0, 1.0])
        assert [r.success for r in results] == [True, True, False]
        assert "Converted 2/3 quantities" in caplog.text


class TestConversionSuggestions:
    def test_weight(self):
        assert conversion_suggestions("grams") == ["kg", "oz", "lb"]

    def test_volume(self):
        assert conversion_suggestions("Tablespoons") == ["tsp", "ml", "cup"]

    def test_temperature(self):
        assert conversion_suggestions("fahrenheit") == [CELSIUS]

    def test_count(self):
        assert conversion_suggestions(None) == ["dozen", "pair"]

    def test_unknown(self):
        assert conversion_suggestions("pack") == []

    def test_returns_copy(self):
        conversion_suggestions("g").append("stone")
        assert conversion_suggestions("g") == ["kg", "oz", "lb"]
