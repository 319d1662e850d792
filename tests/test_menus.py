"""Tests for menu extraction normalization and layout detection."""

import pytest

from kitchen_intake.menus import (
    detect_menu_format,
    normalize_menu,
    normalize_menu_item,
    parse_menu_response,
    parse_percentage,
    parse_price,
)


class TestParsePrice:
    @pytest.mark.parametrize(
        ("raw", "price"),
        [
            ("$1,234.50", 1234.5),
            ("12.50", 12.5),
            (14, 14.0),
            ("abc", 0.0),
            (-5, 0.0),
            (None, 0.0),
            (True, 0.0),
            (10**400, 0.0),
        ],
    )
    def test_values(self, raw, price):
        assert parse_price(raw) == price


class TestParsePercentage:
    def test_percent_string(self):
        assert parse_percentage("28%") == 28.0

    def test_fraction(self):
        assert parse_percentage(0.28) == 28.0

    def test_clamped(self):
        assert parse_percentage(150) == 100.0

    def test_unreadable(self):
        assert parse_percentage("n/a") is None
        assert parse_percentage(None) is None


class TestNormalizeMenuItem:
    def test_full_row(self):
        item = normalize_menu_item({
            "item_name": "caesar salad",
            "category": "salad",
            "price": "$14.00",
            "target_food_cost_pct": "28%",
            "confidence": 0.95,
        })
        assert item.item_name == "Caesar Salad"
        assert item.category == "Salads"
        assert item.price == 14.0
        assert item.target_food_cost_pct == 28.0
        assert item.confidence == 0.95

    def test_missing_category_is_inferred(self):
        item = normalize_menu_item({"item_name": "Grilled Salmon", "price": 24})
        assert item.category == "seafood"

    def test_garbage(self):
        item = normalize_menu_item("not a row")
        assert item.item_name == ""
        assert item.price == 0.0

    def test_huge_numbers(self):
        item = normalize_menu_item({
            "item_name": "Fries", "price": 10**400, "confidence": int("9" * 400),
        })
        assert item.price == 0.0
        assert item.confidence == 0.5


class TestNormalizeMenu:
    def test_items_and_warnings(self):
        result = normalize_menu({
            "items": [
                {"item_name": "Fries", "price": 4.5, "confidence": 0.9},
                {"item_name": "Soup of the Day", "price": "market", "confidence": 0.3},
                {"price": 9},
            ],
            "warnings": ["Row 7 unreadable"],
            "errors": [],
        })
        assert result.total_detected == 2
        assert result.parse_confidence == pytest.approx(0.6)
        assert result.warnings == [
            "Row 7 unreadable",
            "1 row(s) without an item name skipped",
            "Low confidence score (60%) - review items before importing",
            "1 item(s) missing a valid price",
        ]

    def test_empty(self):
        result = normalize_menu({"items": []})
        assert result.items == []
        assert result.parse_confidence == 0.0
        assert "No menu items detected - check the spreadsheet layout" in result.warnings

    def test_not_a_dict(self):
        result = normalize_menu("text")
        assert "Extraction output was not a JSON object" in result.warnings

    def test_extractor_errors_kept(self):
        result = normalize_menu({"items": [], "errors": ["Sheet was empty", 3]})
        assert result.errors == ["Sheet was empty"]


class TestParseMenuResponse:
    def test_json(self):
        result = parse_menu_response('{"items": [{"item_name": "Fries", "price": 4.5, "confidence": 0.9}]}')
        assert result.items[0].item_name == "Fries"

    def test_unparseable(self):
        result = parse_menu_response("nope")
        assert result.items == []
        assert result.errors == ["Failed to parse menu extraction response as JSON"]


class TestDetectMenuFormat:
    def test_detailed(self):
        rows = [
            ["Item Name", "Category", "Price", "Target Cost %", "Description"],
            ["Caesar Salad", "Salads", "$14.00", "28%", "Romaine, parmesan"],
        ]
        result = detect_menu_format(rows)
        assert result.format == "detailed"
        assert result.confidence == 0.85
        assert len(result.detected_columns) == 4

    def test_menu_engineering(self):
        rows = [["Item", "Price", "Food Cost %"], ["Burger", "$15.00", "32%"]]
        assert detect_menu_format(rows).format == "menu_engineering"

    def test_simple(self):
        rows = [["Item", "Price"], ["Fries", "4.50"]]
        result = detect_menu_format(rows)
        assert result.format == "simple"
        assert result.suggestions == []

    def test_pos_export(self):
        rows = [["Item", "Price", "POS Code"], ["Fries", "4.50", "A12"]]
        assert detect_menu_format(rows).format == "pos_export"

    def test_no_rows(self):
        result = detect_menu_format([])
        assert result.format == "unknown"
        assert result.suggestions == ["No data provided"]

    def test_unknown_layout(self):
        result = detect_menu_format([["foo", "bar"], ["1", "2"]])
        assert result.format == "unknown"
        assert "No menu item names detected - check item name column" in result.suggestions
