"""Tests for extraction response parsing helpers."""

import math

from kitchen_intake.extraction import (
    optional_number,
    optional_str,
    parse_extraction_response,
    required_str,
)


class TestParseExtractionResponse:
    def test_plain_json(self):
        assert parse_extraction_response('{"recipe_name": "Soup"}') == {"recipe_name": "Soup"}

    def test_code_fence(self):
        text = '```json\n{"items": []}\n```'
        assert parse_extraction_response(text) == {"items": []}

    def test_surrounding_prose(self):
        text = 'Here is the recipe: {"recipe_name": "Soup"} Let me know!'
        assert parse_extraction_response(text) == {"recipe_name": "Soup"}

    def test_not_an_object(self):
        assert parse_extraction_response("[1, 2]") is None

    def test_no_json(self):
        assert parse_extraction_response("Sorry, I could not read that.") is None

    def test_broken_json(self):
        assert parse_extraction_response('{"recipe_name": }') is None

    def test_empty(self):
        assert parse_extraction_response(None) is None
        assert parse_extraction_response("") is None


class TestCoercion:
    def test_optional_str(self):
        assert optional_str("  Soup ") == "Soup"
        assert optional_str("   ") is None
        assert optional_str(4) == "4"
        assert optional_str(True) is None
        assert optional_str(["x"]) is None

    def test_required_str(self):
        assert required_str(None) == ""

    def test_optional_number(self):
        assert optional_number("2.5") == 2.5
        assert optional_number(3) == 3.0
        assert optional_number("abc") is None
        assert optional_number(True) is None
        assert optional_number(math.inf) is None
        assert optional_number("") is None

    def test_optional_number_past_float_range(self):
        assert optional_number(10**400) is None
        assert optional_number("9" * 400) is None
