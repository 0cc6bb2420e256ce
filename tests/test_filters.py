"""Tests for maskedit.core.filters — whole-string filter categories."""

from __future__ import annotations

import pytest

from maskedit.core.filters import (
    BaseFilter,
    FilterCategory,
    FilterRegistry,
    RegexFilter,
    validate,
)
from maskedit.errors import InvalidFilterError


class TestCategories:
    @pytest.mark.parametrize("category, text, expected", [
        (FilterCategory.ANY, "anything at all!", True),
        (FilterCategory.DIGITS, "0123", True),
        (FilterCategory.DIGITS, "12a", False),
        (FilterCategory.DIGITS, "1²", False),
        (FilterCategory.DIGITS, "\u0663", False),
        (FilterCategory.LETTERS, "abcXYZ", True),
        (FilterCategory.LETTERS, "ab1", False),
        (FilterCategory.ALPHANUMERIC, "ab12", True),
        (FilterCategory.ALPHANUMERIC, "ab 12", False),
        (FilterCategory.HEXADECIMAL, "deadBEEF09", True),
        (FilterCategory.HEXADECIMAL, "xyz", False),
    ])
    def test_validate(self, category, text, expected):
        assert validate(category, text) is expected

    @pytest.mark.parametrize("category", list(FilterCategory)[:-1])
    def test_empty_text_is_valid(self, category):
        assert validate(category, "") is True

    def test_custom_pattern_full_match(self):
        assert validate(FilterCategory.CUSTOM, "AB-12", r"[A-Z]{2}-\d*") is True
        assert validate(FilterCategory.CUSTOM, "AB-12x", r"[A-Z]{2}-\d*") is False

    def test_custom_without_pattern(self):
        with pytest.raises(InvalidFilterError):
            validate(FilterCategory.CUSTOM, "x")

    def test_custom_bad_pattern(self):
        with pytest.raises(InvalidFilterError, match="Invalid filter pattern"):
            validate(FilterCategory.CUSTOM, "x", "[unclosed")


class TestParse:
    @pytest.mark.parametrize("name, expected", [
        ("digits", FilterCategory.DIGITS),
        ("DigitsOnly", FilterCategory.DIGITS),
        ("letters_only", FilterCategory.LETTERS),
        ("hex", FilterCategory.HEXADECIMAL),
        ("ANY", FilterCategory.ANY),
        (FilterCategory.CUSTOM, FilterCategory.CUSTOM),
    ])
    def test_names(self, name, expected):
        assert FilterCategory.parse(name) is expected

    @pytest.mark.parametrize("name", ["numbers", "", 3])
    def test_unknown(self, name):
        with pytest.raises(InvalidFilterError):
            FilterCategory.parse(name)

    def test_string_category_in_validate(self):
        assert validate("digits", "42") is True


class TestRegistry:
    def test_register_overrides_category(self):
        class Upper(BaseFilter):
            def is_text_valid(self, text):
                return text.isupper()

        registry = FilterRegistry()
        registry.register(FilterCategory.LETTERS, Upper())
        assert registry.validate(FilterCategory.LETTERS, "ABC") is True
        assert registry.validate(FilterCategory.LETTERS, "abc") is False
        # default registry untouched
        assert validate(FilterCategory.LETTERS, "abc") is True

    def test_custom_cannot_be_registered(self):
        with pytest.raises(InvalidFilterError):
            FilterRegistry().register(FilterCategory.CUSTOM, RegexFilter(".*"))
