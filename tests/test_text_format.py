"""
Tests for field-name formatting and category ordering.

Run with: python -m pytest tests/test_text_format.py -v
"""

import doctest

import pytest

from comfort_horizon import text_format
from comfort_horizon.constants import (
    CAT_ACOUSTIC, CAT_AIR, CAT_LUMINOUS, CAT_THERMAL,
)
from comfort_horizon.text_format import (
    format_field_name, format_with_unicode_subscripts,
    sort_categories_by_order,
)


class TestFieldNames:
    @pytest.mark.parametrize("raw, expected", [
        ("noise_level", "NOISE LEVEL"),
        ("CO_2", "CO 2"),
        ("temperature", "TEMPERATURE"),
    ])
    def test_format_field_name(self, raw, expected):
        assert format_field_name(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("CO_2", "CO₂"),
        ("CO_{2}", "CO₂"),
        ("PM_{2.5}", "PM₂.₅"),
        ("PM_10", "PM₁₀"),
        ("noise_level", "noise level"),
        ("m^{3}", "m³"),
    ])
    def test_unicode_subscripts(self, raw, expected):
        assert format_with_unicode_subscripts(raw) == expected

    def test_docstring_examples(self):
        result = doctest.testmod(text_format)
        assert result.failed == 0


class TestCategoryOrder:
    def test_preferred_order(self):
        cats = [CAT_THERMAL, CAT_ACOUSTIC, CAT_AIR, CAT_LUMINOUS]
        assert sort_categories_by_order(cats) == [
            CAT_LUMINOUS, CAT_AIR, CAT_ACOUSTIC, CAT_THERMAL,
        ]

    def test_unknown_keep_natural_order_after_known(self):
        cats = ["Zeta", CAT_THERMAL, "Alpha", CAT_AIR]
        assert sort_categories_by_order(cats) == [
            CAT_AIR, CAT_THERMAL, "Zeta", "Alpha",
        ]

    def test_subset_and_empty(self):
        assert sort_categories_by_order([CAT_THERMAL]) == [CAT_THERMAL]
        assert sort_categories_by_order([]) == []
