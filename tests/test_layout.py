"""
Tests for row layout, total height and the expanded-field toggle.

Run with: python -m pytest tests/test_layout.py -v
"""

from datetime import datetime

import pytest

from comfort_horizon.data_model import ChartDimensions, Record, field_key
from comfort_horizon.layout import (
    ExpandedField, compute_total_height, figure_rect, iter_row_layout,
    row_layout,
)


def _records(category, *fields):
    return [Record(i, datetime(2024, 1, 1), category, f, 1.0, 1.0)
            for i, f in enumerate(fields, start=1)]


@pytest.fixture
def grouped():
    return {
        "Air quality": _records("Air quality", "CO_2", "tvoc"),
        "Thermal comfort": _records("Thermal comfort", "temperature"),
    }


class TestExpandedField:
    def test_starts_collapsed(self):
        assert ExpandedField().key is None

    def test_toggle_expands_then_collapses(self):
        state = ExpandedField()
        assert state.toggle("a|x") == "a|x"
        assert state.is_expanded("a|x")
        assert state.toggle("a|x") is None
        assert not state.is_expanded("a|x")

    def test_expanding_another_replaces(self):
        state = ExpandedField("a|x")
        state.toggle("a|y")
        assert state.key == "a|y"
        assert not state.is_expanded("a|x")

    def test_clear(self):
        state = ExpandedField("a|x")
        state.clear()
        assert state.key is None


class TestTotalHeight:
    def test_two_categories_one_field_each(self):
        grouped = {
            "Air quality": _records("Air quality", "CO_2"),
            "Thermal comfort": _records("Thermal comfort", "temperature"),
        }
        cats = list(grouped)
        assert compute_total_height(cats, grouped, 40) == 140

    def test_expanded_row_uses_expanded_height(self, grouped):
        cats = list(grouped)
        key = field_key("Air quality", "tvoc")
        assert compute_total_height(cats, grouped, 40, key, 200) == (
            40 + 200 + 30 + 40 + 30
        )

    def test_unknown_expanded_key_changes_nothing(self, grouped):
        cats = list(grouped)
        assert (compute_total_height(cats, grouped, 40, "nope|nope")
                == compute_total_height(cats, grouped, 40))

    def test_empty(self):
        assert compute_total_height([], {}, 40) == 0

    def test_matches_last_row(self, grouped):
        cats = list(grouped)
        rows = row_layout(cats, grouped, 40)
        last = rows[-1]
        assert compute_total_height(cats, grouped, 40) == (
            last.y_offset + last.height + 30
        )


class TestRowLayout:
    def test_offsets(self, grouped):
        rows = list(iter_row_layout(list(grouped), grouped, 40))
        assert [(r.field, r.y_offset) for r in rows] == [
            ("CO_2", 0), ("tvoc", 40), ("temperature", 110),
        ]
        assert all(not r.expanded for r in rows)

    def test_keys(self, grouped):
        rows = row_layout(list(grouped), grouped, 40)
        assert rows[0].key == "Air quality|CO_2"

    def test_expanded_shifts_following_rows(self, grouped):
        key = field_key("Air quality", "CO_2")
        rows = row_layout(list(grouped), grouped, 40, key, 200)
        assert rows[0].expanded and rows[0].height == 200
        assert rows[1].y_offset == 200
        assert rows[2].y_offset == 270

    def test_category_order_follows_argument(self, grouped):
        rows = row_layout(["Thermal comfort", "Air quality"], grouped, 40)
        assert rows[0].category == "Thermal comfort"


class TestFigureRect:
    def test_rect(self):
        dims = ChartDimensions(width=1000, margin_top=10, margin_left=100,
                               margin_right=0)
        left, bottom, width, height = figure_rect(dims, 200, 40, 50)
        assert left == pytest.approx(0.1)
        assert width == pytest.approx(0.9)
        assert height == pytest.approx(0.25)
        assert bottom == pytest.approx(1 - (10 + 40 + 50) / 200)
