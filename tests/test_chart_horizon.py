"""
Tests for the horizon band renderer, the expanded view and the chart
composer.  Figures are created directly; no GUI is involved.

Run with: python -m pytest tests/test_chart_horizon.py -v
"""

from datetime import datetime, timedelta

import numpy as np
import pytest
import matplotlib.dates as mdates
from matplotlib.collections import PolyCollection
from matplotlib.figure import Figure
from matplotlib.colors import to_hex

from comfort_horizon.category_colors import CategoryColorState
from comfort_horizon.chart_expanded_line import nice_upper
from comfort_horizon.chart_horizon import (
    display_to_chart_point, find_hit_region, render_horizon_chart,
)
from comfort_horizon.chart_horizon_band import area_outline, fold_scale
from comfort_horizon.constants import CAT_AIR, CAT_THERMAL
from comfort_horizon.data_model import ChartDimensions, Record, field_key

T0 = datetime(2024, 3, 4, 0, 0, 0)


def _series(category, field, values, start_id=1):
    return [
        Record(start_id + i, T0 + timedelta(minutes=15 * i), category, field,
               float(v), float(v) / 2)
        for i, v in enumerate(values)
    ]


def _poly_count(fig):
    return sum(
        isinstance(c, PolyCollection)
        for ax in fig.axes for c in ax.collections
    )


@pytest.fixture
def records():
    return (
        _series(CAT_THERMAL, "temperature", [20, 21, 22, 23, 22, 21])
        + _series(CAT_AIR, "CO_2", [400, 600, 900, 1200, 800, 500],
                  start_id=100)
    )


@pytest.fixture
def fig():
    return Figure(dpi=100)


class TestFoldScale:
    def test_scale_and_mask(self):
        heights, defined = fold_scale(np.array([0, 1, 2, np.nan, 4]), 2)
        assert defined.tolist() == [False, True, True, False, True]
        assert heights.tolist() == [0.0, 0.5, 1.0, 0.0, 2.0]

    def test_negative_values_not_drawn(self):
        heights, defined = fold_scale(np.array([-1.0, 2.0]), 3)
        assert defined.tolist() == [False, True]
        assert heights[1] == 3.0

    def test_nothing_defined(self):
        heights, defined = fold_scale(np.array([np.nan, 0.0]), 4)
        assert not defined.any()
        assert heights.tolist() == [0.0, 0.0]


class TestAreaOutline:
    def test_one_polygon_per_run(self):
        x = np.arange(5, dtype=float)
        heights = np.array([0.0, 0.5, 1.0, 0.0, 2.0])
        defined = np.array([False, True, True, False, True])
        polygons = area_outline(x, heights, defined)
        assert len(polygons) == 2
        assert polygons[0].tolist() == [
            [1.0, 0.0], [1.0, 0.5], [2.0, 1.0], [2.0, 0.0],
        ]
        assert polygons[1].tolist() == [[4.0, 0.0], [4.0, 2.0], [4.0, 0.0]]

    def test_empty(self):
        assert area_outline(np.zeros(2), np.zeros(2),
                            np.array([False, False])) == []


class TestNiceUpper:
    def test_rounds_up(self):
        assert nice_upper(7.3) >= 7.3
        assert nice_upper(10.0) == 10.0

    @pytest.mark.parametrize("vmax", [0.0, -2.0, float("nan")])
    def test_degenerate(self, vmax):
        assert nice_upper(vmax) == 1.0


class TestRenderHorizonChart:
    def test_rows_in_category_order(self, fig, records):
        result = render_horizon_chart(fig, records, CategoryColorState())
        assert [r.category for r in result.rows] == [CAT_AIR, CAT_THERMAL]

    def test_total_height_and_figure_size(self, fig, records):
        dims = ChartDimensions()
        result = render_horizon_chart(fig, records, CategoryColorState(),
                                      dims=dims)
        assert result.total_height == 140
        assert result.figure_height == dims.margin_top + 140 + dims.margin_bottom
        assert fig.get_figwidth() * fig.dpi == pytest.approx(dims.width)
        assert fig.get_figheight() * fig.dpi == pytest.approx(result.figure_height)

    @pytest.mark.parametrize("band_count", [1, 4, 9])
    def test_one_layer_per_band(self, fig, records, band_count):
        render_horizon_chart(fig, records, CategoryColorState(),
                             band_count=band_count)
        assert _poly_count(fig) == 2 * band_count

    def test_ramp_lengths(self, fig, records):
        result = render_horizon_chart(fig, records, CategoryColorState(),
                                      band_count=5)
        assert all(len(c) == 5 for c in result.colors.values())

    def test_layer_colours_follow_ramp(self, fig, records):
        state = CategoryColorState()
        result = render_horizon_chart(fig, records, state, band_count=3)
        ramp = state.get_category_colors(CAT_AIR, 3)
        assert result.colors[CAT_AIR] == tuple(ramp)

    def test_all_missing_field_draws_no_bands(self, fig):
        records = _series(CAT_AIR, "CO_2", [np.nan, np.nan, 0.0])
        result = render_horizon_chart(fig, records, CategoryColorState())
        assert len(result.rows) == 1
        assert _poly_count(fig) == 0

    def test_only_first_run_is_plotted(self, fig):
        records = (_series(CAT_AIR, "CO_2", [1, 2, 3])
                   + _series(CAT_AIR, "CO_2", [9, 9], start_id=10))
        result = render_horizon_chart(fig, records, CategoryColorState())
        assert len(result.rows) == 1

    def test_hit_regions(self, fig, records):
        dims = ChartDimensions()
        result = render_horizon_chart(fig, records, CategoryColorState(),
                                      dims=dims)
        first, second = result.hit_regions
        assert first.key == field_key(CAT_AIR, "CO_2")
        assert first.action == "expand"
        assert first.x == dims.margin_left
        assert first.y == dims.margin_top + dims.padding
        assert first.width == dims.inner_width
        assert first.height == dims.band_size - dims.padding
        assert second.y == dims.margin_top + 40 + 30 + dims.padding

    def test_expanded_row(self, fig, records):
        key = field_key(CAT_AIR, "CO_2")
        result = render_horizon_chart(fig, records, CategoryColorState(),
                                      expanded_key=key, band_count=4)
        assert result.rows[0].expanded
        assert result.total_height == 200 + 30 + 40 + 30
        assert result.hit_regions[0].action == "collapse"
        assert result.hit_regions[0].height == 200
        # Only the thermal row is still banded
        assert _poly_count(fig) == 4

    def test_idempotent(self, fig, records):
        state = CategoryColorState()
        a = render_horizon_chart(fig, records, state, band_count=6)
        n_axes = len(fig.axes)
        b = render_horizon_chart(fig, records, state, band_count=6)
        assert a == b
        assert len(fig.axes) == n_axes

    def test_score_property(self, fig, records):
        result = render_horizon_chart(fig, records, CategoryColorState(),
                                      plot_property="score")
        assert len(result.rows) == 2

    def test_empty(self, fig):
        result = render_horizon_chart(fig, [], CategoryColorState())
        assert result.rows == ()
        assert result.hit_regions == ()
        assert result.total_height == 0

    def test_unknown_category_rendered_with_default_ramp(self, fig):
        records = _series("Olfactory comfort", "odour", [1, 2, 3])
        result = render_horizon_chart(fig, records, CategoryColorState(),
                                      band_count=3)
        assert len(result.colors["Olfactory comfort"]) == 3

    def test_invalid_arguments(self, fig, records):
        with pytest.raises(ValueError):
            render_horizon_chart(fig, records, CategoryColorState(),
                                 band_count=0)
        with pytest.raises(ValueError):
            render_horizon_chart(fig, records, CategoryColorState(),
                                 plot_property="colour")


class TestHitTesting:
    def test_find_hit_region(self, fig, records):
        result = render_horizon_chart(fig, records, CategoryColorState())
        region = find_hit_region(result.hit_regions, 500, 50)
        assert region.key == field_key(CAT_AIR, "CO_2")
        region = find_hit_region(result.hit_regions, 500, 30 + 70 + 20)
        assert region.key == field_key(CAT_THERMAL, "temperature")

    def test_misses(self, fig, records):
        result = render_horizon_chart(fig, records, CategoryColorState())
        assert find_hit_region(result.hit_regions, 10, 50) is None
        assert find_hit_region(result.hit_regions, 500, 85) is None

    def test_display_to_chart_point(self, fig, records):
        result = render_horizon_chart(fig, records, CategoryColorState())
        x, y = display_to_chart_point(fig, result, 550.0,
                                      result.figure_height - 50.0)
        assert x == pytest.approx(550.0)
        assert y == pytest.approx(50.0)


class TestBandFolding:
    def _band_axes(self, fig):
        (ax,) = [ax for ax in fig.axes
                 if any(isinstance(c, PolyCollection) for c in ax.collections)]
        return ax

    def test_replicas_shifted_tinted_and_clipped(self, fig):
        records = _series(CAT_AIR, "CO_2", [400, 600, 900, 1200])
        state = CategoryColorState()
        result = render_horizon_chart(fig, records, state, band_count=4)
        ax = self._band_axes(fig)
        layers = [c for c in ax.collections if isinstance(c, PolyCollection)]
        assert ax.get_ylim() == (0.0, 1.0)
        assert len(layers) == 4
        for j, layer in enumerate(layers):
            shift = layer.get_transform() - ax.transData
            assert tuple(shift.transform((0.0, 0.0))) == pytest.approx((0.0, -j))
            assert to_hex(layer.get_facecolor()[0]) == result.colors[CAT_AIR][j]

    def test_top_band_reaches_viewport(self, fig):
        records = _series(CAT_AIR, "CO_2", [0, 5, 10])
        render_horizon_chart(fig, records, CategoryColorState(), band_count=2)
        ax = self._band_axes(fig)
        first = [c for c in ax.collections if isinstance(c, PolyCollection)][0]
        (outline,) = first.get_paths()
        assert outline.vertices[:, 1].max() == pytest.approx(2.0)


class TestExpandedLine:
    VALUES = [0.0, 2.0, np.nan, 3.0, -1.0, 4.0]

    def _lines(self, fig):
        records = _series(CAT_AIR, "CO_2", self.VALUES)
        render_horizon_chart(fig, records, CategoryColorState(),
                             expanded_key=field_key(CAT_AIR, "CO_2"))
        lines = [line for ax in fig.axes for line in ax.get_lines()]
        markers = [line for line in lines if line.get_marker() == 'o']
        traces = [line for line in lines if line.get_marker() != 'o']
        return records, traces, markers

    def test_line_breaks_at_gaps(self, fig):
        _, (trace,), _ = self._lines(fig)
        ys = np.asarray(trace.get_ydata(), dtype=float)
        assert len(ys) == len(self.VALUES)
        assert np.isnan(ys).tolist() == [False, False, True, False, False, False]

    def test_markers_only_at_positive_values(self, fig):
        records, _, (marker,) = self._lines(fig)
        expected = mdates.date2num([records[i].time for i in (1, 3, 5)])
        assert np.asarray(marker.get_xdata(), dtype=float) == pytest.approx(expected)
        assert list(marker.get_ydata()) == [2.0, 3.0, 4.0]

    def test_y_scale_starts_at_zero(self, fig):
        self._lines(fig)
        (ax,) = [ax for ax in fig.axes if ax.get_lines()]
        low, high = ax.get_ylim()
        assert low == 0.0
        assert high >= 4.0
