"""
Composed horizon chart for the Comfort Horizon Viewer.

Runs the whole pipeline for one render:

    records → first-run selection → category grouping and ordering
            → row layout → colour ramps → banded / expanded rows

and draws everything into a single matplotlib ``Figure`` whose pixel
geometry follows ``ChartDimensions``.  The clickable rows are returned
as ``HitRegion`` data; wiring clicks to toggles is the host's job.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

import matplotlib.dates as mdates
from matplotlib.figure import Figure

from .category_colors import CategoryColorState
from .chart_expanded_line import render_expanded_line
from .chart_horizon_band import render_horizon_band
from .constants import (
    CATEGORY_GAP, CHART_COLORS, DEFAULT_BANDS, DEFAULT_COLORMAP,
    DEFAULT_PLOT_PROPERTY, FALLBACK_GRAY, MIN_BANDS, PLOT_PROPERTIES,
)
from .data_model import ChartDimensions, HitRegion, Record, RowLayout
from .layout import compute_total_height, figure_rect, row_layout
from .palette import resolve_colors
from .series import (
    group_by_category, select_first_run, series_arrays, split_by_field,
    time_extent,
)
from .text_format import sort_categories_by_order

logger = logging.getLogger(__name__)

# Padding (days) applied when every sample shares one timestamp
_SINGLE_INSTANT_PAD = 1.0 / 24.0


@dataclass(frozen=True)
class ChartResult:
    """What a render produced, for hit testing, sizing and checks."""
    rows: Tuple[RowLayout, ...]
    hit_regions: Tuple[HitRegion, ...]
    colors: Dict[str, Tuple[str, ...]]
    total_height: float
    figure_height: float
    width: float


def _x_limits(records: Iterable[Record]) -> Tuple[float, float]:
    extent = time_extent(records)
    if extent is None:
        return 0.0, 1.0
    lo, hi = mdates.date2num(extent[0]), mdates.date2num(extent[1])
    if hi <= lo:
        return lo - _SINGLE_INSTANT_PAD, hi + _SINGLE_INSTANT_PAD
    return lo, hi


def _category_ramp(color_state, category, band_count):
    # Categories outside the fixed four have no colour state of their own
    if category in color_state.categories:
        return color_state.get_category_colors(category, band_count)
    return resolve_colors(DEFAULT_COLORMAP, band_count + 1)[1:]


def _heading_color(color_state, category):
    if category in color_state.categories:
        return color_state.get_category_base_color(category)
    return FALLBACK_GRAY


def _draw_time_axis(fig, dims, figure_height, top, x_limits):
    ax = fig.add_axes(figure_rect(dims, figure_height, top, 1.0))
    ax.set_xlim(*x_limits)
    ax.set_yticks([])
    for name in ('top', 'left', 'right'):
        ax.spines[name].set_visible(False)
    ax.patch.set_alpha(0.0)
    locator = mdates.AutoDateLocator()
    ax.xaxis.set_major_locator(locator)
    ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
    ax.tick_params(axis='x', labelsize=7, length=3,
                   colors=CHART_COLORS['axis_text'])
    return ax


def render_horizon_chart(
    fig: Figure,
    records: Sequence[Record],
    color_state: CategoryColorState,
    *,
    expanded_key: Optional[str] = None,
    band_count: int = DEFAULT_BANDS,
    plot_property: str = DEFAULT_PLOT_PROPERTY,
    dims: Optional[ChartDimensions] = None,
) -> ChartResult:
    """Render every category/field row of *records* on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared and resized).
    records : sequence of Record
        Raw records; only the first unbroken id run of each field is
        drawn.
    color_state : CategoryColorState
        Scheme selection per category.
    expanded_key : str or None
        ``"category|field"`` of the row to show as a line plot.
    band_count : int
        Folds per banded row (at least 1).
    plot_property : str
        ``"value"`` or ``"score"``.
    dims : ChartDimensions, optional

    Returns
    -------
    ChartResult
    """
    if band_count < MIN_BANDS:
        raise ValueError(f"band_count must be at least {MIN_BANDS}, "
                         f"got {band_count}")
    if plot_property not in PLOT_PROPERTIES:
        raise ValueError(f"plot_property must be one of {PLOT_PROPERTIES}, "
                         f"got {plot_property!r}")
    dims = dims or ChartDimensions()

    selected = select_first_run(records)
    grouped = group_by_category(selected)
    categories = sort_categories_by_order(grouped.keys())

    rows = row_layout(categories, grouped, dims.band_size,
                      expanded_key, dims.expanded_height)
    total_height = compute_total_height(categories, grouped, dims.band_size,
                                        expanded_key, dims.expanded_height)
    figure_height = dims.margin_top + total_height + dims.margin_bottom

    fig.clf()
    fig.set_facecolor('#ffffff')
    fig.set_size_inches(dims.width / fig.dpi, figure_height / fig.dpi)

    colors: Dict[str, Tuple[str, ...]] = {}
    regions = []

    if not rows:
        fig.text(0.5, 0.5, 'No data loaded', ha='center', va='center',
                 color=CHART_COLORS['heading_text'])
        return ChartResult(tuple(rows), (), colors, total_height,
                           figure_height, dims.width)

    x_limits = _x_limits(selected)
    fields_by_category = {cat: split_by_field(grouped[cat])
                          for cat in categories}

    for category in categories:
        ramp = _category_ramp(color_state, category, band_count)
        colors[category] = tuple(ramp)
        if len(ramp) != band_count:
            warnings.warn(
                f"Colour ramp for '{category}' has {len(ramp)} colours, "
                f"expected {band_count}.",
                stacklevel=2,
            )

    first_row_seen = set()
    for row in rows:
        if row.category not in first_row_seen:
            first_row_seen.add(row.category)
            fig.text(
                dims.margin_left / dims.width,
                1.0 - (dims.margin_top + row.y_offset - 4) / figure_height,
                row.category,
                ha='left', va='bottom',
                fontsize=9, fontweight='bold',
                color=_heading_color(color_state, row.category),
            )

        times, values = series_arrays(
            fields_by_category[row.category][row.field], plot_property,
        )
        if row.expanded:
            _, region = render_expanded_line(
                fig, row, dims, figure_height, times, values,
                x_limits=x_limits,
            )
        else:
            _, region = render_horizon_band(
                fig, row, dims, figure_height, times, values,
                colors[row.category], band_count,
                x_limits=x_limits,
            )
        regions.append(region)

    _draw_time_axis(fig, dims, figure_height,
                    total_height - CATEGORY_GAP + 4, x_limits)

    logger.debug("Rendered %d rows in %d categories (height %.0f px)",
                 len(rows), len(categories), figure_height)

    return ChartResult(
        rows=tuple(rows),
        hit_regions=tuple(regions),
        colors=colors,
        total_height=total_height,
        figure_height=figure_height,
        width=dims.width,
    )


def find_hit_region(
    regions: Iterable[HitRegion],
    x: float,
    y: float,
) -> Optional[HitRegion]:
    """Region containing chart point ``(x, y)``, or ``None``."""
    for region in regions:
        if region.contains(x, y):
            return region
    return None


def display_to_chart_point(
    fig: Figure,
    result: ChartResult,
    x_display: float,
    y_display: float,
) -> Tuple[float, float]:
    """Convert a matplotlib event position to chart pixel coordinates.

    Chart coordinates have their origin at the top-left corner and use
    the pixel units of ``ChartDimensions``, regardless of the actual
    canvas size or device pixel ratio.
    """
    fx, fy = fig.transFigure.inverted().transform((x_display, y_display))
    return float(fx * result.width), float((1.0 - fy) * result.figure_height)
