"""
Expanded line view for the Comfort Horizon Viewer.

Replaces a field's banded row while that field is expanded: a plain
line plot on a rounded ``[0, max]`` scale with point markers, light
grid lines and a y axis.  Clicking anywhere in the row collapses it
back to the banded view.
"""

from typing import Tuple

import numpy as np
import matplotlib.dates as mdates
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import MaxNLocator

from .constants import CHART_COLORS, EXPANDED_PADDING
from .data_model import ChartDimensions, HitRegion, RowLayout
from .layout import figure_rect
from .text_format import format_with_unicode_subscripts


def nice_upper(vmax: float) -> float:
    """Round *vmax* up to a tick-friendly value (1, 2, 2.5, 5 × 10^k)."""
    if not np.isfinite(vmax) or vmax <= 0:
        return 1.0
    ticks = MaxNLocator(nbins=10, steps=[1, 2, 2.5, 5, 10]).tick_values(0.0, vmax)
    return float(ticks[-1])


def render_expanded_line(
    fig: Figure,
    row: RowLayout,
    dims: ChartDimensions,
    figure_height: float,
    times: np.ndarray,
    values: np.ndarray,
    *,
    x_limits: Tuple[float, float],
) -> Tuple[Axes, HitRegion]:
    """Draw the expanded line view for one field on *fig*.

    The plotting area leaves ``EXPANDED_PADDING`` pixels above and below
    inside the row, matching a ``[0, max] → [height − 20, 20]`` scale.

    Returns
    -------
    (Axes, HitRegion)
        The line axes and the row's collapse region.
    """
    # ── Row background ─────────────────────────────────────────────
    bg = fig.add_axes(figure_rect(dims, figure_height, row.y_offset, row.height))
    bg.set_xlim(0, 1)
    bg.set_ylim(0, 1)
    bg.set_xticks([])
    bg.set_yticks([])
    bg.set_facecolor(CHART_COLORS['expanded_bg'])
    for spine in bg.spines.values():
        spine.set_edgecolor(CHART_COLORS['expanded_border'])
        spine.set_linewidth(1.0)

    bg.annotate(
        f"{format_with_unicode_subscripts(row.field)} "
        f"(EXPANDED - Click to collapse)",
        xy=(0.0, 1.0), xycoords='axes fraction',
        xytext=(10, -15), textcoords='offset pixels',
        ha='left', va='baseline',
        fontsize=10, fontweight='bold',
        color=CHART_COLORS['expanded_label'],
    )

    # ── Line plot area ─────────────────────────────────────────────
    plot_height = max(row.height - 2 * EXPANDED_PADDING, 1)
    ax = fig.add_axes(figure_rect(
        dims, figure_height, row.y_offset + EXPANDED_PADDING, plot_height,
    ))
    ax.patch.set_alpha(0.0)
    ax.set_xlim(*x_limits)

    values = np.asarray(values, dtype=float)
    finite = np.isfinite(values)
    vmax = np.max(values[finite]) if finite.any() else np.nan
    ax.set_ylim(0.0, nice_upper(vmax))

    # Grid lines at the y ticks, very faint
    ax.yaxis.set_major_locator(MaxNLocator(nbins=5))
    ax.grid(axis='y', color='#000000', alpha=0.1, linewidth=0.8)
    ax.set_axisbelow(True)

    if len(times):
        x = mdates.date2num(times)
        # NaN breaks the line, so non-finite values leave a gap
        ax.plot(
            x, np.where(finite, values, np.nan),
            color=CHART_COLORS['expanded_line'], linewidth=2.0, zorder=3,
        )
        positive = finite & (values > 0)
        ax.plot(
            x[positive], values[positive],
            linestyle='none', marker='o', markersize=4.5,
            color=CHART_COLORS['expanded_line'], zorder=4,
        )

    for name in ('top', 'right', 'bottom'):
        ax.spines[name].set_visible(False)
    ax.tick_params(axis='x', which='both', bottom=False, labelbottom=False)
    ax.tick_params(axis='y', labelsize=7, length=3,
                   colors=CHART_COLORS['axis_text'])

    region = HitRegion(
        key=row.key,
        x=dims.margin_left,
        y=dims.margin_top + row.y_offset,
        width=dims.inner_width,
        height=row.height,
        action='collapse',
    )
    return ax, region
