"""
Horizon band renderer for the Comfort Horizon Viewer.

The centerpiece chart: one field's time series folded into
``band_count`` stacked colour bands inside a single short row.

Band structure for a row with ``n`` bands (values scaled so that the
series maximum equals ``n`` band heights):

    Reference area:   0  →  v / max * n      (one filled outline)
    Replica j:        reference area shifted down by j bands,
                      tinted ``colors[j]``
    Viewport:         exactly one band high; everything outside is clipped

A value between ``j`` and ``j + 1`` band heights therefore shows every
replica up to ``j`` stacked on top of each other, and the darkest
visible colour tells which fold of the range it falls in.

Features:
- Gaps wherever the value is non-finite or not positive
- Bold field label with a white halo for readability over dark bands
- Clickable region reported back to the host as a ``HitRegion``
"""

from typing import List, Sequence, Tuple

import numpy as np
import matplotlib.dates as mdates
import matplotlib.patheffects as path_effects
from matplotlib.axes import Axes
from matplotlib.collections import PolyCollection
from matplotlib.figure import Figure
from matplotlib.transforms import Affine2D

from .constants import CHART_COLORS
from .data_model import ChartDimensions, HitRegion, RowLayout
from .layout import figure_rect
from .text_format import format_field_name

# Label size in points (12 px at 100 dpi)
_LABEL_FONTSIZE = 8.6


def fold_scale(values: np.ndarray, band_count: int) -> Tuple[np.ndarray, np.ndarray]:
    """Scale *values* into band units and flag the drawable samples.

    Returns
    -------
    heights : ndarray
        ``value / max * band_count`` where defined, ``0`` elsewhere.
    defined : ndarray of bool
        ``True`` where the value is finite and strictly positive.
    """
    values = np.asarray(values, dtype=float)
    defined = np.isfinite(values) & (values > 0)
    heights = np.zeros(values.shape, dtype=float)
    if not defined.any():
        return heights, defined

    vmax = np.max(values[np.isfinite(values)])
    heights[defined] = values[defined] / vmax * band_count
    return heights, defined


def area_outline(
    x: np.ndarray,
    heights: np.ndarray,
    defined: np.ndarray,
) -> List[np.ndarray]:
    """Closed polygons for each contiguous run of defined samples.

    Each polygon runs along the baseline (y = 0) under the run and
    along *heights* on top.
    """
    polygons = []
    idx = np.flatnonzero(defined)
    if idx.size == 0:
        return polygons

    breaks = np.flatnonzero(np.diff(idx) != 1) + 1
    for run in np.split(idx, breaks):
        xs = x[run]
        top = np.column_stack([xs, heights[run]])
        verts = np.vstack([
            [xs[0], 0.0],
            top,
            [xs[-1], 0.0],
        ])
        polygons.append(verts)
    return polygons


def render_horizon_band(
    fig: Figure,
    row: RowLayout,
    dims: ChartDimensions,
    figure_height: float,
    times: np.ndarray,
    values: np.ndarray,
    colors: Sequence[str],
    band_count: int,
    *,
    x_limits: Tuple[float, float],
) -> Tuple[Axes, HitRegion]:
    """Draw one banded row on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure sized by the chart composer.
    row : RowLayout
        Placement of the row; the band viewport starts ``dims.padding``
        pixels below the row top.
    dims : ChartDimensions
    figure_height : float
        Figure height in pixels.
    times, values : ndarray
        Sample times (datetime64) and values; ``NaN`` marks a gap.
    colors : sequence of str
        One colour per band, lightest first.  Missing entries fall back
        to a neutral grey.
    band_count : int
        Number of folds, at least 1.
    x_limits : (float, float)
        Shared time-axis limits in matplotlib date numbers.

    Returns
    -------
    (Axes, HitRegion)
    """
    if band_count < 1:
        raise ValueError(f"band_count must be at least 1, got {band_count}")

    band_height = dims.band_size - dims.padding
    ax = fig.add_axes(figure_rect(dims, figure_height,
                                  row.y_offset + dims.padding, band_height))
    ax.set_xlim(*x_limits)
    ax.set_ylim(0.0, 1.0)
    ax.set_axis_off()

    heights, defined = fold_scale(values, band_count)
    x = mdates.date2num(times) if len(times) else np.zeros(0)
    outline = area_outline(x, heights, defined)

    # One reference outline, replicated per band and shifted down by j
    if outline:
        for j in range(band_count):
            color = colors[j] if j < len(colors) else CHART_COLORS['missing_band']
            layer = PolyCollection(
                outline,
                facecolors=color,
                edgecolors='none',
                linewidths=0,
                transform=Affine2D().translate(0.0, -j) + ax.transData,
                zorder=2 + j,
            )
            ax.add_collection(layer, autolim=False)

    ax.annotate(
        format_field_name(row.field),
        xy=(0.0, 0.5), xycoords='axes fraction',
        xytext=(10, 0), textcoords='offset pixels',
        ha='left', va='center',
        fontsize=_LABEL_FONTSIZE, fontweight='bold',
        color=CHART_COLORS['label_text'],
        zorder=2 + band_count + 1,
        path_effects=[path_effects.withStroke(
            linewidth=3, foreground=CHART_COLORS['label_halo'], alpha=0.8,
        )],
    )

    region = HitRegion(
        key=row.key,
        x=dims.margin_left,
        y=dims.margin_top + row.y_offset + dims.padding,
        width=dims.inner_width,
        height=band_height,
        action='expand',
    )
    return ax, region
