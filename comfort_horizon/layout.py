"""
Vertical layout of the stacked horizon chart.

Rows are stacked top to bottom: every field of a category gets either
a banded row (``band_row_height``) or, if it is the expanded field, an
expanded row (``expanded_height``); a fixed gap follows each category.

``iter_row_layout`` is the single source of row offsets.  The chart
composer places rows with it and ``compute_total_height`` sums the same
walk, so the figure height always matches what is drawn.
"""

from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from .constants import CATEGORY_GAP, DEFAULT_EXPANDED_HEIGHT
from .data_model import ChartDimensions, Record, RowLayout, field_key
from .series import fields_in_category


class ExpandedField:
    """Which single field (if any) is shown in the expanded line view."""

    def __init__(self, key: Optional[str] = None):
        self._key = key

    @property
    def key(self) -> Optional[str]:
        return self._key

    def is_expanded(self, key: str) -> bool:
        return self._key is not None and self._key == key

    def toggle(self, key: str) -> Optional[str]:
        """Expand *key*, or collapse it if it is already expanded.

        Expanding one field collapses any other.  Returns the new key.
        """
        self._key = None if self._key == key else key
        return self._key

    def clear(self) -> None:
        self._key = None


def iter_row_layout(
    categories: Sequence[str],
    grouped: Mapping[str, Sequence[Record]],
    band_row_height: float,
    expanded_key: Optional[str] = None,
    expanded_height: float = DEFAULT_EXPANDED_HEIGHT,
    category_gap: float = CATEGORY_GAP,
) -> Iterator[RowLayout]:
    """Yield one ``RowLayout`` per field, in drawing order."""
    y = 0.0
    for category in categories:
        for field in fields_in_category(grouped.get(category, [])):
            key = field_key(category, field)
            expanded = expanded_key is not None and key == expanded_key
            height = expanded_height if expanded else band_row_height
            yield RowLayout(
                category=category, field=field, key=key,
                y_offset=y, height=height, expanded=expanded,
            )
            y += height
        y += category_gap


def compute_total_height(
    categories: Sequence[str],
    grouped: Mapping[str, Sequence[Record]],
    band_row_height: float,
    expanded_key: Optional[str] = None,
    expanded_height: float = DEFAULT_EXPANDED_HEIGHT,
    category_gap: float = CATEGORY_GAP,
) -> float:
    """Total height of all rows plus one gap per category.

    Examples
    --------
    Two categories with one field each, row height 40, nothing
    expanded: ``40 + 30 + 40 + 30 = 140``.
    """
    total = 0.0
    for row in iter_row_layout(categories, grouped, band_row_height,
                               expanded_key, expanded_height, category_gap):
        total += row.height
    return total + category_gap * len(categories)


def figure_rect(
    dims: ChartDimensions,
    figure_height: float,
    top: float,
    height: float,
) -> Tuple[float, float, float, float]:
    """Axes rectangle in figure fractions for a strip of the chart.

    *top* and *height* are in pixels, measured from the top of the
    plotting area (below ``margin_top``); the strip spans the full
    inner width.
    """
    return (
        dims.margin_left / dims.width,
        1.0 - (dims.margin_top + top + height) / figure_height,
        dims.inner_width / dims.width,
        height / figure_height,
    )


def row_layout(
    categories: Sequence[str],
    grouped: Mapping[str, Sequence[Record]],
    band_row_height: float,
    expanded_key: Optional[str] = None,
    expanded_height: float = DEFAULT_EXPANDED_HEIGHT,
) -> List[RowLayout]:
    return list(iter_row_layout(categories, grouped, band_row_height,
                                expanded_key, expanded_height))
