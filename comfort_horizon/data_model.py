"""
Data model for the Comfort Horizon Viewer.

Immutable dataclasses for parsed sensor records, chart dimensions and
the layout/hit-test data the renderers hand back to their host.

Missing numbers are modelled as ``NaN`` (not ``None``) so renderers can
treat them as gaps with plain numpy masks.  An unparseable timestamp
is ``None``; such records cannot be placed on the time axis and are
skipped when a series is drawn.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .constants import DEFAULT_DIMENSIONS


@dataclass(frozen=True)
class Record:
    """One sample from the sensor feed.

    Parameters
    ----------
    id : int
        Sequence number assigned by the source feed.  A jump in ``id``
        marks a sensor dropout or reset.
    time : datetime or None
        Sample timestamp; ``None`` if the CSV cell could not be parsed.
    category : str
        Comfort category, e.g. ``"Air quality"``.
    field : str
        Measured field within the category, e.g. ``"CO_2"``.
    value : float
        Raw measurement (``NaN`` if unparseable).
    score : float
        Comfort score for the measurement (``NaN`` if unparseable).
    """
    id: int
    time: Optional[datetime]
    category: str
    field: str
    value: float
    score: float

    @property
    def key(self) -> str:
        return field_key(self.category, self.field)


def field_key(category: str, field: str) -> str:
    """Key identifying one chart row: ``"category|field"``."""
    return f"{category}|{field}"


@dataclass(frozen=True)
class ChartDimensions:
    """Pixel dimensions of the composed chart.

    ``band_size`` is the height of one banded row; the drawable band
    area inside the row starts ``padding`` pixels below the row top.
    """
    width: int = DEFAULT_DIMENSIONS['width']
    margin_top: int = DEFAULT_DIMENSIONS['margin_top']
    margin_right: int = DEFAULT_DIMENSIONS['margin_right']
    margin_bottom: int = DEFAULT_DIMENSIONS['margin_bottom']
    margin_left: int = DEFAULT_DIMENSIONS['margin_left']
    band_size: int = DEFAULT_DIMENSIONS['band_size']
    padding: int = DEFAULT_DIMENSIONS['padding']
    expanded_height: int = DEFAULT_DIMENSIONS['expanded_height']

    @property
    def inner_width(self) -> int:
        return self.width - self.margin_left - self.margin_right


@dataclass(frozen=True)
class RowLayout:
    """Vertical placement of one field row, relative to the chart top."""
    category: str
    field: str
    key: str
    y_offset: float
    height: float
    expanded: bool


@dataclass(frozen=True)
class HitRegion:
    """A clickable rectangle in chart pixel coordinates (origin top-left).

    ``action`` is ``"expand"`` for banded rows and ``"collapse"`` for the
    expanded row; either way the host toggles ``key``.
    """
    key: str
    x: float
    y: float
    width: float
    height: float
    action: str

    def contains(self, x: float, y: float) -> bool:
        return (self.x <= x <= self.x + self.width
                and self.y <= y <= self.y + self.height)
