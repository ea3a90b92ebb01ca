"""
Per-category colour state for the Comfort Horizon Viewer.

``CategoryColorState`` is created once per session by the host window
and passed by reference to everything that needs colours.  It holds,
for each of the four fixed categories, the selected scheme and the
base colour used when that scheme is ``custom``.
"""

import logging
from typing import Dict, List, Optional, Union

from matplotlib.colors import is_color_like

from .constants import (
    CATEGORIES, DEFAULT_CATEGORY_SCHEMES, DEFAULT_CUSTOM_COLORS,
    FALLBACK_GRAY, BASE_COLOR_BANDS,
)
from .palette import SchemeId, parse_scheme, resolve_colors

logger = logging.getLogger(__name__)


class CategoryColorState:
    """Scheme and custom-colour selection for each comfort category."""

    def __init__(
        self,
        schemes: Optional[Dict[str, Union[str, SchemeId]]] = None,
        custom_colors: Optional[Dict[str, str]] = None,
    ):
        self._schemes: Dict[str, Union[str, SchemeId]] = {}
        self._custom_colors: Dict[str, str] = {}
        self.reset()
        for category, scheme in (schemes or {}).items():
            self.update_scheme(category, scheme)
        for category, color in (custom_colors or {}).items():
            self.update_custom_color(category, color)

    def reset(self) -> None:
        """Restore the default scheme and custom colour of every category."""
        self._schemes = {
            cat: parse_scheme(DEFAULT_CATEGORY_SCHEMES[cat])
            for cat in CATEGORIES
        }
        self._custom_colors = dict(DEFAULT_CUSTOM_COLORS)

    # ── Reads ────────────────────────────────────────────────────────

    @property
    def categories(self):
        return CATEGORIES

    def scheme_for(self, category: str) -> Union[str, SchemeId]:
        return self._schemes[category]

    def custom_color_for(self, category: str) -> str:
        return self._custom_colors[category]

    def is_custom(self, category: str) -> bool:
        return parse_scheme(self._schemes[category]) is SchemeId.CUSTOM

    def get_category_colors(self, category: str, band_count: int) -> List[str]:
        """Band colours for *category*, lightest first.

        Non-custom schemes are resolved with one extra colour and the
        first (palest) one dropped, since it barely shows on white.
        The custom ramp already starts at a usable lightness, so it is
        resolved at exactly *band_count* and returned as is.
        """
        scheme = self._schemes[category]
        custom_color = self._custom_colors[category]

        if self.is_custom(category):
            return resolve_colors(scheme, band_count, custom_color)

        colors = resolve_colors(scheme, band_count + 1, custom_color)
        return colors[1:]

    def get_category_base_color(self, category: str) -> str:
        """Darkest colour of a 6-band ramp, used for swatches and headings."""
        colors = self.get_category_colors(category, BASE_COLOR_BANDS)
        return colors[-1] if colors else FALLBACK_GRAY

    # ── Writes ───────────────────────────────────────────────────────

    def update_scheme(self, category: str, scheme: Union[str, SchemeId]) -> None:
        """Select *scheme* for *category*; unknown categories are ignored.

        Identifiers that do not name a known scheme are stored as given
        and resolve to the default ramp.
        """
        if category not in self._schemes:
            logger.debug("Ignoring scheme update for unknown category %r",
                         category)
            return
        parsed = parse_scheme(scheme)
        self._schemes[category] = parsed if parsed is not None else scheme

    def update_custom_color(self, category: str, color: str) -> None:
        """Set the custom base colour for *category*.

        Unknown categories and strings that are not colours are ignored.
        """
        if category not in self._custom_colors:
            logger.debug("Ignoring custom colour update for unknown "
                         "category %r", category)
            return
        if not is_color_like(color):
            logger.warning("Ignoring invalid custom colour %r for %s",
                           color, category)
            return
        self._custom_colors[category] = color

    def snapshot(self) -> Dict[str, dict]:
        """Plain-dict copy of the state, e.g. for status display or tests."""
        return {
            cat: {
                'scheme': getattr(self._schemes[cat], 'value',
                                  self._schemes[cat]),
                'custom_color': self._custom_colors[cat],
            }
            for cat in CATEGORIES
        }
