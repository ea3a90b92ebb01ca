"""
Colour palettes for the Comfort Horizon Viewer.

Every scheme a category can use is a member of the closed ``SchemeId``
enumeration (plus ``SchemeId.CUSTOM``).  Each member maps to:

- a table of fixed-length ColorBrewer colour sets (sequential and
  diverging families, taken from ``bokeh.palettes.brewer``), and/or
- a continuous matplotlib colormap sampled at equally spaced points.

``resolve`` tries those in order and reports which branch produced
the ramp (``ResolutionKind``).  When nothing matches it samples the
default ``Blues`` colormap instead of failing, so a chart is never left
without colours.

Sequential ramps are always ordered lightest first.
"""

import colorsys
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
from bokeh.palettes import brewer
from matplotlib import colormaps
from matplotlib.colors import Colormap, LinearSegmentedColormap, to_hex, to_rgb

from .constants import (
    DEFAULT_COLORMAP,
    CUSTOM_LIGHTNESS_START, CUSTOM_LIGHTNESS_END,
    CUSTOM_LIGHTNESS_MIN, CUSTOM_LIGHTNESS_MAX,
    CUSTOM_SATURATION_FLOOR, CUSTOM_SATURATION_BOOST, CUSTOM_SATURATION_CAP,
)

logger = logging.getLogger(__name__)


class PaletteError(ValueError):
    """Raised for palette requests that cannot be satisfied at all."""


class SchemeId(str, Enum):
    """Closed set of colour scheme identifiers.

    Values double as matplotlib colormap / ColorBrewer family names,
    except ``custom``, ``warm`` and ``cool``.
    """
    CUSTOM = "custom"
    # Sequential (discrete ColorBrewer)
    BLUES = "Blues"
    GREENS = "Greens"
    GREYS = "Greys"
    ORANGES = "Oranges"
    PURPLES = "Purples"
    REDS = "Reds"
    BU_GN = "BuGn"
    BU_PU = "BuPu"
    GN_BU = "GnBu"
    OR_RD = "OrRd"
    PU_BU_GN = "PuBuGn"
    PU_BU = "PuBu"
    PU_RD = "PuRd"
    RD_PU = "RdPu"
    YL_GN_BU = "YlGnBu"
    YL_GN = "YlGn"
    YL_OR_BR = "YlOrBr"
    YL_OR_RD = "YlOrRd"
    # Interpolated only
    TURBO = "turbo"
    VIRIDIS = "viridis"
    INFERNO = "inferno"
    MAGMA = "magma"
    PLASMA = "plasma"
    CIVIDIS = "cividis"
    WARM = "warm"
    COOL = "cool"
    # Diverging (discrete ColorBrewer)
    SPECTRAL = "Spectral"
    RD_YL_BU = "RdYlBu"
    RD_YL_GN = "RdYlGn"
    RD_BU = "RdBu"
    PI_YG = "PiYG"
    PR_GN = "PRGn"
    BR_BG = "BrBG"


class SchemeKind(str, Enum):
    DISCRETE = "discrete"
    INTERPOLATED = "interpolated"
    CUSTOM = "custom"


class ResolutionKind(str, Enum):
    """Which resolution branch produced a ramp."""
    DISCRETE = "discrete"
    INTERPOLATED = "interpolated"
    DEFAULT = "default"
    CUSTOM = "custom"


@dataclass(frozen=True)
class SchemeDescriptor:
    label: str
    scheme: SchemeId
    kind: SchemeKind


@dataclass(frozen=True)
class Resolution:
    """A resolved colour ramp and the branch that produced it."""
    kind: ResolutionKind
    colors: Tuple[str, ...]


_SEQUENTIAL = (
    SchemeId.BLUES, SchemeId.GREENS, SchemeId.GREYS, SchemeId.ORANGES,
    SchemeId.PURPLES, SchemeId.REDS, SchemeId.BU_GN, SchemeId.BU_PU,
    SchemeId.GN_BU, SchemeId.OR_RD, SchemeId.PU_BU_GN, SchemeId.PU_BU,
    SchemeId.PU_RD, SchemeId.RD_PU, SchemeId.YL_GN_BU, SchemeId.YL_GN,
    SchemeId.YL_OR_BR, SchemeId.YL_OR_RD,
)

_INTERPOLATED_ONLY = (
    SchemeId.TURBO, SchemeId.VIRIDIS, SchemeId.INFERNO, SchemeId.MAGMA,
    SchemeId.PLASMA, SchemeId.CIVIDIS, SchemeId.WARM, SchemeId.COOL,
)

_DIVERGING = (
    SchemeId.SPECTRAL, SchemeId.RD_YL_BU, SchemeId.RD_YL_GN, SchemeId.RD_BU,
    SchemeId.PI_YG, SchemeId.PR_GN, SchemeId.BR_BG,
)

_LABELS = {
    SchemeId.CUSTOM: "Custom",
    SchemeId.BLUES: "Blues",
    SchemeId.GREENS: "Greens",
    SchemeId.GREYS: "Greys",
    SchemeId.ORANGES: "Oranges",
    SchemeId.PURPLES: "Purples",
    SchemeId.REDS: "Reds",
    SchemeId.BU_GN: "Blue-Green",
    SchemeId.BU_PU: "Blue-Purple",
    SchemeId.GN_BU: "Green-Blue",
    SchemeId.OR_RD: "Orange-Red",
    SchemeId.PU_BU_GN: "Purple-Blue-Green",
    SchemeId.PU_BU: "Purple-Blue",
    SchemeId.PU_RD: "Purple-Red",
    SchemeId.RD_PU: "Red-Purple",
    SchemeId.YL_GN_BU: "Yellow-Green-Blue",
    SchemeId.YL_GN: "Yellow-Green",
    SchemeId.YL_OR_BR: "Yellow-Orange-Brown",
    SchemeId.YL_OR_RD: "Yellow-Orange-Red",
    SchemeId.TURBO: "Turbo",
    SchemeId.VIRIDIS: "Viridis",
    SchemeId.INFERNO: "Inferno",
    SchemeId.MAGMA: "Magma",
    SchemeId.PLASMA: "Plasma",
    SchemeId.CIVIDIS: "Cividis",
    SchemeId.WARM: "Warm",
    SchemeId.COOL: "Cool",
    SchemeId.SPECTRAL: "Spectral",
    SchemeId.RD_YL_BU: "Red-Yellow-Blue",
    SchemeId.RD_YL_GN: "Red-Yellow-Green",
    SchemeId.RD_BU: "Red-Blue",
    SchemeId.PI_YG: "Pink-Yellow-Green",
    SchemeId.PR_GN: "Purple-Red-Green",
    SchemeId.BR_BG: "Brown-Blue-Green",
}

# Catalog shown in scheme pickers.  Order is part of the interface.
AVAILABLE_SCHEMES: Tuple[SchemeDescriptor, ...] = (
    (SchemeDescriptor(_LABELS[SchemeId.CUSTOM], SchemeId.CUSTOM,
                      SchemeKind.CUSTOM),)
    + tuple(SchemeDescriptor(_LABELS[s], s, SchemeKind.DISCRETE)
            for s in _SEQUENTIAL)
    + tuple(SchemeDescriptor(_LABELS[s], s, SchemeKind.INTERPOLATED)
            for s in _INTERPOLATED_ONLY)
    + tuple(SchemeDescriptor(_LABELS[s], s, SchemeKind.DISCRETE)
            for s in _DIVERGING)
)

# ColorBrewer class counts kept (diverging families go to 11)
_MIN_DISCRETE_SIZE = 3
_MAX_DISCRETE_SIZE = 11

# Warm / Cool: the two halves of the cubehelix rainbow, as colour stops
_WARM_STOPS = [
    "#6e40aa", "#bf3caf", "#fe4b83", "#ff7847", "#e2b72f", "#aff05b",
]
_COOL_STOPS = [
    "#6e40aa", "#4c6edb", "#23abd8", "#1ddfa3", "#52f667", "#aff05b",
]


# ── Lookup tables ────────────────────────────────────────────────────────

def _build_discrete_tables() -> Dict[SchemeId, Dict[int, Tuple[str, ...]]]:
    """ColorBrewer colour sets keyed by scheme and class count.

    bokeh ships every ColorBrewer set in reverse, so each one is
    flipped back: sequential sets run light to dark and diverging sets
    follow the same direction as the matching matplotlib colormap.
    """
    tables: Dict[SchemeId, Dict[int, Tuple[str, ...]]] = {}
    for scheme in _SEQUENTIAL + _DIVERGING:
        sized: Dict[int, Tuple[str, ...]] = {}
        for size, colors in brewer[scheme.value].items():
            if not _MIN_DISCRETE_SIZE <= size <= _MAX_DISCRETE_SIZE:
                continue
            hexes = tuple(to_hex(c) for c in colors)
            sized[size] = hexes[::-1]
        tables[scheme] = sized
    return tables


DISCRETE_SCHEMES = _build_discrete_tables()


def _colormap(scheme: SchemeId) -> Optional[Colormap]:
    """Continuous colormap for *scheme*, or ``None`` if unavailable."""
    if scheme is SchemeId.WARM:
        return LinearSegmentedColormap.from_list("warm", _WARM_STOPS)
    if scheme is SchemeId.COOL:
        return LinearSegmentedColormap.from_list("cool", _COOL_STOPS)
    try:
        return colormaps[scheme.value]
    except KeyError:
        logger.debug("No matplotlib colormap named %r", scheme.value)
        return None


# ── Parsing ──────────────────────────────────────────────────────────────

def parse_scheme(identifier: Union[str, SchemeId]) -> Optional[SchemeId]:
    """Map a free-form identifier to a ``SchemeId``.

    Accepts enum members, their values (``"Blues"``, ``"viridis"``),
    and the ``scheme*`` / ``interpolate*`` spellings used by web
    palettes (``"schemeBlues"``, ``"interpolateTurbo"``), matched
    case-insensitively.  Returns ``None`` for anything else.
    """
    if isinstance(identifier, SchemeId):
        return identifier
    if not isinstance(identifier, str):
        return None
    name = identifier.strip()
    for prefix in ("interpolate", "scheme"):
        if name.startswith(prefix) and len(name) > len(prefix):
            name = name[len(prefix):]
            break
    lowered = name.lower()
    for scheme in SchemeId:
        if scheme.value.lower() == lowered:
            return scheme
    return None


# ── Ramp generation ──────────────────────────────────────────────────────

def sample_colormap(cmap: Colormap, count: int) -> List[str]:
    """Sample *cmap* at *count* equally spaced points in [0, 1].

    A single sample is taken at ``t = 0``.
    """
    ts = [0.0] if count == 1 else np.linspace(0.0, 1.0, count)
    return [to_hex(cmap(float(t))) for t in ts]


def generate_custom_scale(base_color: str, count: int) -> List[str]:
    """Derive a light-to-dark ramp of *count* colours from *base_color*.

    Hue and saturation of the base colour are kept; lightness runs
    linearly from 0.9 down to 0.2, clamped to [0.1, 0.9].  The lightest
    colour gets a saturation boost when the base is close to grey so it
    still reads against a white background.
    """
    if count < 1:
        raise PaletteError(f"count must be at least 1, got {count}")
    try:
        r, g, b = to_rgb(base_color)
    except ValueError as exc:
        raise PaletteError(f"invalid base colour {base_color!r}") from exc

    hue, _, saturation = colorsys.rgb_to_hls(r, g, b)
    span = CUSTOM_LIGHTNESS_START - CUSTOM_LIGHTNESS_END

    colors = []
    for i in range(count):
        frac = i / (count - 1) if count > 1 else 0.0
        lightness = CUSTOM_LIGHTNESS_START - frac * span
        lightness = max(CUSTOM_LIGHTNESS_MIN, min(CUSTOM_LIGHTNESS_MAX, lightness))

        sat = saturation
        if i == 0 and sat < CUSTOM_SATURATION_FLOOR:
            sat = min(CUSTOM_SATURATION_CAP, sat + CUSTOM_SATURATION_BOOST)

        colors.append(to_hex(colorsys.hls_to_rgb(hue, lightness, sat)))
    return colors


def _default_resolution(count: int) -> Resolution:
    return Resolution(
        ResolutionKind.DEFAULT,
        tuple(sample_colormap(colormaps[DEFAULT_COLORMAP], count)),
    )


def resolve(
    scheme: Union[str, SchemeId],
    count: int,
    custom_base_color: Optional[str] = None,
) -> Resolution:
    """Resolve *scheme* into a ramp of exactly *count* colours.

    Order of attempts:

    1. ``custom`` → ``generate_custom_scale(custom_base_color, count)``
    2. a ColorBrewer set with exactly *count* classes
    3. the scheme's continuous colormap, sampled *count* times
    4. the default Blues colormap

    Raises
    ------
    PaletteError
        If *count* < 1, or the custom scheme is requested without a
        base colour.
    """
    if count < 1:
        raise PaletteError(f"count must be at least 1, got {count}")

    scheme_id = parse_scheme(scheme)
    if scheme_id is None:
        logger.debug("Unknown colour scheme %r, using default ramp", scheme)
        return _default_resolution(count)

    if scheme_id is SchemeId.CUSTOM:
        if not custom_base_color:
            raise PaletteError("custom scheme requires a base colour")
        return Resolution(
            ResolutionKind.CUSTOM,
            tuple(generate_custom_scale(custom_base_color, count)),
        )

    exact = DISCRETE_SCHEMES.get(scheme_id, {}).get(count)
    if exact is not None:
        return Resolution(ResolutionKind.DISCRETE, tuple(exact))

    cmap = _colormap(scheme_id)
    if cmap is None:
        logger.debug("Scheme %s has no colormap, using default ramp",
                     scheme_id.value)
        return _default_resolution(count)
    return Resolution(
        ResolutionKind.INTERPOLATED, tuple(sample_colormap(cmap, count)),
    )


def resolve_colors(
    scheme: Union[str, SchemeId],
    count: int,
    custom_base_color: Optional[str] = None,
) -> List[str]:
    """``resolve`` without the branch tag: a fresh list of hex colours."""
    return list(resolve(scheme, count, custom_base_color).colors)
