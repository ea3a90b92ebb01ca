"""
Constants for the Comfort Horizon Viewer.

Centralises the fixed comfort categories, their default colour
schemes, chart layout dimensions, CSV column indices, the GUI colour
palette and the matplotlib style used for chart rendering.
"""

# ── Named column indices for the record CSV ──────────────────────────────
COL_ID = 0
COL_TIME = 1
COL_CATEGORY = 2
COL_FIELD = 3
COL_VALUE = 4
COL_SCORE = 5
MIN_COLUMNS = 6

# ── Fixed comfort categories ─────────────────────────────────────────────
CAT_AIR = "Air quality"
CAT_THERMAL = "Thermal comfort"
CAT_LUMINOUS = "Luminous comfort"
CAT_ACOUSTIC = "Acoustic comfort"

CATEGORIES = (CAT_AIR, CAT_THERMAL, CAT_LUMINOUS, CAT_ACOUSTIC)

# Display order of categories; names not listed keep their natural order
# after these.
CATEGORY_ORDER = (CAT_LUMINOUS, CAT_AIR, CAT_ACOUSTIC, CAT_THERMAL)

# Default scheme identifiers (values of palette.SchemeId)
DEFAULT_CATEGORY_SCHEMES = {
    CAT_AIR:      "Greens",
    CAT_THERMAL:  "Reds",
    CAT_LUMINOUS: "YlOrBr",
    CAT_ACOUSTIC: "Blues",
}

# Base colours used when a category is switched to the custom scheme
DEFAULT_CUSTOM_COLORS = {
    CAT_AIR:      "#4ade80",   # green
    CAT_THERMAL:  "#f87171",   # red
    CAT_LUMINOUS: "#fbbf24",   # yellow / orange
    CAT_ACOUSTIC: "#60a5fa",   # blue
}

# Returned by base-colour queries when a ramp comes back empty
FALLBACK_GRAY = "#6b7280"

# Palette sampled when a scheme cannot be resolved
DEFAULT_COLORMAP = "Blues"

# ── Custom scale generation ──────────────────────────────────────────────
CUSTOM_LIGHTNESS_START = 0.9
CUSTOM_LIGHTNESS_END = 0.2
CUSTOM_LIGHTNESS_MIN = 0.1
CUSTOM_LIGHTNESS_MAX = 0.9
CUSTOM_SATURATION_FLOOR = 0.3
CUSTOM_SATURATION_BOOST = 0.2
CUSTOM_SATURATION_CAP = 0.5

# ── Bands & plotted properties ───────────────────────────────────────────
MIN_BANDS = 1
MAX_BANDS = 9
DEFAULT_BANDS = 4
BASE_COLOR_BANDS = 6

PLOT_PROPERTIES = ("value", "score")
DEFAULT_PLOT_PROPERTY = "value"

# ── Layout (pixel units) ─────────────────────────────────────────────────
CATEGORY_GAP = 30
DEFAULT_EXPANDED_HEIGHT = 200
EXPANDED_PADDING = 20

DEFAULT_DIMENSIONS = {
    'width':         1100,
    'margin_top':    30,
    'margin_right':  20,
    'margin_bottom': 40,
    'margin_left':   150,
    'band_size':     40,
    'padding':       1,
    'expanded_height': DEFAULT_EXPANDED_HEIGHT,
}

CHART_DPI = 100

# ── Chart colours ────────────────────────────────────────────────────────
CHART_COLORS = {
    'label_halo':       '#ffffff',
    'label_text':       '#1a1a1a',
    'heading_text':     '#333333',
    'missing_band':     '#cccccc',
    'expanded_bg':      '#f8f9fa',
    'expanded_border':  '#dee2e6',
    'expanded_line':    'steelblue',
    'expanded_label':   '#333333',
    'axis_text':        '#555555',
}

LABEL_FONT_FAMILIES = [
    "Segoe UI", "Roboto", "Helvetica", "Arial", "DejaVu Sans", "sans-serif",
]

# ── Dark GUI colour palette (Qt widgets only; charts stay light) ─────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'accent':       '#89b4fa',
    'accent_hover': '#74c7ec',
    'green':        '#a6e3a1',
    'yellow':       '#f9e2af',
    'red':          '#f38ba8',
    'border':       '#45475a',
    'selection':    '#45475a',
}

FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_DPI = 300
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
DEFAULT_EXPORT_NAME = "horizon_chart.svg"

# ── Matplotlib style dict (GUI preview and export share it) ──────────────
PLOT_STYLE_LIGHT = {
    'figure.facecolor':  '#ffffff',
    'axes.facecolor':    '#ffffff',
    'axes.edgecolor':    '#333333',
    'axes.labelcolor':   '#1a1a2e',
    'text.color':        '#1a1a2e',
    'xtick.color':       '#333333',
    'ytick.color':       '#333333',
    'xtick.labelsize':   8,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'font.family':       'sans-serif',
    'font.sans-serif':   LABEL_FONT_FAMILIES,
    'svg.fonttype':      'none',
}
