"""
Comfort Horizon Viewer v1.0.0

Horizon-chart viewer for indoor environmental-comfort sensor feeds.
Folds each air-quality, thermal, luminous and acoustic field into
stacked colour bands, with per-category colour schemes (ColorBrewer,
perceptual colormaps, or a custom base colour) and an expanded
line view for any single field.

Reads one CSV of ``id, time, category, field, value, score`` rows and
exports the composed chart as SVG or PNG.
"""

APP_NAME = "Comfort Horizon Viewer"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-18"
__version__ = APP_VERSION
