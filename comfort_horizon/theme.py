"""
Theme and stylesheet for the Comfort Horizon Viewer.

The Qt widgets use a dark stylesheet; the chart itself is always drawn
light (white background) so the on-screen preview matches the
exported SVG/PNG.
"""

import matplotlib as mpl

from .constants import DARK_COLORS, PLOT_STYLE_LIGHT


def get_dark_stylesheet() -> str:
    """Qt stylesheet for the window chrome, built from ``DARK_COLORS``."""
    c = DARK_COLORS
    return f"""
    QMainWindow, QWidget {{
        background-color: {c['bg']};
        color: {c['fg']};
        font-size: 13px;
    }}
    QGroupBox {{
        border: 1px solid {c['border']};
        border-radius: 6px;
        margin-top: 12px;
        padding-top: 14px;
        font-weight: bold;
        color: {c['accent']};
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 4px;
    }}
    QPushButton {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 5px 14px;
        min-height: 22px;
    }}
    QPushButton:hover {{
        background-color: {c['selection']};
        border-color: {c['accent_hover']};
    }}
    QPushButton:pressed {{
        background-color: {c['accent']};
        color: {c['bg']};
    }}
    QSpinBox, QComboBox {{
        background-color: {c['bg_input']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 3px 8px;
        min-height: 22px;
    }}
    QSpinBox:focus, QComboBox:focus {{
        border-color: {c['accent']};
    }}
    QComboBox QAbstractItemView {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        selection-background-color: {c['selection']};
    }}
    QScrollArea {{
        background-color: #ffffff;
        border: 1px solid {c['border']};
    }}
    QStatusBar {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
        border-top: 1px solid {c['border']};
    }}
    QMenuBar {{
        background-color: {c['bg_alt']};
        color: {c['fg']};
    }}
    QMenuBar::item:selected, QMenu::item:selected {{
        background-color: {c['selection']};
    }}
    QMenu {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
    }}
    QToolTip {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['accent']};
        padding: 4px;
    }}
    QLabel {{
        color: {c['fg']};
    }}
    QLabel#statusOk {{ color: {c['green']}; }}
    QLabel#statusWarn {{ color: {c['yellow']}; }}
    QLabel#statusError {{ color: {c['red']}; }}
    """


def apply_plot_style(style_dict: dict = None) -> None:
    """Apply a style dictionary to matplotlib rcParams.

    Parameters
    ----------
    style_dict : dict, optional
        Defaults to ``PLOT_STYLE_LIGHT``.
    """
    for key, value in (style_dict or PLOT_STYLE_LIGHT).items():
        mpl.rcParams[key] = value
