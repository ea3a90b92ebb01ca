"""
Chart view (right side) for the Comfort Horizon Viewer.

Hosts the horizon chart in a scrollable matplotlib canvas sized to the
chart's pixel layout, with copy/export buttons.  Clicking a row toggles
its expanded line view.
"""

import logging
import os

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QScrollArea,
    QFileDialog, QMessageBox, QLabel,
)
from PySide6.QtCore import Qt, Signal

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas

from .constants import (
    CHART_DPI, DARK_COLORS, DEFAULT_BANDS, DEFAULT_EXPORT_NAME,
    DEFAULT_PLOT_PROPERTY, PLOT_PROPERTIES,
)
from .chart_horizon import (
    display_to_chart_point, find_hit_region, render_horizon_chart,
)
from .export import copy_to_clipboard, export_png, export_svg
from .layout import ExpandedField
from .theme import apply_plot_style

logger = logging.getLogger(__name__)


class ChartView(QWidget):
    """Scrollable horizon chart with click-to-expand rows."""

    expanded_changed = Signal(str)  # "" when collapsed

    def __init__(self, parent=None):
        super().__init__(parent)
        self._records = []
        self._color_state = None
        self._config = {}
        self._expanded = ExpandedField()
        self._result = None

        apply_plot_style()
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        # ── Button row ───────────────────────────────────────────────
        row = QHBoxLayout()
        row.setSpacing(4)

        self._lbl_hint = QLabel("Click a row to expand it")
        self._lbl_hint.setStyleSheet(
            f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;"
        )
        row.addWidget(self._lbl_hint)
        row.addStretch()

        self._btn_copy = QPushButton("Copy to Clipboard")
        self._btn_copy.clicked.connect(lambda *_: self._on_copy())
        row.addWidget(self._btn_copy)

        self._btn_svg = QPushButton("Export SVG...")
        self._btn_svg.clicked.connect(lambda *_: self.export_dialog('svg'))
        row.addWidget(self._btn_svg)

        self._btn_png = QPushButton("Export PNG...")
        self._btn_png.clicked.connect(lambda *_: self.export_dialog('png'))
        row.addWidget(self._btn_png)

        for btn in (self._btn_copy, self._btn_svg, self._btn_png):
            btn.setFixedHeight(28)
            btn.setStyleSheet("font-size: 11px; padding: 2px 8px;")

        layout.addLayout(row)

        # ── Canvas ───────────────────────────────────────────────────
        self._fig = Figure(dpi=CHART_DPI)
        self._canvas = FigureCanvas(self._fig)
        self._canvas.mpl_connect('button_press_event', self._on_click)

        self._scroll = QScrollArea()
        self._scroll.setWidget(self._canvas)
        self._scroll.setWidgetResizable(False)
        self._scroll.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        layout.addWidget(self._scroll, 1)

    # ── Properties ───────────────────────────────────────────────────

    @property
    def fig(self) -> Figure:
        return self._fig

    @property
    def expanded_key(self):
        return self._expanded.key

    # ── Rendering ────────────────────────────────────────────────────

    def set_data(self, records, color_state, config: dict):
        """Replace records/config and redraw.  A new dataset collapses rows."""
        if records is not self._records:
            self._expanded.clear()
        self._records = records
        self._color_state = color_state
        self._config = dict(config)
        self.rerender()

    def rerender(self):
        if self._color_state is None:
            return
        self._result = render_horizon_chart(
            self._fig, self._records, self._color_state,
            expanded_key=self._expanded.key,
            band_count=self._config.get('band_count', DEFAULT_BANDS),
            plot_property=self._config.get('plot_property',
                                           DEFAULT_PLOT_PROPERTY),
        )
        self._canvas.setFixedSize(int(round(self._result.width)),
                                  int(round(self._result.figure_height)))
        self._canvas.draw_idle()

    def _on_click(self, event):
        if event.button != 1 or self._result is None:
            return
        x, y = display_to_chart_point(self._fig, self._result,
                                      event.x, event.y)
        region = find_hit_region(self._result.hit_regions, x, y)
        if region is None:
            return
        key = self._expanded.toggle(region.key)
        logger.debug("%s %s", region.action, region.key)
        self.rerender()
        self.expanded_changed.emit(key or "")

    def get_all_figures(self) -> dict:
        """One freshly rendered figure per plotted property, for batch export.

        The current expanded row is kept so exports match the screen.
        """
        figures = {}
        if self._color_state is None:
            return figures
        for prop in PLOT_PROPERTIES:
            fig = Figure(dpi=CHART_DPI)
            render_horizon_chart(
                fig, self._records, self._color_state,
                expanded_key=self._expanded.key,
                band_count=self._config.get('band_count', DEFAULT_BANDS),
                plot_property=prop,
            )
            figures[f"horizon_{prop}"] = fig
        return figures

    # ── Export ───────────────────────────────────────────────────────

    def _status(self, text):
        window = self.window()
        if hasattr(window, 'statusBar'):
            window.statusBar().showMessage(text, 3000)

    def _on_copy(self):
        if copy_to_clipboard(self._fig):
            self._status("Chart copied to clipboard")
        else:
            QMessageBox.warning(self, "Copy Failed",
                                "Could not copy chart to clipboard.")

    def export_dialog(self, fmt: str):
        """Ask for a path and export the current chart as *fmt*."""
        stem = os.path.splitext(DEFAULT_EXPORT_NAME)[0]
        filters = {
            'svg': "SVG Files (*.svg);;All Files (*)",
            'png': "PNG Files (*.png);;All Files (*)",
        }
        path, _ = QFileDialog.getSaveFileName(
            self, f"Export Chart as {fmt.upper()}",
            f"{stem}.{fmt}", filters[fmt],
        )
        if not path:
            return
        if not path.lower().endswith(f'.{fmt}'):
            path += f'.{fmt}'
        try:
            if fmt == 'svg':
                export_svg(self._fig, path)
            else:
                export_png(self._fig, path)
        except (OSError, ValueError) as exc:
            logger.error("Export to %s failed: %s", path, exc)
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export: {exc}")
            return
        self._status(f"Exported to {os.path.basename(path)}")
