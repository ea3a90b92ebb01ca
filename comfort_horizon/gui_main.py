"""
Main window for the Comfort Horizon Viewer.

Owns the session's ``CategoryColorState`` and hosts the ConfigPanel
(left) and ChartView (right) in a horizontal splitter, with a menu bar
and status bar.
"""

import logging
import os

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QScrollArea,
    QFileDialog, QMessageBox,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .category_colors import CategoryColorState
from .export import export_all_charts
from .gui_chart_view import ChartView
from .gui_config_panel import ConfigPanel

logger = logging.getLogger(__name__)


class ViewerMainWindow(QMainWindow):
    """Main window for the Comfort Horizon Viewer."""

    def __init__(self, csv_path: str = None):
        super().__init__()
        self._color_state = CategoryColorState()

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1300, 800)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self.statusBar().showMessage("Ready. Load a CSV file to begin")
        if csv_path:
            self._config_panel.load_path(csv_path)

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self._config_panel = ConfigPanel(self._color_state)
        scroll = QScrollArea()
        scroll.setWidget(self._config_panel)
        scroll.setWidgetResizable(True)
        scroll.setMinimumWidth(300)
        scroll.setMaximumWidth(440)

        self._chart_view = ChartView()

        splitter.addWidget(scroll)
        splitter.addWidget(self._chart_view)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([340, 1160])

        main_layout.addWidget(splitter)

    def _setup_menu(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")

        act_open = QAction("Open CSV...", self)
        act_open.setShortcut("Ctrl+O")
        act_open.triggered.connect(
            lambda *_: self._config_panel.load_csv_dialog()
        )
        file_menu.addAction(act_open)

        file_menu.addSeparator()

        act_svg = QAction("Export Chart as SVG...", self)
        act_svg.triggered.connect(
            lambda *_: self._chart_view.export_dialog('svg')
        )
        file_menu.addAction(act_svg)

        act_png = QAction("Export Chart as PNG...", self)
        act_png.triggered.connect(
            lambda *_: self._chart_view.export_dialog('png')
        )
        file_menu.addAction(act_png)

        act_export_all = QAction("Export All Charts...", self)
        act_export_all.triggered.connect(lambda *_: self._export_all())
        file_menu.addAction(act_export_all)

        file_menu.addSeparator()

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        file_menu.addAction(act_exit)

        examples_menu = menubar.addMenu("Examples")
        act_example = QAction("Load Example Dataset", self)
        act_example.triggered.connect(
            lambda *_: self._config_panel.load_example()
        )
        examples_menu.addAction(act_example)

        help_menu = menubar.addMenu("Help")
        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    def _connect_signals(self):
        self._config_panel.records_loaded.connect(self._on_records_loaded)
        self._config_panel.config_changed.connect(self._on_config_changed)
        self._config_panel.export_all_button.clicked.connect(
            lambda *_: self._export_all()
        )
        self._chart_view.expanded_changed.connect(self._on_expanded_changed)

    # ── Slots ────────────────────────────────────────────────────────

    def _render(self, records):
        try:
            self._chart_view.set_data(records, self._color_state,
                                      self._config_panel.get_config())
        except (ValueError, KeyError) as exc:
            logger.exception("Chart render failed")
            QMessageBox.critical(
                self, "Chart Error",
                f"An error occurred while drawing the chart:\n\n{exc}",
            )
            self.statusBar().showMessage("Chart render failed")
            return False
        return True

    def _on_records_loaded(self, records):
        if self._render(records):
            self.statusBar().showMessage(f"Loaded {len(records)} rows", 5000)

    def _on_config_changed(self):
        records = self._config_panel.get_records()
        if not records:
            return
        self._render(records)

    def _on_expanded_changed(self, key):
        if key:
            category, _, field = key.partition('|')
            self.statusBar().showMessage(f"Expanded {field} ({category})")
        else:
            self.statusBar().showMessage("Collapsed", 3000)

    def _export_all(self):
        """Export one chart per plotted property to a folder."""
        if not self._config_panel.get_records():
            QMessageBox.warning(self, "No Data",
                                "Please load a CSV file first.")
            return

        folder = QFileDialog.getExistingDirectory(
            self, "Select Output Folder for All Charts"
        )
        if not folder:
            return

        self.statusBar().showMessage("Exporting all charts...")
        try:
            figures = self._chart_view.get_all_figures()
            paths = export_all_charts(figures, folder, 'svg')
        except (OSError, ValueError) as exc:
            logger.error("Batch export failed: %s", exc)
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export charts:\n\n{exc}")
            return

        self.statusBar().showMessage(
            f"Exported {len(paths)} charts to {os.path.basename(folder)}",
            5000,
        )

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Horizon charts of indoor comfort sensor data: air "
            f"quality, thermal, luminous and acoustic comfort.</p>"
            f"<p>Click a row to see it as a line plot; click again to "
            f"fold it back into bands.</p>",
        )
