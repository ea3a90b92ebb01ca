"""
Configuration panel (left side) for the Comfort Horizon Viewer.

Data loading, band count, plotted property and the colour scheme of
each comfort category.  Scheme and custom-colour edits are written
straight into the shared ``CategoryColorState``; the panel then emits
``config_changed`` so the host can re-render.
"""

import logging
import os
import tempfile
import warnings

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QGroupBox,
    QLabel, QPushButton, QComboBox, QSpinBox, QFileDialog,
    QMessageBox, QColorDialog,
)
from PySide6.QtGui import QColor
from PySide6.QtCore import Signal

from .category_colors import CategoryColorState
from .constants import (
    CATEGORIES, DARK_COLORS, DEFAULT_BANDS, DEFAULT_PLOT_PROPERTY,
    MAX_BANDS, MIN_BANDS, PLOT_PROPERTIES,
)
from .csv_parser import load_records
from .palette import AVAILABLE_SCHEMES, SchemeId, parse_scheme
from .series import select_first_run

logger = logging.getLogger(__name__)


class ConfigPanel(QWidget):
    """Left-side panel with data loading and chart options."""

    config_changed = Signal()
    records_loaded = Signal(object)  # emits list of Record

    def __init__(self, color_state: CategoryColorState, parent=None):
        super().__init__(parent)
        self._color_state = color_state
        self._records = []
        self._scheme_combos = {}
        self._color_buttons = {}
        self._setup_ui()
        self._connect_signals()
        self.sync_from_state()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        # ── Data ─────────────────────────────────────────────────────
        grp_data = QGroupBox("Data")
        data_layout = QVBoxLayout(grp_data)
        data_layout.setSpacing(4)

        self._btn_load = QPushButton("Load CSV...")
        self._btn_load.setToolTip(
            "CSV with columns: id, time, category, field, value, score"
        )
        data_layout.addWidget(self._btn_load)

        self._btn_example = QPushButton("Load Example Data")
        data_layout.addWidget(self._btn_example)

        self._lbl_status = QLabel("No data loaded")
        self._lbl_status.setWordWrap(True)
        self._set_status_style('fg_dim')
        data_layout.addWidget(self._lbl_status)

        layout.addWidget(grp_data)

        # ── Chart options ────────────────────────────────────────────
        grp_chart = QGroupBox("Chart")
        chart_layout = QFormLayout(grp_chart)
        chart_layout.setSpacing(4)

        self._spn_bands = QSpinBox()
        self._spn_bands.setRange(MIN_BANDS, MAX_BANDS)
        self._spn_bands.setValue(DEFAULT_BANDS)
        self._spn_bands.setToolTip("Number of colour bands per row")
        chart_layout.addRow("Bands:", self._spn_bands)

        self._cmb_property = QComboBox()
        self._cmb_property.addItems(PLOT_PROPERTIES)
        self._cmb_property.setCurrentText(DEFAULT_PLOT_PROPERTY)
        chart_layout.addRow("Plot:", self._cmb_property)

        layout.addWidget(grp_chart)

        # ── Colour schemes ───────────────────────────────────────────
        grp_colors = QGroupBox("Colour Schemes")
        colors_layout = QFormLayout(grp_colors)
        colors_layout.setSpacing(4)

        for category in CATEGORIES:
            row = QHBoxLayout()
            row.setSpacing(4)

            combo = QComboBox()
            for desc in AVAILABLE_SCHEMES:
                combo.addItem(desc.label, desc.scheme.value)

            swatch = QPushButton()
            swatch.setFixedSize(28, 24)
            swatch.setToolTip("Base colour for the custom scheme")

            row.addWidget(combo, 1)
            row.addWidget(swatch)
            colors_layout.addRow(QLabel(category), row)

            self._scheme_combos[category] = combo
            self._color_buttons[category] = swatch

        self._btn_reset = QPushButton("Reset Colours")
        colors_layout.addRow(self._btn_reset)

        layout.addWidget(grp_colors)

        # ── Actions ──────────────────────────────────────────────────
        c = DARK_COLORS
        self._btn_export_all = QPushButton("Export All Charts...")
        self._btn_export_all.setStyleSheet(
            f"QPushButton {{ background-color: {c['accent']}; "
            f"color: {c['bg']}; font-weight: bold; padding: 8px; }}"
            f"QPushButton:hover {{ background-color: {c['accent_hover']}; }}"
            f"QPushButton:disabled {{ background-color: {c['bg']}; "
            f"color: {c['fg_dim']}; }}"
        )
        self._btn_export_all.setEnabled(False)
        layout.addWidget(self._btn_export_all)

        layout.addStretch()

    def _connect_signals(self):
        self._btn_load.clicked.connect(lambda *_: self.load_csv_dialog())
        self._btn_example.clicked.connect(lambda *_: self.load_example())
        self._btn_reset.clicked.connect(lambda *_: self._on_reset_colors())

        self._spn_bands.valueChanged.connect(
            lambda *_: self.config_changed.emit()
        )
        self._cmb_property.currentIndexChanged.connect(
            lambda *_: self.config_changed.emit()
        )

        for category in CATEGORIES:
            self._scheme_combos[category].currentIndexChanged.connect(
                lambda _idx, cat=category: self._on_scheme_changed(cat)
            )
            self._color_buttons[category].clicked.connect(
                lambda checked=False, cat=category: self._pick_color(cat)
            )

    # ── State sync ───────────────────────────────────────────────────

    def sync_from_state(self):
        """Refresh combos and swatches from the shared colour state."""
        for category in CATEGORIES:
            combo = self._scheme_combos[category]
            scheme = parse_scheme(self._color_state.scheme_for(category))
            combo.blockSignals(True)
            if scheme is not None:
                idx = combo.findData(scheme.value)
                if idx >= 0:
                    combo.setCurrentIndex(idx)
            combo.blockSignals(False)
            self._update_swatch(category)

    def _update_swatch(self, category):
        btn = self._color_buttons[category]
        if self._color_state.is_custom(category):
            color = self._color_state.custom_color_for(category)
        else:
            color = self._color_state.get_category_base_color(category)
        btn.setStyleSheet(
            f"QPushButton {{ background-color: {color}; "
            f"border: 1px solid {DARK_COLORS['border']}; }}"
        )

    def _set_status_style(self, color_key):
        self._lbl_status.setStyleSheet(
            f"color: {DARK_COLORS[color_key]}; font-size: 11px;"
        )

    # ── Slots ────────────────────────────────────────────────────────

    def _on_scheme_changed(self, category):
        scheme = self._scheme_combos[category].currentData()
        self._color_state.update_scheme(category, scheme)
        logger.debug("Scheme for %s set to %s", category, scheme)
        self._update_swatch(category)
        self.config_changed.emit()

    def _pick_color(self, category):
        initial = QColor(self._color_state.custom_color_for(category))
        color = QColorDialog.getColor(initial, self, f"Base colour: {category}")
        if not color.isValid():
            return
        self._color_state.update_custom_color(category, color.name())

        # Picking a colour implies the custom scheme
        combo = self._scheme_combos[category]
        idx = combo.findData(SchemeId.CUSTOM.value)
        if combo.currentIndex() != idx:
            combo.setCurrentIndex(idx)  # emits config_changed via the slot
        else:
            self._update_swatch(category)
            self.config_changed.emit()

    def _on_reset_colors(self):
        self._color_state.reset()
        self.sync_from_state()
        self.config_changed.emit()

    def load_csv_dialog(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Select Sensor CSV File",
            "", "CSV Files (*.csv);;All Files (*)",
        )
        if path:
            self.load_path(path)

    def load_example(self):
        """Generate the example feed in a temp folder and load it."""
        from .example_data import generate_example_csv

        example_dir = os.path.join(
            tempfile.gettempdir(), 'comfort_horizon_example'
        )
        self.load_path(generate_example_csv(example_dir))

    def load_path(self, path):
        """Load *path*, report problems, and emit ``records_loaded``."""
        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter('always')
                records = load_records(path)
        except (ValueError, FileNotFoundError, OSError) as exc:
            logger.error("Failed to load %s: %s", path, exc)
            self._lbl_status.setText(f"Error: {exc}")
            self._set_status_style('red')
            self._btn_export_all.setEnabled(False)
            QMessageBox.critical(self, "Data Load Error", str(exc))
            return

        for w in caught:
            logger.warning("%s", w.message)

        self._records = records
        n_fields = len({r.key for r in select_first_run(records)})
        n_cats = len({r.category for r in records})
        text = (f"Loaded {os.path.basename(path)}: {len(records)} rows, "
                f"{n_cats} categories, {n_fields} fields")
        if caught:
            text += f" ({len(caught)} warning(s), see log)"
            self._set_status_style('yellow')
        else:
            self._set_status_style('green')
        self._lbl_status.setText(text)
        logger.info(text)

        self._btn_export_all.setEnabled(True)
        self.records_loaded.emit(records)

    # ── Public API ───────────────────────────────────────────────────

    def get_config(self) -> dict:
        """Current chart options as a dict for the chart composer."""
        return {
            'band_count': self._spn_bands.value(),
            'plot_property': self._cmb_property.currentText(),
        }

    def get_records(self) -> list:
        return self._records

    @property
    def export_all_button(self) -> QPushButton:
        return self._btn_export_all
