"""
Entry point for the Comfort Horizon Viewer.

Usage:
    python -m comfort_horizon [--verbose] [data.csv]
"""

import argparse
import logging
import os
import sys
import traceback

logger = logging.getLogger("comfort_horizon")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _check_dependencies():
    """Verify required packages are installed."""
    missing = []
    for module, package in (("PySide6", "PySide6"),
                            ("matplotlib", "matplotlib"),
                            ("numpy", "numpy"),
                            ("bokeh", "bokeh")):
        try:
            __import__(module)
        except ImportError:
            missing.append(package)

    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Log unhandled exceptions and show them in a dialog."""
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    logger.critical("Unhandled exception:\n%s", msg)

    from PySide6.QtWidgets import QMessageBox, QApplication
    if QApplication.instance() is not None:
        QMessageBox.critical(
            None, "Unhandled Error",
            f"An unexpected error occurred:\n\n"
            f"{exc_type.__name__}: {exc_value}\n\n"
            f"See the log for the full traceback.",
        )


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="comfort-horizon",
        description="Horizon chart viewer for indoor comfort sensor data.",
    )
    parser.add_argument("csv", nargs="?", help="CSV file to open on start")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Launch the Comfort Horizon Viewer GUI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    # Font lookups are very chatty at DEBUG
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.captureWarnings(True)

    _check_dependencies()
    sys.excepthook = _exception_hook

    # Configure matplotlib backend before importing Qt widgets
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtWidgets import QApplication
    from PySide6.QtGui import QFont, QFontDatabase

    from . import APP_NAME, APP_VERSION
    from .constants import FONT_FAMILIES
    from .theme import get_dark_stylesheet
    from .gui_main import ViewerMainWindow

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    font = QFont()
    for family in FONT_FAMILIES:
        if QFontDatabase.hasFamily(family):
            font.setFamily(family)
            break
    font.setPointSize(10)
    app.setFont(font)
    app.setStyleSheet(get_dark_stylesheet())

    logger.info("Starting %s v%s", APP_NAME, APP_VERSION)
    window = ViewerMainWindow(csv_path=args.csv)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
