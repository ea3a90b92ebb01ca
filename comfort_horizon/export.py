"""
Export utilities for the Comfort Horizon Viewer.

Writes the rendered chart as a standalone SVG document or a PNG image,
copies it to the clipboard, and batch-exports one figure per plotted
property.  SVG output always declares the SVG and XLink namespaces on
its root element so the file opens in browsers and vector editors.

The figure's own size is left untouched; ``savefig`` is given the
export DPI directly and the facecolor is restored afterwards.
"""

import io
import logging
import os
import re
from typing import Dict, List

from matplotlib.figure import Figure

from .constants import (
    CHART_DPI, EXPORT_DPI, PLOT_STYLE_LIGHT, SVG_NAMESPACE, XLINK_NAMESPACE,
)

logger = logging.getLogger(__name__)

_SVG_ROOT = re.compile(r"<svg\b[^>]*>", re.DOTALL)

EXPORT_FORMATS = ('svg', 'png')


def ensure_svg_namespaces(svg_text: str) -> str:
    """Add ``xmlns`` / ``xmlns:xlink`` to the root ``<svg>`` tag if absent.

    Text without an ``<svg`` element is returned unchanged.
    """
    match = _SVG_ROOT.search(svg_text)
    if match is None:
        return svg_text

    tag = match.group(0)
    extra = ""
    if not re.search(r"\sxmlns\s*=", tag):
        extra += f' xmlns="{SVG_NAMESPACE}"'
    if not re.search(r"\sxmlns:xlink\s*=", tag):
        extra += f' xmlns:xlink="{XLINK_NAMESPACE}"'
    if not extra:
        return svg_text

    new_tag = "<svg" + extra + tag[len("<svg"):]
    return svg_text[:match.start()] + new_tag + svg_text[match.end():]


def _save(fig: Figure, target, fmt: str, dpi: int) -> None:
    face = fig.get_facecolor()
    try:
        fig.set_facecolor(PLOT_STYLE_LIGHT['figure.facecolor'])
        fig.savefig(
            target,
            format=fmt,
            dpi=dpi,
            facecolor=fig.get_facecolor(),
            edgecolor='none',
        )
    finally:
        fig.set_facecolor(face)


def svg_bytes(fig: Figure) -> bytes:
    """Serialise *fig* to a standalone SVG document (UTF-8 bytes)."""
    buf = io.BytesIO()
    _save(fig, buf, 'svg', CHART_DPI)
    text = buf.getvalue().decode('utf-8')
    return ensure_svg_namespaces(text).encode('utf-8')


def export_svg(fig: Figure, filepath: str) -> str:
    """Write *fig* as SVG to *filepath*.  Returns the path."""
    data = svg_bytes(fig)
    with open(filepath, 'wb') as fh:
        fh.write(data)
    logger.info("Exported SVG to %s (%d bytes)", filepath, len(data))
    return filepath


def export_png(fig: Figure, filepath: str, *, dpi: int = EXPORT_DPI) -> str:
    """Write *fig* as PNG to *filepath* at *dpi*.  Returns the path.

    The chart is laid out in pixels at ``CHART_DPI``; a higher *dpi*
    scales the whole image up without changing the layout.
    """
    _save(fig, filepath, 'png', dpi)
    logger.info("Exported PNG to %s at %d dpi", filepath, dpi)
    return filepath


def copy_to_clipboard(fig: Figure, dpi: int = CHART_DPI) -> bool:
    """Copy *fig* to the system clipboard as an image.

    Returns ``True`` on success, ``False`` if no clipboard is available.
    """
    try:
        from PySide6.QtGui import QImage
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return False

    buf = io.BytesIO()
    _save(fig, buf, 'png', dpi)

    img = QImage()
    if not img.loadFromData(buf.getvalue()):
        return False
    clipboard = QApplication.clipboard()
    if clipboard is None:
        return False
    clipboard.setImage(img)
    return True


def safe_filename(name: str) -> str:
    """Reduce *name* to letters, digits, ``-`` and ``_``."""
    cleaned = "".join(
        c if c.isalnum() or c in '-_ ' else '_'
        for c in name
    )
    return cleaned.strip().replace(' ', '_') or 'chart'


def export_all_charts(
    figures: Dict[str, Figure],
    output_dir: str,
    fmt: str = 'svg',
    *,
    dpi: int = EXPORT_DPI,
) -> List[str]:
    """Export several figures to *output_dir*.

    Parameters
    ----------
    figures : dict
        ``{filename_stem: Figure}``, e.g. one figure per plotted property.
    output_dir : str
        Created if it does not exist.
    fmt : str
        ``'svg'`` or ``'png'``.
    dpi : int
        PNG resolution (ignored for SVG).

    Returns
    -------
    list of str
        Paths of the written files, in the order of *figures*.
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format {fmt!r}; "
                         f"expected one of {EXPORT_FORMATS}")

    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for name, fig in figures.items():
        filepath = os.path.join(output_dir, f"{safe_filename(name)}.{fmt}")
        if fmt == 'svg':
            export_svg(fig, filepath)
        else:
            export_png(fig, filepath, dpi=dpi)
        paths.append(filepath)
    return paths
