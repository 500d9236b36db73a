"""
Module: export.output.renderer

Purpose:
    Render a LayoutResult to PDF bytes using ReportLab.
    Each PagePlan becomes one PDF page: index pages get text lines,
    content pages get their slice image and footer label.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - export.layout.models: LayoutResult, PagePlan
    - export.render.cropper: Slice images

Used By:
    - export.controller: Export orchestration
"""

from __future__ import annotations

import io
import logging
from typing import Callable, Optional

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from doc_toolkit.core.models import PageGeometry
from doc_toolkit.export.config import ExportConfig
from doc_toolkit.export.layout.models import LayoutResult, PageKind, PagePlan, Slice
from doc_toolkit.export.render.cropper import crop_slice

logger = logging.getLogger(__name__)

FONT_NAME = "Helvetica"
ELLIPSIS = "..."
# Narrowest printable Helvetica glyph (0.191em), bounds how many characters can fit
NARROWEST_GLYPH = "'"


def _get_creator() -> str:
    """Creator metadata with current version number."""
    from doc_toolkit import __version__
    return f"doc_toolkit v{__version__}"


def render_to_pdf(
    layout: LayoutResult,
    image: Image.Image,
    config: ExportConfig,
    *,
    before_page: Optional[Callable[[PagePlan], None]] = None,
) -> bytes:
    """
    Render layout result to PDF bytes.

    Args:
        layout: Layout result from paginator
        image: Raster image the layout was sliced from
        config: Export configuration (geometry, fonts, footer position)
        before_page: Called with each PagePlan before it is drawn; may
            raise to abort rendering

    Returns:
        Complete PDF document as bytes

    Raises:
        ValueError: If the image does not match the layout
    """
    if image.size != layout.image_size:
        raise ValueError(f"Image size {image.size} does not match layout {layout.image_size}")

    geometry = config.geometry
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(geometry.page_width * mm, geometry.page_height * mm))
    c.setTitle(config.title)
    c.setCreator(_get_creator())

    for page in layout.pages:
        if before_page is not None:
            before_page(page)
        _render_page(c, page, image, config)
        c.showPage()

    c.save()
    logger.info(f"Rendered {layout.page_count} pages to PDF")
    return buffer.getvalue()


def _render_page(
    c: canvas.Canvas,
    page: PagePlan,
    image: Image.Image,
    config: ExportConfig,
) -> None:
    """Render a single page to the canvas."""
    geometry = config.geometry

    if page.kind is PageKind.INDEX:
        _draw_index_lines(c, page, config)
    elif page.slice is not None:
        _draw_slice(c, page.slice, image, geometry)

    if page.footer_label is not None:
        _draw_footer(c, page.footer_label, config)


def _draw_slice(
    c: canvas.Canvas,
    piece: Slice,
    image: Image.Image,
    geometry: PageGeometry,
) -> None:
    """Draw a slice across the content width at its placement."""
    img_reader = _pil_to_reader(crop_slice(image, piece))
    y_mm = _transform_y(geometry.page_height, piece.placement_y, piece.height)
    c.drawImage(
        img_reader,
        geometry.horizontal_margin * mm,
        y_mm * mm,
        width=geometry.content_width * mm,
        height=piece.height * mm,
    )


def _draw_index_lines(c: canvas.Canvas, page: PagePlan, config: ExportConfig) -> None:
    """Draw index lines, first baseline at the top margin."""
    geometry = config.geometry
    max_width = geometry.content_width * mm

    c.saveState()
    c.setFont(FONT_NAME, config.index_font_size)
    for i, line in enumerate(page.lines):
        baseline_mm = geometry.page_height - geometry.top_margin - i * config.index_line_height
        text = _fit_text(line, max_width, config.index_font_size)
        c.drawString(geometry.horizontal_margin * mm, baseline_mm * mm, text)
    c.restoreState()


def _draw_footer(c: canvas.Canvas, label: str, config: ExportConfig) -> None:
    """Draw the footer label centred on the page."""
    geometry = config.geometry
    c.saveState()
    c.setFont(FONT_NAME, config.footer_font_size)
    c.drawCentredString(
        geometry.page_width / 2 * mm,
        config.footer_baseline_offset * mm,
        label,
    )
    c.restoreState()


def _fit_text(text: str, max_width: float, font_size: int) -> str:
    """
    Truncate text with an ellipsis so it fits max_width points.

    Text is first capped to the most glyphs that could fit, then the cut
    point is bisected, so the cost does not grow with the preview length.
    """
    narrowest = stringWidth(NARROWEST_GLYPH, FONT_NAME, font_size)
    cap = int(max_width / narrowest) + 1 if narrowest > 0 else len(text)
    if len(text) <= cap and stringWidth(text, FONT_NAME, font_size) <= max_width:
        return text

    text = text[:cap]
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if stringWidth(text[:mid] + ELLIPSIS, FONT_NAME, font_size) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo].rstrip() + ELLIPSIS


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    PNG keeps the slice lossless.
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(page_height: float, y_top: float, height: float) -> float:
    """
    Convert a top-down Y coordinate to bottom-up PDF Y (same units).

    Args:
        page_height: Page height
        y_top: Y position of the element's top, from the page top
        height: Height of the element

    Returns:
        Y position of the element's bottom, from the page bottom
    """
    return page_height - y_top - height
