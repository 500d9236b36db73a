"""
Module: export.render.html_renderer

Purpose:
    Rasterize rich-text markup with PyMuPDF's HTML layout engine.
    The markup is laid out at the page content width on an off-screen
    PDF target, then captured as one tall bitmap.

Key Classes:
    - HtmlRenderer: RendererAdapter backed by fitz.Story

Algorithm:
    0. Markup with no visible content gives a zero-height image
    1. Flow the markup into chunks of at most MAX_CHUNK_HEIGHT_PT
       (the largest page PDF allows) on a scratch document
    2. Rasterize the filled part of each chunk at the requested scale
    3. Stack the chunk bitmaps into one image

Dependencies:
    - fitz (PyMuPDF): HTML layout and rasterization
    - PIL: Image assembly
    - core.errors: RenderFailure

Used By:
    - export.controller: Default renderer for editor markup
"""

from __future__ import annotations

import io
import logging
from typing import Any, List, Tuple

import fitz
from PIL import Image

from doc_toolkit.core.errors import RenderFailure
from doc_toolkit.core.models import Document, is_blank_markup
from doc_toolkit.core.models.geometry import A4_WIDTH_MM, DEFAULT_HORIZONTAL_MARGIN_MM

from .provider import RendererAdapter

logger = logging.getLogger(__name__)

PT_PER_MM = 72.0 / 25.4
# Scale is expressed per CSS pixel, like a browser capture
CSS_PX_PER_PT = 96.0 / 72.0

MAX_CHUNK_HEIGHT_PT = 14400.0
MAX_CHUNKS = 200

DEFAULT_CSS = """
body { font-family: sans-serif; font-size: 12pt; line-height: 1.4; color: #000; }
p { margin: 0 0 6pt 0; }
table { width: 100%; border-collapse: collapse; margin: 10px 0; }
td, th { border: 1px solid black; padding: 8px; }
.ql-align-center { text-align: center; }
.ql-align-right { text-align: right; }
.ql-align-justify { text-align: justify; }
.ql-size-small { font-size: 9pt; }
.ql-size-large { font-size: 18pt; }
.ql-size-huge { font-size: 30pt; }
"""


class HtmlRenderer(RendererAdapter):
    """
    Rasterize markup with fitz.Story.

    Attributes:
        width_mm: Layout width of the content (the page content width)
        user_css: Stylesheet applied on top of the markup

    Example:
        >>> renderer = HtmlRenderer()
        >>> image = renderer.rasterize("<p>Hello</p>", scale=2.0)
        >>> image.width
        1436
    """

    def __init__(
        self,
        width_mm: float = A4_WIDTH_MM - 2 * DEFAULT_HORIZONTAL_MARGIN_MM,
        user_css: str = DEFAULT_CSS,
    ) -> None:
        if width_mm <= 0:
            raise ValueError(f"width_mm must be positive: {width_mm}")
        self.width_mm = width_mm
        self.user_css = user_css

    def rasterize(self, region: Any, scale: float) -> Image.Image:
        """
        Render markup (or a Document's markup) to an RGB image.

        Raises:
            RenderFailure: If the markup cannot be laid out or captured
        """
        if scale <= 0:
            raise RenderFailure(f"scale must be positive: {scale}")

        markup = region.content if isinstance(region, Document) else region
        if not isinstance(markup, str):
            raise RenderFailure(f"Cannot render region of type {type(region).__name__}")

        zoom = scale * CSS_PX_PER_PT
        width_pt = self.width_mm * PT_PER_MM
        width_px = round(width_pt * zoom)

        # The layout engine still boxes an empty paragraph
        if is_blank_markup(markup):
            logger.debug("Markup has no visible content")
            return Image.new("RGB", (width_px, 0), "white")

        try:
            pdf_bytes, heights = self._layout(markup, width_pt)
            tiles = self._capture(pdf_bytes, heights, width_pt, zoom)
        except RenderFailure:
            raise
        except Exception as e:
            raise RenderFailure(f"Failed to render content: {e}") from e

        if not tiles:
            logger.debug("Markup rendered to empty region")
            return Image.new("RGB", (width_px, 0), "white")

        image = _stack(tiles)
        logger.info(f"Rasterized content to {image.width}x{image.height}px at scale {scale}")
        return image

    def _layout(self, markup: str, width_pt: float) -> Tuple[bytes, List[float]]:
        """Flow markup onto scratch pages; return the PDF and filled heights."""
        story = fitz.Story(html=markup, user_css=self.user_css)
        mediabox = fitz.Rect(0, 0, width_pt, MAX_CHUNK_HEIGHT_PT)
        buffer = io.BytesIO()
        writer = fitz.DocumentWriter(buffer)
        heights: List[float] = []
        try:
            more = True
            while more:
                if len(heights) >= MAX_CHUNKS:
                    raise RenderFailure(f"Content exceeds {MAX_CHUNKS} render chunks")
                device = writer.begin_page(mediabox)
                more, filled = story.place(mediabox)
                story.draw(device)
                writer.end_page()
                # place() reports the filled area as a plain tuple
                heights.append(max(0.0, fitz.Rect(filled).y1))
        finally:
            writer.close()
        return buffer.getvalue(), heights

    def _capture(
        self,
        pdf_bytes: bytes,
        heights: List[float],
        width_pt: float,
        zoom: float,
    ) -> List[Image.Image]:
        """Rasterize the filled part of every scratch page."""
        tiles: List[Image.Image] = []
        matrix = fitz.Matrix(zoom, zoom)
        with fitz.open("pdf", pdf_bytes) as doc:
            for page, height in zip(doc, heights):
                if height <= 0:
                    continue
                clip = fitz.Rect(0, 0, width_pt, height)
                pix = page.get_pixmap(matrix=matrix, clip=clip, alpha=False)
                tiles.append(Image.frombytes("RGB", (pix.width, pix.height), pix.samples))
        return tiles


def _stack(tiles: List[Image.Image]) -> Image.Image:
    """Stack tiles top to bottom at the width of the first tile."""
    width = tiles[0].width
    height = sum(tile.height for tile in tiles)
    image = Image.new("RGB", (width, height), "white")
    y = 0
    for tile in tiles:
        image.paste(tile, (0, y))
        y += tile.height
    return image
