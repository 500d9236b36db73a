"""
Module: export.layout.paginator

Purpose:
    Plan every page of an export: optional index pages, then one
    content page per slice with a running "Page N" footer.

Key Functions:
    - paginate(): Main pagination function
    - index_lines(): Text lines of the index page(s)

Algorithm:
    1. If the index is enabled, list every document by ordinal position
       ("Document 1: ...") on leading, unnumbered index pages
    2. Drive the slicer from the top margin of the first content page
    3. Every slice goes on its own page; a page break from the slicer
       finalizes the page and increments the page number
    4. A zero-height image still yields one blank "Page 1"

Dependencies:
    - export.layout.slicer: Slicer steps
    - export.layout.models: PagePlan, LayoutResult
    - export.config: ExportConfig

Used By:
    - export.controller: Export orchestration
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from doc_toolkit.core.models import Document, PageGeometry

from ..config import ExportConfig, ExportOptions
from .models import LayoutResult, PageKind, PagePlan, Slice
from .slicer import next_slice, start_state

logger = logging.getLogger(__name__)


def paginate(
    image_size: Tuple[int, int],
    config: ExportConfig,
    documents: Sequence[Document] = (),
) -> LayoutResult:
    """
    Arrange a raster image (and optional index) onto pages.

    Args:
        image_size: (width, height) of the raster image in pixels
        config: Export configuration (geometry and options)
        documents: Saved documents for the index page, in store order

    Returns:
        LayoutResult with page plans in artifact order

    Raises:
        InvalidGeometryError: If the geometry cannot hold a single row
        ValueError: If the image has height but no width
    """
    geometry = config.geometry
    options = config.options
    pages: List[PagePlan] = []
    warnings: List[str] = []

    if options.include_index:
        for lines in _chunk_lines(index_lines(documents), _index_lines_per_page(geometry, config)):
            pages.append(PagePlan(index=len(pages), kind=PageKind.INDEX, lines=lines))

    width_px, height_px = image_size
    page_number = 1

    if height_px == 0:
        message = "Empty document, emitting a single blank content page"
        logger.warning(message)
        warnings.append(message)
        pages.append(_content_page(len(pages), page_number, None, options))
        return LayoutResult(pages=tuple(pages), image_size=image_size, scale=0.0, warnings=warnings)

    scale = geometry.scale_for(width_px)
    state = start_state(height_px, geometry, geometry.top_margin)

    while not state.is_done:
        piece, state = next_slice(state, geometry, scale)
        pages.append(_content_page(len(pages), page_number, piece, options))
        if piece.page_break_after:
            page_number += 1

    logger.info(
        f"Paginated {height_px}px image onto {page_number} content pages "
        f"({len(pages) - page_number} index pages)"
    )
    return LayoutResult(pages=tuple(pages), image_size=image_size, scale=scale, warnings=warnings)


def index_lines(documents: Sequence[Document]) -> List[str]:
    """
    Index entries, one per document, labelled by 1-based position.

    Example:
        >>> index_lines([Document(1, "<p>Hi</p>")])
        ['Document 1: Hi']
    """
    return [f"Document {i}: {doc.plain_text()}".rstrip() for i, doc in enumerate(documents, start=1)]


def _content_page(
    index: int,
    number: int,
    piece: Optional[Slice],
    options: ExportOptions,
) -> PagePlan:
    """Build one content page plan."""
    return PagePlan(
        index=index,
        kind=PageKind.CONTENT,
        number=number,
        slice=piece,
        footer_label=f"Page {number}" if options.include_footer_labels else None,
    )


def _index_lines_per_page(geometry: PageGeometry, config: ExportConfig) -> int:
    """Baselines that fit between the top margin and the footer reserve."""
    return math.floor(geometry.usable_height / config.index_line_height) + 1


def _chunk_lines(lines: List[str], per_page: int) -> List[Tuple[str, ...]]:
    """Split lines into page-sized groups; no documents still gives one page."""
    if not lines:
        return [()]
    return [tuple(lines[i:i + per_page]) for i in range(0, len(lines), per_page)]
