"""
Module: export.controller

Purpose:
    Orchestrate the complete export pipeline.
    Rasterize → Slice/Paginate → Render PDF

Key Functions:
    - export_document(): Main entry point for exporting one document
    - assemble(): Paginate and render an already rasterized image

Key Classes:
    - ExportResult: Finished artifact and its page summary
    - CancelToken: Caller-side cancellation of an in-flight export

Dependencies:
    - export.render: Renderer adapters
    - export.layout: Pagination
    - export.output: PDF rendering

Used By:
    - export.runner: Background execution
    - editor.session: Export of the live editor content
"""

from __future__ import annotations

import logging
import tempfile
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from PIL import Image

from doc_toolkit.core.errors import (
    DocToolkitError,
    ExportCancelledError,
    ExportError,
)
from doc_toolkit.core.models import Document

from .config import ExportConfig
from .layout import LayoutResult, PagePlan, paginate
from .output import render_to_pdf
from .render import HtmlRenderer, RendererAdapter

logger = logging.getLogger(__name__)


class CancelToken:
    """
    Cancellation flag shared between the caller and an export.

    The export checks the token after rasterization and before every
    page; a cancelled export raises ExportCancelledError and releases
    nothing to the caller.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ExportCancelledError("Export cancelled")


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        pdf_bytes: The artifact
        filename: Default filename offered for saving
        page_count: Total pages, index pages included
        footer_labels: Footer label of every labelled page, in order
        layout: Page plans the artifact was rendered from
        metadata: Export metadata dictionary

    Example:
        >>> result = export_document("<p>Hi</p>")
        >>> result.footer_labels
        ('Page 1',)
    """

    pdf_bytes: bytes
    filename: str
    page_count: int
    footer_labels: tuple[str, ...]
    layout: LayoutResult
    metadata: dict = field(default_factory=dict)

    @property
    def content_page_count(self) -> int:
        """Number of content pages (index pages excluded)."""
        return self.layout.content_page_count

    def save(self, directory: Path, filename: Optional[str] = None) -> Path:
        """
        Atomically write the artifact into directory.

        Args:
            directory: Target directory (created if missing)
            filename: Override for the default filename

        Returns:
            Path of the written file
        """
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (filename or self.filename)

        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                suffix=".pdf.tmp",
                dir=directory,
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(self.pdf_bytes)
            temp_path.replace(path)
        except Exception:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise
        logger.info(f"Saved {self.page_count}-page PDF to {path}")
        return path


def export_document(
    region: Any,
    config: Optional[ExportConfig] = None,
    *,
    documents: Sequence[Document] = (),
    renderer: Optional[RendererAdapter] = None,
    cancel_token: Optional[CancelToken] = None,
) -> ExportResult:
    """
    Export one document to PDF.

    Pipeline:
    1. Rasterize the content region
    2. Slice the image against the page geometry and plan pages
    3. Render index and content pages to PDF bytes

    Args:
        region: Content to export (markup string or Document)
        config: Export configuration (defaults: footer labels, no index)
        documents: Saved documents listed on the index page; the
            sequence is copied before use
        renderer: Renderer adapter (default HtmlRenderer at content width)
        cancel_token: Optional token to abandon the export

    Returns:
        ExportResult holding the PDF bytes

    Raises:
        RenderFailure: If rasterization fails
        InvalidGeometryError: If the geometry cannot hold content
        ExportCancelledError: If cancelled through the token
        ExportError: If assembling or writing the PDF fails
    """
    config = config or ExportConfig()
    snapshot = tuple(documents)
    renderer = renderer or HtmlRenderer(width_mm=config.geometry.content_width)
    start_time = time.perf_counter()

    logger.info(
        f"Starting export (index={config.options.include_index}, "
        f"footers={config.options.include_footer_labels}, scale={config.scale})"
    )

    # 1. Rasterize
    image = renderer.rasterize(region, config.scale)
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()

    # 2-3. Paginate and render
    result = assemble(image, config, documents=snapshot, cancel_token=cancel_token)

    elapsed = time.perf_counter() - start_time
    result.metadata["elapsed_seconds"] = round(elapsed, 3)
    logger.info(f"Export completed in {elapsed:.2f}s ({result.page_count} pages)")
    return result


def assemble(
    image: Image.Image,
    config: ExportConfig,
    *,
    documents: Sequence[Document] = (),
    cancel_token: Optional[CancelToken] = None,
) -> ExportResult:
    """
    Paginate a raster image and render the artifact.

    Args:
        image: Raster image of the content
        config: Export configuration
        documents: Saved documents for the index page
        cancel_token: Optional token checked before every page

    Returns:
        ExportResult holding the PDF bytes

    Raises:
        InvalidGeometryError: If the geometry cannot hold content
        ExportCancelledError: If cancelled through the token
        ExportError: If rendering the PDF fails
    """
    layout = paginate(image.size, config, documents)

    def _check(page: PagePlan) -> None:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

    try:
        pdf_bytes = render_to_pdf(layout, image, config, before_page=_check)
    except DocToolkitError:
        raise
    except Exception as e:
        raise ExportError(f"Failed to render PDF: {e}") from e

    return ExportResult(
        pdf_bytes=pdf_bytes,
        filename=config.filename,
        page_count=layout.page_count,
        footer_labels=layout.footer_labels,
        layout=layout,
        metadata=_build_metadata(config, layout, len(documents)),
    )


def _build_metadata(config: ExportConfig, layout: LayoutResult, document_count: int) -> dict:
    """Summary of an export for logs and callers."""
    from datetime import datetime

    from doc_toolkit import __version__

    geometry = config.geometry
    return {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "version": __version__,
        "include_index": config.options.include_index,
        "include_footer_labels": config.options.include_footer_labels,
        "indexed_documents": document_count if config.options.include_index else 0,
        "image_size": list(layout.image_size),
        "scale_px_per_mm": layout.scale,
        "page_size_mm": [geometry.page_width, geometry.page_height],
        "page_count": layout.page_count,
        "content_page_count": layout.content_page_count,
        "warnings": list(layout.warnings),
    }
