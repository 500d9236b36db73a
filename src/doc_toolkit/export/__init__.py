"""
Module: export

Purpose:
    Export a rich-text document to a paginated, image-based PDF.
    Rasterizes the content once, slices the bitmap into page-sized
    pieces and renders index and content pages with ReportLab.

Key Functions:
    - export_document(): Main entry point for export
    - assemble(): Paginate and render an already rasterized image

Key Classes:
    - ExportConfig / ExportOptions: Configuration
    - ExportResult: Finished artifact
    - ExportRunner: Background execution, one export at a time
    - CancelToken: Cancellation of an in-flight export

Dependencies:
    - PIL: Image manipulation
    - fitz (PyMuPDF): HTML rasterization
    - reportlab: PDF generation
"""

from .config import ExportConfig, ExportOptions, DEFAULT_FILENAME
from .controller import export_document, assemble, ExportResult, CancelToken
from .runner import ExportRunner

__all__ = [
    # Config
    "ExportConfig",
    "ExportOptions",
    "DEFAULT_FILENAME",
    # Controller
    "export_document",
    "assemble",
    "ExportResult",
    "CancelToken",
    # Runner
    "ExportRunner",
]
