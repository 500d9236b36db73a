"""
Module: export.output

Purpose:
    PDF rendering for the export pipeline.
    Converts LayoutResult to PDF bytes using ReportLab.

Key Functions:
    - render_to_pdf(): Render layout to PDF bytes

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - export.layout.models: LayoutResult

Used By:
    - export.controller: Pipeline orchestration
"""

from .renderer import render_to_pdf

__all__ = [
    "render_to_pdf",
]
