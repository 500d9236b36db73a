"""
Module: export.render

Purpose:
    Rasterization abstractions for the export pipeline.
    Turn editor content into one tall bitmap and crop slices from it.

Key Classes:
    - RendererAdapter: Abstract interface for rasterization
    - HtmlRenderer: Markup renderer backed by PyMuPDF
    - StaticImageRenderer: Pre-rendered bitmap

Key Functions:
    - crop_slice(): Crop one slice from the raster image

Dependencies:
    - PIL: Image manipulation
    - fitz (PyMuPDF): HTML layout

Used By:
    - export.controller: Rasterization step
    - export.output.renderer: Slice images
"""

from .provider import RendererAdapter, StaticImageRenderer
from .html_renderer import HtmlRenderer
from .cropper import crop_slice, crop_slices

__all__ = [
    "RendererAdapter",
    "StaticImageRenderer",
    "HtmlRenderer",
    "crop_slice",
    "crop_slices",
]
