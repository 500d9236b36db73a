"""
Module: core.errors

Purpose:
    Exception hierarchy for the document toolkit. Catching
    DocToolkitError catches every failure raised by the package.

Key Classes:
    - DocToolkitError: Root exception
    - RenderFailure: Rasterization could not complete
    - InvalidGeometryError: Page geometry leaves no usable content area
    - ExportError: Export aborted (wraps unexpected failures)
    - ExportInProgressError: Second export requested while one is running
    - ExportCancelledError: Export abandoned through its cancel token

Used By:
    - core.models.geometry: Geometry validation
    - export.render: Renderer adapters
    - export.controller / export.runner: Export pipeline
"""

from __future__ import annotations


class DocToolkitError(Exception):
    """Base exception for all document toolkit errors."""
    pass


class RenderFailure(DocToolkitError):
    """Raised when a content region cannot be rasterized."""
    pass


class InvalidGeometryError(DocToolkitError, ValueError):
    """Raised when page geometry yields no usable content area."""
    pass


class ExportError(DocToolkitError):
    """Raised when an export cannot produce its artifact."""
    pass


class ExportInProgressError(ExportError):
    """Raised when an export is requested while another is in flight."""
    pass


class ExportCancelledError(ExportError):
    """Raised when an in-flight export is cancelled by its caller."""
    pass
