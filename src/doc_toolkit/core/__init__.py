"""
Core Package

Shared models, error hierarchy and serialization used by every other
subpackage.
"""

from .errors import (
    DocToolkitError,
    RenderFailure,
    InvalidGeometryError,
    ExportError,
    ExportInProgressError,
    ExportCancelledError,
)
from .models import Document, PageGeometry

__all__ = [
    "DocToolkitError",
    "RenderFailure",
    "InvalidGeometryError",
    "ExportError",
    "ExportInProgressError",
    "ExportCancelledError",
    "Document",
    "PageGeometry",
]
