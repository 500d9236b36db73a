"""
Core Models Package

Immutable, validated data models shared by the store, editor and export
pipeline. All models are frozen dataclasses; updates produce replacements.
"""

from .documents import Document, is_blank_markup, markup_to_text
from .geometry import PageGeometry

__all__ = [
    "Document",
    "is_blank_markup",
    "markup_to_text",
    "PageGeometry",
]
