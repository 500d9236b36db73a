"""
Module: export.render.provider

Purpose:
    Abstract renderer interface for turning a content region into a
    raster image. Keeps the slicer and assembler free of any display
    dependency.

Key Classes:
    - RendererAdapter: Abstract base class for rasterization
    - StaticImageRenderer: Serves an already rendered bitmap

Dependencies:
    - PIL: Image handling
    - core.errors: RenderFailure

Used By:
    - export.controller: Rasterization step
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from PIL import Image, UnidentifiedImageError

from doc_toolkit.core.errors import RenderFailure


class RendererAdapter(ABC):
    """
    Abstract interface for rasterizing content.

    Implementations own any temporary render target they create and
    must release it before returning, on success and on failure.
    """

    @abstractmethod
    def rasterize(self, region: Any, scale: float) -> Image.Image:
        """
        Rasterize a content region into one bitmap.

        Args:
            region: Content to render (markup for HTML renderers)
            scale: Output pixels per layout unit

        Returns:
            RGB image spanning the full content width

        Raises:
            RenderFailure: If the region cannot be captured
        """


class StaticImageRenderer(RendererAdapter):
    """
    Renderer that returns a pre-rendered bitmap.

    Used for headless pipelines that already hold a capture of the
    editor surface. The region argument is ignored; scaling is assumed
    to have happened at capture time.

    Example:
        >>> renderer = StaticImageRenderer(Path("capture.png"))
        >>> image = renderer.rasterize(None, 2.0)
    """

    def __init__(self, source: Union[Path, Image.Image]) -> None:
        """
        Initialize renderer.

        Args:
            source: Path to an image file or an in-memory PIL image
        """
        self._source = source
        self._image: Optional[Image.Image] = None

    def rasterize(self, region: Any, scale: float) -> Image.Image:
        """Return the held image as RGB (loaded once)."""
        if self._image is None:
            self._image = self._load()
        return self._image

    def _load(self) -> Image.Image:
        if isinstance(self._source, Image.Image):
            return self._source.convert("RGB")

        path = Path(self._source)
        if not path.exists():
            raise RenderFailure(f"Capture not found: {path}")
        try:
            with Image.open(path) as img:
                return img.convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise RenderFailure(f"Cannot read capture {path}: {e}") from e
