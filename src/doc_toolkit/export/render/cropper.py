"""
Module: export.render.cropper

Purpose:
    Crop slices out of the raster image.

Key Functions:
    - crop_slice(): Crop one slice at full image width
    - crop_slices(): Crop a sequence of slices

Dependencies:
    - PIL: Image manipulation
    - export.layout.models: Slice

Used By:
    - export.output.renderer: Per-page slice images
"""

from __future__ import annotations

from typing import Iterable, List

from PIL import Image

from doc_toolkit.export.layout.models import Slice


def crop_slice(image: Image.Image, piece: Slice) -> Image.Image:
    """
    Crop a slice from the raster image.

    Args:
        image: Source raster image
        piece: Slice to crop (rows [source_offset_px, source_end_px))

    Returns:
        Cropped image (new copy, not a view)

    Raises:
        ValueError: If the slice lies outside the image

    Example:
        >>> crop_slice(image, Slice(0, 534, 10.0, 267.0)).size
        (380, 534)
    """
    if piece.source_end_px > image.height:
        raise ValueError(
            f"Slice bottom {piece.source_end_px} exceeds image height {image.height}"
        )
    box = (0, piece.source_offset_px, image.width, piece.source_end_px)
    return image.crop(box)


def crop_slices(image: Image.Image, pieces: Iterable[Slice]) -> List[Image.Image]:
    """Crop several slices, in the given order."""
    return [crop_slice(image, piece) for piece in pieces]
