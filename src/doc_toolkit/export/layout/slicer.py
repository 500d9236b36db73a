"""
Module: export.layout.slicer

Purpose:
    Cut one tall raster image into page-sized slices.
    The slicer is a pure state machine: each step takes a SlicerState
    and returns the next Slice plus the following state.

Key Functions:
    - start_state(): Initial state for an image
    - next_slice(): One slicer step
    - slice_image(): Run the slicer to completion
    - usable_height_px(): Rows that fit on a fresh page

Algorithm:
    1. scale = image width / content width (px per mm)
    2. Rows available at the current position:
       floor((page_height - position - footer_reserve) * scale)
    3. Slice min(remaining, available) rows, placed at position
    4. If rows remain, signal a page break and restart at the top margin

    Working in whole pixels keeps the partition exact: slices never
    overlap, never skip a row, and the last one ends at the image height.

Dependencies:
    - core.models.geometry: PageGeometry
    - export.layout.models: Slice, SlicerState

Used By:
    - export.layout.paginator: Page assembly
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from doc_toolkit.core.errors import InvalidGeometryError
from doc_toolkit.core.models import PageGeometry

from .models import Slice, SlicerState

logger = logging.getLogger(__name__)

# Absorbs float error in mm -> px conversion before flooring
_PX_EPSILON = 1e-9


def _units_to_rows(units: float, scale: float) -> int:
    """Whole source rows that fit in a height of units (mm)."""
    return math.floor(units * scale + _PX_EPSILON)


def usable_height_px(geometry: PageGeometry, scale: float) -> int:
    """Source rows that fit on a fresh content page."""
    return _units_to_rows(geometry.usable_height, scale)


def start_state(
    image_height_px: int,
    geometry: PageGeometry,
    start_position: Optional[float] = None,
) -> SlicerState:
    """
    Initial slicer state.

    Args:
        image_height_px: Height of the raster image
        geometry: Page geometry
        start_position: First slice position (mm), defaults to the top margin

    Returns:
        SlicerState at source row 0
    """
    if image_height_px < 0:
        raise ValueError(f"image height must be >= 0: {image_height_px}")
    position = geometry.top_margin if start_position is None else start_position
    return SlicerState(remaining_px=image_height_px, source_offset_px=0, position=position)


def next_slice(
    state: SlicerState,
    geometry: PageGeometry,
    scale: float,
) -> Tuple[Slice, SlicerState]:
    """
    Produce one slice and the state after it.

    Args:
        state: Current slicer state (must not be done)
        geometry: Page geometry
        scale: Pixels per millimetre

    Returns:
        Tuple of (slice, next state). When slice.page_break_after is set,
        the next state is positioned at the top margin of a new page.

    Raises:
        ValueError: If the state has nothing left to slice
        InvalidGeometryError: If not one row fits at the state's position
    """
    if state.is_done:
        raise ValueError("Slicer state has no remaining rows")

    available_px = _units_to_rows(geometry.available_height(state.position), scale)
    if available_px < 1:
        raise InvalidGeometryError(
            f"No room for content at position {state.position}mm "
            f"(page height {geometry.page_height}mm, footer {geometry.footer_reserve}mm)"
        )

    fit_px = min(state.remaining_px, available_px)
    remaining_px = state.remaining_px - fit_px
    page_break = remaining_px > 0

    piece = Slice(
        source_offset_px=state.source_offset_px,
        height_px=fit_px,
        placement_y=state.position,
        height=fit_px / scale,
        page_break_after=page_break,
    )
    next_state = SlicerState(
        remaining_px=remaining_px,
        source_offset_px=state.source_offset_px + fit_px,
        position=geometry.top_margin if page_break else piece.bottom,
    )
    return piece, next_state


def slice_image(
    image_size: Tuple[int, int],
    geometry: PageGeometry,
    start_position: Optional[float] = None,
) -> List[Slice]:
    """
    Slice a raster image of the given size into page-sized pieces.

    Args:
        image_size: (width, height) of the raster image in pixels
        geometry: Page geometry
        start_position: First slice position (mm), defaults to the top margin

    Returns:
        Slices in increasing source order (empty for a zero-height image)

    Example:
        >>> slices = slice_image((380, 1300), PageGeometry.a4())
        >>> [s.height_px for s in slices]
        [534, 534, 232]
    """
    width_px, height_px = image_size
    if height_px == 0:
        return []

    scale = geometry.scale_for(width_px)
    state = start_state(height_px, geometry, start_position)

    slices: List[Slice] = []
    while not state.is_done:
        piece, state = next_slice(state, geometry, scale)
        slices.append(piece)
        logger.debug(
            f"Slice {len(slices)}: rows {piece.source_offset_px}-{piece.source_end_px} "
            f"at {piece.placement_y:.2f}mm"
        )

    logger.debug(f"Sliced {height_px}px image into {len(slices)} slices (scale {scale:.4f}px/mm)")
    return slices
