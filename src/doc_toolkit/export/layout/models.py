"""
Module: export.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses representing slices, slicer state and pages.

Key Classes:
    - Slice: One horizontal crop of the raster image and its placement
    - SlicerState: Explicit state carried between slicer steps
    - PageKind: Index or content page
    - PagePlan: Complete page layout
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - export.layout.slicer: Creates Slices
    - export.layout.paginator: Creates PagePlans
    - export.output.renderer: Draws PagePlans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Slice:
    """
    A horizontal crop of the raster image (immutable).

    The crop covers rows [source_offset_px, source_offset_px + height_px)
    at full image width.

    Attributes:
        source_offset_px: First source row (inclusive)
        height_px: Number of source rows
        placement_y: Top of the slice on its page (mm from page top)
        height: Height of the slice on the page (mm)
        page_break_after: True when more content follows on a new page

    Example:
        >>> s = Slice(source_offset_px=0, height_px=534, placement_y=10.0, height=267.0)
        >>> s.source_end_px
        534
    """

    source_offset_px: int
    height_px: int
    placement_y: float
    height: float
    page_break_after: bool = False

    def __post_init__(self) -> None:
        """Validate slice on construction."""
        if self.source_offset_px < 0:
            raise ValueError(f"source_offset_px must be >= 0: {self.source_offset_px}")
        if self.height_px <= 0:
            raise ValueError(f"height_px must be positive: {self.height_px}")

    @property
    def source_end_px(self) -> int:
        """First source row after the slice (exclusive bound)."""
        return self.source_offset_px + self.height_px

    @property
    def bottom(self) -> float:
        """Bottom of the slice on its page (mm from page top)."""
        return self.placement_y + self.height


@dataclass(frozen=True)
class SlicerState:
    """
    Position of the slicer between two steps (immutable).

    Attributes:
        remaining_px: Source rows not yet sliced
        source_offset_px: Next source row to slice
        position: Where the next slice starts on the current page (mm)
    """

    remaining_px: int
    source_offset_px: int
    position: float

    @property
    def is_done(self) -> bool:
        """True once every source row has been sliced."""
        return self.remaining_px <= 0


class PageKind(str, Enum):
    """Role of a page in the artifact."""

    INDEX = "index"
    CONTENT = "content"


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Content pages hold at most one slice. Index pages hold text lines
    and are not numbered.

    Attributes:
        index: Position in the artifact (0-indexed, index pages included)
        kind: Index or content page
        number: Content page number (1-based), None for index pages
        slice: Slice placed on the page, None for blank or index pages
        lines: Index lines, top to bottom
        footer_label: Footer text, None when footers are disabled
    """

    index: int
    kind: PageKind
    number: Optional[int] = None
    slice: Optional[Slice] = None
    lines: tuple[str, ...] = ()
    footer_label: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Check if page has neither a slice nor text lines."""
        return self.slice is None and not self.lines


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        pages: Tuple of PagePlans in artifact order
        image_size: (width, height) of the sliced raster image
        scale: Pixels per millimetre used for slicing (0.0 for empty images)
        warnings: Warning messages

    Example:
        >>> result.page_count, result.content_page_count
        (4, 3)
    """

    pages: tuple[PagePlan, ...]
    image_size: tuple[int, int]
    scale: float
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def content_pages(self) -> tuple[PagePlan, ...]:
        """Content pages in order."""
        return tuple(p for p in self.pages if p.kind is PageKind.CONTENT)

    @property
    def content_page_count(self) -> int:
        """Number of content pages."""
        return len(self.content_pages)

    @property
    def slices(self) -> tuple[Slice, ...]:
        """Placed slices in page order."""
        return tuple(p.slice for p in self.content_pages if p.slice is not None)

    @property
    def footer_labels(self) -> tuple[str, ...]:
        """Footer labels of all pages that carry one."""
        return tuple(p.footer_label for p in self.pages if p.footer_label is not None)
