"""
Module: geometry

Purpose:
    Page geometry for PDF export. All lengths are millimetres, matching
    the PDF page units used by the assembler.

Key Classes:
    - PageGeometry: Immutable page size, margins and footer reserve

Key Functions:
    - PageGeometry.a4(): Standard A4 geometry for an export
    - PageGeometry.scale_for(width_px): Pixels per millimetre for an image

Dependencies:
    - dataclasses (std)
    - core.errors: InvalidGeometryError

Used By:
    - export.layout.slicer: Slice computation
    - export.layout.paginator: Page assembly
    - export.output.renderer: PDF drawing
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidGeometryError

# A4 portrait in millimetres
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

DEFAULT_HORIZONTAL_MARGIN_MM = 10.0
DEFAULT_TOP_MARGIN_MM = 10.0

# Bottom space kept clear of content
FOOTER_RESERVE_MM = 10.0
FOOTER_RESERVE_WITH_LABELS_MM = 20.0


@dataclass(frozen=True)
class PageGeometry:
    """
    Page geometry for one export (immutable).

    Attributes:
        page_width: Page width (mm)
        page_height: Page height (mm)
        horizontal_margin: Left and right margin, each side (mm)
        top_margin: Offset of content from the top of every content page (mm)
        footer_reserve: Space kept free at the bottom of every page (mm)

    Raises:
        InvalidGeometryError: If margins leave no content width or height

    Example:
        >>> geometry = PageGeometry.a4(include_footer_labels=True)
        >>> geometry.content_width
        190.0
        >>> geometry.usable_height
        267.0
    """

    page_width: float = A4_WIDTH_MM
    page_height: float = A4_HEIGHT_MM
    horizontal_margin: float = DEFAULT_HORIZONTAL_MARGIN_MM
    top_margin: float = DEFAULT_TOP_MARGIN_MM
    footer_reserve: float = FOOTER_RESERVE_WITH_LABELS_MM

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.page_width <= 0:
            raise InvalidGeometryError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise InvalidGeometryError(f"page_height must be positive: {self.page_height}")
        if min(self.horizontal_margin, self.top_margin, self.footer_reserve) < 0:
            raise InvalidGeometryError("Margins must be non-negative")
        if self.content_width <= 0:
            raise InvalidGeometryError(
                f"Horizontal margins exceed page width: {self.horizontal_margin} x 2 "
                f">= {self.page_width}"
            )
        if self.usable_height <= 0:
            raise InvalidGeometryError(
                f"Margins exceed page height: {self.top_margin} + {self.footer_reserve} "
                f">= {self.page_height}"
            )

    @classmethod
    def a4(cls, include_footer_labels: bool = True) -> PageGeometry:
        """A4 geometry; page labels need the larger footer reserve."""
        reserve = FOOTER_RESERVE_WITH_LABELS_MM if include_footer_labels else FOOTER_RESERVE_MM
        return cls(footer_reserve=reserve)

    @property
    def content_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.page_width - 2 * self.horizontal_margin

    @property
    def usable_height(self) -> float:
        """Content height of a fresh page (excluding top margin and footer)."""
        return self.page_height - self.top_margin - self.footer_reserve

    def available_height(self, position: float) -> float:
        """Height left for content when the next slice starts at position."""
        return self.page_height - position - self.footer_reserve

    def scale_for(self, image_width_px: int) -> float:
        """
        Pixels per millimetre for an image spanning the content width.

        Args:
            image_width_px: Width of the rasterized content

        Returns:
            Scale factor (px/mm)

        Raises:
            ValueError: If image width is not positive
        """
        if image_width_px <= 0:
            raise ValueError(f"image width must be positive: {image_width_px}")
        return image_width_px / self.content_width
