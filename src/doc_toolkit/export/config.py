"""
Module: export.config

Purpose:
    Configuration dataclasses for the export pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - ExportOptions: Which optional page features to emit
    - ExportConfig: Complete export configuration

Dependencies:
    - dataclasses (std)
    - core.models.geometry: PageGeometry
    - core.errors: InvalidGeometryError

Used By:
    - export.controller: Export orchestration
    - export.layout.paginator: Page planning
    - export.output.renderer: PDF drawing
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from doc_toolkit.core.errors import InvalidGeometryError
from doc_toolkit.core.models import PageGeometry

DEFAULT_FILENAME = "document.pdf"
DEFAULT_RASTER_SCALE = 2.0

# Raster scale is per CSS pixel (96 per inch)
CSS_PX_PER_MM = 96.0 / 25.4

# Footer label baseline, measured up from the page bottom (mm)
DEFAULT_FOOTER_BASELINE_OFFSET_MM = 10.0
# Spacing of index page lines (mm)
DEFAULT_INDEX_LINE_HEIGHT_MM = 10.0


@dataclass(frozen=True)
class ExportOptions:
    """
    Optional features of an export (immutable).

    Attributes:
        include_index: Emit a leading index page listing saved documents
        include_footer_labels: Draw "Page N" on every content page
    """

    include_index: bool = False
    include_footer_labels: bool = True


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for one export (immutable).

    Attributes:
        options: Index page / footer label switches
        geometry: Page geometry; derived from options when omitted
        scale: Raster scale factor passed to the renderer
        filename: Default filename offered for the artifact
        footer_baseline_offset: Footer baseline distance from page bottom (mm)
        footer_font_size: Footer label font size (pt)
        index_line_height: Spacing of index page lines (mm)
        index_font_size: Index line font size (pt)
        title: PDF document title metadata

    Example:
        >>> config = ExportConfig(options=ExportOptions(include_index=True))
        >>> config.geometry.footer_reserve
        20.0
    """

    options: ExportOptions = field(default_factory=ExportOptions)
    geometry: Optional[PageGeometry] = None
    scale: float = DEFAULT_RASTER_SCALE
    filename: str = DEFAULT_FILENAME
    footer_baseline_offset: float = DEFAULT_FOOTER_BASELINE_OFFSET_MM
    footer_font_size: int = 10
    index_line_height: float = DEFAULT_INDEX_LINE_HEIGHT_MM
    index_font_size: int = 12
    title: str = "Document"

    def __post_init__(self) -> None:
        """Validate configuration and fill in the derived geometry."""
        if self.geometry is None:
            object.__setattr__(
                self,
                "geometry",
                PageGeometry.a4(include_footer_labels=self.options.include_footer_labels),
            )
        if self.scale <= 0:
            raise ValueError(f"scale must be positive: {self.scale}")
        if not self.filename:
            raise ValueError("filename must not be empty")
        if self.index_line_height <= 0:
            raise ValueError(f"index_line_height must be positive: {self.index_line_height}")
        if not 0 <= self.footer_baseline_offset < self.geometry.page_height:
            raise ValueError(
                f"footer_baseline_offset outside page: {self.footer_baseline_offset}"
            )
        if math.floor(self.geometry.usable_height * self.nominal_px_per_mm + 1e-9) < 1:
            raise InvalidGeometryError(
                f"Usable page height {self.geometry.usable_height}mm holds no raster row "
                f"at scale {self.scale}"
            )

    @property
    def nominal_px_per_mm(self) -> float:
        """Raster pixels per millimetre of content at this scale."""
        return self.scale * CSS_PX_PER_MM
