"""
Module: export.layout

Purpose:
    Page layout for PDF export.
    Slices the raster image and plans every page of the artifact.

Key Functions:
    - slice_image(): Cut an image into page-sized slices
    - next_slice(): Single slicer step (explicit state)
    - paginate(): Plan index and content pages

Key Classes:
    - Slice: One horizontal crop and its placement
    - SlicerState: State carried between slicer steps
    - PagePlan: Single page layout plan
    - LayoutResult: All pages of one export

Dependencies:
    - core.models: PageGeometry, Document
    - export.config: ExportConfig

Used By:
    - export.controller: Export orchestration
"""

from .models import Slice, SlicerState, PageKind, PagePlan, LayoutResult
from .slicer import slice_image, next_slice, start_state, usable_height_px
from .paginator import paginate, index_lines

__all__ = [
    # Models
    "Slice",
    "SlicerState",
    "PageKind",
    "PagePlan",
    "LayoutResult",
    # Functions
    "slice_image",
    "next_slice",
    "start_state",
    "usable_height_px",
    "paginate",
    "index_lines",
]
