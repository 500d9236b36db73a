"""
Unit tests for the page slicer.

Test Coverage:
- Slice count and exact height partition
- Gap-free, overlap-free source ranges
- Exact fit without trailing page break
- Zero-height images
- Explicit state machine steps
"""
import math

import pytest

from doc_toolkit.core.errors import InvalidGeometryError
from doc_toolkit.core.models import PageGeometry
from doc_toolkit.export.layout import (
    SlicerState,
    next_slice,
    slice_image,
    start_state,
    usable_height_px,
)


class TestSlicePartition:
    """Slices partition the image height exactly."""

    @pytest.mark.parametrize("height", [1, 533, 534, 535, 1068, 1300, 5000])
    def test_count_and_sum(self, a4_geometry, height):
        # 380px over 190mm -> 2px/mm, 267mm usable -> 534px per page
        slices = slice_image((380, height), a4_geometry)

        assert len(slices) == math.ceil(height / 534)
        assert sum(s.height_px for s in slices) == height

    @pytest.mark.parametrize("width", [380, 1436, 1000, 777])
    def test_count_matches_usable_rows_for_any_scale(self, a4_geometry, width):
        height = 9001
        usable = usable_height_px(a4_geometry, a4_geometry.scale_for(width))

        slices = slice_image((width, height), a4_geometry)

        assert len(slices) == math.ceil(height / usable)
        assert sum(s.height_px for s in slices) == height

    def test_source_ranges_are_contiguous(self, a4_geometry):
        slices = slice_image((1436, 12345), a4_geometry)

        assert slices[0].source_offset_px == 0
        for prev, cur in zip(slices, slices[1:]):
            assert cur.source_offset_px == prev.source_end_px
        assert slices[-1].source_end_px == 12345

    def test_every_slice_fits_its_page(self, a4_geometry):
        slices = slice_image((777, 8000), a4_geometry)

        limit = a4_geometry.page_height - a4_geometry.footer_reserve
        assert all(s.bottom <= limit + 1e-9 for s in slices)


class TestSliceBoundaries:
    """Page break signalling and placements."""

    def test_650mm_content_gives_three_slices(self, a4_geometry):
        slices = slice_image((380, 1300), a4_geometry)

        assert [s.height_px for s in slices] == [534, 534, 232]
        assert [s.page_break_after for s in slices] == [True, True, False]
        assert slices[2].height == pytest.approx(116.0)

    def test_exact_fit_has_no_trailing_break(self, a4_geometry):
        slices = slice_image((380, 1068), a4_geometry)

        assert len(slices) == 2
        assert slices[-1].page_break_after is False

    def test_every_slice_starts_at_top_margin(self, a4_geometry):
        slices = slice_image((380, 3000), a4_geometry)

        assert {s.placement_y for s in slices} == {a4_geometry.top_margin}

    def test_zero_height_gives_no_slices(self, a4_geometry):
        assert slice_image((380, 0), a4_geometry) == []

    def test_later_start_position_shrinks_first_slice(self, a4_geometry):
        slices = slice_image((380, 1300), a4_geometry, start_position=100.0)

        # 297 - 100 - 20 = 177mm -> 354px
        assert slices[0].height_px == 354
        assert slices[0].placement_y == 100.0
        assert slices[1].placement_y == a4_geometry.top_margin

    def test_no_room_at_start_position_raises(self, a4_geometry):
        with pytest.raises(InvalidGeometryError):
            slice_image((380, 100), a4_geometry, start_position=277.0)


class TestSlicerState:
    """The slicer as an explicit state machine."""

    def test_start_state(self, a4_geometry):
        state = start_state(1300, a4_geometry)

        assert state == SlicerState(remaining_px=1300, source_offset_px=0, position=10.0)

    def test_step_advances_state(self, a4_geometry):
        state = start_state(1300, a4_geometry)

        piece, state = next_slice(state, a4_geometry, 2.0)

        assert piece.source_offset_px == 0
        assert piece.height_px == 534
        assert state == SlicerState(remaining_px=766, source_offset_px=534, position=10.0)

    def test_final_step_leaves_position_below_slice(self, a4_geometry):
        state = start_state(100, a4_geometry)

        piece, state = next_slice(state, a4_geometry, 2.0)

        assert state.is_done
        assert state.position == pytest.approx(60.0)
        assert piece.page_break_after is False

    def test_step_on_done_state_raises(self, a4_geometry):
        with pytest.raises(ValueError):
            next_slice(SlicerState(0, 100, 10.0), a4_geometry, 2.0)

    def test_tiny_page_geometry_still_progresses(self):
        geometry = PageGeometry(page_height=31.0, top_margin=10.0, footer_reserve=20.0)

        slices = slice_image((380, 7), geometry)

        assert [s.height_px for s in slices] == [2, 2, 2, 1]
