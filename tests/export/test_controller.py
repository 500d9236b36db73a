"""
Tests for export.controller

Test Coverage:
- export_document(): end-to-end with static and HTML renderers
- Reference scenarios (650mm content, empty document, index page)
- Failure propagation and cancellation
- ExportResult.save()
"""
import fitz
import pytest

from doc_toolkit.core.errors import (
    ExportCancelledError,
    InvalidGeometryError,
    RenderFailure,
)
from doc_toolkit.core.models import PageGeometry
from doc_toolkit.export import (
    CancelToken,
    ExportConfig,
    ExportOptions,
    assemble,
    export_document,
)
from doc_toolkit.export.render import RendererAdapter, StaticImageRenderer


class FailingRenderer(RendererAdapter):
    """Renderer whose capture always fails."""

    def __init__(self):
        self.calls = 0

    def rasterize(self, region, scale):
        self.calls += 1
        raise RenderFailure("region detached")


class RecordingRenderer(StaticImageRenderer):
    """Static renderer remembering the requested scale."""

    def rasterize(self, region, scale):
        self.scale = scale
        self.region = region
        return super().rasterize(region, scale)


class TestExportScenarios:
    """End-to-end exports through a static capture."""

    def test_650mm_document_gives_three_pages(self, striped_image):
        renderer = StaticImageRenderer(striped_image(1300))

        result = export_document("<p>ignored</p>", renderer=renderer)

        assert result.page_count == 3
        assert result.footer_labels == ("Page 1", "Page 2", "Page 3")
        assert result.layout.pages[-1].slice.height_px == 232
        assert result.filename == "document.pdf"
        assert result.pdf_bytes.startswith(b"%PDF")

    def test_empty_document_exports_single_page(self, striped_image):
        result = export_document("", renderer=StaticImageRenderer(striped_image(0)))

        assert result.page_count == 1
        assert result.footer_labels == ("Page 1",)
        with fitz.open("pdf", result.pdf_bytes) as doc:
            assert doc[0].get_images() == []

    @pytest.mark.parametrize("markup", ["", "<p><br></p>"])
    def test_blank_markup_exports_page_without_image(self, markup):
        result = export_document(markup)

        assert result.page_count == 1
        assert result.footer_labels == ("Page 1",)
        assert result.layout.pages[0].slice is None
        with fitz.open("pdf", result.pdf_bytes) as doc:
            assert doc[0].get_images() == []

    def test_index_page_with_three_documents(self, striped_image, sample_documents):
        config = ExportConfig(options=ExportOptions(include_index=True))

        result = export_document(
            "<p>x</p>",
            config,
            documents=sample_documents,
            renderer=StaticImageRenderer(striped_image(1300)),
        )

        assert result.page_count == 4
        assert result.content_page_count == 3
        assert result.footer_labels == ("Page 1", "Page 2", "Page 3")
        assert result.metadata["indexed_documents"] == 3

    def test_repeated_export_is_idempotent(self, striped_image):
        renderer = StaticImageRenderer(striped_image(2500))

        first = export_document("<p>x</p>", renderer=renderer)
        second = export_document("<p>x</p>", renderer=renderer)

        assert first.page_count == second.page_count
        assert first.footer_labels == second.footer_labels

    def test_raster_scale_passed_to_renderer(self, striped_image):
        renderer = RecordingRenderer(striped_image(10))

        export_document("<p>region</p>", renderer=renderer)

        assert renderer.scale == 2.0
        assert renderer.region == "<p>region</p>"

    def test_documents_snapshotted_at_start(self, striped_image, sample_documents):
        config = ExportConfig(options=ExportOptions(include_index=True))
        documents = list(sample_documents)

        result = export_document(
            "",
            config,
            documents=documents,
            renderer=StaticImageRenderer(striped_image(10)),
        )
        documents.clear()

        assert len(result.layout.pages[0].lines) == 3

    def test_html_markup_exports_end_to_end(self):
        markup = "".join(f"<p>Paragraph {i}</p>" for i in range(200))

        result = export_document(markup)

        assert result.page_count >= 2
        assert result.footer_labels[0] == "Page 1"
        with fitz.open("pdf", result.pdf_bytes) as doc:
            assert doc.page_count == result.page_count


class TestExportFailures:
    """All failures abort the export without an artifact."""

    def test_render_failure_propagates(self):
        renderer = FailingRenderer()

        with pytest.raises(RenderFailure):
            export_document("<p>x</p>", renderer=renderer)
        assert renderer.calls == 1

    def test_invalid_geometry_rejected_before_rendering(self):
        with pytest.raises(InvalidGeometryError):
            ExportConfig(geometry=PageGeometry(top_margin=200.0, footer_reserve=100.0))

    def test_geometry_without_a_raster_row_rejected_before_rendering(self):
        renderer = FailingRenderer()
        # 0.05mm usable height is under one pixel at the default scale
        geometry = PageGeometry(top_margin=10.0, footer_reserve=286.95)

        with pytest.raises(InvalidGeometryError):
            export_document("<p>x</p>", ExportConfig(geometry=geometry), renderer=renderer)
        assert renderer.calls == 0

    def test_cancelled_before_start(self, striped_image):
        token = CancelToken()
        token.cancel()

        with pytest.raises(ExportCancelledError):
            export_document(
                "<p>x</p>",
                renderer=StaticImageRenderer(striped_image(100)),
                cancel_token=token,
            )

    def test_cancel_stops_page_rendering(self, striped_image):
        token = CancelToken()
        token.cancel()

        with pytest.raises(ExportCancelledError):
            assemble(striped_image(3000), ExportConfig(), cancel_token=token)


class TestExportResultSave:
    """Writing the artifact to disk."""

    def test_save_uses_default_filename(self, tmp_path, striped_image):
        result = export_document("", renderer=StaticImageRenderer(striped_image(50)))

        path = result.save(tmp_path / "out")

        assert path.name == "document.pdf"
        assert path.read_bytes() == result.pdf_bytes
        assert not list(path.parent.glob("*.tmp"))

    def test_save_with_custom_filename(self, tmp_path, striped_image):
        result = export_document("", renderer=StaticImageRenderer(striped_image(50)))

        path = result.save(tmp_path, "notes.pdf")

        assert path == tmp_path / "notes.pdf"

    def test_failed_save_leaves_no_temp_file(self, tmp_path, striped_image):
        result = export_document("", renderer=StaticImageRenderer(striped_image(50)))
        # A non-empty directory cannot be replaced by a file
        (tmp_path / "document.pdf" / "keep").mkdir(parents=True)

        with pytest.raises(OSError):
            result.save(tmp_path)

        assert not list(tmp_path.glob("*.tmp"))
