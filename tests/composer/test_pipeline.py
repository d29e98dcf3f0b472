"""
Tests for composer.pipeline

Test Coverage:
- compose_document(): sheet counts, paper, determinism, borders
- load_source(): malformed, empty and page-less inputs
- compose_document_async(): same output as the sync path
"""
import math
from unittest.mock import patch

import fitz
import pytest

from nup_toolkit.composer import (
    ComposerError,
    CompositionSettings,
    EmptyDocumentError,
    SerializationError,
    SourceLoadError,
    compose_document,
    compose_document_async,
)
from nup_toolkit.composer.pipeline import load_source


def _open(output):
    return fitz.open(stream=output.output_bytes, filetype="pdf")


class TestComposeDocument:
    def test_four_pages_four_up_on_letter(self, four_page_pdf):
        settings = CompositionSettings(pages_per_sheet=4, paper_size="letter")
        output = compose_document(four_page_pdf, settings)

        assert output.sheet_count == 1
        assert output.source_page_count == 4
        with _open(output) as doc:
            assert doc.page_count == 1
            assert doc[0].rect.width == pytest.approx(612)
            assert doc[0].rect.height == pytest.approx(792)
            text = doc[0].get_text()
            for n in range(1, 5):
                assert f"Page {n}" in text

    @pytest.mark.parametrize("pages_per_sheet", [1, 2, 4, 6, 8])
    def test_sheet_count_is_ceiling(self, make_pdf, pages_per_sheet):
        data = make_pdf([(300, 400)] * 7)
        output = compose_document(data, CompositionSettings(pages_per_sheet=pages_per_sheet))
        expected = math.ceil(7 / pages_per_sheet)
        assert output.sheet_count == expected
        with _open(output) as doc:
            assert doc.page_count == expected

    def test_unsupported_pages_per_sheet_uses_one_tile(self, make_pdf):
        output = compose_document(make_pdf([(300, 400)] * 3), CompositionSettings(pages_per_sheet=3))
        assert output.sheet_count == 3

    def test_auto_paper_for_letter_source(self, sample_pdf_file):
        output = compose_document(sample_pdf_file.read_bytes(), CompositionSettings())
        assert (output.layout.paper.width, output.layout.paper.height) == (612, 792)

    def test_layout_is_deterministic(self, make_pdf):
        data = make_pdf([(420, 297)] * 5)
        settings = CompositionSettings(pages_per_sheet=6, rotation_degrees=180, border_width=1)
        assert compose_document(data, settings).layout == compose_document(data, settings).layout

    def test_zero_border_draws_nothing(self, four_page_pdf):
        output = compose_document(four_page_pdf, CompositionSettings(pages_per_sheet=4))
        with _open(output) as doc:
            assert doc[0].get_drawings() == []

    def test_border_frames_every_cell(self, make_pdf):
        output = compose_document(
            make_pdf([(300, 400)] * 5),
            CompositionSettings(pages_per_sheet=4, border_width=1),
        )
        with _open(output) as doc:
            # Last sheet holds one page but all four cells are framed
            assert len(doc[1].get_drawings()) == 4

    def test_blank_pages_do_not_fail(self, make_pdf):
        output = compose_document(
            make_pdf([(300, 400)] * 2, blank=True),
            CompositionSettings(pages_per_sheet=2),
        )
        assert output.sheet_count == 1


class TestSerialization:
    def test_write_failure_becomes_serialization_error(self, four_page_pdf):
        with patch.object(fitz.Document, "tobytes", side_effect=RuntimeError("disk full")):
            with pytest.raises(SerializationError, match="disk full"):
                compose_document(four_page_pdf, CompositionSettings(pages_per_sheet=4))


class TestLoadFailures:
    def test_empty_bytes(self):
        with pytest.raises(SourceLoadError, match="empty"):
            compose_document(b"", CompositionSettings())

    def test_garbage_bytes(self):
        with pytest.raises(ComposerError):
            compose_document(b"this is not a pdf at all", CompositionSettings())

    def test_zero_page_document(self, zero_page_pdf):
        with pytest.raises(EmptyDocumentError, match="no pages"):
            compose_document(zero_page_pdf, CompositionSettings())

    def test_password_protected_document(self, encrypted_pdf):
        with pytest.raises(SourceLoadError, match="password protected"):
            compose_document(encrypted_pdf, CompositionSettings())

    def test_empty_document_is_not_a_load_error(self, zero_page_pdf):
        with pytest.raises(EmptyDocumentError) as excinfo:
            load_source(zero_page_pdf)
        assert not isinstance(excinfo.value, SourceLoadError)

    def test_load_source_returns_open_document(self, four_page_pdf):
        doc = load_source(four_page_pdf)
        try:
            assert doc.page_count == 4
        finally:
            doc.close()


class TestComposeDocumentAsync:
    @pytest.mark.asyncio
    async def test_matches_sync_layout(self, make_pdf):
        data = make_pdf([(300, 400)] * 9)
        settings = CompositionSettings(pages_per_sheet=4, border_width=0.5)
        async_output = await compose_document_async(data, settings)
        sync_output = compose_document(data, settings)

        assert async_output.layout == sync_output.layout
        with _open(async_output) as doc:
            assert doc.page_count == 3

    @pytest.mark.asyncio
    async def test_propagates_load_errors(self):
        with pytest.raises(SourceLoadError):
            await compose_document_async(b"", CompositionSettings())
