"""Tests for the DOCX format adapter and its low-level helpers."""

import asyncio

import pytest
from lxml import etree

from cvsegment.adapters import DocxAdapter, docx_utils
from cvsegment.adapters.docx_utils import extract_raw_text, extract_text_from_w_p, iter_block_texts
from cvsegment.errors import CapabilityUnavailable, ExtractionFailed
from cvsegment.events import (
    EXTRACTION_COMPLETE,
    EXTRACTION_ERROR,
    EXTRACTION_PROGRESS,
    EXTRACTION_START,
)

W = 'xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main"'


def _xml(fragment: str):
    return etree.fromstring(fragment.encode())


class TestExtractTextFromWP:
    """Tests for run-level text conversion."""

    def test_simple(self):
        p = _xml(f'<w:p {W}><w:r><w:t>Hello</w:t></w:r><w:r><w:t> World</w:t></w:r></w:p>')
        assert extract_text_from_w_p(p) == "Hello World"

    def test_tab(self):
        p = _xml(f'<w:p {W}><w:r><w:t>Before</w:t></w:r><w:r><w:tab/></w:r><w:r><w:t>After</w:t></w:r></w:p>')
        assert extract_text_from_w_p(p) == "Before\tAfter"

    def test_break(self):
        p = _xml(f'<w:p {W}><w:r><w:t>Line 1</w:t></w:r><w:r><w:br/></w:r><w:r><w:t>Line 2</w:t></w:r></w:p>')
        assert extract_text_from_w_p(p) == "Line 1\nLine 2"

    def test_soft_and_no_break_hyphen(self):
        p = _xml(
            f'<w:p {W}><w:r><w:t>high</w:t></w:r><w:r><w:softHyphen/></w:r>'
            f'<w:r><w:t>quality</w:t></w:r><w:r><w:noBreakHyphen/></w:r><w:r><w:t>work</w:t></w:r></w:p>'
        )
        assert extract_text_from_w_p(p) == "high-quality-work"

    def test_empty(self):
        assert extract_text_from_w_p(_xml(f'<w:p {W}></w:p>')) == ""

    def test_comments_are_ignored(self):
        p = _xml(f'<w:p {W}><!-- note --><w:r><w:t>Text</w:t></w:r></w:p>')
        assert extract_text_from_w_p(p) == "Text"


class TestIterBlockTexts:
    """Tests for document-order block traversal."""

    def test_paragraphs_and_tables_in_order(self):
        body = _xml(
            f'<w:body {W}>'
            '<w:p><w:r><w:t>Intro</w:t></w:r></w:p>'
            '<w:tbl><w:tr>'
            '<w:tc><w:p><w:r><w:t>Cell A</w:t></w:r></w:p></w:tc>'
            '<w:tc><w:p><w:r><w:t>Cell B</w:t></w:r></w:p></w:tc>'
            '</w:tr></w:tbl>'
            '<w:sdt><w:sdtContent><w:p><w:r><w:t>Control</w:t></w:r></w:p></w:sdtContent></w:sdt>'
            '<w:p/>'
            '<w:p><w:r><w:t>Outro</w:t></w:r></w:p>'
            '<w:sectPr/>'
            '</w:body>'
        )
        assert list(iter_block_texts(body)) == ["Intro", "Cell A", "Cell B", "Control", "Outro"]


class TestExtractRawText:
    """Tests for the document-library facing helper."""

    def test_returns_paragraph_text(self, make_docx):
        path = make_docx(["Jane Doe", "# Experience", "Did X"])
        result = extract_raw_text(path)
        assert result.value == "Jane Doe\n\nExperience\n\nDid X"

    def test_transform_document_receives_loaded_document(self, make_docx):
        path = make_docx(["Only line"])
        seen = []

        def transform(document):
            seen.append(document)
            return document

        extract_raw_text(path, transform_document=transform)
        assert len(seen) == 1
        assert hasattr(seen[0], "paragraphs")

    def test_table_cells_are_included(self, tmp_path):
        docx = pytest.importorskip("docx")
        document = docx.Document()
        document.add_paragraph("Skills")
        table = document.add_table(rows=1, cols=2)
        table.cell(0, 0).text = "Figma"
        table.cell(0, 1).text = "Sketch"
        path = tmp_path / "table.docx"
        document.save(str(path))

        assert extract_raw_text(path).value.split("\n\n") == ["Skills", "Figma", "Sketch"]


class TestDocxAdapter:
    """Tests for DocxAdapter lifecycle and progress."""

    def test_extracts_text(self, make_docx, channel):
        path = make_docx(["Jane Doe", "# Education", "BA Graphic Design"])
        text = asyncio.run(DocxAdapter(channel).extract(path))
        assert "Jane Doe" in text
        assert "BA Graphic Design" in text

    def test_progress_milestones(self, make_docx):
        path = make_docx(["Line"])
        records = []
        asyncio.run(DocxAdapter().extract(path, records.append))
        assert [(r["progress"], r["status"]) for r in records] == [
            (10, "Reading file"),
            (50, "Processing document"),
            (100, "Extraction complete"),
        ]
        assert all(r["stage"] == "docx_extraction" for r in records)

    def test_event_sequence(self, make_docx, channel, recorder):
        path = make_docx(["Line"])
        asyncio.run(DocxAdapter(channel).extract(path))
        assert recorder.names() == [
            EXTRACTION_START,
            EXTRACTION_PROGRESS,
            EXTRACTION_PROGRESS,
            EXTRACTION_PROGRESS,
            EXTRACTION_COMPLETE,
        ]
        complete = recorder.events[-1].as_dict()
        assert complete["type"] == "docx"
        assert complete["text_length"] == len("Line")

    def test_corrupt_docx_raises_extraction_failed(self, tmp_path, channel, recorder):
        pytest.importorskip("docx")
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip archive")

        with pytest.raises(ExtractionFailed) as exc_info:
            asyncio.run(DocxAdapter(channel).extract(path))

        assert str(exc_info.value).startswith("DOCX extraction failed:")
        assert recorder.names() == [EXTRACTION_START, EXTRACTION_PROGRESS, EXTRACTION_ERROR]


class TestDocxCapability:
    """Tests for degradation when python-docx is missing."""

    def test_unavailable_raises_without_reading(self, tmp_path, monkeypatch, channel, recorder):
        monkeypatch.setattr(docx_utils, "DOCX_AVAILABLE", False)

        def must_not_run(*args, **kwargs):
            raise AssertionError("file must not be read")

        monkeypatch.setattr(docx_utils, "extract_raw_text", must_not_run)

        # The file does not even exist: no I/O happens
        path = tmp_path / "cv.docx"
        adapter = DocxAdapter(channel)
        assert adapter.available is False

        with pytest.raises(CapabilityUnavailable) as exc_info:
            asyncio.run(adapter.extract(path))

        assert "python-docx" in str(exc_info.value)
        assert recorder.names() == [EXTRACTION_START, EXTRACTION_ERROR]
        assert recorder.events[-1].format.value == "docx"

    def test_extract_raw_text_refuses_when_unavailable(self, tmp_path, monkeypatch):
        monkeypatch.setattr(docx_utils, "DOCX_AVAILABLE", False)
        with pytest.raises(RuntimeError):
            extract_raw_text(tmp_path / "cv.docx")
