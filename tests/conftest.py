import sys
from pathlib import Path
from typing import Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cvsegment.adapters import pdf_adapter  # noqa: E402
from cvsegment.events import EventChannel, EventRecorder  # noqa: E402


class FakePage:
    def __init__(self, text: str):
        self._text = text

    def extract_text(self) -> str:
        return self._text


class FakePdfReader:
    """Stand-in for pypdf.PdfReader serving pre-set page texts keyed by file content."""

    contents: Dict[bytes, List[str]] = {}

    def __init__(self, stream):
        self.stream = stream
        self.pages = [FakePage(t) for t in self.contents[stream.getvalue()]]


@pytest.fixture
def fake_pdf(tmp_path: Path, monkeypatch):
    """
    Factory creating a .pdf path whose pages decode to the given texts.

    pypdf is replaced for the duration of the test so page counts are exact.
    Each file gets distinct bytes, so several fakes can coexist in one test.
    """
    reader_cls = type("ConfiguredFakePdfReader", (FakePdfReader,), {"contents": {}})
    monkeypatch.setattr(pdf_adapter, "PdfReader", reader_cls)

    def _make(page_texts: List[str], name: str = "resume.pdf") -> Path:
        path = tmp_path / name
        content = b"%PDF-1.4 fake " + name.encode()
        reader_cls.contents[content] = list(page_texts)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def make_docx(tmp_path: Path):
    """Factory writing a real .docx with python-docx; lines starting with '# ' become headings."""
    docx = pytest.importorskip("docx")

    def _make(lines: List[str], name: str = "resume.docx") -> Path:
        document = docx.Document()
        for line in lines:
            if line.startswith("# "):
                document.add_heading(line[2:], level=1)
            else:
                document.add_paragraph(line)
        path = tmp_path / name
        document.save(str(path))
        return path

    return _make


@pytest.fixture
def make_pdf(tmp_path: Path):
    """Factory writing a real PDF with reportlab, one list of lines per page."""
    pytest.importorskip("reportlab")
    from reportlab.lib.pagesizes import letter
    from reportlab.pdfgen import canvas

    def _make(pages: List[List[str]], name: str = "real.pdf") -> Path:
        path = tmp_path / name
        c = canvas.Canvas(str(path), pagesize=letter)
        for lines in pages:
            y = 700
            for line in lines:
                c.drawString(100, y, line)
                y -= 20
            c.showPage()
        c.save()
        return path

    return _make


@pytest.fixture
def channel():
    return EventChannel()


@pytest.fixture
def recorder(channel):
    rec = EventRecorder()
    channel.subscribe_all(rec)
    return rec
