"""
PDF format adapter.

Reads the whole file into memory, decodes it page by page with pypdf and
reports progress after every page.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import List

from pypdf import PdfReader

from ..logging_utils import LOG
from ..shared import DocumentFormat, normalize_text_for_processing
from .base import AdapterOutput, FormatAdapter, Reporter, percent

PAGE_SEPARATOR = "\n\n"


class PdfAdapter(FormatAdapter):
    """
    Extracts the text layer of PDF files using pypdf.

    Scanned (image-only) PDFs yield little or no text; no OCR is attempted.
    """

    format = DocumentFormat.PDF
    stage = "pdf_extraction"
    label = "PDF"

    def _read_text(self, path: Path, report: Reporter) -> AdapterOutput:
        data = path.read_bytes()
        reader = PdfReader(BytesIO(data))

        pages_count = len(reader.pages)
        texts: List[str] = []
        for page_index, page in enumerate(reader.pages, start=1):
            texts.append(normalize_text_for_processing(page.extract_text() or ""))
            LOG.debug("%s: page %d/%d decoded", path.name, page_index, pages_count)
            report(
                percent(page_index, pages_count),
                page_index=page_index,
                pages_count=pages_count,
            )

        return AdapterOutput(PAGE_SEPARATOR.join(texts), {"page_count": pages_count})
