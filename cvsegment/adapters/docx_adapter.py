"""
DOCX format adapter.

python-docx exposes no progress hooks, so only coarse milestones are
reported: reading the file, processing the loaded document, done.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..errors import CapabilityUnavailable, ExtractionError
from ..shared import DocumentFormat
from . import docx_utils
from .base import AdapterOutput, FormatAdapter, Reporter

INSTALL_HINT = 'Run "pip install python-docx" to enable DOCX support.'


class DocxAdapter(FormatAdapter):
    """
    Extracts paragraph and table text from Word .docx files using python-docx.

    Disabled when python-docx is not installed; the format is still
    recognized and reported as unavailable.
    """

    format = DocumentFormat.DOCX
    stage = "docx_extraction"
    label = "DOCX"

    @property
    def available(self) -> bool:
        return docx_utils.DOCX_AVAILABLE

    def unavailable_error(self, path: str) -> ExtractionError:
        return CapabilityUnavailable(
            f"python-docx is not installed. {INSTALL_HINT}",
            path=path,
            format=self.format,
        )

    def _read_text(self, path: Path, report: Reporter) -> AdapterOutput:
        report(10, status="Reading file")

        def _on_loaded(document: Any) -> Any:
            report(50, status="Processing document")
            return document

        result = docx_utils.extract_raw_text(path, transform_document=_on_loaded)
        report(100, status="Extraction complete")
        return AdapterOutput(result.value)
