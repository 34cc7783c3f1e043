"""
Shared models and text utilities.

Defines the document model (format, lifecycle status, extracted text and
sections) and the text normalization helpers used by the format adapters
and the segmentation engine.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

# ------------------------- Models -------------------------

class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_path(cls, path: PathLike) -> "DocumentFormat":
        """Derive the format from the lower-cased file extension."""
        ext = Path(os.fspath(path)).suffix.lower()
        if ext == ".pdf":
            return cls.PDF
        if ext == ".docx":
            return cls.DOCX
        return cls.UNSUPPORTED


class DocumentStatus(str, Enum):
    Unresolved = "Unresolved"
    Extracted = "Extracted"
    Segmented = "Segmented"


Sections = Dict[str, List[str]]


@dataclass
class Document:
    """
    One extraction unit.

    The format is fixed when the document is created. raw_text and
    sections are attached by the pipeline and only handed to callers
    once both are present.
    """
    path: str
    format: DocumentFormat
    raw_text: Optional[str] = None
    sections: Optional[Sections] = None
    status: DocumentStatus = DocumentStatus.Unresolved

    @classmethod
    def from_path(cls, path: PathLike) -> "Document":
        return cls(path=os.fspath(path), format=DocumentFormat.from_path(path))

    def attach_text(self, raw_text: str) -> None:
        if self.status is not DocumentStatus.Unresolved:
            raise RuntimeError(f"Text already attached to {self.path}")
        self.raw_text = raw_text
        self.status = DocumentStatus.Extracted

    def attach_sections(self, sections: Sections) -> None:
        if self.status is not DocumentStatus.Extracted:
            raise RuntimeError(f"Cannot segment {self.path} in state {self.status.value}")
        self.sections = sections
        self.status = DocumentStatus.Segmented

    @property
    def section_names(self) -> List[str]:
        return list(self.sections or {})

    def as_dict(self) -> Dict[str, Any]:
        return {
            "source": self.path,
            "format": self.format.value,
            "text_length": len(self.raw_text or ""),
            "sections": {name: lines[:] for name, lines in (self.sections or {}).items()},
        }


@dataclass
class DocumentResult:
    """Outcome of one document in a batch: exactly one of document/error is set."""
    path: str
    document: Optional[Document] = None
    error: Optional[Exception] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.document is not None and self.error is None

# ------------------------- Text helpers -------------------------

def _strip_invalid_xml_1_0_chars(s: str) -> str:
    """
    Remove characters invalid in XML 1.0.
    Valid:
      #x9 | #xA | #xD |
      [#x20-#xD7FF] |
      [#xE000-#xFFFD] |
      [#x10000-#x10FFFF]
    """
    out: List[str] = []
    for ch in s:
        cp = ord(ch)
        if (
            cp == 0x9
            or cp == 0xA
            or cp == 0xD
            or (0x20 <= cp <= 0xD7FF)
            or (0xE000 <= cp <= 0xFFFD)
            or (0x10000 <= cp <= 0x10FFFF)
        ):
            out.append(ch)
    return "".join(out)

def normalize_newlines(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")

def normalize_text_for_processing(s: str) -> str:
    """
    Normalize what we consider "text":
    - convert NBSP to normal space
    - replace soft hyphen with real hyphen
    - normalize newlines
    - strip control characters (PDF text layers are full of them)
    """
    s = s.replace("\u00A0", " ")
    s = s.replace("\u00AD", "-")  # preserve "high-quality"
    s = normalize_newlines(s)
    s = _strip_invalid_xml_1_0_chars(s)
    return s

# ------------------------- Output -------------------------

def write_output_json(path: Path, data: Dict[str, Any]) -> Path:
    """Write data as pretty-printed UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return path
