"""
Low-level DOCX / WordprocessingML helpers.

This module handles direct extraction of text from DOCX files:
- loading the document model (python-docx, optional)
- walking body paragraphs, tables and content controls in document order
- converting Word runs into plain text

It contains no résumé-specific logic; section detection is handled elsewhere.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional

from lxml import etree

from ..logging_utils import LOG
from ..shared import PathLike, normalize_text_for_processing

# Resolved once at import; the DOCX adapter checks this before touching a file
try:
    import docx
    DOCX_AVAILABLE = True
except ImportError:
    docx = None
    DOCX_AVAILABLE = False

# Containers whose children are walked for paragraphs
_CONTAINER_TAGS = {"tbl", "tr", "tc", "sdt", "sdtContent", "customXml", "smartTag"}

PARAGRAPH_SEPARATOR = "\n\n"

TransformDocument = Callable[[Any], Any]


@dataclass
class RawTextResult:
    value: str


def extract_text_from_w_p(p: etree._Element) -> str:
    parts: List[str] = []
    for node in p.iter():
        if not isinstance(node.tag, str):
            continue  # comments / processing instructions
        tag = etree.QName(node).localname
        if tag == "t" and node.text:
            parts.append(node.text)
        elif tag in ("noBreakHyphen", "softHyphen"):
            parts.append("-")
        elif tag in ("br", "cr"):
            parts.append("\n")
        elif tag == "tab":
            parts.append("\t")
    return normalize_text_for_processing("".join(parts)).strip()


def iter_block_texts(container: etree._Element) -> Iterator[str]:
    """
    Yield the text of every non-empty paragraph below container, in document order.

    Table cells are visited row by row; nested tables and content controls
    are descended into.
    """
    for child in container.iterchildren():
        if not isinstance(child.tag, str):
            continue
        tag = etree.QName(child).localname
        if tag == "p":
            text = extract_text_from_w_p(child)
            if text:
                yield text
        elif tag in _CONTAINER_TAGS:
            yield from iter_block_texts(child)


def extract_raw_text(path: PathLike, transform_document: Optional[TransformDocument] = None) -> RawTextResult:
    """
    Load a .docx file and return its paragraphs as plain text.

    Args:
        path: Path to the .docx file
        transform_document: Optional hook receiving the loaded document; it
            must return the document to read text from

    Returns:
        RawTextResult whose value holds one paragraph per block, separated by blank lines
    """
    if not DOCX_AVAILABLE:
        raise RuntimeError("python-docx is not installed")

    document = docx.Document(os.fspath(path))
    if transform_document is not None:
        document = transform_document(document)

    blocks = list(iter_block_texts(document.element.body))
    LOG.debug("%s: %d text blocks", os.fspath(path), len(blocks))
    return RawTextResult(value=PARAGRAPH_SEPARATOR.join(blocks))
