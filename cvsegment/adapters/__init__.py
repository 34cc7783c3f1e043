"""
Format adapters and their registry.

This module provides pluggable document-to-text adapters, one per
supported binary format.
"""

from ..shared import DocumentFormat
from .base import AdapterOutput, FormatAdapter, ProgressCallback, percent
from .pdf_adapter import PdfAdapter
from .docx_adapter import DocxAdapter
from .adapter_registry import (
    register_adapter,
    get_adapter,
    registered_formats,
    list_adapters,
    unregister_adapter,
)

# Register built-in adapters
register_adapter(DocumentFormat.PDF, PdfAdapter)
register_adapter(DocumentFormat.DOCX, DocxAdapter)

__all__ = [
    "AdapterOutput",
    "FormatAdapter",
    "ProgressCallback",
    "percent",
    "PdfAdapter",
    "DocxAdapter",
    "register_adapter",
    "get_adapter",
    "registered_formats",
    "list_adapters",
    "unregister_adapter",
]
