# cvsegment/__init__.py

from .shared import Document, DocumentFormat, DocumentResult, DocumentStatus
from .errors import (
    ExtractionError,
    UnsupportedFormat,
    CapabilityUnavailable,
    ExtractionFailed,
)
from .events import EventChannel, ExtractionEvent
from .coordinator import ExtractionCoordinator, resolve_format
from .sections import PatternEntry, STANDARD_PATTERNS, build_pattern_table, match_header, segment
from .pipeline_highlevel import process_document, process_documents

__all__ = [
    "Document",
    "DocumentFormat",
    "DocumentResult",
    "DocumentStatus",
    "ExtractionError",
    "UnsupportedFormat",
    "CapabilityUnavailable",
    "ExtractionFailed",
    "EventChannel",
    "ExtractionEvent",
    "ExtractionCoordinator",
    "resolve_format",
    "PatternEntry",
    "STANDARD_PATTERNS",
    "build_pattern_table",
    "match_header",
    "segment",
    "process_document",
    "process_documents",
]
