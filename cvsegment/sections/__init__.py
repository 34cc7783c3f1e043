"""
Résumé section detection: the ordered header pattern table and the
segmentation engine built on it.
"""

from .patterns import (
    PatternEntry,
    STANDARD_PATTERNS,
    STANDARD_PATTERN_SOURCES,
    build_pattern_table,
    header_regex,
    match_header,
)
from .segmenter import SUMMARY, non_empty_sections, segment, split_lines

__all__ = [
    "PatternEntry",
    "STANDARD_PATTERNS",
    "STANDARD_PATTERN_SOURCES",
    "build_pattern_table",
    "header_regex",
    "match_header",
    "SUMMARY",
    "non_empty_sections",
    "segment",
    "split_lines",
]
