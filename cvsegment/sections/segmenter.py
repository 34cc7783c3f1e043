"""
Section segmentation.

Splits raw résumé text into lines and groups them under the section
header that precedes them. Lines before the first recognized header go to
``summary``. Segmentation never fails: empty or header-less text simply
produces a mapping with only ``summary``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..shared import normalize_newlines
from .patterns import STANDARD_PATTERNS, PatternEntry, match_header

SUMMARY = "summary"


def split_lines(raw_text: Optional[str]) -> List[str]:
    """Trimmed, non-empty lines of raw_text in source order."""
    if not raw_text:
        return []
    stripped = (line.strip() for line in normalize_newlines(raw_text).split("\n"))
    return [line for line in stripped if line]


def segment(
    raw_text: Optional[str],
    table: Sequence[PatternEntry] = STANDARD_PATTERNS,
) -> Dict[str, List[str]]:
    """
    Group the lines of raw_text into named sections.

    A line matching an entry of table (first match in table order) is a
    header: it opens that section and is not stored itself. Every other
    line is appended to the section currently open.

    Sections are keyed in order of first appearance. A header followed
    directly by another header leaves its section in place with no lines,
    and a repeated header re-opens the existing section instead of creating
    a second one.
    """
    sections: Dict[str, List[str]] = {SUMMARY: []}
    current = SUMMARY

    for line in split_lines(raw_text):
        name = match_header(line, table)
        if name is None:
            sections[current].append(line)
            continue
        if name != current:
            current = name
            sections.setdefault(current, [])

    return sections


def non_empty_sections(sections: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """Copy of sections without the entries that collected no lines."""
    return {name: lines for name, lines in sections.items() if lines}
