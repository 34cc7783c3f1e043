"""
Résumé section header patterns.

The table is ordered: a line is tested against the entries top to bottom
and the first match names the section. Every standard matcher is anchored
to the whole line (allowing bullets, dashes, numbering and a trailing
colon around the header words), so a keyword in the middle of a sentence
does not start a new section.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Sequence, Tuple


@dataclass(frozen=True)
class PatternEntry:
    name: str
    matcher: Pattern[str]

    def matches(self, line: str) -> bool:
        return self.matcher.search(line) is not None


def header_regex(body: str) -> Pattern[str]:
    """Compile body into a case-insensitive, whole-line header matcher."""
    return re.compile(
        rf"^[\W_]*(?:\d{{1,2}}[.)]\s*)?(?:{body})[\W_]*$",
        re.IGNORECASE,
    )


def build_pattern_table(entries: Iterable[Tuple[str, str]]) -> Tuple[PatternEntry, ...]:
    """
    Build an ordered pattern table from (name, regex body) pairs.

    Raises:
        ValueError: If a section name appears twice
    """
    table = []
    seen = set()
    for name, body in entries:
        if name in seen:
            raise ValueError(f"Duplicate section name in pattern table: {name}")
        seen.add(name)
        table.append(PatternEntry(name=name, matcher=header_regex(body)))
    return tuple(table)


# (section name, header regex body); order is the tie-break order
STANDARD_PATTERN_SOURCES: Tuple[Tuple[str, str], ...] = (
    # Core sections found in most CVs
    ("experience",
     r"(?:(?:relevant|professional|industry|client|teaching|design|creative|freelance"
     r"|agency|leadership|research|international|volunteer|internship)\s+)?"
     r"(?:work\s+)?experience"
     r"|(?:work|professional|employment|career)\s+history"
     r"|employment"),
    ("education",
     r"education(?:\s+(?:and|&)\s+training)?"
     r"|educational\s+background"
     r"|qualifications"
     r"|academic\s+(?:background|qualifications)"),
    ("skills",
     r"(?:(?:technical|key|core|professional)\s+)?skills"
     r"(?:\s+(?:and|&)\s+(?:expertise|abilities|competencies))?"
     r"|(?:core\s+)?competencies"
     r"|(?:areas\s+of\s+)?expertise"),
    ("certifications",
     r"certifications?"
     r"|certificates"
     r"|credentials"
     r"|accreditations"
     r"|licen[cs]es(?:\s+(?:and|&)\s+certifications)?"),
    ("languages",
     r"(?:foreign\s+)?languages"
     r"|language\s+(?:skills|proficiency)"),

    # Creative industry specific sections
    ("portfolio",
     r"portfolio"
     r"|creative\s+work"
     r"|(?:selected\s+|personal\s+|key\s+)?projects"
     r"|(?:selected\s+)?works"
     r"|exhibitions"),
    ("designSkills",
     r"design\s+(?:skills|tools)"
     r"|software\s+proficiency"
     r"|technical\s+proficiency"
     r"|tools\s+(?:and|&)\s+technologies"),
    ("achievements",
     r"achievements"
     r"|awards(?:\s+(?:and|&)\s+(?:honou?rs|recognitions?))?"
     r"|honou?rs"
     r"|recognitions?"
     r"|accomplishments"),
    ("publications",
     r"publications"
     r"|published\s+works"
     r"|articles"
     r"|writing\s+samples"),
    ("clientList",
     r"clients"
     r"|client\s+list"
     r"|client\s+experience"
     r"|brands\s+worked\s+with"),
)

STANDARD_PATTERNS: Tuple[PatternEntry, ...] = build_pattern_table(STANDARD_PATTERN_SOURCES)


def match_header(line: str, table: Sequence[PatternEntry] = STANDARD_PATTERNS) -> Optional[str]:
    """Name of the first entry in table order matching line, or None."""
    for entry in table:
        if entry.matches(line):
            return entry.name
    return None
