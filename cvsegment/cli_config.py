"""
CLI configuration data structures.

Defines the UserConfig dataclass shared by the three CLI phases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .pipeline_highlevel import DEFAULT_MAX_CONCURRENCY


@dataclass
class UserConfig:
    """Configuration gathered from user input."""

    source: Optional[Path] = None  # Input PDF/DOCX file or folder
    target_dir: Optional[Path] = None

    # Execution settings
    workers: int = DEFAULT_MAX_CONCURRENCY
    save_text: bool = False  # Also write the raw extracted text
    list_patterns: bool = False
    strict: bool = False
    debug: bool = False
    log_file: Optional[str] = None

    # Filled in by the prepare phase
    inputs: List[Path] = field(default_factory=list)

    @property
    def sections_dir(self) -> Path:
        return self.target_dir / "sections"

    @property
    def text_dir(self) -> Path:
        return self.target_dir / "text"
