"""
CLI Phase 2: Prepare execution environment.

Validates inputs, creates the output directory and collects input files.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from .adapters import registered_formats
from .cli_config import UserConfig
from .logging_utils import LOG


def _collect_inputs(src: Path) -> List[Path]:
    """Collect input files: src itself, or every supported document below it."""
    if src.is_file():
        return [src]

    if not src.is_dir():
        raise FileNotFoundError(f"Path not found or not a file/folder: {src}")

    suffixes = {f".{fmt.value}" for fmt in registered_formats()}
    return sorted(
        p for p in src.rglob("*")
        if p.is_file()
        and p.suffix.lower() in suffixes
        # Skip temporary Word files (start with ~$)
        and not p.name.startswith("~$")
    )


def prepare_execution_environment(config: UserConfig) -> UserConfig:
    """
    Phase 2: Validate inputs and prepare execution environment.

    - Validates the source exists
    - Creates target directory
    - Collects input files
    - No execution yet

    Returns the same config (for chaining).
    """
    if config.source is None or not config.source.exists():
        LOG.error("Source not found: %s", config.source)
        raise FileNotFoundError(f"Source not found: {config.source}")

    config.inputs = _collect_inputs(config.source)
    if not config.inputs:
        raise ValueError(f"No .pdf or .docx files found in: {config.source}")

    config.target_dir.mkdir(parents=True, exist_ok=True)
    LOG.debug("Collected %d input file(s) from %s", len(config.inputs), config.source)
    return config
