"""
CLI Phase 3: Execute pipeline.

Runs extraction and segmentation for every collected input, writes one
sections JSON per document and logs a one-line status per file.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List

from .coordinator import ExtractionCoordinator
from .events import EXTRACTION_PROGRESS, EventChannel, ExtractionEvent
from .logging_utils import LOG, log_document_status
from .pipeline_highlevel import process_documents
from .sections import STANDARD_PATTERNS
from .cli_config import UserConfig
from .shared import DocumentResult, write_output_json


def infer_source_root(inputs: List[Path]) -> Path:
    """
    Infer the root directory of the batch so we can preserve folder structure
    in output without passing source explicitly.
    - If a single file: use its parent as root.
    - If multiple files: use common path of their parent folders.
    """
    if not inputs:
        return Path(".").resolve()
    if len(inputs) == 1:
        return inputs[0].parent.resolve()
    parents = [p.parent.resolve() for p in inputs]
    return Path(os.path.commonpath([str(p) for p in parents])).resolve()


def safe_relpath(p: Path, root: Path) -> str:
    """Best-effort relative path for nicer logging."""
    try:
        return p.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return p.name


def format_pattern_table() -> str:
    lines = []
    for index, entry in enumerate(STANDARD_PATTERNS, start=1):
        lines.append(f"{index:2d}. {entry.name:<15} {entry.matcher.pattern}")
    return "\n".join(lines)


def _log_event(event: ExtractionEvent) -> None:
    if event.name == EXTRACTION_PROGRESS:
        LOG.debug("%s %s %s%%", event.name, event.path, event.data.get("progress"))
    else:
        LOG.debug("%s %s", event.name, event.as_dict())


def output_name(rel: str, suffix: str) -> str:
    """Output file name keeping the source extension: cv.pdf -> cv.pdf.json."""
    return f"{rel}{suffix}"


def write_result(result: DocumentResult, config: UserConfig, source_root: Path) -> Path:
    """Write the sections JSON (and optionally the raw text) for one document."""
    rel = safe_relpath(Path(result.path), source_root)
    # cv.pdf and cv.docx may sit side by side
    out_json = config.sections_dir / output_name(rel, ".json")
    write_output_json(out_json, result.document.as_dict())
    if config.save_text:
        out_txt = config.text_dir / output_name(rel, ".txt")
        out_txt.parent.mkdir(parents=True, exist_ok=True)
        out_txt.write_text(result.document.raw_text or "", encoding="utf-8")
    return out_json


def execute_pipeline(config: UserConfig) -> int:
    """
    Phase 3: Execute the pipeline based on user configuration.

    Returns exit code (0 = success, 1 = failure, 2 = strict mode warnings).
    """
    if config.list_patterns:
        print(format_pattern_table())
        return 0

    events = EventChannel()
    events.subscribe_all(_log_event)
    coordinator = ExtractionCoordinator(events=events)

    results = asyncio.run(
        process_documents(config.inputs, coordinator, STANDARD_PATTERNS, max_concurrency=config.workers)
    )

    source_root = infer_source_root(config.inputs)
    ok = failed = 0
    had_warning = False

    for result in results:
        rel_name = safe_relpath(Path(result.path), source_root)
        if not result.ok:
            failed += 1
            log_document_status(rel_name, errors=[str(result.error)])
            continue

        try:
            write_result(result, config, source_root)
        except OSError as e:
            failed += 1
            log_document_status(rel_name, errors=[f"write failed: {e}"])
            continue

        ok += 1
        had_warning = had_warning or bool(result.warnings)
        log_document_status(rel_name, sections=result.document.section_names, warnings=result.warnings)

    LOG.info("📊 %d ok, %d failed. Sections in: %s", ok, failed, config.sections_dir)

    if failed:
        return 1
    if config.strict and had_warning:
        return 2
    return 0
