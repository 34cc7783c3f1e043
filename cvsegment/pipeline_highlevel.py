"""
High-level document pipeline.

Runs extraction and segmentation for a single document and returns a
fully populated Document, or raises the typed extraction error. Batch
processing bounds its own parallelism; the coordinator imposes none.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .adapters import ProgressCallback
from .coordinator import ExtractionCoordinator
from .errors import ExtractionError
from .logging_utils import LOG
from .sections import STANDARD_PATTERNS, PatternEntry, non_empty_sections, segment, SUMMARY
from .shared import Document, DocumentResult, PathLike

DEFAULT_MAX_CONCURRENCY = 4


def _report(on_progress: Optional[ProgressCallback], stage: str, progress: int, **extra: Any) -> None:
    if on_progress is None:
        return
    record: Dict[str, Any] = {"stage": stage, "progress": progress}
    record.update(extra)
    try:
        on_progress(record)
    except Exception as e:
        LOG.error("Progress callback failed at stage %s: %s", stage, e)


async def process_document(
    path: PathLike,
    coordinator: Optional[ExtractionCoordinator] = None,
    table: Sequence[PatternEntry] = STANDARD_PATTERNS,
    on_progress: Optional[ProgressCallback] = None,
) -> Document:
    """
    Extract and segment one document.

    Args:
        path: Path to a .pdf or .docx file
        coordinator: Coordinator to extract with (a private one if omitted)
        table: Section pattern table
        on_progress: Receives pipeline-level records (stages ``starting``,
            ``extraction_complete``, ``sections_identified``,
            ``segmentation_complete``) as well as the adapter's own records

    Returns:
        Document in status Segmented with raw_text and sections set

    Raises:
        ExtractionError: Any extraction failure; no partial Document is returned
    """
    coordinator = coordinator or ExtractionCoordinator()
    document = Document.from_path(path)

    _report(on_progress, "starting", 0, message="Starting document extraction")
    raw_text = await coordinator.extract_text(document.path, on_progress)
    _report(
        on_progress, "extraction_complete", 25,
        message="Text extraction complete", text_length=len(raw_text),
    )

    sections = segment(raw_text, table)
    _report(
        on_progress, "sections_identified", 50,
        message="Document sections identified", section_count=len(sections),
    )

    document.attach_text(raw_text)
    document.attach_sections(sections)
    _report(on_progress, "segmentation_complete", 100, message="Segmentation complete")
    return document


def document_warnings(document: Document) -> List[str]:
    """Non-fatal issues worth flagging for a segmented document."""
    warnings: List[str] = []
    if not (document.raw_text or "").strip():
        warnings.append("no text extracted")
    elif list(non_empty_sections(document.sections or {})) in ([], [SUMMARY]):
        warnings.append("no section headers recognized")
    return warnings


async def process_documents(
    paths: Iterable[PathLike],
    coordinator: Optional[ExtractionCoordinator] = None,
    table: Sequence[PatternEntry] = STANDARD_PATTERNS,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> List[DocumentResult]:
    """
    Process many documents concurrently, at most max_concurrency at a time.

    Extraction errors are captured per document rather than raised, so one
    corrupt file does not abort the batch. Results keep input order.
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")

    coordinator = coordinator or ExtractionCoordinator()
    semaphore = asyncio.Semaphore(max_concurrency)

    async def _one(path: PathLike) -> DocumentResult:
        path_str = os.fspath(path)
        async with semaphore:
            try:
                document = await process_document(path_str, coordinator, table)
            except ExtractionError as e:
                return DocumentResult(path=path_str, error=e)
        return DocumentResult(path=path_str, document=document, warnings=document_warnings(document))

    results = await asyncio.gather(*(_one(p) for p in paths))
    LOG.debug("Processed %d documents", len(results))
    return list(results)


def process_document_sync(
    path: PathLike,
    table: Sequence[PatternEntry] = STANDARD_PATTERNS,
    on_progress: Optional[ProgressCallback] = None,
) -> Document:
    """Blocking convenience wrapper around process_document."""
    return asyncio.run(process_document(path, table=table, on_progress=on_progress))
