"""
Base interface for format adapters.

Defines the contract for pluggable document-to-text adapters and the
lifecycle every adapter shares: one ``extraction:start`` event, any number
of ``extraction:progress`` events, then exactly one of
``extraction:complete`` or ``extraction:error``.
"""

from __future__ import annotations

import asyncio
import functools
import math
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..errors import CapabilityUnavailable, ExtractionError, ExtractionFailed
from ..events import (
    EXTRACTION_COMPLETE,
    EXTRACTION_ERROR,
    EXTRACTION_PROGRESS,
    EXTRACTION_START,
    EventChannel,
    ExtractionEvent,
)
from ..logging_utils import LOG
from ..shared import DocumentFormat, PathLike

ProgressCallback = Callable[[Dict[str, Any]], None]
Reporter = Callable[..., None]


@dataclass
class AdapterOutput:
    text: str
    details: Dict[str, Any] = field(default_factory=dict)


def percent(done: int, total: int) -> int:
    """Whole percentage of done/total, rounding halves up."""
    if total <= 0:
        return 100
    return min(100, max(0, int(math.floor(100 * done / total + 0.5))))


class FormatAdapter(ABC):
    """
    Abstract base class for format adapters.

    Implementations convert one binary document format into plain text.
    They only implement ``_read_text``; event emission, progress fan-out and
    error wrapping are handled here so every adapter honours the same
    lifecycle.
    """

    format: DocumentFormat = DocumentFormat.UNSUPPORTED
    stage: str = "extraction"
    label: str = "Document"

    def __init__(self, events: Optional[EventChannel] = None) -> None:
        self.events = events if events is not None else EventChannel()

    @property
    def available(self) -> bool:
        """Whether the decoding library this adapter needs is installed."""
        return True

    def unavailable_error(self, path: str) -> ExtractionError:
        return CapabilityUnavailable(
            f"{self.label} support is not available.",
            path=path,
            format=self.format,
        )

    @abstractmethod
    def _read_text(self, path: Path, report: Reporter) -> AdapterOutput:
        """
        Decode the file at path into text.

        Args:
            path: Path to the source document
            report: Call as ``report(progress, **extra)`` after each unit of work

        Returns:
            AdapterOutput with the text and extra fields for the complete event

        Raises:
            Exception: Any decoding failure; the caller wraps it
        """
        ...

    async def extract(self, path: PathLike, on_progress: Optional[ProgressCallback] = None) -> str:
        """
        Extract raw text without blocking the event loop.

        The decode runs in the loop's default executor, so on_progress is
        invoked from a worker thread. Cancelling the awaiting task does not
        stop the decode; its remaining events are still published.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self.extract_sync, path, on_progress)
        )

    def extract_sync(self, path: PathLike, on_progress: Optional[ProgressCallback] = None) -> str:
        path_str = os.fspath(path)
        self._publish(EXTRACTION_START, path_str)

        if not self.available:
            err = self.unavailable_error(path_str)
            LOG.error("%s: %s", path_str, err.message)
            self._publish(EXTRACTION_ERROR, path_str, error=err.cause)
            raise err

        try:
            output = self._read_text(Path(path_str), self._reporter(path_str, on_progress))
        except ExtractionError as e:
            LOG.error("%s: %s", path_str, e.message)
            self._publish(EXTRACTION_ERROR, path_str, error=e.cause)
            raise
        except Exception as e:
            cause = str(e) or type(e).__name__
            LOG.error("Error parsing %s %s: %s", self.label, path_str, cause)
            self._publish(EXTRACTION_ERROR, path_str, error=cause)
            raise ExtractionFailed(
                f"{self.label} extraction failed: {cause}",
                path=path_str,
                format=self.format,
                cause=cause,
            ) from e

        details = dict(output.details)
        details["text_length"] = len(output.text)
        self._publish(EXTRACTION_COMPLETE, path_str, **details)
        LOG.debug("%s extracted: %s (%d chars)", self.label, path_str, len(output.text))
        return output.text

    def _reporter(self, path: str, on_progress: Optional[ProgressCallback]) -> Reporter:
        def report(progress: int, **extra: Any) -> None:
            record: Dict[str, Any] = {"stage": self.stage, "progress": progress}
            record.update(extra)
            self._publish(EXTRACTION_PROGRESS, path, **record)
            if on_progress is None:
                return
            try:
                on_progress(record)
            except Exception as e:
                LOG.error("Progress callback for %s failed: %s", path, e)

        return report

    def _publish(self, name: str, path: str, **data: Any) -> None:
        self.events.publish(ExtractionEvent(name=name, format=self.format, path=path, data=data))
