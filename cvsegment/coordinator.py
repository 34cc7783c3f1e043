"""
Extraction coordinator.

Resolves a document's format from its path, dispatches to exactly one
format adapter and publishes every lifecycle event on a single channel.
No retries are attempted here; a failed extraction is reported once and
re-raised to the caller.
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional

from .adapters import FormatAdapter, ProgressCallback, get_adapter, registered_formats
from .errors import UnsupportedFormat
from .events import EXTRACTION_ERROR, EventChannel, ExtractionEvent
from .logging_utils import LOG
from .shared import DocumentFormat, PathLike


def resolve_format(path: PathLike) -> DocumentFormat:
    """Format of path, derived from its lower-cased extension."""
    return DocumentFormat.from_path(path)


class ExtractionCoordinator:
    """
    Single entry point for turning a PDF or DOCX file into raw text.

    Adapters are built from the adapter registry unless given explicitly,
    and all of them publish on the coordinator's channel so one subscriber
    can observe every extraction.
    """

    def __init__(
        self,
        events: Optional[EventChannel] = None,
        adapters: Optional[Mapping[DocumentFormat, FormatAdapter]] = None,
    ) -> None:
        self.events = events if events is not None else EventChannel()
        if adapters is None:
            self.adapters: Dict[DocumentFormat, FormatAdapter] = {}
            for fmt in registered_formats():
                adapter = get_adapter(fmt, events=self.events)
                if adapter is not None:
                    self.adapters[fmt] = adapter
        else:
            self.adapters = dict(adapters)

    def adapter_for(self, path: PathLike) -> FormatAdapter:
        """
        Select the adapter for path.

        Raises:
            UnsupportedFormat: No adapter handles the path's extension; the
                error is also published on the channel
        """
        path_str = os.fspath(path)
        fmt = resolve_format(path_str)
        adapter = self.adapters.get(fmt)
        if adapter is None:
            ext = os.path.splitext(path_str)[1].lower() or "(none)"
            supported = ", ".join(sorted(f.value.upper() for f in self.adapters))
            message = f"Unsupported file format: {ext}. Only {supported} are supported."
            LOG.error("%s: %s", path_str, message)
            self.events.publish(
                ExtractionEvent(
                    name=EXTRACTION_ERROR,
                    format=DocumentFormat.UNSUPPORTED,
                    path=path_str,
                    data={"error": message},
                )
            )
            raise UnsupportedFormat(message, path=path_str, format=DocumentFormat.UNSUPPORTED)
        return adapter

    async def extract_text(self, path: PathLike, on_progress: Optional[ProgressCallback] = None) -> str:
        """
        Extract the raw text of one document.

        Args:
            path: Path to a .pdf or .docx file
            on_progress: Optional callback receiving progress records
                ``{"stage", "progress", ...}``

        Returns:
            The extracted text

        Raises:
            UnsupportedFormat: Unknown extension, raised before any I/O
            CapabilityUnavailable: The format's decoding library is missing
            ExtractionFailed: The file could not be decoded
        """
        adapter = self.adapter_for(path)
        LOG.debug("Dispatching %s to %s", os.fspath(path), type(adapter).__name__)
        return await adapter.extract(path, on_progress)

    def extract_text_sync(self, path: PathLike, on_progress: Optional[ProgressCallback] = None) -> str:
        """Blocking variant of extract_text for callers without an event loop."""
        return self.adapter_for(path).extract_sync(path, on_progress)
