"""Typed extraction errors surfaced to callers of the coordinator."""

from __future__ import annotations

from typing import Optional

from .shared import DocumentFormat


class ExtractionError(Exception):
    """
    Base class for every failure leaving an adapter or the coordinator.

    Attributes:
        path: The input path the failure relates to
        format: The resolved document format
        cause: Human-readable message of the underlying failure
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        format: DocumentFormat = DocumentFormat.UNSUPPORTED,
        cause: Optional[str] = None,
    ):
        self.message = message
        self.path = path
        self.format = format
        self.cause = cause if cause is not None else message
        super().__init__(message)


class UnsupportedFormat(ExtractionError):
    """Extension not recognized; raised before any I/O."""


class CapabilityUnavailable(ExtractionError):
    """Format is recognized but its decoding library is not installed."""


class ExtractionFailed(ExtractionError):
    """Decoding a recognized, available format failed."""
