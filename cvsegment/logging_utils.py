"""
Logging helpers for cvsegment.

Everything logs through the package logger ``LOG``. The CLI calls
setup_logging() once and reports one status line per document through
log_document_status().
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

LOG = logging.getLogger("cvsegment")

# Verbosity levels
VERBOSITY_QUIET = 0    # Warnings and errors only, bare messages
VERBOSITY_NORMAL = 1   # Status lines with level prefix
VERBOSITY_VERBOSE = 2  # Per-page and per-event debug output

_LEVELS = {
    VERBOSITY_QUIET: logging.WARNING,
    VERBOSITY_NORMAL: logging.INFO,
    VERBOSITY_VERBOSE: logging.DEBUG,
}

_CONSOLE_FORMATS = {
    VERBOSITY_QUIET: "%(message)s",
    VERBOSITY_NORMAL: "%(levelname)s: %(message)s",
    VERBOSITY_VERBOSE: "%(levelname)s: %(message)s",
}

FILE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that report recoverable parse problems at WARNING
NOISY_LOGGERS = ("pypdf",)


def _clamp(verbosity: int) -> int:
    return max(VERBOSITY_QUIET, min(VERBOSITY_VERBOSE, verbosity))


def setup_logging(
    debug: bool,
    log_file: Optional[str] = None,
    verbosity: int = VERBOSITY_NORMAL,
) -> Optional[logging.FileHandler]:
    """
    Configure console (and optionally file) logging.

    Args:
        debug: Forces VERBOSITY_VERBOSE
        log_file: Optional log file path; the file always receives DEBUG
        verbosity: VERBOSITY_QUIET, VERBOSITY_NORMAL or VERBOSITY_VERBOSE

    Returns:
        The file handler that was attached, or None
    """
    verbosity = VERBOSITY_VERBOSE if debug else _clamp(verbosity)
    level = _LEVELS[verbosity]
    console_formatter = logging.Formatter(_CONSOLE_FORMATS[verbosity])

    # Reuse console handlers installed earlier (e.g. by pytest)
    consoles = [
        h for h in logging.root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    if not logging.root.handlers:
        consoles = [logging.StreamHandler()]
        logging.basicConfig(level=level, handlers=consoles, force=True)
    for handler in consoles:
        handler.setLevel(level)
        handler.setFormatter(console_formatter)
    logging.root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    if not log_file:
        return None

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    logging.root.addHandler(file_handler)
    logging.root.setLevel(logging.DEBUG)
    return file_handler


def fmt_issues(errors: List[str], warnings: List[str]) -> str:
    """
    Compact error/warning string for the one-line-per-file log.
    """
    parts: List[str] = []
    if errors:
        parts.append("errors: " + ", ".join(errors))
    if warnings:
        parts.append("warnings: " + ", ".join(warnings))
    return " | ".join(parts) if parts else "-"


def log_document_status(
    name: str,
    sections: Iterable[str] = (),
    errors: Iterable[str] = (),
    warnings: Iterable[str] = (),
) -> None:
    """Log the ❌ / ⚠️ / ✅ line for one processed document."""
    errors, warnings = list(errors), list(warnings)
    if errors:
        LOG.error("❌ %s | %s", name, fmt_issues(errors, warnings))
    elif warnings:
        LOG.warning("⚠️  %s | %s", name, fmt_issues([], warnings))
    else:
        LOG.info("✅ %s | %s", name, ", ".join(sections) or "-")
