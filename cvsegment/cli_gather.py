"""
CLI Phase 1: Gather user requirements.

Parses command-line arguments and returns UserConfig dataclass.
No side effects - just parsing and conversion.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .cli_config import UserConfig
from .pipeline_highlevel import DEFAULT_MAX_CONCURRENCY


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def gather_user_requirements(argv: Optional[List[str]] = None) -> UserConfig:
    """
    Phase 1: Parse command-line arguments and return user configuration.

    No side effects - just parsing and conversion to UserConfig.
    """
    parser = argparse.ArgumentParser(
        description="Extract text from PDF/DOCX résumés and split it into labeled sections.",
        epilog="""
Examples:
  Segment every résumé in a folder:
    python -m cvsegment.cli \\
      --source cvs/ \\
      --target output/

  Segment one file and keep the raw text:
    python -m cvsegment.cli \\
      --source cv.pdf \\
      --target output/ \\
      --save-text

  Show the section header table:
    python -m cvsegment.cli --list-patterns
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--source",
                        help="Input .pdf/.docx file or folder (searched recursively)")
    parser.add_argument("--target",
                        help="Target output directory")
    parser.add_argument("--workers", type=_positive_int, default=DEFAULT_MAX_CONCURRENCY,
                        help=f"Maximum documents extracted at once (default: {DEFAULT_MAX_CONCURRENCY})")
    parser.add_argument("--save-text", action="store_true",
                        help="Also write the raw extracted text next to the sections JSON.")
    parser.add_argument("--list-patterns", action="store_true",
                        help="Print the section pattern table and exit.")
    parser.add_argument("--strict", action="store_true",
                        help="Treat warnings as failure (non-zero exit code).")
    parser.add_argument("--debug", action="store_true",
                        help="Verbose logs + stack traces on failure.")
    parser.add_argument("--log-file",
                        help="Optional path to a log file. If set, all output is also written there.")

    args = parser.parse_args(argv)

    if not args.list_patterns:
        if not args.source:
            raise ValueError("--source is required")
        if not args.target:
            raise ValueError("--target is required")

    return UserConfig(
        source=Path(args.source) if args.source else None,
        target_dir=Path(args.target) if args.target else None,
        workers=args.workers,
        save_text=args.save_text,
        list_patterns=args.list_patterns,
        strict=args.strict,
        debug=args.debug,
        log_file=args.log_file,
    )
