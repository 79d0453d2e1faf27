#!/usr/bin/env python3
"""
rotalog CLI

Command-line access to the size-rotated log writer, mainly for shell
scripts and cron jobs.

Commands:

1) write
   - Append a timestamped line to <log_dir>/<file>, rotating first if the
     file is over the threshold.

2) check
   - Rotate <log_dir>/<file> if it is over the threshold. Writes nothing.

3) size
   - Print the current size of <log_dir>/<file> in bytes (0 if absent).

4) sweep
   - Run `check` on every file in <log_dir> matching a glob pattern.

Exit status is 1 on any failure, including an unusable error sink
directory, and 0 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from configs.settings import settings
from core.logwriter import (
    LogResult,
    check_and_archive,
    configure_error_sink,
    get_size,
    sweep,
    write_to_log,
)
from exceptions.exceptions import LogWriterError


def _report(result: LogResult) -> int:
    """Print a one-line summary of a result and return its exit code."""
    if result.archived_to:
        print(f"[rotalog] ✓ archived {result.path} → {result.archived_to}")
    if result.ok:
        return 0
    print(
        f"[rotalog] ✗ {result.error_kind.value}: {result.detail} ({result.path})",
        file=sys.stderr,
    )
    return 1


def _report_error(error: LogWriterError) -> int:
    print(f"[rotalog] ✗ {error}", file=sys.stderr)
    return 1


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_write(file_name: str, message: str, log_dir: str, max_size: int) -> int:
    result = write_to_log(message, log_dir, file_name, max_size)
    return _report(result)


def cmd_check(file_name: str, log_dir: str, max_size: int) -> int:
    result = check_and_archive(file_name, log_dir, max_size)
    code = _report(result)
    if result.ok and not result.archived_to:
        print(f"[rotalog] {result.path} is within {max_size} bytes")
    return code


def cmd_size(file_name: str, log_dir: str) -> int:
    try:
        size = get_size(file_name, log_dir)
    except LogWriterError as exc:
        return _report_error(exc)
    print(size)
    return 0


def cmd_sweep(log_dir: str, max_size: int, pattern: str) -> int:
    results = sweep(log_dir, max_size, pattern=pattern)
    codes = [_report(r) for r in results]
    print(f"[rotalog] Checked {len(results)} file(s) in {log_dir}")
    return max(codes, default=0)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="rotalog CLI")
    parser.add_argument(
        "--log-dir",
        default=str(settings.log_dir),
        help="Directory holding the log files (default: ROTALOG_LOG_DIR or 'logs')",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        help=(
            "Rotation threshold in bytes "
            "(default: ROTALOG_MAX_SIZE_BYTES or 52428800)"
        ),
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # write
    p_write = subparsers.add_parser(
        "write", help="Append a line, rotating the file first if needed"
    )
    p_write.add_argument("file", help="Log file name inside --log-dir")
    p_write.add_argument("message", nargs="+", help="Message text")

    # check
    p_check = subparsers.add_parser(
        "check", help="Rotate the file if it is over the threshold"
    )
    p_check.add_argument("file", help="Log file name inside --log-dir")

    # size
    p_size = subparsers.add_parser("size", help="Print the file size in bytes")
    p_size.add_argument("file", help="Log file name inside --log-dir")

    # sweep
    p_sweep = subparsers.add_parser(
        "sweep", help="Check every matching file in --log-dir"
    )
    p_sweep.add_argument(
        "--pattern",
        default="*.log",
        help="Glob pattern of active log files (default: *.log)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # With an error sink configured, diagnostics go to the sink only.
    if settings.error_log_file is not None:
        logging.getLogger().setLevel(settings.log_level)
        sink = settings.error_log_file
        try:
            configure_error_sink(sink.name, sink.parent)
        except LogWriterError as exc:
            return _report_error(exc)
    else:
        logging.basicConfig(
            level=settings.log_level,
            format="%(levelname)s %(name)s: %(message)s",
        )

    log_dir: str = args.log_dir
    command: str = args.command
    max_size: int = args.max_size if args.max_size is not None else settings.max_size_bytes
    if max_size <= 0:
        parser.error(f"--max-size must be positive, got {max_size}")

    if command == "write":
        return cmd_write(
            file_name=args.file,
            message=" ".join(args.message),
            log_dir=log_dir,
            max_size=max_size,
        )
    elif command == "check":
        return cmd_check(file_name=args.file, log_dir=log_dir, max_size=max_size)
    elif command == "size":
        return cmd_size(file_name=args.file, log_dir=log_dir)
    elif command == "sweep":
        return cmd_sweep(log_dir=log_dir, max_size=max_size, pattern=args.pattern)
    else:
        parser.error(f"Unknown command: {command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
