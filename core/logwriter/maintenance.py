"""Maintenance sweep: rotate every oversized log file in one directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from exceptions.exceptions import PathUnavailableError

from .models import LogResult
from .writer import PathLike, _validate_max_size, check_and_archive


logger = logging.getLogger(__name__)


def sweep(
    directory_path: PathLike,
    max_size_bytes: int,
    pattern: str = "*.log",
) -> List[LogResult]:
    """Run check_and_archive on each regular file matching `pattern`.

    Archives carry a numeric suffix after the original name, so with the
    default pattern they are never picked up again.

    Returns one LogResult per file checked, or a single failed result if the
    directory itself is unavailable.
    """
    _validate_max_size(max_size_bytes)
    directory = Path(directory_path)

    if not directory.is_dir():
        error = PathUnavailableError(directory, "Directory not found.")
        logger.warning("Sweep skipped: %s", error)
        return [LogResult.failure(str(directory), error)]

    results: List[LogResult] = []
    for candidate in sorted(directory.glob(pattern)):
        if not candidate.is_file():
            continue
        results.append(check_and_archive(candidate.name, directory, max_size_bytes))

    rotated = sum(1 for r in results if r.archived_to)
    logger.info(
        "Sweep of %s checked %d file(s), rotated %d", directory, len(results), rotated
    )
    return results
