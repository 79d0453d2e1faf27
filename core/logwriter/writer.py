"""
core.logwriter.writer

Size-triggered rotating log writer.

A call names a directory, a file name and a size threshold. Before the
message is appended the active file's size is checked; if it is over the
threshold the file is renamed aside to `<name><unix seconds>` and the
append starts a fresh file.

Every record is a single line:

    YYYYMMDDHHMMSS <message>\\r\\n

The helpers (get_size / archive / append) raise LogWriterError subclasses.
The public operations (write_to_log / check_and_archive) never raise for
filesystem failures; they report them in a LogResult instead.
"""

from __future__ import annotations

import logging
import os
import threading
import time
import weakref
from datetime import datetime
from pathlib import Path
from typing import Optional, Type, Union

from configs.settings import DEFAULT_MAX_SIZE_BYTES
from exceptions.exceptions import (
    LogWriterError,
    PathUnavailableError,
    PermissionDeniedError,
    RotationFailedError,
    WriteFailedError,
)

from .models import LogResult


logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
LINE_TERMINATOR = "\r\n"


# -------------------------------------------------------------------
# Clock + locking
# -------------------------------------------------------------------


def _unix_now() -> int:
    """Seconds since the epoch, used for archive names."""
    return int(time.time())


def _timestamp() -> str:
    """Local wall-clock time for the record prefix."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


class _PathLock:
    """threading.Lock that can be weakly referenced."""

    __slots__ = ("_lock", "__weakref__")

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def __enter__(self) -> "_PathLock":
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self._lock.release()


# One lock per absolute path: check-rotate-append is a single critical
# section for threads of this process. Other processes are not coordinated.
# Entries drop out once no call is holding or waiting on them.
_path_locks: "weakref.WeakValueDictionary[str, _PathLock]" = (
    weakref.WeakValueDictionary()
)
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> _PathLock:
    key = os.path.abspath(path)
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _PathLock()
            _path_locks[key] = lock
        return lock


# -------------------------------------------------------------------
# Internal helpers
# -------------------------------------------------------------------


def _log_path(file_name: str, directory_path: PathLike) -> Path:
    return Path(directory_path) / file_name


def _validate_max_size(max_size_bytes: int) -> None:
    if (
        isinstance(max_size_bytes, bool)
        or not isinstance(max_size_bytes, int)
        or max_size_bytes <= 0
    ):
        raise ValueError(
            f"max_size_bytes must be a positive integer, got {max_size_bytes!r}"
        )


def _classify(
    exc: OSError,
    path: Path,
    fallback: Type[LogWriterError],
) -> LogWriterError:
    """Map an OSError from any stage onto the log writer's error kinds."""
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(path, str(exc))
    if not path.parent.is_dir():
        return PathUnavailableError(path, f"Directory not found: {path.parent}")
    return fallback(path, str(exc))


def _archive_target(source: Path, stamp: int) -> Path:
    """Return a free archive name for `source`.

    `<name><stamp>` is used when free. A second rotation within the same
    second gets `<name><stamp>.1`, then `.2`, and so on.
    """
    base = source.with_name(f"{source.name}{stamp}")
    if not base.exists():
        return base

    counter = 1
    while True:
        candidate = source.with_name(f"{base.name}.{counter}")
        if not candidate.exists():
            return candidate
        counter += 1


def get_size(file_name: str, directory_path: PathLike) -> int:
    """
    Return the byte size of `directory_path/file_name`.

    An absent file (or absent directory) is a size of 0, same as an empty
    file. Only a stat failure on an existing path raises.
    """
    path = _log_path(file_name, directory_path)
    try:
        return path.stat().st_size
    except (FileNotFoundError, NotADirectoryError):
        return 0
    except OSError as exc:
        raise _classify(exc, path, PathUnavailableError) from exc


def archive(file_name: str, directory_path: PathLike) -> Path:
    """
    Rename the active file to its archive name and return the new path.

    Raises
    ------
    PathUnavailableError
        If the directory does not exist.
    PermissionDeniedError
        If the rename is not permitted.
    RotationFailedError
        If the rename failed for any other reason (e.g. the file vanished).
    """
    source = _log_path(file_name, directory_path)
    target = _archive_target(source, _unix_now())

    try:
        os.rename(source, target)
    except PermissionError as exc:
        raise PermissionDeniedError(source, str(exc)) from exc
    except OSError as exc:
        if not source.parent.is_dir():
            raise PathUnavailableError(
                source, f"Directory not found: {source.parent}"
            ) from exc
        raise RotationFailedError(source, str(exc), archive_path=target) from exc

    logger.info("Archived log file %s -> %s", source, target.name)
    return target


def append(message: str, file_name: str, directory_path: PathLike) -> Path:
    """
    Append one timestamped record, creating the file if needed.

    The line is written exactly as `<timestamp> <message>\\r\\n`; newline
    translation is disabled so the terminator is CRLF on every platform.
    """
    path = _log_path(file_name, directory_path)
    line = f"{_timestamp()} {message}{LINE_TERMINATOR}"

    try:
        with open(
            path, "a", encoding="utf-8", errors="backslashreplace", newline=""
        ) as handle:
            handle.write(line)
    except OSError as exc:
        raise _classify(exc, path, WriteFailedError) from exc

    return path


def _rotate_if_needed(
    file_name: str,
    directory_path: PathLike,
    max_size_bytes: int,
) -> Optional[Path]:
    if get_size(file_name, directory_path) > max_size_bytes:
        return archive(file_name, directory_path)
    return None


# -------------------------------------------------------------------
# Public functions
# -------------------------------------------------------------------


def write_to_log(
    message: str,
    directory_path: PathLike,
    file_name: str,
    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
) -> LogResult:
    """
    Rotate the file if it is over `max_size_bytes`, then append `message`.

    Parameters
    ----------
    message : str
        Arbitrary text; written as-is after the timestamp.
    directory_path : str | PathLike
        Directory holding the log file. Must be writable.
    file_name : str
        Name of the active log file.
    max_size_bytes : int
        Rotation threshold (default 50 MiB). The file is rotated when its
        size is strictly greater than this.

    Returns
    -------
    LogResult
        ok=True on success. A failed rotation does not stop the append; the
        result then carries the rotation error. A failed append is reported
        as the result's error, with any rotation error appended to `detail`.

    Raises
    ------
    ValueError
        If `max_size_bytes` is not a positive integer.
    """
    _validate_max_size(max_size_bytes)
    path = _log_path(file_name, directory_path)
    archived_to: Optional[str] = None
    rotation_error: Optional[LogWriterError] = None

    with _lock_for(path):
        try:
            archived = _rotate_if_needed(file_name, directory_path, max_size_bytes)
        except LogWriterError as exc:
            logger.warning("Log rotation failed: %s", exc)
            rotation_error = exc
        else:
            if archived is not None:
                archived_to = str(archived)

        try:
            append(message, file_name, directory_path)
        except LogWriterError as exc:
            logger.warning("Log write failed: %s", exc)
            detail = exc.details
            if rotation_error is not None:
                detail = f"{detail}; rotation also failed: {rotation_error.details}"
            return LogResult.failure(
                str(path), exc, archived_to=archived_to, detail=detail
            )

    if rotation_error is not None:
        return LogResult.failure(str(path), rotation_error)
    return LogResult(ok=True, path=str(path), archived_to=archived_to)


def check_and_archive(
    file_name: str,
    directory_path: PathLike,
    max_size_bytes: int,
) -> LogResult:
    """
    Rotate the file if it is over `max_size_bytes`. Never writes a record.

    Unlike write_to_log, the threshold has no default. Useful for periodic
    maintenance of files written by someone else (e.g. the error sink).
    """
    _validate_max_size(max_size_bytes)
    path = _log_path(file_name, directory_path)

    with _lock_for(path):
        try:
            archived = _rotate_if_needed(file_name, directory_path, max_size_bytes)
        except LogWriterError as exc:
            logger.warning("Log rotation failed: %s", exc)
            return LogResult.failure(str(path), exc)

    return LogResult(
        ok=True,
        path=str(path),
        archived_to=str(archived) if archived is not None else None,
    )


def write_to_log_silently(
    message: str,
    directory_path: PathLike,
    file_name: str,
    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
) -> None:
    """Best-effort write_to_log that discards the outcome."""
    write_to_log(message, directory_path, file_name, max_size_bytes)
