"""
Custom exceptions for the rotalog log writer.

These exceptions are intentionally simple and descriptive.
They are used across:

  - core/logwriter/
  - runtime/store/
  - cli/

Placing them at the project root (exceptions/) avoids circular imports
and keeps exception types consistent across modules.
"""


class LogWriterError(Exception):
    """
    Base class for every filesystem failure the log writer classifies.

    `kind` matches the ErrorKind value reported in a LogResult.
    """

    kind = "LogWriterError"

    def __init__(self, path, details=None):
        self.path = str(path)
        self.details = details or "Unknown filesystem error."
        msg = f"{self.kind} for {self.path}: {self.details}"
        super().__init__(msg)


class PathUnavailableError(LogWriterError):
    """
    Raised when the target directory is missing or is not a directory.
    """

    kind = "PathUnavailable"


class PermissionDeniedError(LogWriterError):
    """
    Raised when the process may not read, rename or write the log file.
    """

    kind = "PermissionDenied"


class RotationFailedError(LogWriterError):
    """
    Raised when the active file cannot be renamed to its archive name.

    `archive_path` is the name the rename was targeting, if known.
    """

    kind = "RotationFailed"

    def __init__(self, path, details=None, archive_path=None):
        self.archive_path = str(archive_path) if archive_path else None
        super().__init__(path, details)


class WriteFailedError(LogWriterError):
    """
    Raised when the log file cannot be opened, written or flushed.
    """

    kind = "WriteFailed"
