"""
Result models for the log writer.

These describe:
- ErrorKind enum (PathUnavailable, PermissionDenied, RotationFailed, WriteFailed)
- LogResult, the outcome of a public write / check call
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from exceptions.exceptions import (
    LogWriterError,
    PathUnavailableError,
    PermissionDeniedError,
    RotationFailedError,
    WriteFailedError,
)


class ErrorKind(str, Enum):
    PATH_UNAVAILABLE = "PathUnavailable"
    PERMISSION_DENIED = "PermissionDenied"
    ROTATION_FAILED = "RotationFailed"
    WRITE_FAILED = "WriteFailed"


_EXCEPTION_FOR_KIND = {
    ErrorKind.PATH_UNAVAILABLE: PathUnavailableError,
    ErrorKind.PERMISSION_DENIED: PermissionDeniedError,
    ErrorKind.ROTATION_FAILED: RotationFailedError,
    ErrorKind.WRITE_FAILED: WriteFailedError,
}


class LogResult(BaseModel):
    """
    Outcome of write_to_log / check_and_archive:

    - ok: True when every step succeeded
    - path: the active log file
    - archived_to: archive path if the call rotated the file
    - error_kind / detail: set when a step failed
    """
    ok: bool
    path: str
    archived_to: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    detail: Optional[str] = None

    @classmethod
    def failure(
        cls,
        path: str,
        error: LogWriterError,
        archived_to: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> "LogResult":
        return cls(
            ok=False,
            path=path,
            archived_to=archived_to,
            error_kind=ErrorKind(error.kind),
            detail=detail or error.details,
        )

    def raise_for_error(self) -> None:
        """Raise the matching LogWriterError subclass if this result failed."""
        if self.ok or self.error_kind is None:
            return
        raise _EXCEPTION_FOR_KIND[self.error_kind](self.path, self.detail)
