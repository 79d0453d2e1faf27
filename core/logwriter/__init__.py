"""
Size-triggered rotating log writer.

Public API:
- write_to_log / write_to_log_silently: rotate if needed, then append
- check_and_archive: rotate if needed, never append
- sweep: check_and_archive over a whole directory
- configure_error_sink: process-wide diagnostics redirection
- LogResult / ErrorKind: outcome of a write or check
"""

from .error_sink import configure_error_sink, current_error_sink
from .maintenance import sweep
from .models import ErrorKind, LogResult
from .writer import (
    append,
    archive,
    check_and_archive,
    get_size,
    write_to_log,
    write_to_log_silently,
)

__all__ = [
    "ErrorKind",
    "LogResult",
    "append",
    "archive",
    "check_and_archive",
    "configure_error_sink",
    "current_error_sink",
    "get_size",
    "sweep",
    "write_to_log",
    "write_to_log_silently",
]
