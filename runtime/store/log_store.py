"""
LogStore: append-only log file bound to one destination.

Writes timestamped lines to:

    <log_dir>/<file_name>

rotating the file to <file_name><unix seconds> once it grows past
max_size_bytes. All the work is done by core.logwriter; this class only
remembers the three parameters so callers do not repeat them.
"""

from pathlib import Path
from typing import Optional

from configs.settings import settings
from core.logwriter import LogResult, check_and_archive, get_size, write_to_log


class LogStore:
    """Size-rotated log file with bound destination and threshold.

    Parameters
    ----------
    log_dir:
        Directory holding the log file. Defaults to ROTALOG_LOG_DIR
        (or "logs"). Created on construction if missing.
    file_name:
        Active file name. Defaults to ROTALOG_LOG_FILE (or "app.log").
    max_size_bytes:
        Rotation threshold. Defaults to ROTALOG_MAX_SIZE_BYTES (50 MiB).
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        file_name: Optional[str] = None,
        max_size_bytes: Optional[int] = None,
    ) -> None:
        self.log_dir = Path(log_dir) if log_dir else settings.log_dir
        self.file_name = file_name or settings.log_file_name
        self.max_size_bytes = (
            max_size_bytes if max_size_bytes is not None else settings.max_size_bytes
        )

        self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self.log_dir / self.file_name

    def write(self, message: str) -> LogResult:
        """Append one line, rotating first if the file is over the threshold."""
        return write_to_log(message, self.log_dir, self.file_name, self.max_size_bytes)

    def check(self) -> LogResult:
        """Rotate the file if it is over the threshold, without writing."""
        return check_and_archive(self.file_name, self.log_dir, self.max_size_bytes)

    def size(self) -> int:
        return get_size(self.file_name, self.log_dir)
