from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


DEFAULT_MAX_SIZE_BYTES = 52428800


class Settings:
    """
    Central configuration for rotalog.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties. Library calls always take explicit
    parameters; these values only feed LogStore defaults and the CLI.
    """

    def __init__(self) -> None:
        # Default log destination
        self._log_dir = Path(os.getenv("ROTALOG_LOG_DIR", "logs"))
        self._log_file_name = os.getenv("ROTALOG_LOG_FILE", "app.log")

        # Rotation threshold (validated lazily on access)
        self._max_size_raw = os.getenv(
            "ROTALOG_MAX_SIZE_BYTES", str(DEFAULT_MAX_SIZE_BYTES)
        )

        # Optional diagnostics sink, e.g. "/var/log/myapp/errors.log"
        self._error_log_file = os.getenv("ROTALOG_ERROR_LOG_FILE") or None

        self._log_level = os.getenv("ROTALOG_LOG_LEVEL", "INFO").upper()

    # ------------------------------------------------------------------
    # Log destination
    # ------------------------------------------------------------------

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    @property
    def log_file_name(self) -> str:
        return self._log_file_name

    @property
    def max_size_bytes(self) -> int:
        try:
            value = int(self._max_size_raw)
        except ValueError:
            value = 0
        if value <= 0:
            raise RuntimeError(
                "ROTALOG_MAX_SIZE_BYTES must be a positive integer, "
                f"got {self._max_size_raw!r}."
            )
        return value

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def error_log_file(self) -> Optional[Path]:
        if self._error_log_file is None:
            return None
        return Path(self._error_log_file)

    @property
    def log_level(self) -> str:
        return self._log_level


settings = Settings()
