"""
Process-wide diagnostics redirection.

configure_error_sink() sends everything that would normally end up on the
console as a diagnostic to one file instead:

- records reaching the root `logging` logger
- Python warnings (via logging.captureWarnings)
- uncaught exceptions (via sys.excepthook)

Console handlers already on the root logger (StreamHandlers writing to
stdout or stderr) are detached, so diagnostics go to the sink only and stop
appearing on the console. Other handlers (files, sockets, capture buffers)
are left alone.

It is meant to be called once at process startup. Calling it again with the
same target does nothing; calling it with a different target moves the sink.
There is no public undo.

The sink reopens its file when it is renamed away, so check_and_archive can
rotate it like any other log.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional

from exceptions.exceptions import PathUnavailableError


logger = logging.getLogger(__name__)

SINK_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
SINK_DATE_FORMAT = "%Y%m%d%H%M%S"


@dataclass
class _SinkState:
    path: Optional[Path] = None
    handler: Optional[logging.Handler] = None
    previous_excepthook: Optional[Callable[..., Any]] = None
    displaced: List[logging.Handler] = field(default_factory=list)


_state = _SinkState()
_state_lock = threading.Lock()


def _is_console_handler(handler: logging.Handler) -> bool:
    if not isinstance(handler, logging.StreamHandler):
        return False
    if isinstance(handler, logging.FileHandler):
        return False
    return handler.stream in (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__)


def _log_uncaught(exc_type, exc_value, exc_traceback) -> None:
    if issubclass(exc_type, KeyboardInterrupt) and _state.previous_excepthook:
        _state.previous_excepthook(exc_type, exc_value, exc_traceback)
        return
    logging.getLogger("rotalog.uncaught").critical(
        "Uncaught exception",
        exc_info=(exc_type, exc_value, exc_traceback),
    )


def configure_error_sink(file_name: str, directory_path) -> Path:
    """
    Redirect process-wide diagnostics to `directory_path/file_name`.

    Returns the absolute path of the sink.

    Raises
    ------
    PathUnavailableError
        If `directory_path` is not an existing directory.
    """
    target = Path(os.path.abspath(Path(directory_path) / file_name))
    if not target.parent.is_dir():
        raise PathUnavailableError(
            target, f"Directory not found: {target.parent}"
        )

    with _state_lock:
        if _state.path == target:
            return target

        handler = logging.handlers.WatchedFileHandler(
            target, encoding="utf-8", delay=True
        )
        handler.setFormatter(logging.Formatter(SINK_FORMAT, SINK_DATE_FORMAT))

        root = logging.getLogger()
        if _state.handler is not None:
            root.removeHandler(_state.handler)
            _state.handler.close()
        for existing in list(root.handlers):
            if _is_console_handler(existing):
                root.removeHandler(existing)
                _state.displaced.append(existing)
        root.addHandler(handler)

        logging.captureWarnings(True)
        if _state.previous_excepthook is None:
            _state.previous_excepthook = sys.excepthook
            sys.excepthook = _log_uncaught

        _state.path = target
        _state.handler = handler

    logger.info("Diagnostics redirected to %s", target)
    return target


def current_error_sink() -> Optional[Path]:
    """Return the configured sink path, or None if never configured."""
    return _state.path


def _reset_error_sink() -> None:
    # Test hook only; production code has no way back.
    with _state_lock:
        if _state.handler is not None:
            logging.getLogger().removeHandler(_state.handler)
            _state.handler.close()
        if _state.previous_excepthook is not None:
            sys.excepthook = _state.previous_excepthook
        for displaced in _state.displaced:
            logging.getLogger().addHandler(displaced)
        logging.captureWarnings(False)
        _state.path = None
        _state.handler = None
        _state.previous_excepthook = None
        _state.displaced = []
