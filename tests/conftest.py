"""Pytest configuration for rotalog tests."""

import pytest

from core.logwriter import error_sink, writer


FROZEN_UNIX_TIME = 1374687045


@pytest.fixture
def frozen_clock(monkeypatch):
    """Pin archive names to one second so rotations collide."""
    monkeypatch.setattr(writer, "_unix_now", lambda: FROZEN_UNIX_TIME)
    return FROZEN_UNIX_TIME


@pytest.fixture
def clean_error_sink():
    error_sink._reset_error_sink()
    yield
    error_sink._reset_error_sink()
