"""rotalog command line."""

import errno
import logging
from pathlib import Path

import pytest

from cli.main import build_parser, main
from configs.settings import settings


def test_write_then_size(tmp_path, capsys):
    assert main(["--log-dir", str(tmp_path), "write", "a.log", "hello", "world"]) == 0

    data = (tmp_path / "a.log").read_bytes()
    assert data.endswith(b" hello world\r\n")

    assert main(["--log-dir", str(tmp_path), "size", "a.log"]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] == str(len(data))


def test_check_rotates_when_over_max_size(tmp_path, capsys, frozen_clock):
    (tmp_path / "a.log").write_bytes(b"x" * 50)

    code = main(["--log-dir", str(tmp_path), "--max-size", "10", "check", "a.log"])

    assert code == 0
    assert (tmp_path / f"a.log{frozen_clock}").exists()
    assert "archived" in capsys.readouterr().out


def test_check_reports_within_threshold(tmp_path, capsys):
    (tmp_path / "a.log").write_bytes(b"x")

    assert main(["--log-dir", str(tmp_path), "--max-size", "10", "check", "a.log"]) == 0
    assert "within 10 bytes" in capsys.readouterr().out


def test_write_failure_exits_nonzero(tmp_path, capsys):
    code = main(["--log-dir", str(tmp_path / "nope"), "write", "a.log", "hi"])

    assert code == 1
    assert "PathUnavailable" in capsys.readouterr().err


def test_sweep_summarises(tmp_path, capsys, frozen_clock):
    (tmp_path / "a.log").write_bytes(b"x" * 50)
    (tmp_path / "b.log").write_bytes(b"x")

    assert main(["--log-dir", str(tmp_path), "--max-size", "10", "sweep"]) == 0
    assert "Checked 2 file(s)" in capsys.readouterr().out


def test_non_positive_max_size_is_rejected(tmp_path):
    with pytest.raises(SystemExit):
        main(["--log-dir", str(tmp_path), "--max-size", "0", "check", "a.log"])


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@pytest.fixture
def root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_size_permission_error_exits_nonzero(tmp_path, capsys, monkeypatch):
    (tmp_path / "a.log").write_bytes(b"x")

    def deny(self, *args, **kwargs):
        raise PermissionError(errno.EACCES, "Permission denied")

    monkeypatch.setattr(Path, "stat", deny)

    code = main(["--log-dir", str(tmp_path), "size", "a.log"])

    assert code == 1
    assert "PermissionDenied" in capsys.readouterr().err


@pytest.mark.usefixtures("clean_error_sink", "root_level")
def test_unusable_error_sink_exits_nonzero(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(settings, "_error_log_file", str(tmp_path / "nope" / "err.log"))

    code = main(["--log-dir", str(tmp_path), "write", "a.log", "hi"])

    assert code == 1
    assert "PathUnavailable" in capsys.readouterr().err
    assert not (tmp_path / "a.log").exists()


@pytest.mark.usefixtures("clean_error_sink", "root_level")
def test_error_sink_keeps_diagnostics_off_stderr(tmp_path, capsys, monkeypatch):
    sink = tmp_path / "err.log"
    monkeypatch.setattr(settings, "_error_log_file", str(sink))

    code = main(["--log-dir", str(tmp_path / "nope"), "write", "a.log", "hi"])

    assert code == 1
    err = capsys.readouterr().err
    assert "Log write failed" not in err
    assert "Log write failed" in sink.read_text(encoding="utf-8")
