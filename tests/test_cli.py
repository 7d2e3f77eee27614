"""Tests for the command-line entry point (TUI stubbed out)."""

import json
import logging

import pytest

from kvjson import __version__, cli, tui
from kvjson.core import Session
from kvjson.models import OUTPUT_PATH, Exit


def fake_tui(persist, **pairs):
    def _main():
        s = Session()
        s.pairs.update(pairs)
        return s, Exit(persist=persist)

    return _main


@pytest.fixture(autouse=True)
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    logger = logging.getLogger("kvjson")
    for h in logger.handlers:
        h.close()
    logger.handlers[:] = []


def test_persist_writes_output(monkeypatch, in_tmp, capsys):
    monkeypatch.setattr(tui, "main", fake_tui(True, a="1"))
    cli.main([])
    data = json.loads((in_tmp / OUTPUT_PATH).read_text(encoding="utf-8"))
    assert data == {"a": "1"}
    assert "Wrote 1 pairs" in capsys.readouterr().out


def test_decline_writes_nothing(monkeypatch, in_tmp):
    monkeypatch.setattr(tui, "main", fake_tui(False, a="1"))
    cli.main([])
    assert not (in_tmp / OUTPUT_PATH).exists()


def test_write_failure_exits_non_zero(monkeypatch, in_tmp, capsys):
    (in_tmp / OUTPUT_PATH).mkdir()
    monkeypatch.setattr(tui, "main", fake_tui(True, a="1"))
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code != 0
    assert OUTPUT_PATH in str(exc.value.code)
    # the exit message is the only report; nothing else goes to stderr
    assert capsys.readouterr().err == ""


def test_keyboard_interrupt_exits_130(monkeypatch, in_tmp):
    def interrupted():
        raise KeyboardInterrupt

    monkeypatch.setattr(tui, "main", interrupted)
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 130
    assert not (in_tmp / OUTPUT_PATH).exists()


def test_log_file_gets_debug(monkeypatch, in_tmp):
    monkeypatch.setattr(tui, "main", fake_tui(False))
    log = in_tmp / "kvjson.log"
    cli.main(["--log-file", str(log)])
    for h in logging.getLogger("kvjson").handlers:
        h.flush()
    assert "quit without writing" in log.read_text(encoding="utf-8")


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out
