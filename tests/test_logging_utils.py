import json

import pytest

from mazegen import logging_utils
from mazegen.logging_utils import get_logger, set_level


def test_key_value_line(capsys):
    get_logger("maze.test").info(event="hello", attempts=3, reason="too few")
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=hello" in out
    assert "attempts=3" in out
    assert "reason=too_few" in out
    assert "logger=maze.test" in out


def test_none_fields_dropped(capsys):
    get_logger("maze.test").info(event="x", seed=None)
    assert "seed=" not in capsys.readouterr().out


def test_debug_suppressed_at_info(capsys):
    log = get_logger("maze.test")
    log.debug(event="hidden")
    log.trace(False, event="hidden_trace")
    log.trace(True, event="shown_trace")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "event=shown_trace" in out


def test_errors_go_to_stderr(capsys):
    get_logger("maze.test").error(event="boom")
    captured = capsys.readouterr()
    assert "event=boom" in captured.err
    assert captured.out == ""


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    get_logger("maze.test").warn(event="budget", attempts=2)
    rec = json.loads(capsys.readouterr().out)
    assert rec["level"] == "warn"
    assert rec["event"] == "budget"
    assert rec["attempts"] == 2


def test_set_level(capsys):
    set_level("debug")
    get_logger("maze.test").debug(event="now_visible")
    assert "event=now_visible" in capsys.readouterr().out
    with pytest.raises(ValueError):
        set_level("verbose")


def test_logger_cache():
    assert get_logger("a.b") is get_logger("a.b")
