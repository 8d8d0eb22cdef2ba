"""Minimal structured logging helper.

Provides a lightweight wrapper around print() to emit key=value pairs with a
timestamp and level. The generator is a pure in-process function, so there is
no handler configuration to manage; callers only need parseable lines.

Usage:
    from mazegen.logging_utils import get_logger
    _log = get_logger("maze.generator")
    _log.info(event="generation_complete", attempts=3)

All non-str key/value values are str()'d. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZEGEN_LOG_LEVEL", "info"), 20)
JSON_MODE = os.getenv("MAZEGEN_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


def set_level(name: str) -> None:
    """Change the process-wide threshold (e.g. from a CLI flag)."""
    global CURRENT_LEVEL
    if name not in LEVELS:
        raise ValueError(f"unknown log level {name!r}")
    CURRENT_LEVEL = LEVELS[name]


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "mazegen"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)

    def trace(self, promote: bool, **fields):
        """Debug-level event, raised to info when ``promote`` is set (a config debug flag)."""
        self._log("info" if promote else "debug", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("mazegen")
