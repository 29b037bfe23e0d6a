"""Minimal structured logging helper.

Emits one ``key=value`` line (or a JSON object) per record with a timestamp and
level. Records go to stderr so command output on stdout stays machine readable.

Usage:
    from crawler.logging_utils import get_logger
    log = get_logger("crawler.dungeon")
    log.info(event="dungeon_generated", seed=42, rooms=6)

Environment:
    CRAWLER_LOG_LEVEL   debug | info | warn | error (default: info)
    CRAWLER_LOG_JSON    1/true/yes/on to emit JSON lines

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")

CURRENT_LEVEL = LEVELS.get(os.getenv("CRAWLER_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("CRAWLER_LOG_JSON", "0") in _TRUTHY


def set_level(name: str) -> None:
    global CURRENT_LEVEL
    if name not in LEVELS:
        raise ValueError(f"unknown log level {name!r}; expected one of {sorted(LEVELS)}")
    CURRENT_LEVEL = LEVELS[name]


def _format(level: str, **fields) -> str:
    ts = int(time.time())
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = ts
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={ts}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str):
        self.name = name

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("crawler")
