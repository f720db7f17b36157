"""Levelled logging to stdout and an optional append-only file."""

from __future__ import annotations

import enum
import inspect
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from types import FrameType
from typing import IO, Any


class LogLevel(enum.IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    CRITICA = 3
    WARN = 4
    ERROR = 5
    FATAL = 6


def log_level_name(level: int) -> str:
    """Return the lower-case name of a level, or "unknown"."""
    try:
        return LogLevel(level).name.lower()
    except ValueError:
        return "unknown"


def log_level_from_name(name: str) -> LogLevel:
    """Return the level with exactly this lower-case name; INFO otherwise."""
    for level in LogLevel:
        if level.name.lower() == name:
            return level
    return LogLevel.INFO


def _initial_level() -> LogLevel:
    name = os.environ.get("TRRLOG_LEVEL")
    return log_level_from_name(name) if name else LogLevel.DEBUG


@dataclass
class _State:
    max_level: LogLevel
    file: IO[str] | None = None


_state = _State(max_level=_initial_level())


def set_log_file(path: str | os.PathLike[str] | None) -> None:
    """Append every record to ``path`` from now on; ``None`` stops file logging."""
    if _state.file is not None:
        _state.file.close()
    _state.file = None if path is None else open(path, "a", encoding="utf-8")


def set_log_level(level: int) -> None:
    """Set the lowest level that is printed to stdout."""
    _state.max_level = LogLevel(level)


def _caller() -> FrameType | None:
    frame = inspect.currentframe()
    if frame is None or frame.f_back is None:
        return None
    return frame.f_back.f_back


def _output(level: LogLevel, message: str, frame: FrameType | None) -> str:
    now = datetime.now().astimezone()
    stamp = f"{now:%Y-%m-%d %H:%M:%S.%f} {now.tzname()}"
    if frame is None:
        where = "<unknown>:0"
    else:
        where = f"{frame.f_code.co_filename}:{frame.f_lineno}"
    line = f"{stamp} {where} [{log_level_name(level)}] {message}"
    if _state.file is not None:
        _state.file.write(line + "\n")
        _state.file.flush()
    if level >= _state.max_level:
        sys.stdout.write(line + "\n")
    return line


def _log(level: int, fmt: str, args: tuple[Any, ...], frame: FrameType | None) -> str:
    return _output(LogLevel(level), fmt.format(*args), frame)


def generic_log(level: int, fmt: str, *args: Any) -> str:
    """Format ``fmt`` with ``args`` and log it at ``level``; return the record."""
    return _log(level, fmt, args, _caller())


def log_trace(fmt: str, *args: Any) -> str:
    return _log(LogLevel.TRACE, fmt, args, _caller())


def log_debug(fmt: str, *args: Any) -> str:
    return _log(LogLevel.DEBUG, fmt, args, _caller())


def log_info(fmt: str, *args: Any) -> str:
    return _log(LogLevel.INFO, fmt, args, _caller())


def log_critica(fmt: str, *args: Any) -> str:
    return _log(LogLevel.CRITICA, fmt, args, _caller())


def log_warn(fmt: str, *args: Any) -> str:
    return _log(LogLevel.WARN, fmt, args, _caller())


def log_error(fmt: str, *args: Any) -> str:
    return _log(LogLevel.ERROR, fmt, args, _caller())


def log_fatal(fmt: str, *args: Any) -> str:
    return _log(LogLevel.FATAL, fmt, args, _caller())