"""Error notification on the terminal and in the system log."""

from __future__ import annotations

import errno
import logging
import os
import sys
from enum import IntEnum

try:
    import syslog as _syslog
except ImportError:  # platforms without a system logger
    _syslog = None

_ESC = "\x1b"
_RESET = 0
_BRIGHT = 1

_fallback_logger = logging.getLogger("siegekit")


class Level(IntEnum):
    """Severity of a notice."""

    DEBUG = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3


class Color(IntEnum):
    """Terminal colours; UNCOLOR prints without escape sequences."""

    UNCOLOR = -1
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


_LABELS = {
    Level.DEBUG: ("debug", Color.BLUE, "[debug]"),
    Level.WARNING: ("alert", Color.GREEN, "[alert] "),
    Level.ERROR: ("error", Color.YELLOW, "[error]"),
    Level.FATAL: ("fatal", Color.RED, "[fatal]"),
}


def _priority(level: Level) -> int:
    if _syslog is None:
        return {
            Level.DEBUG: logging.WARNING,
            Level.WARNING: logging.WARNING,
            Level.ERROR: logging.ERROR,
            Level.FATAL: logging.CRITICAL,
        }[level]
    return {
        Level.DEBUG: _syslog.LOG_WARNING,
        Level.WARNING: _syslog.LOG_WARNING,
        Level.ERROR: _syslog.LOG_ERR,
        Level.FATAL: _syslog.LOG_CRIT,
    }[level]


def _render(fmt: str, args: tuple) -> str:
    return fmt % args if args else fmt


def _message(level: Level, message: str, error: int | None) -> str:
    """The message line, with the error text appended where it applies."""
    if not error or error == errno.ENOSYS or level == Level.DEBUG:
        return f"{message}\n"
    return f"{message}: {os.strerror(error)}\n"


def _current_error() -> int | None:
    """The errno of the OSError being handled, if any."""
    exc = sys.exc_info()[1]
    if isinstance(exc, OSError) and exc.errno:
        return exc.errno
    return None


def format_notice(level: Level, message: str, error: int | None = None) -> str:
    """Return the coloured terminal line for a notice.

    ``error`` is an errno value whose description is appended, except for
    debug notices and ENOSYS.
    """
    level = Level(level)
    name, color, _ = _LABELS[level]
    prefix = f"[{_ESC}[{_BRIGHT};{color + 30}m{name}{_ESC}[{_RESET}m]"
    return f"{prefix} {_message(level, message, error)}"


def notify(level: Level, fmt: str, *args: object) -> None:
    """Write a notice to standard error; a fatal notice exits with status 1."""
    level = Level(level)
    line = format_notice(level, _render(fmt, args), _current_error())
    sys.stdout.flush()
    sys.stderr.write(line)
    sys.stderr.flush()
    if level == Level.FATAL:
        raise SystemExit(1)


def log(level: Level, fmt: str, *args: object) -> None:
    """Send a notice to the system log; a fatal notice exits with status 1."""
    level = Level(level)
    _, _, label = _LABELS[level]
    text = f"{label} {_message(level, _render(fmt, args), _current_error())}"
    if _syslog is not None:
        _syslog.syslog(_priority(level), text)
    else:
        _fallback_logger.log(_priority(level), text.rstrip("\n"))
    if level == Level.FATAL:
        raise SystemExit(1)


def display(color: Color, fmt: str, *args: object) -> None:
    """Print a line to standard output, coloured unless ``color`` is UNCOLOR."""
    text = _render(fmt, args)
    color = int(color)
    if color == Color.UNCOLOR:
        sys.stdout.write(f"{text}\n")
    else:
        sys.stdout.write(f"{_ESC}[{_RESET};{color + 30}m{text}{_ESC}[{_RESET}m\n")


def open_log(program: str) -> None:
    """Open the system log under ``program`` with the process id attached."""
    if _syslog is not None:
        _syslog.openlog(program, _syslog.LOG_PID, _syslog.LOG_DAEMON)
    else:
        _fallback_logger.name = program


def close_log() -> None:
    """Close the system log."""
    if _syslog is not None:
        _syslog.closelog()