"""Formatted log output with per-domain debug filtering."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from enum import IntEnum
from typing import MutableMapping, Optional, TextIO

LOG_DOMAINS = (
    "partup partup-config partup-emmc partup-file partup-mount "
    "partup-package partup-utils"
)
DEBUG_ENV = "G_MESSAGES_DEBUG"
MESSAGE_LEVEL_NUM = 25


class LogLevel(IntEnum):
    """Severity of a log message; lower values are more severe."""

    ERROR = 1 << 2
    CRITICAL = 1 << 3
    WARNING = 1 << 4
    MESSAGE = 1 << 5
    INFO = 1 << 6
    DEBUG = 1 << 7


_COLORS = {
    LogLevel.ERROR: "1;35",
    LogLevel.CRITICAL: "1;31",
    LogLevel.WARNING: "1;33",
    LogLevel.MESSAGE: "1;34",
    LogLevel.INFO: "1;36",
    LogLevel.DEBUG: "1;32",
}
_UNKNOWN_COLOR = "1;37"


def format_level(level: int, color: bool) -> str:
    """Return the printable name of ``level``, optionally colored."""
    try:
        known = LogLevel(level)
    except ValueError:
        name, code = "UNKNOWN", _UNKNOWN_COLOR
    else:
        name, code = known.name, _COLORS[known]
    if color:
        return f"\033[{code}m{name}\033[0m"
    return name


def _format_domain(domain: str, color: bool) -> str:
    if color:
        return f"\033[0;37m{domain}\033[0m"
    return domain


class LogWriter:
    """Writes log lines to a stream, filtered by level and debug domains."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        output_level: LogLevel = LogLevel.INFO,
        environ: Optional[MutableMapping[str, str]] = None,
        color: Optional[bool] = None,
    ) -> None:
        self._stream = stream
        self.output_level = output_level
        self.environ = os.environ if environ is None else environ
        self._color = color

    @property
    def stream(self) -> TextIO:
        return sys.stdout if self._stream is None else self._stream

    def _use_color(self, stream: TextIO) -> bool:
        if self._color is not None:
            return self._color
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def write(
        self,
        level: LogLevel,
        domain: Optional[str],
        message: Optional[str],
    ) -> bool:
        """Write one message; return whether it passed the filters."""
        domain = domain or "(NULL domain)"
        message = "(NULL message)" if message is None else message
        debug_domains = self.environ.get(DEBUG_ENV)

        if level > self.output_level:
            return False
        if level == LogLevel.DEBUG and debug_domains and domain not in debug_domains:
            return False

        stream = self.stream
        color = self._use_color(stream)
        line = message
        if self.output_level > LogLevel.MESSAGE or level < LogLevel.MESSAGE:
            timestamp = datetime.now().strftime("%H:%M:%S.%f")
            line = (
                f"{timestamp} {format_level(level, color)} "
                f"{_format_domain(domain, color)}: {message}"
            )
        stream.write(f"{line}\n")
        stream.flush()
        return True

    def set_debug_domains(
        self,
        quiet: bool,
        debug: bool,
        debug_domains: Optional[str],
    ) -> None:
        """Choose the output level and the domains that print debug output."""
        domains = self.environ.get(DEBUG_ENV)

        if quiet:
            self.output_level = LogLevel.CRITICAL
        elif debug and not debug_domains:
            self.environ[DEBUG_ENV] = (
                f"{domains} {LOG_DOMAINS}" if domains is not None else LOG_DOMAINS
            )
            self.output_level = LogLevel.DEBUG
        elif debug_domains:
            parts = [domains] if domains else []
            parts.extend(debug_domains.split(","))
            self.environ[DEBUG_ENV] = " ".join(parts)
            self.output_level = LogLevel.DEBUG
        elif domains:
            self.output_level = LogLevel.DEBUG
        else:
            self.output_level = LogLevel.MESSAGE


def _level_from_record(levelno: int) -> LogLevel:
    if levelno >= logging.ERROR:
        return LogLevel.CRITICAL
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    if levelno >= MESSAGE_LEVEL_NUM:
        return LogLevel.MESSAGE
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


class _WriterHandler(logging.Handler):
    def __init__(self, writer: LogWriter) -> None:
        super().__init__(logging.DEBUG)
        self.writer = writer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.writer.write(
                _level_from_record(record.levelno), record.name, record.getMessage()
            )
        except Exception:
            self.handleError(record)


def init() -> LogWriter:
    """Route all log records through a new :class:`LogWriter` and return it."""
    logging.addLevelName(MESSAGE_LEVEL_NUM, "MESSAGE")
    writer = LogWriter()
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, _WriterHandler)]:
        root.removeHandler(handler)
    root.addHandler(_WriterHandler(writer))
    root.setLevel(logging.DEBUG)
    return writer