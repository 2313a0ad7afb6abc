"""
Log levels, log records and the record text format.

A formatted record is one header line followed by an optional property
block:

    2024-01-01 09:30:00.125 [Error] [app.py] [42] [MainThread] save -> disk full
    PROPERTIES ¬
    code: "28"

Properties are rendered in the mapping's own iteration order.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Mapping, Optional

from .clock import format_timestamp, parse_timestamp
from .errors import MissingPropertyValueError

PROPERTIES_MARKER = "PROPERTIES ¬ "
UNKNOWN_CONTEXT = "unknown"


class LogLevel(IntEnum):
    """Severity of a record. Ordered info < debug < warning < error."""

    INFO = 0
    DEBUG = 1
    WARNING = 2
    ERROR = 3

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def stdlib_level(self) -> int:
        """Matching level for the stdlib logging module."""
        return _STDLIB_LEVELS[self]

    def at_least(self, threshold: "LogLevel") -> bool:
        """True if this level is as severe as `threshold` or more."""
        return self >= threshold

    @classmethod
    def all(cls) -> list["LogLevel"]:
        return list(cls)

    @classmethod
    def from_display_name(cls, name: str) -> "LogLevel":
        for level in cls:
            if level.display_name == name:
                return level
        raise ValueError(f"Unknown log level: {name!r}")


_STDLIB_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def source_file_name(file_path: str) -> str:
    """Final `/`-separated component of `file_path`."""
    if not file_path:
        return ""
    return file_path.split("/")[-1]


@dataclass(frozen=True)
class LogRecord:
    """One log call, captured at the call site."""

    timestamp: datetime
    level: LogLevel
    message: str
    file_name: str = ""
    line: int = 0
    function_name: str = ""
    call_context: Optional[str] = None
    properties: Optional[Mapping[str, Any]] = field(default=None)

    def validate(self) -> None:
        """Raise MissingPropertyValueError if any property value is None."""
        for key, value in (self.properties or {}).items():
            if value is None:
                raise MissingPropertyValueError(key)

    def format(self) -> str:
        return format_record(self)


def format_record(record: LogRecord) -> str:
    """Build the text of one record, without the trailing separator."""
    context = record.call_context or UNKNOWN_CONTEXT
    text = (
        f"{format_timestamp(record.timestamp)}"
        f" [{record.level.display_name}]"
        f" [{source_file_name(record.file_name)}]"
        f" [{record.line}]"
        f" [{context}]"
        f" {record.function_name}"
        f" -> {record.message}"
    )

    if record.properties:
        record.validate()
        text += f"\n{PROPERTIES_MARKER}\n"
        for key, value in record.properties.items():
            text += f'{key}: "{value}"\n'

    return text


_HEADER_LINE = re.compile(
    r"^(?P<timestamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3})"
    r" \[(?P<level>[A-Za-z]+)\]"
    r" \[(?P<file_name>[^\]]*)\]"
    r" \[(?P<line>-?\d+)\]"
    r" \[(?P<context>[^\]]*)\]"
    r" (?P<function_name>.*?)"
    r" -> (?P<message>.*)$"
)


@dataclass(frozen=True)
class ParsedRecord:
    timestamp: datetime
    level: LogLevel
    file_name: str
    line: int
    call_context: str
    function_name: str
    message: str


def parse_record_line(line: str) -> Optional[ParsedRecord]:
    """Parse the first line of a formatted record. None if it doesn't match.

    Messages containing newlines can only be recovered up to the first one.
    """
    match = _HEADER_LINE.match(line)
    if not match:
        return None
    try:
        level = LogLevel.from_display_name(match["level"])
    except ValueError:
        return None
    return ParsedRecord(
        timestamp=parse_timestamp(match["timestamp"]),
        level=level,
        file_name=match["file_name"],
        line=int(match["line"]),
        call_context=match["context"],
        function_name=match["function_name"],
        message=match["message"],
    )
