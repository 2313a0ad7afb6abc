"""
Timestamp formatting for log records and daily file names.

Naive datetimes are taken to be local time; aware ones are converted to the
local time zone at call time. Nothing here holds state, so every function is
safe to call from any thread.
"""

from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def _local(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant
    return instant.astimezone()


def now() -> datetime:
    """Current local time."""
    return datetime.now()


def format_timestamp(instant: datetime) -> str:
    """Render `instant` as ``yyyy-MM-dd HH:mm:ss.SSS`` in local time."""
    local = _local(instant)
    return f"{local.strftime(TIMESTAMP_FORMAT)}.{local.microsecond // 1000:03d}"


def format_date(instant: datetime) -> str:
    """Render `instant` as ``yyyy-MM-dd`` in local time."""
    return _local(instant).strftime(DATE_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Inverse of format_timestamp. Returns a naive local datetime.

    Raises ValueError if `text` is not in the record timestamp format.
    """
    return datetime.strptime(text, TIMESTAMP_FORMAT + ".%f")
