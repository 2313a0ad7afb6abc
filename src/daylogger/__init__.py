from .config import Settings, setup_logging
from .errors import (
    DaylogError,
    LogDirectoryError,
    LogReadError,
    LogWriteError,
    MissingPropertyValueError,
)
from .file_store import DailyFileStore
from .header import HostMetadata, UserProfile
from .logger import DayLogger, create_logger
from .record import LogLevel, LogRecord, format_record

__all__ = [
    "DailyFileStore",
    "DayLogger",
    "DaylogError",
    "HostMetadata",
    "LogDirectoryError",
    "LogLevel",
    "LogReadError",
    "LogRecord",
    "LogWriteError",
    "MissingPropertyValueError",
    "Settings",
    "UserProfile",
    "create_logger",
    "format_record",
    "setup_logging",
]
