"""
Exception types for daylogger.

I/O failures are wrapped in typed errors so the facade can tell them apart
from caller bugs: the former are logged and swallowed, the latter surface.
"""


class DaylogError(Exception):
    """Base class for every error raised by daylogger."""


class LogDirectoryError(DaylogError):
    """Raised when the log directory cannot be created."""

    def __init__(self, directory, cause: OSError = None):
        self.directory = directory
        self.cause = cause
        super().__init__(f"Unable to create log directory {directory}: {cause}")


class LogWriteError(DaylogError):
    """Raised when a record cannot be appended to a daily file."""

    def __init__(self, path, cause: OSError = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to write {path}: {cause}")


class LogReadError(DaylogError):
    """Raised when a daily file exists but cannot be read back."""

    def __init__(self, path, cause: OSError = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to read {path}: {cause}")


class MissingPropertyValueError(DaylogError, ValueError):
    """A property was declared with no value. This is a caller bug."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Event property cannot be null: {key!r}")
