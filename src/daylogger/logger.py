"""
Logger facade - the public entry point of daylogger.

Every call is formatted and sent to the live sink. Calls above info level are
also appended to today's file in the log directory. The info/debug/warning/
error methods capture the call site on the caller's thread and hand the rest
to a background worker, so callers never wait on file I/O.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from .clock import now
from .config import Settings
from .context import SourceLocation, caller_location, current_call_context
from .dispatch import BackgroundDispatcher
from .errors import LogDirectoryError, LogReadError, LogWriteError, MissingPropertyValueError
from .file_store import DailyFileStore
from .header import HostMetadata, UserProfile
from .record import LogLevel, LogRecord, format_record
from .sink import DEFAULT_CATEGORY, SystemLogSink

logger = logging.getLogger("daylogger")


class DayLogger:
    """Formats log calls, emits them live and persists them per day.

    Args:
        store: Daily file store that owns the log directory
        sink: Live sink; defaults to the stdlib logging module
        dispatcher: Background worker for the async entry points
        strict: Raise on contract violations instead of logging them;
            on by default unless Python runs with -O
        clock: Returns the current time; injectable for tests
        context_provider: Returns the calling thread/task name, or None
    """

    def __init__(
        self,
        store: DailyFileStore,
        sink: SystemLogSink = None,
        dispatcher: BackgroundDispatcher = None,
        strict: bool = __debug__,
        clock: Callable[[], datetime] = now,
        context_provider: Callable[[], Optional[str]] = current_call_context,
    ):
        self.store = store
        self.sink = sink or SystemLogSink()
        self.dispatcher = dispatcher or BackgroundDispatcher()
        self.strict = strict
        self.clock = clock
        self.context_provider = context_provider

    @property
    def profile(self) -> UserProfile:
        return self.store.profile

    def set_profile(self, user_id: str = "", name: str = "", phone: str = "", extra: dict = None) -> None:
        """Record the current user for headers of files created from now on."""
        self.store.profile.set(user_id, name=name, phone=phone, extra=extra)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def _checked_properties(self, properties: Optional[Mapping[str, Any]]) -> Optional[dict]:
        if properties is None:
            return None
        missing = [key for key, value in properties.items() if value is None]
        if missing:
            if self.strict:
                raise MissingPropertyValueError(missing[0])
            logger.warning(f"Dropping event properties with no value: {missing}")
        return {key: value for key, value in properties.items() if value is not None}

    @staticmethod
    def _location(file_name: str, line: int, function_name: str) -> SourceLocation:
        if file_name is None or line is None or function_name is None:
            here = caller_location()
            return SourceLocation(
                here.file_name if file_name is None else file_name,
                here.line if line is None else line,
                here.function_name if function_name is None else function_name,
            )
        return SourceLocation(file_name, line, function_name)

    def _make_record(
        self,
        message: str,
        properties: Optional[Mapping[str, Any]],
        level: LogLevel,
        location: SourceLocation,
        call_context: str = None,
    ) -> LogRecord:
        if call_context is None:
            call_context = self.context_provider()

        return LogRecord(
            timestamp=self.clock(),
            level=LogLevel(level),
            message=str(message),
            file_name=location.file_name,
            line=location.line,
            function_name=location.function_name,
            call_context=call_context,
            properties=self._checked_properties(properties),
        )

    def _write(self, record: LogRecord, category: str = DEFAULT_CATEGORY) -> None:
        text = format_record(record)
        self.sink.emit(record.level, text, category)

        if record.level == LogLevel.INFO:
            return
        try:
            self.store.append(record)
        except (LogDirectoryError, LogWriteError) as e:
            logger.warning(f"Unable to write log record: {e}")

    def log(
        self,
        message: str,
        properties: Mapping[str, Any] = None,
        level: LogLevel = LogLevel.INFO,
        file_name: str = None,
        line: int = None,
        column: int = 0,
        function_name: str = None,
        call_context: str = None,
        category: str = DEFAULT_CATEGORY,
    ) -> None:
        """Format, emit and (above info) persist one record on this thread.

        The call site is taken from the caller's frame for any of
        file_name/line/function_name left as None. `column` is accepted for
        call-site parity and not printed.
        """
        location = self._location(file_name, line, function_name)
        record = self._make_record(message, properties, level, location, call_context)
        self._write(record, category)

    def _submit(self, level: LogLevel, message: str, properties, location: SourceLocation, call_context, category) -> None:
        # Everything tied to the caller is captured before leaving its thread
        record = self._make_record(message, properties, level, location, call_context)
        if not self.dispatcher.submit(self._write, record, category):
            # Closed logger: write on the caller's thread rather than lose the call
            logger.debug("Dispatcher closed, writing log record synchronously")
            self._write(record, category)

    def info(self, message: str, properties: Mapping[str, Any] = None, *, file_name: str = None,
             line: int = None, column: int = 0, function_name: str = None,
             call_context: str = None, category: str = DEFAULT_CATEGORY) -> None:
        self._submit(LogLevel.INFO, message, properties,
                     self._location(file_name, line, function_name), call_context, category)

    def debug(self, message: str, properties: Mapping[str, Any] = None, *, file_name: str = None,
              line: int = None, column: int = 0, function_name: str = None,
              call_context: str = None, category: str = DEFAULT_CATEGORY) -> None:
        self._submit(LogLevel.DEBUG, message, properties,
                     self._location(file_name, line, function_name), call_context, category)

    def warning(self, message: str, properties: Mapping[str, Any] = None, *, file_name: str = None,
                line: int = None, column: int = 0, function_name: str = None,
                call_context: str = None, category: str = DEFAULT_CATEGORY) -> None:
        self._submit(LogLevel.WARNING, message, properties,
                     self._location(file_name, line, function_name), call_context, category)

    def error(self, message: str, properties: Mapping[str, Any] = None, *, file_name: str = None,
              line: int = None, column: int = 0, function_name: str = None,
              call_context: str = None, category: str = DEFAULT_CATEGORY) -> None:
        self._submit(LogLevel.ERROR, message, properties,
                     self._location(file_name, line, function_name), call_context, category)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def log_file_path(self) -> str:
        """Path of today's file. The file may not exist yet."""
        return str(self.store.path_for(self.clock()))

    def log_print(self) -> str:
        """Current contents of today's file, or "" if there is none."""
        try:
            return self.store.read_back(self.clock())
        except LogReadError as e:
            logger.warning(f"Unable to read log file: {e}")
            return ""

    def delete_log_dir(self) -> None:
        self.store.delete_all()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self, timeout: float = None) -> bool:
        """Wait for queued log calls to finish. False on timeout."""
        return self.dispatcher.flush(timeout)

    def close(self) -> None:
        self.dispatcher.close()

    def __enter__(self) -> "DayLogger":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def create_logger(config: Settings = None, metadata: HostMetadata = None,
                  profile: UserProfile = None, sink: SystemLogSink = None) -> DayLogger:
    """Build a DayLogger wired from configuration and the host environment."""
    config = config or Settings.from_env()
    store = DailyFileStore(
        config.log_dir,
        metadata=metadata or HostMetadata.from_host(config),
        profile=profile,
    )
    return DayLogger(
        store,
        sink=sink or SystemLogSink(config.bundle_id or "daylogger"),
        dispatcher=BackgroundDispatcher(maxsize=config.queue_size),
        strict=config.strict,
    )
