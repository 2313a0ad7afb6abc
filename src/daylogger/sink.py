"""Live sink: hands every formatted record to the stdlib logging module."""

import logging

from .record import LogLevel

DEFAULT_CATEGORY = "Default"


class SystemLogSink:
    """Emits records on `logging.getLogger(f"{subsystem}.{category}")`.

    Handlers, levels and output are whatever the host process configured.
    """

    def __init__(self, subsystem: str = "daylogger"):
        self.subsystem = subsystem

    def logger_for(self, category: str) -> logging.Logger:
        return logging.getLogger(f"{self.subsystem}.{category or DEFAULT_CATEGORY}")

    def emit(self, level: LogLevel, text: str, category: str = DEFAULT_CATEGORY) -> None:
        self.logger_for(category).log(level.stdlib_level, text)
