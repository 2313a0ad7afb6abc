"""
Daily File Store - one plain-text log file per calendar day.

For each append the store:
1. Picks the file `<log_dir>/<yyyy-MM-dd>.txt` for the record's date
2. Creates the log directory if it is missing
3. Writes the header block first if the file does not exist yet
4. Appends the formatted record followed by a blank line

Steps 2-4 run under the directory's shared lock, so concurrent appends are
totally ordered and a file never gets two headers.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from .clock import format_date
from .errors import LogDirectoryError, LogReadError, LogWriteError
from .header import HostMetadata, UserProfile, build_header
from .log_utils import lock_for
from .record import LogRecord, format_record

logger = logging.getLogger("daylogger")

RECORD_SEPARATOR = "\n\n"


class DailyFileStore:
    """Owns the log directory and every daily file in it."""

    def __init__(self, log_dir: Path, metadata: HostMetadata = None, profile: UserProfile = None):
        self.log_dir = Path(log_dir)
        self.metadata = metadata or HostMetadata()
        self.profile = profile or UserProfile()
        self._lock = lock_for(self.log_dir)

    def path_for(self, when: datetime) -> Path:
        """File path for the local date of `when`. Never touches the disk."""
        return self.log_dir / f"{format_date(when)}.txt"

    def ensure_directory(self) -> None:
        """Create the log directory. Already existing counts as success."""
        if self.log_dir.is_dir():
            return
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LogDirectoryError(self.log_dir, e) from e
        logger.info(f"Log directory created: {self.log_dir}")

    def append(self, record: LogRecord) -> Path:
        """Append `record` to the file for its date and return the file path.

        Raises LogDirectoryError or LogWriteError. A record that fails to
        format raises before anything is written.
        """
        log_file = self.path_for(record.timestamp)
        content = format_record(record) + RECORD_SEPARATOR

        with self._lock:
            self.ensure_directory()
            if not log_file.exists():
                header = build_header(
                    format_date(record.timestamp), self.metadata, self.profile.snapshot()
                )
                content = header + content
                logger.info(f"Log file created: {log_file.name}")

            try:
                with log_file.open("a", encoding="utf-8") as f:
                    f.write(content)
            except OSError as e:
                raise LogWriteError(log_file, e) from e

        return log_file

    def read_back(self, when: datetime) -> str:
        """Full contents of the file for the date of `when`, or "" if absent."""
        log_file = self.path_for(when)
        with self._lock:
            if not log_file.exists():
                return ""
            try:
                return log_file.read_text(encoding="utf-8")
            except OSError as e:
                raise LogReadError(log_file, e) from e

    def delete_all(self) -> None:
        """Remove the log directory and everything in it. Errors are ignored."""
        with self._lock:
            existed = self.log_dir.exists()
            shutil.rmtree(self.log_dir, ignore_errors=True)
            removed = existed and not self.log_dir.exists()
        if removed:
            logger.info(f"Log directory removed: {self.log_dir}")
