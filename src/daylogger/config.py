"""
Configuration for daylogger.

Values come from the environment. Settings.from_env() loads a local `.env`
file first (existing variables win) and takes a fresh snapshot on each call,
so nothing touches os.environ until a host asks for its settings.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

LOG_DIRECTORY_NAME = "Logs"
DEFAULT_QUEUE_SIZE = 1000
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def default_log_dir() -> Path:
    """`Logs` under the user's document folder."""
    return Path.home() / "Documents" / LOG_DIRECTORY_NAME


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_queue_size() -> int:
    try:
        return max(1, int(os.getenv("DAYLOG_QUEUE_SIZE", str(DEFAULT_QUEUE_SIZE))))
    except ValueError:
        return DEFAULT_QUEUE_SIZE


def _env_log_level() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    # Validate LOG_LEVEL
    if not isinstance(getattr(logging, level, None), int):
        return "INFO"
    return level


class Settings:
    """Snapshot of the daylogger environment configuration."""

    def __init__(
        self,
        log_dir: Path = None,
        app_name: str = None,
        app_version: str = None,
        build_number: str = None,
        bundle_id: str = None,
        strict: bool = __debug__,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        log_level: str = "INFO",
    ):
        self.log_dir = Path(log_dir) if log_dir else default_log_dir()
        self.app_name = app_name
        self.app_version = app_version
        self.build_number = build_number
        self.bundle_id = bundle_id
        self.strict = strict
        self.queue_size = queue_size
        self.log_level = log_level

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        log_dir = os.getenv("DAYLOG_DIR")
        return cls(
            log_dir=Path(log_dir).expanduser() if log_dir else None,
            app_name=os.getenv("DAYLOG_APP_NAME") or None,
            app_version=os.getenv("DAYLOG_APP_VERSION") or None,
            build_number=os.getenv("DAYLOG_BUILD_NUMBER") or None,
            bundle_id=os.getenv("DAYLOG_BUNDLE_ID") or None,
            strict=_env_flag("DAYLOG_STRICT", "true" if __debug__ else "false"),
            queue_size=_env_queue_size(),
            log_level=_env_log_level(),
        )


def setup_logging(level: str = None) -> None:
    """Configure a console handler for the live sink and diagnostics."""
    level = (level or Settings.from_env().log_level).upper()
    if not isinstance(getattr(logging, level, None), int):
        level = "INFO"

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
