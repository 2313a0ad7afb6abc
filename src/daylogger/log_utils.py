"""Shared locks for thread-safe daily log file writes.

Every store writing into the same log directory must hold that directory's
lock while it checks for, writes, reads or removes files there, so two
writers can never both see a missing file and both write a header.
"""

import os
import threading
from pathlib import Path

_registry_lock = threading.Lock()
_directory_locks: dict[str, threading.Lock] = {}


def lock_for(directory: Path) -> threading.Lock:
    """Return the single write lock for `directory`."""
    key = os.path.normcase(os.path.abspath(directory))
    with _registry_lock:
        lock = _directory_locks.get(key)
        if lock is None:
            lock = _directory_locks[key] = threading.Lock()
        return lock
