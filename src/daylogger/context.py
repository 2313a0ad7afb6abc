"""
Call-site and call-context capture.

Callers may pass file, line and function explicitly. When they don't, the
facade walks the stack the way logging.Logger.findCaller does and takes the
first frame outside this package.
"""

import asyncio
import os
import sys
import threading
from typing import NamedTuple, Optional

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class SourceLocation(NamedTuple):
    file_name: str
    line: int
    function_name: str
    column: int = 0


UNKNOWN_LOCATION = SourceLocation("", 0, "")


def _is_internal(filename: str) -> bool:
    return os.path.dirname(os.path.abspath(filename)) == _PACKAGE_DIR


def caller_location() -> SourceLocation:
    """Location of the nearest frame outside daylogger."""
    frame = sys._getframe(1)
    while frame is not None and _is_internal(frame.f_code.co_filename):
        frame = frame.f_back
    if frame is None:
        return UNKNOWN_LOCATION
    code = frame.f_code
    return SourceLocation(code.co_filename.replace(os.sep, "/"), frame.f_lineno, code.co_name)


def current_call_context() -> Optional[str]:
    """Name of the running thread, plus the asyncio task if there is one.

    Returns None when nothing can be resolved; the formatter prints a
    placeholder in that case.
    """
    name = threading.current_thread().name
    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    if task is not None:
        name = f"{name}/{task.get_name()}"
    return name or None
