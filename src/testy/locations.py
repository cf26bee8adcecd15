"""Find the user code location responsible for a failure or an error."""

from __future__ import annotations

import traceback
from pathlib import Path
from types import TracebackType

_PACKAGE_DIR = Path(__file__).resolve().parent


def _is_framework_frame(filename: str) -> bool:
    try:
        path = Path(filename).resolve()
    except (OSError, ValueError):
        return False
    return path == _PACKAGE_DIR or _PACKAGE_DIR in path.parents


def _format(frame: traceback.FrameSummary) -> str:
    return f"{frame.filename}:{frame.lineno}"


def caller_location() -> str | None:
    """Location of the innermost frame on the current stack outside this package."""
    for frame in reversed(traceback.extract_stack()):
        if not _is_framework_frame(frame.filename):
            return _format(frame)
    return None


def exception_location(tb: TracebackType | None) -> str | None:
    """Location of the innermost traceback frame outside this package."""
    frames = traceback.extract_tb(tb)
    for frame in reversed(frames):
        if not _is_framework_frame(frame.filename):
            return _format(frame)
    return _format(frames[-1]) if frames else None
