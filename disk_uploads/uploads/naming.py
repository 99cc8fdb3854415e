"""
Default filename sanitization and storage path generation.

Paths generated here look like `2019/04/04/235226-473000125-test.png`: the UTC
date as directories, then the time of day, a sub-second tick, and the
sanitized filename. The tick comes from a monotonic counter so two calls in
the same process never produce the same path for the same name.
"""

from __future__ import annotations

import re
import threading
import time
from datetime import datetime, timezone

_DISALLOWED_CHARACTERS = re.compile(r"[^A-Za-z0-9\-_.]")
_PATH_EDGES = re.compile(r"^[\s/]+|[\s/]+$")
_REPEATED_SEPARATORS = re.compile(r"/{2,}")

_NANOSECONDS_PER_SECOND = 1_000_000_000


def sanitize_filename(uploaded_as: str) -> str:
    """
    Keep all alphanumerics, dashes, underscores, and dots and replace every
    other character with a double underscore.

    Idempotent: sanitizing an already sanitized name is a no-op.

    Args:
        uploaded_as: The raw name that the file was uploaded with.
    """
    return _DISALLOWED_CHARACTERS.sub("__", f"{uploaded_as}".strip())


def generate_path_for_instant(instant: datetime, sanitized_uploaded_as: str, ticks: int) -> str:
    """
    Generate a path using the default layout for an instant in time.

    Args:
        instant: Moment the upload is stored at (converted to UTC).
        sanitized_uploaded_as: Already sanitized filename.
        ticks: Sub-second tick distinguishing uploads within the same second.
    """
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return (
        f"{instant.year:04d}/{instant.month:02d}/{instant.day:02d}/"
        f"{instant.hour:02d}{instant.minute:02d}{instant.second:02d}"
        f"-{ticks % _NANOSECONDS_PER_SECOND:09d}-{sanitized_uploaded_as}"
    )


class MonotonicTicker:
    """Strictly increasing nanosecond ticks backed by time.monotonic_ns()."""

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> int:
        with self._lock:
            now = time.monotonic_ns()
            if now <= self._last:
                now = self._last + 1
            self._last = now
            return now


_ticker = MonotonicTicker()


def generate_path(sanitized_uploaded_as: str) -> str:
    """
    Generate a path using the default layout for the current date and time.

    Args:
        sanitized_uploaded_as: Already sanitized filename.
    """
    return generate_path_for_instant(
        datetime.now(timezone.utc), sanitized_uploaded_as, _ticker.next()
    )


def trim_path(path: str) -> str:
    """Remove all whitespace and slashes from the beginning and end of a string."""
    return _PATH_EDGES.sub("", f"{path}")


def join_storage_path(prefix: str | None, relative_path: str) -> str:
    """
    Join a root prefix and a generated path into an absolute storage path.

    Both parts are trimmed of surrounding whitespace and slashes, joined with a
    single separator, and the result gets exactly one leading slash.

    >>> join_storage_path("/uploads/", "2019/04/04/235226-000000001-a.txt")
    '/uploads/2019/04/04/235226-000000001-a.txt'
    """
    segments = [trim_path(prefix or ""), trim_path(relative_path)]
    joined = "/".join(segment for segment in segments if segment)
    return "/" + _REPEATED_SEPARATORS.sub("/", joined)
