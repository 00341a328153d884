"""Thread paths and date keys.

Thread documents live at::

    <ideas-root>/<YYYY>/<MM>/<YYYY-MM-DD>-<slug>-<base36 ms timestamp>.md

The path carries the thread's creation day and a human title. Entry
timestamps carry their own day. The two are separate grouping keys:
``date_key_from_path`` reads the first, ``date_key`` computes the second.
"""

from __future__ import annotations

import posixpath
import re
import time
from collections.abc import Callable
from datetime import date, datetime, timezone, tzinfo

IDEAS_ROOT = ".ideas"

_SLUG_RE = re.compile(r"[^\w\u4e00-\u9fa5]+", re.ASCII)
_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-", re.ASCII)
_SUFFIX_RE = re.compile(r"-[a-z0-9]+$", re.ASCII)
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

SLUG_MAX_LENGTH = 30
DEFAULT_SLUG = "thread"
UNTITLED = "Untitled"


# -- Slugs and paths ----------------------------------------------------------


def slugify(title: str | None) -> str:
    """Lowercase the title and collapse every run outside ASCII word characters and CJK to '-'."""
    if not title:
        return DEFAULT_SLUG
    slug = _SLUG_RE.sub("-", title.lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH] or DEFAULT_SLUG


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def path_for_new_thread(
    title: str | None,
    day: date | datetime | None = None,
    *,
    root: str = IDEAS_ROOT,
    timestamp_ms: int | None = None,
) -> str:
    """Build the storage path for a thread created on ``day``.

    Args:
        title: Thread title; slugified into the filename.
        day: Creation day. Defaults to today in local time.
        root: Ideas root folder.
        timestamp_ms: Uniqueness suffix source. Defaults to the current epoch milliseconds.

    Returns:
        Relative path such as ``.ideas/2024/01/2024-01-15-first-thought-lrgx5k2a.md``.
    """
    if day is None:
        day = date.today()
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    year = f"{day.year:04d}"
    month = f"{day.month:02d}"
    filename = f"{year}-{month}-{day.day:02d}-{slugify(title)}-{to_base36(timestamp_ms)}.md"
    return posixpath.join(root.rstrip("/"), year, month, filename) if root else posixpath.join(year, month, filename)


def date_key_from_path(path: str) -> str | None:
    """Return the first ``YYYY-MM-DD`` found anywhere in the path."""
    match = _DATE_RE.search(path or "")
    if not match:
        return None
    return f"{match.group(1)}-{match.group(2)}-{match.group(3)}"


def title_from_path(path: str) -> str:
    """Derive a display title from the thread filename."""
    filename = posixpath.basename(path or "")
    stem = filename[:-3] if filename.endswith(".md") else filename
    stem = _DATE_PREFIX_RE.sub("", stem)
    stem = _SUFFIX_RE.sub("", stem)
    return stem or UNTITLED


def retitle_path(path: str, title: str) -> str:
    """Return ``path`` with its slug replaced, keeping folder, date prefix and suffix."""
    folder, filename = posixpath.split(path)
    stem = filename[:-3] if filename.endswith(".md") else filename
    prefix = _DATE_PREFIX_RE.match(stem)
    suffix = _SUFFIX_RE.search(stem[prefix.end() :] if prefix else stem)
    new_name = f"{prefix.group(0) if prefix else ''}{slugify(title)}{suffix.group(0) if suffix else ''}.md"
    return posixpath.join(folder, new_name) if folder else new_name


# -- Timestamps ---------------------------------------------------------------


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format as UTC ISO-8601 with millisecond precision and a 'Z' suffix."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def now_iso(clock: Callable[[], datetime] = utc_now) -> str:
    return format_timestamp(clock())


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are read as host local time. Returns None when the value
    cannot be parsed.
    """
    if value is None or value == "":
        return None
    try:
        moment = value if isinstance(value, datetime) else datetime.fromisoformat(str(value).strip())
        if moment.tzinfo is None:
            moment = moment.astimezone()
    except (ValueError, OverflowError, OSError):
        return None
    return moment


def date_key(value: str | datetime | date | None, tz: tzinfo | None = None) -> str | None:
    """Return the ``YYYY-MM-DD`` calendar day of a timestamp in ``tz``.

    ``tz`` defaults to the host's local zone. Plain dates pass through.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.isoformat()
    moment = parse_timestamp(value)
    if moment is None:
        return None
    try:
        return moment.astimezone(tz).date().isoformat()
    except (OverflowError, OSError):
        return None
