"""Date grouping and ordering for thread timelines.

Two views over the same thread collection:

- **by thread date**: each thread sits in the bucket of the day it started.
  Newest thread first inside a bucket; a thread's entries read
  chronologically.
- **by entry date**: each entry sits in the bucket of its own day, so one
  long-running thread can show up under many days. Newest entry first.

Buckets are always newest day first and carry a ``relative_date`` label
(``"today"``, ``"yesterday"`` or the date itself). Equal timestamps keep
the order of the input collection.

Everything here is pure: same threads, same ``now``, same result.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

from .models import Entry, Thread
from .paths import date_key, utc_now

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

TODAY = "today"
YESTERDAY = "yesterday"


@dataclass(frozen=True)
class EntryView:
    """An entry placed in a timeline, with its thread context."""

    entry: Entry
    thread_id: str
    thread_title: str
    is_first_in_thread: bool
    is_last_in_thread: bool

    @property
    def id(self) -> str:
        return self.entry.id

    @property
    def created_at(self) -> str:
        return self.entry.created_at

    @property
    def content(self) -> str:
        return self.entry.content

    @property
    def type(self) -> str:
        return self.entry.type


@dataclass(frozen=True)
class DateGroup:
    """One day bucket of a timeline."""

    date: str
    relative_date: str
    entries: tuple[EntryView, ...]

    @property
    def thread_ids(self) -> list[str]:
        """Distinct thread ids in display order."""
        seen: dict[str, None] = {}
        for view in self.entries:
            seen.setdefault(view.thread_id, None)
        return list(seen)


# -- Helpers -------------------------------------------------------------------


def _sort_time(entry: Entry) -> datetime:
    return entry.created or _EPOCH


def _today_and_yesterday(now: datetime | None, tz: tzinfo | None) -> tuple[str, str]:
    moment = now or utc_now()
    if moment.tzinfo is None:
        moment = moment.astimezone()
    today = moment.astimezone(tz).date()
    return today.isoformat(), (today - timedelta(days=1)).isoformat()


def relative_date(key: str, today: str, yesterday: str) -> str:
    if key == today:
        return TODAY
    if key == yesterday:
        return YESTERDAY
    return key


def chronological_entries(thread: Thread) -> list[Entry]:
    """The thread's entries oldest first (stable for equal timestamps)."""
    return sorted(thread.entries, key=_sort_time)


def thread_date_key(thread: Thread, *, tz: tzinfo | None = None, today: str | None = None) -> str:
    """Bucket key for a thread: the day of its earliest entry.

    Falls back to the thread's own ``created_at``, then to ``today``.
    """
    entries = chronological_entries(thread)
    key = date_key(entries[0].created_at, tz) if entries else None
    if key is None:
        key = date_key(thread.created_at, tz)
    if key is None:
        key = today or _today_and_yesterday(None, tz)[0]
    return key


def _thread_views(thread: Thread) -> list[EntryView]:
    entries = chronological_entries(thread)
    last = len(entries) - 1
    return [
        EntryView(
            entry=entry,
            thread_id=thread.id,
            thread_title=thread.title,
            is_first_in_thread=index == 0,
            is_last_in_thread=index == last,
        )
        for index, entry in enumerate(entries)
    ]


def _flatten_threads(threads: Sequence[Thread]) -> tuple[EntryView, ...]:
    """Newest thread first; entries inside each thread oldest first."""

    def first_time(thread: Thread) -> datetime:
        entries = chronological_entries(thread)
        return _sort_time(entries[0]) if entries else _EPOCH

    ordered = sorted(threads, key=first_time, reverse=True)
    return tuple(view for thread in ordered for view in _thread_views(thread))


# -- Views ---------------------------------------------------------------------


def group_by_thread_date(
    threads: Sequence[Thread],
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[DateGroup]:
    """Group threads by the day they started.

    Args:
        threads: The thread collection, in its authoritative order.
        now: Reference time for the today/yesterday labels. Defaults to the current time.
        tz: Timezone that defines calendar days. Defaults to host local time.

    Returns:
        Day buckets, newest first.
    """
    today, yesterday = _today_and_yesterday(now, tz)
    buckets: dict[str, list[Thread]] = {}
    for thread in threads:
        buckets.setdefault(thread_date_key(thread, tz=tz, today=today), []).append(thread)

    return [
        DateGroup(
            date=key,
            relative_date=relative_date(key, today, yesterday),
            entries=_flatten_threads(buckets[key]),
        )
        for key in sorted(buckets, reverse=True)
    ]


def group_by_entry_date(
    threads: Sequence[Thread],
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[DateGroup]:
    """Group every entry by its own day, newest activity first.

    Args:
        threads: The thread collection, in its authoritative order.
        now: Reference time for the today/yesterday labels. Defaults to the current time.
        tz: Timezone that defines calendar days. Defaults to host local time.

    Returns:
        Day buckets, newest first.
    """
    today, yesterday = _today_and_yesterday(now, tz)
    buckets: dict[str, list[EntryView]] = {}
    for thread in threads:
        for view in _thread_views(thread):
            key = date_key(view.created_at, tz) or today
            buckets.setdefault(key, []).append(view)

    return [
        DateGroup(
            date=key,
            relative_date=relative_date(key, today, yesterday),
            entries=tuple(sorted(buckets[key], key=lambda v: _sort_time(v.entry), reverse=True)),
        )
        for key in sorted(buckets, reverse=True)
    ]


def day_entries(threads: Sequence[Thread], day: str, *, tz: tzinfo | None = None) -> tuple[EntryView, ...]:
    """Entries of the threads whose path carries ``day``, in thread-date order."""
    selected = [t for t in threads if (t.path_date or thread_date_key(t, tz=tz)) == day]
    return _flatten_threads(selected)


def available_dates(threads: Sequence[Thread], *, tz: tzinfo | None = None) -> list[str]:
    """Distinct thread days, newest first."""
    keys = {t.path_date or thread_date_key(t, tz=tz) for t in threads}
    return sorted(keys, reverse=True)
