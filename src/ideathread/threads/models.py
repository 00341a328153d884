"""Core data models for idea threads.

All models are frozen dataclasses. Changing a thread means building a new
value (``with_entries``, ``replace_entry``, ``without_entry``), so any
collection holding the old value is unaffected.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from .images import extract_images
from .paths import date_key_from_path, parse_timestamp


@dataclass(frozen=True)
class Entry:
    """One timestamped, author-tagged unit of content within a thread.

    Attributes:
        id: UUID-v4 string, unique within its thread.
        created_at: ISO-8601 timestamp text exactly as stored in the marker.
        content: Markdown body (may include image lines).
        is_ai: Whether the entry was written by an AI reflection.
        thread_id: Owning thread's id. Filled in on load; never serialized.
    """

    id: str
    created_at: str
    content: str = ""
    is_ai: bool = False
    thread_id: str = ""

    @property
    def created(self) -> datetime | None:
        """Parsed ``created_at``, or None if the stored text is not a valid timestamp."""
        return parse_timestamp(self.created_at)

    @property
    def type(self) -> str:
        return "ai" if self.is_ai else "user"

    @property
    def images(self) -> list[str]:
        return extract_images(self.content)[1]

    @property
    def text(self) -> str:
        return extract_images(self.content)[0]

    def __repr__(self) -> str:
        preview = self.content[:40] + "..." if len(self.content) > 40 else self.content
        return f"Entry(id='{self.id}', created_at='{self.created_at}', is_ai={self.is_ai}, content='{preview}')"


@dataclass(frozen=True)
class Thread:
    """A single document holding an ordered chain of entries.

    ``entries`` is in append order, which is also the on-disk order.
    """

    id: str
    title: str
    created_at: str
    updated_at: str
    entries: tuple[Entry, ...] = ()

    @property
    def path_date(self) -> str | None:
        """Creation day encoded in the thread's path."""
        return date_key_from_path(self.id)

    @property
    def first_entry(self) -> Entry | None:
        return self.entries[0] if self.entries else None

    @property
    def last_entry(self) -> Entry | None:
        return self.entries[-1] if self.entries else None

    def find_entry(self, entry_id: str) -> Entry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def with_entries(self, entries: tuple[Entry, ...] | list[Entry]) -> Thread:
        """Return a copy holding ``entries``, with timestamps refreshed from them."""
        entries = tuple(entries)
        if not entries:
            return replace(self, entries=())
        return replace(
            self,
            entries=entries,
            created_at=entries[0].created_at,
            updated_at=entries[-1].created_at,
        )

    def append(self, entry: Entry) -> Thread:
        return self.with_entries((*self.entries, entry))

    def replace_entry(self, entry: Entry) -> Thread:
        return self.with_entries(tuple(entry if e.id == entry.id else e for e in self.entries))

    def without_entry(self, entry_id: str) -> Thread:
        return self.with_entries(tuple(e for e in self.entries if e.id != entry_id))

    def __repr__(self) -> str:
        return f"Thread(id='{self.id}', title='{self.title}', entries={len(self.entries)})"


@dataclass(frozen=True)
class CreateThreadInput:
    """Input for creating a thread together with its first entry."""

    content: str
    title: str | None = None
    is_ai: bool = False
    images: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AddEntryInput:
    """Input for appending an entry to an existing thread."""

    thread_id: str
    content: str
    is_ai: bool = False
    images: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ThreadFilter:
    """Optional listing filter.

    Attributes:
        date: Only threads whose path carries this ``YYYY-MM-DD`` day.
        search: Case-insensitive keyword matched against title and entry content.
    """

    date: str | None = None
    search: str | None = None

    def matches(self, thread: Thread) -> bool:
        if self.date and thread.path_date != self.date:
            return False
        if self.search:
            keyword = self.search.lower()
            if keyword not in thread.title.lower() and not any(
                keyword in entry.content.lower() for entry in thread.entries
            ):
                return False
        return True


@dataclass(frozen=True)
class SyncResult:
    """Outcome of an adapter sync."""

    synced: int = 0
    conflicts: int = 0
