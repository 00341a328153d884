"""IdeaStorageAdapter: the contract for idea storage backends.

The service never assumes a backend. Anything that can list, read, create
and rewrite threads (a local document store, a cloud API, a hybrid of the
two) implements this class and is handed to ``IdeaService`` by the host.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .models import AddEntryInput, CreateThreadInput, Entry, SyncResult, Thread, ThreadFilter


def apply_filter(threads: Iterable[Thread], filter: ThreadFilter | None) -> list[Thread]:
    """Keep the threads matching ``filter``, in their original order."""
    if filter is None:
        return list(threads)
    return [thread for thread in threads if filter.matches(thread)]


class IdeaStorageAdapter(ABC):
    """Abstract base class for idea storage backends.

    Every operation is a coroutine and may fail independently. Not-found
    conditions raise ``ThreadNotFoundError`` / ``EntryNotFoundError``;
    backend failures propagate unchanged.
    """

    @abstractmethod
    async def list_threads(self, filter: ThreadFilter | None = None) -> list[Thread]:
        """Return all threads, optionally filtered by path date or keyword."""

    @abstractmethod
    async def get_thread(self, thread_id: str) -> Thread | None:
        """Return one thread, or None if it doesn't exist."""

    @abstractmethod
    async def create_thread(self, data: CreateThreadInput) -> Thread:
        """Create a thread holding one first entry."""

    @abstractmethod
    async def add_entry(self, data: AddEntryInput) -> Entry:
        """Append an entry to a thread. Raises ThreadNotFoundError."""

    @abstractmethod
    async def update_entry(self, entry_id: str, content: str) -> Entry:
        """Replace an entry's content. Raises EntryNotFoundError."""

    @abstractmethod
    async def delete_entry(self, entry_id: str, thread_id: str | None = None) -> None:
        """Remove an entry, deleting its thread if it was the last one.

        Raises EntryNotFoundError.
        """

    @abstractmethod
    async def delete_thread(self, thread_id: str) -> None:
        """Remove a thread and all its entries. Raises ThreadNotFoundError."""

    @abstractmethod
    async def rename_thread(self, thread_id: str, title: str) -> Thread:
        """Give a thread a new title. Raises ThreadNotFoundError."""

    async def sync(self) -> SyncResult:
        """Synchronize with a remote copy. Local-only backends have nothing to do."""
        return SyncResult(synced=0, conflicts=0)

    def get_type(self) -> str:
        """Short backend identifier, e.g. ``"local"``."""
        return "abstract"
