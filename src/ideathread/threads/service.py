"""IdeaService: business logic over an idea storage adapter.

The service owns the session's thread collection. The adapter is the source
of truth on (re)load; between loads the service reconciles its collection
from the result of each call instead of reloading everything.

The collection is an immutable tuple. Every mutation swaps in a new tuple,
so grouping results computed from an older value never change under a
consumer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, tzinfo

from loguru import logger

from ideathread.core.exceptions import InvalidContentError

from .adapter import IdeaStorageAdapter
from .grouping import (
    DateGroup,
    EntryView,
    available_dates,
    day_entries,
    group_by_entry_date,
    group_by_thread_date,
)
from .models import AddEntryInput, CreateThreadInput, Entry, SyncResult, Thread, ThreadFilter
from .paths import date_key, utc_now


def _require_content(content: str | None, images: Sequence[str] = ()) -> str:
    """Strip content and reject it when nothing is left and no image is attached."""
    text = (content or "").strip()
    if not text and not images:
        raise InvalidContentError("Content cannot be empty.")
    return text


class IdeaService:
    """Create, continue, edit and delete idea threads.

    Example::

        adapter = DocumentStoreAdapter(LocalDocumentStore("~/ideas"))
        service = IdeaService(adapter)
        await service.load_threads()
        thread = await service.create_idea("What if notes could reply?")
        await service.add_ai_reflection(thread.id, "They can, as threads.")
        timeline = service.entries_by_date()
    """

    def __init__(
        self,
        adapter: IdeaStorageAdapter,
        *,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            adapter: Storage backend, chosen once by the host.
            tz: Timezone that defines calendar days. None = host local time.
            clock: Current-time source for today/yesterday labels.
        """
        self.adapter = adapter
        self.tz = tz
        self._clock = clock
        self._threads: tuple[Thread, ...] = ()
        self._loading = False
        self.error: str | None = None
        self.selected_date = self.today()

    # -- State ---------------------------------------------------------------

    @property
    def threads(self) -> tuple[Thread, ...]:
        return self._threads

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def storage_type(self) -> str:
        return self.adapter.get_type()

    def today(self) -> str:
        return date_key(self._clock(), self.tz)

    def find_thread(self, thread_id: str) -> Thread | None:
        for thread in self._threads:
            if thread.id == thread_id:
                return thread
        return None

    def _find_owner(self, entry_id: str) -> Thread | None:
        for thread in self._threads:
            if thread.find_entry(entry_id) is not None:
                return thread
        return None

    def _replace_thread(self, thread_id: str, thread: Thread) -> None:
        self._threads = tuple(thread if t.id == thread_id else t for t in self._threads)

    def _remove_thread(self, thread_id: str) -> None:
        self._threads = tuple(t for t in self._threads if t.id != thread_id)

    # -- Loading -------------------------------------------------------------

    async def load_threads(self) -> tuple[Thread, ...]:
        """Reload the collection from the adapter.

        A call made while another load is in flight returns the current
        collection untouched.
        """
        if self._loading:
            logger.debug("Load already in progress; skipping overlapping reload")
            return self._threads

        self._loading = True
        self.error = None
        try:
            self._threads = tuple(await self.adapter.list_threads())
        except Exception as e:
            self.error = str(e)
            logger.error(f"Failed to load threads: {e}")
            raise
        finally:
            self._loading = False

        logger.debug(f"Loaded {len(self._threads)} thread(s)")
        return self._threads

    async def refresh(self) -> tuple[Thread, ...]:
        return await self.load_threads()

    # -- Queries (adapter pass-through) --------------------------------------

    async def get_all_threads(self) -> list[Thread]:
        return await self.adapter.list_threads()

    async def get_thread(self, thread_id: str) -> Thread | None:
        return await self.adapter.get_thread(thread_id)

    async def get_threads_by_date(self, date: str) -> list[Thread]:
        return await self.adapter.list_threads(ThreadFilter(date=date))

    async def search_threads(self, keyword: str) -> list[Thread]:
        return await self.adapter.list_threads(ThreadFilter(search=keyword))

    # -- Mutations -----------------------------------------------------------

    async def create_idea(
        self,
        content: str,
        *,
        title: str | None = None,
        is_ai: bool = False,
        images: Sequence[str] = (),
    ) -> Thread:
        """Start a new thread. It becomes the most recently active one."""
        text = _require_content(content, images)
        thread = await self.adapter.create_thread(
            CreateThreadInput(content=text, title=title, is_ai=is_ai, images=tuple(images))
        )
        self._threads = (thread, *(t for t in self._threads if t.id != thread.id))
        self.selected_date = self.today()
        return thread

    async def continue_thread(
        self,
        thread_id: str,
        content: str,
        *,
        is_ai: bool = False,
        images: Sequence[str] = (),
    ) -> Entry:
        """Append an entry to an existing thread.

        Raises:
            ThreadNotFoundError: If the adapter doesn't know the thread.
        """
        text = _require_content(content, images)
        entry = await self.adapter.add_entry(
            AddEntryInput(thread_id=thread_id, content=text, is_ai=is_ai, images=tuple(images))
        )
        thread = self.find_thread(thread_id)
        if thread is not None:
            self._replace_thread(thread_id, thread.append(entry))
        return entry

    async def add_ai_reflection(self, thread_id: str, content: str) -> Entry:
        return await self.continue_thread(thread_id, content, is_ai=True)

    async def update_entry(self, entry_id: str, content: str) -> Entry:
        text = _require_content(content)
        entry = await self.adapter.update_entry(entry_id, text)
        thread = self.find_thread(entry.thread_id) or self._find_owner(entry_id)
        if thread is not None:
            self._replace_thread(thread.id, thread.replace_entry(entry))
        return entry

    async def delete_entry(self, entry_id: str, thread_id: str | None = None) -> None:
        """Delete an entry; deleting a thread's last entry deletes the thread.

        When the owning thread isn't in the local collection, the collection
        is reloaded instead of patched.
        """
        await self.adapter.delete_entry(entry_id, thread_id)

        hinted = self.find_thread(thread_id) if thread_id else None
        if hinted is not None and hinted.find_entry(entry_id) is not None:
            thread = hinted
        else:
            thread = self._find_owner(entry_id)
        if thread is None:
            await self.load_threads()
            return

        remaining = thread.without_entry(entry_id)
        if remaining.entries:
            self._replace_thread(thread.id, remaining)
        else:
            self._remove_thread(thread.id)

    async def delete_thread(self, thread_id: str) -> None:
        await self.adapter.delete_thread(thread_id)
        self._remove_thread(thread_id)

    async def rename_thread(self, thread_id: str, title: str) -> Thread:
        if not (title or "").strip():
            raise InvalidContentError("Title cannot be empty.")
        renamed = await self.adapter.rename_thread(thread_id, title.strip())
        if self.find_thread(thread_id) is not None:
            self._replace_thread(thread_id, renamed)
        return renamed

    async def sync(self) -> SyncResult:
        return await self.adapter.sync()

    # -- Views ---------------------------------------------------------------

    def set_selected_date(self, date: str) -> None:
        self.selected_date = date

    def available_dates(self) -> list[str]:
        return available_dates(self._threads, tz=self.tz)

    def threads_by_date(self) -> list[DateGroup]:
        return group_by_thread_date(self._threads, now=self._clock(), tz=self.tz)

    def entries_by_date(self) -> list[DateGroup]:
        return group_by_entry_date(self._threads, now=self._clock(), tz=self.tz)

    def day_entries(self, date: str | None = None) -> tuple[EntryView, ...]:
        return day_entries(self._threads, date or self.selected_date, tz=self.tz)
