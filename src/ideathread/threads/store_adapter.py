"""Idea storage adapter backed by a DocumentStore.

Each thread is one markdown document under the ideas root, laid out as::

    .ideas/{year}/{month}/{date}-{slug}-{timestamp}.md

Reads parse the document; writes re-serialize the whole entry list and save
it back. The thread id is the document's relative path.
"""

from __future__ import annotations

import asyncio
import posixpath
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, tzinfo

from loguru import logger

from ideathread.core.exceptions import EntryNotFoundError, ThreadNotFoundError
from ideathread.core.storage import DocInfo, DocumentStore, StorageError, StorageKeyError

from .adapter import IdeaStorageAdapter, apply_filter
from .document import parse_thread_document, serialize_thread_document
from .images import attach_images
from .markers import generate_entry_id
from .models import AddEntryInput, CreateThreadInput, Entry, Thread, ThreadFilter
from .paths import (
    IDEAS_ROOT,
    format_timestamp,
    now_iso,
    parse_timestamp,
    path_for_new_thread,
    retitle_path,
    title_from_path,
    utc_now,
)


def _fallback_timestamp(info: DocInfo | None, clock: Callable[[], datetime]) -> str:
    if info is not None:
        return format_timestamp(info.created_at)
    return now_iso(clock)


class DocumentStoreAdapter(IdeaStorageAdapter):
    """Stores threads as markdown documents in a DocumentStore."""

    def __init__(
        self,
        store: DocumentStore,
        ideas_root: str = IDEAS_ROOT,
        clock: Callable[[], datetime] = utc_now,
        tz: tzinfo | None = None,
    ):
        """
        Args:
            store: Document store the threads are written to.
            ideas_root: Folder holding all thread documents.
            clock: Returns the current time; new entries are stamped with it.
            tz: Timezone for the creation day in new thread paths. None = host local time.
        """
        self.store = store
        self.ideas_root = ideas_root.strip("/") or IDEAS_ROOT
        self._clock = clock
        self.tz = tz
        self._last_ms = 0

    def get_type(self) -> str:
        return "local"

    async def ensure_root_folder(self) -> None:
        await self.store.create_folder(self.ideas_root)

    # -- Reading -------------------------------------------------------------

    def _build_thread(self, thread_id: str, content: str, info: DocInfo | None = None) -> Thread:
        entries = tuple(replace(e, thread_id=thread_id) for e in parse_thread_document(content))
        created_at = entries[0].created_at if entries else _fallback_timestamp(info, self._clock)
        if entries:
            updated_at = entries[-1].created_at
        elif info is not None:
            updated_at = format_timestamp(info.updated_at)
        else:
            updated_at = created_at
        return Thread(
            id=thread_id,
            title=title_from_path(thread_id),
            created_at=created_at,
            updated_at=updated_at,
            entries=entries,
        )

    async def _load_doc(self, info: DocInfo) -> Thread | None:
        try:
            content = await self.store.get_doc_content(info.rel_path)
        except StorageError as e:
            logger.warning(f"Skipping unreadable thread {info.rel_path}: {e}")
            return None
        return self._build_thread(info.rel_path, content, info)

    async def list_threads(self, filter: ThreadFilter | None = None) -> list[Thread]:
        await self.ensure_root_folder()
        docs = await self.store.list_docs(self.ideas_root, recursive=True)
        loaded = await asyncio.gather(*(self._load_doc(info) for info in docs))
        threads = [t for t in loaded if t is not None]
        logger.debug(f"Loaded {len(threads)} thread(s) from {self.ideas_root}")
        return apply_filter(threads, filter)

    def _is_thread_id(self, thread_id: str) -> bool:
        """True for a path that could name a thread document under the ideas root."""
        if not thread_id or "\\" in thread_id or "\x00" in thread_id or not thread_id.endswith(".md"):
            return False
        if not thread_id.startswith(f"{self.ideas_root}/"):
            return False
        return not any(part in ("", ".", "..") for part in thread_id.split("/"))

    async def get_thread(self, thread_id: str) -> Thread | None:
        if not self._is_thread_id(thread_id):
            return None
        try:
            content = await self.store.get_doc_content(thread_id)
        except StorageKeyError:
            return None
        return self._build_thread(thread_id, content)

    async def _require_thread(self, thread_id: str) -> Thread:
        thread = await self.get_thread(thread_id)
        if thread is None:
            raise ThreadNotFoundError(thread_id)
        return thread

    async def _find_entry(self, entry_id: str, thread_id: str | None) -> tuple[Thread, Entry]:
        """Locate an entry, checking the hinted thread before scanning every thread."""
        if thread_id:
            thread = await self.get_thread(thread_id)
            entry = thread.find_entry(entry_id) if thread is not None else None
            if entry is not None:
                return thread, entry
        for thread in await self.list_threads():
            entry = thread.find_entry(entry_id)
            if entry is not None:
                return thread, entry
        raise EntryNotFoundError(entry_id)

    # -- Writing -------------------------------------------------------------

    async def _save(self, thread: Thread) -> None:
        await self.store.save_doc_content(thread.id, serialize_thread_document(thread.entries))

    def _next_timestamp(self, thread: Thread) -> str:
        """Current time, but never earlier than the thread's last entry."""
        now = now_iso(self._clock)
        last = thread.last_entry
        if last is None:
            return now
        last_moment = parse_timestamp(last.created_at)
        now_moment = parse_timestamp(now)
        if last_moment is not None and now_moment is not None and now_moment < last_moment:
            return last.created_at
        return now

    def _next_suffix_ms(self, now: datetime) -> int:
        """Epoch ms for the path suffix, strictly increasing within this adapter."""
        self._last_ms = max(int(now.timestamp() * 1000), self._last_ms + 1)
        return self._last_ms

    async def create_thread(self, data: CreateThreadInput) -> Thread:
        now = self._clock()
        created_at = format_timestamp(now)
        title = data.title or data.content[:20] or "image"
        thread_id = path_for_new_thread(
            title,
            now.astimezone(self.tz),
            root=self.ideas_root,
            timestamp_ms=self._next_suffix_ms(now),
        )
        folder, name = posixpath.split(thread_id)

        await self.store.create_folder(folder)
        await self.store.create_doc(folder, name)

        entry = Entry(
            id=generate_entry_id(),
            created_at=created_at,
            content=attach_images(data.content, data.images),
            is_ai=data.is_ai,
            thread_id=thread_id,
        )
        thread = Thread(
            id=thread_id,
            title=title_from_path(thread_id),
            created_at=created_at,
            updated_at=created_at,
            entries=(entry,),
        )
        await self._save(thread)
        logger.info(f"Created thread {thread_id}")
        return thread

    async def add_entry(self, data: AddEntryInput) -> Entry:
        thread = await self._require_thread(data.thread_id)
        entry = Entry(
            id=generate_entry_id(),
            created_at=self._next_timestamp(thread),
            content=attach_images(data.content, data.images),
            is_ai=data.is_ai,
            thread_id=thread.id,
        )
        await self._save(thread.append(entry))
        logger.info(f"Added entry {entry.id} to {thread.id}")
        return entry

    async def update_entry(self, entry_id: str, content: str) -> Entry:
        thread, entry = await self._find_entry(entry_id, None)
        updated = replace(entry, content=content, thread_id=thread.id)
        await self._save(thread.replace_entry(updated))
        logger.info(f"Updated entry {entry_id} in {thread.id}")
        return updated

    async def delete_entry(self, entry_id: str, thread_id: str | None = None) -> None:
        thread, _ = await self._find_entry(entry_id, thread_id)
        remaining = thread.without_entry(entry_id)
        if not remaining.entries:
            await self.delete_thread(thread.id)
            return
        await self._save(remaining)
        logger.info(f"Deleted entry {entry_id} from {thread.id}")

    async def delete_thread(self, thread_id: str) -> None:
        if not self._is_thread_id(thread_id) or not await self.store.remove_doc(thread_id):
            raise ThreadNotFoundError(thread_id)
        logger.info(f"Deleted thread {thread_id}")

    async def rename_thread(self, thread_id: str, title: str) -> Thread:
        thread = await self._require_thread(thread_id)
        new_id = retitle_path(thread_id, title)
        if new_id == thread_id:
            return thread
        info = await self.store.rename_doc(thread_id, posixpath.basename(new_id))
        renamed = replace(
            thread,
            id=info.rel_path,
            title=title_from_path(info.rel_path),
            entries=tuple(replace(e, thread_id=info.rel_path) for e in thread.entries),
        )
        logger.info(f"Renamed thread {thread_id} -> {renamed.id}")
        return renamed
