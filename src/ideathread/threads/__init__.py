"""Idea threads: marker codec, document format, storage adapters, service and timelines.

A thread is one markdown document holding an append-only chain of
timestamped, author-tagged entries. ``IdeaService`` is the entry point;
give it any ``IdeaStorageAdapter``.
"""

from .adapter import IdeaStorageAdapter
from .document import parse_thread_document, serialize_thread_document
from .grouping import DateGroup, EntryView, group_by_entry_date, group_by_thread_date
from .markers import decode_marker, encode_marker, generate_entry_id
from .models import AddEntryInput, CreateThreadInput, Entry, SyncResult, Thread, ThreadFilter
from .refs import IdeaRef, build_idea_ref, parse_idea_ref
from .service import IdeaService
from .store_adapter import DocumentStoreAdapter

__all__ = [
    "AddEntryInput",
    "CreateThreadInput",
    "DateGroup",
    "DocumentStoreAdapter",
    "Entry",
    "EntryView",
    "IdeaRef",
    "IdeaService",
    "IdeaStorageAdapter",
    "SyncResult",
    "Thread",
    "ThreadFilter",
    "build_idea_ref",
    "decode_marker",
    "encode_marker",
    "generate_entry_id",
    "group_by_entry_date",
    "group_by_thread_date",
    "parse_idea_ref",
    "parse_thread_document",
    "serialize_thread_document",
]
