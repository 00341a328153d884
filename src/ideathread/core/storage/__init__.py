"""
Document stores for ideathread.

Provides the async DocumentStore interface the idea engine writes through,
and a local filesystem implementation.
"""

from .base import (
    DocInfo,
    DocumentStore,
    StorageError,
    StorageKeyError,
    StoragePermissionError,
)
from .local import LocalDocumentStore

__all__ = [
    "DocInfo",
    "DocumentStore",
    "LocalDocumentStore",
    "StorageError",
    "StorageKeyError",
    "StoragePermissionError",
]
