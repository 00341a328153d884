"""
Abstract base class for document stores.

A document store keeps markdown documents addressed by a relative,
slash-separated path and grouped in folders. The idea engine only talks to
this surface; the concrete backend (native app store, local filesystem, ...)
is chosen by the host.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DocInfo:
    """Listing record for a stored document."""

    rel_path: str
    created_at: datetime
    updated_at: datetime


class DocumentStore(ABC):
    """Abstract base class for document stores."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def create_folder(self, path: str) -> None:
        """Create a folder and any missing parents. Existing folders are fine."""

    @abstractmethod
    async def list_docs(self, folder: str, recursive: bool = True) -> list[DocInfo]:
        """List documents under a folder. A missing folder lists as empty."""

    @abstractmethod
    async def create_doc(self, folder: str, name: str) -> DocInfo:
        """Create an empty document ``folder/name``."""

    @abstractmethod
    async def get_doc_content(self, rel_path: str) -> str:
        """Return document text. Raises StorageKeyError if not found."""

    @abstractmethod
    async def save_doc_content(self, rel_path: str, content: str) -> None:
        """Replace document text, creating the document if needed."""

    @abstractmethod
    async def remove_doc(self, rel_path: str) -> bool:
        """Delete a document. Returns True if deleted, False if it didn't exist."""

    @abstractmethod
    async def rename_doc(self, rel_path: str, new_name: str) -> DocInfo:
        """Rename a document within its folder. Raises StorageKeyError if not found."""


class StorageError(Exception):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a document path doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when a storage operation is not permitted."""
