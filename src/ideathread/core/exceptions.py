"""
ideathread exception hierarchy.

All ideathread exceptions inherit from IdeaThreadError, making it easy for
consumers to catch library-level errors while still distinguishing specific
failure modes.
"""


class IdeaThreadError(Exception):
    """Base exception class for all ideathread errors."""


class ConfigurationError(IdeaThreadError):
    """Raised for configuration errors (missing keys, invalid values)."""


class NotFoundError(IdeaThreadError, LookupError):
    """Raised when a thread or entry does not exist."""


class ThreadNotFoundError(NotFoundError):
    """Raised when a thread id is unknown to the storage adapter."""

    def __init__(self, thread_id: str):
        super().__init__(f"Thread not found: {thread_id}")
        self.thread_id = thread_id


class EntryNotFoundError(NotFoundError):
    """Raised when no thread contains the given entry id."""

    def __init__(self, entry_id: str):
        super().__init__(f"Entry not found: {entry_id}")
        self.entry_id = entry_id


class InvalidContentError(IdeaThreadError, ValueError):
    """Raised when an idea or entry is submitted without content."""
