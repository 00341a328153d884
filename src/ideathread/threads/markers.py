"""Entry marker codec.

Every entry in a thread document starts with one invisible markdown
reference-definition line carrying its metadata::

    [//]: # (idea:id=<uuid> created_at=<ISO-8601>[ is_ai=true])

Markdown renderers drop the line, so the document still reads as plain prose.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass

MARKER_RE = re.compile(r"^\[//\]: # \(idea:id=([a-f0-9-]+) created_at=([^\s)]+)(?:\s+is_ai=(\w+))?\)\s*$")


@dataclass(frozen=True)
class EntryMarker:
    """Metadata decoded from a marker line."""

    id: str
    created_at: str
    is_ai: bool = False


def generate_entry_id() -> str:
    """Return a random UUID-v4 string (36 chars, 8-4-4-4-12 lowercase hex)."""
    return str(uuid.uuid4())


def encode_marker(entry_id: str, created_at: str, is_ai: bool = False) -> str:
    """Build the marker line for an entry. No trailing newline."""
    base = f"[//]: # (idea:id={entry_id} created_at={created_at}"
    return f"{base} is_ai=true)" if is_ai else f"{base})"


def decode_marker(line: str) -> EntryMarker | None:
    """Decode a marker line, or return None if the line is ordinary content."""
    match = MARKER_RE.match(line)
    if not match:
        return None
    return EntryMarker(
        id=match.group(1),
        created_at=match.group(2),
        is_ai=match.group(3) == "true",
    )


def is_marker(line: str) -> bool:
    return MARKER_RE.match(line) is not None
