"""Thread document parser and serializer.

A thread document is a sequence of entries, each introduced by a marker
line (see ``markers``) and followed by its markdown body. Entries are
separated by one blank line::

    [//]: # (idea:id=aaaaaaaa-0000-4000-8000-000000000001 created_at=2024-01-15T09:00:00.000Z)
    First thought.

    [//]: # (idea:id=aaaaaaaa-0000-4000-8000-000000000002 created_at=2024-01-15T09:05:00.000Z is_ai=true)
    A reply.

Parsing is total: malformed marker lines are ordinary content, and text
before the first marker is dropped.

A content line that would itself decode as a marker is written with one
extra leading backslash and read back without it, so such lines can never
split an entry.
"""

from __future__ import annotations

from collections.abc import Iterable

from ideathread.core.utils.text import trim_blank_lines

from .markers import decode_marker, encode_marker, is_marker
from .models import Entry


def _needs_escape(line: str) -> bool:
    stripped = line.lstrip("\\")
    return is_marker(stripped)


def _escape_line(line: str) -> str:
    return "\\" + line if _needs_escape(line) else line


def _unescape_line(line: str) -> str:
    if line.startswith("\\") and _needs_escape(line):
        return line[1:]
    return line


def _close_entry(entry: Entry, lines: list[str]) -> Entry:
    body = "\n".join(_unescape_line(line) for line in trim_blank_lines(lines))
    return Entry(id=entry.id, created_at=entry.created_at, content=body, is_ai=entry.is_ai)


def parse_thread_document(text: str | None) -> list[Entry]:
    """Parse a thread document into its entries, in marker order.

    Args:
        text: Full document text. None and "" yield no entries.

    Returns:
        Entries with ``thread_id`` left empty.
    """
    if not text:
        return []

    entries: list[Entry] = []
    current: Entry | None = None
    buffer: list[str] = []

    for line in text.split("\n"):
        marker = decode_marker(line)
        if marker is not None:
            if current is not None:
                entries.append(_close_entry(current, buffer))
            current = Entry(id=marker.id, created_at=marker.created_at, is_ai=marker.is_ai)
            buffer = []
        elif current is not None:
            buffer.append(line)

    if current is not None:
        entries.append(_close_entry(current, buffer))

    return entries


def serialize_thread_document(entries: Iterable[Entry]) -> str:
    """Serialize entries back into document text (no trailing newline)."""
    blocks = []
    for entry in entries:
        marker = encode_marker(entry.id, entry.created_at, entry.is_ai)
        body = "\n".join(_escape_line(line) for line in entry.content.split("\n"))
        blocks.append(f"{marker}\n{body}")
    return "\n\n".join(blocks)
