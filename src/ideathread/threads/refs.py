"""Idea reference links.

A reference points at a thread, optionally at one entry and the day it is
shown under::

    idea://.ideas%2F2024%2F01%2F2024-01-15-first-thought-lrgx5k2a.md?entry=<id>&date=2024-01-15
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, quote, unquote, urlencode

SCHEME = "idea://"


@dataclass(frozen=True)
class IdeaRef:
    thread_id: str
    entry_id: str = ""
    date: str = ""


def build_idea_ref(thread_id: str, entry_id: str | None = None, date: str | None = None) -> str:
    """Build an ``idea://`` link for a thread (and optionally an entry)."""
    params = {}
    if entry_id:
        params["entry"] = entry_id
    if date:
        params["date"] = date
    query = f"?{urlencode(params)}" if params else ""
    return f"{SCHEME}{quote(thread_id.strip(), safe='')}{query}"


def parse_idea_ref(href: str | None) -> IdeaRef | None:
    """Parse an ``idea://`` link. Returns None for anything else."""
    if not href or not href.startswith(SCHEME):
        return None
    raw = href[len(SCHEME) :]
    path, _, query = raw.partition("?")
    params = parse_qs(query)
    thread_id = unquote(path).lstrip("/")
    if not thread_id:
        return None
    return IdeaRef(
        thread_id=thread_id,
        entry_id=params.get("entry", [""])[0],
        date=params.get("date", [""])[0],
    )
