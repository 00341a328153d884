"""ideathread show / timeline / dates / search / ref: read threads."""

from __future__ import annotations

import click

from ideathread.core.exceptions import ThreadNotFoundError
from ideathread.core.utils.text import first_line, truncate_text
from ideathread.threads.grouping import DateGroup
from ideathread.threads.models import Thread
from ideathread.threads.refs import build_idea_ref, parse_idea_ref

from .common import AppContext, pass_app, run_command


def _time_of(created_at: str) -> str:
    """HH:MM:SS part of an ISO timestamp, for compact listings."""
    _, _, clock = created_at.partition("T")
    return clock[:8] if clock else created_at


def _echo_groups(groups: list[DateGroup]) -> None:
    if not groups:
        click.echo("No ideas yet.")
        return
    for group in groups:
        label = group.date if group.relative_date == group.date else f"{group.relative_date} ({group.date})"
        click.echo(click.style(label, bold=True))
        for view in group.entries:
            marker = "*" if view.is_first_in_thread else "|"
            who = "ai" if view.entry.is_ai else "me"
            preview = truncate_text(first_line(view.content), 60)
            click.echo(f"  {marker} {_time_of(view.created_at)} [{who}] {view.thread_title}: {preview}")
        click.echo("")


def _echo_thread(thread: Thread) -> None:
    click.echo(click.style(thread.title, bold=True) + f"  ({thread.id})")
    for entry in thread.entries:
        who = "ai" if entry.is_ai else "me"
        click.echo(f"\n--- {entry.created_at} [{who}] {entry.id}")
        click.echo(entry.content)


@click.command()
@click.argument("target")
@pass_app
@run_command
async def show(app: AppContext, target: str) -> None:
    """Print a thread. TARGET is a thread id or an idea:// reference."""
    ref = parse_idea_ref(target)
    thread_id = ref.thread_id if ref else target
    thread = await app.service.get_thread(thread_id)
    if thread is None:
        raise ThreadNotFoundError(thread_id)
    _echo_thread(thread)


@click.command()
@click.option(
    "--by",
    type=click.Choice(["entry", "thread"]),
    default="entry",
    show_default=True,
    help="Group by each entry's day, or by the day each thread started.",
)
@pass_app
@run_command
async def timeline(app: AppContext, by: str) -> None:
    """Show all ideas grouped by day, newest first."""
    service = app.service
    await service.load_threads()
    groups = service.entries_by_date() if by == "entry" else service.threads_by_date()
    _echo_groups(groups)


@click.command()
@pass_app
@run_command
async def dates(app: AppContext) -> None:
    """List the days that have threads."""
    service = app.service
    await service.load_threads()
    for day in service.available_dates():
        click.echo(day)


@click.command()
@click.argument("keyword")
@pass_app
@run_command
async def search(app: AppContext, keyword: str) -> None:
    """Find threads whose title or entries contain KEYWORD."""
    threads = await app.service.search_threads(keyword)
    if not threads:
        click.echo("No matches.")
        return
    for thread in threads:
        click.echo(f"{thread.id}  {thread.title}  ({len(thread.entries)} entries)")


@click.command()
@click.argument("thread_id")
@click.option("--entry", "entry_id", default=None, help="Point at one entry of the thread.")
@pass_app
@run_command
async def ref(app: AppContext, thread_id: str, entry_id: str | None) -> None:
    """Print an idea:// reference link for a thread or entry."""
    thread = await app.service.get_thread(thread_id)
    if thread is None:
        raise ThreadNotFoundError(thread_id)
    click.echo(build_idea_ref(thread.id, entry_id=entry_id, date=thread.path_date))
