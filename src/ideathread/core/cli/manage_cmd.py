"""ideathread rename / rm / rm-entry / sync: manage threads."""

from __future__ import annotations

import click

from .common import AppContext, pass_app, run_command


@click.command()
@click.argument("thread_id")
@click.argument("title")
@pass_app
@run_command
async def rename(app: AppContext, thread_id: str, title: str) -> None:
    """Give a thread a new title."""
    thread = await app.service.rename_thread(thread_id, title)
    click.echo(f"Renamed to {thread.id}")


@click.command()
@click.argument("thread_id")
@click.confirmation_option(prompt="Delete this thread and all its entries?")
@pass_app
@run_command
async def rm(app: AppContext, thread_id: str) -> None:
    """Delete a thread."""
    await app.service.delete_thread(thread_id)
    click.echo(f"Deleted {thread_id}")


@click.command(name="rm-entry")
@click.argument("entry_id")
@click.option("--thread", "thread_id", default=None, help="Thread holding the entry (skips the search).")
@pass_app
@run_command
async def rm_entry(app: AppContext, entry_id: str, thread_id: str | None) -> None:
    """Delete one entry. Removing a thread's last entry deletes the thread."""
    service = app.service
    await service.load_threads()
    await service.delete_entry(entry_id, thread_id)
    click.echo(f"Deleted entry {entry_id}")


@click.command()
@pass_app
@run_command
async def sync(app: AppContext) -> None:
    """Synchronize with the storage backend."""
    result = await app.service.sync()
    click.echo(f"Synced {result.synced}, conflicts {result.conflicts} ({app.service.storage_type})")
