"""ideathread new / continue / reflect / edit: write entries."""

from __future__ import annotations

import click

from .common import AppContext, pass_app, run_command


@click.command()
@click.argument("content")
@click.option("--title", "-t", default=None, help="Thread title (defaults to the start of the content).")
@click.option("--ai", "is_ai", is_flag=True, help="Mark the entry as AI-written.")
@click.option("--image", "images", multiple=True, help="Image source to attach. Repeatable.")
@pass_app
@run_command
async def new(app: AppContext, content: str, title: str | None, is_ai: bool, images: tuple[str, ...]) -> None:
    """Start a new idea thread."""
    thread = await app.service.create_idea(content, title=title, is_ai=is_ai, images=images)
    click.echo(f"Created {thread.id}")
    click.echo(f"Entry {thread.entries[0].id}")


@click.command(name="continue")
@click.argument("thread_id")
@click.argument("content")
@click.option("--ai", "is_ai", is_flag=True, help="Mark the entry as AI-written.")
@click.option("--image", "images", multiple=True, help="Image source to attach. Repeatable.")
@pass_app
@run_command
async def continue_(app: AppContext, thread_id: str, content: str, is_ai: bool, images: tuple[str, ...]) -> None:
    """Append an entry to an existing thread."""
    entry = await app.service.continue_thread(thread_id, content, is_ai=is_ai, images=images)
    click.echo(f"Added {entry.id} to {thread_id}")


@click.command()
@click.argument("thread_id")
@click.argument("content")
@pass_app
@run_command
async def reflect(app: AppContext, thread_id: str, content: str) -> None:
    """Append an AI reflection to a thread."""
    entry = await app.service.add_ai_reflection(thread_id, content)
    click.echo(f"Added reflection {entry.id} to {thread_id}")


@click.command()
@click.argument("entry_id")
@click.argument("content")
@pass_app
@run_command
async def edit(app: AppContext, entry_id: str, content: str) -> None:
    """Replace the content of an entry."""
    entry = await app.service.update_entry(entry_id, content)
    click.echo(f"Updated {entry.id} in {entry.thread_id}")
