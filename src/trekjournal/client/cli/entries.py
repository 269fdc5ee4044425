"""Entry commands for the trekjournal CLI.

Commands:
- submit: Add a new memory (stored now, or queued when offline)
- timeline: Show memories, newest first
- admin: List all memories with totals
- delete: Delete a memory and its media
- delete-media: Delete one media item of a memory
"""

from __future__ import annotations

import asyncio
import sys
from collections import Counter
from pathlib import Path

import click

from trekjournal.client.cli.config import ConfigError, build_journal
from trekjournal.client.cli.render import echo_banner, format_entry
from trekjournal.client.models import Draft, LocalFile
from trekjournal.core.errors import JournalError
from trekjournal.core.types import TRIP_DAYS, Category


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command()
@click.option(
    "--category", "-c",
    type=click.Choice([c.value for c in Category]),
    default=Category.PHOTO.value,
    show_default=True,
    help="Kind of memory.",
)
@click.option(
    "--day", "-d",
    type=click.Choice(TRIP_DAYS),
    default=TRIP_DAYS[0],
    show_default=True,
    help="Trip day.",
)
@click.option("--title", "-t", default="", help="Title of the memory.")
@click.option("--notes", "-n", default="", help="Notes or diary entry.")
@click.option(
    "--file", "-f", "files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Photo or video to attach (repeatable).",
)
@click.option("--offline", is_flag=True, help="Queue locally without contacting the backend.")
def submit(
    category: str,
    day: str,
    title: str,
    notes: str,
    files: tuple[Path, ...],
    offline: bool,
) -> None:
    """Add a new memory.

    When the backend is unreachable the memory is saved locally and
    uploaded by the next sync.
    """
    draft = Draft(
        category=Category(category),
        day=day,
        title=title,
        notes=notes,
        files=[LocalFile.from_path(p) for p in files],
    )

    async def run() -> None:
        async with build_journal() as journal:
            journal.context.status.subscribe(echo_banner)
            if offline:
                journal.monitor.report(False)
            else:
                await journal.monitor.refresh()
            result = await journal.submit(draft)
            if result.entry is not None:
                click.echo(f"Saved memory #{result.entry.id}: {result.entry.title}")

    try:
        asyncio.run(run())
    except (ConfigError, JournalError) as e:
        _fail(str(e))


@click.command()
@click.option("--day", "-d", type=click.Choice(TRIP_DAYS), help="Only show one day.")
def timeline(day: str | None) -> None:
    """Show the trip timeline, newest first."""

    async def run() -> None:
        async with build_journal() as journal:
            entries = await journal.refresh()
            shown = [e for e in entries if day is None or e.day == day]
            if not shown:
                click.echo("No memories yet.")
                return
            for entry in shown:
                click.echo(format_entry(entry))
                click.echo()

    try:
        asyncio.run(run())
    except (ConfigError, JournalError) as e:
        _fail(str(e))


@click.command()
def admin() -> None:
    """List all memories with totals."""

    async def run() -> None:
        async with build_journal() as journal:
            entries = await journal.refresh()
            click.echo(f"Total memories: {len(entries)}")
            by_day = Counter(e.day for e in entries)
            for trip_day in TRIP_DAYS:
                if by_day[trip_day]:
                    click.echo(f"  {trip_day}: {by_day[trip_day]}")
            click.echo("-" * 40)
            for entry in entries:
                click.echo(f"{entry.title}")
                click.echo(f"  Day: {entry.day}")
                click.echo(f"  Type: {entry.category.value}")
                click.echo(f"  Notes: {entry.notes}")
                for media in entry.media:
                    click.echo(f"  Media: {media.url}")

    try:
        asyncio.run(run())
    except (ConfigError, JournalError) as e:
        _fail(str(e))


@click.command()
@click.argument("entry_id", type=int)
@click.confirmation_option(prompt="Delete this memory and its media?")
def delete(entry_id: int) -> None:
    """Delete a memory and its media."""

    async def run() -> None:
        async with build_journal() as journal:
            await journal.refresh()
            await journal.delete_entry(entry_id)
            click.echo(f"Deleted memory #{entry_id}")

    try:
        asyncio.run(run())
    except (ConfigError, JournalError) as e:
        _fail(str(e))


@click.command("delete-media")
@click.argument("entry_id", type=int)
@click.argument("storage_path")
def delete_media(entry_id: int, storage_path: str) -> None:
    """Delete one media item (by storage path) of a memory."""

    async def run() -> None:
        async with build_journal() as journal:
            await journal.refresh()
            entry = await journal.delete_media(entry_id, storage_path)
            click.echo(f"Memory #{entry.id} now has {len(entry.media)} media items")

    try:
        asyncio.run(run())
    except (ConfigError, JournalError) as e:
        _fail(str(e))
