"""Sync commands for the trekjournal CLI.

Commands:
- sync: Upload memories queued while offline
- queue: Show memories waiting in the local queue
- watch: Stay running and sync whenever the backend is reachable
"""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from trekjournal.client.cli.config import ConfigError, build_journal
from trekjournal.client.cli.render import echo_banner, format_pending
from trekjournal.client.sync import DrainStatus
from trekjournal.core.config import DrainPolicy
from trekjournal.core.errors import JournalError, RemoteStoreError

logger = logging.getLogger(__name__)


def _policy(mark_completed: bool) -> DrainPolicy:
    return DrainPolicy.MARK_COMPLETED if mark_completed else DrainPolicy.FAIL_FAST


@click.command()
@click.option(
    "--mark-completed",
    is_flag=True,
    help="Record each uploaded memory so a retry does not upload it twice.",
)
def sync(mark_completed: bool) -> None:
    """Upload memories queued while offline."""

    async def run() -> None:
        async with build_journal(drain_policy=_policy(mark_completed)) as journal:
            journal.context.status.subscribe(echo_banner)
            if not await journal.monitor.refresh():
                raise JournalError("Backend unreachable, memories stay queued")
            result = await journal.sync()
            if result.status is DrainStatus.EMPTY:
                click.echo("Nothing to sync.")
            else:
                click.echo(
                    f"Uploaded {result.inserted} memories"
                    + (f" ({result.skipped} already stored)" if result.skipped else "")
                )

    try:
        asyncio.run(run())
    except (ConfigError, JournalError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
def queue() -> None:
    """Show memories waiting in the local queue."""

    async def run() -> None:
        async with build_journal() as journal:
            records = await journal.context.queue.load()
            if not records:
                click.echo("Queue is empty.")
                return
            click.echo(f"{len(records)} memories waiting:")
            for position, record in enumerate(records, start=1):
                click.echo(format_pending(position, record))

    try:
        asyncio.run(run())
    except (ConfigError, JournalError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.command()
@click.option(
    "--interval", "-i",
    type=float,
    default=10.0,
    show_default=True,
    help="Seconds between connectivity probes.",
)
@click.option(
    "--mark-completed",
    is_flag=True,
    help="Record each uploaded memory so a retry does not upload it twice.",
)
def watch(interval: float, mark_completed: bool) -> None:
    """Stay running and sync whenever the backend is reachable.

    Press Ctrl+C to stop.
    """

    async def run() -> None:
        journal = build_journal(drain_policy=_policy(mark_completed), probe_interval=interval)
        async with journal:
            journal.context.status.subscribe(echo_banner)
            try:
                await journal.refresh()
            except RemoteStoreError as e:
                logger.warning(f"Could not load memories, starting offline: {e}")
            click.echo(f"Watching ({len(journal.context.entries)} memories loaded)")
            await journal.watch()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        click.echo("\nStopped.")
    except (ConfigError, JournalError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
