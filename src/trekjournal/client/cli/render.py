"""Text rendering of entries for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from trekjournal.client.models import Entry, PendingEntry
    from trekjournal.client.status import StatusUpdate

_BANNER_COLORS: dict[str, str] = {
    "queued-offline": "yellow",
    "draining": "cyan",
    "drained-success": "green",
    "drained-error": "red",
}


def format_entry(entry: Entry) -> str:
    """Render a timeline card."""
    lines = [
        f"#{entry.id}  {entry.day} · {entry.category.value}  "
        f"({entry.created_at:%Y-%m-%d %H:%M})",
        f"  {entry.title}",
    ]
    if entry.notes:
        lines.append(f"  {entry.notes}")
    for media in entry.media:
        lines.append(f"  [{media.type or 'file'}] {media.name} -> {media.path}")
    return "\n".join(lines)


def format_pending(position: int, record: PendingEntry) -> str:
    """Render a queued record."""
    state = f"stored as #{record.remote_id}" if record.remote_id is not None else "pending"
    return (
        f"{position}. {record.day} · {record.category.value}: {record.title} "
        f"({len(record.files)} files, {state})"
    )


def echo_banner(update: StatusUpdate) -> None:
    """Print a banner change."""
    if not update.message:
        return
    click.secho(update.message, fg=_BANNER_COLORS.get(update.state.value))
