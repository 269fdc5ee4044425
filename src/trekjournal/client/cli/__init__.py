"""Command-line interface for trekjournal.

This module provides the main CLI entry point and assembles all commands.

Commands:
- configure: Store backend settings
- submit: Add a new memory
- timeline: Show memories, newest first
- admin: List all memories with totals
- delete: Delete a memory
- delete-media: Delete one media item of a memory
- sync: Upload memories queued while offline
- queue: Show the local queue
- watch: Sync continuously while the backend is reachable
"""

from __future__ import annotations

import logging

import click

from trekjournal.client.cli.config import (
    get_config_dir,
    get_config_file,
    get_queue_path,
    load_config,
    save_config,
)
from trekjournal.client.cli.configure import configure
from trekjournal.client.cli.entries import admin, delete, delete_media, submit, timeline
from trekjournal.client.cli.sync import queue, sync, watch


@click.group()
@click.version_option(package_name="trekjournal")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Trek Journal - trip memories with an offline queue."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# Setup
cli.add_command(configure)

# Entry commands
cli.add_command(submit)
cli.add_command(timeline)
cli.add_command(admin)
cli.add_command(delete)
cli.add_command(delete_media)

# Sync commands
cli.add_command(sync)
cli.add_command(queue)
cli.add_command(watch)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    # Main entry points
    "cli",
    "main",
    # Config utilities
    "get_config_dir",
    "get_config_file",
    "get_queue_path",
    "load_config",
    "save_config",
]
