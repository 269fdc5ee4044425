"""Configure command for the trekjournal CLI.

Commands:
- configure: Store backend URL, API key, table and bucket
"""

from __future__ import annotations

import click

from trekjournal.client.cli.config import get_config_file, load_config, save_config


@click.command()
@click.option("--url", prompt="Backend URL", help="Project URL, e.g. https://abc.supabase.co")
@click.option("--api-key", prompt="API key", hide_input=True, help="Backend API key.")
@click.option("--table", default="memories", show_default=True, help="Entries table.")
@click.option("--bucket", default="trip-media", show_default=True, help="Media bucket.")
def configure(url: str, api_key: str, table: str, bucket: str) -> None:
    """Configure the journal backend."""
    config = load_config()
    config.update({
        "url": url.rstrip("/"),
        "api_key": api_key,
        "table": table,
        "bucket": bucket,
    })
    save_config(config)
    click.echo(f"Configuration saved to {get_config_file()}")
