"""Configuration utilities for the trekjournal CLI.

This module provides shared configuration functions used across CLI commands.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from trekjournal.client.api import SupabaseStore
from trekjournal.client.journal import Journal
from trekjournal.client.sync import PendingQueue
from trekjournal.core.config import DrainPolicy, RemoteConfig, SyncConfig

ENV_URL = "TREKJOURNAL_URL"
ENV_API_KEY = "TREKJOURNAL_API_KEY"


class ConfigError(Exception):
    """The CLI is not configured."""


def get_config_dir() -> Path:
    """Get the configuration directory for trekjournal.

    Returns:
        Path to ~/.trekjournal or equivalent.
    """
    return Path.home() / ".trekjournal"


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def get_queue_path() -> Path:
    """Get the path to the pending queue database."""
    return get_config_dir() / "queue.db"


def load_config() -> dict[str, str]:
    """Load configuration from config file."""
    config_file = get_config_file()
    if config_file.exists():
        return dict(json.loads(config_file.read_text()))
    return {}


def save_config(config: dict[str, str]) -> None:
    """Save configuration to config file."""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def get_remote_config() -> RemoteConfig:
    """Build the remote configuration.

    Environment variables override the config file.

    Raises:
        ConfigError: If URL or API key is missing.
    """
    config = load_config()
    url = os.environ.get(ENV_URL) or config.get("url")
    api_key = os.environ.get(ENV_API_KEY) or config.get("api_key")
    if not url or not api_key:
        raise ConfigError(
            "Backend not configured. Run 'trekjournal configure' or set "
            f"{ENV_URL} and {ENV_API_KEY}."
        )
    return RemoteConfig(
        url=url,
        api_key=api_key,
        table=config.get("table") or "memories",
        bucket=config.get("bucket") or "trip-media",
    )


def create_store(remote: RemoteConfig) -> SupabaseStore:
    """Create the backend client."""
    return SupabaseStore(remote)


def build_journal(
    drain_policy: DrainPolicy = DrainPolicy.FAIL_FAST,
    probe_interval: float | None = None,
) -> Journal:
    """Assemble a Journal from the CLI configuration.

    Raises:
        ConfigError: If the backend is not configured.
        LocalPersistenceError: If the queue cannot be opened.
    """
    sync_config = SyncConfig(drain_policy=drain_policy)
    if probe_interval is not None:
        sync_config.probe_interval = probe_interval
    store = create_store(get_remote_config())
    return Journal(store, PendingQueue(get_queue_path()), config=sync_config)
