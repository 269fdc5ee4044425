"""Tests for core configuration classes."""

from __future__ import annotations

from trekjournal.core.config import DrainPolicy, RemoteConfig, SyncConfig


class TestRemoteConfig:
    """Tests for RemoteConfig class."""

    def test_init_basic(self) -> None:
        """Should initialize with required fields and defaults."""
        config = RemoteConfig(url="https://proj.test", api_key="anon-key")
        assert config.url == "https://proj.test"
        assert config.api_key == "anon-key"
        assert config.table == "memories"
        assert config.bucket == "trip-media"
        assert config.timeout == 30.0

    def test_strips_trailing_slash(self) -> None:
        """Should normalize the base URL."""
        config = RemoteConfig(url="https://proj.test/", api_key="k")
        assert config.url == "https://proj.test"

    def test_endpoints(self) -> None:
        """Should build the table and bucket endpoints."""
        config = RemoteConfig(url="https://proj.test", api_key="k", table="entries", bucket="media")
        assert config.rest_url == "https://proj.test/rest/v1/entries"
        assert config.storage_url == "https://proj.test/storage/v1/object/media"

    def test_public_url_quotes_path(self) -> None:
        """Public URLs should escape unsafe characters."""
        config = RemoteConfig(url="https://proj.test", api_key="k")
        assert (
            config.public_url_for("1-abc def.jpg")
            == "https://proj.test/storage/v1/object/public/trip-media/1-abc%20def.jpg"
        )


class TestSyncConfig:
    """Tests for SyncConfig class."""

    def test_defaults(self) -> None:
        """Should probe every ten seconds and fail fast."""
        config = SyncConfig()
        assert config.probe_interval == 10.0
        assert config.drain_policy == DrainPolicy.FAIL_FAST

    def test_policy_values(self) -> None:
        """Policies should parse from their CLI names."""
        assert DrainPolicy("mark-completed") is DrainPolicy.MARK_COMPLETED
        assert DrainPolicy("fail-fast") is DrainPolicy.FAIL_FAST
