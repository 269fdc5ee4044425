"""HTTP client for the journal backend.

This module provides:
- RemoteStore: Protocol of the record and object operations the sync core needs
- SupabaseStore: httpx implementation over the PostgREST and Storage APIs
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol

import httpx

from trekjournal.client.models import Entry, MediaReference
from trekjournal.core.config import RemoteConfig
from trekjournal.core.errors import RemoteStoreError, RemoteWriteError

logger = logging.getLogger(__name__)


class RemoteStore(Protocol):
    """Record and object operations consumed by the sync core."""

    async def insert_entry(self, record: dict[str, Any]) -> Entry: ...

    async def query_entries(self) -> list[Entry]: ...

    async def delete_entry(self, entry_id: int) -> None: ...

    async def update_entry_media(self, entry_id: int, media: list[MediaReference]) -> None: ...

    async def upload_object(self, path: str, data: bytes, content_type: str) -> None: ...

    def get_public_url(self, path: str) -> str: ...

    async def delete_objects(self, paths: Iterable[str]) -> None: ...

    async def health_check(self) -> bool: ...


class SupabaseStore:
    """Async HTTP client for a Supabase project (entries table + media bucket)."""

    def __init__(
        self,
        config: RemoteConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the store client.

        Args:
            config: Remote configuration with URL, key, table and bucket.
            transport: Optional transport override.
        """
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.url,
            timeout=config.timeout,
            transport=transport,
            headers={
                "apikey": config.api_key,
                "Authorization": f"Bearer {config.api_key}",
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> SupabaseStore:
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit."""
        await self.close()

    async def _request(
        self,
        method: str,
        url: str,
        error_cls: type[RemoteStoreError] = RemoteWriteError,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and raise error_cls on transport or HTTP failure."""
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise error_cls(f"Backend unreachable: {e}") from e

        # Redirects are not followed, a 3xx means the request did not land
        if not response.is_success:
            raise error_cls(self._error_detail(response), response.status_code)
        return response

    @staticmethod
    def _parse_entries(
        response: httpx.Response,
        error_cls: type[RemoteStoreError],
    ) -> list[Entry]:
        """Decode a list of entry rows, raising error_cls on malformed data."""
        try:
            return [Entry.from_dict(row) for row in response.json()]
        except (ValueError, KeyError, TypeError) as e:
            raise error_cls(
                f"Unexpected response from backend: {e}", response.status_code
            ) from e

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Extract a readable error message from an error response."""
        try:
            data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(data, dict):
            return str(data.get("message") or data.get("error") or data)
        return str(data)

    # === Health check ===

    async def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if the REST endpoint answers.
        """
        try:
            response = await self._client.get("/rest/v1/")
        except httpx.RequestError:
            return False
        return not response.is_redirect and response.status_code < 500

    # === Entry records ===

    async def insert_entry(self, record: dict[str, Any]) -> Entry:
        """Insert a new entry row.

        Args:
            record: Row with type, day, title, notes and media.

        Returns:
            Stored entry with id and creation timestamp.

        Raises:
            RemoteWriteError: If the insert fails.
        """
        response = await self._request(
            "POST",
            self._config.rest_url,
            json=[record],
            headers={"Prefer": "return=representation"},
        )
        rows = self._parse_entries(response, RemoteWriteError)
        if not rows:
            raise RemoteWriteError("Insert returned no row")
        entry = rows[0]
        logger.debug(f"Inserted entry {entry.id}")
        return entry

    async def query_entries(self) -> list[Entry]:
        """List all entries, newest first.

        Raises:
            RemoteStoreError: If the query fails.
        """
        response = await self._request(
            "GET",
            self._config.rest_url,
            error_cls=RemoteStoreError,
            params={"select": "*", "order": "created_at.desc"},
        )
        return self._parse_entries(response, RemoteStoreError)

    async def delete_entry(self, entry_id: int) -> None:
        """Delete an entry row."""
        await self._request(
            "DELETE",
            self._config.rest_url,
            params={"id": f"eq.{entry_id}"},
        )

    async def update_entry_media(self, entry_id: int, media: list[MediaReference]) -> None:
        """Replace the media list of an entry row."""
        await self._request(
            "PATCH",
            self._config.rest_url,
            params={"id": f"eq.{entry_id}"},
            json={"media": [m.to_dict() for m in media]},
        )

    # === Media objects ===

    async def upload_object(self, path: str, data: bytes, content_type: str) -> None:
        """Upload an object to the media bucket.

        Raises:
            RemoteWriteError: If the upload fails.
        """
        await self._request(
            "POST",
            f"{self._config.storage_url}/{path}",
            content=data,
            headers={"Content-Type": content_type},
        )
        logger.debug(f"Uploaded {path} ({len(data)} bytes)")

    def get_public_url(self, path: str) -> str:
        """Get the public URL of an object."""
        return self._config.public_url_for(path)

    async def delete_objects(self, paths: Iterable[str]) -> None:
        """Delete objects from the media bucket.

        Missing objects are not an error.
        """
        prefixes = list(paths)
        if not prefixes:
            return
        await self._request(
            "DELETE",
            self._config.storage_url,
            json={"prefixes": prefixes},
        )
