"""Status banner shown to the user.

This module provides:
- StatusUpdate: Banner state and message
- StatusBanner: Current banner with change listeners
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from trekjournal.core.types import SyncState

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# Banner messages
MSG_QUEUED = "Offline: memory saved locally and will upload later."
MSG_WENT_OFFLINE = "Offline: new memories will upload later."
MSG_WENT_ONLINE = "Online: syncing pending memories..."
MSG_DRAINING = "Uploading offline memories..."
MSG_DRAINED = "All pending memories uploaded!"
MSG_SAVED = "Memory saved!"


@dataclass
class StatusUpdate:
    """Banner state.

    Attributes:
        state: Current sync state.
        message: Text shown to the user.
    """

    state: SyncState = SyncState.IDLE
    message: str = ""

    def to_message(self) -> dict[str, str]:
        """Convert to a plain dictionary."""
        return {"state": self.state.value, "message": self.message}


class StatusBanner:
    """Holds the current banner and notifies listeners on change.

    Usage:
        banner = StatusBanner()
        banner.subscribe(lambda update: print(update.message))
        banner.report(SyncState.DRAINING, MSG_DRAINING)
    """

    def __init__(self) -> None:
        self._current = StatusUpdate()
        self._listeners: list[Callable[[StatusUpdate], None]] = []

    @property
    def current(self) -> StatusUpdate:
        """Get the current banner."""
        return self._current

    @property
    def state(self) -> SyncState:
        """Get the current state."""
        return self._current.state

    def subscribe(self, listener: Callable[[StatusUpdate], None]) -> None:
        """Register a listener called on every banner change."""
        self._listeners.append(listener)

    def report(self, state: SyncState, message: str = "") -> None:
        """Set the banner and notify listeners.

        Args:
            state: New state.
            message: Text shown to the user.
        """
        self._current = StatusUpdate(state=state, message=message)
        logger.debug(f"Banner: {state.value} {message!r}")
        for listener in list(self._listeners):
            listener(self._current)

    def report_idle(self, message: str = "") -> None:
        """Report idle state."""
        self.report(SyncState.IDLE, message)

    def report_error(self, message: str) -> None:
        """Report a failed drain."""
        self.report(SyncState.DRAINED_ERROR, message)
