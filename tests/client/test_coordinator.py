"""Tests for the journal runner."""

from __future__ import annotations

import asyncio

import pytest

from trekjournal.client.journal import Journal
from trekjournal.client.models import Draft
from trekjournal.client.sync import PendingQueue, SyncCommand
from trekjournal.core.config import SyncConfig
from trekjournal.core.types import SyncState


class TestHandle:
    """Tests for JournalRunner.handle."""

    def test_stop(self, journal: Journal) -> None:
        """STOP should end the loop."""
        assert not journal.runner.handle(SyncCommand.STOP)

    @pytest.mark.asyncio
    async def test_offline_sets_banner(self, journal: Journal) -> None:
        """OFFLINE should show the offline banner without draining."""
        assert journal.runner.handle(SyncCommand.OFFLINE)
        assert journal.context.status.state == SyncState.QUEUED_OFFLINE
        assert await journal.engine.wait() is None

    @pytest.mark.asyncio
    async def test_online_triggers_drain(self, journal: Journal, store, queue: PendingQueue) -> None:  # type: ignore[no-untyped-def]
        """ONLINE should announce syncing and start a drain."""
        await queue.append(Draft(title="queued").validate())

        assert journal.runner.handle(SyncCommand.ONLINE)
        assert journal.context.status.state == SyncState.DRAINING
        await journal.engine.wait()

        assert store.inserted_titles == ["queued"]
        assert journal.context.status.state == SyncState.DRAINED_SUCCESS

    @pytest.mark.asyncio
    async def test_online_with_empty_queue_returns_to_idle(self, journal: Journal, store) -> None:  # type: ignore[no-untyped-def]
        """The syncing banner should not stay up when there is nothing to drain."""
        journal.runner.handle(SyncCommand.ONLINE)
        await journal.engine.wait()

        assert journal.context.status.state == SyncState.IDLE
        assert not journal.engine.is_draining
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_probe_while_offline_does_nothing(self, journal: Journal, store, queue: PendingQueue) -> None:  # type: ignore[no-untyped-def]
        """A drain request while offline should be ignored."""
        await queue.append(Draft(title="queued").validate())
        journal.monitor.report(False)

        journal.runner.handle(SyncCommand.PROBE)
        journal.runner.handle(SyncCommand.SYNC)

        assert await journal.engine.wait() is None
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_repeated_triggers_coalesce(self, journal: Journal, store, queue: PendingQueue) -> None:  # type: ignore[no-untyped-def]
        """Several triggers during one drain should result in one drain."""
        await queue.append(Draft(title="queued").validate())

        journal.runner.handle(SyncCommand.SYNC)
        journal.runner.handle(SyncCommand.PROBE)
        journal.runner.handle(SyncCommand.ONLINE)
        await journal.engine.wait()

        assert store.inserted_titles == ["queued"]


class TestRun:
    """Tests for JournalRunner.run."""

    @pytest.mark.asyncio
    async def test_stops_on_stop_command(self, journal: Journal) -> None:
        """The loop should exit when STOP is received."""
        journal.commands.put_nowait(SyncCommand.STOP)

        await asyncio.wait_for(journal.watch(), timeout=1.0)

        assert not journal.runner.running

    @pytest.mark.asyncio
    async def test_stops_on_event(self, journal: Journal) -> None:
        """The loop should exit when the stop event is set."""
        stop_event = asyncio.Event()
        task = asyncio.create_task(journal.watch(stop_event))
        await asyncio.sleep(0.01)
        assert journal.runner.running

        stop_event.set()
        await asyncio.wait_for(task, timeout=1.0)

        assert not journal.runner.running

    @pytest.mark.asyncio
    async def test_crashed_probe_still_finishes_drain(self, journal: Journal, store, queue: PendingQueue) -> None:  # type: ignore[no-untyped-def]
        """Shutdown should wait for the drain even if the probe loop crashed."""
        await queue.append(Draft(title="queued").validate())

        async def crash(stop_event: asyncio.Event) -> None:
            raise RuntimeError("probe loop crashed")

        journal.monitor.run = crash  # type: ignore[method-assign]
        journal.commands.put_nowait(SyncCommand.SYNC)
        journal.commands.put_nowait(SyncCommand.STOP)

        await asyncio.wait_for(journal.watch(), timeout=1.0)

        assert store.inserted_titles == ["queued"]
        assert await queue.load() == []
        assert not journal.runner.running

    @pytest.mark.asyncio
    async def test_reconnect_drains_queue(self, store, queue: PendingQueue) -> None:  # type: ignore[no-untyped-def]
        """Going back online while watching should flush the queue."""
        journal = Journal(store, queue, SyncConfig(probe_interval=0.01), online=False)
        store.reachable = False
        await journal.submit(Draft(title="offline memory"))

        stop_event = asyncio.Event()
        task = asyncio.create_task(journal.watch(stop_event))
        await asyncio.sleep(0.02)
        assert store.inserted_titles == []

        store.reachable = True
        for _ in range(100):
            if store.inserted_titles and await queue.size() == 0:
                break
            await asyncio.sleep(0.01)

        stop_event.set()
        await asyncio.wait_for(task, timeout=1.0)

        assert store.inserted_titles == ["offline memory"]
        assert await queue.load() == []
        assert [e.title for e in journal.context.entries] == ["offline memory"]

    @pytest.mark.asyncio
    async def test_request_sync(self, journal: Journal, store, queue: PendingQueue) -> None:  # type: ignore[no-untyped-def]
        """A manual sync request should drain while the runner is active."""
        journal.monitor.report(False)
        await journal.submit(Draft(title="manual"))
        journal.monitor.report(True)
        journal.runner.request_sync()
        journal.commands.put_nowait(SyncCommand.STOP)

        await asyncio.wait_for(journal.watch(), timeout=1.0)

        assert store.inserted_titles == ["manual"]
