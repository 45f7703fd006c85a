"""Tests for the debounced write-back synchronizer."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from softball.game import GameRecord
from softball.store import StoreError
from softball.sync import SyncState, WriteBackSynchronizer


@pytest.fixture
def records():
    return {i: GameRecord(id=i, team1_id=1, team2_id=2) for i in (1, 2, 3)}


@pytest.fixture
def notify():
    return Mock()


@pytest.fixture
def sync(store, records, notify):
    return WriteBackSynchronizer(store, records.get, notify, delay=0.05)


class TestDebounce:
    """Tests for coalescing edits."""

    @pytest.mark.anyio
    async def test_burst_collapses_to_one_write(self, sync, store, records):
        """Test that several edits in one window produce one call with the latest state."""
        records[1].update_field('score1', '1')
        sync.mark_dirty(1)
        records[1].update_field('score1', '2')
        sync.mark_dirty(1)
        records[1].update_field('hits1', '4')
        sync.mark_dirty(1)

        await asyncio.sleep(0.2)

        assert len(store.game_writes) == 1
        game_id, fields = store.game_writes[0]
        assert game_id == 1
        assert fields['score1'] == 2
        assert fields['hits1'] == 4
        assert sync.state(1) is SyncState.CLEAN

    @pytest.mark.anyio
    async def test_one_write_per_game(self, sync, store):
        for game_id in (2, 1, 2, 3):
            sync.mark_dirty(game_id)

        await asyncio.sleep(0.2)

        assert sorted(game_id for game_id, _ in store.game_writes) == [1, 2, 3]

    @pytest.mark.anyio
    async def test_new_mutation_restarts_window(self, sync, store):
        """Test that the flush waits until edits stop."""
        sync.mark_dirty(1)
        await asyncio.sleep(0.02)
        sync.mark_dirty(2)
        await asyncio.sleep(0.02)

        assert store.game_writes == []
        assert sync.state(1) is SyncState.DIRTY

        await asyncio.sleep(0.2)
        assert len(store.game_writes) == 2


class TestFailures:
    """Tests for store failures during flush."""

    @pytest.mark.anyio
    async def test_failed_write_notifies_and_stays_dirty(self, sync, store, notify):
        store.fail = True
        sync.mark_dirty(1)

        await asyncio.sleep(0.2)

        assert sync.pending == frozenset({1})
        assert not sync.timer_active
        notification = notify.call_args.args[0]
        assert notification.is_error
        assert 'game 1' in notification.description

    @pytest.mark.anyio
    async def test_failed_game_retried_with_next_mutation(self, sync, store):
        """Test that a later edit to another game flushes the failed one too."""
        store.fail = True
        sync.mark_dirty(1)
        await asyncio.sleep(0.2)

        store.fail = False
        sync.mark_dirty(2)
        await asyncio.sleep(0.2)

        assert sorted(game_id for game_id, _ in store.game_writes) == [1, 2]
        assert sync.pending == frozenset()

    @pytest.mark.anyio
    async def test_flush_returns_failed_ids(self, records, notify):
        store = Mock()
        store.upsert_game = AsyncMock(side_effect=[None, StoreError('boom')])
        sync = WriteBackSynchronizer(store, records.get, notify, delay=10)
        sync.mark_dirty(1)
        sync.mark_dirty(2)

        failed = await sync.close()

        assert failed == [2]
        assert store.upsert_game.await_count == 2

    @pytest.mark.anyio
    async def test_explicit_flush_retries_failed_game(self, sync, store, notify):
        """Test that a failed game is written by the following flush."""
        store.fail = True
        sync.mark_dirty(1)
        assert await sync.flush() == [1]
        assert notify.call_count == 1

        store.fail = False
        assert await sync.flush() == []

        assert [game_id for game_id, _ in store.game_writes] == [1]
        assert notify.call_count == 1


class TestCancel:
    """Tests for dropping pending work."""

    @pytest.mark.anyio
    async def test_cancel_drops_pending(self, sync, store):
        sync.mark_dirty(1)
        sync.cancel()

        await asyncio.sleep(0.2)

        assert store.game_writes == []
        assert sync.pending == frozenset()

    @pytest.mark.anyio
    async def test_unknown_game_skipped(self, sync, store):
        sync.mark_dirty(42)
        failed = await sync.close()
        assert failed == []
        assert store.game_writes == []


def test_mark_dirty_without_event_loop(store, records):
    """Test that outside an event loop edits wait for an explicit flush."""
    sync = WriteBackSynchronizer(store, records.get, delay=0.01)
    sync.mark_dirty(1)

    assert sync.state(1) is SyncState.DIRTY
    assert not sync.timer_active

    asyncio.run(sync.flush())
    assert store.game_writes[0][0] == 1
