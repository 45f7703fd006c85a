"""Debounced write-back of edited games to the store.

Each game id moves through:

    clean -> dirty (mark_dirty) -> in flight (flush) -> clean
                                                     -> dirty (store failure)

A failed game stays dirty but no timer is started for it; it is retried by
the next flush, which only happens after some later mutation.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from .constants import PERSIST_DEBOUNCE_SECONDS
from .game import GameRecord
from .models import Notification
from .store import TournamentStore

logger = logging.getLogger('softball.sync')

GameLookup = Callable[[int], Optional[GameRecord]]
Notifier = Callable[[Notification], None]


class SyncState(str, Enum):
    CLEAN = 'clean'
    DIRTY = 'dirty'
    IN_FLIGHT = 'in_flight'


def log_notification(notification: Notification) -> None:
    """Default notifier: send user-facing messages to the log."""
    level = logging.ERROR if notification.is_error else logging.INFO
    logger.log(level, f'{notification.title}: {notification.description}')


class WriteBackSynchronizer:
    """
    Coalesces bursts of game edits into one store call per game.

    Every ``mark_dirty`` restarts a single debounce timer. When the window
    passes quietly, the pending ids are snapshotted and cleared, and each game
    is written with its state at flush time.

    Args:
        store: Persistence collaborator
        get_game: Returns the current in-memory record for a game id
        notify: Receives a destructive Notification per failed write
        delay: Debounce window in seconds
    """

    def __init__(
        self,
        store: TournamentStore,
        get_game: GameLookup,
        notify: Optional[Notifier] = None,
        delay: float = PERSIST_DEBOUNCE_SECONDS,
    ):
        self.store = store
        self.get_game = get_game
        self.notify = notify or log_notification
        self.delay = delay
        self._pending: set[int] = set()
        self._in_flight: set[int] = set()
        self._timer: Optional[asyncio.Task] = None

    @property
    def pending(self) -> frozenset[int]:
        return frozenset(self._pending)

    @property
    def timer_active(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def state(self, game_id: int) -> SyncState:
        if game_id in self._pending:
            return SyncState.DIRTY
        if game_id in self._in_flight:
            return SyncState.IN_FLIGHT
        return SyncState.CLEAN

    def mark_dirty(self, game_id: int) -> None:
        """Queue a game for write-back and restart the debounce window."""
        self._pending.add(game_id)
        self._restart_timer()

    def _restart_timer(self) -> None:
        self._cancel_timer()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug('No running event loop, pending games wait for an explicit flush()')
            return
        self._timer = loop.create_task(self._debounce())

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _debounce(self) -> None:
        await asyncio.sleep(self.delay)
        # Past this point a new mark_dirty starts a fresh timer instead of
        # cancelling the flush already under way.
        self._timer = None
        await self.flush()

    async def flush(self) -> list[int]:
        """
        Write every pending game now.

        A game whose write fails goes back into the pending set without a new
        timer, so it is retried by the next flush instead of being dropped.

        Returns:
            Ids of games whose write failed (they are dirty again)
        """
        snapshot = sorted(self._pending)
        self._pending.clear()
        failed = []

        for game_id in snapshot:
            game = self.get_game(game_id)
            if game is None:
                logger.warning(f'Game {game_id} marked for write-back but not found')
                continue

            self._in_flight.add(game_id)
            try:
                await self.store.upsert_game(game_id, game.to_update_fields())
                logger.debug(f'Game {game_id} saved')
            except Exception as e:
                logger.error(f'Failed to save game {game_id}: {e}')
                self._pending.add(game_id)
                failed.append(game_id)
                self.notify(
                    Notification(
                        title='Save failed',
                        description=f'Changes to game {game_id} could not be saved.',
                        variant='destructive',
                    )
                )
            finally:
                self._in_flight.discard(game_id)

        return failed

    def cancel(self) -> None:
        """Drop the timer and every pending game (used before a full reset)."""
        self._cancel_timer()
        self._pending.clear()

    async def close(self) -> list[int]:
        """Stop the timer and flush whatever is still pending."""
        self._cancel_timer()
        return await self.flush()
