"""Tournament session: the live state behind the scoring screens.

Edits flow through here:

    innings / field edit -> GameRecord -> standings (preliminary games only)
        -> championship re-seed -> debounced write-back

Box score saves go straight to the store and only update memory once the
store accepts them.
"""

import logging
from typing import Any, Mapping, Optional

from .config import get_config
from .constants import CHAMPIONSHIP_GAME_ID
from .game import GameField, GameRecord, coerce_batting_update, coerce_pitching_update
from .innings import empty_innings
from .leaderboard import get_batting_leaders, get_pitching_leaders
from .models import BattingLeader, Notification, PitchingLeader, Player, Standing, Team
from .schemas import TournamentConfig
from .seeding import championship_started, determine_champion, seed_championship
from .standings import calculate_standings
from .store import PLAYER_UPDATE_FIELDS, TournamentStore
from .sync import Notifier, WriteBackSynchronizer, log_notification
from .utils import parse_int
from .validators import validate_tournament

logger = logging.getLogger('softball.tournament')


class Tournament:
    """
    In-memory tournament with derived standings and a seeded final.

    Args:
        teams: Teams with rosters
        games: Every game record; the championship (id 16) is picked out
        store: Persistence collaborator
        notify: Receives user-facing notifications (defaults to the log)
        config: Tournament settings (defaults to get_config())
        freeze_championship_once_started: Stop re-seeding the final once
            anything has been entered for it
    """

    def __init__(
        self,
        teams: list[Team],
        games: list[GameRecord],
        store: TournamentStore,
        notify: Optional[Notifier] = None,
        config: Optional[TournamentConfig] = None,
        freeze_championship_once_started: bool = False,
    ):
        self.config = config or get_config()
        self.teams = teams
        self.store = store
        self.notify = notify or log_notification
        self.freeze_championship_once_started = freeze_championship_once_started

        innings = self.config.regulation_innings
        self.preliminary_games = sorted(
            (game.ensure_innings(innings) for game in games if not game.is_championship),
            key=lambda game: game.id,
        )
        championship = next((game for game in games if game.is_championship), None)
        if championship is None:
            logger.info('No championship game stored, starting an empty one')
            championship = GameRecord(
                id=CHAMPIONSHIP_GAME_ID,
                day=self.config.championship_day,
                time=self.config.championship_time,
                innings=empty_innings(innings),
            )
        self.championship_game = championship.ensure_innings(innings)

        self.standings: list[Standing] = []
        self.champion: Optional[str] = None

        self.sync = WriteBackSynchronizer(
            store,
            self.get_game,
            self.notify,
            delay=self.config.persist_debounce_ms / 1000,
        )

        self.recalculate_standings()
        self.check_champion(announce=False)

    @classmethod
    async def load(cls, store: TournamentStore, **kwargs) -> 'Tournament':
        """Fetch teams and games from the store and build a session."""
        teams = await store.fetch_teams_with_rosters()
        games = await store.fetch_games()
        logger.info(f'Loaded {len(teams)} teams and {len(games)} games')

        for warning in validate_tournament(teams, games):
            logger.warning(warning)

        return cls(teams, games, store, **kwargs)

    @property
    def games(self) -> list[GameRecord]:
        return [*self.preliminary_games, self.championship_game]

    def get_game(self, game_id: int) -> Optional[GameRecord]:
        if game_id == self.championship_game.id:
            return self.championship_game
        return next((game for game in self.preliminary_games if game.id == game_id), None)

    def find_team(self, team_id: Optional[int]) -> Optional[Team]:
        return next((team for team in self.teams if team.id == team_id), None)

    def find_player(self, player_id: int) -> Optional[Player]:
        for team in self.teams:
            player = team.find_player(player_id)
            if player is not None:
                return player
        return None

    def _require_game(self, game_id: int) -> Optional[GameRecord]:
        game = self.get_game(game_id)
        if game is None:
            logger.warning(f'Edit for unknown game {game_id} ignored')
        return game

    # --- Game edits ---

    def change_game_field(self, game_id: int, game_field: GameField | str, value: Any) -> bool:
        """
        Apply a direct edit to a score, hits, errors, day or time field.

        Returns:
            True if the game changed
        """
        game = self._require_game(game_id)
        if game is None:
            return False

        if not game.update_field(game_field, value):
            return False

        self.sync.mark_dirty(game.id)
        self._after_game_change(game)
        return True

    def change_inning(self, game_id: int, inning_index: int, side: int, value: Optional[str]) -> bool:
        """Edit one innings cell; the game's scores follow the grid."""
        game = self._require_game(game_id)
        if game is None:
            return False

        game.update_inning(inning_index, side, value, self.config.regulation_innings)
        self.sync.mark_dirty(game.id)
        self._after_game_change(game)
        return True

    def swap_teams(self, game_id: int) -> bool:
        """Exchange the two sides of a game, line score and innings included."""
        game = self._require_game(game_id)
        if game is None:
            return False

        game.swap_teams()
        self.sync.mark_dirty(game.id)
        self._after_game_change(game)
        return True

    def _after_game_change(self, game: GameRecord) -> None:
        if game.is_championship:
            self.check_champion()
        else:
            self.recalculate_standings()

    # --- Box score ---

    async def save_batting(self, game_id: int, player_id: int, stats: Mapping[Any, Any]) -> bool:
        """
        Persist a batting line edit, then merge it into the game.

        Returns:
            False if the game is unknown or the store rejected the write
        """
        game = self._require_game(game_id)
        if game is None:
            return False

        update = coerce_batting_update(stats)
        try:
            await self.store.upsert_batting_stat(player_id, game_id, update)
        except Exception as e:
            logger.error(f'Failed to save batting stats for player {player_id}: {e}')
            self._notify_save_failed(f'Batting stats for player {player_id} were not saved.')
            return False

        game.upsert_batting_stat(player_id, update)
        return True

    async def save_pitching(self, game_id: int, player_id: int, stats: Mapping[Any, Any]) -> bool:
        """Persist a pitching line edit, then merge it into the game."""
        game = self._require_game(game_id)
        if game is None:
            return False

        update = coerce_pitching_update(stats)
        try:
            await self.store.upsert_pitching_stat(player_id, game_id, update)
        except Exception as e:
            logger.error(f'Failed to save pitching stats for player {player_id}: {e}')
            self._notify_save_failed(f'Pitching stats for player {player_id} were not saved.')
            return False

        game.upsert_pitching_stat(player_id, update)
        return True

    # --- Roster ---

    async def update_player(self, player_id: int, fields: Mapping[str, Any]) -> bool:
        """
        Edit a player's number, name, role or place of birth.

        Raises:
            ValueError: If a field is not editable
        """
        unknown = set(fields) - PLAYER_UPDATE_FIELDS
        if unknown:
            raise ValueError(f'Unknown player fields: {", ".join(sorted(unknown))}')

        player = self.find_player(player_id)
        if player is None:
            logger.warning(f'Edit for unknown player {player_id} ignored')
            return False

        update = {
            name: parse_int(value) if name == 'number' else str(value)
            for name, value in fields.items()
        }
        try:
            await self.store.update_player(player_id, update)
        except Exception as e:
            logger.error(f'Failed to update player {player_id}: {e}')
            self._notify_save_failed(f'Player {player.name} was not updated.')
            return False

        for name, value in update.items():
            setattr(player, name, value)
        return True

    # --- Derived state ---

    def recalculate_standings(self) -> bool:
        """
        Rebuild standings from the preliminary games and re-seed the final.

        Returns:
            False if a tied game blocked the update (previous table kept)
        """
        standings = calculate_standings(self.teams, self.preliminary_games)
        if standings is None:
            return False

        self.standings = standings

        if self.freeze_championship_once_started and championship_started(self.championship_game):
            logger.debug('Championship under way, seeding frozen')
        elif seed_championship(self.championship_game, standings):
            self.sync.mark_dirty(self.championship_game.id)
            self.check_champion()
        return True

    def check_champion(self, announce: bool = True) -> Optional[str]:
        """Update ``champion`` from the final's score, announcing a new winner."""
        team = determine_champion(self.championship_game, self.teams)
        name = team.name if team else None
        if name is not None and name != self.champion and announce:
            self.notify(Notification(title='Champion decided', description=f'{name} wins the title.'))
        self.champion = name
        return name

    def batting_leaders(self) -> list[BattingLeader]:
        return get_batting_leaders(
            self.games,
            self.teams,
            limit=self.config.leaderboard_limit,
            pa_per_game=self.config.batting_pa_per_game,
        )

    def pitching_leaders(self) -> list[PitchingLeader]:
        return get_pitching_leaders(
            self.games,
            self.teams,
            limit=self.config.leaderboard_limit,
            ip_per_game=self.config.pitching_ip_per_game,
        )

    # --- Reset ---

    async def reset(self) -> bool:
        """
        Clear every score, innings grid and box score, here and in the store.

        Pending write-backs are dropped first so a late flush cannot bring
        old scores back. Rosters and preliminary pairings are kept; the
        final loses its teams until standings re-seed it.

        Returns:
            True if the store reset succeeded
        """
        self.sync.cancel()

        innings = self.config.regulation_innings
        for game in self.games:
            game.clear_scores(innings)
        self.championship_game.set_teams(None, None)
        self.champion = None

        try:
            await self.store.reset_all_scores_and_stats()
        except Exception as e:
            logger.error(f'Tournament reset failed: {e}')
            self.notify(
                Notification(
                    title='Reset failed',
                    description='The stored tournament could not be cleared.',
                    variant='destructive',
                )
            )
            return False

        self.notify(Notification(title='Tournament reset', description='All scores were cleared.'))
        self.recalculate_standings()
        return True

    def _notify_save_failed(self, description: str) -> None:
        self.notify(Notification(title='Save failed', description=description, variant='destructive'))
