"""Unit tests for the batting and pitching leaderboards."""

import pytest

from softball.game import GameRecord
from softball.leaderboard import (
    add_innings_pitched,
    aggregate_player_totals,
    get_batting_leaders,
    get_pitching_leaders,
    ip_to_outs,
    outs_to_ip,
)
from softball.models import Player, Team


@pytest.fixture
def league():
    """Two teams of two players and three completed games between them."""
    teams = [
        Team(id=1, name='Hawks', players=[
            Player(id=11, team_id=1, number=1, name='Ana'),
            Player(id=12, team_id=1, number=2, name='Bea'),
        ]),
        Team(id=2, name='Owls', players=[
            Player(id=21, team_id=2, number=1, name='Cal'),
            Player(id=22, team_id=2, number=2, name='Dee'),
        ]),
    ]
    games = [
        GameRecord(id=i, team1_id=1, team2_id=2, score1=i + 1, score2=i) for i in (1, 2, 3)
    ]
    return teams, games


class TestInningsPitched:
    """Tests for outs-based innings pitched arithmetic."""

    def test_partial_innings_add_through_outs(self):
        """Test that 4.2 + 4.2 is 9.1, not 8.4."""
        assert add_innings_pitched(4.2, 4.2) == pytest.approx(9.1)

    def test_ip_to_outs(self):
        assert ip_to_outs(4.2) == 14
        assert ip_to_outs(None) == 0

    def test_outs_to_ip(self):
        assert outs_to_ip(28) == pytest.approx(9.1)
        assert outs_to_ip(21) == 7


class TestAggregation:
    """Tests for aggregate_player_totals."""

    def test_team_games_count_completed_only(self, league):
        teams, games = league
        games.append(GameRecord(id=4, team1_id=1, team2_id=2, score1=1))

        _, team_games = aggregate_player_totals(games, teams)

        assert team_games == {1: 3, 2: 3}

    def test_stat_rows_in_incomplete_games_ignored(self, league):
        teams, games = league
        unfinished = GameRecord(id=4, team1_id=1, team2_id=2)
        unfinished.upsert_batting_stat(11, {'hits': 3})
        games.append(unfinished)

        totals, _ = aggregate_player_totals(games, teams)

        assert totals[11].batting['hits'] == 0

    def test_unknown_player_ignored(self, league):
        teams, games = league
        games[0].upsert_batting_stat(99, {'hits': 1})
        totals, _ = aggregate_player_totals(games, teams)
        assert 99 not in totals


class TestBattingLeaders:
    """Tests for get_batting_leaders."""

    def test_plate_appearance_threshold(self, league):
        """Test that with 3 team games, 7 PA qualifies and 6 PA does not."""
        teams, games = league
        for game, (pa_ana, pa_bea) in zip(games, [(3, 2), (2, 2), (2, 2)]):
            game.upsert_batting_stat(11, {'plate_appearances': pa_ana, 'at_bats': pa_ana, 'hits': 1})
            game.upsert_batting_stat(12, {'plate_appearances': pa_bea, 'at_bats': pa_bea, 'hits': 1})

        leaders = get_batting_leaders(games, teams)

        assert [leader.name for leader in leaders] == ['Ana']
        assert leaders[0].avg == pytest.approx(3 / 7)
        assert leaders[0].games_played == 3

    def test_sorted_by_average_then_home_runs(self, league):
        teams, games = league
        for game in games:
            game.upsert_batting_stat(11, {'plate_appearances': 3, 'at_bats': 3, 'hits': 1})
            game.upsert_batting_stat(12, {'plate_appearances': 3, 'at_bats': 3, 'hits': 1, 'home_runs': 1})
            game.upsert_batting_stat(21, {'plate_appearances': 3, 'at_bats': 3, 'hits': 2})

        leaders = get_batting_leaders(games, teams)

        assert [leader.player_id for leader in leaders] == [21, 12, 11]

    def test_limit(self, league):
        teams, games = league
        for game in games:
            for player_id in (11, 12, 21, 22):
                game.upsert_batting_stat(player_id, {'plate_appearances': 3, 'at_bats': 3})
        assert len(get_batting_leaders(games, teams, limit=2)) == 2

    def test_no_completed_games(self, league):
        teams, _ = league
        assert get_batting_leaders([GameRecord(id=1, team1_id=1, team2_id=2)], teams) == []


class TestPitchingLeaders:
    """Tests for get_pitching_leaders."""

    def test_era_on_seven_inning_scale(self, league):
        """Test ERA = ER * 21 / outs over 7 full innings."""
        teams, games = league
        games[0].upsert_pitching_stat(11, {'innings_pitched': 7, 'earned_runs': 2})
        games = games[:1]

        leaders = get_pitching_leaders(games, teams)

        assert leaders[0].era == pytest.approx(2.0)

    def test_innings_threshold(self, league):
        """Test that 2.3 innings per team game are needed to qualify."""
        teams, games = league
        for game in games:
            game.upsert_pitching_stat(11, {'innings_pitched': 2.0})
            game.upsert_pitching_stat(21, {'innings_pitched': 2.1})

        leaders = get_pitching_leaders(games, teams)

        # 3 x 2.0 = 6.0 innings (< 6.9); 3 x 2.1 = 7.0 innings qualifies
        assert [leader.player_id for leader in leaders] == [21]
        assert leaders[0].innings_pitched == pytest.approx(7.0)

    def test_sorted_by_era_then_strikeouts(self, league):
        teams, games = league
        for game in games:
            game.upsert_pitching_stat(11, {'innings_pitched': 3, 'earned_runs': 1, 'strike_outs': 2})
            game.upsert_pitching_stat(21, {'innings_pitched': 3, 'earned_runs': 1, 'strike_outs': 4})
            game.upsert_pitching_stat(22, {'innings_pitched': 3, 'earned_runs': 0})

        leaders = get_pitching_leaders(games, teams)

        assert [leader.player_id for leader in leaders] == [22, 21, 11]
