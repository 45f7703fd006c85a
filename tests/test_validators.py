"""Unit tests for validation functions."""

from softball.game import GameRecord
from softball.models import Player, Team
from softball.validators import validate_game, validate_roster, validate_tournament


class TestRosterValidation:
    """Tests for roster validation."""

    def test_valid_roster(self, teams):
        """Test that a valid roster passes all checks."""
        assert validate_roster(teams[0]) == []

    def test_wrong_back_reference(self):
        """Test a player whose team_id points elsewhere."""
        team = Team(id=1, name='Hawks', players=[Player(id=5, team_id=2, number=1, name='Ana')])
        errors = validate_roster(team)
        assert len(errors) == 1
        assert 'belongs to team 2' in errors[0]

    def test_duplicate_numbers(self):
        team = Team(
            id=1,
            name='Hawks',
            players=[
                Player(id=5, team_id=1, number=9, name='Ana'),
                Player(id=6, team_id=1, number=9, name='Bea'),
            ],
        )
        errors = validate_roster(team)
        assert errors == ['Hawks has duplicate numbers: 9']

    def test_blank_name(self):
        team = Team(id=1, name='Hawks', players=[Player(id=5, team_id=1, number=1, name=' ')])
        assert 'has no name' in validate_roster(team)[0]

    def test_empty_roster(self):
        """Test empty roster (edge case)."""
        assert validate_roster(Team(id=1, name='Hawks')) == []


class TestGameValidation:
    """Tests for game validation."""

    def test_valid_game(self):
        game = GameRecord(id=1, team1_id=1, team2_id=2)
        game.update_inning(0, 0, '2')
        assert validate_game(game, {1, 2}) == []

    def test_unknown_team(self):
        game = GameRecord(id=1, team1_id=1, team2_id=9)
        assert validate_game(game, {1, 2}) == ['Game 1 references unknown team 9']

    def test_same_team_both_sides(self):
        game = GameRecord(id=1, team1_id=1, team2_id=1)
        assert 'both sides' in validate_game(game, {1})[0]

    def test_score_disagrees_with_innings(self):
        """Test a stored score that does not match the innings grid."""
        game = GameRecord(id=1, team1_id=1, team2_id=2, innings=[['1', '0']], score1=4, score2=0)
        errors = validate_game(game, {1, 2})
        assert len(errors) == 1
        assert 'does not match innings total 1-0' in errors[0]


class TestTournamentValidation:
    """Tests for whole-tournament validation."""

    def test_full_schedule_is_valid(self, teams, games):
        assert validate_tournament(teams, games) == []

    def test_missing_games(self, teams, games):
        errors = validate_tournament(teams, games[1:15])
        assert 'Missing preliminary games: 1' in errors
        assert 'Missing championship game 16' in errors

    def test_player_on_two_rosters(self, teams, games):
        teams[1].players.append(Player(id=11, team_id=2, number=9, name='Ana'))
        errors = validate_tournament(teams, games)
        assert errors == ['Players on more than one roster: 11']

    def test_tied_game_reported(self, teams, games):
        games[0].score1, games[0].score2 = 4, 4
        assert validate_tournament(teams, games) == ['Game 1 is tied 4-4']
