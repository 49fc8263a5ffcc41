"""Tests for folding match results into standings."""

from swiss_pairing.core.config import ScoringConfig
from swiss_pairing.models import TournamentMatch
from swiss_pairing.pairing import StandingRecord
from swiss_pairing.services.scoring import compute_standings, leaderboard


def _match(one, two, winner=None, tie=False, games=(0, 0)):
    return TournamentMatch(
        tournament_id="t",
        player_one_id=one,
        player_two_id=two,
        winner_id=winner,
        loser_id=None if winner is None else (two if winner == one else one),
        is_tie=tie,
        player_one_games=games[0],
        player_two_games=games[1],
    )


class TestComputeStandings:
    """Tests for compute_standings."""

    def test_win_and_loss(self):
        """Test a 2-1 win credits points, wins and games."""
        standings = compute_standings([_match("a", "b", winner="b", games=(1, 2))])

        assert standings["b"] == StandingRecord(points=3, wins=1, game_wins=2, game_losses=1)
        assert standings["a"] == StandingRecord(losses=1, game_wins=1, game_losses=2)

    def test_tie(self):
        """Test a tie gives both sides a tie point."""
        standings = compute_standings([_match("a", "b", tie=True, games=(1, 1))])

        for pid in ("a", "b"):
            assert standings[pid].ties == 1
            assert standings[pid].points == 1
            assert standings[pid].game_differential == 0

    def test_bye_credited_without_result(self):
        """Test a bye counts as a 2-0 win by default."""
        standings = compute_standings([_match("a", None)])

        assert standings["a"] == StandingRecord(points=3, wins=1, game_wins=2)

    def test_unreported_match_adds_nothing(self):
        """Test pending matches create empty records only."""
        standings = compute_standings([_match("a", "b", games=(2, 0))])

        assert standings == {"a": StandingRecord(), "b": StandingRecord()}

    def test_custom_scoring(self):
        """Test configured point values are used."""
        scoring = ScoringConfig(
            win_points=2, bye_points=1, bye_counts_as_win=False, bye_game_wins=0
        )
        standings = compute_standings(
            [_match("a", "b", winner="a"), _match("c", None)], scoring
        )

        assert standings["a"].points == 2
        assert standings["c"] == StandingRecord(points=1)


class TestLeaderboard:
    """Tests for leaderboard ordering."""

    def test_sorted_best_first_with_id_tiebreak(self):
        """Test ordering by standing then identifier."""
        standings = {
            "zed": StandingRecord(points=3),
            "amy": StandingRecord(points=3),
            "bob": StandingRecord(points=6),
        }

        assert [pid for pid, _ in leaderboard(standings)] == ["bob", "amy", "zed"]
