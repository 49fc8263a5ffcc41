"""Tests for pairing history reconstruction."""

from swiss_pairing.models import TournamentMatch
from swiss_pairing.pairing import (
    Pairing,
    PairingHistory,
    build_swiss_pairs,
    bye_key,
    pair_key,
    repeated_keys,
)


def _match(one: str, two: str | None, round_number: int = 1) -> TournamentMatch:
    return TournamentMatch(
        tournament_id="t", round=round_number, player_one_id=one, player_two_id=two
    )


class TestPairingHistory:
    """Tests for PairingHistory."""

    def test_from_matches_canonicalizes(self):
        """Test stored side order does not matter."""
        history = PairingHistory.from_matches([_match("b", "a")])

        assert history.previous_pairs == {pair_key("a", "b")}
        assert history.has_played("a", "b")
        assert history.has_played("b", "a")

    def test_from_matches_records_byes(self):
        """Test a missing second side is a bye in both sets."""
        history = PairingHistory.from_matches([_match("c", None)])

        assert bye_key("c") in history.previous_pairs
        assert history.bye_history == {"c"}
        assert history.had_bye("c")
        assert not history.had_bye("a")

    def test_with_round_is_monotonic(self):
        """Test adding a round keeps old keys and leaves the earlier snapshot intact."""
        before = PairingHistory.from_matches([_match("a", "b")])

        after = before.with_round([Pairing(1, "c", "d"), Pairing(2, "e")])

        assert before.previous_pairs <= after.previous_pairs
        assert after.has_played("c", "d")
        assert after.had_bye("e")
        assert not before.has_played("c", "d")

    def test_repeated_keys(self):
        """Test repeats against history are reported."""
        history = PairingHistory.from_matches([_match("a", "b"), _match("c", None)])

        repeats = repeated_keys(
            [Pairing(1, "b", "a"), Pairing(2, "c"), Pairing(3, "d", "e")], history
        )

        assert repeats == [pair_key("a", "b"), bye_key("c")]

    def test_new_round_keys_absent_before_present_after(self):
        """Test round trip: new keys are absent before and present after storing."""
        stored = [_match("P1", "P2"), _match("P3", "P4"), _match("P5", None)]
        history = PairingHistory.from_matches(stored)
        players = ["P1", "P2", "P3", "P4", "P5"]

        pairings = build_swiss_pairs(players, history.previous_pairs, history.bye_history, {})
        assert pairings is not None
        assert not repeated_keys(pairings, history)

        stored += [_match(p.player_one, p.player_two, 2) for p in pairings]
        rebuilt = PairingHistory.from_matches(stored)

        assert all(p.key in rebuilt.previous_pairs for p in pairings)
        assert rebuilt == history.with_round(pairings)
