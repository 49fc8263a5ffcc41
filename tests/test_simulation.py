"""Tests for the simulation harness."""

import random

from swiss_pairing.core.config import PairingConfig, TournamentConfig
from swiss_pairing.pairing import Pairing, PairingHistory, PairingStatus
from swiss_pairing.simulation import simulate_tournament, verify_round


class TestVerifyRound:
    """Tests for round verification."""

    def test_valid_round_has_no_violations(self):
        """Test a correct round passes."""
        pairings = [Pairing(1, "a", "b"), Pairing(2, "c")]
        assert verify_round(pairings, ["a", "b", "c"], PairingHistory()) == []

    def test_reports_repeats_and_coverage(self):
        """Test repeats, missing players and repeat byes are reported."""
        history = PairingHistory().with_round([Pairing(1, "a", "b"), Pairing(2, "c")])
        pairings = [Pairing(1, "b", "a"), Pairing(2, "c")]

        violations = verify_round(pairings, ["a", "b", "c", "d"], history)

        assert "unpaired participants: d" in violations
        assert "repeat pairing a vs b" in violations
        assert "repeat bye for c" in violations
        assert "bye assigned with an even participant count" in violations

    def test_relaxed_status_permits_repeats(self):
        """Test repeat byes and pairs are tolerated only by the matching status."""
        history = PairingHistory().with_round([Pairing(1, "a", "b"), Pairing(2, "c")])
        pairings = [Pairing(1, "a", "b"), Pairing(2, "c")]
        players = ["a", "b", "c"]

        assert verify_round(pairings, players, history, PairingStatus.UNCONSTRAINED) == []
        assert verify_round(pairings, players, history, PairingStatus.REPEAT_BYE) == [
            "repeat pairing a vs b"
        ]

    def test_reports_double_booking(self):
        """Test a participant seated twice is reported."""
        pairings = [Pairing(1, "a", "b"), Pairing(2, "a", "c")]

        violations = verify_round(pairings, ["a", "b", "c"], PairingHistory())

        assert "participants paired more than once: a" in violations


class TestSimulateTournament:
    """Tests for full simulated tournaments."""

    def test_even_field_stays_strict(self):
        """Test 10 players keep strict pairings for 5 rounds."""
        report = simulate_tournament(10, 5, rng=random.Random(5))

        assert report.ok, report.violations
        assert len(report.rounds) == 5
        assert len(report.standings) == 10

    def test_odd_field_rotates_byes(self):
        """Test 9 players get a different bye recipient every round."""
        report = simulate_tournament(9, 4, rng=random.Random(11))

        assert report.ok, report.violations
        byes = [p.player_one for r in report.rounds for p in r.pairings if p.is_bye]
        assert len(byes) == 4
        assert len(set(byes)) == 4

    def test_stops_at_first_failed_round(self):
        """Test a strict-only simulation stops when pairing becomes impossible."""
        config = TournamentConfig(
            pairing=PairingConfig(allow_repeat_byes=False, allow_unconstrained=False)
        )

        report = simulate_tournament(2, 3, config=config, rng=random.Random(0))

        assert [r.status for r in report.rounds] == [PairingStatus.STRICT, PairingStatus.FAILED]
        assert report.ok
        assert report.exhausted_round == 2
        assert report.violations == []

    def test_strict_exhaustion_is_not_a_violation(self):
        """Test six players with random results never report a broken rule."""
        config = TournamentConfig(
            pairing=PairingConfig(allow_repeat_byes=False, allow_unconstrained=False)
        )

        reports = [
            simulate_tournament(6, 5, config=config, rng=random.Random(seed))
            for seed in range(20)
        ]

        assert all(r.ok for r in reports), [r.violations for r in reports]
        # Some results leave two triangles of unplayed pairs after round 3.
        assert any(r.exhausted_round == 4 for r in reports)
        for r in reports:
            if r.exhausted_round is not None:
                assert r.rounds[-1].status is PairingStatus.FAILED

    def test_relaxed_rounds_allow_their_repeats(self):
        """Test fallback rounds are checked only for the rules they keep."""
        report = simulate_tournament(2, 3, rng=random.Random(0))

        assert report.ok, report.violations
        assert [r.status for r in report.rounds] == [
            PairingStatus.STRICT,
            PairingStatus.UNCONSTRAINED,
            PairingStatus.UNCONSTRAINED,
        ]
        assert report.exhausted_round == 2
