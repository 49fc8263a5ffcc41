"""Self-test harness: simulate whole tournaments and verify every round.

Each round is paired from the accumulated history, checked for coverage,
repeats and bye rotation, then scored with random best-of-three results.
"""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from swiss_pairing.core.config import TournamentConfig
from swiss_pairing.models import TournamentMatch
from swiss_pairing.pairing import (
    BYE_ID,
    Pairing,
    PairingHistory,
    PairingStatus,
    StandingRecord,
    pair_round,
    repeated_keys,
)
from swiss_pairing.services.scoring import compute_standings, leaderboard

logger = structlog.get_logger()

SIMULATION_TOURNAMENT_ID = "simulation"


@dataclass
class RoundReport:
    round_number: int
    status: PairingStatus
    pairings: list[Pairing] = field(default_factory=list)
    violations: list[str] = field(default_factory=list)


@dataclass
class SimulationReport:
    """Per-round outcomes and final standings of one simulated tournament."""

    num_players: int
    rounds: list[RoundReport] = field(default_factory=list)
    standings: list[tuple[str, StandingRecord]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no round broke a pairing rule.

        A round the history leaves no strict pairing for is not a defect of the
        engine; it is reported through ``exhausted_round`` instead.
        """
        return not any(r.violations for r in self.rounds)

    @property
    def exhausted_round(self) -> int | None:
        """First round that could not be paired strictly, if any."""
        for r in self.rounds:
            if r.status is not PairingStatus.STRICT:
                return r.round_number
        return None

    @property
    def violations(self) -> list[str]:
        return [f"round {r.round_number}: {v}" for r in self.rounds for v in r.violations]


def verify_round(
    pairings: Sequence[Pairing],
    participants: Sequence[str],
    history: PairingHistory,
    status: PairingStatus = PairingStatus.STRICT,
) -> list[str]:
    """Check one round's pairings against the participants and prior history.

    Repeats are only violations where ``status`` forbids them: a
    ``REPEAT_BYE`` round may repeat a bye, an ``UNCONSTRAINED`` round may
    repeat anything.

    Returns:
        Human-readable violations; empty when the round is valid.
    """
    violations: list[str] = []
    expected = set(participants)
    seen = Counter(pid for p in pairings for pid in p.players)

    missing = sorted(expected - set(seen))
    if missing:
        violations.append(f"unpaired participants: {', '.join(missing)}")
    duplicated = sorted(pid for pid, count in seen.items() if count > 1)
    if duplicated:
        violations.append(f"participants paired more than once: {', '.join(duplicated)}")
    unknown = sorted(set(seen) - expected)
    if unknown:
        violations.append(f"unknown participants: {', '.join(unknown)}")

    byes = [p.player_one for p in pairings if p.is_bye]
    if len(byes) > 1:
        violations.append(f"more than one bye: {', '.join(byes)}")
    if byes and len(participants) % 2 == 0:
        violations.append("bye assigned with an even participant count")

    repeats = [] if status is PairingStatus.UNCONSTRAINED else repeated_keys(pairings, history)
    for a, b in repeats:
        if BYE_ID not in (a, b):
            violations.append(f"repeat pairing {a} vs {b}")
        elif status is not PairingStatus.REPEAT_BYE:
            violations.append(f"repeat bye for {b if a == BYE_ID else a}")

    tables = [p.table for p in pairings]
    if tables != list(range(1, len(pairings) + 1)):
        violations.append(f"table numbers out of sequence: {tables}")

    return violations


def _play(pairing: Pairing, round_number: int, rng: random.Random) -> TournamentMatch:
    match = TournamentMatch(
        tournament_id=SIMULATION_TOURNAMENT_ID,
        round=round_number,
        table_number=pairing.table,
        player_one_id=pairing.player_one,
        player_two_id=pairing.player_two,
    )
    if pairing.player_two is None:
        return match

    loser_games = rng.choice((0, 1))
    if rng.random() < 0.5:
        match.winner_id, match.loser_id = pairing.player_one, pairing.player_two
        match.player_one_games, match.player_two_games = 2, loser_games
    else:
        match.winner_id, match.loser_id = pairing.player_two, pairing.player_one
        match.player_one_games, match.player_two_games = loser_games, 2
    return match


def simulate_tournament(
    num_players: int,
    rounds: int,
    *,
    config: TournamentConfig | None = None,
    rng: random.Random | None = None,
) -> SimulationReport:
    """Run a full tournament with random results.

    Stops early at the first round that cannot be paired at all.

    Args:
        num_players: Participants, named ``P1`` to ``Pn``.
        rounds: Rounds to play.
        config: Pairing and scoring settings.
        rng: Source for tiebreaks and results; seeded from ``config.seed``
            when omitted and a seed is configured.

    Returns:
        The simulation report.
    """
    config = config or TournamentConfig()
    if rng is None:
        rng = random.Random(config.seed)  # noqa: S311

    players = [f"P{i}" for i in range(1, num_players + 1)]
    report = SimulationReport(num_players=num_players)
    matches: list[TournamentMatch] = []
    history = PairingHistory()

    for round_number in range(1, rounds + 1):
        stats = compute_standings(matches, config.scoring)
        outcome = pair_round(
            players,
            history.previous_pairs,
            history.bye_history,
            stats,
            config.pairing,
            rng,
        )
        violations = (
            verify_round(outcome.pairings, players, history, outcome.status)
            if outcome.succeeded
            else []
        )
        report.rounds.append(
            RoundReport(round_number, outcome.status, outcome.pairings, violations)
        )
        logger.debug(
            "simulated_round",
            players=num_players,
            round=round_number,
            status=outcome.status.value,
            violations=len(violations),
        )
        if not outcome.succeeded:
            break

        matches.extend(_play(p, round_number, rng) for p in outcome.pairings)
        history = history.with_round(outcome.pairings)

    report.standings = leaderboard(compute_standings(matches, config.scoring))
    return report
