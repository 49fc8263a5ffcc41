"""Fold stored match results into standing records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from swiss_pairing.core.config import ScoringConfig
from swiss_pairing.pairing import StandingRecord, standing_sort_key


class ScoredMatch(Protocol):
    player_one_id: str
    player_two_id: str | None
    winner_id: str | None
    is_tie: bool
    player_one_games: int
    player_two_games: int


def _record(standings: dict[str, StandingRecord], participant_id: str) -> StandingRecord:
    if participant_id not in standings:
        standings[participant_id] = StandingRecord()
    return standings[participant_id]


def compute_standings(
    matches: Iterable[ScoredMatch],
    scoring: ScoringConfig | None = None,
) -> dict[str, StandingRecord]:
    """Build cumulative standing records from match records.

    Byes are credited by convention whether or not a result was entered.
    Matches without a result yet create an empty record for both sides
    but add nothing to it.

    Args:
        matches: Stored matches of one tournament, any order.
        scoring: Point values; defaults to 3/1/0 with a 2-0 bye.

    Returns:
        Standing record per participant identifier seen in ``matches``.
    """
    scoring = scoring or ScoringConfig()
    standings: dict[str, StandingRecord] = {}

    for m in matches:
        one = _record(standings, m.player_one_id)

        if m.player_two_id is None:
            one.points += scoring.bye_points
            one.game_wins += scoring.bye_game_wins
            if scoring.bye_counts_as_win:
                one.wins += 1
            continue

        two = _record(standings, m.player_two_id)

        if m.is_tie:
            for rec in (one, two):
                rec.ties += 1
                rec.points += scoring.tie_points
        elif m.winner_id is not None:
            winner, loser = (one, two) if m.winner_id == m.player_one_id else (two, one)
            winner.wins += 1
            winner.points += scoring.win_points
            loser.losses += 1
            loser.points += scoring.loss_points
        else:
            continue

        one.game_wins += m.player_one_games
        one.game_losses += m.player_two_games
        two.game_wins += m.player_two_games
        two.game_losses += m.player_one_games

    return standings


def leaderboard(standings: Mapping[str, StandingRecord]) -> list[tuple[str, StandingRecord]]:
    """Standings sorted best-first, identifier as the final tiebreak."""
    return sorted(standings.items(), key=lambda item: (standing_sort_key(item[1]), item[0]))
