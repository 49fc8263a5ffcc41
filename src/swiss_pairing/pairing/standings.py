"""Standing records and the ranking order used to prioritise pairing."""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields


@dataclass
class StandingRecord:
    """Cumulative results for one participant.

    Attributes:
        points: Match points (3 per win, 1 per tie by default).
        wins: Matches won, byes included when they count as wins.
        losses: Matches lost.
        ties: Matches drawn.
        game_wins: Individual games won across all matches.
        game_losses: Individual games lost across all matches.
    """

    points: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    game_wins: int = 0
    game_losses: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                msg = f"{f.name} must be non-negative, got {value}"
                raise ValueError(msg)

    @property
    def game_differential(self) -> int:
        """Primary tiebreak after points."""
        return self.game_wins - self.game_losses

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses + self.ties


EMPTY_STANDING = StandingRecord()


def standing_sort_key(record: StandingRecord) -> tuple[int, int, int, int]:
    """Deterministic part of the ranking order (ascending means better)."""
    return (-record.points, -record.game_differential, -record.game_wins, -record.wins)


def rank_participants(
    participants: Iterable[str],
    stats: Mapping[str, StandingRecord],
    rng: random.Random | None = None,
) -> list[str]:
    """Order participants best-first for the pairing search.

    Sorts by points, game differential, game wins and wins (all descending).
    Remaining ties are broken by a draw from ``rng`` so that equal players
    are not always seated in the same order. Participants missing from
    ``stats`` rank as if they had an all-zero record.

    Args:
        participants: Participant identifiers to rank.
        stats: Standing records keyed by participant identifier.
        rng: Source for the tiebreak. Defaults to a fresh unseeded Random.

    Returns:
        Participant identifiers, best-ranked first.
    """
    rng = rng or random.Random()  # noqa: S311
    keyed = [
        (standing_sort_key(stats.get(pid, EMPTY_STANDING)), rng.random(), pid)
        for pid in participants
    ]
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [pid for _, _, pid in keyed]
