"""Pairing history: which pairs have met and who has had a bye."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from swiss_pairing.pairing.keys import PairKey, bye_key, pair_key

if TYPE_CHECKING:
    from swiss_pairing.pairing.engine import Pairing


class MatchLike(Protocol):
    """Any stored match record with two sides; a missing second side is a bye."""

    player_one_id: str
    player_two_id: str | None


@dataclass(frozen=True)
class PairingHistory:
    """Immutable snapshot of a tournament's pairing history.

    History only grows: ``with_round`` returns a new snapshot containing the
    old keys plus the new round's keys.

    Attributes:
        previous_pairs: Canonical pair-keys already played, bye keys included.
        bye_history: Participants who have received a bye.
    """

    previous_pairs: frozenset[PairKey] = field(default_factory=frozenset)
    bye_history: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_matches(cls, matches: Iterable[MatchLike]) -> PairingHistory:
        """Rebuild history from persisted match records."""
        pairs: set[PairKey] = set()
        byes: set[str] = set()
        for m in matches:
            if m.player_two_id is None:
                pairs.add(bye_key(m.player_one_id))
                byes.add(m.player_one_id)
            else:
                pairs.add(pair_key(m.player_one_id, m.player_two_id))
        return cls(frozenset(pairs), frozenset(byes))

    def with_round(self, pairings: Iterable[Pairing]) -> PairingHistory:
        pairs = set(self.previous_pairs)
        byes = set(self.bye_history)
        for p in pairings:
            pairs.add(p.key)
            if p.is_bye:
                byes.add(p.player_one)
        return PairingHistory(frozenset(pairs), frozenset(byes))

    def has_played(self, a: str, b: str) -> bool:
        return pair_key(a, b) in self.previous_pairs

    def had_bye(self, participant_id: str) -> bool:
        return participant_id in self.bye_history or bye_key(participant_id) in self.previous_pairs


def repeated_keys(pairings: Iterable[Pairing], history: PairingHistory) -> list[PairKey]:
    """Pair-keys of ``pairings`` that are already in ``history``."""
    return [p.key for p in pairings if p.key in history.previous_pairs]
