"""Swiss pairing engine: backtracking search with bye rotation and fallbacks."""

from __future__ import annotations

import random
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

import structlog

from swiss_pairing.core.config import DEFAULT_MAX_STEPS, PairingConfig
from swiss_pairing.core.errors import InvalidParticipantsError
from swiss_pairing.pairing.keys import BYE_ID, PairKey, bye_key, pair_key
from swiss_pairing.pairing.standings import StandingRecord, rank_participants

logger = structlog.get_logger()


@dataclass(frozen=True)
class Pairing:
    """One match of a round.

    Attributes:
        table: Table number, assigned in generation order starting at 1.
        player_one: Participant identifier.
        player_two: Opponent identifier, or None for a bye.
    """

    table: int
    player_one: str
    player_two: str | None = None

    @property
    def is_bye(self) -> bool:
        return self.player_two is None

    @property
    def key(self) -> PairKey:
        """Pair-key of this match; byes use the bye sentinel as the other side."""
        return pair_key(self.player_one, self.player_two or BYE_ID)

    @property
    def players(self) -> tuple[str, ...]:
        if self.player_two is None:
            return (self.player_one,)
        return (self.player_one, self.player_two)


class PairingStatus(str, Enum):
    """How a round's pairing was obtained."""

    STRICT = "strict"
    REPEAT_BYE = "repeat_bye"
    UNCONSTRAINED = "unconstrained"
    FAILED = "failed"


@dataclass
class PairingOutcome:
    """Result of ``pair_round``.

    Only ``STRICT`` guarantees no repeated opponents and no repeated byes.
    ``REPEAT_BYE`` may give a participant a second bye; ``UNCONSTRAINED`` may
    repeat opponents. ``FAILED`` carries no pairings.
    """

    status: PairingStatus
    pairings: list[Pairing] = field(default_factory=list)

    @property
    def is_strict(self) -> bool:
        return self.status is PairingStatus.STRICT

    @property
    def succeeded(self) -> bool:
        return self.status is not PairingStatus.FAILED

    @property
    def bye_recipient(self) -> str | None:
        for p in self.pairings:
            if p.is_bye:
                return p.player_one
        return None


class _BudgetExhausted(Exception):
    pass


@dataclass
class _Frame:
    """One level of the search: a participant and the next opponent to try."""

    player: str
    position: int
    cursor: int
    last: bool
    opponent: str | None = None


class _PairingSearch:
    """Depth-first search over one round's matchings.

    Always extends from the best-ranked unassigned participant, trying
    opponents best-ranked first. Choices live on an explicit frame stack, so
    large fields are not limited by the interpreter's recursion depth.
    """

    def __init__(
        self,
        ranked: list[str],
        previous_pairs: Collection[PairKey],
        bye_history: Collection[str],
        allow_repeat_byes: bool,
        max_steps: int,
    ) -> None:
        self._ranked = ranked
        self._previous_pairs = previous_pairs
        self._bye_history = bye_history
        self._allow_repeat_byes = allow_repeat_byes
        self._max_steps = max_steps
        self._allow_bye = len(ranked) % 2 == 1
        self._used: set[str] = set()
        self._pairs: list[tuple[str, str | None]] = []
        self.steps = 0

    def run(self) -> list[tuple[str, str | None]] | None:
        try:
            found = self._search()
        except _BudgetExhausted:
            logger.warning(
                "pairing_budget_exhausted",
                participants=len(self._ranked),
                max_steps=self._max_steps,
            )
            return None
        return list(self._pairs) if found else None

    def _tick(self) -> None:
        self.steps += 1
        if self.steps > self._max_steps:
            raise _BudgetExhausted

    def _bye_allowed(self, participant: str) -> bool:
        if self._allow_repeat_byes:
            return True
        return (
            participant not in self._bye_history
            and bye_key(participant) not in self._previous_pairs
        )

    def _open_frame(self, start: int) -> _Frame:
        """Claim the best-ranked unassigned participant at or after ``start``."""
        position = start
        while self._ranked[position] in self._used:
            position += 1
        player = self._ranked[position]
        self._used.add(player)
        last = len(self._used) == len(self._ranked)
        return _Frame(player, position, cursor=position + 1, last=last)

    def _advance(self, frame: _Frame) -> bool:
        """Seat ``frame.player`` against its next untried, unplayed opponent."""
        if frame.opponent is not None:
            self._pairs.pop()
            self._used.discard(frame.opponent)
            frame.opponent = None

        while frame.cursor < len(self._ranked):
            p2 = self._ranked[frame.cursor]
            frame.cursor += 1
            if p2 in self._used or pair_key(frame.player, p2) in self._previous_pairs:
                continue
            self._tick()
            self._used.add(p2)
            self._pairs.append((frame.player, p2))
            frame.opponent = p2
            return True
        return False

    def _search(self) -> bool:
        if not self._ranked:
            return True

        frames = [self._open_frame(0)]
        while frames:
            frame = frames[-1]
            if self._advance(frame):
                if len(self._used) == len(self._ranked):
                    return True
                # Everyone ranked above this frame's player is already seated.
                frames.append(self._open_frame(frame.position + 1))
                continue

            # The bye only ever goes to the last participant left over.
            if self._allow_bye and frame.last and self._bye_allowed(frame.player):
                self._tick()
                self._pairs.append((frame.player, None))
                return True

            self._used.discard(frame.player)
            frames.pop()
        return False


def _validate_participants(participants: Iterable[str]) -> list[str]:
    ids = [str(p) for p in participants]
    seen: set[str] = set()
    duplicates: set[str] = set()
    for pid in ids:
        if pid in seen:
            duplicates.add(pid)
        seen.add(pid)
    if duplicates:
        repeated = sorted(duplicates)
        msg = f"Duplicate participant identifiers: {', '.join(repeated)}"
        raise InvalidParticipantsError(msg, repeated)
    if BYE_ID in seen:
        msg = f"'{BYE_ID}' is reserved for the bye sentinel"
        raise InvalidParticipantsError(msg, [BYE_ID])
    return ids


def _to_pairings(pairs: list[tuple[str, str | None]]) -> list[Pairing]:
    return [Pairing(table=i, player_one=a, player_two=b) for i, (a, b) in enumerate(pairs, 1)]


def build_swiss_pairs(
    participants: Iterable[str],
    previous_pairs: Collection[PairKey],
    bye_history: Collection[str],
    stats: Mapping[str, StandingRecord],
    *,
    allow_repeat_byes: bool = False,
    rng: random.Random | None = None,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> list[Pairing] | None:
    """Compute one round of Swiss pairings.

    Participants are ranked (see ``rank_participants``) and paired by a
    backtracking search: the best-ranked unpaired participant is matched with
    the best-ranked available opponent they have not played, undoing choices
    that lead to a dead end. With an odd count, the one participant left over
    receives a bye, provided they have not had one already.

    Strict failure is a normal outcome and is returned as ``None``, never
    raised. None of the inputs are modified.

    Args:
        participants: Unique participant identifiers.
        previous_pairs: Pair-keys already played, bye keys included.
        bye_history: Participants who already received a bye.
        stats: Standing records; missing participants rank as all-zero.
        allow_repeat_byes: Permit a second bye for the same participant.
        rng: Source for the ranking tiebreak.
        max_steps: Candidate attempts before the search gives up.

    Returns:
        Pairings ordered by table number, ``[]`` for no participants, or
        ``None`` if no valid pairing exists within the step budget.

    Raises:
        InvalidParticipantsError: On duplicate identifiers or use of the bye
            sentinel as an identifier.
    """
    ids = _validate_participants(participants)
    if not ids:
        return []

    ranked = rank_participants(ids, stats, rng)
    search = _PairingSearch(ranked, previous_pairs, bye_history, allow_repeat_byes, max_steps)
    pairs = search.run()
    logger.debug(
        "pairing_search_complete",
        participants=len(ids),
        steps=search.steps,
        found=pairs is not None,
        allow_repeat_byes=allow_repeat_byes,
    )
    if pairs is None:
        return None
    return _to_pairings(pairs)


def random_pairs(participants: Iterable[str], rng: random.Random | None = None) -> list[Pairing]:
    """Shuffle and pair adjacent participants, ignoring all history.

    The last participant of an odd count receives a bye.
    """
    ids = _validate_participants(participants)
    rng = rng or random.Random()  # noqa: S311
    rng.shuffle(ids)
    pairs: list[tuple[str, str | None]] = []
    for i in range(0, len(ids), 2):
        pairs.append((ids[i], ids[i + 1] if i + 1 < len(ids) else None))
    return _to_pairings(pairs)


def pair_round(
    participants: Iterable[str],
    previous_pairs: Collection[PairKey],
    bye_history: Collection[str],
    stats: Mapping[str, StandingRecord],
    config: PairingConfig | None = None,
    rng: random.Random | None = None,
) -> PairingOutcome:
    """Pair a round, relaxing constraints only as far as ``config`` allows.

    Tries the strict search first, then a search permitting repeat byes, then
    an unconstrained random pairing. The returned status records which step
    produced the pairings; a relaxed search whose bye goes to someone without
    an earlier bye is still reported as ``STRICT``.
    """
    config = config or PairingConfig()
    ids = _validate_participants(participants)
    rng = rng or random.Random()  # noqa: S311

    strict = build_swiss_pairs(
        ids, previous_pairs, bye_history, stats, rng=rng, max_steps=config.max_steps
    )
    if strict is not None:
        return PairingOutcome(PairingStatus.STRICT, strict)

    logger.warning("strict_pairing_failed", participants=len(ids))

    # Byes only exist for odd counts, so relaxing them cannot help otherwise.
    if config.allow_repeat_byes and len(ids) % 2 == 1:
        relaxed = build_swiss_pairs(
            ids,
            previous_pairs,
            bye_history,
            stats,
            allow_repeat_byes=True,
            rng=rng,
            max_steps=config.max_steps,
        )
        if relaxed is not None:
            outcome = PairingOutcome(PairingStatus.REPEAT_BYE, relaxed)
            recipient = outcome.bye_recipient
            if recipient not in bye_history and bye_key(recipient) not in previous_pairs:
                # The strict search ran out of steps; this round breaks no rule.
                logger.info("pairing_strict_after_budget", participants=len(ids))
                outcome.status = PairingStatus.STRICT
            else:
                logger.warning("pairing_repeat_bye", participants=len(ids), bye=recipient)
            return outcome

    if config.allow_unconstrained:
        logger.warning("pairing_unconstrained", participants=len(ids))
        return PairingOutcome(PairingStatus.UNCONSTRAINED, random_pairs(ids, rng))

    return PairingOutcome(PairingStatus.FAILED)
