"""Round service: pair the next round from stored history and record results."""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from swiss_pairing.core.config import TournamentConfig
from swiss_pairing.core.errors import InvalidResultError, PairingFailedError
from swiss_pairing.models import TournamentMatch
from swiss_pairing.pairing import PairingHistory, PairingOutcome, StandingRecord, pair_round
from swiss_pairing.services.scoring import compute_standings, leaderboard
from swiss_pairing.services.storage import TournamentStore

logger = structlog.get_logger()


@dataclass
class RoundResult:
    """A newly paired round and the match records persisted for it."""

    tournament_id: str
    round_number: int
    outcome: PairingOutcome
    matches: list[TournamentMatch] = field(default_factory=list)


class RoundService:
    """Orchestrates history loading, pairing, and result persistence.

    The pairing engine itself is stateless; this service reconstructs its
    inputs from the match store before every round.
    """

    def __init__(
        self,
        config: TournamentConfig,
        store: TournamentStore,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize round service.

        Args:
            config: Tournament configuration.
            store: Storage layer for match records.
            rng: Fixed tiebreak source. If None, one is created per round,
                seeded from ``config.seed`` when that is set.
        """
        self.config = config
        self.store = store
        self._rng = rng

    def _round_rng(self, round_number: int) -> random.Random:
        if self._rng is not None:
            return self._rng
        if self.config.seed is None:
            return random.Random()  # noqa: S311
        return random.Random(self.config.seed + round_number)  # noqa: S311

    async def advance_round(self, tournament_id: str, participants: Iterable[str]) -> RoundResult:
        """Pair the next round and persist its matches without results.

        Args:
            tournament_id: Tournament whose history is used.
            participants: Enrolled participant identifiers.

        Returns:
            The round number, pairing outcome and saved match records.

        Raises:
            PairingFailedError: If no pairing is possible under the configured
                fallback policy. Nothing is persisted in that case.
            InvalidParticipantsError: On duplicate identifiers.
        """
        matches = await self.store.matches.list_matches(tournament_id)
        history = PairingHistory.from_matches(matches)
        stats = compute_standings(matches, self.config.scoring)
        round_number = await self.store.matches.max_round(tournament_id) + 1

        logger.info("advance_round", tournament=tournament_id, round=round_number)

        outcome = pair_round(
            participants,
            history.previous_pairs,
            history.bye_history,
            stats,
            self.config.pairing,
            self._round_rng(round_number),
        )
        logger.info(
            "round_pairs",
            round=round_number,
            status=outcome.status.value,
            count=len(outcome.pairings),
            bye=outcome.bye_recipient,
        )
        if not outcome.succeeded:
            raise PairingFailedError(tournament_id, round_number)

        records = [
            TournamentMatch(
                tournament_id=tournament_id,
                round=round_number,
                table_number=p.table,
                player_one_id=p.player_one,
                player_two_id=p.player_two,
            )
            for p in outcome.pairings
        ]
        saved = await self.store.matches.add_matches(records) if records else []
        return RoundResult(tournament_id, round_number, outcome, saved)

    async def record_result(
        self,
        match_id: str,
        *,
        winner_id: str | None = None,
        tie: bool = False,
        player_one_games: int = 0,
        player_two_games: int = 0,
    ) -> TournamentMatch:
        """Store the outcome of a played match, replacing any earlier result.

        Raises:
            MatchNotFoundError: If the match does not exist.
            InvalidResultError: If the result does not fit the match.
        """
        match = await self.store.matches.get_match(match_id)

        if match.is_bye:
            raise InvalidResultError(
                f"Match '{match_id}' is a bye", "Byes are credited automatically."
            )
        if tie == (winner_id is not None):
            raise InvalidResultError(
                "A result needs exactly one of a winner or a tie",
                "Pass --winner <id> or --tie.",
            )
        if player_one_games < 0 or player_two_games < 0:
            raise InvalidResultError("Game counts must be non-negative")

        loser_id = None
        if winner_id is not None:
            sides = (match.player_one_id, match.player_two_id)
            if winner_id not in sides:
                raise InvalidResultError(
                    f"'{winner_id}' did not play in match '{match_id}'",
                    f"Choose one of: {', '.join(str(s) for s in sides)}",
                )
            if winner_id == match.player_one_id:
                loser_id = match.player_two_id
            else:
                loser_id = match.player_one_id

        updated = await self.store.matches.update_result(
            match_id,
            winner_id=winner_id,
            loser_id=loser_id,
            is_tie=tie,
            player_one_games=player_one_games,
            player_two_games=player_two_games,
        )
        logger.info("result_recorded", match=match_id, winner=winner_id, tie=tie)
        return updated

    async def standings(self, tournament_id: str) -> list[tuple[str, StandingRecord]]:
        """Current leaderboard for a tournament."""
        matches = await self.store.matches.list_matches(tournament_id)
        return leaderboard(compute_standings(matches, self.config.scoring))
