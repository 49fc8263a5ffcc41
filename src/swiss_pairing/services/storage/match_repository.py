"""Database persistence for tournament match records."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, TypeVar

import structlog
from sqlalchemy import func
from sqlmodel import Session, col, select

from swiss_pairing.core.errors import MatchNotFoundError
from swiss_pairing.models import TournamentMatch

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = structlog.get_logger()

T = TypeVar("T")


class MatchRepository:
    """Persist and query match records.

    SQLModel sessions are synchronous, so each call runs its session work on
    a worker thread. Loaded records stay usable after the session closes.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def _read(self, fn: Callable[[Session], T]) -> T:
        """Run ``fn`` in a session on a worker thread."""

        def _run() -> T:
            with Session(self._engine, expire_on_commit=False) as session:
                return fn(session)

        return await asyncio.to_thread(_run)

    async def _write(self, fn: Callable[[Session], T]) -> T:
        """Run ``fn`` in a transaction that commits when it returns."""

        def _run() -> T:
            with Session(self._engine, expire_on_commit=False) as session:
                result = fn(session)
                session.commit()
                return result

        return await asyncio.to_thread(_run)

    async def add_matches(self, matches: Sequence[TournamentMatch]) -> list[TournamentMatch]:
        """Insert new match records in one transaction."""

        def _add(session: Session) -> list[TournamentMatch]:
            session.add_all(matches)
            return list(matches)

        saved = await self._write(_add)
        logger.debug("matches_saved", count=len(saved))
        return saved

    async def list_matches(self, tournament_id: str) -> list[TournamentMatch]:
        """All matches of a tournament ordered by round and table."""

        def _get(session: Session) -> list[TournamentMatch]:
            statement = (
                select(TournamentMatch)
                .where(TournamentMatch.tournament_id == tournament_id)
                .order_by(col(TournamentMatch.round), col(TournamentMatch.table_number))
            )
            return list(session.exec(statement).all())

        return await self._read(_get)

    async def get_match(self, match_id: str) -> TournamentMatch:
        def _get(session: Session) -> TournamentMatch | None:
            return session.get(TournamentMatch, match_id)

        match = await self._read(_get)
        if match is None:
            raise MatchNotFoundError(match_id)
        return match

    async def max_round(self, tournament_id: str) -> int:
        """Highest stored round number, 0 when the tournament has no matches."""

        def _get(session: Session) -> int:
            statement = select(func.max(TournamentMatch.round)).where(
                TournamentMatch.tournament_id == tournament_id
            )
            return session.exec(statement).one() or 0

        return await self._read(_get)

    async def update_result(
        self,
        match_id: str,
        *,
        winner_id: str | None,
        loser_id: str | None,
        is_tie: bool,
        player_one_games: int,
        player_two_games: int,
    ) -> TournamentMatch:
        """Overwrite the result fields of a stored match."""

        def _update(session: Session) -> TournamentMatch | None:
            match = session.get(TournamentMatch, match_id)
            if match is None:
                return None
            match.winner_id = winner_id
            match.loser_id = loser_id
            match.is_tie = is_tie
            match.player_one_games = player_one_games
            match.player_two_games = player_two_games
            session.add(match)
            return match

        match = await self._write(_update)
        if match is None:
            raise MatchNotFoundError(match_id)
        return match
