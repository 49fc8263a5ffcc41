import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class TournamentMatch(SQLModel, table=True):
    """A single match of one round; ``player_two_id`` is None for a bye."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    tournament_id: str = Field(index=True)
    round: int = Field(default=1, ge=1)
    table_number: int = Field(default=0, ge=0)
    player_one_id: str
    player_two_id: str | None = None
    winner_id: str | None = None
    loser_id: str | None = None
    is_tie: bool = False
    player_one_games: int = Field(default=0, ge=0)
    player_two_games: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_bye(self) -> bool:
        return self.player_two_id is None

    @property
    def is_reported(self) -> bool:
        return self.is_tie or self.winner_id is not None
