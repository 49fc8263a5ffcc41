"""Tournament storage: database engine lifecycle and repositories."""

from __future__ import annotations

from pathlib import Path

import structlog
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from swiss_pairing.core.config import TournamentConfig

from .match_repository import MatchRepository

logger = structlog.get_logger()


class TournamentStore:
    """Persistence layer for match records.

    The store owns the SQLModel engine; repositories share it.
    """

    def __init__(self, config: TournamentConfig) -> None:
        """Initialize tournament store.

        Args:
            config: Tournament configuration providing the database URL.
        """
        self.config = config
        self.database_url = config.get_database_url()
        self._engine = None
        self._init_db()
        self.matches = MatchRepository(self._engine)

    def _init_db(self) -> None:
        """Create the engine and tables."""
        if self.config.database_url is None:
            Path(self.config.output_dir).mkdir(parents=True, exist_ok=True)
        # Use NullPool to avoid connection pooling issues on Windows
        self._engine = create_engine(self.database_url, poolclass=NullPool)
        SQLModel.metadata.create_all(self._engine)
        logger.info("store_init", database_url=self.database_url)

    async def close(self) -> None:
        """Dispose of the database engine."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
