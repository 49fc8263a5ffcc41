from .match_repository import MatchRepository
from .store import TournamentStore

__all__ = ["MatchRepository", "TournamentStore"]
