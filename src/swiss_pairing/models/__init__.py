from .match import TournamentMatch

__all__ = ["TournamentMatch"]
