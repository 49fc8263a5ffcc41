"""Core configuration and errors for Swiss Pairing."""

from swiss_pairing.core.config import (
    DEFAULT_MAX_STEPS,
    PairingConfig,
    ScoringConfig,
    TournamentConfig,
    load_config,
)
from swiss_pairing.core.errors import (
    ConfigurationError,
    InvalidParticipantsError,
    InvalidResultError,
    MatchNotFoundError,
    PairingFailedError,
    SwissPairingError,
)

__all__ = [
    "DEFAULT_MAX_STEPS",
    "PairingConfig",
    "ScoringConfig",
    "TournamentConfig",
    "load_config",
    "ConfigurationError",
    "InvalidParticipantsError",
    "InvalidResultError",
    "MatchNotFoundError",
    "PairingFailedError",
    "SwissPairingError",
]
