"""Swiss Pairing.

Swiss-style round pairing for card game tournaments: rank participants by
standing, pair them without repeat opponents, and rotate the bye fairly.
"""

from swiss_pairing.pairing import (
    BYE_ID,
    Pairing,
    PairingOutcome,
    PairingStatus,
    StandingRecord,
    build_swiss_pairs,
    pair_key,
    pair_round,
)

__version__ = "0.1.0"
__all__ = [
    "BYE_ID",
    "Pairing",
    "PairingOutcome",
    "PairingStatus",
    "StandingRecord",
    "__version__",
    "build_swiss_pairs",
    "pair_key",
    "pair_round",
]
