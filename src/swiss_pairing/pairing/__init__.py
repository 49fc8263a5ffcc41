"""Swiss pairing engine.

Pure functions over a snapshot of participants, standings and pairing
history. Safe to call concurrently; nothing here performs I/O.
"""

from swiss_pairing.pairing.engine import (
    Pairing,
    PairingOutcome,
    PairingStatus,
    build_swiss_pairs,
    pair_round,
    random_pairs,
)
from swiss_pairing.pairing.history import PairingHistory, repeated_keys
from swiss_pairing.pairing.keys import BYE_ID, PairKey, bye_key, pair_key
from swiss_pairing.pairing.standings import (
    StandingRecord,
    rank_participants,
    standing_sort_key,
)

__all__ = [
    "BYE_ID",
    "PairKey",
    "Pairing",
    "PairingHistory",
    "PairingOutcome",
    "PairingStatus",
    "StandingRecord",
    "build_swiss_pairs",
    "bye_key",
    "pair_key",
    "pair_round",
    "random_pairs",
    "rank_participants",
    "repeated_keys",
    "standing_sort_key",
]
