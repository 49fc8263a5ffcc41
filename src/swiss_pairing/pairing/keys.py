"""Canonical pair-keys for repeat detection."""

from __future__ import annotations

BYE_ID = "__BYE__"

PairKey = tuple[str, str]


def pair_key(a: str, b: str) -> PairKey:
    """Build an order-independent key for two participants.

    ``pair_key("b", "a") == pair_key("a", "b")``. The bye sentinel may be
    used as either side so byes share the same bookkeeping as real matches.
    """
    return (a, b) if a <= b else (b, a)


def bye_key(participant_id: str) -> PairKey:
    """Key recording that a participant received a bye."""
    return pair_key(participant_id, BYE_ID)
