"""Custom exceptions for configuration, input and round workflow errors."""

from __future__ import annotations


class SwissPairingError(Exception):
    """Base exception with an optional suggestion for the operator."""

    label = "Error"

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[{self.label}] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class ConfigurationError(SwissPairingError):
    """Base exception for configuration errors."""

    label = "Configuration Error"


class InvalidParticipantsError(SwissPairingError, ValueError):
    """Participant list cannot be paired as given."""

    label = "Invalid Participants"

    def __init__(self, message: str, participants: list[str] | None = None) -> None:
        self.participants = participants or []
        super().__init__(message, "Remove duplicate or reserved identifiers before pairing.")


class PairingFailedError(SwissPairingError):
    """No pairing could be produced under the enabled fallback policy."""

    label = "Pairing Failed"

    def __init__(self, tournament_id: str, round_number: int) -> None:
        self.tournament_id = tournament_id
        self.round_number = round_number
        super().__init__(
            f"No valid pairing for round {round_number} of tournament '{tournament_id}'",
            "Enable allow_repeat_byes or allow_unconstrained in the pairing config.",
        )


class MatchNotFoundError(SwissPairingError, LookupError):
    """Error when a match record does not exist."""

    label = "Match Not Found"

    def __init__(self, match_id: str) -> None:
        self.match_id = match_id
        super().__init__(f"No match with id '{match_id}'")


class InvalidResultError(SwissPairingError, ValueError):
    """Error when a reported result does not fit the match."""

    label = "Invalid Result"
