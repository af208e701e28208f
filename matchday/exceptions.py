"""Exceptions raised at the boundaries of the Matchday engine.

The scheduling, clock and standings functions never raise; these are used by
the tournament service, validation and the web layer.
"""


class MatchdayError(Exception):
    """Base class for all Matchday errors."""


class TournamentNotFoundError(MatchdayError):
    """Raised when a tournament id is not present in the repository."""

    def __init__(self, tournament_id: str):
        super().__init__(f"Tournament not found: {tournament_id}")
        self.tournament_id = tournament_id


class TournamentValidationError(MatchdayError):
    """Raised when draft or roster input is invalid."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(f"Validation failed: {'; '.join(self.errors)}")


class PinRequiredError(MatchdayError):
    """Raised when a write is attempted without a valid organiser PIN."""
