"""
Input validation for the Matchday tournament engine.

Validation happens at the boundary, before draft or roster input reaches the
scheduling and scoring code, which trusts what it is given. Each validator
returns a list of error messages; the ``ensure_*`` helpers raise
``TournamentValidationError`` when that list is non-empty.
"""
import re
from datetime import date, datetime
from typing import Iterable, List, Optional

from ..exceptions import TournamentValidationError
from ..models import TournamentDraft, TournamentSettings
from ..utils.constants import (
    MAX_BREAK_MIN, MAX_JERSEY_NUMBER, MAX_MATCH_DURATION_MIN, MIN_BIRTH_YEAR,
    MIN_BREAK_MIN, MIN_JERSEY_NUMBER, MIN_MATCH_DURATION_MIN, MIN_TEAM_COUNT
)

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_settings(settings: TournamentSettings) -> List[str]:
    """Validate scheduling settings."""
    errors = []

    if not MIN_MATCH_DURATION_MIN <= settings.match_duration_minutes <= MAX_MATCH_DURATION_MIN:
        errors.append(
            f"Match duration must be between {MIN_MATCH_DURATION_MIN} and {MAX_MATCH_DURATION_MIN} minutes"
        )
    if not MIN_BREAK_MIN <= settings.break_between_matches_minutes <= MAX_BREAK_MIN:
        errors.append(f"Break between matches must be between {MIN_BREAK_MIN} and {MAX_BREAK_MIN} minutes")

    try:
        date.fromisoformat(settings.start_date)
    except (TypeError, ValueError):
        errors.append("Start date must be in YYYY-MM-DD format")

    if not isinstance(settings.start_time, str) or not _TIME_RE.match(settings.start_time):
        errors.append("Start time must be in HH:MM format")

    return errors


def validate_player(
    name: str,
    jersey_number: int,
    birth_year: Optional[int] = None,
    taken_numbers: Iterable[int] = (),
) -> List[str]:
    """
    Validate a single player entry.

    Args:
        name: Player name
        jersey_number: Shirt number
        birth_year: Optional year of birth
        taken_numbers: Jersey numbers already used by teammates
    """
    errors = []

    if not name or not name.strip():
        errors.append("Player name is required")

    if not MIN_JERSEY_NUMBER <= jersey_number <= MAX_JERSEY_NUMBER:
        errors.append(f"Jersey number must be between {MIN_JERSEY_NUMBER} and {MAX_JERSEY_NUMBER}")
    elif jersey_number in set(taken_numbers):
        errors.append(f"Jersey number {jersey_number} is already taken")

    if birth_year is not None and not MIN_BIRTH_YEAR <= birth_year <= datetime.now().year:
        errors.append(f"Birth year {birth_year} is not plausible")

    return errors


def validate_draft(draft: TournamentDraft) -> List[str]:
    """Validate a complete tournament draft."""
    errors = []

    if not draft.name or not draft.name.strip():
        errors.append("Tournament name is required")

    errors.extend(validate_settings(draft.settings))

    if len(draft.teams) < MIN_TEAM_COUNT:
        errors.append(f"At least {MIN_TEAM_COUNT} teams are required")

    seen_names = set()
    for index, team in enumerate(draft.teams, start=1):
        label = team.name.strip() or f"Team {index}"
        if not team.name.strip():
            errors.append(f"Team {index} needs a name")
        elif team.name.strip().casefold() in seen_names:
            errors.append(f"Duplicate team name: {team.name.strip()}")
        seen_names.add(team.name.strip().casefold())

        numbers: List[int] = []
        for player in team.players:
            for problem in validate_player(player.name, player.jersey_number, player.birth_year, numbers):
                errors.append(f"{label}: {problem}")
            numbers.append(player.jersey_number)

    if not draft.pin_hash:
        errors.append("An organiser PIN is required")

    return errors


def ensure_valid_draft(draft: TournamentDraft) -> None:
    """Raise ``TournamentValidationError`` if the draft is invalid."""
    errors = validate_draft(draft)
    if errors:
        raise TournamentValidationError(errors)


def ensure_valid_player(
    name: str,
    jersey_number: int,
    birth_year: Optional[int] = None,
    taken_numbers: Iterable[int] = (),
) -> None:
    """Raise ``TournamentValidationError`` if the player entry is invalid."""
    errors = validate_player(name, jersey_number, birth_year, taken_numbers)
    if errors:
        raise TournamentValidationError(errors)
