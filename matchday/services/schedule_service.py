"""
Round-robin fixture generation for the Matchday tournament engine.

Schedules are built with the circle method: the team in position 0 stays put
while every other team rotates one place to the right each round. With an odd
number of teams a bye slot is added so the working set is even; pairings that
involve the bye are dropped before a Match is built, which means each team
sits out exactly one round.
"""
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Sequence, TypeVar, Union

from ..models import Match, MatchStatus, Team, TournamentSettings

T = TypeVar("T")


class _Slot(Enum):
    """Placeholder entries in the rotation array."""
    BYE = "bye"


BYE = _Slot.BYE

RotationEntry = Union[str, _Slot]


def generate_round_robin_schedule(teams: Sequence[Team], settings: TournamentSettings) -> List[Match]:
    """
    Generate a full single round-robin schedule.

    Args:
        teams: Participating teams, in the order they were entered
        settings: Tournament settings providing start, duration and break

    Returns:
        Matches ordered by global match index. Empty when fewer than
        two teams are given.
    """
    if len(teams) < 2:
        return []

    start = parse_start_datetime(settings)
    duration = settings.match_duration_minutes
    break_minutes = settings.break_between_matches_minutes

    slots: List[RotationEntry] = [team.id for team in teams]
    if len(slots) % 2:
        slots.append(BYE)

    n = len(slots)
    matches: List[Match] = []
    match_index = 0

    for round_index in range(n - 1):
        rotated = [slots[0]] + rotate_right(slots[1:], round_index)

        for i in range(n // 2):
            home = rotated[i]
            away = rotated[n - 1 - i]
            if home is BYE or away is BYE:
                continue

            kickoff = compute_match_start_time(start, match_index, duration, break_minutes)
            matches.append(
                Match(
                    id=_match_id(match_index),
                    home_team_id=home,
                    away_team_id=away,
                    scheduled_time=kickoff.isoformat(),
                    duration_minutes=duration,
                    status=MatchStatus.SCHEDULED,
                    round_index=round_index,
                    match_index=match_index,
                )
            )
            match_index += 1

    return matches


def rotate_right(items: Sequence[T], steps: int) -> List[T]:
    """Return a copy of ``items`` rotated ``steps`` places to the right."""
    if not items:
        return []
    shift = steps % len(items)
    return list(items[len(items) - shift:]) + list(items[:len(items) - shift])


def parse_start_datetime(settings: TournamentSettings) -> datetime:
    """Combine the settings' start date and time into a naive local datetime."""
    return datetime.fromisoformat(f"{settings.start_date}T{settings.start_time}")


def compute_match_start_time(
    start: datetime,
    match_index: int,
    match_duration_minutes: int,
    break_minutes: int,
) -> datetime:
    """Kickoff for the match at ``match_index``; slots are back to back."""
    return start + timedelta(minutes=match_index * (match_duration_minutes + break_minutes))


def count_real_matches(team_count: int) -> int:
    """Number of matches in a single round robin of ``team_count`` teams."""
    if team_count < 2:
        return 0
    return team_count * (team_count - 1) // 2


def estimate_tournament_duration(team_count: int, settings: TournamentSettings) -> int:
    """
    Estimate the total length of the tournament in minutes.

    Every match occupies one duration-plus-break slot, including the last.
    """
    slot = settings.match_duration_minutes + settings.break_between_matches_minutes
    return count_real_matches(team_count) * slot


def group_matches_by_round(matches: Sequence[Match]) -> Dict[int, List[Match]]:
    """Group matches by round index, keeping schedule order inside each round."""
    rounds: Dict[int, List[Match]] = {}
    for match in sorted(matches, key=lambda m: m.match_index):
        rounds.setdefault(match.round_index, []).append(match)
    return rounds


def _match_id(match_index: int) -> str:
    # Match ids only need to be unique inside a tournament
    return f"m{match_index + 1:03d}"
