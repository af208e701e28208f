"""
Match lifecycle transitions.

Each transition mutates a single Match in place and returns True when it
applied. A transition that is not legal from the match's current state leaves
the match untouched and returns False; callers are expected to offer only the
legal actions, so these are not treated as errors.

    scheduled --start--> live --finish--> finished
                  live <--reopen-- finished
    any --reset--> scheduled
"""
from typing import Iterable, Optional

from ..models import Goal, Match, MatchStatus, TournamentStatus
from .match_clock import freeze_elapsed, match_minute


def start_match(match: Match, now: float) -> bool:
    if match.status != MatchStatus.SCHEDULED:
        return False
    match.status = MatchStatus.LIVE
    match.started_at = now
    match.paused_at = None
    return True


def pause_match(match: Match, now: float) -> bool:
    """Freeze the clock: bank elapsed seconds and remember the pause instant."""
    if match.status != MatchStatus.LIVE or match.paused_at is not None:
        return False
    match.paused_elapsed = freeze_elapsed(match, now)
    match.paused_at = now
    return True


def resume_match(match: Match, now: float) -> bool:
    """Restart the clock from the banked total by moving the anchor to ``now``."""
    if match.status != MatchStatus.LIVE or match.paused_at is None:
        return False
    match.paused_at = None
    match.started_at = now
    return True


def finish_match(match: Match, now: float) -> bool:
    if match.status != MatchStatus.LIVE:
        return False
    match.status = MatchStatus.FINISHED
    match.finished_at = now
    # paused_elapsed keeps the final reading if the match ended while paused
    match.paused_at = None
    return True


def reopen_match(match: Match, now: float) -> bool:
    """Put a finished match back in play. Score and goals are kept."""
    if match.status != MatchStatus.FINISHED:
        return False
    match.status = MatchStatus.LIVE
    match.started_at = now
    match.finished_at = None
    match.paused_at = None
    match.paused_elapsed = 0
    return True


def reset_match(match: Match) -> bool:
    """Hard restart: back to scheduled with no score, goals or timestamps."""
    match.status = MatchStatus.SCHEDULED
    match.home_score = 0
    match.away_score = 0
    match.goals = []
    match.started_at = None
    match.finished_at = None
    match.paused_at = None
    match.paused_elapsed = 0
    return True


def record_goal(
    match: Match,
    goal_id: str,
    team_id: str,
    now: float,
    player_id: Optional[str] = None,
    is_own_goal: bool = False,
    minute: Optional[int] = None,
) -> Optional[Goal]:
    """
    Append a goal and credit the beneficiary's score.

    The beneficiary is ``team_id``, or its opponent for an own goal. When no
    minute is given it is taken from the match clock.

    Returns:
        The new Goal, or None if ``team_id`` is not playing in this match
    """
    if not match.involves(team_id):
        return None

    if minute is None:
        minute = match_minute(match, now)

    goal = Goal(
        id=goal_id,
        team_id=team_id,
        player_id=player_id,
        is_own_goal=is_own_goal,
        minute=max(1, int(minute)),
        recorded_at=now,
    )
    _credit(match, match.credited_team_id(goal), 1)
    match.goals.append(goal)
    return goal


def remove_goal(match: Match, goal_id: Optional[str] = None) -> Optional[Goal]:
    """
    Remove a goal and take it off the beneficiary's score.

    Args:
        match: Match to edit
        goal_id: Goal to remove; the most recent goal when None

    Returns:
        The removed Goal, or None if there was nothing to remove
    """
    if not match.goals:
        return None

    goal = match.goals[-1] if goal_id is None else match.find_goal(goal_id)
    if goal is None:
        return None

    _credit(match, match.credited_team_id(goal), -1)
    match.goals = [g for g in match.goals if g.id != goal.id]
    return goal


def update_goal_player(match: Match, goal_id: str, player_id: Optional[str]) -> bool:
    """Change who a goal is attributed to. Scores are unaffected."""
    goal = match.find_goal(goal_id)
    if goal is None:
        return False
    goal.player_id = player_id
    return True


def resolve_tournament_status(current: TournamentStatus, matches: Iterable[Match]) -> TournamentStatus:
    """
    Derive the aggregate tournament status from its matches.

    ``finished`` when every match is finished; ``draft`` only until the first
    match starts; ``active`` otherwise.
    """
    statuses = [m.status for m in matches]
    if statuses and all(s == MatchStatus.FINISHED for s in statuses):
        return TournamentStatus.FINISHED
    if current == TournamentStatus.DRAFT and all(s == MatchStatus.SCHEDULED for s in statuses):
        return TournamentStatus.DRAFT
    return TournamentStatus.ACTIVE


def _credit(match: Match, team_id: str, delta: int) -> None:
    # Scores never drop below zero, even if stored goals are out of step
    if team_id == match.home_team_id:
        match.home_score = max(0, match.home_score + delta)
    elif team_id == match.away_team_id:
        match.away_score = max(0, match.away_score + delta)
