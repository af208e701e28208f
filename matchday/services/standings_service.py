"""Standings computation for the Matchday tournament engine."""

import unicodedata
from typing import Any, Dict, List, Sequence, Tuple

from ..models import Match, MatchStatus, Standing, Team
from ..utils import POINTS_DRAW, POINTS_LOSS, POINTS_WIN


def compute_standings(matches: Sequence[Match], teams: Sequence[Team]) -> List[Standing]:
    """
    Compute the league table from finished matches.

    Every team gets a row, even without a finished match. Live and scheduled
    matches are ignored. Rows are ordered by points, goal difference and goals
    scored (all descending), then by team name.

    Neither ``matches`` nor ``teams`` is modified.
    """
    table: Dict[str, Standing] = {team.id: Standing(team_id=team.id) for team in teams}

    for match in matches:
        if match.status != MatchStatus.FINISHED:
            continue

        home = table.get(match.home_team_id)
        away = table.get(match.away_team_id)
        if home is None or away is None:
            continue

        home.played += 1
        away.played += 1
        home.goals_for += match.home_score
        home.goals_against += match.away_score
        away.goals_for += match.away_score
        away.goals_against += match.home_score

        if match.home_score > match.away_score:
            _award(home, away)
        elif match.home_score < match.away_score:
            _award(away, home)
        else:
            home.drawn += 1
            away.drawn += 1
            home.points += POINTS_DRAW
            away.points += POINTS_DRAW

        home.goal_difference = home.goals_for - home.goals_against
        away.goal_difference = away.goals_for - away.goals_against

    names = {team.id: team.name for team in teams}
    return sorted(
        table.values(),
        key=lambda s: (-s.points, -s.goal_difference, -s.goals_for, collation_key(names.get(s.team_id, ""))),
    )


def _award(winner: Standing, loser: Standing) -> None:
    winner.won += 1
    winner.points += POINTS_WIN
    loser.lost += 1
    loser.points += POINTS_LOSS


def collation_key(name: str) -> Tuple[str, str, str]:
    """
    Sort key approximating locale-aware name ordering.

    Accents and case are ignored at the primary level, so "Ústí" sorts next
    to "Usti" rather than after "Z". The later levels keep the order total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name.casefold(), name)


def standings_table(matches: Sequence[Match], teams: Sequence[Team]) -> List[Dict[str, Any]]:
    """Standings rows joined with team display data and a 1-based position."""
    by_id = {team.id: team for team in teams}
    rows = []
    for position, standing in enumerate(compute_standings(matches, teams), start=1):
        team = by_id[standing.team_id]
        row = standing.to_dict()
        row.update({"position": position, "team_name": team.name, "team_color": team.color})
        rows.append(row)
    return rows
