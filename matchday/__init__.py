"""
Matchday

Round-robin tournament engine for youth soccer days: fixture generation,
a pausable match clock, live scoring and standings with deterministic
tie-breaks.

This package provides the scheduling core plus a Flask web API with a
PIN-gated organiser surface and a read-only public view.
"""
from .models import Goal, Match, Player, Team, Tournament, TournamentSettings, Standing
from .services import (
    generate_round_robin_schedule, compute_match_elapsed, compute_current_minute,
    compute_standings, TournamentService
)
from .ui import create_app, run_web_app
from .utils import fmt_mmss, now_ts

__version__ = "1.0.0"

__all__ = [
    "Goal", "Match", "Player", "Team", "Tournament", "TournamentSettings", "Standing",
    "generate_round_robin_schedule", "compute_match_elapsed", "compute_current_minute",
    "compute_standings", "TournamentService", "create_app", "run_web_app",
    "fmt_mmss", "now_ts"
]
