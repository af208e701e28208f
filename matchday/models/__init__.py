"""
Models package for the Matchday tournament engine.

This package contains the core data models used throughout the application.
"""
from .tournament import (
    Goal, Match, MatchStatus, Player, Team, Tournament, TournamentSettings, TournamentStatus
)
from .standing import Standing
from .draft import PlayerDraft, TeamDraft, TournamentDraft

__all__ = [
    "Goal", "Match", "MatchStatus", "Player", "Team", "Tournament",
    "TournamentSettings", "TournamentStatus", "Standing",
    "PlayerDraft", "TeamDraft", "TournamentDraft"
]
