"""
Services package for the Matchday tournament engine.

This package contains the scheduling, clock and standings functions plus the
service classes that apply tournament mutations.
"""
from .schedule_service import (
    generate_round_robin_schedule, compute_match_start_time, parse_start_datetime,
    count_real_matches, estimate_tournament_duration, group_matches_by_round
)
from .match_clock import (
    compute_match_elapsed, compute_current_minute, compute_remaining_seconds,
    format_elapsed_time, match_clock_snapshot, MatchTicker
)
from .standings_service import compute_standings, standings_table
from .persistence_service import (
    TournamentRepository, InMemoryTournamentRepository, JsonFileTournamentRepository
)
from .tournament_service import TournamentService
from .service_factory import ServiceFactory

__all__ = [
    "generate_round_robin_schedule", "compute_match_start_time", "parse_start_datetime",
    "count_real_matches", "estimate_tournament_duration", "group_matches_by_round",
    "compute_match_elapsed", "compute_current_minute", "compute_remaining_seconds",
    "format_elapsed_time", "match_clock_snapshot", "MatchTicker",
    "compute_standings", "standings_table",
    "TournamentRepository", "InMemoryTournamentRepository", "JsonFileTournamentRepository",
    "TournamentService", "ServiceFactory"
]
