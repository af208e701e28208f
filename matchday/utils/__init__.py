"""
Utilities package for the Matchday tournament engine.

This package contains utility functions used throughout the application.
"""
from .time_utils import fmt_mmss, now_ts, format_minutes, format_match_time, format_match_date
from .pin_hash import hash_pin, verify_pin
from .identifiers import generate_id
from .log import configure_logging
from .constants import (
    DEFAULT_MATCH_DURATION_MIN, DEFAULT_BREAK_MIN, POINTS_WIN,
    POINTS_DRAW, POINTS_LOSS, PIN_HEADER, CLOCK_POLL_INTERVAL_SEC
)

__all__ = [
    "fmt_mmss", "now_ts", "format_minutes", "format_match_time", "format_match_date",
    "hash_pin", "verify_pin", "generate_id", "configure_logging",
    "DEFAULT_MATCH_DURATION_MIN", "DEFAULT_BREAK_MIN",
    "POINTS_WIN", "POINTS_DRAW", "POINTS_LOSS", "PIN_HEADER", "CLOCK_POLL_INTERVAL_SEC"
]
