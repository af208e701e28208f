"""
Constants for the Matchday tournament engine.

This module contains configuration defaults and limits used throughout the
application.
"""

# Match timing defaults
DEFAULT_MATCH_DURATION_MIN = 15
MIN_MATCH_DURATION_MIN = 1
MAX_MATCH_DURATION_MIN = 120

DEFAULT_BREAK_MIN = 5
MIN_BREAK_MIN = 0
MAX_BREAK_MIN = 15

DEFAULT_START_TIME = "09:00"

# Points awarded per result
POINTS_WIN = 3
POINTS_DRAW = 1
POINTS_LOSS = 0

# Roster limits
MIN_TEAM_COUNT = 2
MIN_JERSEY_NUMBER = 1
MAX_JERSEY_NUMBER = 99
MIN_BIRTH_YEAR = 1900

# Live clock polling interval (seconds)
CLOCK_POLL_INTERVAL_SEC = 1.0

# Header carrying the organiser PIN on write requests
PIN_HEADER = "X-Tournament-Pin"

# Web server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122
DEFAULT_DATA_DIR = "data"
DEFAULT_LOG_LEVEL = "INFO"

# Team colors offered when a draft does not pick one
TEAM_COLORS = [
    "#E53935",
    "#1E88E5",
    "#43A047",
    "#FDD835",
    "#8E24AA",
    "#FB8C00",
    "#00ACC1",
    "#6D4C41",
]
