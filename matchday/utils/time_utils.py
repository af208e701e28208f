"""
Utility functions for the Matchday tournament engine.

This module contains common time helpers used throughout the application.
"""
import time
from datetime import datetime


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def format_minutes(minutes: int) -> str:
    """
    Format a duration in minutes for display.

    Example:
        >>> format_minutes(45)
        '45 min'
        >>> format_minutes(120)
        '2 h'
        >>> format_minutes(135)
        '2 h 15 min'
    """
    if minutes < 60:
        return f"{minutes} min"
    h, m = divmod(minutes, 60)
    return f"{h} h" if m == 0 else f"{h} h {m} min"


def format_match_time(iso_string: str) -> str:
    """Format an ISO datetime string as HH:MM."""
    return datetime.fromisoformat(iso_string).strftime("%H:%M")


def format_match_date(iso_string: str) -> str:
    """Format an ISO datetime string as e.g. 'Sat 5 April 2025'."""
    d = datetime.fromisoformat(iso_string)
    return f"{d.strftime('%a')} {d.day} {d.strftime('%B %Y')}"
