"""
Match clock for the Matchday tournament engine.

All functions here are pure: they read a match's stored timestamps and a
single "now" value and return elapsed/remaining time. Callers may poll them at
any cadence and get consistent answers.

Pause bookkeeping works by banking elapsed seconds into ``paused_elapsed`` on
pause and moving ``started_at`` to the resume instant, so after a resume
``started_at`` is a clock anchor rather than the true kickoff time.
"""
import logging
import math
import threading
from typing import Any, Callable, Dict, Optional

from ..models import Match
from ..utils import CLOCK_POLL_INTERVAL_SEC, fmt_mmss, now_ts

logger = logging.getLogger(__name__)


def compute_match_elapsed(
    started_at: Optional[float],
    paused_at: Optional[float] = None,
    paused_elapsed: Optional[int] = None,
    now: Optional[float] = None,
) -> int:
    """
    Return elapsed match seconds.

    Args:
        started_at: Clock anchor in epoch seconds, None if never started
        paused_at: Pause instant in epoch seconds, None while running
        paused_elapsed: Seconds banked at earlier pauses
        now: Query time in epoch seconds (defaults to the current time)

    Returns:
        0 before kickoff, the banked total while paused, otherwise the time
        since the anchor plus the banked total.
    """
    banked = paused_elapsed or 0
    if started_at is None:
        return 0
    if paused_at is not None:
        return banked

    if now is None:
        now = now_ts()
    since_start = max(0, math.floor(now - started_at))
    return since_start + banked


def compute_current_minute(
    started_at: Optional[float],
    paused_at: Optional[float] = None,
    paused_elapsed: Optional[int] = None,
    now: Optional[float] = None,
) -> int:
    """Return the 1-based match minute (seconds 0-59 are minute 1)."""
    return compute_match_elapsed(started_at, paused_at, paused_elapsed, now) // 60 + 1


def match_elapsed(match: Match, now: Optional[float] = None) -> int:
    """Elapsed seconds for a stored match."""
    return compute_match_elapsed(match.started_at, match.paused_at, match.paused_elapsed, now)


def match_minute(match: Match, now: Optional[float] = None) -> int:
    """Current 1-based minute for a stored match."""
    return compute_current_minute(match.started_at, match.paused_at, match.paused_elapsed, now)


def freeze_elapsed(match: Match, now: Optional[float] = None) -> int:
    """
    Elapsed seconds to bank when pausing ``match`` at ``now``.

    Computed as if the match were still running, using the current anchor
    and banked total.
    """
    return compute_match_elapsed(match.started_at, None, match.paused_elapsed, now)


def compute_remaining_seconds(elapsed_seconds: int, duration_minutes: int) -> int:
    """Seconds left in regulation; negative values mean overtime."""
    return duration_minutes * 60 - elapsed_seconds


def format_elapsed_time(elapsed_seconds: int, duration_minutes: int) -> str:
    """
    Format elapsed time for display.

    Example:
        >>> format_elapsed_time(125, 15)
        '02:05'
        >>> format_elapsed_time(15 * 60 + 42, 15)
        '+00:42'
    """
    remaining = compute_remaining_seconds(elapsed_seconds, duration_minutes)
    if remaining < 0:
        return f"+{fmt_mmss(-remaining)}"
    return fmt_mmss(elapsed_seconds)


def match_clock_snapshot(match: Match, now: Optional[float] = None) -> Dict[str, Any]:
    """Build a clock reading for ``match`` using a single ``now``."""
    if now is None:
        now = now_ts()
    elapsed = match_elapsed(match, now)
    remaining = compute_remaining_seconds(elapsed, match.duration_minutes)
    return {
        "match_id": match.id,
        "status": match.status.value,
        "paused": match.is_paused(),
        "elapsed_seconds": elapsed,
        "current_minute": elapsed // 60 + 1,
        "remaining_seconds": remaining,
        "overtime": remaining < 0,
        "display": format_elapsed_time(elapsed, match.duration_minutes),
    }


class MatchTicker:
    """
    Cancellable poller for a live match clock.

    Every ``interval`` seconds the ticker fetches the latest stored match via
    ``match_provider`` and hands a fresh clock snapshot to ``on_tick``. It stops
    on ``stop()``, or by itself once the match is gone or no longer live.

    Example:
        ticker = MatchTicker(lambda: service.get_match(tid, mid), render)
        ticker.start()
        ...
        ticker.stop()
    """

    def __init__(
        self,
        match_provider: Callable[[], Optional[Match]],
        on_tick: Callable[[Dict[str, Any]], None],
        interval: float = CLOCK_POLL_INTERVAL_SEC,
    ):
        self.match_provider = match_provider
        self.on_tick = on_tick
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "MatchTicker":
        """
        Start polling in a daemon thread. Calling start twice is a no-op.

        Raises:
            RuntimeError: If a stopped worker has not exited yet
        """
        if self.running:
            if self._stop_event.is_set():
                raise RuntimeError("Previous ticker thread is still shutting down")
            return self
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="match-ticker", daemon=True)
        self._thread.start()
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop polling and wait for the worker thread to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        # A worker that outlived the timeout stays tracked so start() cannot spawn a second one
        if thread is None or not thread.is_alive():
            self._thread = None

    def tick(self) -> bool:
        """
        Run a single poll.

        Returns:
            True if the match is still live and polling should continue
        """
        match = self.match_provider()
        if match is None or not match.is_live():
            return False
        self.on_tick(match_clock_snapshot(match))
        return True

    def _run(self) -> None:
        while not self._stop_event.is_set():
            if not self.tick():
                logger.debug("Match left live status; ticker stopping")
                self._stop_event.set()
                break
            self._stop_event.wait(self.interval)

    def __enter__(self) -> "MatchTicker":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
