"""Tests for match lifecycle transitions."""

from matchday.models import Match, MatchStatus, TournamentStatus
from matchday.services import match_lifecycle as lifecycle


def make_match(**overrides):
    fields = dict(
        id="m001", home_team_id="home", away_team_id="away",
        scheduled_time="2025-01-01T09:00:00", duration_minutes=15,
    )
    fields.update(overrides)
    return Match(**fields)


def test_start_pause_resume_finish():
    match = make_match()

    assert lifecycle.start_match(match, 1000.0)
    assert match.status == MatchStatus.LIVE
    assert match.started_at == 1000.0

    assert lifecycle.pause_match(match, 1125.0)
    assert (match.paused_elapsed, match.paused_at) == (125, 1125.0)

    assert lifecycle.resume_match(match, 1185.0)
    assert match.paused_at is None
    assert match.started_at == 1185.0
    assert match.paused_elapsed == 125

    assert lifecycle.pause_match(match, 1195.0)
    assert match.paused_elapsed == 135

    assert lifecycle.finish_match(match, 1200.0)
    assert match.status == MatchStatus.FINISHED
    assert match.finished_at == 1200.0
    assert match.paused_at is None


def test_illegal_transitions_are_no_ops():
    match = make_match()
    assert not lifecycle.pause_match(match, 1.0)
    assert not lifecycle.resume_match(match, 1.0)
    assert not lifecycle.finish_match(match, 1.0)
    assert not lifecycle.reopen_match(match, 1.0)
    assert match == make_match()

    lifecycle.start_match(match, 10.0)
    assert not lifecycle.start_match(match, 20.0)
    assert not lifecycle.resume_match(match, 20.0)
    lifecycle.pause_match(match, 30.0)
    assert not lifecycle.pause_match(match, 40.0)
    assert match.paused_elapsed == 20


def test_own_goal_credits_opponent():
    match = make_match(status=MatchStatus.LIVE, started_at=0.0)

    goal = lifecycle.record_goal(match, "g1", "home", now=30.0, is_own_goal=True)

    assert goal.team_id == "home"
    assert (match.home_score, match.away_score) == (0, 1)

    lifecycle.remove_goal(match)
    assert (match.home_score, match.away_score) == (0, 0)
    assert match.goals == []


def test_goal_minute_auto_fill_and_clamp():
    match = make_match(status=MatchStatus.LIVE, started_at=0.0)

    auto = lifecycle.record_goal(match, "g1", "home", now=65.0)
    clamped = lifecycle.record_goal(match, "g2", "away", now=70.0, minute=0)
    explicit = lifecycle.record_goal(match, "g3", "away", now=70.0, minute=12)

    assert (auto.minute, clamped.minute, explicit.minute) == (2, 1, 12)
    assert (match.home_score, match.away_score) == (1, 2)


def test_goal_for_team_not_in_match_is_ignored():
    match = make_match()
    assert lifecycle.record_goal(match, "g1", "stranger", now=1.0) is None
    assert match.goals == []


def test_remove_specific_goal_and_floor():
    match = make_match()
    lifecycle.record_goal(match, "g1", "home", now=1.0, minute=1)
    lifecycle.record_goal(match, "g2", "away", now=2.0, minute=2)

    assert lifecycle.remove_goal(match, "g1").id == "g1"
    assert (match.home_score, match.away_score) == (0, 1)
    assert lifecycle.remove_goal(match, "missing") is None

    # Out of step stored score never goes negative
    match.away_score = 0
    lifecycle.remove_goal(match, "g2")
    assert match.away_score == 0
    assert lifecycle.remove_goal(match) is None


def test_update_goal_player():
    match = make_match()
    lifecycle.record_goal(match, "g1", "home", now=1.0, minute=3)

    assert lifecycle.update_goal_player(match, "g1", "p7")
    assert match.goals[0].player_id == "p7"
    assert match.home_score == 1
    assert not lifecycle.update_goal_player(match, "nope", "p7")


def test_reopen_keeps_score_and_reset_clears_everything():
    match = make_match()
    lifecycle.start_match(match, 0.0)
    lifecycle.record_goal(match, "g1", "home", now=10.0)
    lifecycle.pause_match(match, 20.0)
    lifecycle.finish_match(match, 30.0)

    assert lifecycle.reopen_match(match, 100.0)
    assert match.status == MatchStatus.LIVE
    assert (match.started_at, match.paused_at, match.paused_elapsed, match.finished_at) == (100.0, None, 0, None)
    assert match.home_score == 1 and len(match.goals) == 1

    assert lifecycle.reset_match(match)
    assert match == make_match()


def test_resolve_tournament_status():
    scheduled = make_match()
    live = make_match(status=MatchStatus.LIVE)
    finished = make_match(status=MatchStatus.FINISHED)

    assert lifecycle.resolve_tournament_status(TournamentStatus.DRAFT, [scheduled, scheduled]) == TournamentStatus.DRAFT
    assert lifecycle.resolve_tournament_status(TournamentStatus.DRAFT, [live, scheduled]) == TournamentStatus.ACTIVE
    assert lifecycle.resolve_tournament_status(TournamentStatus.ACTIVE, [finished, finished]) == TournamentStatus.FINISHED
    assert lifecycle.resolve_tournament_status(TournamentStatus.FINISHED, [finished, scheduled]) == TournamentStatus.ACTIVE
    assert lifecycle.resolve_tournament_status(TournamentStatus.ACTIVE, [scheduled]) == TournamentStatus.ACTIVE
