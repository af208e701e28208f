"""
Tournament models for the Matchday tournament engine.

This module contains the dataclasses for tournaments, teams, players, matches
and goals, together with their JSON (de)serialization helpers. Records are
plain data: derived values such as standings or elapsed match time are never
stored on them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils.constants import DEFAULT_BREAK_MIN, DEFAULT_MATCH_DURATION_MIN, DEFAULT_START_TIME


class MatchStatus(str, Enum):
    """Lifecycle status of a single match."""
    SCHEDULED = "scheduled"
    LIVE = "live"
    FINISHED = "finished"


class TournamentStatus(str, Enum):
    """Aggregate status of a tournament, derived from its matches."""
    DRAFT = "draft"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass
class Player:
    """A rostered player. Jersey numbers are unique within a team."""
    id: str
    name: str
    jersey_number: int
    birth_year: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "jersey_number": self.jersey_number,
            "birth_year": self.birth_year,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """Create from dictionary for JSON deserialization."""
        birth_year = data.get("birth_year")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            jersey_number=int(data.get("jersey_number", 0)),
            birth_year=int(birth_year) if birth_year is not None else None,
        )


@dataclass
class Team:
    """A tournament team with its ordered roster."""
    id: str
    name: str
    color: str = ""
    players: List[Player] = field(default_factory=list)

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "players": [p.to_dict() for p in self.players],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            color=data.get("color", ""),
            players=[Player.from_dict(p) for p in data.get("players", []) or []],
        )


@dataclass
class Goal:
    """
    A goal recorded in a match.

    Attributes:
        id: Goal identifier
        team_id: Team the goal was recorded for
        player_id: Scorer, or None when unattributed
        is_own_goal: Own goals are credited to the opponent of ``team_id``
        minute: Match minute, 1-based
        recorded_at: When the goal was recorded (epoch seconds)
    """
    id: str
    team_id: str
    player_id: Optional[str] = None
    is_own_goal: bool = False
    minute: int = 1
    recorded_at: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "team_id": self.team_id,
            "player_id": self.player_id,
            "is_own_goal": self.is_own_goal,
            "minute": self.minute,
            "recorded_at": self.recorded_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Goal':
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=data["id"],
            team_id=data["team_id"],
            player_id=data.get("player_id"),
            is_own_goal=bool(data.get("is_own_goal", False)),
            minute=max(1, int(data.get("minute", 1))),
            recorded_at=float(data.get("recorded_at", 0.0)),
        )


@dataclass
class Match:
    """
    A scheduled fixture between two teams.

    Attributes:
        id: Match identifier
        home_team_id: Home team identifier
        away_team_id: Away team identifier
        scheduled_time: Planned kickoff as a naive local ISO datetime
        duration_minutes: Regulation length of the match
        status: Lifecycle status
        home_score: Goals credited to the home team
        away_score: Goals credited to the away team
        goals: Goals in recording order
        started_at: Clock anchor (epoch seconds); reset on every resume
        finished_at: When the match was finished (epoch seconds)
        paused_at: When the match was paused (epoch seconds), None while running
        paused_elapsed: Elapsed match seconds banked at the last pause
        round_index: 0-based round number
        match_index: 0-based global position in the schedule
    """
    id: str
    home_team_id: str
    away_team_id: str
    scheduled_time: str
    duration_minutes: int
    status: MatchStatus = MatchStatus.SCHEDULED
    home_score: int = 0
    away_score: int = 0
    goals: List[Goal] = field(default_factory=list)
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    paused_at: Optional[float] = None
    paused_elapsed: int = 0
    round_index: int = 0
    match_index: int = 0

    def is_live(self) -> bool:
        return self.status == MatchStatus.LIVE

    def is_paused(self) -> bool:
        return self.is_live() and self.paused_at is not None

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def opponent_of(self, team_id: str) -> str:
        return self.away_team_id if team_id == self.home_team_id else self.home_team_id

    def credited_team_id(self, goal: Goal) -> str:
        """Return the team whose score a goal counts for."""
        return self.opponent_of(goal.team_id) if goal.is_own_goal else goal.team_id

    def find_goal(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self.goals if g.id == goal_id), None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "scheduled_time": self.scheduled_time,
            "duration_minutes": self.duration_minutes,
            "status": self.status.value,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "goals": [g.to_dict() for g in self.goals],
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "paused_at": self.paused_at,
            "paused_elapsed": self.paused_elapsed,
            "round_index": self.round_index,
            "match_index": self.match_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Match':
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=data["id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            scheduled_time=data["scheduled_time"],
            duration_minutes=int(data.get("duration_minutes", DEFAULT_MATCH_DURATION_MIN)),
            status=MatchStatus(data.get("status", MatchStatus.SCHEDULED.value)),
            home_score=int(data.get("home_score", 0)),
            away_score=int(data.get("away_score", 0)),
            goals=[Goal.from_dict(g) for g in data.get("goals", []) or []],
            started_at=data.get("started_at"),
            finished_at=data.get("finished_at"),
            paused_at=data.get("paused_at"),
            # Older records may carry no pause bookkeeping at all
            paused_elapsed=int(data.get("paused_elapsed") or 0),
            round_index=int(data.get("round_index", 0)),
            match_index=int(data.get("match_index", 0)),
        )


@dataclass
class TournamentSettings:
    """Scheduling settings chosen when the tournament is created."""
    match_duration_minutes: int = DEFAULT_MATCH_DURATION_MIN
    break_between_matches_minutes: int = DEFAULT_BREAK_MIN
    start_date: str = ""
    start_time: str = DEFAULT_START_TIME
    rules: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "match_duration_minutes": self.match_duration_minutes,
            "break_between_matches_minutes": self.break_between_matches_minutes,
            "start_date": self.start_date,
            "start_time": self.start_time,
            "rules": self.rules,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'TournamentSettings':
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        return cls(
            match_duration_minutes=int(data.get("match_duration_minutes", DEFAULT_MATCH_DURATION_MIN)),
            break_between_matches_minutes=int(data.get("break_between_matches_minutes", DEFAULT_BREAK_MIN)),
            start_date=data.get("start_date", ""),
            start_time=data.get("start_time", DEFAULT_START_TIME),
            rules=data.get("rules"),
        )


@dataclass
class Tournament:
    """
    The persisted tournament aggregate.

    Matches are generated once at creation time; afterwards only match-level
    mutations happen. ``status`` is kept in step with the matches by the
    tournament service and is never edited directly.
    """
    id: str
    name: str
    settings: TournamentSettings
    status: TournamentStatus = TournamentStatus.DRAFT
    created_at: float = 0.0
    updated_at: float = 0.0
    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    pin_hash: str = ""
    public_synced: bool = False
    last_synced_at: Optional[float] = None

    def find_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def find_match(self, match_id: str) -> Optional[Match]:
        return next((m for m in self.matches if m.id == match_id), None)

    def to_dict(self, include_pin: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            include_pin: Set to False for payloads handed to public viewers
        """
        data = {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "settings": self.settings.to_dict(),
            "teams": [t.to_dict() for t in self.teams],
            "matches": [m.to_dict() for m in self.matches],
            "public_synced": self.public_synced,
            "last_synced_at": self.last_synced_at,
        }
        if include_pin:
            data["pin_hash"] = self.pin_hash
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Tournament':
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            settings=TournamentSettings.from_dict(data.get("settings")),
            status=TournamentStatus(data.get("status", TournamentStatus.DRAFT.value)),
            created_at=float(data.get("created_at", 0.0)),
            updated_at=float(data.get("updated_at", 0.0)),
            teams=[Team.from_dict(t) for t in data.get("teams", []) or []],
            matches=[Match.from_dict(m) for m in data.get("matches", []) or []],
            pin_hash=data.get("pin_hash", ""),
            public_synced=bool(data.get("public_synced", False)),
            last_synced_at=data.get("last_synced_at"),
        )
