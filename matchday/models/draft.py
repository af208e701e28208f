"""Draft input used to create a tournament."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .tournament import TournamentSettings


@dataclass
class PlayerDraft:
    name: str
    jersey_number: int
    birth_year: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerDraft':
        birth_year = data.get("birth_year")
        return cls(
            name=str(data.get("name", "")),
            jersey_number=int(data.get("jersey_number", 0)),
            birth_year=int(birth_year) if birth_year not in (None, "") else None,
        )


@dataclass
class TeamDraft:
    name: str
    color: str = ""
    players: List[PlayerDraft] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TeamDraft':
        players = _object_list(data.get("players"), "players")
        return cls(
            name=str(data.get("name", "")),
            color=str(data.get("color", "") or ""),
            players=[PlayerDraft.from_dict(p) for p in players],
        )


@dataclass
class TournamentDraft:
    """
    Everything needed to create a tournament.

    Attributes:
        name: Tournament name
        settings: Scheduling settings
        teams: Team drafts in entry order (this order seeds the schedule)
        pin_hash: Pre-computed hash of the organiser PIN
    """
    name: str
    settings: TournamentSettings
    teams: List[TeamDraft] = field(default_factory=list)
    pin_hash: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TournamentDraft':
        """
        Build a draft from request JSON.

        Raises:
            TypeError: If settings, teams or players have the wrong JSON shape
            ValueError: If a numeric field is not a number
        """
        settings = data.get("settings")
        if settings is not None and not isinstance(settings, dict):
            raise TypeError("'settings' must be an object")
        teams = _object_list(data.get("teams"), "teams")
        return cls(
            name=str(data.get("name", "")),
            settings=TournamentSettings.from_dict(settings),
            teams=[TeamDraft.from_dict(t) for t in teams],
            pin_hash=str(data.get("pin_hash", "") or ""),
        )


def _object_list(value: Any, key: str) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise TypeError(f"'{key}' must be a list of objects")
    return value
