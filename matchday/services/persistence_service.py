"""
Persistence service for the Matchday tournament engine.

Tournaments are stored as whole records, last write wins. Each repository
keeps two copies: the organiser's record (including the PIN hash) and a
public read-only mirror served to spectators.
"""
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import Tournament

logger = logging.getLogger(__name__)


class TournamentRepository(ABC):
    """Storage interface used by the tournament service."""

    @abstractmethod
    def load(self, tournament_id: str) -> Optional[Tournament]:
        """Return the stored tournament or None if it does not exist."""

    @abstractmethod
    def save(self, tournament: Tournament) -> None:
        """Store the full tournament record, replacing any previous version."""

    @abstractmethod
    def delete(self, tournament_id: str) -> bool:
        """Remove a tournament and its public mirror. Returns False if absent."""

    @abstractmethod
    def list_ids(self) -> List[str]:
        """Return the ids of all stored tournaments."""

    @abstractmethod
    def load_public(self, tournament_id: str) -> Optional[Tournament]:
        """Return the public mirror of a tournament, if published."""

    @abstractmethod
    def save_public(self, tournament: Tournament) -> None:
        """Write the public mirror of a tournament."""


class InMemoryTournamentRepository(TournamentRepository):
    """
    Repository keeping serialized records in dictionaries.

    Records are stored as JSON-ready dicts so callers never share mutable
    objects with the store.
    """

    def __init__(self):
        self._records: Dict[str, dict] = {}
        self._public: Dict[str, dict] = {}

    def load(self, tournament_id: str) -> Optional[Tournament]:
        data = self._records.get(tournament_id)
        return Tournament.from_dict(data) if data is not None else None

    def save(self, tournament: Tournament) -> None:
        self._records[tournament.id] = tournament.to_dict()

    def delete(self, tournament_id: str) -> bool:
        self._public.pop(tournament_id, None)
        return self._records.pop(tournament_id, None) is not None

    def list_ids(self) -> List[str]:
        return list(self._records)

    def load_public(self, tournament_id: str) -> Optional[Tournament]:
        data = self._public.get(tournament_id)
        return Tournament.from_dict(data) if data is not None else None

    def save_public(self, tournament: Tournament) -> None:
        self._public[tournament.id] = tournament.to_dict(include_pin=False)


class JsonFileTournamentRepository(TournamentRepository):
    """
    Repository storing one JSON file per tournament.

    Layout::

        <root>/tournaments/<id>.json   organiser record
        <root>/public/<id>.json        read-only mirror
    """

    def __init__(self, root_dir: str):
        self.root_dir = root_dir
        self.records_dir = os.path.join(root_dir, "tournaments")
        self.public_dir = os.path.join(root_dir, "public")

    def load(self, tournament_id: str) -> Optional[Tournament]:
        if not self._valid_id(tournament_id):
            return None
        return self._read(self._path(self.records_dir, tournament_id))

    def save(self, tournament: Tournament) -> None:
        self._write(self._path(self.records_dir, tournament.id), tournament.to_dict())

    def delete(self, tournament_id: str) -> bool:
        if not self._valid_id(tournament_id):
            return False
        removed = False
        for directory in (self.records_dir, self.public_dir):
            path = self._path(directory, tournament_id)
            if os.path.exists(path):
                os.remove(path)
                removed = removed or directory == self.records_dir
        return removed

    def list_ids(self) -> List[str]:
        if not os.path.isdir(self.records_dir):
            return []
        return sorted(
            filename[:-len(".json")]
            for filename in os.listdir(self.records_dir)
            if filename.endswith(".json")
        )

    def load_public(self, tournament_id: str) -> Optional[Tournament]:
        if not self._valid_id(tournament_id):
            return None
        return self._read(self._path(self.public_dir, tournament_id))

    def save_public(self, tournament: Tournament) -> None:
        self._write(self._path(self.public_dir, tournament.id), tournament.to_dict(include_pin=False))

    @staticmethod
    def _valid_id(tournament_id: str) -> bool:
        # Ids end up in file names; refuse anything that could escape the directory
        return bool(tournament_id) and os.sep not in tournament_id and not tournament_id.startswith(".")

    @classmethod
    def _path(cls, directory: str, tournament_id: str) -> str:
        if not cls._valid_id(tournament_id):
            raise ValueError(f"Invalid tournament id: {tournament_id!r}")
        return os.path.join(directory, f"{tournament_id}.json")

    @staticmethod
    def _read(file_path: str) -> Optional[Tournament]:
        if not os.path.exists(file_path):
            return None
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return Tournament.from_dict(data)

    @staticmethod
    def _write(file_path: str, data: dict) -> None:
        directory = os.path.dirname(file_path)
        os.makedirs(directory, exist_ok=True)

        # Write to a temp file first so readers never see a half-written record
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, file_path)
        except OSError:
            logger.exception("Failed to write %s", file_path)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
