"""
Service Factory for dependency injection.

This module provides a factory for creating properly configured service
instances with their dependencies injected, so no module relies on a global
store.
"""
from typing import Optional

from .persistence_service import (
    InMemoryTournamentRepository, JsonFileTournamentRepository, TournamentRepository
)
from .tournament_service import TournamentService


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    Args:
        data_dir: Directory for JSON storage; in-memory storage when None
        auto_publish: Refresh the public mirror on every write
    """

    def __init__(self, data_dir: Optional[str] = None, auto_publish: bool = True):
        """Initialize factory with default configurations."""
        self.data_dir = data_dir
        self.auto_publish = auto_publish
        self._repository: Optional[TournamentRepository] = None

    def create_tournament_service(self) -> TournamentService:
        """
        Create TournamentService with the shared repository injected.

        Returns:
            Configured TournamentService instance
        """
        return TournamentService(self._get_repository(), auto_publish=self.auto_publish)

    def configure_custom_repository(self, repository: TournamentRepository) -> None:
        """Use a custom repository implementation."""
        self._repository = repository

    def _get_repository(self) -> TournamentRepository:
        """Get singleton repository."""
        if self._repository is None:
            if self.data_dir:
                self._repository = JsonFileTournamentRepository(self.data_dir)
            else:
                self._repository = InMemoryTournamentRepository()
        return self._repository
