"""
Tournament service for the Matchday tournament engine.

This module holds the write side of the application: creating tournaments,
running the match lifecycle, recording goals and editing rosters. Every
mutation takes a tournament id, loads the record from the repository, applies
the change, saves the full record (last write wins) and returns it.
"""
import logging
from typing import Callable, List, Optional

from ..exceptions import PinRequiredError, TournamentNotFoundError, TournamentValidationError
from ..models import (
    Match, Player, Team, Tournament, TournamentDraft, TournamentStatus
)
from ..utils import generate_id, now_ts, verify_pin
from ..utils.constants import TEAM_COLORS
from . import match_lifecycle
from .persistence_service import TournamentRepository
from .schedule_service import generate_round_robin_schedule
from .validation import ensure_valid_draft, ensure_valid_player

logger = logging.getLogger(__name__)

_UNSET = object()


class TournamentService:
    """
    Service applying all tournament mutations through a repository.

    Args:
        repository: Storage for tournament records
        auto_publish: Also refresh the public mirror on every save
    """

    def __init__(self, repository: TournamentRepository, auto_publish: bool = False):
        self.repository = repository
        self.auto_publish = auto_publish

    # ------------------------------------------------------------------
    # Tournament CRUD
    # ------------------------------------------------------------------
    def create_tournament(self, draft: TournamentDraft) -> Tournament:
        """
        Create a tournament from a validated draft and generate its fixtures.

        Raises:
            TournamentValidationError: If the draft is invalid
        """
        ensure_valid_draft(draft)
        now = now_ts()

        teams = [
            Team(
                id=generate_id(),
                name=team_draft.name.strip(),
                color=team_draft.color or TEAM_COLORS[index % len(TEAM_COLORS)],
                players=[
                    Player(
                        id=generate_id(),
                        name=p.name.strip(),
                        jersey_number=p.jersey_number,
                        birth_year=p.birth_year,
                    )
                    for p in team_draft.players
                ],
            )
            for index, team_draft in enumerate(draft.teams)
        ]

        tournament = Tournament(
            id=generate_id(),
            name=draft.name.strip(),
            settings=draft.settings,
            status=TournamentStatus.DRAFT,
            created_at=now,
            updated_at=now,
            teams=teams,
            matches=generate_round_robin_schedule(teams, draft.settings),
            pin_hash=draft.pin_hash,
        )
        self._save(tournament, now)
        logger.info(
            "Created tournament %s (%s) with %d teams and %d matches",
            tournament.id, tournament.name, len(teams), len(tournament.matches),
        )
        return tournament

    def get_tournament(self, tournament_id: str) -> Tournament:
        """
        Load a tournament.

        Raises:
            TournamentNotFoundError: If no such tournament is stored
        """
        tournament = self.repository.load(tournament_id)
        if tournament is None:
            raise TournamentNotFoundError(tournament_id)
        return tournament

    def get_public_tournament(self, tournament_id: str) -> Tournament:
        """Load the public mirror of a tournament."""
        tournament = self.repository.load_public(tournament_id)
        if tournament is None:
            raise TournamentNotFoundError(tournament_id)
        return tournament

    def list_tournaments(self) -> List[Tournament]:
        """All stored tournaments, newest first."""
        tournaments = [self.repository.load(tid) for tid in self.repository.list_ids()]
        return sorted(
            (t for t in tournaments if t is not None),
            key=lambda t: t.created_at,
            reverse=True,
        )

    def update_tournament(self, tournament_id: str, name: Optional[str] = None, rules=_UNSET) -> Tournament:
        """Rename a tournament or change its free-text rules."""
        tournament = self.get_tournament(tournament_id)
        if name is not None:
            if not name.strip():
                raise TournamentValidationError("Tournament name is required")
            tournament.name = name.strip()
        if rules is not _UNSET:
            tournament.settings.rules = rules
        self._save(tournament, now_ts())
        return tournament

    def delete_tournament(self, tournament_id: str) -> None:
        if not self.repository.delete(tournament_id):
            raise TournamentNotFoundError(tournament_id)
        logger.info("Deleted tournament %s", tournament_id)

    def authorize(self, tournament_id: str, pin: Optional[str]) -> Tournament:
        """
        Check an organiser PIN and return the tournament.

        Raises:
            TournamentNotFoundError: If no such tournament is stored
            PinRequiredError: If the PIN is missing or wrong
        """
        tournament = self.get_tournament(tournament_id)
        if not verify_pin(pin or "", tournament.pin_hash):
            raise PinRequiredError("A valid organiser PIN is required")
        return tournament

    def publish(self, tournament_id: str) -> Tournament:
        """Write the public read-only mirror and mark the record as synced."""
        tournament = self.get_tournament(tournament_id)
        self._publish(tournament, now_ts())
        self.repository.save(tournament)
        return tournament

    # ------------------------------------------------------------------
    # Match lifecycle
    # ------------------------------------------------------------------
    def get_match(self, tournament_id: str, match_id: str) -> Optional[Match]:
        return self.get_tournament(tournament_id).find_match(match_id)

    def start_match(self, tournament_id: str, match_id: str) -> Tournament:
        return self._apply(tournament_id, match_id, "start", match_lifecycle.start_match)

    def pause_match(self, tournament_id: str, match_id: str) -> Tournament:
        return self._apply(tournament_id, match_id, "pause", match_lifecycle.pause_match)

    def resume_match(self, tournament_id: str, match_id: str) -> Tournament:
        return self._apply(tournament_id, match_id, "resume", match_lifecycle.resume_match)

    def finish_match(self, tournament_id: str, match_id: str) -> Tournament:
        return self._apply(tournament_id, match_id, "finish", match_lifecycle.finish_match)

    def reopen_match(self, tournament_id: str, match_id: str) -> Tournament:
        return self._apply(tournament_id, match_id, "reopen", match_lifecycle.reopen_match)

    def reset_match(self, tournament_id: str, match_id: str) -> Tournament:
        return self._apply(
            tournament_id, match_id, "reset", lambda match, now: match_lifecycle.reset_match(match)
        )

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------
    def add_goal(
        self,
        tournament_id: str,
        match_id: str,
        team_id: str,
        player_id: Optional[str] = None,
        is_own_goal: bool = False,
        minute: Optional[int] = None,
    ) -> Tournament:
        """Record a goal; the minute defaults to the current match minute."""
        def record(match: Match, now: float) -> bool:
            goal = match_lifecycle.record_goal(
                match, generate_id(), team_id, now,
                player_id=player_id, is_own_goal=is_own_goal, minute=minute,
            )
            return goal is not None

        return self._apply(tournament_id, match_id, "goal", record)

    def remove_last_goal(self, tournament_id: str, match_id: str) -> Tournament:
        return self._apply(
            tournament_id, match_id, "remove last goal",
            lambda match, now: match_lifecycle.remove_goal(match) is not None,
        )

    def remove_goal(self, tournament_id: str, match_id: str, goal_id: str) -> Tournament:
        return self._apply(
            tournament_id, match_id, "remove goal",
            lambda match, now: match_lifecycle.remove_goal(match, goal_id) is not None,
        )

    def update_goal_player(
        self, tournament_id: str, match_id: str, goal_id: str, player_id: Optional[str]
    ) -> Tournament:
        return self._apply(
            tournament_id, match_id, "update goal scorer",
            lambda match, now: match_lifecycle.update_goal_player(match, goal_id, player_id),
        )

    # ------------------------------------------------------------------
    # Teams and players
    # ------------------------------------------------------------------
    def update_team_name(self, tournament_id: str, team_id: str, name: str) -> Tournament:
        if not name or not name.strip():
            raise TournamentValidationError("Team name is required")

        def rename(tournament: Tournament, team: Team) -> bool:
            team.name = name.strip()
            return True

        return self._apply_team(tournament_id, team_id, rename)

    def add_player(
        self,
        tournament_id: str,
        team_id: str,
        name: str,
        jersey_number: int,
        birth_year: Optional[int] = None,
    ) -> Tournament:
        """
        Add a player to a team roster.

        Raises:
            TournamentValidationError: If the entry is invalid or the
                jersey number is already taken in that team
        """
        def add(tournament: Tournament, team: Team) -> bool:
            ensure_valid_player(name, jersey_number, birth_year, [p.jersey_number for p in team.players])
            team.players.append(
                Player(id=generate_id(), name=name.strip(), jersey_number=jersey_number, birth_year=birth_year)
            )
            return True

        return self._apply_team(tournament_id, team_id, add)

    def update_player(
        self,
        tournament_id: str,
        team_id: str,
        player_id: str,
        name: Optional[str] = None,
        jersey_number: Optional[int] = None,
        birth_year=_UNSET,
    ) -> Tournament:
        """Edit a rostered player; omitted fields keep their value."""
        def update(tournament: Tournament, team: Team) -> bool:
            player = team.find_player(player_id)
            if player is None:
                return False

            new_name = name if name is not None else player.name
            new_number = jersey_number if jersey_number is not None else player.jersey_number
            new_birth_year = player.birth_year if birth_year is _UNSET else birth_year
            taken = [p.jersey_number for p in team.players if p.id != player_id]
            ensure_valid_player(new_name, new_number, new_birth_year, taken)

            player.name = new_name.strip()
            player.jersey_number = new_number
            player.birth_year = new_birth_year
            return True

        return self._apply_team(tournament_id, team_id, update)

    def remove_player(self, tournament_id: str, team_id: str, player_id: str) -> Tournament:
        def remove(tournament: Tournament, team: Team) -> bool:
            if team.find_player(player_id) is None:
                return False
            team.players = [p for p in team.players if p.id != player_id]
            return True

        return self._apply_team(tournament_id, team_id, remove)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _apply(
        self,
        tournament_id: str,
        match_id: str,
        action: str,
        transition: Callable[[Match, float], bool],
    ) -> Tournament:
        tournament = self.get_tournament(tournament_id)
        match = tournament.find_match(match_id)
        if match is None:
            logger.debug("Ignoring %s: no match %s in tournament %s", action, match_id, tournament_id)
            return tournament

        now = now_ts()
        if not transition(match, now):
            logger.debug("Ignoring %s on match %s (status %s)", action, match_id, match.status.value)
            return tournament

        tournament.status = match_lifecycle.resolve_tournament_status(tournament.status, tournament.matches)
        self._save(tournament, now)
        logger.info(
            "Match %s %s: %d-%d, tournament %s",
            match_id, action, match.home_score, match.away_score, tournament.status.value,
        )
        return tournament

    def _apply_team(
        self,
        tournament_id: str,
        team_id: str,
        edit: Callable[[Tournament, Team], bool],
    ) -> Tournament:
        tournament = self.get_tournament(tournament_id)
        team = tournament.find_team(team_id)
        if team is None or not edit(tournament, team):
            logger.debug("Ignoring roster edit for team %s in tournament %s", team_id, tournament_id)
            return tournament
        self._save(tournament, now_ts())
        return tournament

    def _save(self, tournament: Tournament, now: float) -> None:
        tournament.updated_at = now
        if self.auto_publish:
            self._publish(tournament, now)
        else:
            tournament.public_synced = False
        self.repository.save(tournament)

    def _publish(self, tournament: Tournament, now: float) -> None:
        tournament.public_synced = True
        tournament.last_synced_at = now
        self.repository.save_public(tournament)
