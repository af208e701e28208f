import unittest

from matchday.exceptions import TournamentValidationError
from matchday.models import PlayerDraft, TeamDraft, TournamentDraft, TournamentSettings
from matchday.services.validation import (
    ensure_valid_draft, validate_draft, validate_player, validate_settings
)


class ValidationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = TournamentSettings(
            match_duration_minutes=15,
            break_between_matches_minutes=5,
            start_date="2025-01-01",
            start_time="09:00",
        )

    def _draft(self, teams) -> TournamentDraft:
        return TournamentDraft(name="Cup", settings=self.settings, teams=teams, pin_hash="hash")

    def test_valid_settings(self) -> None:
        self.assertEqual(validate_settings(self.settings), [])

    def test_settings_limits(self) -> None:
        settings = TournamentSettings(
            match_duration_minutes=121,
            break_between_matches_minutes=16,
            start_date="01/01/2025",
            start_time="9am",
        )
        self.assertEqual(len(validate_settings(settings)), 4)

    def test_player_rules(self) -> None:
        self.assertEqual(validate_player("Eva", 7), [])
        self.assertEqual(len(validate_player("", 0)), 2)
        self.assertEqual(validate_player("Eva", 7, taken_numbers=[7]), ["Jersey number 7 is already taken"])
        self.assertEqual(len(validate_player("Eva", 7, birth_year=1800)), 1)

    def test_draft_duplicate_jersey_and_team(self) -> None:
        teams = [
            TeamDraft(name="Admira", players=[PlayerDraft("A", 4), PlayerDraft("B", 4)]),
            TeamDraft(name="admira"),
        ]
        errors = validate_draft(self._draft(teams))
        self.assertIn("Admira: Jersey number 4 is already taken", errors)
        self.assertIn("Duplicate team name: admira", errors)

    def test_ensure_valid_draft_raises_with_all_errors(self) -> None:
        draft = TournamentDraft(name="", settings=self.settings, teams=[], pin_hash="")
        with self.assertRaises(TournamentValidationError) as ctx:
            ensure_valid_draft(draft)
        self.assertEqual(len(ctx.exception.errors), 3)

    def test_same_jersey_in_different_teams_is_fine(self) -> None:
        teams = [
            TeamDraft(name="Admira", players=[PlayerDraft("A", 10)]),
            TeamDraft(name="Barrandov", players=[PlayerDraft("B", 10)]),
        ]
        self.assertEqual(validate_draft(self._draft(teams)), [])


if __name__ == "__main__":
    unittest.main()
