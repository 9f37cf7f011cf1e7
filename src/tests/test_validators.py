"""Tests for upstream payload validation."""

from conftest import make_history, make_standings, standing_row
from ingest.fpl.validators import PayloadValidator


class TestValidateStandings:

    def test_valid_standings(self, three_team_standings):
        result = PayloadValidator.validate_standings(three_team_standings)
        assert result.is_valid
        assert result.errors == []

    def test_missing_results(self):
        result = PayloadValidator.validate_standings({"league": {"name": "x"}})
        assert not result.is_valid
        assert "standings.results" in result.errors[0]

    def test_not_an_object(self):
        assert not PayloadValidator.validate_standings(["standings"]).is_valid

    def test_empty_league(self):
        result = PayloadValidator.validate_standings(make_standings([]))
        assert not result.is_valid
        assert result.errors == ["League has no teams"]

    def test_missing_league_name_is_a_warning(self):
        payload = make_standings([standing_row(1, "A", 1)])
        del payload["league"]
        result = PayloadValidator.validate_standings(payload)
        assert result.is_valid
        assert result.warnings == ["Missing league name"]

    def test_bad_rows(self):
        rows = [standing_row(1, "A", 1), standing_row(1, "Dup", 2), {"entry_name": "No id"}]
        rows[0]["total"] = "lots"
        result = PayloadValidator.validate_standings(make_standings(rows))
        assert not result.is_valid
        assert len(result.errors) == 3


class TestValidateHistory:

    def test_valid_history(self):
        assert PayloadValidator.validate_history(make_history([50, 60])).is_valid

    def test_missing_current(self):
        assert not PayloadValidator.validate_history({"detail": "Not found."}).is_valid

    def test_empty_history_is_a_warning(self):
        result = PayloadValidator.validate_history({"current": []})
        assert result.is_valid
        assert result.warnings

    def test_invalid_event(self):
        payload = make_history([50])
        payload["current"][0]["event"] = 0
        assert not PayloadValidator.validate_history(payload).is_valid

    def test_duplicate_event(self):
        payload = make_history([50, 60])
        payload["current"][1]["event"] = 1
        result = PayloadValidator.validate_history(payload)
        assert not result.is_valid
        assert "duplicate" in result.errors[0]

    def test_boolean_is_not_a_number(self):
        payload = make_history([50])
        payload["current"][0]["points"] = True
        assert not PayloadValidator.validate_history(payload).is_valid
