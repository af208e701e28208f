"""Tests for the Flask API."""

from unittest.mock import patch

import pytest

from matchday.services import InMemoryTournamentRepository, TournamentService
from matchday.ui.web_app import create_app
from matchday.utils import PIN_HEADER

NOW = "matchday.services.tournament_service.now_ts"
PIN = {PIN_HEADER: "2468"}

DRAFT = {
    "name": "Spring Cup",
    "pin": "2468",
    "settings": {
        "match_duration_minutes": 15,
        "break_between_matches_minutes": 5,
        "start_date": "2025-01-01",
        "start_time": "09:00",
    },
    "teams": [
        {"name": "Admira", "color": "#E53935", "players": [{"name": "Eva", "jersey_number": 9}]},
        {"name": "Barrandov", "players": []},
        {"name": "Comet", "players": []},
    ],
}


@pytest.fixture
def client():
    service = TournamentService(InMemoryTournamentRepository(), auto_publish=True)
    app = create_app(service=service, config={"TESTING": True})
    return app.test_client()


@pytest.fixture
def tournament(client):
    response = client.post("/api/tournaments", json=DRAFT)
    assert response.status_code == 201
    return response.get_json()["tournament"]


def test_create_tournament(client, tournament):
    assert tournament["status"] == "draft"
    assert len(tournament["matches"]) == 3
    assert "pin_hash" not in tournament
    assert [row["points"] for row in tournament["standings"]] == [0, 0, 0]
    assert tournament["estimated_duration"] == "1 h"

    listing = client.get("/api/tournaments").get_json()
    assert listing["tournaments"][0]["match_count"] == 3


def test_create_rejects_bad_draft(client):
    response = client.post("/api/tournaments", json={"name": "", "teams": []})
    body = response.get_json()

    assert response.status_code == 400
    assert body["success"] is False
    assert "An organiser PIN is required" in body["errors"]


def test_writes_require_pin(client, tournament):
    match_id = tournament["matches"][0]["id"]
    url = f"/api/tournaments/{tournament['id']}/matches/{match_id}/start"

    assert client.post(url).status_code == 403
    assert client.post(url, headers={PIN_HEADER: "0000"}).status_code == 403
    assert client.post(url, headers=PIN).status_code == 200


def test_unknown_tournament_and_action(client, tournament):
    assert client.get("/api/tournaments/nope", headers=PIN).status_code == 404
    match_id = tournament["matches"][0]["id"]
    response = client.post(f"/api/tournaments/{tournament['id']}/matches/{match_id}/explode", headers=PIN)
    assert response.status_code == 404


def test_match_flow_updates_standings(client, tournament):
    tid = tournament["id"]
    match = tournament["matches"][0]
    base = f"/api/tournaments/{tid}/matches/{match['id']}"

    with patch(NOW, return_value=1000.0):
        client.post(f"{base}/start", headers=PIN)
    with patch(NOW, return_value=1200.0):
        goal = client.post(f"{base}/goals", json={"team_id": match["home_team_id"]}, headers=PIN)
    assert goal.status_code == 201
    assert goal.get_json()["tournament"]["matches"][0]["goals"][0]["minute"] == 4

    live = client.get(f"/api/tournaments/{tid}/standings").get_json()
    assert all(row["played"] == 0 for row in live["standings"])

    with patch(NOW, return_value=1900.0):
        finished = client.post(f"{base}/finish", headers=PIN).get_json()["tournament"]

    assert finished["status"] == "active"
    top = finished["standings"][0]
    assert top["team_id"] == match["home_team_id"]
    assert (top["points"], top["goals_for"], top["position"]) == (3, 1, 1)


def test_goal_editing_routes(client, tournament):
    tid = tournament["id"]
    match = tournament["matches"][0]
    base = f"/api/tournaments/{tid}/matches/{match['id']}/goals"

    client.post(base, json={"team_id": match["home_team_id"], "minute": 3}, headers=PIN)
    body = client.post(base, json={"team_id": match["away_team_id"], "minute": 7}, headers=PIN).get_json()
    first_goal = body["tournament"]["matches"][0]["goals"][0]

    patched = client.patch(f"{base}/{first_goal['id']}", json={"player_id": "p1"}, headers=PIN).get_json()
    assert patched["tournament"]["matches"][0]["goals"][0]["player_id"] == "p1"

    after_last = client.delete(f"{base}/last", headers=PIN).get_json()["tournament"]["matches"][0]
    assert (after_last["home_score"], after_last["away_score"]) == (1, 0)

    after_specific = client.delete(f"{base}/{first_goal['id']}", headers=PIN).get_json()["tournament"]["matches"][0]
    assert after_specific["goals"] == []
    assert after_specific["home_score"] == 0

    missing_team = client.post(base, json={}, headers=PIN)
    assert missing_team.status_code == 400


def test_roster_routes(client, tournament):
    tid = tournament["id"]
    team = tournament["teams"][0]
    base = f"/api/tournaments/{tid}/teams/{team['id']}"

    renamed = client.patch(base, json={"name": "Admira Praha"}, headers=PIN).get_json()
    assert renamed["tournament"]["teams"][0]["name"] == "Admira Praha"

    clash = client.post(f"{base}/players", json={"name": "Jan", "jersey_number": 9}, headers=PIN)
    assert clash.status_code == 400

    added = client.post(f"{base}/players", json={"name": "Jan", "jersey_number": 10}, headers=PIN)
    assert added.status_code == 201
    player = added.get_json()["tournament"]["teams"][0]["players"][1]

    updated = client.patch(f"{base}/players/{player['id']}", json={"jersey_number": 11}, headers=PIN).get_json()
    assert updated["tournament"]["teams"][0]["players"][1]["jersey_number"] == 11

    removed = client.delete(f"{base}/players/{player['id']}", headers=PIN).get_json()
    assert len(removed["tournament"]["teams"][0]["players"]) == 1

    bad_number = client.post(f"{base}/players", json={"name": "Jan", "jersey_number": "ten"}, headers=PIN)
    assert bad_number.status_code == 400


def test_public_view_team_filter_is_display_only(client, tournament):
    tid = tournament["id"]
    team_id = tournament["teams"][0]["id"]

    full = client.get(f"/api/public/{tid}").get_json()["tournament"]
    filtered = client.get(f"/api/public/{tid}?team={team_id}").get_json()["tournament"]

    assert len(full["matches"]) == 3
    assert len(filtered["matches"]) == 2
    assert all(team_id in (m["home_team_id"], m["away_team_id"]) for m in filtered["matches"])
    assert len(filtered["standings"]) == 3
    assert "pin_hash" not in filtered


def test_live_clock_endpoint(client, tournament):
    tid = tournament["id"]
    match_id = tournament["matches"][0]["id"]
    base = f"/api/tournaments/{tid}/matches/{match_id}"

    with patch(NOW, return_value=1000.0):
        client.post(f"{base}/start", headers=PIN)
    with patch(NOW, return_value=1090.0):
        client.post(f"{base}/pause", headers=PIN)

    clock = client.get(f"{base}/clock").get_json()["clock"]
    assert (clock["elapsed_seconds"], clock["paused"], clock["display"]) == (90, True, "01:30")

    assert client.get(f"/api/tournaments/{tid}/matches/nope/clock").status_code == 404


def test_update_and_delete_tournament(client, tournament):
    tid = tournament["id"]

    patched = client.patch(f"/api/tournaments/{tid}", json={"rules": "Rolling subs"}, headers=PIN).get_json()
    assert patched["tournament"]["settings"]["rules"] == "Rolling subs"

    assert client.post(f"/api/tournaments/{tid}/publish", headers=PIN).get_json()["tournament"]["public_synced"]

    assert client.delete(f"/api/tournaments/{tid}", headers=PIN).status_code == 200
    assert client.get(f"/api/public/{tid}").status_code == 404


@pytest.mark.parametrize("field, value", [
    ("teams", ["Admira", "Barrandov"]),
    ("settings", "x"),
    ("teams", [{"name": "Admira", "players": ["Eva"]}, {"name": "Barrandov"}]),
])
def test_create_rejects_malformed_shapes(client, field, value):
    response = client.post("/api/tournaments", json={**DRAFT, field: value})
    body = response.get_json()

    assert response.status_code == 400
    assert body["success"] is False
    assert body["error"].startswith("Malformed tournament draft")


def test_create_rejects_non_object_body(client):
    response = client.post("/api/tournaments", json=["Admira", "Barrandov"])
    assert response.status_code == 400


def test_own_goal_flag_must_be_boolean(client, tournament):
    match = tournament["matches"][0]
    base = f"/api/tournaments/{tournament['id']}/matches/{match['id']}/goals"

    rejected = client.post(base, json={"team_id": match["home_team_id"], "is_own_goal": "false"}, headers=PIN)
    assert rejected.status_code == 400
    detail = client.get(f"/api/tournaments/{tournament['id']}", headers=PIN).get_json()["tournament"]
    assert detail["matches"][0]["goals"] == []

    own_goal = client.post(base, json={"team_id": match["home_team_id"], "is_own_goal": True}, headers=PIN)
    scored = own_goal.get_json()["tournament"]["matches"][0]
    assert (scored["home_score"], scored["away_score"]) == (0, 1)
    assert scored["goals"][0]["is_own_goal"] is True


@pytest.mark.parametrize("minute", [True, 7.9, "seven"])
def test_goal_minute_must_be_whole_number(client, tournament, minute):
    match = tournament["matches"][0]
    base = f"/api/tournaments/{tournament['id']}/matches/{match['id']}/goals"

    response = client.post(base, json={"team_id": match["home_team_id"], "minute": minute}, headers=PIN)
    assert response.status_code == 400


def test_goal_minute_accepts_integral_float(client, tournament):
    match = tournament["matches"][0]
    base = f"/api/tournaments/{tournament['id']}/matches/{match['id']}/goals"

    response = client.post(base, json={"team_id": match["home_team_id"], "minute": 7.0}, headers=PIN)
    assert response.get_json()["tournament"]["matches"][0]["goals"][0]["minute"] == 7


def test_unpublished_tournament_is_not_readable_without_pin():
    service = TournamentService(InMemoryTournamentRepository(), auto_publish=False)
    client = create_app(service=service, config={"TESTING": True}).test_client()
    tournament = client.post("/api/tournaments", json=DRAFT).get_json()["tournament"]
    tid = tournament["id"]
    base = f"/api/tournaments/{tid}/matches/{tournament['matches'][0]['id']}"

    with patch(NOW, return_value=1000.0):
        client.post(f"{base}/start", headers=PIN)

    assert client.get(f"/api/public/{tid}").status_code == 404
    assert client.get(f"/api/tournaments/{tid}/standings").status_code == 404
    assert client.get(f"{base}/clock").status_code == 404

    with patch(NOW, return_value=1030.0):
        client.post(f"/api/tournaments/{tid}/publish", headers=PIN)

    assert client.get(f"/api/tournaments/{tid}/standings").status_code == 200
    with patch("matchday.services.match_clock.now_ts", return_value=1030.0):
        clock = client.get(f"{base}/clock").get_json()["clock"]
    assert clock["elapsed_seconds"] == 30
