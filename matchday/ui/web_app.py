"""
Web application module for the Matchday tournament engine.

This module contains the Flask server exposing the organiser API (write
routes gated by the tournament PIN) and the read-only public view that
spectators open via the shared link.
"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ..exceptions import PinRequiredError, TournamentNotFoundError, TournamentValidationError
from ..models import Tournament, TournamentDraft
from ..services import (
    ServiceFactory, TournamentService, estimate_tournament_duration, match_clock_snapshot,
    standings_table
)
from ..utils import PIN_HEADER, configure_logging, format_minutes, hash_pin, now_ts
from ..utils.constants import DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT

logger = logging.getLogger(__name__)

MATCH_ACTIONS = {
    "start": TournamentService.start_match,
    "pause": TournamentService.pause_match,
    "resume": TournamentService.resume_match,
    "finish": TournamentService.finish_match,
    "reopen": TournamentService.reopen_match,
    "reset": TournamentService.reset_match,
}


def create_app(service: Optional[TournamentService] = None, config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Configuration is read from ``MATCHDAY_*`` environment variables
    (``MATCHDAY_DATA_DIR``, ``MATCHDAY_AUTO_PUBLISH``, ``MATCHDAY_LOG_LEVEL``),
    then overridden by ``config``.

    Args:
        service: Tournament service to use; built from configuration when None
        config: Explicit configuration overrides

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_mapping(DATA_DIR=None, AUTO_PUBLISH=True, LOG_LEVEL=DEFAULT_LOG_LEVEL)
    app.config.from_prefixed_env("MATCHDAY")
    if config:
        app.config.update(config)

    configure_logging(app.config["LOG_LEVEL"])

    if service is None:
        factory = ServiceFactory(app.config["DATA_DIR"], auto_publish=bool(app.config["AUTO_PUBLISH"]))
        service = factory.create_tournament_service()
    app.extensions["matchday"] = service

    _register_error_handlers(app)
    _register_routes(app)
    return app


def _service() -> TournamentService:
    return current_app.extensions["matchday"]


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _require_pin(tournament_id: str) -> Tournament:
    return _service().authorize(tournament_id, request.headers.get(PIN_HEADER))


def _int_field(data: Dict[str, Any], key: str, required: bool = True) -> Optional[int]:
    value = data.get(key)
    if value is None or value == "":
        if required:
            raise TournamentValidationError(f"Field '{key}' is required")
        return None
    # JSON booleans and fractional numbers would otherwise coerce silently
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise TournamentValidationError(f"Field '{key}' must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise TournamentValidationError(f"Field '{key}' must be a whole number")


def _bool_field(data: Dict[str, Any], key: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise TournamentValidationError(f"Field '{key}' must be true or false")
    return value


def _ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def _summary(tournament: Tournament) -> Dict[str, Any]:
    return {
        "id": tournament.id,
        "name": tournament.name,
        "status": tournament.status.value,
        "start_date": tournament.settings.start_date,
        "team_count": len(tournament.teams),
        "match_count": len(tournament.matches),
    }


def build_tournament_payload(tournament: Tournament, team_filter: Optional[str] = None) -> Dict[str, Any]:
    """
    Serialize a tournament for API consumers.

    Standings and live clocks are computed here on every read. ``team_filter``
    only narrows the listed matches; standings always cover every team.
    """
    now = now_ts()
    data = tournament.to_dict(include_pin=False)

    if team_filter:
        data["matches"] = [m for m in data["matches"] if team_filter in (m["home_team_id"], m["away_team_id"])]
        data["team_filter"] = team_filter

    shown = {m["id"] for m in data["matches"]}
    data["clocks"] = {
        match.id: match_clock_snapshot(match, now)
        for match in tournament.matches
        if match.id in shown and match.started_at is not None
    }
    data["standings"] = standings_table(tournament.matches, tournament.teams)
    minutes = estimate_tournament_duration(len(tournament.teams), tournament.settings)
    data["estimated_duration_minutes"] = minutes
    data["estimated_duration"] = format_minutes(minutes)
    return data


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(TournamentValidationError)
    def handle_validation(e: TournamentValidationError):
        return jsonify({"success": False, "error": str(e), "errors": e.errors}), 400

    @app.errorhandler(PinRequiredError)
    def handle_pin(e: PinRequiredError):
        return jsonify({"success": False, "error": str(e)}), 403

    @app.errorhandler(TournamentNotFoundError)
    def handle_not_found(e: TournamentNotFoundError):
        return jsonify({"success": False, "error": str(e)}), 404

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "error": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": "Internal server error"}), 500


def _register_routes(app: Flask) -> None:

    # ==================== Tournaments ==================== #

    @app.route("/api/tournaments", methods=["GET"])
    def list_tournaments():
        """List stored tournaments (summary only)."""
        return _ok(tournaments=[_summary(t) for t in _service().list_tournaments()])

    @app.route("/api/tournaments", methods=["POST"])
    def create_tournament():
        """Create a tournament and its schedule from a draft."""
        data = dict(_body())
        pin = str(data.pop("pin", "") or "")
        data["pin_hash"] = hash_pin(pin) if pin else ""
        try:
            draft = TournamentDraft.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise TournamentValidationError(f"Malformed tournament draft: {e}")

        tournament = _service().create_tournament(draft)
        return _ok(201, tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>", methods=["GET"])
    def get_tournament(tournament_id: str):
        """Organiser view of a tournament."""
        tournament = _require_pin(tournament_id)
        return _ok(tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>", methods=["PATCH"])
    def update_tournament(tournament_id: str):
        """Rename a tournament or edit its rules."""
        _require_pin(tournament_id)
        data = _body()
        kwargs = {}
        if "name" in data:
            kwargs["name"] = str(data["name"] or "")
        if "rules" in data:
            kwargs["rules"] = data["rules"]
        tournament = _service().update_tournament(tournament_id, **kwargs)
        return _ok(tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>", methods=["DELETE"])
    def delete_tournament(tournament_id: str):
        _require_pin(tournament_id)
        _service().delete_tournament(tournament_id)
        return _ok(message="Tournament deleted")

    @app.route("/api/tournaments/<tournament_id>/publish", methods=["POST"])
    def publish_tournament(tournament_id: str):
        """Refresh the public mirror."""
        _require_pin(tournament_id)
        tournament = _service().publish(tournament_id)
        return _ok(tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>/standings", methods=["GET"])
    def get_standings(tournament_id: str):
        """Standings as published to spectators."""
        tournament = _service().get_public_tournament(tournament_id)
        return _ok(standings=standings_table(tournament.matches, tournament.teams))

    # ==================== Matches ==================== #

    @app.route("/api/tournaments/<tournament_id>/matches/<match_id>/clock", methods=["GET"])
    def get_match_clock(tournament_id: str, match_id: str):
        """Published clock reading; clients poll this while a match is live."""
        match = _service().get_public_tournament(tournament_id).find_match(match_id)
        if match is None:
            return jsonify({"success": False, "error": f"Match not found: {match_id}"}), 404
        return _ok(clock=match_clock_snapshot(match))

    @app.route("/api/tournaments/<tournament_id>/matches/<match_id>/<action>", methods=["POST"])
    def match_action(tournament_id: str, match_id: str, action: str):
        """Apply a lifecycle action: start, pause, resume, finish, reopen or reset."""
        handler = MATCH_ACTIONS.get(action)
        if handler is None:
            return jsonify({"success": False, "error": f"Unknown match action: {action}"}), 404
        _require_pin(tournament_id)
        tournament = handler(_service(), tournament_id, match_id)
        return _ok(tournament=build_tournament_payload(tournament))

    # ==================== Goals ==================== #

    @app.route("/api/tournaments/<tournament_id>/matches/<match_id>/goals", methods=["POST"])
    def add_goal(tournament_id: str, match_id: str):
        """Record a goal. Without a minute the live match minute is used."""
        _require_pin(tournament_id)
        data = _body()
        team_id = data.get("team_id")
        if not team_id:
            raise TournamentValidationError("Field 'team_id' is required")

        tournament = _service().add_goal(
            tournament_id,
            match_id,
            team_id,
            player_id=data.get("player_id"),
            is_own_goal=_bool_field(data, "is_own_goal"),
            minute=_int_field(data, "minute", required=False),
        )
        return _ok(201, tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>/matches/<match_id>/goals/last", methods=["DELETE"])
    def remove_last_goal(tournament_id: str, match_id: str):
        _require_pin(tournament_id)
        tournament = _service().remove_last_goal(tournament_id, match_id)
        return _ok(tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>/matches/<match_id>/goals/<goal_id>", methods=["DELETE"])
    def remove_goal(tournament_id: str, match_id: str, goal_id: str):
        _require_pin(tournament_id)
        tournament = _service().remove_goal(tournament_id, match_id, goal_id)
        return _ok(tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>/matches/<match_id>/goals/<goal_id>", methods=["PATCH"])
    def update_goal_player(tournament_id: str, match_id: str, goal_id: str):
        """Attribute a goal to a different player (or to nobody)."""
        _require_pin(tournament_id)
        tournament = _service().update_goal_player(tournament_id, match_id, goal_id, _body().get("player_id"))
        return _ok(tournament=build_tournament_payload(tournament))

    # ==================== Teams & players ==================== #

    @app.route("/api/tournaments/<tournament_id>/teams/<team_id>", methods=["PATCH"])
    def rename_team(tournament_id: str, team_id: str):
        _require_pin(tournament_id)
        tournament = _service().update_team_name(tournament_id, team_id, str(_body().get("name", "") or ""))
        return _ok(tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>/teams/<team_id>/players", methods=["POST"])
    def add_player(tournament_id: str, team_id: str):
        _require_pin(tournament_id)
        data = _body()
        tournament = _service().add_player(
            tournament_id,
            team_id,
            str(data.get("name", "") or ""),
            _int_field(data, "jersey_number"),
            _int_field(data, "birth_year", required=False),
        )
        return _ok(201, tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>/teams/<team_id>/players/<player_id>", methods=["PATCH"])
    def update_player(tournament_id: str, team_id: str, player_id: str):
        _require_pin(tournament_id)
        data = _body()
        kwargs = {}
        if "name" in data:
            kwargs["name"] = str(data["name"] or "")
        if "jersey_number" in data:
            kwargs["jersey_number"] = _int_field(data, "jersey_number")
        if "birth_year" in data:
            kwargs["birth_year"] = _int_field(data, "birth_year", required=False)
        tournament = _service().update_player(tournament_id, team_id, player_id, **kwargs)
        return _ok(tournament=build_tournament_payload(tournament))

    @app.route("/api/tournaments/<tournament_id>/teams/<team_id>/players/<player_id>", methods=["DELETE"])
    def remove_player(tournament_id: str, team_id: str, player_id: str):
        _require_pin(tournament_id)
        tournament = _service().remove_player(tournament_id, team_id, player_id)
        return _ok(tournament=build_tournament_payload(tournament))

    # ==================== Public view ==================== #

    @app.route("/api/public/<tournament_id>", methods=["GET"])
    def public_view(tournament_id: str):
        """Read-only spectator view served from the public mirror."""
        tournament = _service().get_public_tournament(tournament_id)
        team_filter = request.args.get("team") or None
        return _ok(tournament=build_tournament_payload(tournament, team_filter=team_filter))


def run_web_app(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, data_dir: Optional[str] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        data_dir: Directory for tournament JSON files
    """
    config = {"DATA_DIR": data_dir} if data_dir else None
    app = create_app(config=config)
    logger.info("Serving Matchday API on http://%s:%d", host, port)
    app.run(host=host, port=port, debug=False)
