from __future__ import annotations

from datetime import date

from flask import Blueprint, Response, current_app, request

from ..app_utils import data_error_response, make_error, make_ok
from ..config import MAX_IMPORT_BYTES, setup_logger
from ..domain.models import clubs_to_dicts
from ..errors import DataError
from ..exporters import export_csv, export_filename, export_json, import_json
from ..services.club_service import ClubService
from ..stats import club_summary
from ..validators import (
    parse_goal_payload,
    validate_card_adjustment,
    validate_club_name,
    validate_group,
    validate_group_optional,
)

bp = Blueprint("clubs_api", __name__, url_prefix="/api")

logger = setup_logger(__name__)


def _get_service() -> ClubService:
    return current_app.extensions["club_service"]


@bp.get("/clubs")
def list_clubs():
    group, warnings = validate_group_optional(request.args.get("group"))
    clubs = _get_service().list_clubs(group)
    return make_ok({"clubs": clubs_to_dicts(clubs), "warnings": list(warnings)})


@bp.post("/clubs")
def create_club():
    payload = request.get_json(silent=True) or {}
    try:
        name = validate_club_name(payload.get("name"))
        group = validate_group(payload.get("group"))
        club = _get_service().create(name, group)
    except ValueError as e:
        return make_error(str(e), "Invalid club")
    except DataError as e:
        return data_error_response(e)
    return make_ok({"club": club.to_dict()}, "Clube adicionado", status_code=201)


@bp.get("/clubs/<club_id>")
def get_club(club_id: str):
    try:
        club = _get_service().get(club_id)
    except DataError as e:
        return data_error_response(e)
    return make_ok({"club": club.to_dict(), "summary": club_summary(club)})


@bp.patch("/clubs/<club_id>")
def rename(club_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        name = validate_club_name(payload.get("name"))
        club = _get_service().rename(club_id, name)
    except ValueError as e:
        return make_error(str(e), "Invalid club name")
    except DataError as e:
        return data_error_response(e)
    return make_ok({"club": club.to_dict()}, "Club renamed")


@bp.post("/clubs/<club_id>/goals")
def add_goal(club_id: str):
    try:
        goal, scored = parse_goal_payload(request.get_json(silent=True))
        club = _get_service().add_goal(club_id, goal, scored)
    except ValueError as e:
        return make_error(str(e), "Invalid goal")
    except DataError as e:
        return data_error_response(e)
    message = "Gol marcado registrado" if scored else "Gol sofrido registrado"
    return make_ok({"club": club.to_dict()}, message, status_code=201)


@bp.post("/clubs/<club_id>/cards")
def update_cards(club_id: str):
    try:
        colour, venue, delta = validate_card_adjustment(request.get_json(silent=True))
        club = _get_service().adjust_cards(club_id, colour, venue, delta)
    except ValueError as e:
        return make_error(str(e), "Invalid card adjustment")
    except DataError as e:
        return data_error_response(e)
    return make_ok({"club": club.to_dict()}, "Cards updated")


@bp.get("/compare")
def compare():
    home_id = (request.args.get("home") or "").strip()
    away_id = (request.args.get("away") or "").strip()
    if not home_id or not away_id:
        return make_error("missing_club", "Both 'home' and 'away' club ids are required")
    if home_id == away_id:
        return make_error("same_club", "Pick two different clubs to compare")
    try:
        result = _get_service().compare(home_id, away_id)
    except DataError as e:
        return data_error_response(e)
    return make_ok(result)


def _attachment(body: str, fmt: str, mimetype: str) -> Response:
    filename = export_filename(fmt, date.today())
    return Response(
        body,
        mimetype=mimetype,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@bp.get("/export.json")
def export_as_json():
    return _attachment(export_json(_get_service().clubs), "json", "application/json")


@bp.get("/export.csv")
def export_as_csv():
    return _attachment(export_csv(_get_service().clubs), "csv", "text/csv")


@bp.post("/import")
def import_clubs():
    if request.content_length and request.content_length > MAX_IMPORT_BYTES:
        return make_error("too_large", "Import document is too large", status_code=413)
    try:
        clubs = import_json(request.get_data())
        clubs = _get_service().replace_all(clubs)
    except DataError as e:
        return data_error_response(e)
    logger.info("clubs_imported: %d", len(clubs))
    return make_ok({"clubs": clubs_to_dicts(clubs)}, "Dados importados")


@bp.post("/reset")
def reset():
    try:
        clubs = _get_service().reset()
    except DataError as e:
        return data_error_response(e)
    return make_ok({"clubs": clubs_to_dicts(clubs)}, "Dados resetados")
