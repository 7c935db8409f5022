"""JSON/CSV export and JSON import of the club collection."""
from __future__ import annotations

import json
from dataclasses import replace
from datetime import date
from typing import Any, Iterable, List, Optional

import pandas as pd

from .config import JSON_INDENT, setup_logger
from .constants import CSV_HEADERS, EXPORT_PREFIX
from .domain.models import Club, Goal, VenueGoals, clubs_to_dicts
from .errors import DataError
from .validators import validate_group, validate_minute, validate_origin

logger = setup_logger(__name__)

EXPORT_FORMATS = ("json", "csv")


def export_json(clubs: Iterable[Club]) -> str:
    return json.dumps(clubs_to_dicts(clubs), indent=JSON_INDENT, ensure_ascii=False)


def clubs_frame(clubs: Iterable[Club]) -> pd.DataFrame:
    """One row per club with the flattened goal and card counts."""
    rows = [
        [
            club.name,
            club.group,
            len(club.goals_scored.home),
            len(club.goals_scored.away),
            len(club.goals_conceded.home),
            len(club.goals_conceded.away),
            club.yellow_cards.home,
            club.yellow_cards.away,
            club.red_cards.home,
            club.red_cards.away,
        ]
        for club in clubs
    ]
    return pd.DataFrame(rows, columns=list(CSV_HEADERS))


def export_csv(clubs: Iterable[Club]) -> str:
    return clubs_frame(clubs).to_csv(index=False, lineterminator="\n")


def export_filename(fmt: str, today: Optional[date] = None) -> str:
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}. Allowed: {', '.join(EXPORT_FORMATS)}")
    day = (today or date.today()).isoformat()
    return f"{EXPORT_PREFIX}-{day}.{fmt}"


def _checked_goal(goal: Goal) -> Goal:
    return Goal(validate_minute(goal.minute), validate_origin(goal.origin), goal.is_home)


def _checked_goals(goals: VenueGoals) -> VenueGoals:
    return VenueGoals(
        home=tuple(_checked_goal(g) for g in goals.home),
        away=tuple(_checked_goal(g) for g in goals.away),
    )


def _checked(club: Club) -> Club:
    """Reject records the engine cannot aggregate; origin tags come back lowercased."""
    return replace(
        club,
        group=validate_group(club.group),
        goals_scored=_checked_goals(club.goals_scored),
        goals_conceded=_checked_goals(club.goals_conceded),
    )


def clubs_from_records(records: Any, source: str = "import") -> List[Club]:
    """Rebuild clubs from a decoded JSON document (an array of club records)."""
    if not isinstance(records, list):
        raise DataError(source, "INVALID_IMPORT", "Expected a JSON array of clubs")
    try:
        return [_checked(Club.from_dict(record)) for record in records]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise DataError(source, "INVALID_IMPORT", "Malformed club record", str(exc)) from exc


def import_json(text: str | bytes) -> List[Club]:
    try:
        records = json.loads(text)
    except (TypeError, ValueError) as exc:
        logger.warning("import_json: invalid document (%s)", exc)
        raise DataError("import", "INVALID_IMPORT", "Document is not valid JSON", str(exc)) from exc
    clubs = clubs_from_records(records)
    logger.info("import_json: %d clubs imported", len(clubs))
    return clubs
