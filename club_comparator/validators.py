from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    CARD_COLOURS,
    GOAL_ORIGINS,
    GROUPS,
    MAX_GOAL_MINUTE,
    MIN_GOAL_MINUTE,
    VENUES,
    is_goal_origin,
)
from .config import setup_logger
from .domain.models import Goal
from .utils import normalize_club_name

logger = setup_logger(__name__)


class ValidationWarning(str):
    """Lightweight tag for soft validation warnings."""
    pass


def _as_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def validate_group(raw: Any) -> int:
    """Return the group as int; ValueError unless it is 1 or 2."""
    try:
        group = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid group: {raw!r}") from None
    if group not in GROUPS:
        raise ValueError(f"Unsupported group: {group}. Allowed: {', '.join(map(str, GROUPS))}")
    return group


def validate_group_optional(raw: Any) -> Tuple[Optional[int], List[ValidationWarning]]:
    """Soft variant for query-string filters: unknown values are dropped with a warning."""
    if raw is None or raw == "":
        return None, []
    try:
        return validate_group(raw), []
    except ValueError:
        logger.warning("group_invalid: %s", raw)
        return None, [ValidationWarning(f"group_invalid:{raw}")]


def validate_origin(raw: Any) -> str:
    code = (str(raw) if raw is not None else "").strip().lower()
    if is_goal_origin(code):
        return code
    raise ValueError(f"Unsupported goal origin: {code or '<empty>'}. Allowed: {', '.join(GOAL_ORIGINS)}")


def validate_minute(raw: Any) -> int:
    try:
        minute = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid minute: {raw!r}") from None
    if not MIN_GOAL_MINUTE <= minute <= MAX_GOAL_MINUTE:
        raise ValueError(f"Minute out of range [{MIN_GOAL_MINUTE}, {MAX_GOAL_MINUTE}]: {minute}")
    return minute


def parse_goal_payload(payload: Optional[Dict[str, Any]]) -> Tuple[Goal, bool]:
    """Build ``(goal, scored)`` from a request body; ValueError on bad input."""
    if not isinstance(payload, dict):
        raise ValueError("Goal payload must be a JSON object")
    goal = Goal(
        minute=validate_minute(payload.get("minute")),
        origin=validate_origin(payload.get("origin")),
        is_home=_as_bool(payload.get("isHome", False)),
    )
    scored = _as_bool(payload.get("scored", True))
    return goal, scored


def validate_card_adjustment(payload: Optional[Dict[str, Any]]) -> Tuple[str, str, int]:
    """Return ``(colour, venue, delta)``; delta defaults to +1."""
    if not isinstance(payload, dict):
        raise ValueError("Card payload must be a JSON object")
    colour = str(payload.get("colour") or "").strip().lower()
    if colour not in CARD_COLOURS:
        raise ValueError(f"Unsupported card colour: {colour or '<empty>'}. Allowed: {', '.join(CARD_COLOURS)}")
    venue = str(payload.get("venue") or "").strip().lower()
    if venue not in VENUES:
        raise ValueError(f"Unsupported venue: {venue or '<empty>'}. Allowed: {', '.join(VENUES)}")
    try:
        delta = int(payload.get("delta", 1))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid delta: {payload.get('delta')!r}") from None
    return colour, venue, delta


def validate_club_name(raw: Any) -> str:
    name = normalize_club_name(raw)
    if not name:
        raise ValueError("Club name must not be empty")
    return name
