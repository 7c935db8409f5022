from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from ..constants import goal_origin_label


@dataclass(frozen=True)
class Goal:
    minute: int
    origin: str
    is_home: bool

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Goal":
        return cls(
            minute=int(raw["minute"]),
            origin=str(raw["origin"]),
            is_home=bool(raw.get("isHome", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"minute": self.minute, "origin": self.origin, "isHome": self.is_home}


@dataclass(frozen=True)
class VenueGoals:
    """Goals split by the venue context they were recorded in."""

    home: Tuple[Goal, ...] = ()
    away: Tuple[Goal, ...] = ()

    @property
    def combined(self) -> Tuple[Goal, ...]:
        return self.home + self.away

    def __len__(self) -> int:
        return len(self.home) + len(self.away)

    def with_goal(self, goal: Goal) -> "VenueGoals":
        if goal.is_home:
            return replace(self, home=self.home + (goal,))
        return replace(self, away=self.away + (goal,))

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "VenueGoals":
        raw = raw or {}
        return cls(
            home=tuple(Goal.from_dict(g) for g in raw.get("home") or []),
            away=tuple(Goal.from_dict(g) for g in raw.get("away") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "home": [g.to_dict() for g in self.home],
            "away": [g.to_dict() for g in self.away],
        }


@dataclass(frozen=True)
class VenueTally:
    home: int = 0
    away: int = 0

    @property
    def total(self) -> int:
        return self.home + self.away

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "VenueTally":
        raw = raw or {}
        return cls(home=int(raw.get("home", 0)), away=int(raw.get("away", 0)))

    def to_dict(self) -> Dict[str, int]:
        return {"home": self.home, "away": self.away}


@dataclass(frozen=True)
class Club:
    """A club's raw event log. Never mutated; updates go through club_state."""

    id: str
    name: str
    group: int
    goals_scored: VenueGoals = field(default_factory=VenueGoals)
    goals_conceded: VenueGoals = field(default_factory=VenueGoals)
    yellow_cards: VenueTally = field(default_factory=VenueTally)
    red_cards: VenueTally = field(default_factory=VenueTally)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Club":
        return cls(
            id=str(raw["id"]),
            name=str(raw["name"]),
            group=int(raw["group"]),
            goals_scored=VenueGoals.from_dict(raw.get("goalsScored")),
            goals_conceded=VenueGoals.from_dict(raw.get("goalsConceded")),
            yellow_cards=VenueTally.from_dict(raw.get("yellowCards")),
            red_cards=VenueTally.from_dict(raw.get("redCards")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "group": self.group,
            "goalsScored": self.goals_scored.to_dict(),
            "goalsConceded": self.goals_conceded.to_dict(),
            "yellowCards": self.yellow_cards.to_dict(),
            "redCards": self.red_cards.to_dict(),
        }


@dataclass(frozen=True)
class GoalOriginStats:
    origin: str
    count: int
    percentage: float

    @property
    def label(self) -> str:
        return goal_origin_label(self.origin)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin": self.origin,
            "label": self.label,
            "count": self.count,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class GroupAverage:
    yellow: float = 0.0
    red: float = 0.0
    total: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"yellow": self.yellow, "red": self.red, "total": self.total}


@dataclass(frozen=True)
class BettingInsight:
    market: str
    analysis: str
    probability: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"market": self.market, "analysis": self.analysis}
        if self.probability is not None:
            payload["probability"] = self.probability
        return payload


def clubs_to_dicts(clubs: Iterable[Club]) -> list[Dict[str, Any]]:
    return [club.to_dict() for club in clubs]
