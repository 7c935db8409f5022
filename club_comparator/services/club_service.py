from __future__ import annotations

from threading import Lock
from typing import Any, Dict, List, Optional, Protocol

from ..betting import betting_insights
from ..club_state import (
    adjust_cards,
    clubs_in_group,
    find_club,
    new_club,
    next_club_id,
    record_goal,
    rename_club,
    replace_club,
)
from ..config import setup_logger
from ..domain.models import Club, Goal
from ..errors import DataError
from ..insights import compare_insights
from ..stats import average_cards, club_summary

logger = setup_logger(__name__)


class SnapshotStore(Protocol):
    def load(self) -> List[Club]:
        ...

    def save(self, clubs: List[Club]) -> None:
        ...

    def reset(self) -> List[Club]:
        ...

    def seed(self) -> List[Club]:
        ...


class ClubService:
    """
    Owns the in-memory club collection and its snapshot.
    Every mutation is a read-modify-write of the whole list under one lock,
    followed by a full snapshot save when persistence is enabled.
    """

    def __init__(self, store: SnapshotStore, persist: bool = True):
        self.store = store
        self.persist = persist
        self._lock = Lock()
        self._clubs: List[Club] = store.load()
        logger.info("club_service_loaded: %d clubs (persist=%s)", len(self._clubs), persist)

    @property
    def clubs(self) -> List[Club]:
        return list(self._clubs)

    def list_clubs(self, group: Optional[int] = None) -> List[Club]:
        if group is None:
            return self.clubs
        return clubs_in_group(self._clubs, group)

    def get(self, club_id: str) -> Club:
        club = find_club(self._clubs, club_id)
        if club is None:
            raise DataError("clubs", "NOT_FOUND", f"Unknown club: {club_id}")
        return club

    def _commit(self, clubs: List[Club]) -> None:
        if self.persist:
            self.store.save(clubs)
        self._clubs = clubs

    def _update(self, club_id: str, change) -> Club:
        with self._lock:
            updated = change(self.get(club_id))
            self._commit(replace_club(self._clubs, updated))
        return updated

    def create(self, name: str, group: int) -> Club:
        with self._lock:
            club = new_club(next_club_id(self._clubs), name, group)
            self._commit(self._clubs + [club])
        logger.info("club_created: %s %s (group %s)", club.id, name, group)
        return club

    def add_goal(self, club_id: str, goal: Goal, scored: bool) -> Club:
        club = self._update(club_id, lambda c: record_goal(c, goal, scored))
        logger.info(
            "goal_recorded: %s %s %s' %s (%s)",
            club_id,
            "scored" if scored else "conceded",
            goal.minute,
            goal.origin,
            "home" if goal.is_home else "away",
        )
        return club

    def adjust_cards(self, club_id: str, colour: str, venue: str, delta: int) -> Club:
        return self._update(club_id, lambda c: adjust_cards(c, colour, venue, delta))

    def rename(self, club_id: str, name: str) -> Club:
        return self._update(club_id, lambda c: rename_club(c, name))

    def replace_all(self, clubs: List[Club]) -> List[Club]:
        with self._lock:
            self._commit(list(clubs))
        return self.clubs

    def reset(self) -> List[Club]:
        with self._lock:
            self._clubs = self.store.reset() if self.persist else self.store.seed()
        return self.clubs

    def compare(self, home_id: str, away_id: str) -> Dict[str, Any]:
        """Full side-by-side comparison payload for ``home_id`` hosting ``away_id``."""
        clubs = self.clubs
        home = self.get(home_id)
        away = self.get(away_id)
        return {
            "home": club_summary(home),
            "away": club_summary(away),
            "group_averages": {
                str(home.group): average_cards(clubs, home.group).to_dict(),
                str(away.group): average_cards(clubs, away.group).to_dict(),
            },
            "insights": compare_insights(home, away, clubs),
            "bettingInsights": [b.to_dict() for b in betting_insights(home, away)],
        }
