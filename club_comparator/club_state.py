"""Reducer-style club updates and comparison selection.

Nothing in here mutates its arguments: every function takes the current
value(s) and returns new ones, so callers can swap the result into whatever
state holder they own (the snapshot store, a request, a test).

The comparison slots mirror the two-pick selection of a club list UI; the
comparison script fills them from its arguments.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence

from .constants import CARD_COLOURS, GROUPS, VENUES
from .domain.models import Club, Goal, VenueGoals, VenueTally


def new_club(club_id: str, name: str, group: int) -> Club:
    if group not in GROUPS:
        raise ValueError(f"Unsupported group: {group}. Allowed: {GROUPS}")
    return Club(id=club_id, name=name, group=group, goals_scored=VenueGoals(), goals_conceded=VenueGoals())


def record_goal(club: Club, goal: Goal, scored: bool) -> Club:
    """Append ``goal`` to the scored or conceded log, venue taken from the goal."""
    if scored:
        return replace(club, goals_scored=club.goals_scored.with_goal(goal))
    return replace(club, goals_conceded=club.goals_conceded.with_goal(goal))


def adjust_cards(club: Club, colour: str, venue: str, delta: int) -> Club:
    """Add ``delta`` to one card tally; tallies never go below zero."""
    if colour not in CARD_COLOURS:
        raise ValueError(f"Unsupported card colour: {colour}")
    if venue not in VENUES:
        raise ValueError(f"Unsupported venue: {venue}")

    attr = f"{colour}_cards"
    tally: VenueTally = getattr(club, attr)
    current = getattr(tally, venue)
    updated = replace(tally, **{venue: max(0, current + delta)})
    return replace(club, **{attr: updated})


def rename_club(club: Club, name: str) -> Club:
    name = " ".join(name.split())
    if not name:
        raise ValueError("Club name must not be empty")
    return replace(club, name=name)


def find_club(clubs: Iterable[Club], club_id: str) -> Optional[Club]:
    for club in clubs:
        if club.id == club_id:
            return club
    return None


def replace_club(clubs: Sequence[Club], updated: Club) -> List[Club]:
    return [updated if club.id == updated.id else club for club in clubs]


def next_club_id(clubs: Sequence[Club]) -> str:
    """First free ``club-<n>`` id, starting after the existing positions."""
    taken = {club.id for club in clubs}
    index = len(clubs)
    while f"club-{index}" in taken:
        index += 1
    return f"club-{index}"


def clubs_in_group(clubs: Iterable[Club], group: int) -> List[Club]:
    return [club for club in clubs if club.group == group]


@dataclass(frozen=True)
class ComparisonSelection:
    """Two comparison slots; ``ready`` once both are filled."""

    first: Optional[str] = None
    second: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.first is not None and self.second is not None


def select_for_comparison(selection: ComparisonSelection, club_id: str) -> ComparisonSelection:
    """Toggle ``club_id`` in the comparison slots.

    - nothing picked: it becomes the first pick
    - re-picking the first pick clears both slots
    - a different club fills the second slot
    - re-picking the second pick clears only that slot
    - picking a third club starts a new selection with it
    """
    if selection.first is None:
        return ComparisonSelection(first=club_id)
    if selection.first == club_id:
        return ComparisonSelection()
    if selection.second is None:
        return ComparisonSelection(first=selection.first, second=club_id)
    if selection.second == club_id:
        return ComparisonSelection(first=selection.first)
    return ComparisonSelection(first=club_id)
