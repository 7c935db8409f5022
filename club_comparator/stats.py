"""Derived statistics over raw club event logs.

Everything here is a pure function of its inputs: the aggregator reduces a
goal list to per-origin shares and the averager reduces a club collection to
per-group card means. Both are total over valid input and return empty/zero
results for empty input.
"""
from __future__ import annotations

from typing import Dict, Iterable, List

from .constants import GOAL_ORIGINS, HALF_TIME_MINUTE, RED_CARD_WEIGHT
from .domain.models import Club, Goal, GoalOriginStats, GroupAverage


def aggregate_by_origin(goals: Iterable[Goal]) -> List[GoalOriginStats]:
    """Count goals per origin tag and return non-zero entries, most frequent first.

    Ties keep the declaration order of ``GOAL_ORIGINS``.
    """
    goals = list(goals)
    total = len(goals)
    if total == 0:
        return []

    counts: Dict[str, int] = {origin: 0 for origin in GOAL_ORIGINS}
    for goal in goals:
        if goal.origin not in counts:
            raise ValueError(f"Unknown goal origin: {goal.origin!r}")
        counts[goal.origin] += 1

    stats = [
        GoalOriginStats(origin=origin, count=count, percentage=count / total * 100)
        for origin, count in counts.items()
        if count > 0
    ]
    # sorted() is stable, so equal counts stay in enumeration order
    return sorted(stats, key=lambda s: s.count, reverse=True)


def average_cards(all_clubs: Iterable[Club], group: int) -> GroupAverage:
    """Mean yellow, red and total cards per club of ``group``."""
    members = [club for club in all_clubs if club.group == group]
    if not members:
        return GroupAverage(0.0, 0.0, 0.0)

    yellow = sum(club.yellow_cards.total for club in members)
    red = sum(club.red_cards.total for club in members)
    n = len(members)
    return GroupAverage(yellow=yellow / n, red=red / n, total=(yellow + red) / n)


def total_cards(club: Club) -> int:
    """Yellow plus red cards, home and away."""
    return club.yellow_cards.total + club.red_cards.total


def weighted_cards(club: Club) -> int:
    """Card count with each red worth ``RED_CARD_WEIGHT`` yellows."""
    return club.yellow_cards.total + club.red_cards.total * RED_CARD_WEIGHT


def goals_after(goals: Iterable[Goal], minute: int) -> int:
    return sum(1 for goal in goals if goal.minute > minute)


def split_by_half(goals: Iterable[Goal]) -> tuple[int, int]:
    """Return ``(first_half, second_half)`` goal counts."""
    first = second = 0
    for goal in goals:
        if goal.minute <= HALF_TIME_MINUTE:
            first += 1
        else:
            second += 1
    return first, second


def club_summary(club: Club) -> dict:
    """Flat per-club numbers used by the API and the CLI."""
    return {
        "id": club.id,
        "name": club.name,
        "group": club.group,
        "goals_scored": {
            "home": len(club.goals_scored.home),
            "away": len(club.goals_scored.away),
            "total": len(club.goals_scored),
        },
        "goals_conceded": {
            "home": len(club.goals_conceded.home),
            "away": len(club.goals_conceded.away),
            "total": len(club.goals_conceded),
        },
        "yellow_cards": club.yellow_cards.to_dict(),
        "red_cards": club.red_cards.to_dict(),
        "total_cards": total_cards(club),
        "scored_by_origin": [s.to_dict() for s in aggregate_by_origin(club.goals_scored.combined)],
        "conceded_by_origin": [s.to_dict() for s in aggregate_by_origin(club.goals_conceded.combined)],
    }
