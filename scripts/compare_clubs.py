"""Print a side-by-side comparison of two clubs from a snapshot file.

The snapshot is the JSON array written by the app (or by ``/api/export.json``).
Clubs can be given by id or by exact name. The first club is treated as the
home side.

Usage::

    python -m scripts.compare_clubs club-0 club-3
    python -m scripts.compare_clubs "Real Murcia" "Alcorcón" path/to/clubs.json
"""
from __future__ import annotations

import sys
from typing import Iterable, Optional

from club_comparator import settings
from club_comparator.betting import betting_insights
from club_comparator.club_state import ComparisonSelection, find_club, select_for_comparison
from club_comparator.domain.models import Club
from club_comparator.insights import compare_insights
from club_comparator.stats import aggregate_by_origin, total_cards
from club_comparator.storage import ClubStore


def _pick(clubs: Iterable[Club], key: str) -> Optional[Club]:
    for club in clubs:
        if club.id == key or club.name == key:
            return club
    return None


def _print_club(club: Club, venue: str) -> None:
    print(f"{club.name} (Grupo {club.group}, {venue})")
    print(
        f"  gols marcados: {len(club.goals_scored.home)} casa / {len(club.goals_scored.away)} fora"
        f" | sofridos: {len(club.goals_conceded.home)} casa / {len(club.goals_conceded.away)} fora"
    )
    print(f"  cartões: {total_cards(club)}")
    for stats in aggregate_by_origin(club.goals_scored.combined)[:3]:
        print(f"  {stats.label}: {stats.count} ({stats.percentage:.1f}%)")


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__)
        return 2

    path = argv[2] if len(argv) > 2 else settings.DATA_FILE
    clubs = ClubStore(path, seed_path=settings.SEED_FILE).load()
    home = _pick(clubs, argv[0])
    away = _pick(clubs, argv[1])
    missing = [key for key, club in ((argv[0], home), (argv[1], away)) if club is None]
    if missing:
        print(f"Unknown club(s): {', '.join(missing)}", file=sys.stderr)
        return 1

    selection = ComparisonSelection()
    for club in (home, away):
        selection = select_for_comparison(selection, club.id)
    if not selection.ready:
        print("Pick two different clubs to compare", file=sys.stderr)
        return 2
    home = find_club(clubs, selection.first)
    away = find_club(clubs, selection.second)

    _print_club(home, "casa")
    _print_club(away, "fora")

    print("\nInsights:")
    insights = compare_insights(home, away, clubs)
    for line in insights or ["(nenhum padrão relevante)"]:
        print(f"  - {line}")

    print("\nMercados:")
    for insight in betting_insights(home, away):
        suffix = f" [{insight.probability}]" if insight.probability else ""
        print(f"  {insight.market}{suffix}: {insight.analysis}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
