"""Comparative tactical insights between a home club and an away club.

Each insight is an independent rule ``(name, predicate, builder)`` evaluated in
a fixed order against a precomputed :class:`MatchupContext`. Every rule whose
predicate holds contributes one sentence; there is no early exit.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .config import (
    AWAY_FRAGILITY_FACTOR,
    DISCIPLINE_FACTOR,
    HOME_BIAS_FACTOR,
    LATE_CONCESSION_RATIO,
    LATE_GOAL_MINUTE,
    TACTICAL_MATCH_MIN_PCT,
)
from .domain.models import Club, GoalOriginStats, GroupAverage
from .stats import aggregate_by_origin, average_cards, goals_after, total_cards
from .utils import fmt_dec, fmt_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchupContext:
    home: Club
    away: Club
    home_scored_origins: Tuple[GoalOriginStats, ...]
    away_conceded_origins: Tuple[GoalOriginStats, ...]
    home_group_avg: GroupAverage
    away_group_avg: GroupAverage

    @classmethod
    def build(cls, home: Club, away: Club, all_clubs: Sequence[Club]) -> "MatchupContext":
        return cls(
            home=home,
            away=away,
            home_scored_origins=tuple(aggregate_by_origin(home.goals_scored.combined)),
            away_conceded_origins=tuple(aggregate_by_origin(away.goals_conceded.combined)),
            home_group_avg=average_cards(all_clubs, home.group),
            away_group_avg=average_cards(all_clubs, away.group),
        )


Rule = Tuple[str, Callable[[MatchupContext], bool], Callable[[MatchupContext], str]]


# ---- 1. home-scoring bias ----

def _home_bias(ctx: MatchupContext) -> bool:
    scored = ctx.home.goals_scored
    return len(scored.home) > len(scored.away) * HOME_BIAS_FACTOR


def _home_bias_text(ctx: MatchupContext) -> str:
    scored = ctx.home.goals_scored
    share = len(scored.home) / len(scored) * 100
    return (
        f"{ctx.home.name} tem desempenho significativamente melhor em casa, "
        f"marcando {fmt_int(share)}% dos seus gols como mandante."
    )


# ---- 2. away defensive fragility ----

def _away_fragility(ctx: MatchupContext) -> bool:
    conceded = ctx.away.goals_conceded
    return len(conceded.away) > len(conceded.home) * AWAY_FRAGILITY_FACTOR


def _away_fragility_text(ctx: MatchupContext) -> str:
    conceded = ctx.away.goals_conceded
    return (
        f"{ctx.away.name} sofre consideravelmente mais gols fora de casa "
        f"({len(conceded.away)} fora vs {len(conceded.home)} em casa), "
        f"indicando fragilidade como visitante."
    )


# ---- 3. strength meets weakness ----

def _tactical_match(ctx: MatchupContext) -> bool:
    if not ctx.home_scored_origins or not ctx.away_conceded_origins:
        return False
    strength = ctx.home_scored_origins[0]
    weakness = ctx.away_conceded_origins[0]
    return (
        strength.origin == weakness.origin
        and strength.percentage > TACTICAL_MATCH_MIN_PCT
        and weakness.percentage > TACTICAL_MATCH_MIN_PCT
    )


def _tactical_match_text(ctx: MatchupContext) -> str:
    strength = ctx.home_scored_origins[0]
    weakness = ctx.away_conceded_origins[0]
    return (
        f"Oportunidade tática: {ctx.home.name} marca {fmt_dec(strength.percentage)}% "
        f"dos gols via {strength.label}, exatamente a principal vulnerabilidade de "
        f"{ctx.away.name} ({fmt_dec(weakness.percentage)}% dos gols sofridos)."
    )


# ---- 4/5. discipline vs group norm ----

def _above_group(club: Club, avg: GroupAverage) -> bool:
    # A zero average only happens when the club is missing from the collection.
    return avg.total > 0 and total_cards(club) > avg.total * DISCIPLINE_FACTOR


def _percent_above(club: Club, avg: GroupAverage) -> str:
    return fmt_int((total_cards(club) - avg.total) / avg.total * 100)


def _home_discipline(ctx: MatchupContext) -> bool:
    return _above_group(ctx.home, ctx.home_group_avg)


def _home_discipline_text(ctx: MatchupContext) -> str:
    club = ctx.home
    return (
        f"{club.name} possui {total_cards(club)} cartões no total "
        f"({_percent_above(club, ctx.home_group_avg)}% acima da média do Grupo {club.group}), "
        f"indicando tendência disciplinar mais agressiva."
    )


def _away_discipline(ctx: MatchupContext) -> bool:
    return _above_group(ctx.away, ctx.away_group_avg)


def _away_discipline_text(ctx: MatchupContext) -> str:
    club = ctx.away
    return (
        f"{club.name} apresenta {total_cards(club)} cartões "
        f"({_percent_above(club, ctx.away_group_avg)}% acima da média do Grupo {club.group}), "
        f"sugerindo jogo mais físico."
    )


# ---- 6. late concessions ----

def _late_ratio(club: Club) -> Optional[float]:
    conceded = len(club.goals_conceded)
    if conceded == 0:
        return None
    return goals_after(club.goals_conceded.combined, LATE_GOAL_MINUTE) / conceded


def _late_concessions(ctx: MatchupContext) -> bool:
    ratio = _late_ratio(ctx.home)
    return ratio is not None and ratio > LATE_CONCESSION_RATIO


def _late_concessions_text(ctx: MatchupContext) -> str:
    ratio = _late_ratio(ctx.home) or 0.0
    return (
        f"{ctx.home.name} sofre {fmt_int(ratio * 100)}% dos gols após os "
        f"{LATE_GOAL_MINUTE} minutos, indicando possível desgaste físico no final das partidas."
    )


COMPARISON_RULES: Tuple[Rule, ...] = (
    ("home_scoring_bias", _home_bias, _home_bias_text),
    ("away_defensive_fragility", _away_fragility, _away_fragility_text),
    ("tactical_match", _tactical_match, _tactical_match_text),
    ("home_discipline", _home_discipline, _home_discipline_text),
    ("away_discipline", _away_discipline, _away_discipline_text),
    ("late_concessions", _late_concessions, _late_concessions_text),
)


def evaluate_rules(rules: Sequence[Rule], ctx: MatchupContext) -> List[str]:
    insights: List[str] = []
    for name, predicate, builder in rules:
        if predicate(ctx):
            logger.debug("insight_rule_fired: %s (%s vs %s)", name, ctx.home.id, ctx.away.id)
            insights.append(builder(ctx))
    return insights


def compare_insights(home: Club, away: Club, all_clubs: Sequence[Club]) -> List[str]:
    """Return tactical observations for ``home`` hosting ``away``.

    Args:
        home: club treated as the home side of the hypothetical fixture
        away: club treated as the away side
        all_clubs: full collection, used for the per-group card averages

    Returns:
        Sentences in rule order; empty when no rule fires.
    """
    ctx = MatchupContext.build(home, away, all_clubs)
    return evaluate_rules(COMPARISON_RULES, ctx)
