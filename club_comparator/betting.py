"""Betting-market commentary for a hypothetical home vs away fixture.

Markets are emitted in a fixed order: BTTS, total goals and match result are
always present; goals-by-half and cards only when their thresholds are met.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .constants import (
    AWAY_WIN_FACTOR,
    BTTS_BASE_PCT,
    BTTS_GOALS_WEIGHT,
    BTTS_MAX_PCT,
    FIRST_HALF_CAP_PCT,
    FIRST_HALF_SHARE_PCT,
    HIGH_SCORING_AVG,
    HOME_WIN_FACTOR,
    MANY_CARDS_AVG,
    MARKET_BTTS,
    MARKET_CARDS,
    MARKET_GOALS_BY_HALF,
    MARKET_RESULT,
    MARKET_TOTAL_GOALS,
    OVER_UNDER_LINE,
    PROB_AWAY_WIN,
    PROB_BALANCED,
    PROB_BTTS_FALLBACK,
    PROB_HOME_WIN,
    PROB_MANY_CARDS,
    PROB_OVER,
    PROB_OVER_HIGH,
    PROB_UNDER,
    SECOND_HALF_CAP_PCT,
    SECOND_HALF_SHARE_PCT,
)
from .domain.models import BettingInsight, Club
from .stats import split_by_half, weighted_cards
from .utils import fmt_dec, fmt_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixtureContext:
    """Venue-specific counts: the home club at home, the away club away."""

    home: Club
    away: Club
    home_scored: int
    home_conceded: int
    away_scored: int
    away_conceded: int

    @classmethod
    def build(cls, home: Club, away: Club) -> "FixtureContext":
        return cls(
            home=home,
            away=away,
            home_scored=len(home.goals_scored.home),
            home_conceded=len(home.goals_conceded.home),
            away_scored=len(away.goals_scored.away),
            away_conceded=len(away.goals_conceded.away),
        )

    @property
    def avg_goals_per_match(self) -> float:
        goals = self.home_scored + self.home_conceded + self.away_scored + self.away_conceded
        return goals / max(goals / 2, 1)

    @property
    def home_scoring_rate(self) -> float:
        return self.home_scored / max(self.home_scored + self.home_conceded, 1) * 100

    @property
    def away_scoring_rate(self) -> float:
        return self.away_scored / max(self.away_scored + self.away_conceded, 1) * 100


MarketRule = Tuple[str, Callable[[FixtureContext], Optional[BettingInsight]]]


def _btts(ctx: FixtureContext) -> BettingInsight:
    if ctx.home_scored > 0 and ctx.away_scored > 0:
        pct = min(BTTS_MAX_PCT, BTTS_BASE_PCT + ctx.avg_goals_per_match * BTTS_GOALS_WEIGHT)
        return BettingInsight(
            market=MARKET_BTTS,
            analysis=(
                f"Probabilidade ALTA. {ctx.home.name} marca em {fmt_int(ctx.home_scoring_rate)}% "
                f"das partidas em casa, e {ctx.away.name} marca em "
                f"{fmt_int(ctx.away_scoring_rate)}% como visitante."
            ),
            probability=f"{fmt_int(pct)}%",
        )
    return BettingInsight(
        market=MARKET_BTTS,
        analysis=(
            "Probabilidade MODERADA/BAIXA. Uma ou ambas equipes têm dificuldade de "
            "marcar nas condições de mando correspondentes."
        ),
        probability=PROB_BTTS_FALLBACK,
    )


def _total_goals(ctx: FixtureContext) -> BettingInsight:
    avg = ctx.avg_goals_per_match
    if avg > OVER_UNDER_LINE:
        return BettingInsight(
            market=MARKET_TOTAL_GOALS,
            analysis=(
                f"Tendência para OVER 2.5 gols. Média combinada de {fmt_dec(avg)} gols por jogo. "
                f"{ctx.home.name} (casa) tem média de "
                f"{fmt_dec(ctx.home_scored + ctx.home_conceded)} gols/jogo em casa, "
                f"{ctx.away.name} (fora) tem {fmt_dec(ctx.away_scored + ctx.away_conceded)} "
                f"gols/jogo fora."
            ),
            probability=PROB_OVER_HIGH if avg > HIGH_SCORING_AVG else PROB_OVER,
        )
    return BettingInsight(
        market=MARKET_TOTAL_GOALS,
        analysis=(
            f"Tendência para UNDER 2.5 gols. Média combinada de {fmt_dec(avg)} gols. "
            f"Ambas equipes demonstram padrão de jogos com poucos gols."
        ),
        probability=PROB_UNDER,
    )


def _match_result(ctx: FixtureContext) -> BettingInsight:
    home, away = ctx.home.name, ctx.away.name
    if ctx.home_scored > ctx.away_scored * HOME_WIN_FACTOR and ctx.home_conceded < ctx.away_scored:
        analysis = (
            f"Vantagem clara para {home}. Como mandante, marca {ctx.home_scored} e sofre "
            f"{ctx.home_conceded}, enquanto {away} fora marca {ctx.away_scored} e sofre "
            f"{ctx.away_conceded}."
        )
        probability = PROB_HOME_WIN
    elif ctx.away_scored > ctx.home_scored * AWAY_WIN_FACTOR and ctx.away_conceded < ctx.home_scored:
        analysis = (
            f"{away} apresenta bom desempenho fora. Vitória visitante é possível, "
            f"mas mando de campo favorece {home}."
        )
        probability = PROB_AWAY_WIN
    else:
        analysis = (
            f"Jogo equilibrado. Estatísticas similares em casa ({home}) e fora ({away}). "
            f"Mando de campo pode ser decisivo."
        )
        probability = PROB_BALANCED
    return BettingInsight(market=MARKET_RESULT, analysis=analysis, probability=probability)


def _goals_by_half(ctx: FixtureContext) -> Optional[BettingInsight]:
    home_first, home_second = split_by_half(ctx.home.goals_scored.combined)
    away_first, away_second = split_by_half(ctx.away.goals_scored.combined)
    first = home_first + away_first
    second = home_second + away_second
    total = first + second
    if total == 0:
        return None

    first_pct = first / total * 100
    second_pct = second / total * 100
    if second_pct > SECOND_HALF_SHARE_PCT:
        return BettingInsight(
            market=MARKET_GOALS_BY_HALF,
            analysis=(
                f"Forte tendência de gols no SEGUNDO TEMPO ({fmt_int(second_pct)}% dos gols). "
                f"Ambas equipes são mais produtivas após o intervalo."
            ),
            probability=f"Mais gols 2T: {fmt_int(min(SECOND_HALF_CAP_PCT, second_pct))}%",
        )
    if first_pct > FIRST_HALF_SHARE_PCT:
        return BettingInsight(
            market=MARKET_GOALS_BY_HALF,
            analysis=(
                f"Equipes começam fortes. {fmt_int(first_pct)}% dos gols ocorrem no PRIMEIRO TEMPO."
            ),
            probability=f"Gol 1T: {fmt_int(min(FIRST_HALF_CAP_PCT, first_pct))}%",
        )
    # roughly even split: no market entry
    return None


def _cards(ctx: FixtureContext) -> Optional[BettingInsight]:
    home_cards = weighted_cards(ctx.home)
    away_cards = weighted_cards(ctx.away)
    avg_cards = (home_cards + away_cards) / 2
    if avg_cards <= MANY_CARDS_AVG:
        return None
    return BettingInsight(
        market=MARKET_CARDS,
        analysis=(
            f"Jogo com tendência de MUITOS CARTÕES. Média combinada de {fmt_dec(avg_cards)} "
            f"cartões. {ctx.home.name}: {home_cards} cartões totais, "
            f"{ctx.away.name}: {away_cards} cartões totais."
        ),
        probability=PROB_MANY_CARDS,
    )


MARKET_RULES: Tuple[MarketRule, ...] = (
    ("btts", _btts),
    ("total_goals", _total_goals),
    ("match_result", _match_result),
    ("goals_by_half", _goals_by_half),
    ("cards", _cards),
)


def evaluate_markets(rules: Sequence[MarketRule], ctx: FixtureContext) -> List[BettingInsight]:
    insights: List[BettingInsight] = []
    for name, builder in rules:
        insight = builder(ctx)
        if insight is None:
            logger.debug("market_skipped: %s (%s vs %s)", name, ctx.home.id, ctx.away.id)
            continue
        insights.append(insight)
    return insights


def betting_insights(home: Club, away: Club) -> List[BettingInsight]:
    """Market commentary for ``home`` hosting ``away``, in fixed market order."""
    return evaluate_markets(MARKET_RULES, FixtureContext.build(home, away))
