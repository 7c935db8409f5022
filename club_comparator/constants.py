"""Centralized configuration constants for the Club Comparator."""

# ---- Goal origins ----
# Closed enumeration; declaration order doubles as the tie-break order when
# two origins have the same goal count.
GOAL_ORIGINS = (
    "bola_parada",
    "escanteio",
    "linha_fundo_direita",
    "linha_fundo_esquerda",
    "frontal_area",
    "contra_ataque",
    "penalti",
    "erro_defensivo",
    "outros",
)

GOAL_ORIGIN_LABELS = {
    "bola_parada": "Bola Parada",
    "escanteio": "Escanteio",
    "linha_fundo_direita": "Linha de Fundo Direita",
    "linha_fundo_esquerda": "Linha de Fundo Esquerda",
    "frontal_area": "Frontal da Área",
    "contra_ataque": "Contra-Ataque",
    "penalti": "Pênalti",
    "erro_defensivo": "Erro Defensivo Adversário",
    "outros": "Outros",
}


def is_goal_origin(code: str) -> bool:
    """Return True if ``code`` is one of the nine origin tags."""

    return code in GOAL_ORIGIN_LABELS


def goal_origin_label(code: str) -> str:
    """Return the display label for an origin tag; KeyError if unknown."""

    return GOAL_ORIGIN_LABELS[code]


# ---- Tournament ----
GROUPS = (1, 2)
MIN_GOAL_MINUTE = 1
MAX_GOAL_MINUTE = 130  # 90 + stoppage + extra time

VENUES = ("home", "away")
CARD_COLOURS = ("yellow", "red")

# ---- Comparison insight thresholds ----
HOME_BIAS_FACTOR = 1.3  # home goals vs away goals
AWAY_FRAGILITY_FACTOR = 1.3  # away conceded vs home conceded
TACTICAL_MATCH_MIN_PCT = 15  # both top-origin shares must exceed this
DISCIPLINE_FACTOR = 1.15  # club cards vs group average
LATE_GOAL_MINUTE = 75  # goals after this minute count as late
LATE_CONCESSION_RATIO = 0.35

# ---- Betting heuristics ----
BTTS_BASE_PCT = 60
BTTS_GOALS_WEIGHT = 10
BTTS_MAX_PCT = 95
OVER_UNDER_LINE = 2.5
HIGH_SCORING_AVG = 3
HOME_WIN_FACTOR = 1.4
AWAY_WIN_FACTOR = 1.4
HALF_TIME_MINUTE = 45
SECOND_HALF_SHARE_PCT = 60
SECOND_HALF_CAP_PCT = 70
FIRST_HALF_SHARE_PCT = 55
FIRST_HALF_CAP_PCT = 65
RED_CARD_WEIGHT = 2
MANY_CARDS_AVG = 4

# ---- Market labels and fixed probability bands ----
MARKET_BTTS = "Ambas Marcam (BTTS)"
MARKET_TOTAL_GOALS = "Total de Gols"
MARKET_RESULT = "Resultado Final"
MARKET_GOALS_BY_HALF = "Gols por Tempo"
MARKET_CARDS = "Cartões"

PROB_BTTS_FALLBACK = "35-50%"
PROB_OVER_HIGH = "65-75%"
PROB_OVER = "55-65%"
PROB_UNDER = "60-70%"
PROB_HOME_WIN = "Vitória Casa: 55-65%"
PROB_AWAY_WIN = "Vitória Fora: 30-40% | Empate: 30-35%"
PROB_BALANCED = "Vitória Casa: 40-45% | Empate: 25-30% | Vitória Fora: 25-30%"
PROB_MANY_CARDS = "Over 4.5 Cartões: 60-70%"

# ---- Storage / export ----
EXPORT_PREFIX = "primera-federacion"
CSV_HEADERS = (
    "Clube",
    "Grupo",
    "Gols Marcados Casa",
    "Gols Marcados Fora",
    "Gols Sofridos Casa",
    "Gols Sofridos Fora",
    "Amarelos Casa",
    "Amarelos Fora",
    "Vermelhos Casa",
    "Vermelhos Fora",
)
