from club_comparator.domain.models import BettingInsight, Club, Goal, GroupAverage, VenueGoals


RAW_CLUB = {
    "id": "club-7",
    "name": "Real Murcia",
    "group": 2,
    "goalsScored": {
        "home": [{"minute": 12, "origin": "penalti", "isHome": True}],
        "away": [{"minute": 77, "origin": "contra_ataque", "isHome": False}],
    },
    "goalsConceded": {"home": [], "away": [{"minute": 90, "origin": "escanteio", "isHome": False}]},
    "yellowCards": {"home": 3, "away": 1},
    "redCards": {"home": 0, "away": 1},
}


def test_club_from_dict_reads_camel_case_shape():
    club = Club.from_dict(RAW_CLUB)
    assert club.group == 2
    assert club.goals_scored.home == (Goal(12, "penalti", True),)
    assert club.goals_conceded.away[0].minute == 90
    assert club.yellow_cards.total == 4
    assert club.red_cards.away == 1


def test_club_to_dict_matches_source_record():
    assert Club.from_dict(RAW_CLUB).to_dict() == RAW_CLUB


def test_missing_sections_default_to_empty():
    club = Club.from_dict({"id": "x", "name": "X", "group": 1})
    assert len(club.goals_scored) == 0
    assert club.yellow_cards.total == 0


def test_venue_goals_routes_by_home_flag():
    goals = VenueGoals()
    goals = goals.with_goal(Goal(5, "outros", True)).with_goal(Goal(50, "outros", False))
    assert len(goals.home) == 1 and len(goals.away) == 1
    assert goals.combined == (Goal(5, "outros", True), Goal(50, "outros", False))


def test_betting_insight_without_probability():
    assert BettingInsight("Cartões", "texto").to_dict() == {"market": "Cartões", "analysis": "texto"}


def test_group_average_defaults_to_zero():
    assert GroupAverage().to_dict() == {"yellow": 0.0, "red": 0.0, "total": 0.0}
