import json

import pytest

from club_comparator import settings
from club_comparator.app import create_app
from club_comparator.services.club_service import ClubService
from club_comparator.storage import ClubStore


@pytest.fixture
def store(tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text(
        json.dumps(
            [
                {"name": "Real Murcia", "group": 2},
                {"name": "Alcorcón", "group": 2},
                {"name": "Ourense", "group": 1},
            ]
        ),
        encoding="utf-8",
    )
    return ClubStore(str(tmp_path / "clubs.json"), seed_path=str(seed))


@pytest.fixture
def client(store):
    app = create_app(ClubService(store, persist=True))
    app.testing = True
    with app.test_client() as client:
        yield client


def _post_goal(client, club_id, **body):
    payload = {"minute": 30, "origin": "penalti", "isHome": True, "scored": True}
    payload.update(body)
    return client.post(f"/api/clubs/{club_id}/goals", json=payload)


def test_list_clubs_and_group_filter(client):
    payload = client.get("/api/clubs").get_json()
    assert payload["status"] == "ok"
    assert [c["id"] for c in payload["data"]["clubs"]] == ["club-0", "club-1", "club-2"]

    group_one = client.get("/api/clubs?group=1").get_json()["data"]["clubs"]
    assert [c["name"] for c in group_one] == ["Ourense"]

    unknown = client.get("/api/clubs?group=5").get_json()["data"]
    assert len(unknown["clubs"]) == 3
    assert unknown["warnings"] == ["group_invalid:5"]


def test_get_club_includes_origin_breakdown(client):
    _post_goal(client, "club-0", origin="escanteio")
    data = client.get("/api/clubs/club-0").get_json()["data"]
    assert data["club"]["goalsScored"]["home"][0]["origin"] == "escanteio"
    assert data["summary"]["scored_by_origin"][0]["percentage"] == 100.0


def test_unknown_club_is_404(client):
    response = client.get("/api/clubs/club-99")
    assert response.status_code == 404
    assert response.get_json()["error"]["code"] == "NOT_FOUND"


def test_add_goal_persists_snapshot(client, store):
    response = _post_goal(client, "club-1", minute=81, isHome=False, scored=False)
    assert response.status_code == 201
    assert response.get_json()["message"] == "Gol sofrido registrado"

    reloaded = {c.id: c for c in ClubStore(store.path).load()}
    assert reloaded["club-1"].goals_conceded.away[0].minute == 81


def test_add_goal_rejects_unknown_origin(client):
    response = _post_goal(client, "club-0", origin="voleio")
    assert response.status_code == 400
    assert response.get_json()["status"] == "error"


def test_add_goal_rejects_missing_body(client):
    response = client.post("/api/clubs/club-0/goals", data="nope", content_type="text/plain")
    assert response.status_code == 400


def test_cards_adjustment_never_negative(client):
    client.post("/api/clubs/club-2/cards", json={"colour": "yellow", "venue": "home", "delta": 2})
    response = client.post("/api/clubs/club-2/cards", json={"colour": "yellow", "venue": "home", "delta": -3})
    assert response.status_code == 200
    assert response.get_json()["data"]["club"]["yellowCards"] == {"home": 0, "away": 0}


def test_rename_club(client):
    response = client.patch("/api/clubs/club-2", json={"name": "  CD  Ourense "})
    assert response.status_code == 200
    assert response.get_json()["data"]["club"]["name"] == "CD Ourense"
    assert client.patch("/api/clubs/club-2", json={"name": ""}).status_code == 400


def test_compare_returns_insights_and_markets(client):
    for minute in (10, 20, 30):
        _post_goal(client, "club-0", minute=minute)
    _post_goal(client, "club-1", minute=70, isHome=False)

    response = client.get("/api/compare?home=club-0&away=club-1")
    assert response.status_code == 200
    data = response.get_json()["data"]

    assert data["home"]["name"] == "Real Murcia"
    assert data["away"]["name"] == "Alcorcón"
    assert data["insights"][0].startswith("Real Murcia tem desempenho significativamente melhor em casa")
    markets = [b["market"] for b in data["bettingInsights"]]
    assert markets[:3] == ["Ambas Marcam (BTTS)", "Total de Gols", "Resultado Final"]
    assert 3 <= len(markets) <= 6
    assert data["group_averages"]["2"] == {"yellow": 0.0, "red": 0.0, "total": 0.0}


def test_compare_requires_two_distinct_clubs(client):
    assert client.get("/api/compare?home=club-0").status_code == 400
    assert client.get("/api/compare?home=club-0&away=club-0").status_code == 400
    assert client.get("/api/compare?home=club-0&away=club-42").status_code == 404


def test_export_csv_attachment(client):
    response = client.get("/api/export.csv")
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert 'filename="primera-federacion-' in response.headers["Content-Disposition"]
    lines = response.get_data(as_text=True).splitlines()
    assert lines[0].startswith("Clube,Grupo,")
    assert len(lines) == 4


def test_export_then_import(client):
    _post_goal(client, "club-0")
    exported = client.get("/api/export.json").get_data(as_text=True)
    client.post("/api/reset")
    assert client.get("/api/clubs/club-0").get_json()["data"]["summary"]["goals_scored"]["total"] == 0

    response = client.post("/api/import", data=exported, content_type="application/json")

    assert response.status_code == 200
    assert client.get("/api/clubs/club-0").get_json()["data"]["summary"]["goals_scored"]["total"] == 1


def test_import_rejects_malformed_document(client):
    response = client.post("/api/import", data="{oops", content_type="application/json")
    assert response.status_code == 422
    assert response.get_json()["error"]["code"] == "INVALID_IMPORT"


def test_import_rejects_unknown_origin_and_keeps_collection(client):
    doc = [
        {
            "id": "a",
            "name": "Alfa",
            "group": 1,
            "goalsScored": {"home": [{"minute": 10, "origin": "voleio", "isHome": True}]},
        },
        {"id": "b", "name": "Beta", "group": 1},
    ]
    response = client.post("/api/import", json=doc)

    assert response.status_code == 422
    assert response.get_json()["error"]["code"] == "INVALID_IMPORT"
    assert client.get("/api/clubs/a").status_code == 404
    assert client.get("/api/compare?home=club-0&away=club-1").status_code == 200


def test_import_rejects_unknown_group(client):
    doc = [{"id": "a", "name": "Alfa", "group": 1}, {"id": "b", "name": "Beta", "group": 7}]
    response = client.post("/api/import", json=doc)

    assert response.status_code == 422
    assert [c["id"] for c in client.get("/api/clubs").get_json()["data"]["clubs"]] == ["club-0", "club-1", "club-2"]


def test_reset_returns_seed_roster(client, store):
    _post_goal(client, "club-0")
    response = client.post("/api/reset")
    assert response.status_code == 200
    clubs = response.get_json()["data"]["clubs"]
    assert [c["name"] for c in clubs] == ["Real Murcia", "Alcorcón", "Ourense"]
    assert all(not c["goalsScored"]["home"] for c in clubs)


def test_create_club_appends_with_next_id(client, store):
    response = client.post("/api/clubs", json={"name": "  Hércules ", "group": "2"})

    assert response.status_code == 201
    club = response.get_json()["data"]["club"]
    assert (club["id"], club["name"], club["group"]) == ("club-3", "Hércules", 2)
    assert [c.id for c in store.load()] == ["club-0", "club-1", "club-2", "club-3"]

    goal = _post_goal(client, "club-3")
    assert goal.status_code == 201


@pytest.mark.parametrize("body", [{"name": "Hércules", "group": 3}, {"name": "  ", "group": 1}, {}])
def test_create_club_rejects_invalid_payload(client, body):
    response = client.post("/api/clubs", json=body)
    assert response.status_code == 400
    assert len(client.get("/api/clubs").get_json()["data"]["clubs"]) == 3


def test_default_roster_makes_a_fresh_app_usable(tmp_path):
    store = ClubStore(str(tmp_path / "clubs.json"), seed_path=settings.DEFAULT_SEED_FILE)
    app = create_app(ClubService(store, persist=False))
    app.testing = True
    with app.test_client() as client:
        clubs = client.get("/api/clubs").get_json()["data"]["clubs"]
        response = client.get(f"/api/compare?home={clubs[0]['id']}&away={clubs[-1]['id']}")

    assert len(clubs) == 20
    assert {c["group"] for c in clubs} == {1, 2}
    assert clubs[0]["id"] == "club-0"
    assert response.status_code == 200
