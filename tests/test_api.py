"""
Tests for the REST API.
"""

import sys
import os

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wrestling_meet.api.routes import get_repository
from wrestling_meet.main import app
from wrestling_meet.services.storage import WrestlingRepository


@pytest.fixture
def client():
    repo = WrestlingRepository()
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()


def _team(client, name):
    response = client.post("/api/teams", json={"name": name})
    assert response.status_code == 200
    return response.json()


def _wrestler(client, name, team_id):
    response = client.post("/api/wrestlers", json={"name": name, "team_id": team_id})
    assert response.status_code == 200
    return response.json()


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    assert client.get("/api/health").json()["status"] == "healthy"


def test_bout_order_preview(client):
    response = client.post("/api/dual-meets/bout-order", json={
        "weight_classes": [106, 113, 120, 126],
        "starting_weight_class": 120,
        "choice_parity": "odds"
    })

    assert response.status_code == 200
    bouts = response.json()
    assert [(b["weight_class"], b["choice_holder"]) for b in bouts] == [
        (120, "home"), (126, "away"), (106, "home"), (113, "away")
    ]
    assert bouts[0]["label"] == "Match 1: 120 lbs - Home choice"


def test_bout_order_preview_rejects_missing_start(client):
    response = client.post("/api/dual-meets/bout-order", json={
        "weight_classes": [106, 113, 120, 126],
        "starting_weight_class": 999,
        "choice_parity": "evens"
    })
    assert response.status_code == 422
    assert "999" in response.json()["detail"]


def test_bout_order_preview_rejects_duplicates(client):
    response = client.post("/api/dual-meets/bout-order", json={
        "weight_classes": [106, 106],
        "starting_weight_class": 106,
        "choice_parity": "odds"
    })
    assert response.status_code == 422


def test_team_and_wrestler_routes(client):
    team = _team(client, "Eagles")
    wrestler = _wrestler(client, "Alex", team["id"])

    response = client.patch(f"/api/wrestlers/{wrestler['id']}", json={"grade": "11"})
    assert response.json()["grade"] == "11"

    response = client.patch(f"/api/teams/{team['id']}", json={"name": "Golden Eagles"})
    assert response.json()["name"] == "Golden Eagles"

    assert len(client.get("/api/wrestlers", params={"team_id": team["id"]}).json()) == 1

    assert client.delete(f"/api/wrestlers/{wrestler['id']}").json() == {"success": True}
    assert client.get("/api/wrestlers").json() == []


def test_missing_records_are_404(client):
    assert client.patch("/api/teams/missing", json={"name": "x"}).status_code == 404
    assert client.post("/api/wrestlers", json={"name": "A", "team_id": "missing"}).status_code == 404
    assert client.get("/api/dual-meets/missing").status_code == 404


def test_weigh_in_finds_weight_class(client):
    team = _team(client, "Eagles")
    wrestler = _wrestler(client, "Alex", team["id"])

    response = client.post(f"/api/wrestlers/{wrestler['id']}/weigh-in", json={"weight": 118.4})

    weigh_in = response.json()["weigh_in"]
    assert weigh_in["weight_class"] == 120
    assert weigh_in["status"] == "made"

    response = client.post(f"/api/wrestlers/{wrestler['id']}/weigh-in",
                           json={"weight": 121, "weight_class": 120})
    assert response.json()["weigh_in"]["status"] == "over"


def test_dual_meet_creation_and_bout_sheet(client):
    home = _team(client, "Eagles")
    away = _team(client, "Hawks")
    h1 = _wrestler(client, "Home 106", home["id"])
    a1 = _wrestler(client, "Away 106", away["id"])

    response = client.post("/api/dual-meets", json={
        "home_team_id": home["id"],
        "away_team_id": away["id"],
        "weight_classes": [106, 113, 120, 126],
        "starting_weight_class": 106,
        "home_choice_parity": "evens",
        "home_roster": {"106": h1["id"]},
        "away_roster": {"106": a1["id"]}
    })

    assert response.status_code == 200
    dual_meet = response.json()
    assert dual_meet["name"] == "Eagles vs Hawks"
    assert dual_meet["home_choice_weight_classes"] == [113, 126]
    assert [b["choice_holder"] for b in dual_meet["bouts"]] == ["away", "home", "away", "home"]

    rows = client.get(f"/api/dual-meets/{dual_meet['id']}/bouts").json()
    assert [r["is_forfeit"] for r in rows] == [False, True, True, True]
    assert rows[0]["home_wrestler_id"] == h1["id"]

    report = client.get(f"/api/dual-meets/{dual_meet['id']}/validation").json()
    assert report["is_valid"]
    assert "forfeit" in [v["constraint_type"] for v in report["soft_violations"]]

    assert len(client.get("/api/dual-meets").json()) == 1


def test_dual_meet_defaults_to_grade_weight_classes(client):
    home = _team(client, "Eagles")
    away = _team(client, "Hawks")

    response = client.post("/api/dual-meets", json={
        "home_team_id": home["id"],
        "away_team_id": away["id"],
        "grade_level": "college",
        "starting_weight_class": 157
    })

    assert response.status_code == 200
    bouts = response.json()["bouts"]
    assert len(bouts) == 10
    assert bouts[0]["weight_class"] == 157


def test_dual_meet_same_team_rejected(client):
    home = _team(client, "Eagles")
    response = client.post("/api/dual-meets", json={
        "home_team_id": home["id"],
        "away_team_id": home["id"],
        "weight_classes": [106, 113],
        "starting_weight_class": 106
    })
    assert response.status_code == 422


def test_competition_pairings(client):
    a = _team(client, "Eagles")
    b = _team(client, "Hawks")
    a1 = _wrestler(client, "A1", a["id"])
    b1 = _wrestler(client, "B1", b["id"])
    b2 = _wrestler(client, "B2", b["id"])
    lonely = _wrestler(client, "A2", a["id"])
    for wrestler in (a1, b1, b2):
        client.post(f"/api/wrestlers/{wrestler['id']}/weigh-in", json={"weight": 105, "weight_class": 106})
    client.post(f"/api/wrestlers/{lonely['id']}/weigh-in", json={"weight": 130, "weight_class": 132})

    competition = client.post("/api/competitions", json={
        "name": "Eagles vs Hawks", "team_ids": [a["id"], b["id"]]
    }).json()

    pairings = client.get(f"/api/competitions/{competition['id']}/pairings").json()

    assert {(p["wrestler_a_id"], p["wrestler_b_id"]) for p in pairings} == {
        (a1["id"], b1["id"]), (a1["id"], b2["id"])
    }
    assert all(p["weight_class"] == "106" for p in pairings)


def test_dual_competition_needs_two_teams(client):
    response = client.post("/api/competitions", json={"name": "Solo", "team_ids": ["only"]})
    assert response.status_code == 422


def test_match_scoring_flow(client):
    team = _team(client, "Eagles")
    wrestler = _wrestler(client, "Alex", team["id"])
    match = client.post("/api/matches", json={
        "weight_class": 120,
        "my_wrestler_id": wrestler["id"],
        "my_team_id": team["id"],
        "opponent_name": "Sam"
    }).json()
    match_id = match["id"]

    # Scoring before the match starts is a conflict
    response = client.post(f"/api/matches/{match_id}/score",
                           json={"wrestler": "my_wrestler", "action": "takedown"})
    assert response.status_code == 409

    assert client.post(f"/api/matches/{match_id}/start").json()["status"] == "active"
    client.post(f"/api/matches/{match_id}/timer", json={"command": "start"})
    client.post(f"/api/matches/{match_id}/timer", json={"command": "tick", "seconds": 60})
    response = client.post(f"/api/matches/{match_id}/score",
                           json={"wrestler": "my_wrestler", "action": "takedown"})
    assert response.json()["my_score"] == 2

    response = client.post(f"/api/matches/{match_id}/end", json={"win_type": "pin"})
    result = response.json()["final_result"]
    assert result["winner"] == "my_wrestler"
    assert result["duration"] == "1:00"

    events = client.get(f"/api/matches/{match_id}/events").json()
    assert [e["action"] for e in events] == ["match_start", "period_start", "takedown", "match_end"]

    standings = client.get("/api/review/team-points").json()
    assert standings == [{"team_id": team["id"], "name": "Eagles", "wins": 1, "losses": 0, "points": 6}]

    assert client.post(f"/api/matches/{match_id}/start").status_code == 409


def test_unknown_timer_command(client):
    team = _team(client, "Eagles")
    match = client.post("/api/matches", json={
        "weight_class": 120, "my_wrestler_id": "w", "my_team_id": team["id"], "opponent_name": "Sam"
    }).json()
    client.post(f"/api/matches/{match['id']}/start")

    response = client.post(f"/api/matches/{match['id']}/timer", json={"command": "rewind"})
    assert response.status_code == 422


def test_weight_class_tables(client):
    assert client.get("/api/weight-classes/high-school").json()[0] == 106
    assert client.get("/api/weight-classes/unknown").status_code == 404
    assert "senior" in client.get("/api/weight-classes").json()


def test_patch_with_null_leaves_records_readable(client):
    team = _team(client, "Eagles")
    wrestler = _wrestler(client, "Alex", team["id"])
    competition = client.post("/api/competitions", json={
        "name": "Quad", "team_ids": [team["id"]], "format": "individual"
    }).json()
    match = client.post("/api/matches", json={
        "weight_class": 120, "my_wrestler_id": wrestler["id"],
        "my_team_id": team["id"], "opponent_name": "Sam"
    }).json()

    response = client.patch(f"/api/wrestlers/{wrestler['id']}", json={"name": None, "grade": "9"})
    assert response.status_code == 200
    assert response.json()["name"] == "Alex"
    assert response.json()["grade"] == "9"
    assert client.get("/api/wrestlers").status_code == 200

    response = client.patch(f"/api/competitions/{competition['id']}", json={"status": None})
    assert response.status_code == 200
    assert response.json()["status"] == "setup"
    assert client.get("/api/competitions").status_code == 200

    response = client.patch(f"/api/matches/{match['id']}", json={"opponent_name": None})
    assert response.status_code == 200
    assert response.json()["opponent_name"] == "Sam"
    assert client.get("/api/matches").status_code == 200


def test_team_rename_rejects_blank_name(client):
    team = _team(client, "Eagles")

    assert client.patch(f"/api/teams/{team['id']}", json={"name": "   "}).status_code == 422
    response = client.patch(f"/api/teams/{team['id']}", json={"name": "  Hawks  "})
    assert response.json()["name"] == "Hawks"
    assert client.get("/api/teams").json()[0]["name"] == "Hawks"


def test_timer_tick_rejects_negative_seconds(client):
    team = _team(client, "Eagles")
    match = client.post("/api/matches", json={
        "weight_class": 120, "my_wrestler_id": "w", "my_team_id": team["id"], "opponent_name": "Sam"
    }).json()
    client.post(f"/api/matches/{match['id']}/start")
    client.post(f"/api/matches/{match['id']}/timer", json={"command": "start"})

    response = client.post(f"/api/matches/{match['id']}/timer", json={"command": "tick", "seconds": -100})
    assert response.status_code == 422
    assert client.get(f"/api/matches/{match['id']}").json()["current_time"] == 180
