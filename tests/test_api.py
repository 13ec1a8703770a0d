from fastapi.testclient import TestClient

from legion_sim.api.app import app

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_simulate_round_trip():
    body = {
        "request_id": 3,
        "context": {
            "attacker": {"red_dice": 3, "surge_chart": "hit", "points": 100},
            "defender": {"die_color": "red", "points": 50},
            "attack_type": "ranged",
        },
        "iterations": 500,
        "seed": 12,
    }
    r = client.post("/api/simulate", json=body)
    assert r.status_code == 200
    data = r.json()
    assert data["request_id"] == 3
    result = data["result"]
    assert result["iterations"] == 500
    assert set(result["total_wounds"]) == {"stats", "distribution"}
    assert result["suppression"] == 1
    assert client.post("/api/simulate", json=body).json() == data


def test_simulate_bad_context_returns_error_with_id():
    body = {"request_id": 4, "context": {"attacker": {"red_dice": -1}}}
    r = client.post("/api/simulate", json=body)
    assert r.status_code == 400
    assert r.json()["request_id"] == 4
    assert "red_dice" in r.json()["error"]


def test_simulate_rejects_negative_iterations():
    r = client.post("/api/simulate", json={"request_id": 5, "iterations": -1})
    assert r.status_code == 422


def test_keywords_endpoint():
    r = client.get("/api/keywords/melee")
    assert r.status_code == 200
    data = r.json()
    assert "duelist" in data["attacker"]
    assert "cover" not in data["defender"]
    assert client.get("/api/keywords/artillery").status_code == 404


def test_simulate_malformed_records_return_error_with_id():
    for context in ({"attacker": 5}, {"attacker": "abc"}, {"defender": [1]}):
        r = client.post("/api/simulate", json={"request_id": 7, "context": context})
        assert r.status_code == 400
        assert r.json()["request_id"] == 7
        assert "expected a mapping" in r.json()["error"]
