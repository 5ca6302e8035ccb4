"""
Tests for the plants API (/api/plants).
"""

from unittest.mock import MagicMock

from app.domain.exceptions import ExternalServiceError


def test_list_plants_empty(client):
    response = client.get("/api/plants")
    assert response.status_code == 200
    body = response.get_json()
    assert body["ok"] is True
    assert body["data"] == {"plants": [], "count": 0}


def test_seed_then_list(client):
    first = client.post("/api/plants/seed")
    assert first.status_code == 201
    assert first.get_json()["data"] == {"success": True, "plantId": "basil-001", "alreadyExisted": False}

    second = client.post("/api/plants/seed")
    assert second.status_code == 200
    assert second.get_json()["data"]["alreadyExisted"] is True

    plants = client.get("/api/plants").get_json()["data"]["plants"]
    assert len(plants) == 1
    plant = plants[0]
    assert plant["plantId"] == "basil-001"
    assert plant["userId"] == "demo-user"
    assert plant["metrics"]["lightToday"] == {"value": 6, "ideal": "6h"}
    assert plant["guide"]["plantType"] == "Basil"


def test_session_user_owns_seeded_plant(client):
    with client.session_transaction() as sess:
        sess["user_id"] = "alice"
    client.post("/api/plants/seed")
    plants = client.get("/api/plants").get_json()["data"]["plants"]
    assert plants[0]["userId"] == "alice"


def test_complete_todos(client, table_client):
    client.post("/api/plants/seed")
    response = client.patch("/api/plants/todo", json={"plantId": "basil-001", "completedTodos": ["watering"]})
    assert response.status_code == 200
    assert response.get_json()["data"] == {
        "success": True,
        "plantId": "basil-001",
        "completedTodos": ["watering"],
    }
    today = table_client.find_rows({"plantId": "basil-001"})[0]["today"]
    assert today["logged"] == {"watering": True}
    assert today["needsWatering"] is False


def test_complete_todos_rejects_unknown_kind(client):
    response = client.patch("/api/plants/todo", json={"plantId": "basil-001", "completedTodos": ["dancing"]})
    assert response.status_code == 400
    body = response.get_json()
    assert body["ok"] is False
    assert "Invalid todo types: dancing" in body["details"]["errors"][0]


def test_complete_todos_requires_body(client):
    response = client.patch("/api/plants/todo", data="not json", content_type="text/plain")
    assert response.status_code == 400
    assert len(response.get_json()["details"]["errors"]) == 2


def test_complete_todos_unknown_plant(client):
    response = client.patch("/api/plants/todo", json={"plantId": "missing", "completedTodos": ["light"]})
    assert response.status_code == 404
    assert response.get_json()["error"]["message"] == "Plant missing not found"


def test_store_failure_is_502(make_app):
    broken = MagicMock()
    broken.find_rows.side_effect = ExternalServiceError("Plant table is unreachable")
    response = make_app(broken).test_client().get("/api/plants")
    assert response.status_code == 502
    body = response.get_json()
    assert body["ok"] is False
    assert body["error"]["message"] == "Upstream service unavailable"


def test_unknown_route_is_json_404(client):
    response = client.get("/api/plants/nope/nothing")
    assert response.status_code == 404
    assert response.get_json()["ok"] is False


def test_wrong_method(client):
    response = client.delete("/api/plants/seed")
    assert response.status_code == 405
    assert response.get_json()["ok"] is False
