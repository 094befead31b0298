from tests.conftest import ORGANIZER


def test_register_rejects_duplicate_email(client, organizer_headers):
    resp = client.post("/api/v1/auth/register", json=ORGANIZER)
    assert resp.status_code == 400


def test_login_with_wrong_password(client, organizer_headers):
    resp = client.post("/api/v1/auth/login/json", json={"email": ORGANIZER["email"], "password": "nope"})
    assert resp.status_code == 401


def test_me_returns_current_user(client, organizer_headers):
    resp = client.get("/api/v1/auth/me", headers=organizer_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == ORGANIZER["email"]
    assert resp.json()["role"] == "organizer"


def test_invalid_token_is_rejected(client):
    resp = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_participant_cannot_create_event(client, reviewer_headers):
    resp = client.post("/api/v1/events/", json={"name": "Nope"}, headers=reviewer_headers)
    assert resp.status_code == 403


def test_event_lifecycle(client, organizer_headers):
    resp = client.post(
        "/api/v1/events/",
        json={"name": "Workshop", "keywords": ["ml"]},
        headers=organizer_headers,
    )
    assert resp.status_code == 201
    event = resp.json()
    assert event["publish_status"] == "Draft"

    resp = client.get("/api/v1/events/published")
    assert resp.status_code == 200
    assert resp.json() == []

    resp = client.put(
        f"/api/v1/events/{event['id']}",
        json={"publish_status": "Published"},
        headers=organizer_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["keywords"] == ["ml"]

    assert [e["id"] for e in client.get("/api/v1/events/published").json()] == [event["id"]]

    resp = client.delete(f"/api/v1/events/{event['id']}", headers=organizer_headers)
    assert resp.status_code == 200
    assert client.get("/api/v1/events/", headers=organizer_headers).json() == []


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert "status" in resp.json()
