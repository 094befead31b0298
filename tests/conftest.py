import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEND_EMAILS"] = "false"
os.environ["ENVIRONMENT"] = "testing"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import Base, get_db
from app.main import app
from app import models  # noqa: F401

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ORGANIZER = {"email": "organizer@example.com", "password": "organizer-pass", "full_name": "Olivia Organizer", "role": "organizer"}
REVIEWER = {"email": "reviewer@example.com", "password": "reviewer-pass", "full_name": "Rene Reviewer", "role": "participant"}


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _register_and_login(client, user):
    resp = client.post("/api/v1/auth/register", json=user)
    assert resp.status_code == 201, resp.text
    resp = client.post(
        "/api/v1/auth/login",
        data={"username": user["email"], "password": user["password"]},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def organizer_headers(client):
    return _register_and_login(client, ORGANIZER)


@pytest.fixture
def reviewer_headers(client):
    return _register_and_login(client, REVIEWER)


@pytest.fixture
def registration_form_payload():
    return {
        "title": "Call for Papers",
        "general_info": {"collect_name": True, "collect_email": True},
        "actions": {"send_confirmation_email": True},
        "sections": [
            {
                "id": "s2",
                "title": "Paper",
                "order": 2,
                "fields": [
                    {"id": "abstract", "type": "textarea", "label": "Abstract", "required": True,
                     "validation": {"min_length": 10}},
                ],
            },
            {
                "id": "s1",
                "title": "About you",
                "order": 1,
                "fields": [
                    {"id": "years", "type": "number", "label": "Years of experience",
                     "validation": {"min": 0, "max": 60}},
                ],
                "subsections": [
                    {
                        "id": "s1a",
                        "title": "Track",
                        "fields": [
                            {"id": "track", "type": "select", "label": "Track", "required": True,
                             "options": ["AI", "Systems"]},
                        ],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def event_and_form(client, organizer_headers, registration_form_payload):
    resp = client.post("/api/v1/events/", json={"name": "Symposium 2026"}, headers=organizer_headers)
    assert resp.status_code in (200, 201), resp.text
    event = resp.json()
    resp = client.post("/api/v1/registration-forms/", json=registration_form_payload, headers=organizer_headers)
    assert resp.status_code in (200, 201), resp.text
    return event, resp.json()


@pytest.fixture
def submit(client, event_and_form):
    event, form = event_and_form

    def _submit(name="Ada Lovelace", email="ada@example.com", **answers):
        payload = {
            "form_id": form["id"],
            "event_id": event["id"],
            "general_info": {"name": name, "email": email},
            "answers": {"abstract": "A long enough abstract", "track": "AI", **answers},
        }
        resp = client.post("/api/v1/submissions/", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _submit
