from io import BytesIO
from types import SimpleNamespace

import pytest
from PIL import Image

from app.services import badge_generation, storage
from app.services.badge_generation import get_field_value, render_badge_image

TEMPLATE = {
    "title": "Speaker badge",
    "width": 300,
    "height": 450,
    "elements": [
        {"id": "t", "type": "text", "content": "SYMPOSIUM", "x": 50, "y": 10, "font_size": 20, "font_weight": "bold"},
        {"id": "n", "type": "field", "content": "name", "x": 50, "y": 40, "color": "#1f2937"},
        {"id": "q", "type": "qr", "x": 50, "y": 75, "font_size": 90},
    ],
}


@pytest.fixture
def uploads(monkeypatch):
    calls = {"upload": [], "replace": []}

    def fake_upload(data, *, folder, public_id=None, resource_type="auto", overwrite=False):
        calls["upload"].append(public_id)
        return {"url": f"https://cdn.example.com/{folder}/{public_id}.png", "public_id": f"{folder}/{public_id}"}

    def fake_replace(data, *, public_id):
        calls["replace"].append(public_id)
        Image.open(BytesIO(data)).verify()
        return {"url": f"https://cdn.example.com/{public_id}.png", "public_id": public_id}

    monkeypatch.setattr(storage, "upload_bytes", fake_upload)
    monkeypatch.setattr(storage, "replace_image", fake_replace)
    return calls


def test_field_values_fall_back_to_general_answers():
    submission = SimpleNamespace(general_info={}, answers={"general_name": "Ada", "topics": ["AI", "HPC"]})
    assert get_field_value(submission, "name") == "Ada"
    assert get_field_value(submission, "topics") == "AI, HPC"
    assert get_field_value(submission, "missing") == ""


def test_render_produces_png_of_template_size():
    template = SimpleNamespace(**TEMPLATE, background_image=None)
    submission = SimpleNamespace(general_info={"name": "Ada Lovelace"}, answers={})
    for url in (None, "https://cdn.example.com/badge.png"):
        image = Image.open(BytesIO(render_badge_image(template, submission, badge_url=url)))
        assert image.format == "PNG"
        assert image.size == (300, 450)


def test_unreachable_background_is_skipped(monkeypatch):
    def broken_get(*args, **kwargs):
        raise badge_generation.requests.ConnectionError("offline")

    monkeypatch.setattr(badge_generation.requests, "get", broken_get)
    template = SimpleNamespace(**TEMPLATE, background_image="https://cdn.example.com/bg.png")
    submission = SimpleNamespace(general_info={"name": "Ada"}, answers={})
    assert Image.open(BytesIO(render_badge_image(template, submission))).size == (300, 450)


def test_approval_generates_badge(client, organizer_headers, submit, uploads):
    resp = client.post("/api/v1/badge-templates/", json=TEMPLATE, headers=organizer_headers)
    assert resp.status_code == 201, resp.text
    template = resp.json()
    submission = submit(name="Ada Lovelace")

    resp = client.put(
        f"/api/v1/submissions/{submission['id']}/approval",
        json={"approval_status": "accepted", "badge_template_id": template["id"]},
        headers=organizer_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["badge_generated"] is True
    assert resp.json()["submission"]["display_status"]["label"] == "Approved"
    assert len(uploads["upload"]) == 1
    assert len(uploads["replace"]) == 1

    badge = client.get(f"/api/v1/badges/submission/{submission['id']}", headers=organizer_headers).json()
    assert badge["participant_name"] == "Ada Lovelace"
    assert badge["participant_email"] == "ada@example.com"
    assert badge["registration_type"] == "external"

    resp = client.get("/api/v1/badges/by-url", params={"url": badge["badge_image_url"]}, headers=organizer_headers)
    assert resp.json()["id"] == badge["id"]

    resp = client.post(
        "/api/v1/badges/generate",
        json={"form_submission_id": submission["id"], "badge_template_id": template["id"]},
        headers=organizer_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["id"] == badge["id"]
    assert len(client.get(f"/api/v1/badges/event/{submission['event_id']}", headers=organizer_headers).json()) == 1


def test_approval_keeps_status_when_badge_fails(client, organizer_headers, submit, monkeypatch):
    def failing_upload(*args, **kwargs):
        raise storage.StorageError("Cloudinary not configured")

    monkeypatch.setattr(storage, "upload_bytes", failing_upload)
    template = client.post("/api/v1/badge-templates/", json=TEMPLATE, headers=organizer_headers).json()
    submission = submit()

    resp = client.put(
        f"/api/v1/submissions/{submission['id']}/approval",
        json={"approval_status": "accepted", "badge_template_id": template["id"]},
        headers=organizer_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["badge_generated"] is False
    assert body["badge_error"] == "Cloudinary not configured"
    assert body["submission"]["approval_status"] == "accepted"
