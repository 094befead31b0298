import pytest
import requests

from app.schemas.email import EmailRecipient
from app.services import email_sender, storage
from app.services.email_sender import AttachmentUploadError, replace_placeholders, send_bulk, upload_attachments


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload if payload is not None else {"success": True}

    def json(self):
        return self._payload


def test_placeholders_are_replaced_and_unknown_ones_kept():
    recipient = EmailRecipient(email="ada@example.com", name="Ada", approvalStatus="reserved", eventTitle="Symposium")
    text = "Dear {{name}}, you were {{ approvalStatus }} for {{eventTitle}} ({{email}}). {{unknown}}"
    assert replace_placeholders(text, recipient) == (
        "Dear Ada, you were approved with reserve for Symposium (ada@example.com). {{unknown}}"
    )


def test_name_defaults_to_email_local_part():
    assert replace_placeholders("Hi {{name}}", {"email": "bob@example.com"}) == "Hi bob"


def test_extra_recipient_fields_are_placeholders():
    recipient = EmailRecipient(email="ada@example.com", room="B12")
    assert replace_placeholders("Room {{room}}", recipient) == "Room B12"


def test_send_bulk_tallies_each_recipient(monkeypatch):
    sent = []

    def fake_post(url, json, timeout):
        sent.append(json)
        if json["to"] == "bad@example.com":
            return FakeResponse(401, {"error": "SMTP Authentication failed", "message": "Invalid SMTP credentials."})
        if json["to"] == "down@example.com":
            raise requests.ConnectionError("refused")
        return FakeResponse()

    monkeypatch.setattr(email_sender.requests, "post", fake_post)
    recipients = [
        {"email": "ada@example.com", "name": "Ada"},
        {"email": "bad@example.com"},
        {"email": "down@example.com"},
    ]
    result = send_bulk("Hello {{name}}", "<p>Welcome {{name}}</p>", recipients)

    assert (result["sent"], result["failed"], result["total"]) == (1, 2, 3)
    assert [r["status"] for r in result["results"]] == ["sent", "failed", "failed"]
    assert result["results"][1]["error"] == "Invalid SMTP credentials."
    assert result["results"][2]["error"].startswith("Email API unreachable")
    assert sent[0]["subject"] == "Hello Ada"
    assert "Welcome Ada" in sent[0]["html"]
    assert sent[0]["recipientName"] == "Ada"


def test_success_flag_is_required(monkeypatch):
    monkeypatch.setattr(email_sender.requests, "post", lambda *a, **k: FakeResponse(200, {"message": "queued"}))
    result = send_bulk("s", "b", [{"email": "ada@example.com"}])
    assert result["failed"] == 1
    assert result["results"][0]["error"] == "queued"


def test_inline_attachments_are_uploaded(monkeypatch):
    uploaded = []

    def fake_upload_file(data, filename, *, folder=None):
        uploaded.append((data, filename, folder))
        return {"url": f"https://cdn.example.com/{filename}", "public_id": filename}

    monkeypatch.setattr(storage, "upload_file", fake_upload_file)
    result = upload_attachments([
        {"name": "cfp.txt", "url": "data:text/plain;base64,aGVsbG8="},
        {"name": "map.pdf", "url": "https://cdn.example.com/map.pdf"},
    ])
    assert result == [
        {"name": "cfp.txt", "url": "https://cdn.example.com/cfp.txt"},
        {"name": "map.pdf", "url": "https://cdn.example.com/map.pdf"},
    ]
    assert uploaded[0][0] == b"hello"


def test_failed_attachment_upload_aborts(monkeypatch):
    def broken(*args, **kwargs):
        raise storage.StorageError("Cloudinary not configured")

    monkeypatch.setattr(storage, "upload_file", broken)
    with pytest.raises(AttachmentUploadError):
        upload_attachments([{"name": "a.txt", "url": "data:text/plain;base64,aGk="}])


def test_bulk_endpoint_uses_template(client, organizer_headers, monkeypatch):
    posted = []
    monkeypatch.setattr(email_sender.requests, "post", lambda url, json, timeout: posted.append(json) or FakeResponse())

    resp = client.post(
        "/api/v1/emails/",
        json={"title": "Welcome", "subject": "Welcome {{name}}", "body": "See you at {{eventTitle}}"},
        headers=organizer_headers,
    )
    assert resp.status_code == 201, resp.text
    template = resp.json()

    resp = client.post(
        "/api/v1/emails/send",
        json={
            "template_id": template["id"],
            "recipients": [{"email": "ada@example.com", "name": "Ada", "eventTitle": "Symposium"}],
        },
        headers=organizer_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["sent"] == 1
    assert posted[0]["subject"] == "Welcome Ada"
    assert "See you at Symposium" in posted[0]["html"]


def test_blank_template_fields_are_rejected(client, organizer_headers):
    resp = client.post(
        "/api/v1/emails/",
        json={"title": "  ", "subject": "s", "body": "b"},
        headers=organizer_headers,
    )
    assert resp.status_code == 422
