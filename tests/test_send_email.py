import smtplib

import pytest

from app.api.v1.endpoints import send_email as send_email_endpoint
from app.core.email_service import EmailNotConfigured, html_to_text

PAYLOAD = {"to": "ada@example.com", "subject": "Hello", "html": "<p>Hi Ada</p>", "recipientName": "Ada"}


@pytest.fixture
def smtp(monkeypatch):
    calls = []

    def fake_send(to_emails, subject, html_content, text_content=None, attachments=None):
        calls.append((to_emails, subject, attachments))
        return "<abc@example.com>"

    monkeypatch.setattr(send_email_endpoint.email_service, "send_email", fake_send)
    return calls


def _raise(exc):
    def _send(*args, **kwargs):
        raise exc
    return _send


def test_send_email_success(client, smtp):
    resp = client.post("/api/send-email", json=PAYLOAD)
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "messageId": "<abc@example.com>",
        "to": "ada@example.com",
        "message": "Email sent successfully",
    }
    assert smtp == [(["ada@example.com"], "Hello", [])]


@pytest.mark.parametrize("payload", [
    {"subject": "Hello", "html": "<p>x</p>"},
    {**PAYLOAD, "html": ""},
    {**PAYLOAD, "to": "not-an-address"},
])
def test_send_email_rejects_bad_requests(client, smtp, payload):
    resp = client.post("/api/send-email", json=payload)
    assert resp.status_code == 400
    assert smtp == []


@pytest.mark.parametrize("exc,status_code", [
    (EmailNotConfigured("missing"), 503),
    (smtplib.SMTPAuthenticationError(535, b"bad credentials"), 401),
    (smtplib.SMTPConnectError(421, "unavailable"), 503),
    (RuntimeError("boom"), 500),
])
def test_send_email_error_mapping(client, monkeypatch, exc, status_code):
    monkeypatch.setattr(send_email_endpoint.email_service, "send_email", _raise(exc))
    resp = client.post("/api/send-email", json=PAYLOAD)
    assert resp.status_code == status_code
    assert "error" in resp.json()


def test_html_to_text():
    assert html_to_text("<p>Hello</p>\n\n<p>World</p>") == "Hello\nWorld"
