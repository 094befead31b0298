from app.api.v1.endpoints import uploads
from app.core.config import settings


def test_upload_requires_configured_storage(client, organizer_headers, monkeypatch):
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", None)
    resp = client.post(
        "/api/v1/uploads/",
        files={"file": ("cv.pdf", b"%PDF-1.4", "application/pdf")},
        headers=organizer_headers,
    )
    assert resp.status_code == 503


def test_upload_returns_hosted_url(client, organizer_headers, monkeypatch):
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setattr(settings, "CLOUDINARY_API_KEY", "key")
    monkeypatch.setattr(settings, "CLOUDINARY_API_SECRET", "secret")
    monkeypatch.setattr(
        uploads, "upload_file",
        lambda data, filename, folder=None: {"url": f"https://cdn.example.com/{filename}", "public_id": filename},
    )
    resp = client.post(
        "/api/v1/uploads/",
        files={"file": ("cv.pdf", b"%PDF-1.4", "application/pdf")},
        headers=organizer_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"name": "cv.pdf", "url": "https://cdn.example.com/cv.pdf", "public_id": "cv.pdf"}
