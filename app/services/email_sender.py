# File: app/services/email_sender.py
"""Templated bulk email: placeholder substitution and the per-recipient send loop."""
import base64
import logging
import re
from html import escape
from typing import Any, Dict, List, Optional

import requests

from app.core.config import settings
from app.services import storage

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")

APPROVAL_WORDING = {
    "accepted": "approved",
    "reserved": "approved with reserve",
    "rejected": "rejected",
}


class AttachmentUploadError(Exception):
    pass


def _recipient_dict(recipient: Any) -> Dict[str, Any]:
    if hasattr(recipient, "model_dump"):
        return recipient.model_dump(by_alias=True, exclude_none=True)
    return {k: v for k, v in dict(recipient).items() if v is not None}


def placeholder_values(recipient: Any) -> Dict[str, str]:
    data = _recipient_dict(recipient)
    email = str(data.get("email") or "")
    name = data.get("name") or data.get("fullName") or email.split("@")[0]
    status_key = str(data.get("approvalStatus") or data.get("approval_status") or "").lower()
    status = APPROVAL_WORDING.get(status_key, status_key)
    event_title = data.get("eventTitle") or data.get("event_title") or ""

    values = {str(key): "" if value is None else str(value) for key, value in data.items()}
    values.update({
        "name": name,
        "fullName": name,
        "email": email,
        "approvalStatus": status,
        "status": status,
        "eventTitle": event_title,
        "event": event_title,
        "comment": str(data.get("comment") or ""),
    })
    return values


def replace_placeholders(text: str, recipient: Any) -> str:
    """Substitute {{key}} tokens. Unknown tokens are left untouched."""
    values = placeholder_values(recipient)

    def _sub(match: "re.Match") -> str:
        key = match.group(1)
        return values[key] if key in values else match.group(0)

    return PLACEHOLDER_RE.sub(_sub, text or "")


def wrap_html(body: str) -> str:
    content = body if "<" in body and ">" in body else escape(body).replace("\n", "<br>")
    return f"""
        <!DOCTYPE html>
        <html>
          <head><meta charset="utf-8"></head>
          <body style="margin: 0; padding: 20px; background-color: #f9fafb;">
            <div style="max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 8px;">
              <div style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
                {content}
              </div>
              <hr style="border: none; border-top: 1px solid #e5e7eb; margin: 30px 0;">
              <p style="color: #9ca3af; font-size: 12px; margin: 0;">This is an automated email. Please do not reply.</p>
            </div>
          </body>
        </html>
    """


def upload_attachments(attachments: List[Any]) -> List[Dict[str, str]]:
    """Upload inline (data: URL) attachments; already hosted ones pass through."""
    uploaded = []
    for attachment in attachments or []:
        if hasattr(attachment, "model_dump"):
            attachment = attachment.model_dump()
        name, url = attachment.get("name") or "attachment", attachment.get("url") or ""
        if not url.startswith("data:"):
            uploaded.append({"name": name, "url": url})
            continue
        try:
            _, encoded = url.split(",", 1)
            result = storage.upload_file(
                base64.b64decode(encoded), name, folder=settings.EMAIL_ATTACHMENTS_FOLDER
            )
        except Exception as e:
            logger.error(f"Attachment upload failed for {name}: {str(e)}")
            raise AttachmentUploadError(f"Failed to upload attachment {name}: {str(e)}") from e
        uploaded.append({"name": name, "url": result["url"]})
    return uploaded


def _post_email(payload: Dict[str, Any]) -> Dict[str, Any]:
    response = requests.post(
        f"{settings.EMAIL_API_URL.rstrip('/')}/api/send-email",
        json=payload,
        timeout=settings.EMAIL_TIMEOUT,
    )
    try:
        data = response.json()
    except ValueError:
        data = {}

    if not response.ok:
        raise RuntimeError(data.get("message") or data.get("error") or f"HTTP {response.status_code}: Failed to send email")
    if data.get("error"):
        raise RuntimeError(data.get("message") or data.get("error"))
    if data.get("success") is not True:
        raise RuntimeError(data.get("message") or "Failed to send email")
    return data


def send_bulk(
    subject: str,
    body: str,
    recipients: List[Any],
    attachments: Optional[List[Any]] = None,
) -> Dict[str, Any]:
    """Send one message per recipient, in order, and tally the outcome."""
    hosted = upload_attachments(attachments or [])

    results = []
    for recipient in recipients:
        values = placeholder_values(recipient)
        payload = {
            "to": values["email"],
            "subject": replace_placeholders(subject, recipient),
            "html": wrap_html(replace_placeholders(body, recipient)),
            "recipientName": values["name"],
            "attachments": hosted,
        }
        try:
            _post_email(payload)
            results.append({"email": values["email"], "name": values["name"], "status": "sent", "error": None})
        except requests.RequestException as e:
            logger.error(f"Email API unreachable for {values['email']}: {str(e)}")
            results.append({"email": values["email"], "name": values["name"], "status": "failed",
                            "error": f"Email API unreachable: {str(e)}"})
        except RuntimeError as e:
            logger.error(f"Failed to send email to {values['email']}: {str(e)}")
            results.append({"email": values["email"], "name": values["name"], "status": "failed", "error": str(e)})

    sent = sum(1 for r in results if r["status"] == "sent")
    logger.info(f"Bulk email finished: {sent}/{len(results)} sent")
    return {"sent": sent, "failed": len(results) - sent, "total": len(results), "results": results}
