# File: app/api/v1/endpoints/send_email.py
"""SMTP relay consumed by the bulk sender: POST /api/send-email."""
import re
import smtplib
import socket
import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.email_service import email_service, EmailNotConfigured
from app.schemas.email import SendEmailRequest

logger = logging.getLogger(__name__)
router = APIRouter()

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})

@router.post("/send-email")
def send_email(request: SendEmailRequest):
    if not request.to or not request.subject or not request.html:
        return _error(400, "Missing required fields", "Please provide: to, subject, and html")
    if not EMAIL_RE.match(request.to):
        return _error(400, "Invalid email address", "Please provide a valid email address")

    try:
        message_id = email_service.send_email(
            [request.to],
            request.subject,
            request.html,
            attachments=[a.dict() for a in request.attachments],
        )
    except EmailNotConfigured:
        return _error(503, "Email service not configured", "SMTP credentials are missing or invalid.")
    except smtplib.SMTPAuthenticationError:
        logger.error("SMTP authentication failed")
        return _error(401, "SMTP Authentication failed", "Invalid SMTP credentials.")
    except (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected, socket.timeout, ConnectionError) as e:
        logger.error(f"SMTP connection failed: {str(e)}")
        return _error(503, "SMTP Connection failed", "Could not connect to SMTP server.")
    except Exception as e:
        logger.exception(f"Error sending email to {request.to}")
        return _error(500, "Failed to send email", str(e) or "An unexpected error occurred while sending the email")

    return {"success": True, "messageId": message_id, "to": request.to, "message": "Email sent successfully"}
