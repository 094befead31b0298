import logging
import re
import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.mime.base import MIMEBase
from email import encoders
from email.utils import formataddr, make_msgid
from typing import Dict, List, Optional

import requests

from app.core.config import settings

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r"<[^>]*>")
BLANK_LINES_RE = re.compile(r"\n\s*\n")


class EmailNotConfigured(Exception):
    pass


def html_to_text(html: str) -> str:
    return BLANK_LINES_RE.sub("\n", TAG_RE.sub("", html)).strip()


class EmailService:
    def __init__(self):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.use_ssl = settings.SMTP_USE_SSL
        self.from_email = settings.FROM_EMAIL or settings.SMTP_USERNAME
        self.from_name = settings.FROM_NAME
        self.timeout = settings.EMAIL_TIMEOUT

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)

    def _attach_remote_files(self, message: MIMEMultipart, attachments: List[Dict[str, str]]) -> None:
        for attachment in attachments:
            response = requests.get(attachment["url"], timeout=self.timeout)
            response.raise_for_status()
            part = MIMEBase("application", "octet-stream")
            part.set_payload(response.content)
            encoders.encode_base64(part)
            part.add_header(
                "Content-Disposition",
                f'attachment; filename="{attachment.get("name") or "attachment"}"'
            )
            message.attach(part)

    def send_email(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
        attachments: Optional[List[Dict[str, str]]] = None
    ) -> str:
        """Send one message over SMTP and return its Message-ID."""
        domain = self.from_email.split("@")[-1] if "@" in (self.from_email or "") else None
        message_id = make_msgid(domain=domain)

        if not settings.SEND_EMAILS:
            logger.info(f"Email sending disabled. Would send: {subject} to {to_emails}")
            return message_id

        if not self.configured:
            raise EmailNotConfigured("SMTP credentials are missing")

        message = MIMEMultipart("mixed")
        message["Subject"] = subject
        message["From"] = formataddr((self.from_name, self.from_email))
        message["To"] = ", ".join(to_emails)
        message["Message-ID"] = message_id

        body = MIMEMultipart("alternative")
        body.attach(MIMEText(text_content or html_to_text(html_content), "plain"))
        body.attach(MIMEText(html_content, "html"))
        message.attach(body)

        if attachments:
            self._attach_remote_files(message, attachments)

        context = ssl.create_default_context()
        if self.use_ssl:
            with smtplib.SMTP_SSL(self.smtp_server, self.smtp_port, context=context, timeout=self.timeout) as server:
                server.login(self.username, self.password)
                server.sendmail(self.from_email, to_emails, message.as_string())
        else:
            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=self.timeout) as server:
                server.starttls(context=context)
                server.login(self.username, self.password)
                server.sendmail(self.from_email, to_emails, message.as_string())

        logger.info(f"Email sent successfully to {to_emails}")
        return message_id

# Global email service instance
email_service = EmailService()
