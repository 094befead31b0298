# File: app/services/submission_emails.py
"""Confirmation and copy-of-answers messages sent after a form is submitted."""
import logging
from html import escape
from typing import Any, Dict

from app.core.email_service import email_service
from app.services.form_schema import form_to_dict, iter_form_fields

logger = logging.getLogger(__name__)

GENERAL_ROWS = [
    ("name", "Name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("organization", "Organization"),
    ("address", "Address"),
]

H3 = '<h3 style="color: #4f46e5; border-bottom: 2px solid #4f46e5; padding-bottom: 8px; margin-top: 20px;">{}</h3>'
CELL = 'style="padding: 8px; border: 1px solid #ddd;"'


def _page(title: str, inner: str) -> str:
    return f"""
      <!DOCTYPE html>
      <html>
        <head><meta charset="utf-8"></head>
        <body style="margin: 0; padding: 20px; background-color: #f9fafb;">
          <div style="max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 8px;">
            <h2 style="color: #1f2937; margin-top: 0;">{title}</h2>
            {inner}
            <hr style="border: none; border-top: 1px solid #e5e7eb; margin: 30px 0;">
            <p style="color: #9ca3af; font-size: 12px; margin: 0;">This is an automated email. Please do not reply.</p>
          </div>
        </body>
      </html>
    """


def _render_value(field: Dict[str, Any], value: Any) -> str:
    if isinstance(value, list) and value and isinstance(value[0], dict):
        sub_fields = field.get("sub_fields") or []
        columns = [(sf.get("id"), sf.get("label") or sf.get("id")) for sf in sub_fields] or [
            (key, key) for key in value[0].keys()
        ]
        head = "".join(f"<th {CELL}>{escape(str(label))}</th>" for _, label in columns)
        rows = "".join(
            "<tr>" + "".join(
                f"<td {CELL}>{escape(str(row.get(key) or 'N/A'))}</td>" for key, _ in columns
            ) + "</tr>"
            for row in value if isinstance(row, dict)
        )
        return (
            '<table style="width: 100%; border-collapse: collapse; margin: 10px 0;">'
            f'<thead><tr style="background-color: #f3f4f6;">{head}</tr></thead><tbody>{rows}</tbody></table>'
        )
    if isinstance(value, list):
        items = "".join(
            f'<li style="margin: 4px 0;">{escape(str(item))}</li>'
            for item in value if item not in (None, "")
        )
        return f'<ul style="margin: 0; padding-left: 20px;">{items}</ul>'
    if value in (None, ""):
        return "N/A"
    return escape(str(value))


def format_answers_html(form: Any, submission: Any) -> str:
    general_info = submission.general_info or {}
    answers = submission.answers or {}

    html = '<div style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">'
    rows = [
        f'<tr><td style="padding: 8px; font-weight: bold; width: 150px;">{label}:</td>'
        f'<td style="padding: 8px;">{escape(str(general_info[key]))}</td></tr>'
        for key, label in GENERAL_ROWS if general_info.get(key)
    ]
    if rows:
        html += H3.format("General Information")
        html += '<table style="width: 100%; border-collapse: collapse; margin-bottom: 20px;">' + "".join(rows) + "</table>"

    answered = [field for field in iter_form_fields(form) if field.get("id") in answers]
    if answered:
        html += H3.format("Form Answers")
        html += '<table style="width: 100%; border-collapse: collapse; margin-bottom: 20px;">'
        for field in answered:
            html += (
                f'<tr><td style="padding: 8px; font-weight: bold; width: 200px; vertical-align: top;">'
                f'{escape(field.get("label") or field.get("id"))}:</td>'
                f'<td style="padding: 8px; vertical-align: top;">{_render_value(field, answers[field["id"]])}</td></tr>'
            )
        html += "</table>"
    return html + "</div>"


def send_copy_of_answers(form: Any, submission: Any) -> bool:
    email = (submission.general_info or {}).get("email")
    if not email:
        logger.warning("No email address provided, cannot send copy of answers")
        return False
    title = form_to_dict(form).get("title") or "Form"
    inner = (
        f'<p style="color: #6b7280;">This is a copy of your form submission for <strong>{escape(title)}</strong>.</p>'
        + format_answers_html(form, submission)
    )
    try:
        email_service.send_email([email], f"Copy of Your {title} Submission", _page("Thank You for Your Submission", inner))
        return True
    except Exception as e:
        logger.error(f"Error sending copy of answers to {email}: {str(e)}")
        return False


def send_confirmation_email(form: Any, submission: Any) -> bool:
    email = (submission.general_info or {}).get("email")
    if not email:
        logger.warning("No email address provided, cannot send confirmation email")
        return False
    title = form_to_dict(form).get("title") or "Form"
    inner = (
        f'<p style="color: #4b5563; font-size: 16px;">Thank you for submitting <strong>{escape(title)}</strong>!</p>'
        '<p style="color: #6b7280;">We have successfully received your submission and will review it shortly.</p>'
        f'<p style="color: #1e40af; font-size: 14px;"><strong>Submission ID:</strong> {submission.id}</p>'
    )
    try:
        email_service.send_email([email], f"Confirmation: {title} Submission Received", _page("Submission Confirmed", inner))
        return True
    except Exception as e:
        logger.error(f"Error sending confirmation email to {email}: {str(e)}")
        return False


def send_submission_emails(form: Any, submission: Any) -> Dict[str, bool]:
    actions = form_to_dict(form).get("actions") or {}
    sent = {"confirmation": False, "copy_of_answers": False}
    if actions.get("send_confirmation_email"):
        sent["confirmation"] = send_confirmation_email(form, submission)
    if actions.get("send_copy_of_answers"):
        sent["copy_of_answers"] = send_copy_of_answers(form, submission)
    return sent
