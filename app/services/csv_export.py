# File: app/services/csv_export.py
import csv
import io
from datetime import datetime
from typing import Any, Iterable, List

from app.services.form_schema import iter_form_fields, GENERAL_INFO_FIELDS

FIXED_HEADERS = ["Submitted At", "Name", "Email"]


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def format_answer(value: Any) -> str:
    """Flatten an answer into a single CSV cell."""
    if value is None:
        return ""
    if isinstance(value, list):
        if value and isinstance(value[0], dict):
            entries = []
            for index, row in enumerate(item for item in value if isinstance(item, dict)):
                pairs = ", ".join(
                    f"{key}={val}" for key, val in row.items() if not _is_blank(val)
                )
                entries.append(f"Entry {index + 1}: {pairs}")
            return "; ".join(entries)
        return "; ".join(str(item) for item in value if not _is_blank(item))
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, dict):
        return ", ".join(f"{key}={val}" for key, val in value.items() if not _is_blank(val))
    return str(value)


def _format_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    return "" if value is None else str(value)


def _general_value(submission: Any, key: str) -> Any:
    general_info = getattr(submission, "general_info", None) or {}
    value = general_info.get(key)
    if _is_blank(value):
        value = (getattr(submission, "answers", None) or {}).get(f"general_{key}")
    return value


def export_submissions_csv(form: Any, submissions: Iterable[Any]) -> str:
    fields = [
        field for field in iter_form_fields(form)
        if field.get("id") not in GENERAL_INFO_FIELDS
    ]
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(FIXED_HEADERS + [field.get("label") or field.get("id") for field in fields])

    for submission in submissions:
        answers = getattr(submission, "answers", None) or {}
        row: List[str] = [
            _format_date(getattr(submission, "created_at", None)),
            format_answer(_general_value(submission, "name")),
            format_answer(_general_value(submission, "email")),
        ]
        row.extend(format_answer(answers.get(field.get("id"))) for field in fields)
        writer.writerow(row)

    return output.getvalue()
