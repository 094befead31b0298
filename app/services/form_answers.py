"""Per-field answer rows derived from a submission's answers map."""
import json
import re
from typing import Any, Dict, Iterable, List, Optional

from app.services.form_schema import get_field_label

ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def get_answer_type(value: Any) -> str:
    if value is None:
        return "text"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, str):
        if ISO_DATE_PREFIX.match(value):
            return "date"
        if value.startswith("http://") or value.startswith("https://"):
            return "file"
    return "text"


def serialize_answer_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value)
    return str(value)


def deserialize_answer_value(answer_value: Optional[str], answer_type: str) -> Any:
    if answer_type in ("array", "object"):
        try:
            return json.loads(answer_value or "null")
        except ValueError:
            return answer_value
    if answer_type == "number":
        try:
            number = float(answer_value)
        except (TypeError, ValueError):
            return None
        return int(number) if number.is_integer() else number
    if answer_type == "boolean":
        return answer_value == "true"
    return answer_value


def build_answer_rows(
    form: Any,
    answers: Dict[str, Any],
    participant_user_id: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """One row per answered field, ready to become FormAnswer objects."""
    registration_type = "internal" if participant_user_id else "external"
    return [
        {
            "field_id": field_id,
            "field_label": get_field_label(form, field_id),
            "answer_value": serialize_answer_value(value),
            "answer_type": get_answer_type(value),
            "is_general_info": field_id.startswith("general_"),
            "registration_type": registration_type,
        }
        for field_id, value in (answers or {}).items()
    ]


def answer_rows_to_dict(rows: Iterable[Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for row in rows:
        result[row.field_id] = deserialize_answer_value(row.answer_value, row.answer_type)
    return result
