# File: app/services/form_schema.py
"""Walking and validating form definitions.

Forms are stored as JSON (sections -> subsections -> fields) so every helper
here works on plain dicts. ORM rows and pydantic models are converted first.
"""
import re
from datetime import date
from typing import Any, Dict, Iterator, List, Optional

GENERAL_INFO_FIELDS = {
    "general_name": ("name", "collect_name", "Full Name"),
    "general_email": ("email", "collect_email", "Email"),
    "general_phone": ("phone", "collect_phone", "Phone"),
    "general_organization": ("organization", "collect_organization", "Organization"),
    "general_address": ("address", "collect_address", "Address"),
}

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_RE = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


def _dump(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return value


def form_to_dict(form: Any) -> Dict[str, Any]:
    if isinstance(form, dict):
        return form
    if hasattr(form, "model_dump"):
        return form.model_dump()
    return {
        "id": getattr(form, "id", None),
        "title": getattr(form, "title", None),
        "fields": [_dump(f) for f in (getattr(form, "fields", None) or [])],
        "sections": [_dump(s) for s in (getattr(form, "sections", None) or [])],
        "general_info": _dump(getattr(form, "general_info", None)) or {},
        "actions": _dump(getattr(form, "actions", None)) or {},
    }


def _by_order(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(items or [], key=lambda item: item.get("order") or 0)


def iter_form_fields(form: Any) -> Iterator[Dict[str, Any]]:
    """Yield fields in display order: legacy fields, then sections."""
    data = form_to_dict(form)
    for field in data.get("fields") or []:
        yield field
    for section in _by_order(data.get("sections")):
        for field in section.get("fields") or []:
            yield field
        for subsection in _by_order(section.get("subsections")):
            for field in subsection.get("fields") or []:
                yield field


def get_field(form: Any, field_id: str) -> Optional[Dict[str, Any]]:
    for field in iter_form_fields(form):
        if field.get("id") == field_id:
            return field
    return None


def get_field_label(form: Any, field_id: str) -> str:
    data = form_to_dict(form)
    if field_id in GENERAL_INFO_FIELDS:
        _, toggle, label = GENERAL_INFO_FIELDS[field_id]
        if (data.get("general_info") or {}).get(toggle):
            return label
    field = get_field(data, field_id)
    if field and field.get("label"):
        return field["label"]
    return field_id


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return all(_is_empty(item) for item in value)
    if isinstance(value, dict):
        return all(_is_empty(item) for item in value.values())
    return False


def _check_scalar(field: Dict[str, Any], value: Any) -> Optional[str]:
    """Return an error message for a single non-empty value, or None."""
    field_type = field.get("type", "text")
    rules = field.get("validation") or {}
    options = field.get("options") or []

    if field_type == "number":
        if isinstance(value, bool):
            return "must be a number"
        try:
            number = float(value)
        except (TypeError, ValueError):
            return "must be a number"
        if rules.get("min") is not None and number < rules["min"]:
            return f"must be at least {rules['min']:g}"
        if rules.get("max") is not None and number > rules["max"]:
            return f"must be at most {rules['max']:g}"
        return None

    if field_type in ("select", "radio"):
        if options and str(value) not in options:
            return "is not one of the allowed options"
        return None

    if field_type == "checkbox":
        if isinstance(value, bool):
            return None
        if options and str(value) not in options:
            return "is not one of the allowed options"
        return None

    if not isinstance(value, str):
        if field_type == "file" and isinstance(value, dict) and value.get("url"):
            return None
        return "must be text"

    text = value.strip()
    if field_type == "email" and not EMAIL_RE.match(text):
        return "must be a valid email address"
    if field_type == "url" and not URL_RE.match(text):
        return "must be a valid URL"
    if field_type == "date":
        try:
            date.fromisoformat(text[:10])
        except ValueError:
            return "must be a date (YYYY-MM-DD)"

    if rules.get("min_length") is not None and len(text) < rules["min_length"]:
        return f"must be at least {rules['min_length']} characters"
    if rules.get("max_length") is not None and len(text) > rules["max_length"]:
        return f"must be at most {rules['max_length']} characters"
    if rules.get("pattern"):
        try:
            if not re.fullmatch(rules["pattern"], text):
                return "has an invalid format"
        except re.error:
            # broken pattern on the form itself
            return None
    return None


def _validate_field(field: Dict[str, Any], value: Any, path: str) -> List[Dict[str, str]]:
    errors: List[Dict[str, str]] = []
    label = field.get("label") or field.get("id")

    if _is_empty(value):
        if field.get("required"):
            errors.append({"field_id": path, "message": f"{label} is required"})
        return errors

    if field.get("has_sub_fields") and field.get("sub_fields"):
        rows = value if isinstance(value, list) else [value]
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                errors.append({"field_id": path, "message": f"{label} entry {index + 1} must be an object"})
                continue
            for sub_field in field["sub_fields"]:
                sub_id = sub_field.get("id")
                errors.extend(
                    _validate_field(sub_field, row.get(sub_id), f"{path}[{index}].{sub_id}")
                )
        return errors

    field_type = field.get("type", "text")
    if isinstance(value, list):
        if not field.get("multiple") and field_type != "checkbox":
            errors.append({"field_id": path, "message": f"{label} accepts a single value"})
            return errors
        values = [item for item in value if not _is_empty(item)]
    else:
        values = [value]

    for item in values:
        message = _check_scalar(field, item)
        if message:
            errors.append({"field_id": path, "message": f"{label} {message}"})
    return errors


def validate_answers(
    form: Any,
    general_info: Optional[Dict[str, Any]],
    answers: Optional[Dict[str, Any]],
) -> List[Dict[str, str]]:
    """Validate submitted answers against a form. Empty list means valid."""
    data = form_to_dict(form)
    general_info = general_info or {}
    answers = answers or {}
    toggles = data.get("general_info") or {}
    errors: List[Dict[str, str]] = []

    for field_id, (key, toggle, label) in GENERAL_INFO_FIELDS.items():
        if not toggles.get(toggle):
            continue
        value = general_info.get(key)
        if _is_empty(value):
            value = answers.get(field_id)
        if _is_empty(value):
            if toggle in ("collect_name", "collect_email"):
                errors.append({"field_id": field_id, "message": f"{label} is required"})
            continue
        if key == "email" and not EMAIL_RE.match(str(value).strip()):
            errors.append({"field_id": field_id, "message": "Email must be a valid email address"})

    for field in iter_form_fields(data):
        field_id = field.get("id")
        errors.extend(_validate_field(field, answers.get(field_id), field_id))

    return errors
