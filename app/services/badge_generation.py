# File: app/services/badge_generation.py
"""Participant badge rendering and storage."""
import base64
import logging
import uuid
from io import BytesIO
from typing import Any, Dict, Optional

import qrcode
import requests
from PIL import Image, ImageColor, ImageDraw, ImageFont
from sqlalchemy.orm import Session

from app import crud
from app.core.config import settings
from app.models.badge_template import BadgeTemplate
from app.models.form_submission import FormSubmission
from app.models.participant_badge import ParticipantBadge
from app.services import storage

logger = logging.getLogger(__name__)

GENERAL_KEYS = {
    "name": "name", "general_name": "name",
    "email": "email", "general_email": "email",
    "phone": "phone", "general_phone": "phone",
    "organization": "organization", "general_organization": "organization",
}

PLACEHOLDER_FILL = "#f3f4f6"
PLACEHOLDER_BORDER = "#9ca3af"
BACKGROUND_TIMEOUT = 5


class BadgeGenerationError(Exception):
    pass


def get_field_value(submission: Any, field_name: str) -> str:
    general_info = getattr(submission, "general_info", None) or {}
    answers = getattr(submission, "answers", None) or {}

    if field_name in GENERAL_KEYS:
        key = GENERAL_KEYS[field_name]
        value = general_info.get(key) or answers.get(f"general_{key}")
        return str(value) if value else ""

    value = answers.get(field_name)
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _load_font(size: int, weight: str = "normal"):
    name = "DejaVuSans-Bold.ttf" if weight in ("bold", "semibold") else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default(size=size)


def _parse_color(value: Optional[str]):
    try:
        return ImageColor.getrgb(value or "#000000")
    except ValueError:
        return (0, 0, 0)


def _load_background(source: str) -> Optional[Image.Image]:
    try:
        if source.startswith("data:"):
            _, encoded = source.split(",", 1)
            raw = base64.b64decode(encoded)
        else:
            response = requests.get(source, timeout=BACKGROUND_TIMEOUT)
            response.raise_for_status()
            raw = response.content
        return Image.open(BytesIO(raw)).convert("RGB")
    except Exception as e:
        logger.warning(f"Background image failed to load, continuing without it: {str(e)}")
        return None


def _cover(image: Image.Image, width: int, height: int) -> Image.Image:
    scale = max(width / image.width, height / image.height)
    resized = image.resize((max(1, round(image.width * scale)), max(1, round(image.height * scale))))
    left = (resized.width - width) // 2
    top = (resized.height - height) // 2
    return resized.crop((left, top, left + width, top + height))


def make_qr_image(data: str, size: int) -> Image.Image:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=1,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white").get_image()
    return img.convert("RGB").resize((size, size), Image.NEAREST)


def _draw_qr_placeholder(canvas: Image.Image, draw: ImageDraw.ImageDraw, cx: float, cy: float, size: int) -> None:
    left, top = round(cx - size / 2), round(cy - size / 2)
    right, bottom = left + size, top + size
    draw.rectangle([left, top, right, bottom], fill=PLACEHOLDER_FILL)

    dash = 6
    for x in range(left, right, dash * 2):
        draw.line([(x, top), (min(x + dash, right), top)], fill=PLACEHOLDER_BORDER, width=2)
        draw.line([(x, bottom), (min(x + dash, right), bottom)], fill=PLACEHOLDER_BORDER, width=2)
    for y in range(top, bottom, dash * 2):
        draw.line([(left, y), (left, min(y + dash, bottom))], fill=PLACEHOLDER_BORDER, width=2)
        draw.line([(right, y), (right, min(y + dash, bottom))], fill=PLACEHOLDER_BORDER, width=2)

    font = _load_font(max(10, size // 4), "bold")
    draw.text((cx, cy), "QR", fill=PLACEHOLDER_BORDER, font=font, anchor="mm")


def render_badge_image(template: Any, submission: Any, badge_url: Optional[str] = None) -> bytes:
    """Render a badge template for one submission as PNG bytes."""
    width = int(getattr(template, "width", None) or 600)
    height = int(getattr(template, "height", None) or 900)
    canvas = Image.new("RGB", (width, height), "#ffffff")

    background = getattr(template, "background_image", None)
    if background:
        image = _load_background(background)
        if image is not None:
            canvas.paste(_cover(image, width, height), (0, 0))

    draw = ImageDraw.Draw(canvas)
    for element in getattr(template, "elements", None) or []:
        if hasattr(element, "model_dump"):
            element = element.model_dump()
        cx = width * float(element.get("x", 50)) / 100
        cy = height * float(element.get("y", 50)) / 100
        size = int(element.get("font_size") or 24)

        if element.get("type") == "qr":
            if badge_url:
                qr_img = make_qr_image(badge_url, size)
                canvas.paste(qr_img, (round(cx - size / 2), round(cy - size / 2)))
            else:
                _draw_qr_placeholder(canvas, draw, cx, cy, size)
            continue

        content = element.get("content") or ""
        if element.get("type") == "field":
            content = get_field_value(submission, content)
        if not content:
            continue

        font = _load_font(size, element.get("font_weight") or "normal")
        draw.text(
            (cx, cy),
            content,
            fill=_parse_color(element.get("color")),
            font=font,
            anchor="mm",
            align=element.get("text_align") or "center",
        )

    buffer = BytesIO()
    canvas.save(buffer, format="PNG")
    return buffer.getvalue()


def _has_qr(template: BadgeTemplate) -> bool:
    return any((element or {}).get("type") == "qr" for element in (template.elements or []))


def participant_identity(submission: FormSubmission) -> Dict[str, Optional[str]]:
    general_info = submission.general_info or {}
    answers = submission.answers or {}
    name = (
        general_info.get("name")
        or answers.get("general_name")
        or submission.submitted_by
        or "Participant"
    )
    return {
        "participant_name": str(name),
        "participant_email": general_info.get("email") or answers.get("general_email"),
        "participant_phone": general_info.get("phone") or answers.get("general_phone"),
        "participant_organization": general_info.get("organization") or answers.get("general_organization"),
    }


def generate_and_save_badge(
    db: Session,
    *,
    user_id: int,
    submission: FormSubmission,
    badge_template_id: int,
) -> ParticipantBadge:
    """Render, upload and upsert the badge for a submission."""
    template = crud.badge_template.get(db, id=badge_template_id)
    if template is None:
        raise BadgeGenerationError("Badge template not found")

    public_id = f"badge-{submission.id}-{uuid.uuid4().hex[:8]}"
    if _has_qr(template):
        draft = render_badge_image(template, submission)
        uploaded = storage.upload_bytes(
            draft, folder=settings.BADGES_FOLDER, public_id=public_id, resource_type="image"
        )
        final = render_badge_image(template, submission, badge_url=uploaded["url"])
        try:
            storage.replace_image(final, public_id=uploaded["public_id"])
        except storage.StorageError as e:
            logger.error(f"Error updating badge with QR code, keeping first upload: {str(e)}")
    else:
        image = render_badge_image(template, submission)
        uploaded = storage.upload_bytes(
            image, folder=settings.BADGES_FOLDER, public_id=public_id, resource_type="image"
        )

    badge = crud.participant_badge.upsert(
        db,
        form_submission_id=submission.id,
        user_id=user_id,
        event_id=submission.accepted_event_id or submission.event_id,
        badge_template_id=template.id,
        badge_image_url=uploaded["url"],
        badge_public_id=uploaded["public_id"],
        registration_type="internal" if submission.participant_user_id else "external",
        **participant_identity(submission),
    )
    logger.info(f"Badge {badge.id} generated for submission {submission.id}")
    return badge
