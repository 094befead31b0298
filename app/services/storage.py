# File: app/services/storage.py
"""Cloudinary object storage for uploads, email attachments and badge images."""
import logging
import uuid
from typing import Dict, Optional, Union
from io import BytesIO

import cloudinary
import cloudinary.uploader

from app.core.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


def _configure() -> None:
    if not settings.storage_configured:
        raise StorageError("Cloudinary not configured")
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def upload_bytes(
    data: Union[bytes, BytesIO],
    *,
    folder: str,
    public_id: Optional[str] = None,
    resource_type: str = "auto",
    overwrite: bool = False,
) -> Dict[str, str]:
    """Upload raw bytes and return {"url", "public_id"}."""
    _configure()
    if isinstance(data, bytes):
        data = BytesIO(data)
    data.seek(0)

    try:
        result = cloudinary.uploader.upload(
            data,
            public_id=public_id or uuid.uuid4().hex,
            folder=folder,
            resource_type=resource_type,
            use_filename=False,
            unique_filename=False,
            overwrite=overwrite,
            invalidate=overwrite,
        )
    except Exception as e:
        logger.error(f"Error uploading to Cloudinary folder {folder}: {str(e)}")
        raise StorageError(str(e)) from e

    return {"url": result["secure_url"], "public_id": result["public_id"]}


def upload_file(data: bytes, filename: str, *, folder: Optional[str] = None) -> Dict[str, str]:
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    public_id = f"{uuid.uuid4().hex[:12]}-{stem}"
    return upload_bytes(data, folder=folder or settings.UPLOADS_FOLDER, public_id=public_id)


def replace_image(data: bytes, *, public_id: str) -> Dict[str, str]:
    """Overwrite an existing image in place, keeping its URL."""
    _configure()
    try:
        result = cloudinary.uploader.upload(
            BytesIO(data),
            public_id=public_id,
            resource_type="image",
            overwrite=True,
            invalidate=True,
        )
    except Exception as e:
        logger.error(f"Error replacing Cloudinary object {public_id}: {str(e)}")
        raise StorageError(str(e)) from e
    return {"url": result["secure_url"], "public_id": result["public_id"]}
