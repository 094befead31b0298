from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.api import deps
from app.core.config import settings
from app.models.user import User
from app.services.storage import StorageError, upload_file
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

@router.post("/")
async def upload(
    file: UploadFile = File(...),
    current_user: User = Depends(deps.get_current_active_user),
) -> dict:
    """Store an uploaded file and return its hosted URL."""
    if not settings.storage_configured:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="File storage is not configured")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File too large (max 10 MB)")

    try:
        result = upload_file(content, file.filename or "upload")
    except StorageError as e:
        logger.error(f"Upload failed for {file.filename}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Upload failed: {str(e)}")

    return {"name": file.filename, "url": result["url"], "public_id": result["public_id"]}
