"""Direct file upload, presigned upload and local file download endpoints."""

import logging
import mimetypes
import os
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from esms.core.config import settings
from esms.core.deps import get_db
from esms.core.rate_limit import limiter
from esms.schemas.common import ErrorResponse
from esms.schemas.files import (
    FileUploadResponse,
    PresignedUploadRequest,
    PresignedUploadResponse,
)
from esms.services import storage_service
from esms.utils.file_upload import content_length_exceeds_limit

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["files"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.post("/upload", response_model=FileUploadResponse)
@limiter.limit("30/minute")
async def upload(
    request: Request,
    file: Annotated[UploadFile, File()],
    db: Session = Depends(get_db),
):
    """Store a single file and return its public URL."""
    if content_length_exceeds_limit(
        request.headers.get("content-length"),
        max_size_bytes=settings.max_upload_size_bytes,
    ):
        raise HTTPException(
            status_code=400,
            detail=f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB} MB limit",
        )

    try:
        file_url = storage_service.store_upload(db, file)
        db.commit()
    except storage_service.UploadValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except storage_service.StorageBackendError:
        logger.exception("Failed to store upload %s", file.filename)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to upload file")
    return FileUploadResponse(file_url=file_url)


@router.post("/presigned", response_model=PresignedUploadResponse)
def presigned(body: PresignedUploadRequest):
    """Presigned PUT URL for a direct browser upload (S3 backend only)."""
    is_valid, error = storage_service.validate_file(body.file_name, body.content_type, 0)
    if not is_valid:
        raise HTTPException(status_code=400, detail=error)
    try:
        return PresignedUploadResponse(
            **storage_service.create_presigned_upload(body.file_name, body.content_type)
        )
    except storage_service.UploadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except storage_service.StorageBackendError:
        logger.exception("Failed to create presigned URL for %s", body.file_name)
        raise HTTPException(status_code=500, detail="Failed to create presigned URL")


@router.get("/files/{key:path}")
def download(key: str):
    """Serve a locally stored file."""
    if settings.STORAGE_BACKEND != "local":
        raise HTTPException(status_code=404, detail="File not found")
    path = storage_service.local_file_path(key)
    if path is None or not os.path.isfile(path):
        raise HTTPException(status_code=404, detail="File not found")
    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    return FileResponse(path, media_type=media_type, filename=os.path.basename(path))
