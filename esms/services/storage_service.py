"""Attachment storage with upload compensation and deletion retry."""

import logging
import os
import re
import time
import uuid
from typing import BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile
from sqlalchemy import event, select
from sqlalchemy.orm import Session

from esms.core.config import settings
from esms.db.models import PendingFileDeletion
from esms.utils.file_upload import stream_size

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for storage errors."""


class UploadValidationError(StorageError):
    pass


class StorageBackendError(StorageError):
    pass


# =============================================================================
# Configuration
# =============================================================================

ALLOWED_EXTENSIONS = {"pdf", "png", "jpg", "jpeg", "doc", "docx", "xls", "xlsx"}
ALLOWED_MIME_TYPES = {
    "application/pdf",
    "image/png",
    "image/jpeg",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}
KEY_PREFIX = "documents"

_UPLOADED_KEYS = "esms.uploaded_storage_keys"
_DISCARDED_KEYS = "esms.discarded_storage_keys"
_SAFE_NAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


# =============================================================================
# Storage Backend
# =============================================================================

def _get_s3_client():
    """Get boto3 S3 client."""
    return boto3.client(
        "s3",
        region_name=settings.S3_REGION,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
        endpoint_url=settings.S3_ENDPOINT_URL or None,
    )


def _get_storage_backend() -> str:
    return settings.STORAGE_BACKEND


def _get_local_storage_path() -> str:
    path = settings.LOCAL_STORAGE_PATH
    os.makedirs(path, exist_ok=True)
    return path


def _s3_base_url() -> str:
    return f"https://{settings.S3_BUCKET}.s3.{settings.S3_REGION}.amazonaws.com/"


def _local_base_url() -> str:
    return settings.PUBLIC_FILE_BASE_URL.rstrip("/") + "/"


# =============================================================================
# Keys and URLs
# =============================================================================

def build_storage_key(filename: str) -> str:
    """documents/<epoch ms>-<random>-<sanitized name>"""
    name = _SAFE_NAME_RE.sub("-", os.path.basename(filename or "")).strip("-.") or "file"
    return f"{KEY_PREFIX}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{name}"


def build_file_url(storage_key: str) -> str:
    if _get_storage_backend() == "s3":
        return _s3_base_url() + storage_key
    return _local_base_url() + storage_key


def get_key_from_url(url: str | None) -> str | None:
    """Recover the storage key from a URL this service produced."""
    if not url:
        return None
    for base in (_s3_base_url(), _local_base_url()):
        if url.startswith(base) and len(url) > len(base):
            return url[len(base):]
    return None


def local_file_path(storage_key: str) -> str | None:
    """Absolute path of a locally stored key, or None if it escapes the root."""
    root = os.path.realpath(_get_local_storage_path())
    path = os.path.realpath(os.path.join(root, storage_key))
    if os.path.commonpath([root, path]) != root:
        return None
    return path


# =============================================================================
# File Operations
# =============================================================================

def validate_file(filename: str, content_type: str, file_size: int) -> tuple[bool, str | None]:
    """
    Validate file against allowlists and size limits.

    Returns (is_valid, error_message)
    """
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in ALLOWED_EXTENSIONS:
        return False, f"File extension '.{ext}' not allowed"

    if content_type not in ALLOWED_MIME_TYPES:
        return False, f"Content type '{content_type}' not allowed"

    if file_size > settings.max_upload_size_bytes:
        return False, f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB} MB limit"

    return True, None


def store_file(storage_key: str, file: BinaryIO, content_type: str | None = None) -> None:
    """Store file to configured backend."""
    if _get_storage_backend() == "s3":
        extra = {"ContentType": content_type} if content_type else None
        try:
            file.seek(0)
            _get_s3_client().upload_fileobj(
                file, settings.S3_BUCKET, storage_key, ExtraArgs=extra
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageBackendError(f"Failed to upload file: {exc}") from exc
        return

    path = local_file_path(storage_key)
    if path is None:
        raise UploadValidationError("Invalid storage key")
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        file.seek(0)
        f.write(file.read())


def delete_file(storage_key: str) -> None:
    """Delete file from storage. Missing files are not an error."""
    if _get_storage_backend() == "s3":
        _get_s3_client().delete_object(Bucket=settings.S3_BUCKET, Key=storage_key)
        return

    path = local_file_path(storage_key)
    if path and os.path.exists(path):
        os.remove(path)


def check_upload(upload: UploadFile) -> tuple[str, str, int]:
    """Validate an upload. Returns (filename, content_type, size)."""
    filename = upload.filename or ""
    content_type = upload.content_type or "application/octet-stream"
    size = stream_size(upload.file)

    is_valid, error = validate_file(filename, content_type, size)
    if not is_valid:
        raise UploadValidationError(error)
    return filename, content_type, size


def upload_file(upload: UploadFile) -> tuple[str, str]:
    """Validate and store an upload. Returns (storage_key, url)."""
    filename, content_type, size = check_upload(upload)

    storage_key = build_storage_key(filename)
    store_file(storage_key, upload.file, content_type)
    logger.info("Stored upload %s (%d bytes)", storage_key, size)
    return storage_key, build_file_url(storage_key)


def create_presigned_upload(file_name: str, content_type: str) -> dict[str, str]:
    """Presigned PUT for direct browser uploads (S3 backend only)."""
    if _get_storage_backend() != "s3":
        raise UploadValidationError("Presigned uploads require the s3 storage backend")

    storage_key = build_storage_key(file_name)
    try:
        url = _get_s3_client().generate_presigned_url(
            "put_object",
            Params={
                "Bucket": settings.S3_BUCKET,
                "Key": storage_key,
                "ContentType": content_type,
            },
            ExpiresIn=settings.PRESIGNED_URL_EXPIRY_SECONDS,
        )
    except (BotoCoreError, ClientError) as exc:
        raise StorageBackendError(f"Failed to create presigned URL: {exc}") from exc
    return {"url": url, "key": storage_key, "file_url": build_file_url(storage_key)}


# =============================================================================
# Transaction-bound operations
# =============================================================================

def store_upload(db: Session, upload: UploadFile) -> str:
    """
    Store an upload as part of the session's unit of work.

    If the session rolls back, the stored file is deleted again.
    """
    if not db.in_transaction():
        db.begin()
    storage_key, url = upload_file(upload)
    db.info.setdefault(_UPLOADED_KEYS, []).append(storage_key)
    return url


def schedule_discard(db: Session, url: str | None) -> None:
    """Mark a stored file for deletion once the session commits."""
    storage_key = get_key_from_url(url)
    if storage_key:
        db.info.setdefault(_DISCARDED_KEYS, []).append(storage_key)
    elif url:
        logger.info("Skipping delete of external file URL %s", url)


def process_discards(db: Session) -> int:
    """
    Delete files scheduled by committed work.

    Failures never propagate: each failed key is queued as a
    PendingFileDeletion and committed. Returns the number queued.
    """
    keys = db.info.pop(_DISCARDED_KEYS, [])
    queued = 0
    for storage_key in keys:
        try:
            delete_file(storage_key)
        except Exception as exc:
            logger.warning("Failed to delete stored file %s: %s", storage_key, exc)
            db.add(PendingFileDeletion(storage_key=storage_key, last_error=str(exc)[:2000]))
            queued += 1
    if queued:
        db.commit()
    return queued


def retry_pending_deletions(db: Session, limit: int = 100) -> tuple[int, int]:
    """Retry queued deletions. Returns (deleted, still_failing)."""
    pending = db.scalars(
        select(PendingFileDeletion).order_by(PendingFileDeletion.created_at).limit(limit)
    ).all()
    deleted = failed = 0
    for item in pending:
        try:
            delete_file(item.storage_key)
        except Exception as exc:
            item.attempts += 1
            item.last_error = str(exc)[:2000]
            failed += 1
            logger.warning(
                "Retry %d failed for stored file %s: %s", item.attempts, item.storage_key, exc
            )
            continue
        db.delete(item)
        deleted += 1
    db.commit()
    return deleted, failed


@event.listens_for(Session, "after_commit")
def _forget_uploads(session: Session) -> None:
    session.info.pop(_UPLOADED_KEYS, None)


@event.listens_for(Session, "after_soft_rollback")
def _compensate_uploads(session: Session, previous_transaction) -> None:
    session.info.pop(_DISCARDED_KEYS, None)
    for storage_key in session.info.pop(_UPLOADED_KEYS, []):
        try:
            delete_file(storage_key)
            logger.info("Removed upload %s after rollback", storage_key)
        except Exception as exc:
            logger.warning("Failed to remove upload %s after rollback: %s", storage_key, exc)
