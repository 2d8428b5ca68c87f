"""Generic REST endpoints, one router per registered resource."""

import json
import logging
from contextlib import contextmanager
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from esms.core.config import settings
from esms.core.deps import get_db
from esms.core.resources import ResourceDefinition
from esms.core.structured_logging import build_log_context
from esms.schemas.common import DeleteResponse, ErrorResponse
from esms.services import resource_service, storage_service
from esms.services.resource_errors import (
    ResourceConflictError,
    ResourceNotFoundError,
    ResourceValidationError,
)
from esms.services.resource_mapping import to_external
from esms.utils.file_upload import content_length_exceeds_limit

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# =============================================================================
# Helpers
# =============================================================================


def _commit(db: Session) -> None:
    """Commit, then delete attachments the committed work released."""
    db.commit()
    storage_service.process_discards(db)


@contextmanager
def _service_errors(
    db: Session,
    request: Request,
    definition: ResourceDefinition,
    action: str,
    record_id: str | None = None,
):
    """Translate service exceptions to HTTP errors, rolling back on any failure."""
    try:
        yield
    except HTTPException:
        db.rollback()
        raise
    except ResourceValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except ResourceNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ResourceConflictError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(
            "Failed to %s %s",
            action,
            definition.label,
            extra=build_log_context(
                request_id=getattr(request.state, "request_id", None),
                route=request.url.path,
                method=request.method,
                resource=definition.name,
                action=action,
                record_id=record_id,
            ),
        )
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to {action} {definition.label}")


def _decode_form_value(value: str) -> Any:
    stripped = value.strip()
    if stripped[:1] in ("{", "["):
        try:
            return json.loads(stripped)
        except ValueError:
            return value
    return value


async def _read_payload(
    request: Request, definition: ResourceDefinition
) -> tuple[dict[str, Any], dict[str, UploadFile]]:
    """
    Read a JSON object or a multipart form.

    Form file parts become uploads. Repeated keys collect into a list and
    relationship fields may carry JSON, so multipart can express every
    payload JSON can.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        limit = settings.max_upload_size_bytes * max(1, len(definition.file_fields))
        if content_length_exceeds_limit(
            request.headers.get("content-length"), max_size_bytes=limit
        ):
            raise HTTPException(
                status_code=400,
                detail=f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB} MB limit",
            )
        form = await request.form()
        relation_names = {relation.name for relation in definition.relations}
        payload: dict[str, Any] = {}
        uploads: dict[str, UploadFile] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename:
                    uploads[key] = value
                continue
            if key in relation_names:
                value = _decode_form_value(value)
            if key in payload:
                existing = payload[key]
                payload[key] = (existing if isinstance(existing, list) else [existing]) + (
                    value if isinstance(value, list) else [value]
                )
            else:
                payload[key] = value
        return payload, uploads

    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid request body")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Invalid request body")
    return data, {}


# =============================================================================
# Router factory
# =============================================================================


def build_resource_router(definition: ResourceDefinition) -> APIRouter:
    """List/Create on the collection, Get/Update/Delete on the item."""
    router = APIRouter(responses=ERROR_RESPONSES)
    label = definition.label

    @router.get("", summary=f"List {definition.plural_label}")
    async def list_records(request: Request, db: Session = Depends(get_db)):
        with _service_errors(db, request, definition, "fetch"):
            records = resource_service.list_records(db, definition, request.query_params)
            return [to_external(definition, record) for record in records]

    @router.get("/{record_id}", summary=f"Get {label}")
    async def get_record(record_id: str, request: Request, db: Session = Depends(get_db)):
        with _service_errors(db, request, definition, "fetch", record_id):
            record = resource_service.get_record(db, definition, record_id)
            return to_external(definition, record)

    @router.post("", status_code=201, summary=f"Create {label}")
    async def create_record(request: Request, db: Session = Depends(get_db)):
        payload, uploads = await _read_payload(request, definition)
        with _service_errors(db, request, definition, "create"):
            record = resource_service.create_record(db, definition, payload, uploads)
            record_id = record.id
            _commit(db)
            record = resource_service.get_record(db, definition, record_id)
            return to_external(definition, record)

    @router.put("/{record_id}", summary=f"Update {label}")
    async def update_record(record_id: str, request: Request, db: Session = Depends(get_db)):
        payload, uploads = await _read_payload(request, definition)
        with _service_errors(db, request, definition, "update", record_id):
            resource_service.update_record(db, definition, record_id, payload, uploads)
            _commit(db)
            record = resource_service.get_record(db, definition, record_id)
            return to_external(definition, record)

    @router.delete("/{record_id}", response_model=DeleteResponse, summary=f"Delete {label}")
    async def delete_record(record_id: str, request: Request, db: Session = Depends(get_db)):
        with _service_errors(db, request, definition, "delete", record_id):
            resource_service.delete_record(db, definition, record_id)
            _commit(db)
            return DeleteResponse()

    return router
