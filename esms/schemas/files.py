"""Pydantic schemas for direct file uploads."""

from pydantic import BaseModel, Field


class FileUploadResponse(BaseModel):
    file_url: str


class PresignedUploadRequest(BaseModel):
    """Request a presigned PUT URL for a browser upload."""

    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., min_length=1, max_length=255)


class PresignedUploadResponse(BaseModel):
    url: str
    key: str
    file_url: str
