"""Shared response envelopes."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Every error body has this shape."""

    error: str


class DeleteResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    status: str
    env: str
    version: str
