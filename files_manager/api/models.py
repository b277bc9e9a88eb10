from __future__ import annotations

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Machine-readable error code plus a human message."""
    error_code: str
    error_message: str


class ErrorResponse(BaseModel):
    """Body returned for errors raised before a handler runs."""
    detail: ErrorDetail
