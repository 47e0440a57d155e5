"""Common schemas used across the API."""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: ErrorCode
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail


def error_body(code: ErrorCode, message: str, detail: dict[str, Any] | None = None) -> dict[str, Any]:
    """JSON-ready error body for JSONResponse content."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump(mode="json")
