"""
Standardized API Response Module

Provides consistent error formatting across the booking intake endpoints.

RESPONSE FORMAT:
    Successful responses return the resource directly (lookup result,
    booking confirmation). Errors follow this structure:

        {
            "error": {
                "code": "ERROR_CODE",
                "message": "Human-readable message",
                "details": {...}  # Optional extra context
            },
            "status": "error"
        }

ERROR CODES:
    - INVALID_INPUT: A path or query value is malformed
    - VALIDATION_ERROR: Request body failed validation
    - INTERNAL_ERROR: Server-side error
"""

from typing import Any, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error information."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class ErrorCodes:
    """Standard error codes for API responses."""

    # Bad request (400)
    INVALID_INPUT = "INVALID_INPUT"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


def error_response(
    code: str,
    message: str,
    details: Optional[dict] = None,
) -> dict:
    """
    Create a standardized error response dict.
    """
    detail = ErrorDetail(code=code, message=message, details=details or None)
    return {"error": detail.model_dump(exclude_none=True), "status": "error"}


def error_json(
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict] = None,
) -> JSONResponse:
    """Wrap error_response in a JSONResponse with the given status code."""
    return JSONResponse(status_code=status_code, content=error_response(code, message, details))


def validation_error_json(violations: list[dict[str, str]]) -> JSONResponse:
    """422 response listing every field violation at once."""
    return error_json(
        422,
        ErrorCodes.VALIDATION_ERROR,
        "Booking failed validation",
        {"violations": violations},
    )


def internal_error_json() -> JSONResponse:
    return error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCodes.INTERNAL_ERROR,
        "Internal server error",
    )
