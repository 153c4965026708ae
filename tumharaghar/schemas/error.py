"""
Error response schemas for API documentation and consistent error formatting.
Every API failure is rendered as {"error": {...}} with one of these shapes.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["title"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Title must be at least 5 characters"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["string_too_short"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(
        ...,
        description="Error code identifier",
        examples=["VALIDATION_ERROR"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Title must be at least 5 characters"]
    )

    timestamp: str = Field(
        ...,
        description="Error timestamp in ISO format",
        examples=["2024-01-01T00:00:00Z"]
    )

    request_id: Optional[str] = Field(
        None,
        description="Unique request identifier for tracking",
        examples=["abc12345"]
    )

    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(
        ...,
        description="Error information"
    )


def _example(description: str, code: str, message: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": code,
                        "message": message,
                        "timestamp": "2024-01-01T00:00:00Z",
                        "request_id": "abc12345"
                    }
                }
            }
        }
    }


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    401: _example(
        "Unauthorized - Authentication required",
        "UNAUTHORIZED",
        "Invalid email or password. Please try again."
    ),
    403: _example(
        "Forbidden - The session's role may not perform this action",
        "FORBIDDEN",
        "Insufficient permissions to manage listings"
    ),
    404: _example(
        "Not Found - The listing or profile does not exist",
        "NOT_FOUND",
        "Property not found"
    ),
    409: _example(
        "Conflict - The resource already exists",
        "CONFLICT",
        "This email is already registered. Please try logging in instead."
    ),
    422: _example(
        "Validation Error - A field broke its rule; nothing was written",
        "VALIDATION_ERROR",
        "Price must be greater than 0"
    ),
    500: _example(
        "Internal Server Error",
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again."
    ),
    502: _example(
        "Bad Gateway - The database rejected or failed the call",
        "GATEWAY_ERROR",
        "The backend service could not complete the request"
    ),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for seller write operations."""
    return get_error_responses(401, 403, 404, 422, 500, 502)
