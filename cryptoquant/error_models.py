"""
Standard error response models.
Every error surfaced by the analytics service is reported through these models.
"""
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple
from pydantic import BaseModel, Field
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes."""
    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    
    # Data
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    NO_DATA = "NO_DATA"
    NOT_FOUND = "NOT_FOUND"
    
    # Upstream / server
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    
    # Rate Limiting
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.INSUFFICIENT_DATA: 422,
    ErrorCode.NO_DATA: 404,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UPSTREAM_ERROR: 502,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
    ErrorCode.TIMEOUT: 504,
    ErrorCode.RATE_LIMIT_EXCEEDED: 429,
}


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """
    error: bool = Field(default=True, description="Always true for error responses")
    error_code: ErrorCode = Field(..., description="Standard error code")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    field: Optional[str] = Field(None, description="Field name if validation error")
    timestamp: Optional[str] = Field(None, description="Error timestamp (ISO format)")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Additional error metadata")

    class Config:
        json_schema_extra = {
            "example": {
                "error": True,
                "error_code": "INSUFFICIENT_DATA",
                "message": "RSI(14) requires at least 15 data points, got 5",
                "detail": None,
                "field": None,
                "timestamp": "2024-01-01T00:00:00Z",
                "metadata": {"metric": "RSI(14)", "required": 15, "actual": 5}
            }
        }


def create_error_response(
    error_code: ErrorCode,
    message: str,
    detail: Optional[str] = None,
    field: Optional[str] = None,
    status_code: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> Tuple[ErrorResponse, int]:
    """
    Helper function to create standardized error responses.
    
    Args:
        error_code: Standard error code
        message: Human-readable error message
        detail: Additional error details
        field: Field name if validation error
        status_code: HTTP-style status code (derived from error_code if omitted)
        metadata: Additional error metadata
    
    Returns:
        Tuple of (ErrorResponse, status_code)
    """
    error_response = ErrorResponse(
        error=True,
        error_code=error_code,
        message=message,
        detail=detail,
        field=field,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        metadata=metadata or {}
    )
    
    if status_code is None:
        status_code = STATUS_CODES.get(error_code, 500)
    return error_response, status_code


# Exception attributes copied into ErrorResponse.metadata when present.
_METADATA_ATTRIBUTES = ("metric", "required", "actual", "symbol", "retry_after", "status_code")


def to_error_response(exc: Exception) -> Tuple[ErrorResponse, int]:
    """
    Map an exception onto the standard error response.
    
    Domain exceptions carry an ``error_code`` class attribute; a plain
    ValueError is treated as invalid input and anything else as internal.
    """
    error_code = getattr(exc, "error_code", None)
    if error_code is None:
        error_code = ErrorCode.INVALID_INPUT if isinstance(exc, ValueError) else ErrorCode.INTERNAL_ERROR
    
    metadata = {
        name: getattr(exc, name)
        for name in _METADATA_ATTRIBUTES
        if getattr(exc, name, None) is not None
    }
    message = str(exc) if error_code != ErrorCode.INTERNAL_ERROR else "Internal error"
    detail = type(exc).__name__
    return create_error_response(error_code, message, detail=detail, metadata=metadata)
