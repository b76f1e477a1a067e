"""
Blog API Backend - Shared Response Schemas
===========================================

What:  Response models used by more than one route module: plain messages,
       the error envelope and the health report.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Body of endpoints whose only payload is a human-readable message."""
    message: str = Field(description="Human-readable outcome")


class Violation(BaseModel):
    """One field-level validation failure."""
    field: str = Field(description="Dotted path of the offending field")
    message: str = Field(description="What is wrong with it")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid inputs",
            "details": {"violations": [{"field": "email", "message": "value is not a valid email address"}]},
            "request_id": "3f2a9c1e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response; the database is the only dependency."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def violations_from_errors(errors: List[dict]) -> List[dict]:
    """
    Flatten Pydantic/FastAPI error dicts into {"field", "message"} pairs.

    The leading "body" location segment is dropped so that clients see the
    field name they sent.
    """
    violations = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        violations.append(
            Violation(field=".".join(loc) or "body", message=error.get("msg", "invalid value")).model_dump()
        )
    return violations
