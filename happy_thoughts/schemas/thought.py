"""
Happy Thoughts API — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the JSON contract of the API.
Why:   Typed request bodies at the boundary, consistent serialization of
       MongoDB documents, and OpenAPI doc generation.

Envelope:
    Every /thoughts response, success or failure, is wrapped as
        {"success": bool, "response": <payload | null>, "message": str}
    Errors add "error" (machine code), "details", and "request_id".

Wire format of a thought:
    {"_id": "665f1c...", "message": "...", "hearts": 0, "createdAt": "2024-..."}
    The id keeps MongoDB's `_id` key so existing clients keep working.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ThoughtCreate(BaseModel):
    """
    Body of POST /thoughts.

    `message` is deliberately loose here (any JSON value, optional) so that
    a missing or short message reaches `validate_message` and produces the
    400 envelope, instead of FastAPI's generic 422.
    """

    message: Optional[Any] = Field(
        default=None,
        description="Your happy thought (5-140 characters)",
        examples=["Hello world"],
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ThoughtResponse(BaseModel):
    """A single thought as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Unique thought identifier (ObjectId hex)")
    message: str = Field(description="The thought text")
    hearts: int = Field(ge=0, description="Number of likes")
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC ISO 8601)")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> str:
        return str(v)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ThoughtResponse":
        return cls.model_validate(document)


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope shared by every /thoughts endpoint."""

    success: bool = Field(default=True)
    response: T
    message: str = Field(default="Success")


class ErrorResponse(BaseModel):
    """
    Error envelope for all API errors.

    Example:
        {
            "success": false,
            "response": null,
            "message": "Thought not found",
            "error": "not_found",
            "details": {"resource": "thought", "resource_id": "665f..."},
            "request_id": "a1b2c3d4"
        }
    """

    success: bool = Field(default=False)
    response: None = Field(default=None)
    message: str = Field(description="Human-readable error description")
    error: str = Field(description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class EndpointDoc(BaseModel):
    path: str
    method: str
    description: str
    queryParams: Optional[str] = None
    body: Optional[Dict[str, str]] = None


class ApiDocumentation(BaseModel):
    """Payload of GET /."""

    message: str
    endpoints: List[EndpointDoc]


class HealthResponse(BaseModel):
    """Returned by GET /health."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
