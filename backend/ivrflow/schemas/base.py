"""Base Pydantic schemas with common patterns.

Every schema serialises with camelCase field names (``createdAt``,
``nextNodeIds``) and accepts either camelCase or snake_case on input.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - Required at runtime for Pydantic
from typing import TYPE_CHECKING, cast
from uuid import UUID  # noqa: TC003 - Required at runtime for Pydantic

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


class BaseSchema(BaseModel):
    """Base schema with common configuration for all schemas."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        alias_generator=to_camel,
    )


class BaseResponse(BaseSchema):
    """Base response schema with id, created_at and updated_at."""

    id: UUID = Field(
        ...,
        description="Unique identifier (UUID v4)",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )
    created_at: datetime = Field(
        ...,
        description="Timestamp when the resource was created",
        examples=["2026-01-15T10:30:00Z"],
    )
    updated_at: datetime = Field(
        ...,
        description="Timestamp when the resource was last updated",
        examples=["2026-01-15T12:45:00Z"],
    )


class MessageResponse(BaseSchema):
    """Simple message response schema."""

    message: str = Field(
        ...,
        description="Response message",
        examples=["Project deleted successfully"],
    )


class ErrorResponse(BaseSchema):
    """Body of every error response."""

    error: str = Field(..., description="Error message", examples=["Unauthorized"])


# Common field definitions for reuse
NameField: FieldInfo = cast(
    "FieldInfo",
    Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name",
        examples=["Bank IVR"],
    ),
)

OptionalNameField: FieldInfo = cast(
    "FieldInfo",
    Field(
        default=None,
        max_length=255,
        description="Display name; empty keeps the current value",
        examples=["Bank IVR"],
    ),
)

DescriptionField: FieldInfo = cast(
    "FieldInfo",
    Field(
        default=None,
        max_length=2000,
        description="Optional description",
        examples=["Caller authentication for retail banking"],
    ),
)

ExpectedVersionField: FieldInfo = cast(
    "FieldInfo",
    Field(
        default=None,
        ge=1,
        description="Flow version the edit is based on; omit for last-write-wins",
        examples=[1],
    ),
)


__all__ = [
    "BaseResponse",
    "BaseSchema",
    "DescriptionField",
    "ErrorResponse",
    "ExpectedVersionField",
    "MessageResponse",
    "NameField",
    "OptionalNameField",
]
