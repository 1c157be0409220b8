"""Pydantic schemas for Token (PII field definition) operations."""

from uuid import UUID

from pydantic import AliasChoices, Field

from ivrflow.models.enums import TokenType
from ivrflow.schemas.base import (
    BaseResponse,
    BaseSchema,
    DescriptionField,
    NameField,
    OptionalNameField,
)


class TokenCreate(BaseSchema):
    """Schema for creating a token.

    ``type`` accepts the legacy UI identifiers ACCOUNT and CARD.
    """

    name: str = NameField
    type: TokenType = Field(..., description="Kind of PII collected", examples=["SSN"])
    description: str | None = DescriptionField
    format: str | None = Field(
        default=None,
        max_length=255,
        description="Free-form validation pattern",
        examples=[r"^\d{3}-\d{2}-\d{4}$"],
    )
    project_id: UUID = Field(..., description="Owning project")


class TokenUpdate(BaseSchema):
    """Schema for a partial token update. Omitted fields are unchanged."""

    name: str | None = OptionalNameField
    type: TokenType | None = None
    description: str | None = DescriptionField
    format: str | None = Field(default=None, max_length=255)


class TokenResponse(BaseResponse):
    """Schema for token responses."""

    name: str
    type: TokenType = Field(validation_alias=AliasChoices("type", "token_type"))
    description: str | None = None
    format: str | None = None
    project_id: UUID


class TokenProjectSummary(BaseSchema):
    """The owning project as embedded in token listings."""

    id: UUID
    name: str


class TokenListItem(TokenResponse):
    """A listed token with its owning project."""

    project: TokenProjectSummary


class TokenEnvelope(BaseSchema):
    token: TokenResponse


class TokenCreatedEnvelope(BaseSchema):
    message: str
    token: TokenResponse


class TokenListEnvelope(BaseSchema):
    tokens: list[TokenListItem]


__all__ = [
    "TokenCreate",
    "TokenCreatedEnvelope",
    "TokenEnvelope",
    "TokenListEnvelope",
    "TokenListItem",
    "TokenProjectSummary",
    "TokenResponse",
    "TokenUpdate",
]
