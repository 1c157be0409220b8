"""Token model.

A Token is a reusable definition of one piece of caller PII (an SSN, a
PIN, a date of birth...) that collect and validate nodes refer to by id.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ivrflow.models.base import GUID, Base, TimestampMixin, UUIDMixin
from ivrflow.models.enums import TokenType


class Token(UUIDMixin, TimestampMixin, Base):
    """PII field definition belonging to a project.

    Attributes:
        name: Display name, e.g. "Customer SSN"
        token_type: Kind of data collected
        description: Optional description
        format: Optional validation pattern, free-form
        project_id: Owning project
    """

    __tablename__ = "tokens"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    token_type: Mapped[TokenType] = mapped_column(
        "type",
        Enum(TokenType, name="token_type", native_enum=False, length=32),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    format: Mapped[str | None] = mapped_column(String(255), nullable=True)

    project_id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Token(id={self.id}, name='{self.name}', type={self.token_type})>"


__all__ = ["Token"]
