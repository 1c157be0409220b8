"""User model for authentication and ownership.

A User is the root of every ownership chain: User -> Project -> Flow/Token.
"""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ivrflow.models.base import Base, TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    """User model for authentication and resource ownership.

    Attributes:
        id: UUID primary key (from UUIDMixin)
        name: Display name
        email: Unique email address, stored lower-cased
        hashed_password: Bcrypt hash of the user password
        created_at: Timestamp of creation (from TimestampMixin)
        updated_at: Timestamp of last update (from TimestampMixin)

    Security:
        - Passwords are stored as bcrypt hashes and never serialised
        - Email addresses are case-insensitive (normalized to lowercase)
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


__all__ = ["User"]
