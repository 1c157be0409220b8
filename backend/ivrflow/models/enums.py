"""Domain enum definitions for IVR Flow Studio.

This module defines the enum types used across the application for
type-safe representation of node kinds and token kinds.
"""

from enum import Enum


class NodeType(str, Enum):
    """Flow node classification types.

    A flow starts at its single START node; callers are prompted, their
    input is collected and validated, BRANCH nodes fan out on the outcome,
    and END nodes terminate the call.
    """

    START = "start"
    PROMPT = "prompt"
    COLLECT = "collect"
    VALIDATE = "validate"
    BRANCH = "branch"
    END = "end"

    def __str__(self) -> str:
        """Return the string value for serialization."""
        return self.value


class TokenType(str, Enum):
    """Kinds of caller-supplied PII a Token describes.

    The designer UI historically sent ACCOUNT and CARD; both are accepted
    and normalised to ACCOUNT_NUMBER and DEBIT_CARD.
    """

    SSN = "SSN"
    PIN = "PIN"
    ACCOUNT_NUMBER = "ACCOUNT_NUMBER"
    DEBIT_CARD = "DEBIT_CARD"
    DOB = "DOB"
    PASSWORD = "PASSWORD"
    CUSTOM = "CUSTOM"
    OTHER = "OTHER"

    def __str__(self) -> str:
        """Return the string value for serialization."""
        return self.value

    @classmethod
    def _missing_(cls, value: object) -> "TokenType | None":
        if isinstance(value, str):
            normalized = value.strip().upper()
            alias = TOKEN_TYPE_ALIASES.get(normalized, normalized)
            for member in cls:
                if member.value == alias:
                    return member
        return None


TOKEN_TYPE_ALIASES: dict[str, str] = {
    "ACCOUNT": "ACCOUNT_NUMBER",
    "CARD": "DEBIT_CARD",
}


__all__ = [
    "TOKEN_TYPE_ALIASES",
    "NodeType",
    "TokenType",
]
