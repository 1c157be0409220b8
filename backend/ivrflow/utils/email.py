"""Email normalization.

Emails are stored and compared in a single canonical form so that
"Ana@Bank.com" and "ana@bank.com " identify the same account. Format
validation happens earlier, in the request schemas (EmailStr).
"""

from __future__ import annotations


def normalize_email(email: str | None) -> str:
    """Normalize an email address for storage and comparison.

    Examples:
        >>> normalize_email("  Ana.Ops@Bank.COM ")
        'ana.ops@bank.com'
        >>> normalize_email(None)
        ''
    """
    if not email:
        return ""
    return email.strip().lower()


__all__ = ["normalize_email"]
