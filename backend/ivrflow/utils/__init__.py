"""Utility functions and helpers."""

from ivrflow.utils.email import normalize_email

__all__ = ["normalize_email"]
