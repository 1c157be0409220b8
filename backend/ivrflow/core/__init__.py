"""Core application configuration and utilities.

This package contains core functionality including:
- Configuration management (config.py)
- Error taxonomy (exceptions.py)
- Password hashing (security.py) and JWT sessions (jwt.py)
- Logging setup (logging.py)
"""

from ivrflow.core.config import settings
from ivrflow.core.security import hash_password, verify_password

__all__ = [
    "hash_password",
    "settings",
    "verify_password",
]
