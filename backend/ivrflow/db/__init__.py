"""Database module.

Async engine and session management plus the generic record store the
repositories are built on.
"""

from ivrflow.db.session import async_session, engine, get_db, init_models
from ivrflow.db.store import RecordStore

__all__ = [
    "RecordStore",
    "async_session",
    "engine",
    "get_db",
    "init_models",
]
