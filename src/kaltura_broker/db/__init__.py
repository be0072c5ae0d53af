"""Database module for persistence.

Provides SQLAlchemy async engine, session management, and ORM models
for PostgreSQL (production) or SQLite (development).
"""

from kaltura_broker.db.base import (
    Base,
    close_database,
    create_tables,
    get_engine,
    get_session,
    get_session_factory,
    init_database,
)
from kaltura_broker.db.models import KalturaInstanceModel

__all__ = [
    # Base and session management
    "Base",
    "create_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_database",
    "close_database",
    # Models
    "KalturaInstanceModel",
]
