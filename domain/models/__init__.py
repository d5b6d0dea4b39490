"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    create_storage_engine,
    make_session_factory,
    init_database,
    dispose_engine,
)
from domain.models.storage import StorageEntry

__all__ = [
    # Database
    "Base",
    "create_storage_engine",
    "make_session_factory",
    "init_database",
    "dispose_engine",
    # Storage models
    "StorageEntry",
]
