"""
Database configuration and session management.

The database only backs the flat key/value namespace the entity collections
are serialized into. Engines and session factories are built explicitly at
startup (or per test) and passed to the storage adapter.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("mealtrack.database")

# Create SQLAlchemy Base
Base = declarative_base()


def create_storage_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the engine for the key/value storage database.

    SQLite URLs get ``check_same_thread=False`` because sync routes run on a
    thread pool. In-memory SQLite additionally shares one connection through a
    ``StaticPool`` so every session sees the same database.
    """
    kwargs = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    """Create session factory bound to ``engine``"""
    return sessionmaker(bind=engine, future=True, expire_on_commit=False)


def init_database(engine: Engine):
    """Initialize database schema"""
    # Import models so they are registered on Base.metadata
    import domain.models.storage  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")


def dispose_engine(engine: Optional[Engine]):
    if engine is not None:
        engine.dispose()
        logger.info("Database engine disposed")
