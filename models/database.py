"""Declarative base and in-memory engine construction."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import get_settings

Base = declarative_base()


def build_engine(database_url: str | None = None) -> Engine:
    """
    Create an engine for one store.

    In-memory SQLite keeps its data on a single connection, so the pool is
    pinned to that one connection for the engine's lifetime.
    """
    url = database_url or get_settings().database_url
    return create_engine(
        url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def init_db(engine: Engine) -> sessionmaker:
    """Create all tables on the engine and return a session factory bound to it."""
    # Import models so every table is registered on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
