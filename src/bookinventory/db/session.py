"""
SQLAlchemy engine and session setup for the book inventory store.
Includes the engine, the session factory and the declarative base for the ORM
models. Provides a dependency that opens and always closes a session.

Every connection is bounded by DB_TIMEOUT_SECONDS so no request waits on the
store indefinitely.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from bookinventory.core.config import settings


def engine_options(database_url: str, timeout: float) -> dict:
    """Builds create_engine keyword arguments that apply `timeout` for the given backend."""
    url = make_url(database_url)
    options: dict = {"pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        # seconds to wait on a locked database
        options["connect_args"] = {"check_same_thread": False, "timeout": timeout}
    else:
        options["pool_timeout"] = timeout
        if url.get_backend_name() == "postgresql":
            options["connect_args"] = {"connect_timeout": int(timeout)}
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL, settings.DB_TIMEOUT_SECONDS))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """
    Provides a database session for use as a FastAPI dependency.

    Yields:
        Session: SQLAlchemy session.

    Ensures:
        The session is closed after the request finishes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None) -> None:
    """Creates any missing tables on `bind` (the configured engine by default)."""
    from bookinventory import models  # noqa: F401  registers the mappers on Base
    Base.metadata.create_all(bind=bind or engine)
