"""
Database connection and session management.
Provides SQLAlchemy engine, session factory, and base class for models.
"""
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

# Create base class for declarative models
Base = declarative_base()


def build_engine(database_url: str, **kwargs) -> Engine:
    """
    Create the SQLAlchemy engine for a connection string.

    SQLite connections are shared across the request threads FastAPI uses
    for sync endpoints, so the same-thread check is disabled for them.
    """
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to ``engine``."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db(request: Request):
    """
    Database dependency - Creates and yields a database session.

    The session factory is built once by the application factory and kept
    on ``app.state``. The session is closed after the request is processed,
    even if an exception occurs during request handling.

    Yields:
        SQLAlchemy Session: Database session
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
