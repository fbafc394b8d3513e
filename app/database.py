"""
Database connection and session management.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from fastapi import Request
from app.config import Settings
from typing import Generator

# Base class for ORM models
Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create the engine for the configured database (PostgreSQL or SQLite)."""
    if settings.is_postgres:
        # PostgreSQL settings
        return create_engine(
            settings.database_url,
            echo=False,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
        )

    # SQLite settings
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        echo=False,
        pool_pre_ping=True,
    )
    enable_sqlite_wal(engine)
    return engine


def enable_sqlite_wal(engine: Engine):
    """Let readers and a single writer share the SQLite file."""
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to the given engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for getting database session.
    Use with FastAPI's Depends().
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine):
    """Initialize database by creating all tables."""
    from app.models import department_daily_report  # noqa: F401
    Base.metadata.create_all(bind=engine)
