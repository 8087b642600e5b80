#scaling_controller\infrastructure\postgres\database.py

"""SQLAlchemy database setup and session management."""

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from scaling_controller.infrastructure.postgres.config import DatabaseSettings


# ============================================
# Base for ORM models
# ============================================
Base = declarative_base()


# ============================================
# Engine configuration
# ============================================
def create_db_engine(settings: Optional[DatabaseSettings] = None) -> Engine:
    """Create SQLAlchemy engine with connection pooling."""
    settings = settings or DatabaseSettings()

    engine = create_engine(
        settings.database_url,
        echo=settings.echo_sql,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
    )

    @event.listens_for(engine, "connect")
    def set_search_path(dbapi_conn, connection_record):
        """Set default schema on connect."""
        cursor = dbapi_conn.cursor()
        cursor.execute("SET search_path TO public")
        cursor.close()

    return engine


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Process-wide engine, created on first use."""
    return create_db_engine()


# ============================================
# Session factory function
# ============================================
def get_session_factory(engine_instance: Optional[Engine] = None) -> sessionmaker:
    """
    Get a session factory bound to the given engine.

    If no engine provided, uses the default production engine.
    This allows tests to inject their own test engine.
    """
    if engine_instance is None:
        engine_instance = get_engine()

    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine_instance,
        expire_on_commit=False
    )


# ============================================
# Database initialization
# ============================================
def init_db(engine_instance: Optional[Engine] = None) -> None:
    """Create all tables (for testing and local runs)."""
    from scaling_controller.infrastructure.postgres import models  # noqa: F401

    Base.metadata.create_all(bind=engine_instance or get_engine())


def drop_db(engine_instance: Optional[Engine] = None) -> None:
    """Drop all tables (for testing only)."""
    Base.metadata.drop_all(bind=engine_instance or get_engine())
