"""
Database connection and session management for Recipe Keeper.

This module provides:
- Database engine creation and configuration
- Session factory for database operations
- Transactional session scopes, including write-locked scopes for
  check-then-write operations
- Database initialization (create tables)
- Foreign key enforcement for SQLite
"""

from typing import Optional
from contextlib import contextmanager
import logging
import sqlite3

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, close_all_sessions
from sqlalchemy.pool import StaticPool

from ..utils.config import get_config
from ..models.base import Base

logger = logging.getLogger(__name__)

# Global engine and session factory
_engine: Optional[Engine] = None
_SessionFactory: Optional[sessionmaker] = None


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """
    Set SQLite pragmas on connection.

    Called for every new DBAPI connection; non-SQLite connections are left alone.
    """
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return

    cursor = dbapi_connection.cursor()

    # Component edges rely on ON DELETE CASCADE
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")

    cursor.close()


def create_database_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Create and configure the database engine.

    Args:
        database_url: Optional database URL. If None, uses config default.
        echo: If True, log all SQL statements (useful for debugging)

    Returns:
        Configured SQLAlchemy Engine
    """
    config = get_config()
    if database_url is None:
        database_url = config.database_url

    logger.info(f"Creating database engine: {database_url}")

    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    if ":memory:" in database_url or "mode=memory" in database_url:
        # In-memory databases (testing) must share a single connection
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": config.db_timeout},
        )

    return engine


def init_database(engine: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all tables.

    Safe to call multiple times - existing tables won't be recreated.

    Args:
        engine: Optional engine to use. If None, uses global engine.
    """
    if engine is None:
        engine = get_engine()

    logger.info("Initializing database tables")

    # Import all models so they're registered with Base
    from ..models import recipe, tag  # noqa: F401

    Base.metadata.create_all(engine)

    logger.info("Database tables initialized successfully")


def get_engine(force_recreate: bool = False) -> Engine:
    """
    Get the global database engine.

    Args:
        force_recreate: If True, recreate the engine even if one exists

    Returns:
        Database engine
    """
    global _engine

    if _engine is None or force_recreate:
        _engine = create_database_engine()

    return _engine


def get_session_factory() -> sessionmaker:
    """
    Get the global session factory.

    Returns:
        Session factory (sessionmaker)
    """
    global _SessionFactory

    if _SessionFactory is None:
        engine = get_engine()
        _SessionFactory = sessionmaker(bind=engine, expire_on_commit=False)

    return _SessionFactory


def get_session() -> Session:
    """
    Create a new database session.

    Prefer session_scope(); callers using this directly own commit,
    rollback and close.
    """
    session_factory = get_session_factory()
    return session_factory()


def begin_write(session: Session) -> None:
    """
    Start the session's transaction holding the database write lock.

    Used before check-then-write sequences (cycle check followed by edge
    insert) so that a concurrent writer cannot commit between the check
    and the write. SQLite takes the reserved lock with BEGIN IMMEDIATE;
    other databases run the transaction at SERIALIZABLE isolation.

    Does nothing if the session already has a transaction in progress;
    that transaction belongs to the caller.
    """
    if session.in_transaction():
        return

    if session.get_bind().dialect.name == "sqlite":
        session.execute(text("BEGIN IMMEDIATE"))
    else:
        session.connection(execution_options={"isolation_level": "SERIALIZABLE"})


@contextmanager
def session_scope(write: bool = False):
    """
    Provide a transactional scope for database operations.

    This context manager handles session lifecycle automatically:
    - Creates a new session
    - Takes the write lock first when write=True
    - Commits on success
    - Rolls back on exception
    - Always closes the session

    Args:
        write: If True, the scope's reads and writes run as one serialized
            transaction (see begin_write)

    Yields:
        Database session

    Example:
        with session_scope(write=True) as session:
            if not would_create_cycle(parent_id, child_id, session=session):
                session.add(RecipeComponent(...))
    """
    session = get_session()
    try:
        if write:
            begin_write(session)
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def verify_database() -> bool:
    """
    Verify that the database is accessible and has tables.

    Returns:
        True if database is valid, False otherwise
    """
    try:
        engine = get_engine()
        inspector = inspect(engine)
        tables = inspector.get_table_names()

        expected_tables = ["recipes", "recipe_components"]
        return all(table in tables for table in expected_tables)
    except Exception as e:
        logger.error(f"Database verification failed: {e}")
        return False


def reset_database(confirm: bool = False) -> None:
    """
    Drop all tables and recreate the database.

    WARNING: This will delete all data!

    Args:
        confirm: Must be True to actually reset. Safety check.

    Raises:
        ValueError: If confirm is not True
    """
    if not confirm:
        raise ValueError("Must pass confirm=True to reset database. This will delete all data!")

    logger.warning("RESETTING DATABASE - ALL DATA WILL BE LOST")

    engine = get_engine()

    from ..models import recipe, tag  # noqa: F401

    Base.metadata.drop_all(engine)
    logger.info("All tables dropped")

    Base.metadata.create_all(engine)
    logger.info("Tables recreated")


def close_connections() -> None:
    """
    Close all sessions and dispose of the engine.

    Useful for cleanup or before application exit.
    """
    global _engine, _SessionFactory

    close_all_sessions()
    _SessionFactory = None

    if _engine is not None:
        _engine.dispose()
        _engine = None

    logger.info("Database connections closed")


def initialize_app_database() -> None:
    """
    Initialize the application database.

    Main entry point for setting up the database when the app starts.
    Creates the database directory and tables if they don't exist.
    """
    config = get_config()

    if not config.has_database_url_override:
        config.ensure_directories()
        if not config.database_exists():
            logger.info(f"Creating new database at: {config.database_path}")
        else:
            logger.info(f"Using existing database at: {config.database_path}")

    engine = get_engine()
    init_database(engine)

    if verify_database():
        logger.info("Database initialized and verified successfully")
    else:
        logger.warning("Database verification failed - tables may not exist")
