import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(url: str):
    """
    Create the engine for the configured database.

    SQLite (used by the test suite) shares one in-memory connection and
    enforces foreign keys like PostgreSQL; PostgreSQL gets a real pool.
    """
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.debug
        )

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine
    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=settings.debug  # Log SQL queries in debug mode
    )


engine = build_engine(settings.sqlalchemy_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.

    Everything executed inside one block is a single transaction:
    committed on exit, rolled back if anything raises.

    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_postgres_connection() -> bool:
    """
    Test if the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("Database connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        return [dict(row) for row in result.mappings().fetchall()]
