"""
SQL Connection Utility (identity store)

The users table holds credentials and role only. Role-specific profiles
live in MongoDB keyed by the same uid.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from skillbridge.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def _build_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    return create_engine(url, pool_size=5, max_overflow=10, echo=settings.debug)


engine = _build_engine(settings.sql_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


USERS_DDL = """
    CREATE TABLE IF NOT EXISTS users (
        uid VARCHAR(64) PRIMARY KEY,
        email VARCHAR(255) NOT NULL UNIQUE,
        password_hash VARCHAR(255) NOT NULL,
        name VARCHAR(100) NOT NULL,
        role VARCHAR(20) NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT TRUE,
        created_at VARCHAR(40) NOT NULL
    )
"""


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
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


def init_sql_schema() -> None:
    """Create the users table if it does not exist."""
    with get_db_session() as db:
        db.execute(text(USERS_DDL))
    logger.info("SQL schema ready")


def test_postgres_connection() -> bool:
    """
    Test if the SQL store is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.error("SQL connection failed: %s", e)
        return False
