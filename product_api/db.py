# product_api/db.py

"""
Database configuration and session management for FastAPI app.
"""
import logging
import time

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across threads
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    # pool_pre_ping=True helps maintain healthy connections in a pool
    return {"pool_pre_ping": True}


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# autocommit=False ensures transactions must be committed explicitly.
# autoflush=False means changes aren't flushed to DB until commit or explicit flush.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


def get_db():
    """
    Dependency to provide a new database session for FastAPI endpoints.
    A session is created for each request and automatically closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(max_retries: int, retry_delay_seconds: float) -> None:
    """
    Create any missing tables, waiting for the database to come up.
    Re-raises the last OperationalError once every attempt has failed.
    """
    for attempt in range(1, max_retries + 1):
        try:
            Base.metadata.create_all(bind=engine)
        except OperationalError as e:
            if attempt == max_retries:
                raise
            logger.warning(
                f"Database unavailable (attempt {attempt}/{max_retries}): {e}. "
                f"Retrying in {retry_delay_seconds} seconds..."
            )
            time.sleep(retry_delay_seconds)
        else:
            logger.info(f"Database tables ready after {attempt} attempt(s).")
            return
