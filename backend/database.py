#!/usr/bin/env python
"""
backend/database.py

Sets up the SQLAlchemy database connection, session management, and the
readiness state that gates every request until the database is reachable.

Key Features:
- Loads environment variables from .env at project root
- Handles default SQLite or custom DB URLs
- Provides get_db() for FastAPI dependency injection
- Provides DatabaseState, an explicit readiness object owned by the app
  (stored on app.state) instead of a module-level flag
- connect_and_create_tables() probes the connection and creates all tables
"""

import os
import logging
import threading
from dotenv import load_dotenv
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# ------------------------------------------------------------------
# 0) Logging Setup
# ------------------------------------------------------------------
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# 1) Environment Setup
# ------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BASE_DIR)

dotenv_path = os.path.join(PROJECT_ROOT, ".env")
load_dotenv(dotenv_path=dotenv_path)
logger.debug(f"Loaded .env from: {dotenv_path}")

DEFAULT_DATABASE_FILE = os.path.join(BASE_DIR, "expense_tracker.db")
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DEFAULT_DATABASE_FILE}")
logger.debug(f"DATABASE_URL: {DATABASE_URL}")

# ------------------------------------------------------------------
# 2) SQLAlchemy Engine and Session Setup
# ------------------------------------------------------------------
def build_engine(url: str) -> Engine:
    """
    Create an engine for the given URL. SQLite needs check_same_thread=False
    because FastAPI runs sync handlers in a threadpool.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = build_engine(DATABASE_URL)
logger.debug("SQLAlchemy engine created")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
logger.debug("SessionLocal factory created")

Base = declarative_base()
logger.debug("Base class defined for ORM models")

# ------------------------------------------------------------------
# 3) Readiness State
# ------------------------------------------------------------------
class DatabaseState:
    """
    Tracks whether the persistence layer is usable.

    One instance lives on app.state.db_state. Every request reads it through
    a dependency, so the check happens per request and is never cached on a
    connection.
    """

    def __init__(self) -> None:
        self._ready = threading.Event()

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    def mark_ready(self) -> None:
        self._ready.set()
        logger.info("Database marked ready")

    def mark_unavailable(self) -> None:
        self._ready.clear()
        logger.warning("Database marked unavailable")

# ------------------------------------------------------------------
# 4) FastAPI Dependency Injection
# ------------------------------------------------------------------
def get_db():
    """
    Provides a DB session for FastAPI routes. Yields a SessionLocal instance
    and closes it after use to prevent leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# ------------------------------------------------------------------
# 5) Connection Probe & Table Initialization
# ------------------------------------------------------------------
def connect_and_create_tables(bind: Engine = None) -> None:
    """
    Verifies the database answers a trivial query, then creates all tables
    (idempotent). Any failure propagates so startup can abort.
    """
    bind = bind or engine

    # Import models to register with Base.metadata
    from backend.models import entry, user  # noqa: F401

    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection established")

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created or verified")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    connect_and_create_tables()
