# File: mpvnotes/core/database/connection.py

import logging
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from mpvnotes.core.config.settings import settings
from mpvnotes.core.database.base import Base

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

if DATABASE_URL.startswith("sqlite:///"):
    Path(DATABASE_URL[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(
    DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Creates all tables registered on Base."""
    # Import models so they are registered before create_all
    import mpvnotes.features.library.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.debug(f"Database ready at {DATABASE_URL}")


def get_db():
    """Dependency for obtaining a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
