"""Engine and session factory for the Elevate Control inventory database.

``DATABASE_URL`` selects the backend; without it a SQLite file
``elevate.db`` next to the package is used.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_PATH = Path(__file__).resolve().parents[1] / "elevate.db"

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DEFAULT_SQLITE_PATH.as_posix()}")

if DATABASE_URL.startswith("sqlite"):
    # uvicorn serves requests from a thread pool
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
else:
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the inventory tables once, at process startup."""
    import elevate.models  # noqa: F401  registers the tables on Base

    logger.info("Creating inventory tables on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)


__all__ = ["Base", "engine", "SessionLocal", "get_db", "init_db"]
