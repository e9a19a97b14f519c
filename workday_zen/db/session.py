"""Database session configuration"""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workday_zen.config import DATABASE_URL
from workday_zen.db.base import Base

# Register models on Base.metadata before create_all
from workday_zen.db import models  # noqa: F401

logger = logging.getLogger(__name__)


def create_session_factory(database_url: Optional[str] = None) -> sessionmaker:
    """
    Create the engine, make sure the schema exists, and return a session factory.

    SQLite file databases get their parent directory created. In-memory SQLite
    uses a single shared connection so every session sees the same data.

    Args:
        database_url: SQLAlchemy URL, defaults to DATABASE_URL from config

    Returns:
        sessionmaker bound to the new engine
    """
    url = make_url(database_url or DATABASE_URL)
    engine_kwargs = {}

    if url.get_backend_name() == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=False, **engine_kwargs)

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        """Log when a new connection is created"""
        logger.debug(f"New database connection created for {url.render_as_string(hide_password=True)}")

    Base.metadata.create_all(engine)

    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
