import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from outreach_crm.core.config import DATABASE_URL

logger = logging.getLogger(__name__)


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine for ``url``, enabling cascades on SQLite."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)

    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":
        # ON DELETE CASCADE is ignored unless enabled on EVERY new connection
        @event.listens_for(engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(DATABASE_URL)
logger.info(f"Database backend: {engine.dialect.name}")

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def init_db() -> None:
    """Create all tables that do not exist yet."""
    from outreach_crm.db import models  # noqa: F401  registers the mappers
    from outreach_crm.db.base import Base

    Base.metadata.create_all(engine)
    logger.info("Database tables ready")
