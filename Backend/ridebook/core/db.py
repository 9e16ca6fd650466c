import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine, applying SQLite connection settings when needed."""
    if not database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False, future=True, pool_pre_ping=True)

    engine = create_async_engine(
        database_url,
        echo=False,
        future=True,
        connect_args={"timeout": settings.sqlite_busy_timeout_seconds},
    )
    event.listen(engine.sync_engine, "connect", _set_sqlite_pragmas)
    return engine


engine = build_engine(settings.database_url)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


class Base(DeclarativeBase):
    pass


def _ensure_sqlite_directory(database_url) -> None:
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite") or not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


async def init_db(target: AsyncEngine | None = None) -> None:
    """Create the schema. Safe to run more than once."""
    # Register mapped tables on Base.metadata
    from .. import models  # noqa: F401

    target = target or engine
    _ensure_sqlite_directory(target.url)
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session
