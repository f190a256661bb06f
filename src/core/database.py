"""Database engine and session helpers."""

import logging
from collections.abc import AsyncIterator

from sqlalchemy.engine import Result, make_url
from sqlalchemy.engine.url import URL
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql.expression import Executable

from .config import settings
from .exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

SUPPORTED_ASYNC_DIALECTS = {"mysql+asyncmy", "postgresql+asyncpg", "sqlite+aiosqlite"}
DRIVER_COERCIONS = {
    "mysql": "mysql+asyncmy",
    "mariadb": "mysql+asyncmy",
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def resolve_async_database_url(raw_url: str) -> str:
    """Ensure the configured DATABASE_URL uses an async-capable driver."""
    url = make_url(raw_url)
    drivername = url.drivername.lower()
    if drivername in SUPPORTED_ASYNC_DIALECTS:
        return raw_url

    base_driver = drivername.split("+", 1)[0]
    target_driver = DRIVER_COERCIONS.get(base_driver)
    if not target_driver:
        raise ValueError(
            f"Unsupported database dialect '{url.drivername}'. "
            "The clinic API supports MySQL (asyncmy), PostgreSQL (asyncpg), "
            "or SQLite with aiosqlite for testing."
        )

    coerced_url: URL = url.set(drivername=target_driver)
    return coerced_url.render_as_string(hide_password=False)


class Base(DeclarativeBase):
    """Base declarative class with common metadata."""


DATABASE_URL = resolve_async_database_url(settings.database_url)

engine = create_async_engine(
    DATABASE_URL,
    echo=settings.debug,
    pool_pre_ping=True,
)
AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an async session."""
    async with AsyncSessionLocal() as session:
        yield session


async def run_query(db: AsyncSession, statement: Executable) -> Result:
    """Execute a statement, reporting connection failures as StoreUnavailable."""
    try:
        return await db.execute(statement)
    except (OperationalError, InterfaceError) as exc:
        logger.exception("Database query failed")
        raise StoreUnavailable("Appointment store is unavailable") from exc
