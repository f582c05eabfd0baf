"""Async engine and session handling for the contacts, routes and bookings tables."""

from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .config import settings


def _engine_options(database_url: str) -> dict[str, Any]:
    """
    Pool options for the configured backend.

    SQLite (tests and local runs) shares one connection so an in-memory
    database survives across sessions; PostgreSQL keeps the default pool
    and pings connections before use.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {"pool_pre_ping": True}


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency.

    Anything left uncommitted when the handler raises is rolled back.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping_db(session: AsyncSession) -> bool:
    """Return True when the database answers a trivial query."""
    result = await session.execute(text("SELECT 1"))
    return result.scalar() == 1


async def close_db() -> None:
    """Release pooled connections."""
    await engine.dispose()
