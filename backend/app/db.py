import os
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool, StaticPool


engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[sessionmaker] = None
Base = declarative_base()


def normalize_database_url(database_url: str) -> str:
    """Point plain ``postgresql://`` URLs at the asyncpg driver."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


def _engine_options(database_url: str) -> dict:
    if not database_url.startswith("sqlite+aiosqlite://"):
        return {"echo": False, "pool_pre_ping": True}
    # One shared connection keeps an in-memory game table alive between sessions.
    poolclass = StaticPool if ":memory:" in database_url else NullPool
    return {"echo": False, "poolclass": poolclass}


def get_engine() -> AsyncEngine:
    """Engine for the game record store, built from ``DATABASE_URL`` on first use."""

    global engine, AsyncSessionLocal

    if engine is None:
        raw_url = os.getenv("DATABASE_URL")
        if not raw_url:
            raise RuntimeError("DATABASE_URL environment variable is required")
        database_url = normalize_database_url(raw_url)
        engine = create_async_engine(database_url, **_engine_options(database_url))
        AsyncSessionLocal = sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )

    return engine


async def get_session() -> AsyncSession:
    if AsyncSessionLocal is None:
        get_engine()
    async with AsyncSessionLocal() as session:
        yield session
