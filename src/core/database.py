# ──── Usage Guide ────
# The only table is the key-value store (see src/intel/storage.py).
# Pattern: async with get_async_db() as session:
#              row = await session.get(StoredValueModel, key)
#
# DATABASE: SQLite via aiosqlite. The file lives under settings.data_dir.

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from src.core.config import settings


class Base(DeclarativeBase):
    metadata = MetaData()


# ──── Single Async Engine (SQLite + aiosqlite) ────
engine = create_async_engine(settings.database_url, echo=False, future=True)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db(bind=None):
    """Create all tables on the given engine (defaults to the app engine)."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ──── Context Managers ────
@asynccontextmanager
async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ──── End of Database Configuration ────
