"""Durable key-value store for the intel hub collections.

Each collection is written wholesale as one JSON blob under a fixed key.
Reads never raise: a missing, corrupt or mistyped entry yields the caller's
fallback. Writes are best-effort and log failures instead of raising.
"""
import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core.config import settings
from src.core.database import Base

logger = logging.getLogger(__name__)


class StoredValueModel(Base):
    """One JSON value per key"""
    __tablename__ = 'kv_store'

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class StorageKeys:
    """Persisted key layout. No schema version is stored."""

    def __init__(self, prefix: Optional[str] = None):
        prefix = settings.storage_key_prefix if prefix is None else prefix
        self.competitors = f"{prefix}competitors"
        self.findings = f"{prefix}findings"
        self.reports = f"{prefix}reports"
        self.discovery_history = f"{prefix}discoveryHistory"
        self.latest_xlsx_url = f"{prefix}latestXlsxUrl"


class KeyValueStore:
    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        if session_factory is None:
            from src.core.database import async_session_factory
            session_factory = async_session_factory
        self.session_factory = session_factory
        # Writes commit one at a time, in the order they were issued
        self._lock = asyncio.Lock()

    async def read(self, key: str, fallback: Any) -> Any:
        """Stored value for key, or fallback if missing, malformed or of another type."""
        try:
            async with self.session_factory() as session:
                row = await session.get(StoredValueModel, key)
                raw = row.value if row is not None else None
        except SQLAlchemyError as e:
            logger.warning(f"Store read failed for {key}: {e}")
            return fallback

        if raw is None:
            return fallback

        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning(f"Ignoring corrupt stored value for {key}")
            return fallback

        if fallback is not None and not isinstance(value, type(fallback)):
            logger.warning(f"Ignoring stored value for {key}: expected {type(fallback).__name__}")
            return fallback
        return value

    async def write(self, key: str, value: Any) -> None:
        """Upsert value as JSON. Failures are logged and swallowed."""
        try:
            payload = json.dumps(value)
            async with self._lock:
                async with self.session_factory() as session:
                    await self._upsert(session, key, payload)
                    await session.commit()
        except (SQLAlchemyError, TypeError, ValueError) as e:
            logger.warning(f"Store write failed for {key}: {e}")

    @staticmethod
    async def _upsert(session: AsyncSession, key: str, payload: str) -> None:
        stmt = insert(StoredValueModel).values(key=key, value=payload, updated_at=datetime.utcnow())
        stmt = stmt.on_conflict_do_update(
            index_elements=[StoredValueModel.key],
            set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
        )
        await session.execute(stmt)
