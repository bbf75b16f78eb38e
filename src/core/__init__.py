"""
Core Module - Shared Infrastructure.
"""

from src.core.config import settings, Settings
from src.core.database import Base, get_async_db, init_db
from src.core.models import FindingStatus
from src.core.data_types import AgentResult

__all__ = [
    "settings",
    "Settings",
    "Base",
    "get_async_db",
    "init_db",
    "FindingStatus",
    "AgentResult"
]
