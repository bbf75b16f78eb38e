"""
Shared pytest fixtures for the intel hub test suite.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from src.core.data_types import AgentResult
from src.core.database import init_db
from src.core.models import FindingStatus
from src.intel.models import Competitor, Finding
from src.intel.state import IntelState
from src.intel.storage import KeyValueStore, StorageKeys


class InMemoryStore:
    """Dict-backed stand-in for KeyValueStore that records writes."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []

    async def read(self, key, fallback):
        return self.data.get(key, fallback)

    async def write(self, key, value):
        self.data[key] = value
        self.writes.append(key)


class BrokenStore(InMemoryStore):
    """Store whose writes always blow up."""

    async def write(self, key, value):
        self.writes.append(key)
        raise RuntimeError("disk full")


# --- Storage Fixtures ---

@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
async def kv_store(tmp_path):
    """KeyValueStore on a throwaway SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'intel_test.db'}")
    await init_db(bind=engine)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    yield KeyValueStore(session_factory=factory)

    await engine.dispose()


# --- State Fixtures ---

@pytest.fixture
def state(memory_store):
    return IntelState(store=memory_store, keys=StorageKeys(prefix="ciHub_"))


@pytest.fixture
def make_finding():
    """Factory fixture for findings with sensible defaults."""
    def _make(competitor="Acme", title="Launch post", status=FindingStatus.APPROVED, **kwargs):
        return Finding(competitor=competitor, title=title, status=status, **kwargs)
    return _make


@pytest.fixture
def seeded_state(state, make_finding):
    """State with two competitors and one finding of each status (no writes recorded)."""
    state.competitors = [
        Competitor(id="c1", name="Acme", date_added="2026-01-01"),
        Competitor(id="c2", name="Globex", date_added="2026-01-02"),
    ]
    state.findings = [
        make_finding(id="f1", competitor="Acme", title="Acme launches rocket skates",
                     site_type="Blog", status=FindingStatus.FLAGGED),
        make_finding(id="f2", competitor="Globex", title="Globex partners with Initech",
                     site_type="News", status=FindingStatus.APPROVED),
        make_finding(id="f3", competitor="Acme", title="Rumoured Acme acquisition",
                     site_type="Social", status=FindingStatus.DISMISSED),
        make_finding(id="f4", competitor="Acme", title="Acme hires new CMO",
                     site_type="News", status=FindingStatus.APPROVED),
    ]
    return state


# --- Agent Fixtures ---

@pytest.fixture
def make_gateway():
    """Factory for a mock agent gateway returning a fixed result (or raising)."""
    def _make(result=None, side_effect=None):
        gateway = MagicMock()
        gateway.invoke = AsyncMock(return_value=result, side_effect=side_effect)
        return gateway
    return _make


@pytest.fixture
def discovery_payload():
    """Raw agent reply for a successful discovery with two structured findings."""
    return {
        "success": True,
        "response": {
            "result": {
                "summary": {"total_findings": 7, "total_competitors": 2, "flagged_count": 1},
                "detailed_findings_overview": (
                    "Competitor: Acme\n"
                    "Title: Acme launches rocket skates\n"
                    "URL: https://acme.example.com/skates\n"
                    "Site Type: Blog\n"
                    "Engagement Type: Product Launch\n"
                    "Owned/Earned: Owned\n"
                    "Confidence: 92%\n"
                    "Status: approved\n"
                ),
                "flagged_items_summary": (
                    "- Competitor: Globex\n"
                    "- Title: Globex rumoured merger\n"
                    "- Site Type: Social\n"
                    "- Engagement: Rumour\n"
                    "- Source: Earned\n"
                    "- Score: 40\n"
                    "- Status: flagged for review\n"
                ),
            }
        },
        "module_outputs": {"artifact_files": [{"file_url": "https://files.example.com/discovery.xlsx"}]},
    }


@pytest.fixture
def discovery_result(discovery_payload):
    return AgentResult.from_payload(discovery_payload)


@pytest.fixture
def report_payload():
    return {
        "success": True,
        "response": {
            "result": {
                "report_title": "February 2026 Competitive Landscape",
                "report_period": "February 2026",
                "executive_summary": "## Executive Summary\n\n**Acme** led the month.",
                "trend_analysis": "1. **Hardware** launches dominate",
                "competitor_overviews": "### Acme\n- 2 findings",
                "comparative_matrix": "- **Acme**: High activity",
                "recommendations": "1. Watch Acme pricing",
                "total_findings_analyzed": 2,
                "competitors_covered": 2,
            }
        },
        "module_outputs": {"artifact_files": [{"file_url": "https://files.example.com/report.pdf"}]},
    }
