"""In-memory state for the intel hub, with write-through persistence.

``IntelState`` is the single owner of every collection. Mutations are
synchronous and replace the affected collection wholesale; each one then
schedules a best-effort write of that collection to the key-value store.
A failed write leaves memory untouched, so the session keeps working on
the in-memory copy (last writer wins on disk).
"""
import asyncio
import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Set

from src.core.models import FindingStatus
from src.core.utils import today_iso
from src.intel import samples
from src.intel.models import Competitor, DiscoveryRun, Finding, Report, find_by_id
from src.intel.storage import KeyValueStore, StorageKeys

logger = logging.getLogger(__name__)


class InvalidTransition(ValueError):
    """Finding status change that the review flow does not allow."""


# Target states reachable from a flagged finding
REVIEW_OUTCOMES = (FindingStatus.APPROVED, FindingStatus.DISMISSED)


class IntelState:
    def __init__(self, store: Optional[KeyValueStore] = None, keys: Optional[StorageKeys] = None):
        self.store = store
        self.keys = keys or StorageKeys()

        self.competitors: List[Competitor] = []
        self.findings: List[Finding] = []
        self.reports: List[Report] = []
        self.discovery_history: List[DiscoveryRun] = []
        self.latest_xlsx_url: str = ""

        # Session-only flags, never persisted
        self.is_discovering = False
        self.is_generating = False
        self.active_agent_id: Optional[str] = None
        self.discovery_status = ""
        self.report_status = ""
        self.sample_mode = False

        self._pending: Set[asyncio.Task] = set()

    # --- Loading ---

    async def load(self) -> None:
        """Replace in-memory collections with whatever the store holds."""
        if self.store is None:
            return
        self.competitors = await self._load_records(self.keys.competitors, Competitor.from_dict)
        self.findings = await self._load_records(self.keys.findings, Finding.from_dict)
        self.reports = await self._load_records(self.keys.reports, Report.from_dict)
        self.discovery_history = await self._load_records(self.keys.discovery_history, DiscoveryRun.from_dict)
        self.latest_xlsx_url = await self.store.read(self.keys.latest_xlsx_url, "")
        logger.info(
            f"Loaded {len(self.competitors)} competitors, {len(self.findings)} findings, "
            f"{len(self.reports)} reports"
        )

    async def _load_records(self, key: str, factory: Callable[[Dict[str, Any]], Any]) -> List[Any]:
        raw = await self.store.read(key, [])
        return [factory(item) for item in raw if isinstance(item, dict)]

    async def set_sample_mode(self, enabled: bool) -> None:
        """Swap in demo data (persistence paused) or go back to stored data."""
        self.sample_mode = enabled
        if enabled:
            self.competitors = samples.sample_competitors()
            self.findings = samples.sample_findings()
            self.reports = samples.sample_reports()
            self.discovery_history = samples.sample_discovery_history()
        elif self.store is None:
            self.competitors, self.findings, self.reports, self.discovery_history = [], [], [], []
        else:
            await self.load()

    # --- Competitors ---

    def add_competitor(self, name: str) -> Competitor:
        name = _clean_name(name)
        competitor = Competitor(name=name, date_added=today_iso())
        self.competitors = [*self.competitors, competitor]
        self._persist(self.keys.competitors)
        return competitor

    def edit_competitor(self, competitor_id: str, name: str) -> Optional[Competitor]:
        name = _clean_name(name)
        existing = self.get_competitor(competitor_id)
        if existing is None:
            return None
        renamed = replace(existing, name=name)
        self.competitors = [renamed if c.id == competitor_id else c for c in self.competitors]
        self._persist(self.keys.competitors)
        return renamed

    def delete_competitor(self, competitor_id: str) -> bool:
        """Remove a competitor. Its findings keep the competitor's name."""
        remaining = [c for c in self.competitors if c.id != competitor_id]
        if len(remaining) == len(self.competitors):
            return False
        self.competitors = remaining
        self._persist(self.keys.competitors)
        return True

    def get_competitor(self, competitor_id: str) -> Optional[Competitor]:
        return find_by_id(self.competitors, competitor_id)

    # --- Findings ---

    def prepend_findings(self, findings: List[Finding]) -> None:
        if not findings:
            return
        self.findings = [*findings, *self.findings]
        self._persist(self.keys.findings)

    def update_finding_status(self, finding_id: str, status: FindingStatus) -> Optional[Finding]:
        """
        Resolve a flagged finding to approved or dismissed.

        Returns the updated finding, or None if the id is unknown.
        Raises InvalidTransition for anything other than flagged -> approved/dismissed.
        """
        status = FindingStatus(status)
        existing = self.get_finding(finding_id)
        if existing is None:
            return None
        if existing.status != FindingStatus.FLAGGED:
            raise InvalidTransition(f"Finding {finding_id} is {existing.status.value}, only flagged findings can be reviewed")
        if status not in REVIEW_OUTCOMES:
            raise InvalidTransition(f"Cannot move a flagged finding to {status.value}")

        updated = replace(existing, status=status)
        self.findings = [updated if f.id == finding_id else f for f in self.findings]
        self._persist(self.keys.findings)
        return updated

    def get_finding(self, finding_id: str) -> Optional[Finding]:
        return find_by_id(self.findings, finding_id)

    def approved_findings(self) -> List[Finding]:
        return [f for f in self.findings if f.status == FindingStatus.APPROVED]

    def flagged_findings(self) -> List[Finding]:
        return [f for f in self.findings if f.status == FindingStatus.FLAGGED]

    # --- Discovery history / exports ---

    def record_discovery_run(self, run: DiscoveryRun) -> None:
        self.discovery_history = [run, *self.discovery_history]
        self._persist(self.keys.discovery_history)

    def set_latest_xlsx_url(self, url: str) -> None:
        self.latest_xlsx_url = url
        self._persist(self.keys.latest_xlsx_url)

    # --- Reports ---

    def add_report(self, report: Report) -> None:
        self.reports = [report, *self.reports]
        self._persist(self.keys.reports)

    def get_report(self, report_id: str) -> Optional[Report]:
        return find_by_id(self.reports, report_id)

    # --- Persistence ---

    def _snapshot(self, key: str) -> Any:
        if key == self.keys.latest_xlsx_url:
            return self.latest_xlsx_url
        collection = {
            self.keys.competitors: self.competitors,
            self.keys.findings: self.findings,
            self.keys.reports: self.reports,
            self.keys.discovery_history: self.discovery_history,
        }[key]
        return [record.to_dict() for record in collection]

    def _persist(self, key: str) -> None:
        """Schedule a fire-and-forget write of one collection."""
        if self.store is None or self.sample_mode:
            return
        value = self._snapshot(key)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Called outside an event loop (scripts); write synchronously.
            asyncio.run(self._write(key, value))
            return
        task = loop.create_task(self._write(key, value))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, key: str, value: Any) -> None:
        try:
            await self.store.write(key, value)
        except Exception as e:
            logger.warning(f"Write-through failed for {key}, keeping in-memory copy: {e}")

    async def flush(self) -> None:
        """Wait for outstanding writes."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Competitor name must not be empty")
    return name
