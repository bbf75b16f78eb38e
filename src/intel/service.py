"""Public service interface for the Intel module.

Read-side helpers used by the API and CLI. Mutations go through IntelState
and the workflows.
"""
import csv
import io
from typing import Any, Dict, List, Optional

from src.core.config import settings
from src.intel.models import Finding
from src.intel.state import IntelState

CSV_COLUMNS = [
    "id", "competitor", "title", "url", "siteType", "engagementType",
    "ownedEarned", "confidenceScore", "status", "discoveredAt",
]


def registered_agents() -> List[Dict[str, str]]:
    """Agents the hub talks to, for the dashboard's agent panel."""
    return [
        {
            "id": settings.discovery_agent_id,
            "name": "Discovery Coordinator",
            "purpose": "Coordinates competitor content discovery, routes to sub-agents, aggregates findings",
        },
        {
            "id": settings.report_agent_id,
            "name": "Monthly Report Generator",
            "purpose": "Generates comprehensive monthly PDF reports with executive summaries and trends",
        },
    ]


def dashboard_summary(state: IntelState) -> Dict[str, Any]:
    """Headline numbers and pipeline status."""
    last_run = state.discovery_history[0] if state.discovery_history else None
    return {
        "total_competitors": len(state.competitors),
        "latest_competitor": state.competitors[-1].name if state.competitors else None,
        "total_findings": len(state.findings),
        "flagged_count": len(state.flagged_findings()),
        "approved_count": len(state.approved_findings()),
        "total_reports": len(state.reports),
        "latest_report_period": state.reports[0].report_period if state.reports else None,
        "last_discovery_run": last_run.to_dict() if last_run else None,
        "latest_xlsx_url": state.latest_xlsx_url,
        "is_discovering": state.is_discovering,
        "is_generating": state.is_generating,
        "active_agent_id": state.active_agent_id,
        "discovery_status": state.discovery_status,
        "report_status": state.report_status,
        "sample_mode": state.sample_mode,
        "agents": registered_agents(),
    }


def filter_findings(
    findings: List[Finding],
    competitor: Optional[str] = None,
    site_type: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Finding]:
    """Exact-match filters; empty values match everything."""
    return [
        f for f in findings
        if (not competitor or f.competitor == competitor)
        and (not site_type or f.site_type == site_type)
        and (not status or f.status.value == status)
    ]


def finding_filter_options(findings: List[Finding]) -> Dict[str, List[str]]:
    """Distinct non-empty values for the filter dropdowns, first-seen order."""
    return {
        "competitors": list(dict.fromkeys(f.competitor for f in findings if f.competitor)),
        "site_types": list(dict.fromkeys(f.site_type for f in findings if f.site_type)),
    }


def findings_to_csv(findings: List[Finding]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)
    for finding in findings:
        row = finding.to_dict()
        writer.writerow([row[key] for key in CSV_COLUMNS])
    return buffer.getvalue()
