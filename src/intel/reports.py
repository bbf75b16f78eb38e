"""Monthly report workflow"""
import logging
from typing import Iterable, List, Optional

from src.core.ai_client import agent_client
from src.core.config import settings
from src.core.utils import as_int, as_str
from src.intel.models import Finding, Report
from src.intel.state import IntelState

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1] if 1 <= month <= 12 else "Unknown"


def distinct_competitors(findings: Iterable[Finding]) -> List[str]:
    """Competitor names in first-seen order"""
    return list(dict.fromkeys(f.competitor for f in findings))


def summarize_findings(findings: Iterable[Finding]) -> str:
    return "\n".join(
        f"Competitor: {f.competitor}, Title: {f.title}, Site Type: {f.site_type}, "
        f"Engagement: {f.engagement_type}, Source: {f.owned_earned}, Confidence: {f.confidence_score}%"
        for f in findings
    )


def build_report_prompt(findings: List[Finding], month: int, year: int) -> str:
    period = f"{month_name(month)} {year}"
    return (
        f"Generate a comprehensive monthly competitive intelligence report for {period}. "
        f"Here are the approved findings to analyze:\n\n{summarize_findings(findings)}\n\n"
        "Please provide an executive summary, trend analysis, per-competitor overviews, a comparative "
        f"matrix, and strategic recommendations. Total approved findings: {len(findings)}. "
        f"Competitors covered: {', '.join(distinct_competitors(findings))}."
    )


async def generate_report(state: IntelState, month: int, year: int, gateway=None) -> Optional[Report]:
    """
    Ask the report agent for a monthly report over all approved findings.

    With no approved findings this is a no-op: no agent call, no status change.
    Returns the stored Report, or None on failure.
    """
    approved = state.approved_findings()
    if not approved:
        return None

    gateway = gateway or agent_client
    agent_id = settings.report_agent_id
    period = f"{month_name(month)} {year}"

    state.is_generating = True
    state.active_agent_id = agent_id
    state.report_status = "Generating monthly report..."
    logger.info(f"Generating report for {period} from {len(approved)} approved findings")

    try:
        result = await gateway.invoke(build_report_prompt(approved, month, year), agent_id)

        if not result.success:
            state.report_status = f"Error: {result.error or 'Report generation failed. Please try again.'}"
            logger.error(f"Report generation failed: {result.error}")
            return None

        data = result.result
        report = Report(
            month=month,
            year=year,
            report_title=as_str(data.get("report_title"), f"{period} Intelligence Report"),
            report_period=as_str(data.get("report_period"), period),
            executive_summary=as_str(data.get("executive_summary")),
            trend_analysis=as_str(data.get("trend_analysis")),
            competitor_overviews=as_str(data.get("competitor_overviews")),
            comparative_matrix=as_str(data.get("comparative_matrix")),
            recommendations=as_str(data.get("recommendations")),
            total_findings=as_int(data.get("total_findings_analyzed"), len(approved)),
            competitors_covered=as_int(data.get("competitors_covered"), len(distinct_competitors(approved))),
            pdf_url=result.first_artifact_url(),
        )
        state.add_report(report)
        state.report_status = f"Report generated successfully for {period}!"
        return report

    except Exception as e:
        logger.error(f"Report generation error: {e}", exc_info=True)
        state.report_status = f"Error: {str(e) or 'An unexpected error occurred.'}"
        return None
    finally:
        state.is_generating = False
        state.active_agent_id = None
