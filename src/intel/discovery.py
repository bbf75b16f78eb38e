"""Competitor discovery workflow"""
import logging
from typing import Optional

from src.core.ai_client import agent_client
from src.core.config import settings
from src.core.utils import as_int
from src.intel.models import DiscoveryRun
from src.intel.parser import parse_findings
from src.intel.state import IntelState

logger = logging.getLogger(__name__)

DISCOVERY_PROMPT = (
    "Run a comprehensive competitor content discovery for the following competitors: {competitors}. "
    "Search for recent blog posts, press releases, product launches, research publications, social media "
    "announcements, partnerships, funding news, and any other notable content. Classify each finding by "
    "site type, engagement type, owned vs earned media, and provide a confidence score. Flag any items "
    "that need manual review."
)


def build_discovery_prompt(competitor_names) -> str:
    return DISCOVERY_PROMPT.format(competitors=", ".join(competitor_names))


async def run_discovery(state: IntelState, gateway=None) -> Optional[DiscoveryRun]:
    """
    Run one discovery cycle over all tracked competitors.

    Returns the recorded DiscoveryRun, or None when there was nothing to do or
    the agent call failed. Failures only change ``state.discovery_status``.
    Callers must not start a second run while ``state.is_discovering`` is set;
    a caller may set the flag itself before scheduling this call.
    """
    if not state.competitors:
        return None

    gateway = gateway or agent_client
    agent_id = settings.discovery_agent_id
    names = [c.name for c in state.competitors]

    state.is_discovering = True
    state.active_agent_id = agent_id
    state.discovery_status = "Starting competitor discovery..."
    logger.info(f"Starting discovery for {len(names)} competitors")

    try:
        result = await gateway.invoke(build_discovery_prompt(names), agent_id)

        if not result.success:
            state.discovery_status = f"Error: {result.error or 'Discovery failed. Please try again.'}"
            logger.error(f"Discovery failed: {result.error}")
            return None

        data = result.result
        summary = data.get("summary")
        summary = summary if isinstance(summary, dict) else {}
        total_findings = as_int(summary.get("total_findings"))
        total_competitors = as_int(summary.get("total_competitors"))
        flagged_count = as_int(summary.get("flagged_count"))

        new_findings = parse_findings(data)
        state.prepend_findings(new_findings)

        xlsx_url = result.first_artifact_url()
        if xlsx_url:
            state.set_latest_xlsx_url(xlsx_url)

        run = DiscoveryRun(
            total_findings=total_findings or len(new_findings),
            flagged_count=flagged_count,
            xlsx_url=xlsx_url,
        )
        state.record_discovery_run(run)

        state.discovery_status = (
            f"Discovery complete! Found {run.total_findings} findings "
            f"across {total_competitors or len(names)} competitors."
        )
        logger.info(f"Discovery complete: {len(new_findings)} findings parsed, {flagged_count} flagged")
        return run

    except Exception as e:
        logger.error(f"Discovery error: {e}", exc_info=True)
        state.discovery_status = f"Error: {str(e) or 'An unexpected error occurred.'}"
        return None
    finally:
        state.is_discovering = False
        state.active_agent_id = None
