"""Unit tests for the monthly report workflow"""
import pytest

from src.core.config import settings
from src.core.data_types import AgentResult
from src.core.models import FindingStatus
from src.intel.reports import build_report_prompt, distinct_competitors, generate_report, month_name


@pytest.mark.asyncio
async def test_no_approved_findings_is_a_no_op(state, make_finding, make_gateway):
    state.findings = [make_finding(status=FindingStatus.FLAGGED)]
    gateway = make_gateway(result=AgentResult(success=True))

    assert await generate_report(state, 2, 2026, gateway) is None

    gateway.invoke.assert_not_called()
    assert state.report_status == ""
    assert state.reports == []


@pytest.mark.asyncio
async def test_successful_report_is_stored_first(seeded_state, make_gateway, report_payload, memory_store):
    gateway = make_gateway(result=AgentResult.from_payload(report_payload))

    report = await generate_report(seeded_state, 2, 2026, gateway)
    await seeded_state.flush()

    assert report.month == 2 and report.year == 2026
    assert report.report_title == "February 2026 Competitive Landscape"
    assert report.executive_summary.startswith("## Executive Summary")
    assert report.total_findings == 2
    assert report.competitors_covered == 2
    assert report.pdf_url == "https://files.example.com/report.pdf"
    assert report.generated_at

    assert seeded_state.reports[0] is report
    assert seeded_state.report_status == "Report generated successfully for February 2026!"
    assert seeded_state.is_generating is False
    assert memory_store.data["ciHub_reports"][0]["pdfUrl"] == "https://files.example.com/report.pdf"


@pytest.mark.asyncio
async def test_missing_or_mistyped_fields_get_defaults(seeded_state, make_gateway):
    payload = {
        "success": True,
        "response": {"result": {"report_title": 5, "executive_summary": ["x"], "total_findings_analyzed": "many"}},
    }

    report = await generate_report(seeded_state, 3, 2026, make_gateway(result=AgentResult.from_payload(payload)))

    assert report.report_title == "March 2026 Intelligence Report"
    assert report.report_period == "March 2026"
    assert report.executive_summary == ""
    assert report.recommendations == ""
    assert report.total_findings == 2
    assert report.competitors_covered == 2
    assert report.pdf_url == ""


@pytest.mark.asyncio
async def test_prompt_covers_only_approved_findings(seeded_state, make_gateway, report_payload):
    gateway = make_gateway(result=AgentResult.from_payload(report_payload))

    await generate_report(seeded_state, 2, 2026, gateway)

    message, agent_id = gateway.invoke.call_args.args
    assert agent_id == settings.report_agent_id
    assert "monthly competitive intelligence report for February 2026" in message
    assert "Competitor: Globex, Title: Globex partners with Initech, Site Type: News" in message
    assert "Rumoured Acme acquisition" not in message
    assert "Acme launches rocket skates" not in message
    assert "Total approved findings: 2." in message
    assert message.endswith("Competitors covered: Globex, Acme.")


def test_summary_line_format(make_finding):
    finding = make_finding(competitor="Acme", title="Skates", site_type="Blog", engagement_type="Launch",
                           owned_earned="Owned", confidence_score=88)
    prompt = build_report_prompt([finding], 1, 2026)

    assert ("Competitor: Acme, Title: Skates, Site Type: Blog, Engagement: Launch, "
            "Source: Owned, Confidence: 88%") in prompt


@pytest.mark.asyncio
async def test_failure_sets_error_status(seeded_state, make_gateway):
    gateway = make_gateway(result=AgentResult(success=False, error="Agent API failed: 500"))

    assert await generate_report(seeded_state, 2, 2026, gateway) is None

    assert seeded_state.report_status == "Error: Agent API failed: 500"
    assert seeded_state.reports == []
    assert seeded_state.is_generating is False


@pytest.mark.asyncio
async def test_exception_sets_error_status(seeded_state, make_gateway):
    gateway = make_gateway(side_effect=TimeoutError())

    assert await generate_report(seeded_state, 2, 2026, gateway) is None

    assert seeded_state.report_status == "Error: An unexpected error occurred."
    assert seeded_state.active_agent_id is None


@pytest.mark.parametrize("month,expected", [(1, "January"), (12, "December"), (0, "Unknown"), (13, "Unknown")])
def test_month_name(month, expected):
    assert month_name(month) == expected


def test_distinct_competitors_keeps_first_seen_order(make_finding):
    findings = [make_finding(competitor=name) for name in ("Globex", "Acme", "Globex", "Initech")]
    assert distinct_competitors(findings) == ["Globex", "Acme", "Initech"]
