"""Demo data shown while sample mode is on. Never persisted."""
from typing import List

from src.core.models import FindingStatus
from src.intel.models import Competitor, DiscoveryRun, Finding, Report


def sample_competitors() -> List[Competitor]:
    return [
        Competitor(id="sc1", name="OpenAI", date_added="2025-12-01"),
        Competitor(id="sc2", name="Google DeepMind", date_added="2025-12-05"),
        Competitor(id="sc3", name="Anthropic", date_added="2025-12-10"),
        Competitor(id="sc4", name="Cohere", date_added="2026-01-02"),
        Competitor(id="sc5", name="Mistral AI", date_added="2026-01-15"),
    ]


def sample_findings() -> List[Finding]:
    rows = [
        ("sf1", "OpenAI", "GPT-5 Launch Announcement Blog Post", "https://openai.com/blog/gpt-5",
         "Blog", "Product Launch", "Owned", 95, FindingStatus.APPROVED, "2026-02-20"),
        ("sf2", "Google DeepMind", "Gemini 3.0 Technical Paper Published", "https://arxiv.org/abs/gemini3",
         "Research", "Research Publication", "Owned", 92, FindingStatus.APPROVED, "2026-02-19"),
        ("sf3", "Anthropic", "Constitutional AI v2 Framework Release", "https://anthropic.com/research/cai-v2",
         "Blog", "Research Publication", "Owned", 88, FindingStatus.FLAGGED, "2026-02-18"),
        ("sf4", "Cohere", "Enterprise RAG Partnership with Salesforce", "https://techcrunch.com/cohere-salesforce",
         "News", "Partnership", "Earned", 78, FindingStatus.FLAGGED, "2026-02-17"),
        ("sf5", "Mistral AI", "Series C Funding Round Closed at $2B", "https://bloomberg.com/mistral-series-c",
         "News", "Funding", "Earned", 90, FindingStatus.APPROVED, "2026-02-16"),
        ("sf6", "OpenAI", "Potential Reddit Data Licensing Deal", "https://reddit.com/r/technology/openai",
         "Social", "Data Partnership", "Earned", 55, FindingStatus.DISMISSED, "2026-02-15"),
        ("sf7", "Google DeepMind", "AlphaFold 4 Healthcare Collaboration", "https://deepmind.google/alphafold4-healthcare",
         "Blog", "Product Launch", "Owned", 85, FindingStatus.APPROVED, "2026-02-14"),
    ]
    return [
        Finding(id=fid, competitor=comp, title=title, url=url, site_type=site, engagement_type=engagement,
                owned_earned=source, confidence_score=score, status=status, discovered_at=found)
        for fid, comp, title, url, site, engagement, source, score, status, found in rows
    ]


def sample_reports() -> List[Report]:
    return [
        Report(
            id="sr1",
            month=1,
            year=2026,
            report_title="AI Competitive Landscape - January 2026",
            report_period="January 2026",
            executive_summary=(
                "## Executive Summary\n\nJanuary 2026 saw significant movement across the AI competitive "
                "landscape. **OpenAI** continued to dominate mindshare with its GPT-5 rollout, while "
                "**Google DeepMind** focused on research publications.\n\n- Total findings analyzed: 42\n"
                "- Active competitors tracked: 5\n- Key trend: Enterprise AI adoption accelerating"
            ),
            trend_analysis=(
                "### Key Trends\n\n1. **Enterprise AI Integration** - All major players are shifting focus "
                "to enterprise solutions\n2. **Open Source Competition** - Mistral and Meta continue to "
                "challenge proprietary models\n3. **Regulation Preparedness** - Companies are pre-emptively "
                "publishing safety frameworks"
            ),
            competitor_overviews=(
                "### OpenAI\n- 15 findings, mostly product launches\n- Strong owned media presence\n\n"
                "### Google DeepMind\n- 12 findings, research-heavy\n- Growing healthcare applications"
            ),
            comparative_matrix=(
                "### Comparative Analysis\n\n- **OpenAI**: 15 findings, Positive sentiment, High activity\n"
                "- **Google DeepMind**: 12 findings, Neutral sentiment, Medium activity\n"
                "- **Anthropic**: 8 findings, Positive sentiment, Medium activity"
            ),
            recommendations=(
                "### Recommendations\n\n1. **Monitor OpenAI enterprise pricing** - potential market "
                "disruption\n2. **Track Mistral open-source releases** - competitive threat to API "
                "business\n3. **Engage with regulatory discussions** - first-mover advantage in compliance"
            ),
            total_findings=42,
            competitors_covered=5,
            pdf_url="",
            generated_at="2026-02-01T10:00:00Z",
        ),
    ]


def sample_discovery_history() -> List[DiscoveryRun]:
    return [
        DiscoveryRun(id="sd1", date="2026-02-20T14:30:00Z", total_findings=7, flagged_count=2, xlsx_url=""),
        DiscoveryRun(id="sd2", date="2026-02-13T09:15:00Z", total_findings=5, flagged_count=1, xlsx_url=""),
    ]
