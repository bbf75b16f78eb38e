"""
Domain records for the intel hub.

Transfer objects (dataclasses) persisted as JSON through the key-value store.
Serialised keys use the camelCase layout of the stored collections, so the
``to_dict``/``from_dict`` pair is the only place that knows about it.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.core.models import FindingStatus
from src.core.utils import as_int, as_str, generate_id, now_iso, today_iso

DEFAULT_CONFIDENCE = 70


def parse_status(value: Any, default: FindingStatus = FindingStatus.APPROVED) -> FindingStatus:
    """Map a stored status value back to the enum."""
    try:
        return FindingStatus(value)
    except ValueError:
        return default


@dataclass
class Competitor:
    """A tracked competitor"""
    name: str
    id: str = field(default_factory=generate_id)
    date_added: str = field(default_factory=today_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "dateAdded": self.date_added}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Competitor":
        return cls(
            id=as_str(data.get("id")) or generate_id(),
            name=as_str(data.get("name")),
            date_added=as_str(data.get("dateAdded")) or today_iso(),
        )


@dataclass
class Finding:
    """One discovered piece of competitor content"""
    competitor: str = "Unknown"
    title: str = "Untitled Finding"
    url: str = ""
    site_type: str = "Web"
    engagement_type: str = "Content"
    owned_earned: str = "Unknown"
    confidence_score: int = DEFAULT_CONFIDENCE
    status: FindingStatus = FindingStatus.APPROVED
    id: str = field(default_factory=generate_id)
    discovered_at: str = field(default_factory=today_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "competitor": self.competitor,
            "title": self.title,
            "url": self.url,
            "siteType": self.site_type,
            "engagementType": self.engagement_type,
            "ownedEarned": self.owned_earned,
            "confidenceScore": self.confidence_score,
            "status": self.status.value,
            "discoveredAt": self.discovered_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        return cls(
            id=as_str(data.get("id")) or generate_id(),
            competitor=as_str(data.get("competitor"), "Unknown"),
            title=as_str(data.get("title"), "Untitled Finding"),
            url=as_str(data.get("url")),
            site_type=as_str(data.get("siteType"), "Web"),
            engagement_type=as_str(data.get("engagementType"), "Content"),
            owned_earned=as_str(data.get("ownedEarned"), "Unknown"),
            confidence_score=as_int(data.get("confidenceScore"), DEFAULT_CONFIDENCE),
            status=parse_status(data.get("status")),
            discovered_at=as_str(data.get("discoveredAt")) or today_iso(),
        )


@dataclass
class Report:
    """Monthly narrative report written by the report agent"""
    month: int
    year: int
    report_title: str = ""
    report_period: str = ""
    executive_summary: str = ""
    trend_analysis: str = ""
    competitor_overviews: str = ""
    comparative_matrix: str = ""
    recommendations: str = ""
    total_findings: int = 0
    competitors_covered: int = 0
    pdf_url: str = ""
    id: str = field(default_factory=generate_id)
    generated_at: str = field(default_factory=now_iso)

    # Narrative sections in display order
    SECTIONS = (
        ("Executive Summary", "executive_summary"),
        ("Trend Analysis", "trend_analysis"),
        ("Competitor Overviews", "competitor_overviews"),
        ("Comparative Matrix", "comparative_matrix"),
        ("Recommendations", "recommendations"),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "month": self.month,
            "year": self.year,
            "reportTitle": self.report_title,
            "reportPeriod": self.report_period,
            "executiveSummary": self.executive_summary,
            "trendAnalysis": self.trend_analysis,
            "competitorOverviews": self.competitor_overviews,
            "comparativeMatrix": self.comparative_matrix,
            "recommendations": self.recommendations,
            "totalFindings": self.total_findings,
            "competitorsCovered": self.competitors_covered,
            "pdfUrl": self.pdf_url,
            "generatedAt": self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Report":
        return cls(
            id=as_str(data.get("id")) or generate_id(),
            month=as_int(data.get("month"), 1),
            year=as_int(data.get("year"), 0),
            report_title=as_str(data.get("reportTitle")),
            report_period=as_str(data.get("reportPeriod")),
            executive_summary=as_str(data.get("executiveSummary")),
            trend_analysis=as_str(data.get("trendAnalysis")),
            competitor_overviews=as_str(data.get("competitorOverviews")),
            comparative_matrix=as_str(data.get("comparativeMatrix")),
            recommendations=as_str(data.get("recommendations")),
            total_findings=as_int(data.get("totalFindings")),
            competitors_covered=as_int(data.get("competitorsCovered")),
            pdf_url=as_str(data.get("pdfUrl")),
            generated_at=as_str(data.get("generatedAt")) or now_iso(),
        )


@dataclass
class DiscoveryRun:
    """One completed discovery cycle"""
    total_findings: int = 0
    flagged_count: int = 0
    xlsx_url: str = ""
    id: str = field(default_factory=generate_id)
    date: str = field(default_factory=now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "totalFindings": self.total_findings,
            "flaggedCount": self.flagged_count,
            "xlsxUrl": self.xlsx_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiscoveryRun":
        return cls(
            id=as_str(data.get("id")) or generate_id(),
            date=as_str(data.get("date")) or now_iso(),
            total_findings=as_int(data.get("totalFindings")),
            flagged_count=as_int(data.get("flaggedCount")),
            xlsx_url=as_str(data.get("xlsxUrl")),
        )


def find_by_id(items, item_id: str) -> Optional[Any]:
    """First record with the given id, or None."""
    return next((item for item in items if item.id == item_id), None)
