"""Findings parser for discovery agent responses.

The discovery agent answers in loosely structured prose: blocks of
``Label: value`` lines, one block per finding, each block opened by a
``Competitor:`` line. The output format is not guaranteed, so parsing is a
best-effort line scrape. It never raises; when nothing structured is found
but the agent did write an overview, a single summary finding is returned
so a discovery run always produces something reviewable.

Label grammar (case-insensitive, optional leading ``- `` bullet):

    competitor:                      starts a new finding
    title:                           title
    url:                             url
    site type:                       site_type
    engagement type: / engagement:   engagement_type
    owned/earned: / source:          owned_earned
    confidence: / score:             confidence_score (integer, % allowed)
    status:                          status (flag -> flagged, dismiss -> dismissed, else approved)

Adding an alias is a one-line change to ``FIELD_RULES``.
"""
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from src.core.models import FindingStatus
from src.intel.models import Finding

logger = logging.getLogger(__name__)

FALLBACK_TITLE_LENGTH = 150
FALLBACK_CONFIDENCE = 75


def _label(aliases: str) -> re.Pattern:
    return re.compile(rf"^(?:-\s*)?(?:{aliases})\s*:\s*(?P<value>.*)$", re.IGNORECASE)


def _parse_confidence(value: str) -> Optional[int]:
    match = re.match(r"[+-]?\d+", value.replace("%", "", 1).strip())
    if not match:
        return None
    return max(0, min(100, int(match.group(0))))


def _parse_status(value: str) -> FindingStatus:
    value = value.lower()
    if "flag" in value:
        return FindingStatus.FLAGGED
    if "dismiss" in value:
        return FindingStatus.DISMISSED
    return FindingStatus.APPROVED


COMPETITOR_RULE = _label(r"competitor")

# (matcher, field, converter) scanned in order; first match wins.
FIELD_RULES: List[Tuple[re.Pattern, str, Callable[[str], Any]]] = [
    (_label(r"title"), "title", str),
    (_label(r"url"), "url", str),
    (_label(r"site\s*type"), "site_type", str),
    (_label(r"engagement\s*type|engagement"), "engagement_type", str),
    (_label(r"owned/earned|source"), "owned_earned", str),
    (_label(r"confidence|score"), "confidence_score", _parse_confidence),
    (_label(r"status"), "status", _parse_status),
]


def _finalize(partial: Dict[str, Any]) -> Finding:
    """Build a Finding, applying defaults for every field the block left out."""
    return Finding(**{k: v for k, v in partial.items() if v not in (None, "")})


def _is_started(partial: Dict[str, Any]) -> bool:
    return bool(partial.get("title") or partial.get("competitor"))


def _text_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def parse_findings(data: Any) -> List[Finding]:
    """
    Convert a discovery agent result into Finding records.

    Reads ``detailed_findings_overview`` and ``flagged_items_summary`` (in
    that order) as one block of text. Returns an empty list when both are
    blank.
    """
    if not isinstance(data, dict):
        data = {}

    overview = _text_field(data, "detailed_findings_overview")
    flagged_summary = _text_field(data, "flagged_items_summary")
    text = f"{overview}\n{flagged_summary}"
    if not text.strip():
        return []

    findings: List[Finding] = []
    current: Dict[str, Any] = {}

    for line in (l.strip() for l in text.split("\n")):
        if not line:
            continue

        match = COMPETITOR_RULE.match(line)
        if match:
            if _is_started(current):
                findings.append(_finalize(current))
            current = {"competitor": match.group("value").strip()}
            continue

        for pattern, field_name, convert in FIELD_RULES:
            match = pattern.match(line)
            if match:
                value = convert(match.group("value").strip())
                if value is not None:
                    current[field_name] = value
                break

    if _is_started(current):
        findings.append(_finalize(current))

    if not findings and overview.strip():
        logger.info("No structured findings in agent response, using overview fallback")
        findings.append(_fallback_finding(overview, data.get("summary")))

    return findings


def _fallback_finding(overview: str, summary: Any) -> Finding:
    """Single summary record used when the agent wrote prose only."""
    summary = summary if isinstance(summary, dict) else {}
    site_type = summary.get("findings_by_site_type")
    engagement_type = summary.get("findings_by_engagement_type")
    return Finding(
        competitor="Multiple",
        title=re.sub(r"[\r\n]", " ", overview[:FALLBACK_TITLE_LENGTH]),
        url="",
        site_type=site_type if isinstance(site_type, str) else "Mixed",
        engagement_type=engagement_type if isinstance(engagement_type, str) else "Various",
        owned_earned="Mixed",
        confidence_score=FALLBACK_CONFIDENCE,
        status=FindingStatus.APPROVED,
    )
