"""Unit tests for the discovery findings parser"""
import pytest
from datetime import date

from src.core.models import FindingStatus
from src.intel.parser import parse_findings


def _overview(text, flagged=None, **extra):
    data = {"detailed_findings_overview": text}
    if flagged is not None:
        data["flagged_items_summary"] = flagged
    data.update(extra)
    return data


# --- Empty / malformed input ---

@pytest.mark.parametrize("data", [
    {},
    {"detailed_findings_overview": "", "flagged_items_summary": ""},
    {"detailed_findings_overview": "   \n\t ", "flagged_items_summary": "\n\n"},
    {"detailed_findings_overview": 42, "flagged_items_summary": ["Competitor: Acme"]},
    None,
    "Competitor: Acme",
])
def test_blank_or_malformed_input_returns_nothing(data):
    assert parse_findings(data) == []


# --- Structured blocks ---

def test_two_record_example():
    text = "Competitor: Acme\nTitle: New Launch\nConfidence: 90%\nStatus: flagged\nCompetitor: Globex\nTitle: Partnership"
    findings = parse_findings(_overview(text))

    assert len(findings) == 2
    acme, globex = findings

    assert acme.competitor == "Acme"
    assert acme.title == "New Launch"
    assert acme.confidence_score == 90
    assert acme.status == FindingStatus.FLAGGED
    assert acme.url == ""
    assert acme.site_type == "Web"
    assert acme.engagement_type == "Content"
    assert acme.owned_earned == "Unknown"

    assert globex.competitor == "Globex"
    assert globex.title == "Partnership"
    assert globex.confidence_score == 70
    assert globex.status == FindingStatus.APPROVED


def test_bullet_labels_and_aliases():
    text = (
        "- Competitor: Initech\n"
        "- Title: TPS report automation\n"
        "- URL: https://initech.example.com/tps\n"
        "- Site Type: Blog\n"
        "- Engagement: Product Update\n"
        "- Source: Owned\n"
        "- Score: 81\n"
    )
    [finding] = parse_findings(_overview(text))

    assert finding.competitor == "Initech"
    assert finding.title == "TPS report automation"
    assert finding.url == "https://initech.example.com/tps"
    assert finding.site_type == "Blog"
    assert finding.engagement_type == "Product Update"
    assert finding.owned_earned == "Owned"
    assert finding.confidence_score == 81


def test_labels_are_case_insensitive():
    text = "COMPETITOR: Acme\nTITLE: Loud post\nSITE TYPE: Forum\nENGAGEMENT TYPE: Discussion\nOWNED/EARNED: Earned"
    [finding] = parse_findings(_overview(text))

    assert finding.competitor == "Acme"
    assert finding.title == "Loud post"
    assert finding.site_type == "Forum"
    assert finding.engagement_type == "Discussion"
    assert finding.owned_earned == "Earned"


def test_overview_and_flagged_summary_are_read_in_order():
    findings = parse_findings(_overview(
        "Competitor: Acme\nTitle: From overview",
        flagged="Competitor: Globex\nTitle: From flagged\nStatus: Flagged",
    ))

    assert [f.title for f in findings] == ["From overview", "From flagged"]
    assert findings[1].status == FindingStatus.FLAGGED


def test_blank_lines_do_not_split_records():
    text = "Competitor: Acme\n\n\nTitle: Spread out\n\n   \nConfidence: 60"
    [finding] = parse_findings(_overview(text))

    assert finding.title == "Spread out"
    assert finding.confidence_score == 60


def test_unlabelled_lines_are_ignored():
    text = (
        "Here is what we found this week:\n"
        "Competitor: Acme\n"
        "Title: Skates\n"
        "This launch got a lot of attention on social media.\n"
        "Notes: should not end up anywhere\n"
    )
    [finding] = parse_findings(_overview(text))

    assert finding.title == "Skates"
    assert "attention" not in finding.title


def test_title_before_first_competitor_becomes_unknown_competitor():
    text = "Title: Orphan headline\nCompetitor: Acme\nTitle: Real one"
    findings = parse_findings(_overview(text))

    assert [(f.competitor, f.title) for f in findings] == [("Unknown", "Orphan headline"), ("Acme", "Real one")]


def test_competitor_only_records_use_same_title_default():
    findings = parse_findings(_overview("Competitor: Acme\nCompetitor: Globex"))

    assert [f.title for f in findings] == ["Untitled Finding", "Untitled Finding"]


def test_empty_competitor_value_falls_back_to_unknown():
    [finding] = parse_findings(_overview("Competitor:\nTitle: Nameless"))

    assert finding.competitor == "Unknown"
    assert finding.title == "Nameless"


def test_value_may_contain_colons():
    [finding] = parse_findings(_overview("Competitor: Acme\nTitle: Launch: the sequel\nURL: https://acme.example.com/a"))

    assert finding.title == "Launch: the sequel"
    assert finding.url == "https://acme.example.com/a"


# --- Confidence ---

@pytest.mark.parametrize("line,expected", [
    ("Confidence: 85%", 85),
    ("confidence: 85", 85),
    ("Score: 42 (medium)", 42),
    ("Score: abc", 70),
    ("Confidence: %", 70),
    ("Confidence: 150", 100),
    ("Confidence: -5", 0),
])
def test_confidence_parsing(line, expected):
    [finding] = parse_findings(_overview(f"Competitor: Acme\n{line}"))
    assert finding.confidence_score == expected


def test_non_numeric_confidence_keeps_earlier_value():
    [finding] = parse_findings(_overview("Competitor: Acme\nConfidence: 55\nScore: unsure"))
    assert finding.confidence_score == 55


# --- Status ---

@pytest.mark.parametrize("value,expected", [
    ("flagged for review", FindingStatus.FLAGGED),
    ("FLAG", FindingStatus.FLAGGED),
    ("dismiss", FindingStatus.DISMISSED),
    ("Dismissed - off topic", FindingStatus.DISMISSED),
    ("looks good", FindingStatus.APPROVED),
    ("approved", FindingStatus.APPROVED),
])
def test_status_classification(value, expected):
    [finding] = parse_findings(_overview(f"Competitor: Acme\nStatus: {value}"))
    assert finding.status == expected


# --- Fallback ---

def test_prose_only_overview_produces_single_summary_finding():
    overview = "The agent reviewed\nmany sources this week. " + ("Lots of activity. " * 20)
    findings = parse_findings(_overview(overview))

    assert len(findings) == 1
    finding = findings[0]
    assert finding.competitor == "Multiple"
    assert len(finding.title) <= 150
    assert "\n" not in finding.title
    assert finding.title.startswith("The agent reviewed many sources")
    assert finding.site_type == "Mixed"
    assert finding.engagement_type == "Various"
    assert finding.owned_earned == "Mixed"
    assert finding.confidence_score == 75
    assert finding.status == FindingStatus.APPROVED
    assert finding.url == ""


def test_fallback_uses_summary_breakdown_strings():
    [finding] = parse_findings(_overview(
        "Nothing structured here.",
        summary={"findings_by_site_type": "Blog: 3, News: 2", "findings_by_engagement_type": 5},
    ))

    assert finding.site_type == "Blog: 3, News: 2"
    assert finding.engagement_type == "Various"


def test_no_fallback_when_only_flagged_summary_has_prose():
    assert parse_findings(_overview("", flagged="Two items need a second look.")) == []


# --- Freshness / idempotence ---

def test_records_are_dated_today():
    [finding] = parse_findings(_overview("Competitor: Acme\nTitle: Today"))
    assert finding.discovered_at == date.today().isoformat()


def test_parsing_twice_differs_only_in_ids():
    data = _overview(
        "Competitor: Acme\nTitle: New Launch\nConfidence: 90%\nStatus: flagged",
        flagged="Competitor: Globex\nTitle: Partnership",
    )
    first = [f.to_dict() for f in parse_findings(data)]
    second = [f.to_dict() for f in parse_findings(data)]

    assert len(first) == len(second) == 2
    assert {f["id"] for f in first}.isdisjoint({f["id"] for f in second})
    for a, b in zip(first, second):
        a.pop("id"), b.pop("id")
        a.pop("discoveredAt"), b.pop("discoveredAt")
        assert a == b


def test_only_newlines_separate_lines():
    text = "Competitor: Acme\r\nTitle: Launch notes\x0cand more\x85end\r\nURL: https://acme.example.com\r\n"
    [finding] = parse_findings(_overview(text))

    assert finding.title == "Launch notes\x0cand more\x85end"
    assert finding.url == "https://acme.example.com"
