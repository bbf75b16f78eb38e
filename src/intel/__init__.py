"""
Intel Module - Competitor tracking, discovery and monthly reports.
"""

from src.intel.models import Competitor, Finding, Report, DiscoveryRun
from src.intel.parser import parse_findings
from src.intel.state import IntelState, InvalidTransition
from src.intel.storage import KeyValueStore, StorageKeys
from src.intel.discovery import run_discovery
from src.intel.reports import generate_report

__all__ = [
    "Competitor",
    "Finding",
    "Report",
    "DiscoveryRun",
    "parse_findings",
    "IntelState",
    "InvalidTransition",
    "KeyValueStore",
    "StorageKeys",
    "run_discovery",
    "generate_report"
]
