"""
Core enums for the intel hub.

NOTE: These are NOT database models. Records are dataclasses in
src/intel/models.py and are persisted as JSON blobs (src/intel/storage.py).
"""
from enum import Enum


class FindingStatus(str, Enum):
    APPROVED = "approved"
    FLAGGED = "flagged"
    DISMISSED = "dismissed"
