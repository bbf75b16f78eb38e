"""
Shared utilities.
"""
import math
import secrets
import string
from datetime import date, datetime, timezone
from typing import Any, Optional

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(length: int = 26) -> str:
    """Random base-36 identifier. Collisions are not checked."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def today_iso() -> str:
    """Current calendar date as YYYY-MM-DD."""
    return date.today().isoformat()


def now_iso() -> str:
    """Current UTC timestamp in ISO 8601 with a trailing Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def as_str(value: Any, default: str = "") -> str:
    """Return value if it is a string, else the default."""
    return value if isinstance(value, str) else default


def as_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """
    Return value as int if it is a real number (bools excluded), else the default.
    Finite floats are truncated; NaN and infinity give the default.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return int(value)
