"""
Small value helpers shared by the layout normalizers.

Everything here is pure: no Flask context, no database.
"""
import re
import uuid
from datetime import datetime, timezone

from dateutil.parser import isoparse

from .constants import MIN_COLUMNS, MAX_COLUMNS

_HTTP_RE = re.compile(r"^https?://", re.IGNORECASE)
_WWW_RE = re.compile(r"^www\.", re.IGNORECASE)
# Datetimes only, a bare date is not enough
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    """Current UTC time in the `2024-01-31T12:00:00.000Z` form the editor emits."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_iso_date(value) -> bool:
    if not isinstance(value, str) or not _DATETIME_RE.match(value):
        return False
    try:
        isoparse(value)
    except (ValueError, OverflowError):
        return False
    return True


def is_http_url(value: str) -> bool:
    return bool(_HTTP_RE.match(value or ""))


def normalize_href(value) -> str:
    """
    Canonicalize a link target.

    Absolute http(s) URLs and site-relative paths are kept, bare `www.`
    hosts get an https scheme, everything else collapses to ''.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        return ""
    if _HTTP_RE.match(trimmed):
        return trimmed
    if _WWW_RE.match(trimmed):
        return f"https://{trimmed}"
    if trimmed.startswith("/"):
        return trimmed
    return ""


def normalize_internal_href(value) -> str:
    trimmed = (value or "").strip()
    if not trimmed:
        return ""
    if trimmed.startswith("/"):
        return trimmed
    if _HTTP_RE.match(trimmed):
        return trimmed
    if _WWW_RE.match(trimmed):
        return f"https://{trimmed}"
    return ""


def clamp(value, low, high):
    return max(low, min(value, high))


def clamp_columns(columns) -> int:
    try:
        columns = int(columns)
    except (TypeError, ValueError):
        columns = MIN_COLUMNS
    return clamp(columns, MIN_COLUMNS, MAX_COLUMNS)


def trimmed(value) -> str:
    """`str(value).strip()` that treats None as empty."""
    if value is None:
        return ""
    return str(value).strip()


def first_set(*values):
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None
