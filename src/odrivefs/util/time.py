from __future__ import annotations

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

_FRACTION_RE = re.compile(r"\.(\d+)")


def now_utc() -> datetime:
    """Return current time as tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC3339 timestamp string into tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56.1234567Z  (Graph may return 7 fractional digits)
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    # fromisoformat only takes up to microsecond precision.
    s = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s, count=1)

    dt = datetime.fromisoformat(s)  # raises ValueError if invalid
    dt = normalize_dt(dt)
    return dt.astimezone(timezone.utc)


def parse_http_date(value: str) -> datetime:
    """Parse an RFC 7231 HTTP-date (the ``Date`` response header) into UTC."""
    if not isinstance(value, str) or not value:
        raise ValueError("HTTP date value must be a non-empty string")

    try:
        dt = parsedate_to_datetime(value)
    except (TypeError, IndexError) as exc:
        raise ValueError(f"Invalid HTTP date: {value!r}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_epoch_ms(dt: datetime | None) -> int:
    """Milliseconds since the Unix epoch; 0 when dt is None."""
    if dt is None:
        return 0
    return int(normalize_dt(dt).timestamp() * 1000)


def normalize_dt(dt: datetime) -> datetime:
    """Ensure datetime is tz-aware. Raises if naive."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt
