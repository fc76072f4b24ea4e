"""
Timestamp parsing helpers for provider payloads.

Each call site names the layout it expects; providers do not share a
single layout.
"""
import re
from datetime import UTC, date, datetime
from typing import Any

# Minute-precision UTC layout used by the NFL single-event endpoint,
# e.g. "2024-09-06T00:20Z".
NFL_GAME_DATE_FORMAT = "%Y-%m-%dT%H:%MZ"

_FRACTION = re.compile(r"\.(\d+)")


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_rfc3339(value: Any) -> datetime:
    """
    Parse an RFC3339 timestamp, with or without fractional seconds.

    Supports:
      - "2024-09-06T00:20:00Z"
      - "2024-09-05T07:00:00.000Z" (any number of fraction digits)
      - "2024-09-06T00:20:00+02:00"

    Raises ValueError on anything else.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Missing/invalid RFC3339 timestamp: {value!r}")

    v = value.strip()
    if v.endswith("Z") or v.endswith("z"):
        v = v[:-1] + "+00:00"
    # fromisoformat accepts at most microsecond precision.
    v = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), v, count=1)

    dt = datetime.fromisoformat(v)
    if dt.tzinfo is None:
        raise ValueError(f"RFC3339 timestamp without offset: {value!r}")
    return dt.astimezone(UTC)


def parse_with_format(value: Any, fmt: str) -> datetime:
    """Parse ``value`` with a strptime layout; the result is UTC."""
    if not isinstance(value, str):
        raise ValueError(f"Missing/invalid timestamp: {value!r}")
    return ensure_utc(datetime.strptime(value, fmt))


def format_day(value: date) -> str:
    """YYYY-MM-DD, as expected by the dateFrom/dateTo query parameters."""
    return value.strftime("%Y-%m-%d")
