from __future__ import annotations

import datetime as dt
from email.utils import format_datetime

XML_ESCAPES = str.maketrans(
    {
        "<": "&lt;",
        ">": "&gt;",
        "&": "&amp;",
        '"': "&quot;",
        "'": "&apos;",
    }
)


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def escape_xml(text: str) -> str:
    return text.translate(XML_ESCAPES)


def http_date(value: dt.datetime) -> str:
    """Format as an RFC 1123 date, e.g. ``Wed, 01 Jan 2025 00:00:00 GMT``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return format_datetime(value.astimezone(dt.timezone.utc), usegmt=True)


def midnight_utc(date_str: str) -> dt.datetime:
    date_part = dt.date.fromisoformat(date_str)
    return dt.datetime.combine(date_part, dt.time(0, 0), tzinfo=dt.timezone.utc)
