from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Union

DueDateInput = Union[datetime, date, str]


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def to_iso(dt: datetime) -> str:
    ensure_aware(dt)
    # store as ISO 8601 with offset
    return dt.isoformat()


def from_iso(s: str) -> datetime:
    # Python can parse ISO with offset via fromisoformat
    return datetime.fromisoformat(s)


def normalize_due_date(value: DueDateInput, tz: tzinfo) -> datetime:
    """
    Turn a due date given as datetime, date or ISO string into an aware datetime.

    Naive values are interpreted in `tz`. A bare date means midnight of that day.
    Raises ValueError for anything unparseable.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Due date is empty.")
        try:
            dt = from_iso(text)
        except ValueError as e:
            raise ValueError(f"Invalid due date '{value}'. Use YYYY-MM-DD or ISO 8601.") from e
    else:
        raise ValueError(f"Unsupported due date type: {type(value).__name__}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt
