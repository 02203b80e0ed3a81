from __future__ import annotations

from datetime import datetime, timedelta, timezone


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def as_utc(dt: datetime) -> datetime:
    # naive values coming from clients or fixtures are taken as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    ensure_aware(dt)
    # fixed width so stored strings sort chronologically
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_iso(s: str) -> datetime:
    return as_utc(datetime.fromisoformat(s))


def next_after(now: datetime, previous: datetime | None) -> datetime:
    """Return `now`, bumped by one microsecond past `previous` if the clock has not moved."""
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now
