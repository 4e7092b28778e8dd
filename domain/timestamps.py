from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # stored records without an offset were written in UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def to_iso(value: datetime) -> str:
    return as_utc(value).isoformat()
