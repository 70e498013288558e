from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current time as naive UTC, the form timestamps are stored in"""
    return datetime.now(UTC).replace(tzinfo=None)
