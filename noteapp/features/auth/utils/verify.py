from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how expiry columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_expired(expires_at: datetime, now: datetime) -> bool:
    # a code is valid strictly before its expiry instant
    return now >= expires_at


def normalize_email(email: str) -> str:
    return email.strip().lower()
