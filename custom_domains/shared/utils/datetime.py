"""UTC helpers. Every timestamp on a DomainConfig (lastCheckedAt, configuredAt, verifiedAt) is aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Default clock for the provisioning service and the sweep."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalise a stored timestamp: naive values are taken as UTC, aware ones converted."""
    if value is None or value.tzinfo is UTC:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
