"""DNS record entity: one entry the tenant's registrar must publish."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from custom_domains.domain.enums import RecordPurpose, RecordType
from custom_domains.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class DomainRecord:
    """Required DNS record plus whether it has been observed published.

    Web records are computed locally; email records are provider-owned
    and stored exactly as the email provider returned them.
    """

    type: RecordType
    host: str
    value: str
    purpose: RecordPurpose
    priority: int | None = None
    verified: bool = False
    verified_at: datetime | None = None

    def identity(self) -> tuple[str, str, str]:
        """Key used to carry verification state across provider refreshes."""
        return (self.type.value, self.host, self.value)

    def mark_verified(self, verified: bool, now: datetime) -> "DomainRecord":
        """Return a copy with the verified flag applied.

        verified_at is set on the transition to verified, kept while the
        record stays verified, and cleared when it stops being observed.
        """
        if verified:
            if self.verified and self.verified_at is not None:
                return self
            return replace(self, verified=True, verified_at=now)
        if not self.verified and self.verified_at is None:
            return self
        return replace(self, verified=False, verified_at=None)

    def to_document(self) -> dict[str, Any]:
        """Serialize with the persisted field names."""
        return {
            "type": self.type.value,
            "host": self.host,
            "value": self.value,
            "priority": self.priority,
            "purpose": self.purpose.value,
            "verified": self.verified,
            "verifiedAt": self.verified_at,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "DomainRecord":
        priority = data.get("priority")
        return cls(
            type=RecordType(data["type"]),
            host=data.get("host", ""),
            value=data.get("value", ""),
            purpose=RecordPurpose(data.get("purpose", RecordPurpose.WEB.value)),
            priority=int(priority) if priority is not None else None,
            verified=bool(data.get("verified", False)),
            verified_at=ensure_utc(data.get("verifiedAt")),
        )
