"""DomainConfig entity: one tenant-domain attachment and its verification state.

Owns the status state machine. The orchestrator decides what the providers
observed; this entity decides what that means for the persisted state.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar

from custom_domains.domain.entities.domain_record import DomainRecord
from custom_domains.domain.enums import (
    DomainStatus,
    DomainType,
    RecordPurpose,
)
from custom_domains.domain.exceptions import ValidationException
from custom_domains.shared.utils.datetime import ensure_utc


@dataclass
class DomainConfig:
    """Domain entity for a tenant's custom domain (persistence-independent).

    domain_type is derived once at attach time and never reassigned; a
    different domain type means a new DomainConfig. records is regenerable
    from domain_type and email_enabled and is cached here to carry the
    per-record verified state.
    """

    tenant_id: str
    domain: str
    domain_type: DomainType
    email_enabled: bool = False
    hosting_provider_id: str | None = None
    hosting_verified: bool = False
    hosting_registered: bool = False
    email_provider_id: str | None = None
    email_verified: bool = False
    records: list[DomainRecord] = field(default_factory=list)
    status: DomainStatus = DomainStatus.PENDING
    error_message: str | None = None
    last_checked_at: datetime | None = None
    configured_at: datetime | None = None

    # pending -> verifying -> {active, error}; error -> verifying (manual retry);
    # active -> verifying (drift). pending may also jump straight to active or error.
    _TRANSITIONS: ClassVar[dict[DomainStatus, frozenset[DomainStatus]]] = {
        DomainStatus.PENDING: frozenset(
            {DomainStatus.VERIFYING, DomainStatus.ACTIVE, DomainStatus.ERROR}
        ),
        DomainStatus.VERIFYING: frozenset({DomainStatus.ACTIVE, DomainStatus.ERROR}),
        DomainStatus.ACTIVE: frozenset({DomainStatus.VERIFYING, DomainStatus.ERROR}),
        DomainStatus.ERROR: frozenset({DomainStatus.VERIFYING}),
    }

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate invariants. Raises ValidationException if violated."""
        if not self.tenant_id:
            raise ValidationException("Tenant ID is required", field="tenant_id")
        if not self.domain:
            raise ValidationException("Domain is required", field="domain")
        if not self.email_enabled and self.email_records:
            raise ValidationException(
                "Email records present but email is not enabled", field="records"
            )
        if self.status == DomainStatus.ACTIVE and not self.is_fully_verified:
            raise ValidationException(
                "Active domain must be verified by every required provider",
                field="status",
            )

    @property
    def web_records(self) -> list[DomainRecord]:
        return [r for r in self.records if r.purpose == RecordPurpose.WEB]

    @property
    def email_records(self) -> list[DomainRecord]:
        return [r for r in self.records if r.purpose == RecordPurpose.EMAIL]

    @property
    def is_fully_verified(self) -> bool:
        """Whether every required provider reports the domain verified."""
        return self.hosting_verified and (not self.email_enabled or self.email_verified)

    def _move_to(self, new_status: DomainStatus) -> None:
        if new_status == self.status:
            return
        if new_status not in self._TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid status transition: {self.status.value} -> {new_status.value}"
            )
        self.status = new_status

    def apply_hosting_status(
        self,
        *,
        registered: bool,
        verified: bool,
        dns_configured: bool,
        configured_by: str | None,
        now: datetime,
    ) -> None:
        """Record what the hosting provider observed and update web record flags.

        A record is verified when the provider says DNS resolves through that
        record type; www follows the domain verification flag; with DNS
        configured but no configured_by hint, all web records count as verified.
        """
        self.hosting_registered = registered
        self.hosting_verified = verified and dns_configured
        updated: list[DomainRecord] = []
        for record in self.records:
            if record.purpose != RecordPurpose.WEB:
                updated.append(record)
                continue
            observed = (
                (configured_by is not None and record.type.value == configured_by)
                or (record.host == "www" and verified)
                or (dns_configured and configured_by is None)
            )
            updated.append(record.mark_verified(observed, now))
        self.records = updated

    def replace_email_records(
        self, records: list[DomainRecord], now: datetime
    ) -> None:
        """Overwrite the email records with the provider's current set.

        Provider records are authoritative, so there is no diffing; only an
        already-verified record keeps its original verified_at.
        """
        previous = {r.identity(): r for r in self.email_records if r.verified}
        fresh: list[DomainRecord] = []
        for record in records:
            tagged = replace(record, purpose=RecordPurpose.EMAIL, verified=False, verified_at=None)
            if record.verified:
                prior = previous.get(record.identity())
                stamp = prior.verified_at if prior else record.verified_at
                tagged = replace(tagged, verified=True, verified_at=stamp or now)
            fresh.append(tagged)
        self.records = self.web_records + fresh

    def apply_email_status(
        self, *, verified: bool, records: list[DomainRecord], now: datetime
    ) -> None:
        """Record what the email provider observed (status + per-record flags)."""
        self.email_verified = verified
        self.replace_email_records(records, now)

    def mark_checked(self, now: datetime) -> None:
        """Bump last_checked_at (every reconciliation pass, even a no-op one)."""
        self.last_checked_at = now

    def resolve_status(self, now: datetime) -> DomainStatus:
        """Move to active when fully verified, otherwise to verifying.

        Never moves back to pending. configured_at is set only on the first
        transition into active.

        Returns:
            The new status.
        """
        if self.status == DomainStatus.ERROR:
            raise ValueError("Domain is in error; retry it before reconciling")
        if self.is_fully_verified:
            self._move_to(DomainStatus.ACTIVE)
            if self.configured_at is None:
                self.configured_at = now
        else:
            self._move_to(DomainStatus.VERIFYING)
        return self.status

    def fail(self, message: str) -> None:
        """Move to error with a message (fatal provider error)."""
        self._move_to(DomainStatus.ERROR)
        self.error_message = message

    def begin_retry(self) -> None:
        """Manual retry: error -> verifying and clear the error message.

        No-op for configs that are not in error.
        """
        if self.status != DomainStatus.ERROR:
            return
        self._move_to(DomainStatus.VERIFYING)
        self.error_message = None

    def to_document(self) -> dict[str, Any]:
        """Serialize to the persisted document layout (camelCase field names)."""
        return {
            "tenantId": self.tenant_id,
            "domain": self.domain,
            "domainType": self.domain_type.value,
            "hostingProviderId": self.hosting_provider_id,
            "hostingVerified": self.hosting_verified,
            "hostingRegistered": self.hosting_registered,
            "emailEnabled": self.email_enabled,
            "emailProviderId": self.email_provider_id,
            "emailVerified": self.email_verified,
            "records": [r.to_document() for r in self.records],
            "status": self.status.value,
            "errorMessage": self.error_message,
            "lastCheckedAt": self.last_checked_at,
            "configuredAt": self.configured_at,
        }

    @classmethod
    def from_document(cls, tenant_id: str, data: dict[str, Any]) -> "DomainConfig":
        """Build from a stored document; tenant_id comes from the document id."""
        return cls(
            tenant_id=data.get("tenantId") or tenant_id,
            domain=data.get("domain", ""),
            domain_type=DomainType(data.get("domainType", DomainType.ROOT.value)),
            email_enabled=bool(data.get("emailEnabled", False)),
            hosting_provider_id=data.get("hostingProviderId"),
            hosting_verified=bool(data.get("hostingVerified", False)),
            hosting_registered=bool(data.get("hostingRegistered", False)),
            email_provider_id=data.get("emailProviderId"),
            email_verified=bool(data.get("emailVerified", False)),
            records=[DomainRecord.from_document(r) for r in data.get("records") or []],
            status=DomainStatus(data.get("status", DomainStatus.PENDING.value)),
            error_message=data.get("errorMessage"),
            last_checked_at=ensure_utc(data.get("lastCheckedAt")),
            configured_at=ensure_utc(data.get("configuredAt")),
        )
