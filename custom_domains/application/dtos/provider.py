"""DTOs returned by the provider clients (no dependency on HTTP payload shapes)."""

from dataclasses import dataclass, field

from custom_domains.domain.entities import DomainRecord
from custom_domains.domain.enums import DomainType


@dataclass(frozen=True)
class ChallengeRecord:
    """Ownership challenge the hosting provider asks for (e.g. a TXT under _vercel)."""

    type: str
    domain: str
    value: str
    reason: str | None = None


@dataclass(frozen=True)
class HostingRegistration:
    """Result of HostingDomainClient.register.

    already_registered is True when the provider reported the domain as
    already attached to this project (idempotent retry path).
    """

    provider_id: str
    verified: bool
    challenge_records: list[ChallengeRecord] = field(default_factory=list)
    already_registered: bool = False


@dataclass(frozen=True)
class HostingStatus:
    """Result of HostingDomainClient.check_status.

    verified: the provider accepted ownership of the domain.
    dns_configured: the provider currently sees DNS resolving to it.
    configured_by: record type the provider sees DNS going through ("A", "CNAME") or None.
    """

    verified: bool
    dns_configured: bool
    configured_by: str | None = None


EMAIL_DOMAIN_VERIFIED = "verified"


@dataclass(frozen=True)
class EmailDomainState:
    """Sending domain as the email provider sees it (register / lookup / verify)."""

    provider_id: str
    status: str
    records: list[DomainRecord] = field(default_factory=list)

    @property
    def verified(self) -> bool:
        return self.status == EMAIL_DOMAIN_VERIFIED


@dataclass(frozen=True)
class DnsPlan:
    """DnsRecordPlanner output: domain classification and the records to publish."""

    domain_type: DomainType
    records: list[DomainRecord]
