"""DTOs for use cases and provider results."""

from custom_domains.application.dtos.provider import (
    EMAIL_DOMAIN_VERIFIED,
    ChallengeRecord,
    DnsPlan,
    EmailDomainState,
    HostingRegistration,
    HostingStatus,
)
from custom_domains.application.dtos.reconciliation import SweepResult

__all__ = [
    "EMAIL_DOMAIN_VERIFIED",
    "ChallengeRecord",
    "DnsPlan",
    "EmailDomainState",
    "HostingRegistration",
    "HostingStatus",
    "SweepResult",
]
