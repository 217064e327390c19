"""Domain enumerations for custom domain provisioning.

Stored as their string values in the DomainConfig document.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class DomainType(_ValuesMixin, str, Enum):
    """Apex (root) domain or subdomain; fixed when the domain is attached."""

    ROOT = "root"
    SUBDOMAIN = "subdomain"


class DomainStatus(_ValuesMixin, str, Enum):
    """DomainConfig lifecycle status.

    pending -> verifying -> {active, error}; error -> verifying on manual
    retry; active -> verifying when a provider stops reporting verified.
    """

    PENDING = "pending"
    VERIFYING = "verifying"
    ACTIVE = "active"
    ERROR = "error"


class RecordType(_ValuesMixin, str, Enum):
    """DNS record type the tenant must publish."""

    A = "A"
    CNAME = "CNAME"
    TXT = "TXT"
    MX = "MX"


class RecordPurpose(_ValuesMixin, str, Enum):
    """Which concern a DNS record serves."""

    WEB = "web"
    EMAIL = "email"


class ProviderName(_ValuesMixin, str, Enum):
    """External provider a ProviderError came from."""

    HOSTING = "hosting"
    EMAIL = "email"
