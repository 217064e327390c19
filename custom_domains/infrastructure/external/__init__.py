"""HTTP clients for the hosting and email providers."""

from custom_domains.infrastructure.external.email.resend_client import (
    EmailProviderConfig,
    ResendDomainClient,
)
from custom_domains.infrastructure.external.factory import (
    build_email_client,
    build_hosting_client,
)
from custom_domains.infrastructure.external.hosting.vercel_client import (
    HostingProviderConfig,
    VercelDomainClient,
)

__all__ = [
    "EmailProviderConfig",
    "HostingProviderConfig",
    "ResendDomainClient",
    "VercelDomainClient",
    "build_email_client",
    "build_hosting_client",
]
