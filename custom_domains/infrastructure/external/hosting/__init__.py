"""Hosting provider (Vercel project domains)."""

from custom_domains.infrastructure.external.hosting.vercel_client import (
    HostingProviderConfig,
    VercelDomainClient,
)

__all__ = ["HostingProviderConfig", "VercelDomainClient"]
