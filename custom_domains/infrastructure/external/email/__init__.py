"""Email provider (Resend sending domains)."""

from custom_domains.infrastructure.external.email.resend_client import (
    EmailProviderConfig,
    ResendDomainClient,
)

__all__ = ["EmailProviderConfig", "ResendDomainClient"]
