"""Ports: Protocols implemented by infrastructure."""

from custom_domains.application.interfaces.providers import (
    IEmailDomainClient,
    IHostingDomainClient,
)
from custom_domains.application.interfaces.repositories import IDomainConfigRepository

__all__ = [
    "IDomainConfigRepository",
    "IEmailDomainClient",
    "IHostingDomainClient",
]
