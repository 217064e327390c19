"""Provider interfaces (ports) for the application layer.

The orchestrator depends on these capability contracts, never on the
concrete HTTP clients, so tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from custom_domains.application.dtos.provider import (
        EmailDomainState,
        HostingRegistration,
        HostingStatus,
    )


class IHostingDomainClient(Protocol):
    """Web-hosting provider: attach a domain to the project and observe its DNS."""

    async def register(self, domain: str) -> HostingRegistration:
        """Attach domain to the project.

        "Already attached to this project" is a success with verified=False.
        Raises ProviderError on any other failure.
        """
        ...

    async def deregister(self, domain: str) -> None:
        """Detach domain from the project (missing domain is a success)."""
        ...

    async def check_status(self, domain: str) -> HostingStatus:
        """Return verification flag and current DNS configuration.

        Raises ProviderError (fatal) when the domain is no longer registered.
        """
        ...


class IEmailDomainClient(Protocol):
    """Transactional-email provider: sending-domain registration and verification."""

    async def register(self, domain: str) -> EmailDomainState:
        """Register a sending domain; "already exists" returns lookup(domain)."""
        ...

    async def lookup(self, domain: str) -> EmailDomainState:
        """Return the existing sending domain by name."""
        ...

    async def verify(self, provider_id: str) -> EmailDomainState:
        """Ask the provider to re-check DNS and return the updated state."""
        ...

    async def deregister(self, provider_id: str) -> None:
        """Remove the sending domain."""
        ...
