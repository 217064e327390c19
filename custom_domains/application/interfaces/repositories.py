"""Repository interfaces (ports) for the application layer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime

    from custom_domains.domain.entities import DomainConfig
    from custom_domains.domain.enums import DomainStatus


class IDomainConfigRepository(Protocol):
    """Store for DomainConfig documents, keyed by tenant id.

    Writes replace the whole document; concurrent writers for the same
    tenant are last-writer-wins.
    """

    async def get(self, tenant_id: str) -> DomainConfig | None:
        """Return the tenant's config or None."""
        ...

    async def find_tenant_ids_by_domain(self, domain: str) -> list[str]:
        """Return ids of tenants that currently have this domain attached."""
        ...

    async def save(self, config: DomainConfig) -> None:
        """Create or overwrite the tenant's config."""
        ...

    async def delete(self, tenant_id: str) -> None:
        """Delete the tenant's config (idempotent)."""
        ...

    async def list_by_status(
        self, statuses: Sequence[DomainStatus], limit: int = 200
    ) -> list[DomainConfig]:
        """Return configs whose status is one of statuses, least recently checked first.

        Never-checked configs (lastCheckedAt unset) come before all others.
        """
        ...

    async def list_checked_before(
        self, status: DomainStatus, cutoff: datetime, limit: int = 200
    ) -> list[DomainConfig]:
        """Return configs in status last checked before cutoff, oldest first."""
        ...
