"""Firestore-backed DomainConfig repository (implements IDomainConfigRepository)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from custom_domains.domain.entities import DomainConfig
from custom_domains.domain.enums import DomainStatus
from custom_domains.infrastructure.firebase._rest_client import (
    FieldFilter,
    FirestoreRESTClient,
)
from custom_domains.infrastructure.firebase.collections import COLLECTION_DOMAIN_CONFIGS
from custom_domains.shared.telemetry.tracing import traced


def _config_doc_id(tenant_id: str) -> str:
    """Firestore document ID from tenant id (cannot contain '/')."""
    return tenant_id.replace("/", "_")


class FirestoreDomainConfigRepository:
    """DomainConfig store: one document per tenant in the domain_configs collection.

    save() replaces the whole document without preconditions, so concurrent
    writers for the same tenant are last-writer-wins.
    """

    def __init__(
        self,
        client: FirestoreRESTClient,
        collection: str = COLLECTION_DOMAIN_CONFIGS,
    ) -> None:
        self._client = client
        self._collection = collection

    @traced("firestore.domain_config.get")
    async def get(self, tenant_id: str) -> DomainConfig | None:
        data = await self._client.get_document(self._collection, _config_doc_id(tenant_id))
        if data is None:
            return None
        return DomainConfig.from_document(tenant_id, data)

    @traced("firestore.domain_config.find_by_domain")
    async def find_tenant_ids_by_domain(self, domain: str) -> list[str]:
        """Tenant ids whose config holds this domain (server-side equality filter)."""
        rows = await self._client.run_query(
            self._collection, FieldFilter("domain", "==", domain)
        )
        return [data.get("tenantId") or doc_id for doc_id, data in rows]

    @traced("firestore.domain_config.save")
    async def save(self, config: DomainConfig) -> None:
        await self._client.set_document(
            self._collection, _config_doc_id(config.tenant_id), config.to_document()
        )

    @traced("firestore.domain_config.delete")
    async def delete(self, tenant_id: str) -> None:
        """Delete the tenant's config (missing document is a no-op)."""
        await self._client.delete_document(self._collection, _config_doc_id(tenant_id))

    @traced("firestore.domain_config.list_by_status")
    async def list_by_status(
        self, statuses: Sequence[DomainStatus], limit: int = 200
    ) -> list[DomainConfig]:
        """Up to limit configs whose status is one of statuses, least recently checked first."""
        if not statuses:
            return []
        rows = await self._client.run_query(
            self._collection,
            FieldFilter("status", "in", [s.value for s in statuses]),
            order_by="lastCheckedAt",
            limit=limit,
        )
        return [DomainConfig.from_document(doc_id, data) for doc_id, data in rows]

    @traced("firestore.domain_config.list_checked_before")
    async def list_checked_before(
        self, status: DomainStatus, cutoff: datetime, limit: int = 200
    ) -> list[DomainConfig]:
        """Up to limit configs in status whose lastCheckedAt is older than cutoff, oldest first."""
        rows = await self._client.run_query(
            self._collection,
            [
                FieldFilter("status", "==", status.value),
                FieldFilter("lastCheckedAt", "<", cutoff),
            ],
            order_by="lastCheckedAt",
            limit=limit,
        )
        return [DomainConfig.from_document(doc_id, data) for doc_id, data in rows]
