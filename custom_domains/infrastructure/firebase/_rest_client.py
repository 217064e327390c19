"""Async Firestore REST v1 client, scoped to what the DomainConfig store needs.

Documents are addressed as (collection, document id). Supported calls:
get, whole-document set, delete, and runQuery with ANDed field filters,
an ascending order and a limit.
Access tokens come from a google-auth service account and are refreshed
off the event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from custom_domains.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
    encode_value,
)

FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
FIRESTORE_API = "https://firestore.googleapis.com/v1"

# Python-side operator -> StructuredQuery.FieldFilter.Operator
FILTER_OPERATORS: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "in": "IN",
    "not-in": "NOT_IN",
}


def load_credentials(key_dict: dict[str, Any]) -> service_account.Credentials:
    """Service account credentials limited to the Datastore scope."""
    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[FIRESTORE_SCOPE]
    )


def _fresh_token(credentials: Any) -> str:
    if not credentials.valid:
        credentials.refresh(GoogleAuthRequest())
    return credentials.token


@dataclass(frozen=True)
class FieldFilter:
    """A single where() clause: field op value."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported query operator: {self.op!r}")

    def to_dict(self) -> dict[str, Any]:
        value = list(self.value) if self.op in ("in", "not-in") else self.value
        return {
            "fieldFilter": {
                "field": {"fieldPath": self.field},
                "op": FILTER_OPERATORS[self.op],
                "value": encode_value(value),
            }
        }


class FirestoreRESTClient:
    """Firestore over httpx; one instance per process (see client.init_firebase)."""

    def __init__(
        self,
        project_id: str,
        credentials: Any,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.project_id = project_id
        self._credentials = credentials
        self._root = f"projects/{project_id}/databases/(default)/documents"
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=30.0)

    async def aclose(self) -> None:
        """Close the connection pool unless it was injected."""
        if self._owns_http:
            await self._http.aclose()

    async def _call(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> Any:
        """One REST round trip. Returns None on 404; other failures raise httpx.HTTPStatusError."""
        token = await asyncio.to_thread(_fresh_token, self._credentials)
        response = await self._http.request(
            method,
            f"{FIRESTORE_API}/{path}",
            headers={"Authorization": f"Bearer {token}"},
            json=body,
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json() if response.content else {}

    def _doc_path(self, collection: str, document_id: str) -> str:
        return f"{self._root}/{collection}/{document_id}"

    async def get_document(
        self, collection: str, document_id: str
    ) -> dict[str, Any] | None:
        """Decoded fields of the document, or None if it does not exist."""
        doc = await self._call("GET", self._doc_path(collection, document_id))
        if doc is None:
            return None
        return decode_document(doc.get("fields"))

    async def set_document(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        """Create or replace the whole document (PATCH with no update mask)."""
        await self._call(
            "PATCH", self._doc_path(collection, document_id), encode_document(data)
        )

    async def delete_document(self, collection: str, document_id: str) -> None:
        """Delete the document; deleting a missing one is not an error."""
        await self._call("DELETE", self._doc_path(collection, document_id))

    async def run_query(
        self,
        collection: str,
        where: FieldFilter | Sequence[FieldFilter],
        *,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[tuple[str, dict[str, Any]]]:
        """Server-side filtered query. Returns (document id, decoded fields) pairs.

        Several filters are ANDed. order_by sorts ascending; combined with a
        filter on another field it needs a composite index in Firestore.
        """
        filters = [where] if isinstance(where, FieldFilter) else list(where)
        query: dict[str, Any] = {"from": [{"collectionId": collection}]}
        if len(filters) == 1:
            query["where"] = filters[0].to_dict()
        else:
            query["where"] = {
                "compositeFilter": {"op": "AND", "filters": [f.to_dict() for f in filters]}
            }
        if order_by:
            query["orderBy"] = [{"field": {"fieldPath": order_by}, "direction": "ASCENDING"}]
        if limit:
            query["limit"] = limit
        rows = await self._call("POST", f"{self._root}:runQuery", {"structuredQuery": query})
        results: list[tuple[str, dict[str, Any]]] = []
        for row in rows or []:
            # Rows without a document only report progress (readTime, skippedResults).
            doc = row.get("document")
            if doc:
                results.append((doc["name"].rsplit("/", 1)[-1], decode_document(doc.get("fields"))))
        return results
