"""Email provider client: Resend sending domains API.

Implements IEmailDomainClient. The DNS records Resend returns (SPF, DKIM,
DMARC, MX) are per-domain and authoritative; they are mapped to
DomainRecord with purpose=email and never computed locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

from custom_domains.application.dtos.provider import EmailDomainState
from custom_domains.domain.entities import DomainRecord
from custom_domains.domain.enums import ProviderName, RecordPurpose, RecordType
from custom_domains.domain.exceptions import ProviderError
from custom_domains.infrastructure.external._http import (
    bearer_headers,
    json_body,
    json_object,
    send,
)
from custom_domains.shared.telemetry.logging import get_logger
from custom_domains.shared.telemetry.tracing import traced

logger = get_logger(__name__)

NOT_FOUND_CODE = "not_found"
DEFAULT_DOMAIN_STATUS = "pending"


@dataclass(frozen=True)
class EmailProviderConfig:
    """Credentials and endpoint for the email provider, read once at startup."""

    api_key: str
    base_url: str = "https://api.resend.com"
    timeout_seconds: float = 15.0


def _to_record(raw: dict[str, Any]) -> DomainRecord | None:
    """Map one provider record ({record, name, type, ttl, status, value, priority})."""
    try:
        record_type = RecordType(str(raw.get("type", "")).upper())
    except ValueError:
        logger.warning("Ignoring email DNS record with unsupported type: %s", raw.get("type"))
        return None
    priority = raw.get("priority")
    return DomainRecord(
        type=record_type,
        host=raw.get("name") or "@",
        value=raw.get("value", ""),
        purpose=RecordPurpose.EMAIL,
        priority=int(priority) if priority is not None else None,
        verified=raw.get("status") == "verified",
    )


def _to_records(raw_records: list[dict[str, Any]] | None) -> list[DomainRecord]:
    records = [_to_record(r) for r in raw_records or []]
    return [r for r in records if r is not None]


class ResendDomainClient:
    """Account-scoped sending-domain registration and verification on Resend."""

    PROVIDER: ClassVar[ProviderName] = ProviderName.EMAIL
    ALREADY_EXISTS_MARKERS: ClassVar[tuple[str, ...]] = (
        "already exists",
        "already been registered",
        "registered already",
    )
    INVALID_DOMAIN_CODES: ClassVar[frozenset[str]] = frozenset(
        {"validation_error", "invalid_parameter"}
    )
    FATAL_CODES: ClassVar[frozenset[str]] = INVALID_DOMAIN_CODES | {
        "restricted_api_key",
        "invalid_access",
        "security_error",
    }

    def __init__(
        self,
        config: EmailProviderConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._headers = bearer_headers(config.api_key)
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=config.timeout_seconds)
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    async def _call(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        return await send(
            self._http,
            self.PROVIDER,
            method,
            f"{self._base_url}{path}",
            headers=self._headers,
            json=json,
            timeout=self._config.timeout_seconds,
        )

    @staticmethod
    def _error_fields(response: httpx.Response) -> tuple[str, str]:
        body = json_body(response)
        if not isinstance(body, dict):
            body = {}
        code = body.get("name") or f"http_{response.status_code}"
        message = body.get("message") or response.reason_phrase or "Request failed"
        return code, message

    def _is_already_exists(self, response: httpx.Response) -> bool:
        code, message = self._error_fields(response)
        lowered = message.lower()
        return code == "already_exists" or any(
            marker in lowered for marker in self.ALREADY_EXISTS_MARKERS
        )

    def _error(self, response: httpx.Response) -> ProviderError:
        """Classify an error response: account and validation codes are fatal, the rest transient."""
        code, message = self._error_fields(response)
        return ProviderError(
            self.PROVIDER,
            code,
            message,
            fatal=code in self.FATAL_CODES,
            status_code=response.status_code,
            invalid_domain=code in self.INVALID_DOMAIN_CODES,
        )

    def _not_found(self, what: str) -> ProviderError:
        return ProviderError(
            self.PROVIDER,
            NOT_FOUND_CODE,
            f"Sending domain {what} no longer exists at the email provider",
            fatal=True,
            status_code=404,
        )

    @staticmethod
    def _state(data: dict[str, Any]) -> EmailDomainState:
        return EmailDomainState(
            provider_id=data.get("id", ""),
            status=data.get("status") or DEFAULT_DOMAIN_STATUS,
            records=_to_records(data.get("records")),
        )

    async def _get(self, provider_id: str) -> EmailDomainState:
        response = await self._call("GET", f"/domains/{provider_id}")
        if response.status_code == 404:
            raise self._not_found(provider_id)
        if not response.is_success:
            raise self._error(response)
        return self._state(json_object(response, self.PROVIDER))

    @traced("email.register")
    async def register(self, domain: str) -> EmailDomainState:
        """Create the sending domain (POST /domains); "already exists" returns lookup(domain).

        Raises:
            ProviderError: Any other failure.
        """
        response = await self._call("POST", "/domains", json={"name": domain})
        if response.is_success:
            return self._state(json_object(response, self.PROVIDER))
        if self._is_already_exists(response):
            logger.info("Sending domain %s already exists at email provider", domain)
            return await self.lookup(domain)
        raise self._error(response)

    @traced("email.lookup")
    async def lookup(self, domain: str) -> EmailDomainState:
        """Find the sending domain by name (GET /domains), with its records.

        Raises:
            ProviderError: Fatal not_found when no sending domain has this name.
        """
        response = await self._call("GET", "/domains")
        if not response.is_success:
            raise self._error(response)
        entries = json_object(response, self.PROVIDER).get("data")
        for entry in entries if isinstance(entries, list) else []:
            if isinstance(entry, dict) and entry.get("name") == domain:
                # The list endpoint omits records; fetch the full domain.
                if not entry.get("records"):
                    return await self._get(entry["id"])
                return self._state(entry)
        raise self._not_found(domain)

    @traced("email.verify")
    async def verify(self, provider_id: str) -> EmailDomainState:
        """Ask the provider to re-check DNS, then return the domain's current state.

        Raises:
            ProviderError: Fatal not_found when the sending domain is gone.
        """
        response = await self._call("POST", f"/domains/{provider_id}/verify")
        if response.status_code == 404:
            raise self._not_found(provider_id)
        if not response.is_success:
            error = self._error(response)
            if error.code == NOT_FOUND_CODE:
                raise self._not_found(provider_id)
            raise error
        data = json_body(response)
        if isinstance(data, dict) and data.get("records") and data.get("status"):
            return self._state(data)
        return await self._get(provider_id)

    @traced("email.deregister")
    async def deregister(self, provider_id: str) -> None:
        """Remove the sending domain; one that is already gone is a success."""
        response = await self._call("DELETE", f"/domains/{provider_id}")
        if response.is_success or response.status_code == 404:
            return
        raise self._error(response)
