"""Hosting provider client: Vercel project domains API.

Implements IHostingDomainClient. Registration is idempotent: a domain the
project already holds is reported as a successful, unverified registration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

from custom_domains.application.dtos.provider import (
    ChallengeRecord,
    HostingRegistration,
    HostingStatus,
)
from custom_domains.domain.enums import ProviderName
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


@dataclass(frozen=True)
class HostingProviderConfig:
    """Credentials and endpoint for the hosting provider, read once at startup."""

    api_token: str
    project_id: str
    team_id: str | None = None
    base_url: str = "https://api.vercel.com"
    timeout_seconds: float = 15.0


class VercelDomainClient:
    """Project-scoped domain registration and DNS status on Vercel."""

    PROVIDER: ClassVar[ProviderName] = ProviderName.HOSTING
    ALREADY_REGISTERED_CODES: ClassVar[frozenset[str]] = frozenset(
        {"domain_already_in_use", "domain_already_exists"}
    )
    INVALID_DOMAIN_CODES: ClassVar[frozenset[str]] = frozenset(
        {"invalid_domain", "invalid_name", "domain_not_allowed"}
    )
    FATAL_CODES: ClassVar[frozenset[str]] = INVALID_DOMAIN_CODES | {"forbidden"}

    def __init__(
        self,
        config: HostingProviderConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._headers = bearer_headers(config.api_token)
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

    def _project_domains_path(self, version: str, domain: str | None = None) -> str:
        path = f"/{version}/projects/{self._config.project_id}/domains"
        return f"{path}/{domain}" if domain else path

    async def _call(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        params = {"teamId": self._config.team_id} if self._config.team_id else None
        return await send(
            self._http,
            self.PROVIDER,
            method,
            f"{self._base_url}{path}",
            headers=self._headers,
            params=params,
            json=json,
            timeout=self._config.timeout_seconds,
        )

    @staticmethod
    def _error_fields(response: httpx.Response) -> tuple[str, str]:
        body = json_body(response)
        error = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error, dict):
            error = {}
        code = error.get("code") or f"http_{response.status_code}"
        message = error.get("message") or response.reason_phrase or "Request failed"
        return code, message

    def _error(self, response: httpx.Response) -> ProviderError:
        """Classify an error response: known fatal codes and 403 are fatal, the rest transient."""
        code, message = self._error_fields(response)
        fatal = code in self.FATAL_CODES or response.status_code == 403
        return ProviderError(
            self.PROVIDER,
            code,
            message,
            fatal=fatal,
            status_code=response.status_code,
            invalid_domain=code in self.INVALID_DOMAIN_CODES,
        )

    @traced("hosting.register")
    async def register(self, domain: str) -> HostingRegistration:
        """Attach domain to the project (POST /v10/projects/{project}/domains).

        Raises:
            ProviderError: Any failure other than "already attached".
        """
        response = await self._call(
            "POST", self._project_domains_path("v10"), json={"name": domain}
        )
        if response.is_success:
            data = json_object(response, self.PROVIDER)
            challenges = [
                ChallengeRecord(
                    type=v.get("type", ""),
                    domain=v.get("domain", ""),
                    value=v.get("value", ""),
                    reason=v.get("reason"),
                )
                for v in data.get("verification") or []
            ]
            return HostingRegistration(
                provider_id=data.get("name") or domain,
                verified=bool(data.get("verified", False)),
                challenge_records=challenges,
            )

        code, _ = self._error_fields(response)
        if code in self.ALREADY_REGISTERED_CODES:
            logger.info("Domain %s already attached to hosting project (%s)", domain, code)
            return HostingRegistration(
                provider_id=domain, verified=False, already_registered=True
            )
        raise self._error(response)

    @traced("hosting.deregister")
    async def deregister(self, domain: str) -> None:
        """Detach domain from the project; a domain that is already gone is a success."""
        response = await self._call("DELETE", self._project_domains_path("v9", domain))
        if response.is_success or response.status_code == 404:
            return
        raise self._error(response)

    @traced("hosting.check_status")
    async def check_status(self, domain: str) -> HostingStatus:
        """Read the verification flag, then the DNS configuration.

        Raises:
            ProviderError: Fatal not_found when the project no longer holds the
                domain; classified provider error otherwise.
        """
        response = await self._call("GET", self._project_domains_path("v9", domain))
        if response.status_code == 404:
            raise ProviderError(
                self.PROVIDER,
                NOT_FOUND_CODE,
                f"Domain {domain} is no longer attached to the hosting project",
                fatal=True,
                status_code=404,
            )
        if not response.is_success:
            raise self._error(response)
        verified = bool(json_object(response, self.PROVIDER).get("verified", False))

        config_response = await self._call("GET", f"/v6/domains/{domain}/config")
        if config_response.status_code == 404:
            return HostingStatus(verified=verified, dns_configured=False)
        if not config_response.is_success:
            raise self._error(config_response)
        config = json_object(config_response, self.PROVIDER)
        return HostingStatus(
            verified=verified,
            dns_configured=not config.get("misconfigured", True),
            configured_by=config.get("configuredBy") or None,
        )
