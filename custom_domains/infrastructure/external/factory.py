"""Build provider clients from Settings (composition root helpers).

Settings are read here, once; the clients only ever see their frozen
provider config.
"""

from typing import NoReturn

import httpx

from custom_domains.application.dtos.provider import EmailDomainState
from custom_domains.core.config import Settings
from custom_domains.domain.enums import ProviderName
from custom_domains.domain.exceptions import ProviderNotConfiguredException
from custom_domains.infrastructure.external.email.resend_client import (
    EmailProviderConfig,
    ResendDomainClient,
)
from custom_domains.infrastructure.external.hosting.vercel_client import (
    HostingProviderConfig,
    VercelDomainClient,
)


def hosting_config_from_settings(settings: Settings) -> HostingProviderConfig:
    """Raises ProviderNotConfiguredException when token or project id is missing."""
    missing: list[str] = []
    if not settings.hosting_api_token:
        missing.append("HOSTING_API_TOKEN")
    if not settings.hosting_project_id:
        missing.append("HOSTING_PROJECT_ID")
    if missing:
        raise ProviderNotConfiguredException(ProviderName.HOSTING, missing)
    return HostingProviderConfig(
        api_token=settings.hosting_api_token.get_secret_value(),
        project_id=settings.hosting_project_id,
        team_id=settings.hosting_team_id or None,
        base_url=settings.hosting_api_base_url,
        timeout_seconds=settings.provider_timeout_seconds,
    )


def email_config_from_settings(settings: Settings) -> EmailProviderConfig:
    """Raises ProviderNotConfiguredException when the API key is missing."""
    if not settings.email_api_key:
        raise ProviderNotConfiguredException(ProviderName.EMAIL, ["EMAIL_API_KEY"])
    return EmailProviderConfig(
        api_key=settings.email_api_key.get_secret_value(),
        base_url=settings.email_api_base_url,
        timeout_seconds=settings.provider_timeout_seconds,
    )


def build_hosting_client(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> VercelDomainClient:
    return VercelDomainClient(
        hosting_config_from_settings(settings), http_client=http_client
    )


def build_email_client(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> ResendDomainClient:
    return ResendDomainClient(
        email_config_from_settings(settings), http_client=http_client
    )


class NotConfiguredEmailClient:
    """Stand-in used when no email API key is set.

    Tenants without email never touch it; any email operation reports the
    provider as not configured (503) instead of failing app startup.
    """

    def __init__(self, missing: list[str]) -> None:
        self._missing = missing

    def _raise(self) -> NoReturn:
        raise ProviderNotConfiguredException(ProviderName.EMAIL, self._missing)

    async def register(self, domain: str) -> EmailDomainState:
        self._raise()

    async def lookup(self, domain: str) -> EmailDomainState:
        self._raise()

    async def verify(self, provider_id: str) -> EmailDomainState:
        self._raise()

    async def deregister(self, provider_id: str) -> None:
        self._raise()


def build_email_client_or_placeholder(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> ResendDomainClient | NotConfiguredEmailClient:
    try:
        return build_email_client(settings, http_client)
    except ProviderNotConfiguredException as e:
        return NotConfiguredEmailClient(e.details["missing"])
