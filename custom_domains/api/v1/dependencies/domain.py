"""Domain provisioning dependencies (composition root).

Clients are cheap wrappers over the shared provider connection pool held
in app.state, so they are built per request from Settings.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Request

from custom_domains.application.interfaces import (
    IDomainConfigRepository,
    IEmailDomainClient,
    IHostingDomainClient,
)
from custom_domains.application.services import (
    DnsRecordPlanner,
    DomainProvisioningService,
)
from custom_domains.core.config import get_settings
from custom_domains.domain.exceptions import StoreNotConfiguredException
from custom_domains.infrastructure.external.factory import (
    build_email_client_or_placeholder,
    build_hosting_client,
)
from custom_domains.infrastructure.firebase import get_firestore_client
from custom_domains.infrastructure.firebase.repositories import (
    FirestoreDomainConfigRepository,
)


def get_provider_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared provider HTTP client created in lifespan (None outside the app)."""
    return getattr(request.app.state, "provider_http_client", None)


def get_domain_config_repo() -> IDomainConfigRepository:
    """Firestore-backed DomainConfig store; 503 when Firestore is not configured."""
    client = get_firestore_client()
    if client is None:
        raise StoreNotConfiguredException()
    return FirestoreDomainConfigRepository(
        client, collection=get_settings().domain_configs_collection
    )


def get_hosting_client(
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_provider_http_client)],
) -> IHostingDomainClient:
    return build_hosting_client(get_settings(), http_client)


def get_email_client(
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_provider_http_client)],
) -> IEmailDomainClient:
    return build_email_client_or_placeholder(get_settings(), http_client)


def get_dns_record_planner() -> DnsRecordPlanner:
    settings = get_settings()
    return DnsRecordPlanner(
        anycast_ip=settings.hosting_anycast_ip,
        edge_hostname=settings.hosting_edge_hostname,
    )


def get_provisioning_service(
    repo: Annotated[IDomainConfigRepository, Depends(get_domain_config_repo)],
    hosting: Annotated[IHostingDomainClient, Depends(get_hosting_client)],
    email: Annotated[IEmailDomainClient, Depends(get_email_client)],
    planner: Annotated[DnsRecordPlanner, Depends(get_dns_record_planner)],
) -> DomainProvisioningService:
    return DomainProvisioningService(repo, hosting, email, planner=planner)
