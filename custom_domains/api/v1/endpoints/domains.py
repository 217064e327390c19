"""Custom domain API: thin routes delegating to DomainProvisioningService.

One custom domain per tenant; the tenant comes from the tenant header.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from custom_domains.api.v1.dependencies import get_provisioning_service, get_tenant_id
from custom_domains.application.services import DomainProvisioningService
from custom_domains.core.limiter import limit_reconcile, limit_writes
from custom_domains.schemas.domain import DomainAttachRequest, DomainConfigResponse

router = APIRouter()

TenantId = Annotated[str, Depends(get_tenant_id)]
ProvisioningService = Annotated[
    DomainProvisioningService, Depends(get_provisioning_service)
]


@router.get("", response_model=DomainConfigResponse)
async def get_domain(
    tenant_id: TenantId, service: ProvisioningService
) -> DomainConfigResponse:
    """Return the stored configuration and DNS records (no provider calls)."""
    config = await service.get_config(tenant_id)
    return DomainConfigResponse.from_entity(config)


@router.put("", response_model=DomainConfigResponse, status_code=201)
@limit_writes
async def attach_domain(
    request: Request,
    body: DomainAttachRequest,
    tenant_id: TenantId,
    service: ProvisioningService,
) -> DomainConfigResponse:
    """Attach a domain to the tenant and return the DNS records to publish.

    Returns immediately with status=pending; call POST /domain/reconcile
    (or wait for the scheduled sweep) to pick up verification.
    """
    config = await service.attach(tenant_id, body.domain, body.email_enabled)
    return DomainConfigResponse.from_entity(config)


@router.post("/reconcile", response_model=DomainConfigResponse)
@limit_reconcile
async def reconcile_domain(
    request: Request, tenant_id: TenantId, service: ProvisioningService
) -> DomainConfigResponse:
    """Check now: poll both providers once and return the updated state."""
    config = await service.reconcile(tenant_id)
    return DomainConfigResponse.from_entity(config)


@router.post("/retry", response_model=DomainConfigResponse)
@limit_reconcile
async def retry_domain(
    request: Request, tenant_id: TenantId, service: ProvisioningService
) -> DomainConfigResponse:
    """Re-register with the providers and leave the error state."""
    config = await service.retry(tenant_id)
    return DomainConfigResponse.from_entity(config)


@router.delete("", status_code=204)
@limit_writes
async def detach_domain(
    request: Request, tenant_id: TenantId, service: ProvisioningService
) -> Response:
    """Deregister from both providers (best effort) and delete the configuration."""
    await service.detach(tenant_id)
    return Response(status_code=204)
