"""FastAPI dependencies for API v1."""

from custom_domains.api.v1.dependencies.domain import (
    get_dns_record_planner,
    get_domain_config_repo,
    get_email_client,
    get_hosting_client,
    get_provider_http_client,
    get_provisioning_service,
)
from custom_domains.api.v1.dependencies.tenant import get_tenant_id

__all__ = [
    "get_dns_record_planner",
    "get_domain_config_repo",
    "get_email_client",
    "get_hosting_client",
    "get_provider_http_client",
    "get_provisioning_service",
    "get_tenant_id",
]
