"""Tenant resolution from the request header."""

from fastapi import Request

from custom_domains.core.config import get_settings
from custom_domains.core.tenant_validation import validate_tenant_id


async def get_tenant_id(request: Request) -> str:
    """Tenant id from the tenant header (400 VALIDATION_ERROR when missing or malformed).

    Authentication of the caller happens upstream; this service trusts the header.
    """
    header_name = get_settings().tenant_header_name
    return validate_tenant_id(request.headers.get(header_name), header_name)
