"""Shared slowapi limiter for the domain endpoints.

Counters are keyed by tenant when the tenant header is present, so one
tenant's admins share a budget regardless of where they connect from.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from custom_domains.core.config import get_settings

WRITE_ENDPOINT_LIMIT = "30/minute"
# "Check now" calls both providers; stay well below their own rate limits.
RECONCILE_LIMIT = "10/minute"


def tenant_or_remote_address(request: Request) -> str:
    tenant_id = request.headers.get(get_settings().tenant_header_name)
    if tenant_id:
        return f"tenant:{tenant_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=tenant_or_remote_address)

limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_reconcile = limiter.limit(RECONCILE_LIMIT)
