"""API request/response schemas (pydantic)."""

from custom_domains.schemas.domain import (
    DomainAttachRequest,
    DomainConfigResponse,
    DomainRecordResponse,
)
from custom_domains.schemas.health import HealthResponse

__all__ = [
    "DomainAttachRequest",
    "DomainConfigResponse",
    "DomainRecordResponse",
    "HealthResponse",
]
