"""Custom domain API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from custom_domains.domain.entities import DomainConfig, DomainRecord
from custom_domains.domain.enums import (
    DomainStatus,
    DomainType,
    RecordPurpose,
    RecordType,
)


class DomainAttachRequest(BaseModel):
    """Request body for attaching a custom domain to the current tenant.

    Syntax is validated by the service (so the error carries the
    INVALID_DOMAIN code); here only surrounding whitespace is trimmed.
    """

    domain: str = Field(..., min_length=1, max_length=255, description="e.g. example.com or blog.example.com")
    email_enabled: bool = Field(
        default=False, description="Also register the domain for outbound email"
    )

    @field_validator("domain", mode="before")
    @classmethod
    def strip_domain(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v


class DomainRecordResponse(BaseModel):
    """One DNS record the tenant must publish, with its observed state."""

    type: RecordType
    host: str
    value: str
    priority: int | None = None
    purpose: RecordPurpose
    verified: bool
    verified_at: datetime | None = None

    @classmethod
    def from_entity(cls, record: DomainRecord) -> "DomainRecordResponse":
        return cls(
            type=record.type,
            host=record.host,
            value=record.value,
            priority=record.priority,
            purpose=record.purpose,
            verified=record.verified,
            verified_at=record.verified_at,
        )


class DomainConfigResponse(BaseModel):
    """Tenant's custom domain configuration and verification state."""

    tenant_id: str
    domain: str
    domain_type: DomainType
    status: DomainStatus
    error_message: str | None = None
    hosting_provider_id: str | None = None
    hosting_registered: bool
    hosting_verified: bool
    email_enabled: bool
    email_provider_id: str | None = None
    email_verified: bool
    records: list[DomainRecordResponse]
    last_checked_at: datetime | None = None
    configured_at: datetime | None = None

    @classmethod
    def from_entity(cls, config: DomainConfig) -> "DomainConfigResponse":
        return cls(
            tenant_id=config.tenant_id,
            domain=config.domain,
            domain_type=config.domain_type,
            status=config.status,
            error_message=config.error_message,
            hosting_provider_id=config.hosting_provider_id,
            hosting_registered=config.hosting_registered,
            hosting_verified=config.hosting_verified,
            email_enabled=config.email_enabled,
            email_provider_id=config.email_provider_id,
            email_verified=config.email_verified,
            records=[DomainRecordResponse.from_entity(r) for r in config.records],
            last_checked_at=config.last_checked_at,
            configured_at=config.configured_at,
        )
