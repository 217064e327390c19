"""Tests for tenant header validation and rate-limit keys."""

import pytest
from starlette.requests import Request

from custom_domains.core.limiter import tenant_or_remote_address
from custom_domains.core.tenant_validation import validate_tenant_id
from custom_domains.domain.exceptions import ValidationException


@pytest.mark.parametrize("value", ["tenant-1", "ACME_corp", "a" * 64])
def test_valid_tenant_ids(value: str) -> None:
    assert validate_tenant_id(value, "X-Tenant-ID") == value


@pytest.mark.parametrize("value", ["a" * 65, "org/tenant", "has space", "tenant.1"])
def test_invalid_tenant_ids(value: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_tenant_id(value, "X-Tenant-ID")
    assert exc_info.value.details == {"field": "X-Tenant-ID"}


def test_missing_tenant_id_names_header() -> None:
    with pytest.raises(ValidationException, match="Missing required header: X-Tenant-ID"):
        validate_tenant_id(None, "X-Tenant-ID")


def _request(headers: dict[str, str]) -> Request:
    return Request(
        {
            "type": "http",
            "method": "PUT",
            "path": "/api/v1/domain",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
            "client": ("203.0.113.7", 5000),
        }
    )


def test_rate_limit_key_prefers_tenant() -> None:
    assert tenant_or_remote_address(_request({"X-Tenant-ID": "tenant-1"})) == "tenant:tenant-1"
    assert tenant_or_remote_address(_request({})) == "203.0.113.7"
