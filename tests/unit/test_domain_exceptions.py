"""Tests for domain exceptions (error_code, message, details)."""

from custom_domains.domain.enums import ProviderName
from custom_domains.domain.exceptions import (
    DomainConfigNotFoundException,
    DomainConflictException,
    DomainProvisioningException,
    InvalidDomainException,
    ProviderError,
    ProviderNotConfiguredException,
    StoreNotConfiguredException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base exception uses class name as error_code when not provided."""
    exc = DomainProvisioningException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "DomainProvisioningException"
    assert exc.details == {}


def test_to_dict() -> None:
    exc = DomainProvisioningException("Oops", error_code="CUSTOM", details={"k": "v"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"k": "v"}}


def test_validation_exception() -> None:
    exc = ValidationException("Invalid format", field="domain")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "domain"}


def test_invalid_domain_exception() -> None:
    exc = InvalidDomainException("bad..com", "Invalid domain format")
    assert exc.error_code == "INVALID_DOMAIN"
    assert "bad..com" in exc.message
    assert exc.details == {"domain": "bad..com", "reason": "Invalid domain format"}


def test_conflict_and_not_found() -> None:
    assert DomainConflictException("example.com").error_code == "DOMAIN_CONFLICT"
    not_found = DomainConfigNotFoundException("tenant-1")
    assert not_found.error_code == "DOMAIN_NOT_FOUND"
    assert not_found.details == {"tenant_id": "tenant-1"}


def test_transient_provider_error() -> None:
    """Transient provider errors map to PROVIDER_UNAVAILABLE."""
    exc = ProviderError(ProviderName.HOSTING, "http_503", "Service Unavailable", status_code=503)
    assert exc.fatal is False
    assert exc.error_code == "PROVIDER_UNAVAILABLE"
    assert exc.provider_message == "Service Unavailable"
    assert exc.details == {
        "provider": "hosting",
        "code": "http_503",
        "status_code": 503,
        "fatal": False,
    }
    assert exc.is_invalid_domain is False


def test_fatal_invalid_domain_provider_error() -> None:
    """Fatal errors map to PROVIDER_REJECTED; is_invalid_domain needs fatal + flag."""
    exc = ProviderError(
        ProviderName.EMAIL, "validation_error", "Invalid domain", fatal=True, invalid_domain=True
    )
    assert exc.error_code == "PROVIDER_REJECTED"
    assert exc.is_invalid_domain is True
    assert "email provider error (validation_error)" in exc.message


def test_not_configured_exceptions() -> None:
    exc = ProviderNotConfiguredException(ProviderName.HOSTING, ["HOSTING_API_TOKEN"])
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert exc.details["missing"] == ["HOSTING_API_TOKEN"]
    assert StoreNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"
