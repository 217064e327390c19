"""Domain exceptions for custom domain provisioning.

Defines the error taxonomy shared by the orchestrator and the provider
clients. These exceptions are independent of infrastructure concerns;
the presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any

from custom_domains.domain.enums import ProviderName


class DomainProvisioningException(Exception):
    """Base exception for all custom domain provisioning errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. domain, tenant_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainProvisioningException):
    """Raised when input validation fails (e.g. malformed tenant id)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidDomainException(DomainProvisioningException):
    """Raised when a domain string is malformed or refused by a provider.

    Fatal for Attach: surfaced immediately, no state is created.
    """

    def __init__(self, domain: str, reason: str = "Invalid domain format") -> None:
        """Initialize with the rejected domain and a reason.

        Args:
            domain: The domain string as received.
            reason: Human-readable reason (format error or provider message).
        """
        super().__init__(
            f"{reason}: {domain}",
            "INVALID_DOMAIN",
            {"domain": domain, "reason": reason},
        )


class DomainConflictException(DomainProvisioningException):
    """Raised when the domain is already attached to a different tenant."""

    def __init__(self, domain: str) -> None:
        super().__init__(
            f"Domain is already in use by another tenant: {domain}",
            "DOMAIN_CONFLICT",
            {"domain": domain},
        )


class DomainConfigNotFoundException(DomainProvisioningException):
    """Raised when a tenant has no custom domain attached."""

    def __init__(self, tenant_id: str) -> None:
        super().__init__(
            f"No custom domain configured for tenant: {tenant_id}",
            "DOMAIN_NOT_FOUND",
            {"tenant_id": tenant_id},
        )


class ProviderError(DomainProvisioningException):
    """Error returned by (or while reaching) the hosting or email provider.

    Provider clients classify every failure as fatal or transient. Fatal
    errors (invalid domain, account restriction, registration gone) move a
    DomainConfig to error; transient ones (network, timeout, 5xx, 429) are
    retried on the next reconciliation pass.

    Attributes:
        provider: Which provider failed.
        code: Provider error code, or network_error / http_<status>.
        status_code: HTTP status when a response was received.
        fatal: True when retrying cannot succeed without human action.
        invalid_domain: True when the provider rejected the domain name itself.
    """

    def __init__(
        self,
        provider: ProviderName,
        code: str,
        message: str,
        *,
        fatal: bool = False,
        status_code: int | None = None,
        invalid_domain: bool = False,
    ) -> None:
        self.provider = provider
        self.code = code
        self.fatal = fatal
        self.status_code = status_code
        self.invalid_domain = invalid_domain
        super().__init__(
            f"{provider.value} provider error ({code}): {message}",
            "PROVIDER_REJECTED" if fatal else "PROVIDER_UNAVAILABLE",
            {
                "provider": provider.value,
                "code": code,
                "status_code": status_code,
                "fatal": fatal,
            },
        )
        self.provider_message = message

    @property
    def is_invalid_domain(self) -> bool:
        """Fatal error caused by the domain name (Attach maps it to InvalidDomainException)."""
        return self.fatal and self.invalid_domain


class ProviderNotConfiguredException(DomainProvisioningException):
    """Raised when a provider client is needed but its credentials are not set."""

    def __init__(self, provider: ProviderName, missing: list[str]) -> None:
        super().__init__(
            f"{provider.value} provider is not configured (missing: {', '.join(missing)})",
            "SERVICE_UNAVAILABLE",
            {"provider": provider.value, "missing": missing},
        )


class StoreNotConfiguredException(DomainProvisioningException):
    """Raised when the DomainConfig store (Firestore) is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="The domain configuration store is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
