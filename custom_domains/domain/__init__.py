"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from custom_domains.domain.entities import DomainConfig, DomainRecord
from custom_domains.domain.enums import (
    DomainStatus,
    DomainType,
    ProviderName,
    RecordPurpose,
    RecordType,
)
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
from custom_domains.domain.value_objects import DomainName

__all__ = [
    # Entities
    "DomainConfig",
    "DomainRecord",
    # Enums
    "DomainStatus",
    "DomainType",
    "ProviderName",
    "RecordPurpose",
    "RecordType",
    # Exceptions
    "DomainConfigNotFoundException",
    "DomainConflictException",
    "DomainProvisioningException",
    "InvalidDomainException",
    "ProviderError",
    "ProviderNotConfiguredException",
    "StoreNotConfiguredException",
    "ValidationException",
    # Value objects
    "DomainName",
]
