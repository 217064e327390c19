"""Domain value objects (immutable, self-validating)."""

from custom_domains.domain.value_objects.domain_name import DomainName

__all__ = ["DomainName"]
