"""Domain entities (business concepts independent of persistence)."""

from custom_domains.domain.entities.domain_config import DomainConfig
from custom_domains.domain.entities.domain_record import DomainRecord

__all__ = ["DomainConfig", "DomainRecord"]
