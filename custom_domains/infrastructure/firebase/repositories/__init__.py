"""Firestore repository implementations."""

from custom_domains.infrastructure.firebase.repositories.domain_config_repo_firestore import (
    FirestoreDomainConfigRepository,
)

__all__ = ["FirestoreDomainConfigRepository"]
