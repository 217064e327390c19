"""Firestore (REST) persistence for DomainConfig documents."""

from custom_domains.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)

__all__ = ["close_firebase", "get_firestore_client", "init_firebase"]
