"""Tenant id checks for the tenant header.

The tenant id becomes the DomainConfig document id, so it is limited to
characters Firestore accepts in a document path segment.
"""

import re

from custom_domains.domain.exceptions import ValidationException

TENANT_ID_MAX_LENGTH = 64
_TENANT_ID_RE = re.compile(r"[A-Za-z0-9_-]+")


def validate_tenant_id(value: str | None, header_name: str) -> str:
    """Return value unchanged, or raise ValidationException (400) naming the header."""
    if not value:
        raise ValidationException(
            f"Missing required header: {header_name}", field=header_name
        )
    if len(value) > TENANT_ID_MAX_LENGTH or not _TENANT_ID_RE.fullmatch(value):
        raise ValidationException(
            f"Invalid {header_name}: use letters, digits, hyphen or underscore "
            f"(max {TENANT_ID_MAX_LENGTH} characters)",
            field=header_name,
        )
    return value
