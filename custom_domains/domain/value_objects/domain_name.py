"""Domain name value object.

Normalizes and validates the domain string an admin submits before any
provider call or store access is made.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

# Letters/digits with inner hyphens per label, at least two labels, alphabetic TLD.
_DOMAIN_RE = re.compile(r"^([a-z0-9]+(-[a-z0-9]+)*\.)+[a-z]{2,}$")


@dataclass(frozen=True)
class DomainName:
    """Value object for a custom domain (e.g. 'example.com', 'blog.example.co.jp').

    Construct with DomainName.parse() to normalize user input; the
    constructor itself only accepts already-normalized values.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 253
    MAX_LABEL_LENGTH: ClassVar[int] = 63

    def __post_init__(self) -> None:
        """Validate format and length.

        Raises:
            ValueError: If the domain is empty, too long, or malformed.
        """
        if not self.value:
            raise ValueError("Domain must be a non-empty string")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(f"Domain must not exceed {self.MAX_LENGTH} characters")
        if any(len(label) > self.MAX_LABEL_LENGTH for label in self.value.split(".")):
            raise ValueError(
                f"Domain labels must not exceed {self.MAX_LABEL_LENGTH} characters"
            )
        if not _DOMAIN_RE.match(self.value):
            raise ValueError("Invalid domain format")

    @classmethod
    def parse(cls, raw: str) -> "DomainName":
        """Normalize (trim, lower-case, drop trailing dot) and validate.

        Raises:
            ValueError: If the normalized value is not a valid domain.
        """
        return cls((raw or "").strip().lower().rstrip("."))

    @property
    def labels(self) -> list[str]:
        return self.value.split(".")

    def __str__(self) -> str:
        return self.value
