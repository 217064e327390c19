"""Tests for the DomainName value object (normalization and validation)."""

import pytest

from custom_domains.domain.value_objects import DomainName


def test_parse_normalizes_case_whitespace_and_trailing_dot() -> None:
    """parse() trims, lower-cases and strips one trailing dot."""
    assert DomainName.parse("  Blog.Example.COM. ").value == "blog.example.com"


@pytest.mark.parametrize(
    "domain",
    ["example.com", "blog.example.com", "my-shop.example.co.jp", "a1.b2.example.io"],
)
def test_valid_domains(domain: str) -> None:
    assert str(DomainName(domain)) == domain


@pytest.mark.parametrize(
    "domain",
    [
        "",
        "localhost",
        "example",
        "-example.com",
        "example-.com",
        "exa_mple.com",
        "example.c",
        "example.123",
        "http://example.com",
        "example..com",
        "*.example.com",
    ],
)
def test_invalid_domains_raise_value_error(domain: str) -> None:
    with pytest.raises(ValueError):
        DomainName.parse(domain)


def test_label_longer_than_63_rejected() -> None:
    with pytest.raises(ValueError, match="labels"):
        DomainName("a" * 64 + ".com")


def test_domain_longer_than_253_rejected() -> None:
    long_domain = ".".join(["a" * 60] * 5) + ".com"
    with pytest.raises(ValueError, match="253"):
        DomainName(long_domain)


def test_labels() -> None:
    assert DomainName("shop.example.co.jp").labels == ["shop", "example", "co", "jp"]
