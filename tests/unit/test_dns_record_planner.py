"""Tests for DnsRecordPlanner (classification, web records, email merge)."""

import pytest

from custom_domains.application.services import DnsRecordPlanner, classify_domain
from custom_domains.application.services.dns_record_planner import (
    DEFAULT_ANYCAST_IP,
    DEFAULT_EDGE_HOSTNAME,
)
from custom_domains.domain.enums import DomainType, RecordPurpose, RecordType
from tests.fakes import default_email_records


@pytest.mark.parametrize(
    ("domain", "expected"),
    [
        ("example.com", DomainType.ROOT),
        ("example.io", DomainType.ROOT),
        ("blog.example.com", DomainType.SUBDOMAIN),
        ("a.b.example.com", DomainType.SUBDOMAIN),
        ("example.co.jp", DomainType.ROOT),
        ("example.ne.jp", DomainType.ROOT),
        ("shop.example.co.jp", DomainType.SUBDOMAIN),
        ("shop.example.or.jp", DomainType.SUBDOMAIN),
        ("example.jp", DomainType.ROOT),
        ("www.example.jp", DomainType.SUBDOMAIN),
    ],
)
def test_classify_domain(domain: str, expected: DomainType) -> None:
    """Two labels (or suffix + 1 for co.jp family) is root; more is a subdomain."""
    assert classify_domain(domain) == expected


def test_plan_root_domain_without_email() -> None:
    """Root domain: exactly A @ -> anycast IP and CNAME www -> edge hostname."""
    plan = DnsRecordPlanner().plan("example.com", email_enabled=False)
    assert plan.domain_type == DomainType.ROOT
    assert [(r.type, r.host, r.value) for r in plan.records] == [
        (RecordType.A, "@", DEFAULT_ANYCAST_IP),
        (RecordType.CNAME, "www", DEFAULT_EDGE_HOSTNAME),
    ]
    assert all(r.purpose == RecordPurpose.WEB for r in plan.records)
    assert not any(r.verified for r in plan.records)


def test_plan_multi_part_suffix_subdomain() -> None:
    """shop.example.co.jp is a subdomain with one CNAME at host 'shop'."""
    plan = DnsRecordPlanner().plan("shop.example.co.jp", email_enabled=False)
    assert plan.domain_type == DomainType.SUBDOMAIN
    assert len(plan.records) == 1
    record = plan.records[0]
    assert record.type == RecordType.CNAME
    assert record.host == "shop"
    assert record.value == DEFAULT_EDGE_HOSTNAME


def test_plan_uses_configured_targets() -> None:
    """Anycast IP and edge hostname come from the planner's configuration."""
    planner = DnsRecordPlanner(anycast_ip="192.0.2.10", edge_hostname="edge.example.net")
    plan = planner.plan("example.org", email_enabled=False)
    assert plan.records[0].value == "192.0.2.10"
    assert plan.records[1].value == "edge.example.net"


def test_plan_appends_email_records_verbatim_after_web_records() -> None:
    """Email records keep type/host/value/priority and are tagged purpose=email."""
    email_records = default_email_records()
    plan = DnsRecordPlanner().plan("example.org", True, email_records)
    assert len(plan.records) == 5
    assert [r.purpose for r in plan.records[:2]] == [RecordPurpose.WEB] * 2
    for planned, given in zip(plan.records[2:], email_records, strict=True):
        assert planned.purpose == RecordPurpose.EMAIL
        assert (planned.type, planned.host, planned.value, planned.priority) == (
            given.type,
            given.host,
            given.value,
            given.priority,
        )


def test_plan_ignores_email_records_when_email_disabled() -> None:
    """Email records are present if and only if email was requested."""
    plan = DnsRecordPlanner().plan("blog.example.com", False, default_email_records())
    assert [r.purpose for r in plan.records] == [RecordPurpose.WEB]


def test_plan_is_deterministic() -> None:
    """Same input, same output."""
    planner = DnsRecordPlanner()
    assert planner.plan("example.com", False) == planner.plan("example.com", False)
