"""DNS record planner: which records a custom domain needs.

Pure and deterministic (no I/O). Web targets are static for the hosting
provider, so they are computed here; email targets (SPF, DKIM, DMARC, MX)
are generated per domain by the email provider, so the planner only tags
the records it is handed and merges them after the web records.
"""

from collections.abc import Sequence
from dataclasses import replace

from custom_domains.application.dtos.provider import DnsPlan
from custom_domains.domain.entities import DomainRecord
from custom_domains.domain.enums import DomainType, RecordPurpose, RecordType

DEFAULT_ANYCAST_IP = "76.76.21.21"
DEFAULT_EDGE_HOSTNAME = "cname.vercel-dns.com"

# Two-label public suffixes counted as one unit (example.co.jp is a root domain).
MULTI_PART_SUFFIXES: frozenset[str] = frozenset(
    {
        "co.jp",
        "ne.jp",
        "or.jp",
        "ac.jp",
        "go.jp",
        "ad.jp",
        "ed.jp",
        "gr.jp",
        "lg.jp",
    }
)

APEX_HOST = "@"
WWW_HOST = "www"


def classify_domain(domain: str) -> DomainType:
    """Return ROOT or SUBDOMAIN for an already-validated domain.

    A known multi-part suffix counts as one label: exactly suffix + 1 label
    is root, more is a subdomain. Otherwise two labels is root.
    """
    labels = domain.split(".")
    if len(labels) >= 2 and ".".join(labels[-2:]) in MULTI_PART_SUFFIXES:
        return DomainType.SUBDOMAIN if len(labels) > 3 else DomainType.ROOT
    return DomainType.SUBDOMAIN if len(labels) > 2 else DomainType.ROOT


class DnsRecordPlanner:
    """Computes the DNS records for a domain (web records + tagged email records)."""

    def __init__(
        self,
        anycast_ip: str = DEFAULT_ANYCAST_IP,
        edge_hostname: str = DEFAULT_EDGE_HOSTNAME,
    ) -> None:
        self._anycast_ip = anycast_ip
        self._edge_hostname = edge_hostname

    def web_records(self, domain: str, domain_type: DomainType) -> list[DomainRecord]:
        """Apex gets A @ + CNAME www; a subdomain gets one CNAME at its first label."""
        if domain_type == DomainType.ROOT:
            return [
                DomainRecord(
                    type=RecordType.A,
                    host=APEX_HOST,
                    value=self._anycast_ip,
                    purpose=RecordPurpose.WEB,
                ),
                DomainRecord(
                    type=RecordType.CNAME,
                    host=WWW_HOST,
                    value=self._edge_hostname,
                    purpose=RecordPurpose.WEB,
                ),
            ]
        return [
            DomainRecord(
                type=RecordType.CNAME,
                host=domain.split(".")[0],
                value=self._edge_hostname,
                purpose=RecordPurpose.WEB,
            )
        ]

    def plan(
        self,
        domain: str,
        email_enabled: bool,
        email_records: Sequence[DomainRecord] = (),
    ) -> DnsPlan:
        """Classify domain and return web records followed by email records.

        email_records are the provider-returned records, kept verbatim apart
        from purpose=email; they are ignored when email_enabled is False.
        """
        domain_type = classify_domain(domain)
        records = self.web_records(domain, domain_type)
        if email_enabled:
            records.extend(
                replace(r, purpose=RecordPurpose.EMAIL) for r in email_records
            )
        return DnsPlan(domain_type=domain_type, records=records)
