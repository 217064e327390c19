"""Application services (use cases)."""

from custom_domains.application.services.dns_record_planner import (
    DnsRecordPlanner,
    classify_domain,
)
from custom_domains.application.services.domain_provisioning_service import (
    DomainProvisioningService,
)
from custom_domains.application.services.reconciliation_sweep import (
    ReconciliationSweep,
)

__all__ = [
    "DnsRecordPlanner",
    "DomainProvisioningService",
    "ReconciliationSweep",
    "classify_domain",
]
