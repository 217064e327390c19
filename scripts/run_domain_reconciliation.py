"""Run one custom-domain reconciliation sweep.

Usage:
    uv run python -m scripts.run_domain_reconciliation [tenant_id]
If tenant_id is omitted, reconciles every pending/verifying domain and every
active domain due for its drift check. Meant to be run by cron every ~5 minutes.
Requires Firestore and provider credentials in config. Exit status is 1 when
any tenant failed with an unexpected error.
"""

import asyncio
import sys
from datetime import timedelta

import httpx

from custom_domains.application.services import (
    DnsRecordPlanner,
    DomainProvisioningService,
    ReconciliationSweep,
)
from custom_domains.core.config import get_settings
from custom_domains.domain.exceptions import DomainProvisioningException
from custom_domains.infrastructure.external.factory import (
    build_email_client_or_placeholder,
    build_hosting_client,
)
from custom_domains.infrastructure.firebase import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from custom_domains.infrastructure.firebase.repositories import (
    FirestoreDomainConfigRepository,
)
from custom_domains.shared.telemetry.logging import setup_logging


async def main() -> int:
    """Reconcile due domains (or one tenant) and print the summary."""
    settings = get_settings()
    setup_logging()
    if not init_firebase():
        print("Firestore is not configured", file=sys.stderr)
        return 1
    tenant_filter = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        async with httpx.AsyncClient(timeout=settings.provider_timeout_seconds) as http:
            repo = FirestoreDomainConfigRepository(
                get_firestore_client(), collection=settings.domain_configs_collection
            )
            service = DomainProvisioningService(
                repo,
                build_hosting_client(settings, http),
                build_email_client_or_placeholder(settings, http),
                planner=DnsRecordPlanner(
                    anycast_ip=settings.hosting_anycast_ip,
                    edge_hostname=settings.hosting_edge_hostname,
                ),
            )
            sweep = ReconciliationSweep(
                service,
                repo,
                batch_size=settings.reconcile_batch_size,
                active_interval=timedelta(
                    seconds=settings.reconcile_active_interval_seconds
                ),
            )
            if tenant_filter:
                result = await sweep.run_for_tenant(tenant_filter)
            else:
                result = await sweep.run()
    except DomainProvisioningException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        return 1
    finally:
        await close_firebase()

    print(
        f"Done. checked={result.checked} skipped={result.skipped} "
        f"activated={result.activated} failed={result.failed} errored={result.errored}"
    )
    if result.errored_tenants:
        print(f"Errored tenants: {', '.join(result.errored_tenants)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
