"""Reconciliation sweep: one periodic pass over domains that still need checking.

Scheduling is external (cron or a job runner calls run() every few minutes).
pending and verifying domains get the batch first on every pass; active domains
only once their last check is older than active_interval, to catch DNS
drift at a much lower frequency. error domains wait for a manual retry.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from custom_domains.application.dtos.reconciliation import SweepResult
from custom_domains.application.interfaces import IDomainConfigRepository
from custom_domains.application.services.domain_provisioning_service import (
    DomainProvisioningService,
)
from custom_domains.domain.entities import DomainConfig
from custom_domains.domain.enums import DomainStatus
from custom_domains.shared.telemetry.logging import get_logger
from custom_domains.shared.utils.datetime import utc_now

logger = get_logger(__name__)

UNVERIFIED_STATUSES = (DomainStatus.PENDING, DomainStatus.VERIFYING)


class ReconciliationSweep:
    """Reconciles every due DomainConfig sequentially; one failure never aborts the pass."""

    def __init__(
        self,
        service: DomainProvisioningService,
        repo: IDomainConfigRepository,
        *,
        batch_size: int = 200,
        active_interval: timedelta = timedelta(hours=6),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._service = service
        self._repo = repo
        self._batch_size = batch_size
        self._active_interval = active_interval
        self._clock = clock

    def is_due(self, config: DomainConfig, now: datetime) -> bool:
        """Whether config should be reconciled on this pass."""
        if config.status in UNVERIFIED_STATUSES:
            return True
        if config.status == DomainStatus.ACTIVE:
            return (
                config.last_checked_at is None
                or now - config.last_checked_at >= self._active_interval
            )
        return False

    async def run(self) -> SweepResult:
        """Reconcile all due configs and return per-outcome counts.

        pending and verifying configs take the batch first (never-checked,
        then least recently checked); active configs past their drift
        interval fill whatever room is left.
        """
        result = SweepResult()
        now = self._clock()
        configs = await self._repo.list_by_status(UNVERIFIED_STATUSES, limit=self._batch_size)
        room = self._batch_size - len(configs)
        if room > 0:
            configs += await self._repo.list_checked_before(
                DomainStatus.ACTIVE, now - self._active_interval, limit=room
            )
        for config in configs:
            # The store may hand back a config another writer just changed.
            if not self.is_due(config, now):
                result.skipped += 1
                continue
            await self._reconcile_one(config, result)
        logger.info(
            "Reconciliation sweep finished: checked=%d skipped=%d activated=%d failed=%d errored=%d",
            result.checked,
            result.skipped,
            result.activated,
            result.failed,
            result.errored,
        )
        return result

    async def run_for_tenant(self, tenant_id: str) -> SweepResult:
        """Reconcile a single tenant regardless of cadence (admin "check now" from the CLI)."""
        result = SweepResult()
        config = await self._service.get_config(tenant_id)
        await self._reconcile_one(config, result)
        return result

    async def _reconcile_one(self, config: DomainConfig, result: SweepResult) -> None:
        previous = config.status
        try:
            updated = await self._service.reconcile_config(config)
        except Exception:
            logger.exception(
                "Reconcile failed for tenant %s (%s)", config.tenant_id, config.domain
            )
            result.errored += 1
            result.errored_tenants.append(config.tenant_id)
            return
        result.checked += 1
        if updated.status == DomainStatus.ACTIVE and previous != DomainStatus.ACTIVE:
            result.activated += 1
        elif updated.status == DomainStatus.ERROR and previous != DomainStatus.ERROR:
            result.failed += 1
