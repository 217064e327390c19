"""Tests for ReconciliationSweep (cadence, batch priority, per-tenant isolation)."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from custom_domains.application.services import ReconciliationSweep
from custom_domains.domain.enums import DomainStatus
from custom_domains.domain.exceptions import DomainConfigNotFoundException
from tests.fakes import invalid_domain_error


@pytest.fixture
def sweep(service, repo, clock) -> ReconciliationSweep:
    return ReconciliationSweep(
        service, repo, batch_size=50, active_interval=timedelta(hours=6), clock=clock
    )


async def test_sweep_reconciles_pending_and_counts_activations(
    sweep, service, hosting
) -> None:
    await service.attach("tenant-1", "one.example.com", email_enabled=False)
    await service.attach("tenant-2", "two.example.com", email_enabled=False)
    hosting.observe(verified=True, dns_configured=True, configured_by="CNAME")

    result = await sweep.run()

    assert result.checked == 2
    assert result.activated == 2
    assert result.skipped == 0
    assert result.errored == 0


async def test_sweep_leaves_recently_checked_active_domains_alone(
    sweep, service, hosting, clock
) -> None:
    """Active domains are only re-checked once the drift interval has passed."""
    await service.attach("tenant-1", "example.com", email_enabled=False)
    hosting.observe(verified=True, dns_configured=True, configured_by="A")
    await sweep.run()

    clock.advance(hours=1)
    hosting.calls.clear()
    result = await sweep.run()
    assert result.checked == 0
    assert hosting.calls == []

    clock.advance(hours=6)
    result = await sweep.run()
    assert result.checked == 1


async def test_pending_domain_is_served_when_active_ones_exceed_batch(
    service, repo, hosting, clock
) -> None:
    """Fresh active domains never crowd a pending one out of a small batch."""
    small = ReconciliationSweep(
        service, repo, batch_size=2, active_interval=timedelta(hours=6), clock=clock
    )
    hosting.observe(verified=True, dns_configured=True, configured_by="A")
    for n in range(3):
        await service.attach(f"active-{n}", f"a{n}.example.com", email_enabled=False)
        await service.reconcile(f"active-{n}")
    hosting.observe(verified=False, dns_configured=False)
    await service.attach("z-pending", "z.example.com", email_enabled=False)

    clock.advance(minutes=5)
    result = await small.run()

    assert result.checked == 1
    config = await repo.get("z-pending")
    assert config.status == DomainStatus.VERIFYING
    assert config.last_checked_at == clock.now


async def test_unverified_domains_rotate_through_small_batch(
    service, repo, clock
) -> None:
    """Least recently checked first, so every pending domain gets its turn."""
    small = ReconciliationSweep(service, repo, batch_size=2, clock=clock)
    for n in range(3):
        await service.attach(f"tenant-{n}", f"d{n}.example.com", email_enabled=False)

    for _ in range(2):
        clock.advance(minutes=5)
        await small.run()

    configs = [await repo.get(f"tenant-{n}") for n in range(3)]
    assert all(c.last_checked_at is not None for c in configs)


async def test_stale_active_domains_fill_remaining_room(
    service, repo, hosting, clock
) -> None:
    small = ReconciliationSweep(
        service, repo, batch_size=2, active_interval=timedelta(hours=6), clock=clock
    )
    hosting.observe(verified=True, dns_configured=True, configured_by="A")
    await service.attach("active-0", "a0.example.com", email_enabled=False)
    await service.reconcile("active-0")
    await service.attach("pending-0", "p0.example.com", email_enabled=False)

    clock.advance(hours=7)
    hosting.calls.clear()
    result = await small.run()

    assert result.checked == 2
    assert ("check_status", "a0.example.com") in hosting.calls


async def test_sweep_ignores_error_configs_and_counts_failures(
    sweep, service, repo, hosting
) -> None:
    await service.attach("tenant-1", "example.com", email_enabled=False)
    hosting.status_error = invalid_domain_error()

    first = await sweep.run()
    assert first.failed == 1
    assert (await repo.get("tenant-1")).status == DomainStatus.ERROR

    hosting.calls.clear()
    second = await sweep.run()
    assert second.checked == 0
    assert hosting.calls == []


async def test_sweep_continues_after_unexpected_exception(sweep, service, repo) -> None:
    """One tenant raising does not abort the sweep."""
    await service.attach("tenant-1", "one.example.com", email_enabled=False)
    await service.attach("tenant-2", "two.example.com", email_enabled=False)
    original = service.reconcile_config

    async def flaky(config):
        if config.tenant_id == "tenant-1":
            raise RuntimeError("boom")
        return await original(config)

    service.reconcile_config = AsyncMock(side_effect=flaky)

    result = await sweep.run()

    assert result.errored == 1
    assert result.errored_tenants == ["tenant-1"]
    assert result.checked == 1


async def test_is_due(sweep, service, clock) -> None:
    """pending/verifying are always due; error never is."""
    config = await service.attach("tenant-1", "example.com", email_enabled=False)
    assert sweep.is_due(config, clock.now) is True
    config.fail("x")
    assert sweep.is_due(config, clock.now) is False


async def test_run_for_tenant(sweep, service, hosting) -> None:
    await service.attach("tenant-1", "example.com", email_enabled=False)
    result = await sweep.run_for_tenant("tenant-1")
    assert result.checked == 1
    with pytest.raises(DomainConfigNotFoundException):
        await sweep.run_for_tenant("missing")
