"""Domain provisioning orchestrator: attach, reconcile, retry, detach.

Stateless between calls; every piece of durable state lives in the
DomainConfig document. Provider calls are issued sequentially (hosting,
then email) and each operation writes the store at most once, after all
provider calls have returned, so a cancelled call leaves the stored config
untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from custom_domains.application.dtos.provider import (
    EmailDomainState,
    HostingRegistration,
)
from custom_domains.application.interfaces import (
    IDomainConfigRepository,
    IEmailDomainClient,
    IHostingDomainClient,
)
from custom_domains.application.services.dns_record_planner import DnsRecordPlanner
from custom_domains.domain.entities import DomainConfig
from custom_domains.domain.enums import DomainStatus, ProviderName
from custom_domains.domain.exceptions import (
    DomainConfigNotFoundException,
    DomainConflictException,
    InvalidDomainException,
    ProviderError,
    ProviderNotConfiguredException,
)
from custom_domains.domain.value_objects import DomainName
from custom_domains.shared.telemetry.logging import get_logger
from custom_domains.shared.telemetry.tracing import add_span_attributes, traced
from custom_domains.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# ProviderError.code used by the clients when a registered domain has disappeared.
PROVIDER_NOT_FOUND_CODE = "not_found"


class DomainProvisioningService:
    """Owns the DomainConfig state machine and drives both provider clients.

    Propagation policy: attach, retry, and detach surface errors to the
    caller. reconcile swallows transient provider errors (the config is
    returned with only last_checked_at bumped) and records fatal ones in
    the config (status=error, error_message).
    """

    def __init__(
        self,
        repo: IDomainConfigRepository,
        hosting: IHostingDomainClient,
        email: IEmailDomainClient,
        planner: DnsRecordPlanner | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repo = repo
        self._hosting = hosting
        self._email = email
        self._planner = planner or DnsRecordPlanner()
        self._clock = clock

    async def get_config(self, tenant_id: str) -> DomainConfig:
        """Return the stored config (no provider calls).

        Raises:
            DomainConfigNotFoundException: Tenant has no custom domain.
        """
        config = await self._repo.get(tenant_id)
        if config is None:
            raise DomainConfigNotFoundException(tenant_id)
        return config

    @traced("domain.attach")
    async def attach(
        self, tenant_id: str, domain: str, email_enabled: bool
    ) -> DomainConfig:
        """Attach domain to tenant: register with providers, plan records, persist pending.

        Returns immediately; verification happens in later reconcile calls.
        Attaching the tenant's current domain again is idempotent; attaching
        a different one supersedes (best-effort deregisters) the old one.
        Re-attaching with email turned off deregisters the old email domain.

        Raises:
            InvalidDomainException: Malformed domain, or a provider refused the name.
            DomainConflictException: Domain is attached to another tenant.
            ProviderError: Registration failed (nothing is persisted).
        """
        try:
            name = DomainName.parse(domain)
        except ValueError as e:
            raise InvalidDomainException(domain, str(e)) from None

        owners = await self._repo.find_tenant_ids_by_domain(name.value)
        if any(owner != tenant_id for owner in owners):
            raise DomainConflictException(name.value)

        logger.info(
            "Attaching domain %s to tenant %s (email=%s)",
            name.value,
            tenant_id,
            email_enabled,
        )
        registration = await self._register_hosting(name.value)
        email_state: EmailDomainState | None = None
        if email_enabled:
            email_state = await self._register_email(name.value)

        plan = self._planner.plan(
            name.value,
            email_enabled,
            email_state.records if email_state else (),
        )
        config = DomainConfig(
            tenant_id=tenant_id,
            domain=name.value,
            domain_type=plan.domain_type,
            email_enabled=email_enabled,
            hosting_provider_id=registration.provider_id,
            hosting_registered=True,
            hosting_verified=False,
            email_provider_id=email_state.provider_id if email_state else None,
            email_verified=email_state.verified if email_state else False,
            records=plan.records,
            status=DomainStatus.PENDING,
        )

        previous = await self._repo.get(tenant_id)
        if previous is not None and previous.domain != name.value:
            logger.info(
                "Tenant %s replaces domain %s with %s",
                tenant_id,
                previous.domain,
                name.value,
            )
            await self._deregister(previous)
        elif previous is not None and previous.email_provider_id not in (
            None,
            config.email_provider_id,
        ):
            logger.info(
                "Tenant %s drops email domain %s for %s",
                tenant_id,
                previous.email_provider_id,
                name.value,
            )
            await self._deregister_email(previous)

        await self._repo.save(config)
        logger.info(
            "Attached domain %s to tenant %s (%s, %d records)",
            name.value,
            tenant_id,
            plan.domain_type.value,
            len(config.records),
        )
        return config

    async def reconcile(self, tenant_id: str) -> DomainConfig:
        """Load the tenant's config and run one reconciliation pass.

        Raises:
            DomainConfigNotFoundException: Tenant has no custom domain.
        """
        config = await self.get_config(tenant_id)
        return await self.reconcile_config(config)

    @traced("domain.reconcile")
    async def reconcile_config(self, config: DomainConfig) -> DomainConfig:
        """Poll both providers and converge config to what they observe.

        - all required verifications pass: active (configured_at on first time)
        - anything still unverified: verifying (never back to pending)
        - fatal provider error: error with error_message
        - transient provider error: status and flags untouched, last_checked_at bumped
        Configs in error make no provider calls; only last_checked_at moves.
        Use retry() to leave error.
        """
        if config.status == DomainStatus.ERROR:
            logger.debug(
                "Not polling providers for %s (tenant %s): status is error",
                config.domain,
                config.tenant_id,
            )
            config.mark_checked(self._clock())
            await self._repo.save(config)
            return config

        previous_status = config.status
        try:
            hosting_status = await self._hosting.check_status(config.domain)
            email_state: EmailDomainState | None = None
            if config.email_enabled:
                if config.email_provider_id:
                    email_state = await self._email.verify(config.email_provider_id)
                else:
                    email_state = await self._email.lookup(config.domain)
        except ProviderError as e:
            now = self._clock()
            if not e.fatal:
                logger.warning(
                    "Transient %s provider error reconciling %s (tenant %s): %s",
                    e.provider.value,
                    config.domain,
                    config.tenant_id,
                    e.message,
                )
                config.mark_checked(now)
                await self._repo.save(config)
                return config
            logger.error(
                "Fatal %s provider error reconciling %s (tenant %s): %s",
                e.provider.value,
                config.domain,
                config.tenant_id,
                e.message,
            )
            if e.code == PROVIDER_NOT_FOUND_CODE and e.provider == ProviderName.HOSTING:
                config.hosting_registered = False
                config.hosting_verified = False
            config.fail(e.message)
            config.mark_checked(now)
            self._log_transition(config, previous_status)
            await self._repo.save(config)
            return config

        now = self._clock()
        config.apply_hosting_status(
            registered=True,
            verified=hosting_status.verified,
            dns_configured=hosting_status.dns_configured,
            configured_by=hosting_status.configured_by,
            now=now,
        )
        if email_state is not None:
            config.email_provider_id = email_state.provider_id
            config.apply_email_status(
                verified=email_state.verified,
                records=list(email_state.records),
                now=now,
            )
        config.resolve_status(now)
        config.mark_checked(now)
        self._log_transition(config, previous_status)
        await self._repo.save(config)
        return config

    @traced("domain.retry")
    async def retry(self, tenant_id: str) -> DomainConfig:
        """Manual retry: re-register with providers, leave error, reconcile once.

        Registrations are idempotent, so this also repairs a registration
        that disappeared provider-side.

        Raises:
            DomainConfigNotFoundException: Tenant has no custom domain.
            ProviderError: Re-registration failed (stored config untouched).
        """
        config = await self.get_config(tenant_id)
        registration = await self._hosting.register(config.domain)
        email_state: EmailDomainState | None = None
        if config.email_enabled:
            email_state = await self._email.register(config.domain)

        now = self._clock()
        config.hosting_provider_id = registration.provider_id
        config.hosting_registered = True
        if email_state is not None:
            config.email_provider_id = email_state.provider_id
            config.apply_email_status(
                verified=email_state.verified,
                records=list(email_state.records),
                now=now,
            )
        if config.status == DomainStatus.ERROR:
            logger.info(
                "Retrying domain %s for tenant %s (was: %s)",
                config.domain,
                tenant_id,
                config.error_message,
            )
            config.begin_retry()
        return await self.reconcile_config(config)

    @traced("domain.detach")
    async def detach(self, tenant_id: str) -> None:
        """Best-effort deregister from both providers, then delete the config.

        Deregistration failures are logged, never raised: an orphaned
        provider-side registration must not block removing the domain.

        Raises:
            DomainConfigNotFoundException: Tenant has no custom domain.
        """
        config = await self.get_config(tenant_id)
        await self._deregister(config)
        await self._repo.delete(tenant_id)
        logger.info("Detached domain %s from tenant %s", config.domain, tenant_id)

    async def _register_hosting(self, domain: str) -> HostingRegistration:
        try:
            registration = await self._hosting.register(domain)
        except ProviderError as e:
            if e.is_invalid_domain:
                raise InvalidDomainException(domain, e.provider_message) from e
            raise
        if registration.challenge_records:
            logger.info(
                "Hosting provider requests %d ownership challenge(s) for %s: %s",
                len(registration.challenge_records),
                domain,
                ", ".join(f"{c.type} {c.domain}" for c in registration.challenge_records),
            )
        return registration

    async def _register_email(self, domain: str) -> EmailDomainState:
        try:
            return await self._email.register(domain)
        except ProviderError as e:
            if e.is_invalid_domain:
                raise InvalidDomainException(domain, e.provider_message) from e
            raise

    async def _deregister(self, config: DomainConfig) -> None:
        if config.hosting_registered or config.hosting_provider_id:
            try:
                await self._hosting.deregister(config.domain)
            except (ProviderError, ProviderNotConfiguredException) as e:
                logger.warning(
                    "Hosting deregistration failed for %s (continuing): %s",
                    config.domain,
                    e.message,
                )
        await self._deregister_email(config)

    async def _deregister_email(self, config: DomainConfig) -> None:
        if config.email_enabled and config.email_provider_id:
            try:
                await self._email.deregister(config.email_provider_id)
            except (ProviderError, ProviderNotConfiguredException) as e:
                logger.warning(
                    "Email deregistration failed for %s (continuing): %s",
                    config.domain,
                    e.message,
                )

    @staticmethod
    def _log_transition(config: DomainConfig, previous: DomainStatus) -> None:
        add_span_attributes(
            domain=config.domain,
            tenant_id=config.tenant_id,
            status=config.status.value,
        )
        if config.status != previous:
            logger.info(
                "Domain %s (tenant %s): %s -> %s",
                config.domain,
                config.tenant_id,
                previous.value,
                config.status.value,
            )
