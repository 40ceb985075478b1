"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from missionclaim.adapters.tashi import DashboardCatalogProvider, TashiClient
from missionclaim.config import PacingConfig, get_tashi_config
from missionclaim.domain.auth import ChallengeAuthenticator
from missionclaim.domain.coordinator import RunCoordinator
from missionclaim.domain.identity import load_identities
from missionclaim.domain.reconciliation import ReconciliationEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from missionclaim.config import TashiConfig
    from missionclaim.domain.ports.catalog import TargetCatalogProvider
    from missionclaim.domain.reconciliation import AnomalyHook, Sleep
    from missionclaim.domain.types import Identity, RunSummary

ServiceFactory = Callable[["TashiConfig"], TashiClient]

log = getLogger(__name__)


def _default_service_factory(config: TashiConfig) -> TashiClient:
    return TashiClient(orchestrator=config.orchestrator, web=config.web)


def run_missions(
    *,
    config: TashiConfig | None = None,
    pacing: PacingConfig | None = None,
    catalog: TargetCatalogProvider | None = None,
    service_factory: ServiceFactory | None = None,
    sleep: Sleep = asyncio.sleep,
    on_anomaly: AnomalyHook | None = None,
) -> RunSummary:
    """Claim pending missions for every configured account.

    Secret keys are validated before any request is made, so configuration errors
    never leave partial network activity behind.
    """

    effective_config = config or get_tashi_config()
    effective_pacing = pacing or PacingConfig()
    identities = load_identities(effective_config.secret_source)
    if effective_config.referral:
        log.info("Using referral %s", effective_config.referral)

    effective_catalog = catalog or DashboardCatalogProvider(
        url=effective_config.catalog_url,
        resilience=effective_config.catalog,
    )
    factory = service_factory or _default_service_factory
    return asyncio.run(
        _run(
            identities,
            config=effective_config,
            pacing=effective_pacing,
            catalog=effective_catalog,
            service=factory(effective_config),
            sleep=sleep,
            on_anomaly=on_anomaly,
        )
    )


async def _run(
    identities: Sequence[Identity],
    *,
    config: TashiConfig,
    pacing: PacingConfig,
    catalog: TargetCatalogProvider,
    service: TashiClient,
    sleep: Sleep,
    on_anomaly: AnomalyHook | None,
) -> RunSummary:
    async with service:
        coordinator = RunCoordinator(
            authenticator=ChallengeAuthenticator(
                service=service,
                service_name=config.service_name,
                referral=config.referral,
            ),
            engine=ReconciliationEngine(
                service=service,
                claim_interval_seconds=pacing.claim_interval_seconds,
                sleep=sleep,
                on_anomaly=on_anomaly,
            ),
            account_interval_seconds=pacing.account_interval_seconds,
            concurrency=pacing.concurrency,
            sleep=sleep,
        )
        return await coordinator.run(identities, catalog)
