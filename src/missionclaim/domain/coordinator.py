"""Run the sign-in and reconciliation pipeline across all configured accounts."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from missionclaim.config.pacing import DEFAULT_ACCOUNT_INTERVAL_SECONDS, DEFAULT_CONCURRENCY

from .types import AccountReport, RunSummary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .auth import ChallengeAuthenticator
    from .ports.catalog import TargetCatalogProvider
    from .reconciliation import ReconciliationEngine, Sleep
    from .types import ActionId, Identity

log = getLogger(__name__)


@dataclass(slots=True)
class RunCoordinator:
    """Process every identity against one shared target set.

    Errors anywhere in an identity's pipeline are logged against its ordinal and
    the run moves on. With ``concurrency`` above one, up to that many identities
    are in flight at once; every identity but the last still waits
    ``account_interval_seconds`` before releasing its slot.
    """

    authenticator: ChallengeAuthenticator
    engine: ReconciliationEngine
    account_interval_seconds: float = DEFAULT_ACCOUNT_INTERVAL_SECONDS
    concurrency: int = DEFAULT_CONCURRENCY
    sleep: Sleep = field(default=asyncio.sleep)

    async def run(
        self,
        identities: Sequence[Identity],
        catalog: TargetCatalogProvider,
    ) -> RunSummary:
        result = await catalog()
        if result.is_empty:
            log.info("No missions found in the catalog; nothing to claim this run")
        else:
            log.info("Target missions: %s", ", ".join(str(i) for i in result.action_ids))
        return await self.process(identities, result.action_ids)

    async def process(
        self,
        identities: Sequence[Identity],
        target: tuple[ActionId, ...],
    ) -> RunSummary:
        if self.concurrency <= 1:
            reports: list[AccountReport] = []
            for index, identity in enumerate(identities):
                reports.append(await self.process_identity(identity, target))
                if index < len(identities) - 1:
                    await self.sleep(self.account_interval_seconds)
        else:
            reports = await self._process_bounded(identities, target)

        summary = RunSummary(target=target, accounts=reports)
        log.info(
            "All accounts done: %d account(s), %d failed; claims %d attempted, "
            "%d succeeded, %d failed",
            len(reports),
            summary.accounts_failed,
            summary.claims_attempted,
            summary.claims_succeeded,
            summary.claims_failed,
        )
        return summary

    async def _process_bounded(
        self,
        identities: Sequence[Identity],
        target: tuple[ActionId, ...],
    ) -> list[AccountReport]:
        semaphore = asyncio.Semaphore(self.concurrency)
        last = len(identities) - 1

        async def worker(identity: Identity, position: int) -> AccountReport:
            async with semaphore:
                report = await self.process_identity(identity, target)
                if position < last:
                    await self.sleep(self.account_interval_seconds)
                return report

        tasks = [worker(identity, position) for position, identity in enumerate(identities)]
        return list(await asyncio.gather(*tasks))

    async def process_identity(
        self,
        identity: Identity,
        target: tuple[ActionId, ...],
    ) -> AccountReport:
        ordinal = identity.ordinal
        report = AccountReport(ordinal=ordinal, wallet_id=identity.wallet_id)
        log.info("=== Account #%d: %s ===", ordinal, identity.wallet_id)
        try:
            credential = await self.authenticator.authenticate(identity)
            await self.engine.reconcile(identity.wallet_id, credential, target, report=report)
        except Exception as exc:  # noqa: BLE001
            log.exception("Error in account #%d", ordinal)
            report.error = exc
        return report
