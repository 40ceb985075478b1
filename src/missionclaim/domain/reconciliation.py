"""Diff target missions against completed ones and submit the remainder."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from missionclaim.config.pacing import DEFAULT_CLAIM_INTERVAL_SECONDS

from .types import AccountReport

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ports.service import MissionService
    from .types import ActionId, Credential

log = getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
AnomalyHook = Callable[[object], None]

COMPLETION_ID_FIELDS = ("mission_id", "id")


def _completion_id(entry: object) -> ActionId | None:
    if not isinstance(entry, Mapping):
        return None
    value: object = None
    for name in COMPLETION_ID_FIELDS:
        value = entry.get(name)
        if value is not None:
            break
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def normalize_completions(
    payload: object,
    *,
    on_anomaly: AnomalyHook | None = None,
) -> frozenset[ActionId]:
    """Collect the numeric mission ids out of a completions payload.

    The first of ``mission_id``/``id`` that is present decides the entry; entries
    without a numeric id are skipped and handed to ``on_anomaly``. Anything other
    than a list yields an empty set.
    """

    if not isinstance(payload, list):
        log.debug("Completions payload is not a list: %r", type(payload).__name__)
        return frozenset()

    claimed: set[ActionId] = set()
    for entry in payload:
        action_id = _completion_id(entry)
        if action_id is None:
            log.debug("Skipping completion entry without numeric id: %r", entry)
            if on_anomaly is not None:
                on_anomaly(entry)
            continue
        claimed.add(action_id)
    return frozenset(claimed)


def compute_pending(
    target: Iterable[ActionId],
    claimed: Iterable[ActionId],
) -> tuple[ActionId, ...]:
    claimed_set = set(claimed)
    return tuple(sorted(set(target) - claimed_set))


def _format_ids(ids: Iterable[ActionId]) -> str:
    return ", ".join(str(action_id) for action_id in sorted(ids)) or "(none)"


@dataclass(slots=True)
class ReconciliationEngine:
    """Per-identity reconciliation of completed missions against the target set."""

    service: MissionService
    claim_interval_seconds: float = DEFAULT_CLAIM_INTERVAL_SECONDS
    sleep: Sleep = field(default=asyncio.sleep)
    on_anomaly: AnomalyHook | None = None

    async def reconcile(
        self,
        wallet_id: str,
        credential: Credential,
        target: tuple[ActionId, ...],
        *,
        report: AccountReport,
    ) -> AccountReport:
        """Fill ``report`` with the claimed set, pending set and claim results.

        Claim failures are recorded and do not stop the remaining submissions.
        Exceptions from the service propagate to the caller.
        """

        payload = await self.service.fetch_completions(wallet_id, credential)
        claimed = normalize_completions(payload, on_anomaly=self.on_anomaly)
        pending = compute_pending(target, claimed)
        report.claimed = claimed
        report.pending = pending

        if not target:
            log.info("No missions to claim.")
            return report

        log.info("Already claimed: %s", _format_ids(claimed))
        log.info("Pending claims: %s", _format_ids(pending))
        if not pending:
            log.info("All missions already claimed.")
            return report

        log.info("Claiming %d mission(s)", len(pending))
        for action_id in pending:
            result = await self.service.submit_claim(wallet_id, action_id, credential)
            report.results.append(result)
            if result.ok:
                log.info("Mission %s -> status %s", action_id, result.status_code)
            else:
                log.warning("Mission %s -> status %s", action_id, result.status_code)
            await self.sleep(self.claim_interval_seconds)

        log.info(
            "Finished claiming: %d succeeded, %d failed",
            report.claims_succeeded,
            report.claims_failed,
        )
        return report
