"""Discover target mission ids from the dashboard's compiled JavaScript."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from missionclaim.adapters.http_resilience import ResilientClient, default_client_factory
from missionclaim.config.tashi import TASHI_CATALOG_URL, default_catalog_resilience
from missionclaim.domain.errors import CatalogUnavailableError
from missionclaim.domain.ports.catalog import CatalogResult, TargetCatalogProvider

if TYPE_CHECKING:
    from collections.abc import Callable

    from missionclaim.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

MISSION_ID_PATTERN = re.compile(r"missionId:\s*(\d+)")


def extract_mission_ids(text: str, *, source: str | None = None) -> CatalogResult:
    """Return every distinct ``missionId: <n>`` value in ``text``, ascending."""

    ids = (int(match) for match in MISSION_ID_PATTERN.findall(text))
    return CatalogResult.from_ids(ids, source=source)


@dataclass(slots=True)
class DashboardCatalogProvider:
    url: str = TASHI_CATALOG_URL
    resilience: ResilienceConfig = field(default_factory=default_catalog_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )

    async def __call__(self) -> CatalogResult:
        log.info("Fetching mission ids from %s", self.url)
        try:
            async with self.client_factory(self.resilience) as client:
                response = await client.get(self.url)
        except httpx.HTTPError as exc:
            raise CatalogUnavailableError(f"Could not fetch mission catalog: {exc}") from exc

        if response.is_error:
            raise CatalogUnavailableError(
                f"Mission catalog request failed with status {response.status_code}"
            )

        result = extract_mission_ids(response.text, source=self.url)
        log.debug("Catalog yielded %d mission id(s)", len(result.action_ids))
        return result


if TYPE_CHECKING:
    _catalog_check: TargetCatalogProvider = DashboardCatalogProvider()
