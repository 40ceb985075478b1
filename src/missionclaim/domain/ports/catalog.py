"""Port for discovering the set of missions a run should attempt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from missionclaim.domain.types import ActionId


@dataclass(frozen=True, slots=True)
class CatalogResult:
    """Ascending, de-duplicated mission ids; empty when nothing was found."""

    action_ids: tuple[ActionId, ...] = ()
    source: str | None = None

    @classmethod
    def from_ids(cls, ids: Iterable[ActionId], *, source: str | None = None) -> CatalogResult:
        return cls(action_ids=tuple(sorted(set(ids))), source=source)

    @property
    def is_empty(self) -> bool:
        return not self.action_ids


@runtime_checkable
class TargetCatalogProvider(Protocol):
    """Callable port returning the target mission ids.

    Implementations raise ``CatalogUnavailableError`` when the catalog cannot be
    reached at all; an empty result is a valid answer.
    """

    async def __call__(self) -> CatalogResult: ...


__all__ = ["CatalogResult", "TargetCatalogProvider"]
