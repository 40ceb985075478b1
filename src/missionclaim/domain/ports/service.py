"""Port for the remote mission service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from missionclaim.domain.types import ActionId, Challenge, ClaimResult, Credential


@runtime_checkable
class MissionService(Protocol):
    async def request_challenge(self, *, referral: str | None = None) -> Challenge:
        """Ask the server for a fresh nonce; raise on transport or server failure."""
        ...

    async def fetch_completions(self, wallet_id: str, credential: Credential) -> object:
        """Return the raw completion records recorded for ``wallet_id``."""
        ...

    async def submit_claim(
        self,
        wallet_id: str,
        action_id: ActionId,
        credential: Credential,
    ) -> ClaimResult:
        """Submit one claim; non-success statuses are returned, not raised."""
        ...


__all__ = ["MissionService"]
