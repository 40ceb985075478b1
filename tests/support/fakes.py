"""In-memory stand-ins for the mission service and catalog ports."""

from __future__ import annotations

from dataclasses import dataclass, field

from missionclaim.domain.errors import ChallengeError
from missionclaim.domain.ports.catalog import CatalogResult
from missionclaim.domain.types import Challenge, ClaimResult, Credential

ISSUED_AT = "2025-01-01T00:00:00.000Z"


@dataclass
class FakeMissionService:
    """Records every call; successful claims are durably added to completions."""

    completions: dict[str, list[object]] = field(default_factory=dict)
    claim_status: dict[int, int] = field(default_factory=dict)
    failing_challenges: set[int] = field(default_factory=set)
    calls: list[tuple[object, ...]] = field(default_factory=list)
    challenges_issued: int = 0

    async def request_challenge(self, *, referral: str | None = None) -> Challenge:
        self.challenges_issued += 1
        self.calls.append(("challenge", referral))
        if self.challenges_issued in self.failing_challenges:
            raise ChallengeError("connection reset", status_code=None)
        return Challenge(nonce=f"nonce-{self.challenges_issued}", issued_at=ISSUED_AT)

    async def fetch_completions(self, wallet_id: str, credential: Credential) -> object:
        self.calls.append(("fetch", wallet_id, credential.token))
        return list(self.completions.get(wallet_id, []))

    async def submit_claim(
        self,
        wallet_id: str,
        action_id: int,
        credential: Credential,
    ) -> ClaimResult:
        self.calls.append(("claim", wallet_id, action_id))
        status = self.claim_status.get(action_id, 200)
        if 200 <= status < 300:
            self.completions.setdefault(wallet_id, []).append({"mission_id": action_id})
        return ClaimResult(action_id=action_id, status_code=status)

    def calls_of(self, kind: str) -> list[tuple[object, ...]]:
        return [call for call in self.calls if call[0] == kind]


@dataclass
class StaticCatalog:
    action_ids: tuple[int, ...] = ()
    calls: int = 0

    async def __call__(self) -> CatalogResult:
        self.calls += 1
        return CatalogResult.from_ids(self.action_ids, source="static")


@dataclass
class RecordingSleep:
    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
