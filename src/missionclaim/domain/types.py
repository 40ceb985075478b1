"""Value types shared across the domain layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Sequence

ActionId: TypeAlias = int


@dataclass(frozen=True, slots=True)
class Identity:
    """One wallet-held signing identity."""

    secret_material: bytes = field(repr=False)
    public_key: bytes
    wallet_id: str
    ordinal: int = 1


@dataclass(frozen=True, slots=True)
class Challenge:
    nonce: str
    issued_at: str


@dataclass(frozen=True, slots=True)
class Credential:
    """Bearer credential for a single identity session."""

    signature: str
    wallet_id: str

    @property
    def token(self) -> str:
        return f"{self.signature}.{self.wallet_id}"


@dataclass(frozen=True, slots=True)
class ClaimResult:
    action_id: ActionId
    status_code: int
    body: object = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(slots=True)
class AccountReport:
    """Outcome of processing one identity."""

    ordinal: int
    wallet_id: str | None = None
    claimed: frozenset[ActionId] = frozenset()
    pending: tuple[ActionId, ...] = ()
    results: list[ClaimResult] = field(default_factory=list)
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def claims_succeeded(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def claims_failed(self) -> int:
        return sum(1 for result in self.results if not result.ok)


@dataclass(slots=True)
class RunSummary:
    target: tuple[ActionId, ...]
    accounts: Sequence[AccountReport]

    @property
    def accounts_failed(self) -> int:
        return sum(1 for report in self.accounts if not report.succeeded)

    @property
    def claims_attempted(self) -> int:
        return sum(len(report.results) for report in self.accounts)

    @property
    def claims_succeeded(self) -> int:
        return sum(report.claims_succeeded for report in self.accounts)

    @property
    def claims_failed(self) -> int:
        return sum(report.claims_failed for report in self.accounts)
