"""Nonce-based challenge/response sign-in.

Each identity walks ``NO_CHALLENGE -> CHALLENGE_ISSUED -> SIGNED -> TOKEN_ISSUED``
exactly once per run. Only the first step talks to the server; the signature is
checked lazily by the server on the first authenticated request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from logging import getLogger
from typing import TYPE_CHECKING

from .signing import b58encode, sign_detached
from .types import Credential

if TYPE_CHECKING:
    from .ports.service import MissionService
    from .types import Challenge, Identity

log = getLogger(__name__)


class AuthState(Enum):
    NO_CHALLENGE = "no_challenge"
    CHALLENGE_ISSUED = "challenge_issued"
    SIGNED = "signed"
    TOKEN_ISSUED = "token_issued"


class AuthStateError(RuntimeError):
    """Raised when a session step is invoked out of order."""


def build_challenge_message(service_name: str, wallet_id: str, challenge: Challenge) -> str:
    message = (
        f"Sign in to {service_name}\n\n"
        f"Wallet: {wallet_id}\n"
        f"Nonce: {challenge.nonce}\n"
        f"IssuedAt: {challenge.issued_at}"
    )
    return message.strip()


@dataclass(slots=True)
class AuthSession:
    """Sign-in state for one identity."""

    identity: Identity
    service_name: str
    state: AuthState = AuthState.NO_CHALLENGE
    challenge: Challenge | None = None
    signature: bytes | None = field(default=None, repr=False)

    def _expect(self, state: AuthState) -> None:
        if self.state is not state:
            raise AuthStateError(f"Expected {state.value}, session is {self.state.value}")

    async def request_challenge(
        self,
        service: MissionService,
        *,
        referral: str | None = None,
    ) -> Challenge:
        self._expect(AuthState.NO_CHALLENGE)
        self.challenge = await service.request_challenge(referral=referral)
        self.state = AuthState.CHALLENGE_ISSUED
        return self.challenge

    def sign(self) -> bytes:
        self._expect(AuthState.CHALLENGE_ISSUED)
        if self.challenge is None:
            raise AuthStateError("Session has no challenge to sign")
        message = build_challenge_message(
            self.service_name, self.identity.wallet_id, self.challenge
        )
        self.signature = sign_detached(message.encode("utf-8"), self.identity.secret_material)
        self.state = AuthState.SIGNED
        return self.signature

    def issue_token(self) -> Credential:
        self._expect(AuthState.SIGNED)
        if self.signature is None:
            raise AuthStateError("Session has no signature to issue a token from")
        credential = Credential(
            signature=b58encode(self.signature),
            wallet_id=self.identity.wallet_id,
        )
        self.state = AuthState.TOKEN_ISSUED
        return credential


@dataclass(slots=True)
class ChallengeAuthenticator:
    service: MissionService
    service_name: str
    referral: str | None = None

    async def authenticate(self, identity: Identity) -> Credential:
        """Run the full sign-in for ``identity`` and return its bearer credential."""

        session = AuthSession(identity=identity, service_name=self.service_name)
        challenge = await session.request_challenge(self.service, referral=self.referral)
        log.debug("Challenge issued for %s at %s", identity.wallet_id, challenge.issued_at)
        session.sign()
        return session.issue_token()
