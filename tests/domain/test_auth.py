from __future__ import annotations

import asyncio

import pytest

from missionclaim.domain.auth import (
    AuthSession,
    AuthState,
    AuthStateError,
    ChallengeAuthenticator,
    build_challenge_message,
)
from missionclaim.domain.errors import ChallengeError
from missionclaim.domain.signing import b58decode, verify_detached
from missionclaim.domain.types import Challenge
from tests.support.fakes import ISSUED_AT, FakeMissionService
from tests.support.keys import make_identity


def test_challenge_message_layout() -> None:
    message = build_challenge_message(
        "Tashi",
        "WalletABC",
        Challenge(nonce="n-1", issued_at="2025-01-01T00:00:00Z"),
    )

    assert message == (
        "Sign in to Tashi\n\nWallet: WalletABC\nNonce: n-1\nIssuedAt: 2025-01-01T00:00:00Z"
    )


def test_session_walks_states_in_order(fake_service: FakeMissionService) -> None:
    identity = make_identity(1)
    session = AuthSession(identity=identity, service_name="Tashi")
    assert session.state is AuthState.NO_CHALLENGE

    challenge = asyncio.run(session.request_challenge(fake_service))
    assert session.state is AuthState.CHALLENGE_ISSUED
    assert challenge == Challenge(nonce="nonce-1", issued_at=ISSUED_AT)

    signature = session.sign()
    assert session.state is AuthState.SIGNED
    message = build_challenge_message("Tashi", identity.wallet_id, challenge)
    assert verify_detached(message.encode("utf-8"), signature, identity.public_key)

    credential = session.issue_token()
    assert session.state is AuthState.TOKEN_ISSUED
    assert credential.token == f"{credential.signature}.{identity.wallet_id}"
    assert b58decode(credential.signature) == signature


def test_session_rejects_out_of_order_steps() -> None:
    session = AuthSession(identity=make_identity(1), service_name="Tashi")

    with pytest.raises(AuthStateError):
        session.sign()
    with pytest.raises(AuthStateError):
        session.issue_token()


def test_session_state_without_material_is_rejected() -> None:
    unsigned = AuthSession(
        identity=make_identity(1),
        service_name="Tashi",
        state=AuthState.CHALLENGE_ISSUED,
    )
    unissued = AuthSession(
        identity=make_identity(1),
        service_name="Tashi",
        state=AuthState.SIGNED,
    )

    with pytest.raises(AuthStateError, match="no challenge"):
        unsigned.sign()
    with pytest.raises(AuthStateError, match="no signature"):
        unissued.issue_token()
    assert unsigned.state is AuthState.CHALLENGE_ISSUED
    assert unissued.state is AuthState.SIGNED


def test_authenticator_requests_fresh_challenge_per_identity(
    fake_service: FakeMissionService,
) -> None:
    authenticator = ChallengeAuthenticator(
        service=fake_service, service_name="Tashi", referral="friend-42"
    )

    first = asyncio.run(authenticator.authenticate(make_identity(1)))
    second = asyncio.run(authenticator.authenticate(make_identity(2)))

    assert fake_service.calls_of("challenge") == [
        ("challenge", "friend-42"),
        ("challenge", "friend-42"),
    ]
    assert first.wallet_id == make_identity(1).wallet_id
    assert second.wallet_id == make_identity(2).wallet_id
    assert first.signature != second.signature


def test_credential_is_deterministic_for_the_same_challenge() -> None:
    identity = make_identity(4)
    tokens = []
    for _ in range(2):
        service = FakeMissionService()
        authenticator = ChallengeAuthenticator(service=service, service_name="Tashi")
        tokens.append(asyncio.run(authenticator.authenticate(identity)).token)

    assert tokens[0] == tokens[1]


def test_challenge_failure_propagates() -> None:
    service = FakeMissionService(failing_challenges={1})
    authenticator = ChallengeAuthenticator(service=service, service_name="Tashi")

    with pytest.raises(ChallengeError):
        asyncio.run(authenticator.authenticate(make_identity(1)))
