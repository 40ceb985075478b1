from __future__ import annotations

import asyncio
import json

from typing import TypeVar

import httpx
import pytest

from missionclaim.adapters.tashi import TashiClient
from missionclaim.config.tashi import default_orchestrator_resilience, default_web_resilience
from missionclaim.domain.errors import ChallengeError, CompletionFetchError
from missionclaim.domain.types import Challenge, ClaimResult, Credential
from tests.support.http import make_client_factory

T = TypeVar("T")

CREDENTIAL = Credential(signature="5igNature", wallet_id="Wa11et")


def _client(handler: object) -> TashiClient:
    return TashiClient(
        orchestrator=default_orchestrator_resilience("https://orchestrator.test"),
        web=default_web_resilience("https://web.test"),
        client_factory=make_client_factory(handler),  # type: ignore[arg-type]
    )


async def _with_client(client: TashiClient, action: object) -> T:
    async with client:
        return await action(client)  # type: ignore[operator]


def test_request_challenge_posts_referral_and_parses_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"nonce": "abc", "issuedAt": "2025-01-01T00:00:00Z"})

    challenge = asyncio.run(
        _with_client(_client(handler), lambda c: c.request_challenge(referral="ref-1"))
    )

    assert challenge == Challenge(nonce="abc", issued_at="2025-01-01T00:00:00Z")
    assert seen[0].method == "POST"
    assert seen[0].url == "https://orchestrator.test/v1/account"
    assert json.loads(seen[0].content) == {"referredBy": "ref-1"}


def test_request_challenge_without_referral_sends_empty_body() -> None:
    bodies: list[object] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"nonce": 1, "issuedAt": "t"})

    challenge = asyncio.run(_with_client(_client(handler), lambda c: c.request_challenge()))

    assert bodies == [{}]
    assert challenge.nonce == "1"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, text="unavailable"),
        httpx.Response(200, json={"nonce": "abc"}),
        httpx.Response(200, text="<html>"),
    ],
)
def test_request_challenge_failures_raise(response: httpx.Response) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return response

    with pytest.raises(ChallengeError):
        asyncio.run(_with_client(_client(handler), lambda c: c.request_challenge()))


def test_request_challenge_is_sent_only_once_on_server_error() -> None:
    calls: list[int] = []

    def handler(_request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(500)

    with pytest.raises(ChallengeError):
        asyncio.run(_with_client(_client(handler), lambda c: c.request_challenge()))

    assert len(calls) == 1


def test_fetch_completions_sends_credential_cookie() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"mission_id": 3}, {"id": 4}])

    payload = asyncio.run(
        _with_client(_client(handler), lambda c: c.fetch_completions("Wa11et", CREDENTIAL))
    )

    assert payload == [{"mission_id": 3}, {"id": 4}]
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/missions.api/get"
    assert request.url.params["wallet_id"] == "Wa11et"
    assert request.headers["cookie"] == "Authorization=Bearer 5igNature.Wa11et"


def test_fetch_completions_error_status_raises() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "unauthorized"})

    with pytest.raises(CompletionFetchError) as excinfo:
        asyncio.run(
            _with_client(_client(handler), lambda c: c.fetch_completions("Wa11et", CREDENTIAL))
        )

    assert excinfo.value.status_code == 401


def test_submit_claim_posts_body_and_reports_status() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        status = 200 if json.loads(request.content)["mission_id"] == 1 else 409
        return httpx.Response(status, json={"ok": status == 200})

    async def submit_both(client: TashiClient) -> list[ClaimResult]:
        return [
            await client.submit_claim("Wa11et", 1, CREDENTIAL),
            await client.submit_claim("Wa11et", 2, CREDENTIAL),
        ]

    results: list[ClaimResult] = asyncio.run(_with_client(_client(handler), submit_both))

    assert [(result.action_id, result.status_code, result.ok) for result in results] == [
        (1, 200, True),
        (2, 409, False),
    ]
    assert results[0].body == {"ok": True}
    assert seen[0].url == "https://web.test/missions.api/record"
    assert json.loads(seen[0].content) == {"wallet_id": "Wa11et", "mission_id": 1}
    assert seen[0].headers["cookie"] == "Authorization=Bearer 5igNature.Wa11et"


def test_transport_errors_propagate() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(httpx.ConnectError):
        asyncio.run(
            _with_client(_client(handler), lambda c: c.submit_claim("Wa11et", 1, CREDENTIAL))
        )


def test_client_requires_context_manager() -> None:
    with pytest.raises(RuntimeError, match="async with"):
        asyncio.run(_client(lambda _r: httpx.Response(200)).request_challenge())
