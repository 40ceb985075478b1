"""HTTP client for the Tashi sign-in and missions endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from missionclaim.adapters.http_resilience import ResilientClient, default_client_factory
from missionclaim.config.tashi import default_orchestrator_resilience, default_web_resilience
from missionclaim.domain.errors import ChallengeError, CompletionFetchError
from missionclaim.domain.ports.service import MissionService
from missionclaim.domain.types import Challenge, ClaimResult

from .schema import AccountRequest, ChallengeResponse, ClaimRequest

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from missionclaim.config.http_resilience import ResilienceConfig
    from missionclaim.domain.types import ActionId, Credential

log = getLogger(__name__)

ACCOUNT_PATH = "/v1/account"
COMPLETIONS_PATH = "/missions.api/get"
CLAIM_PATH = "/missions.api/record"


def _auth_headers(credential: Credential) -> dict[str, str]:
    return {"cookie": f"Authorization=Bearer {credential.token}"}


def _response_body(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text


def _log_response(response: httpx.Response) -> None:
    log.debug("%s %s -> %s", response.request.method, response.request.url, response.status_code)


@dataclass(slots=True)
class TashiClient:
    """Mission service adapter; use as an async context manager."""

    orchestrator: ResilienceConfig = field(default_factory=default_orchestrator_resilience)
    web: ResilienceConfig = field(default_factory=default_web_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    _orchestrator_client: ResilientClient | None = field(default=None, init=False, repr=False)
    _web_client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> TashiClient:
        self._orchestrator_client = self.client_factory(self.orchestrator)
        self._web_client = self.client_factory(self.web)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for client in (self._orchestrator_client, self._web_client):
            if client is not None:
                await client.aclose()
        self._orchestrator_client = None
        self._web_client = None

    def _clients(self) -> tuple[ResilientClient, ResilientClient]:
        if self._orchestrator_client is None or self._web_client is None:
            raise RuntimeError("TashiClient must be used inside 'async with'")
        return self._orchestrator_client, self._web_client

    async def request_challenge(self, *, referral: str | None = None) -> Challenge:
        orchestrator, _ = self._clients()
        body = AccountRequest(referred_by=referral).model_dump(by_alias=True, exclude_none=True)
        response = await orchestrator.post(ACCOUNT_PATH, json=body)
        _log_response(response)
        if response.is_error:
            raise ChallengeError(
                f"Challenge request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = ChallengeResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ChallengeError(
                "Challenge response lacks nonce/issuedAt",
                status_code=response.status_code,
            ) from exc
        return Challenge(nonce=payload.nonce, issued_at=payload.issued_at)

    async def fetch_completions(self, wallet_id: str, credential: Credential) -> object:
        _, web = self._clients()
        response = await web.get(
            COMPLETIONS_PATH,
            params={"wallet_id": wallet_id},
            headers=_auth_headers(credential),
        )
        _log_response(response)
        if response.is_error:
            raise CompletionFetchError(
                f"Completed missions lookup failed with status {response.status_code}",
                status_code=response.status_code,
            )
        return _response_body(response)

    async def submit_claim(
        self,
        wallet_id: str,
        action_id: ActionId,
        credential: Credential,
    ) -> ClaimResult:
        _, web = self._clients()
        body = ClaimRequest(wallet_id=wallet_id, mission_id=action_id).model_dump()
        response = await web.post(CLAIM_PATH, json=body, headers=_auth_headers(credential))
        _log_response(response)
        return ClaimResult(
            action_id=action_id,
            status_code=response.status_code,
            body=_response_body(response),
        )


if TYPE_CHECKING:
    _service_check: MissionService = TashiClient()
