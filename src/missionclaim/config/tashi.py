"""Tashi DePIN service configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

TASHI_SERVICE_NAME = "Tashi"
TASHI_ORCHESTRATOR_URL = "https://orchestrator.devnet.depin.infra.tashi.dev"
TASHI_WEB_URL = "https://depin.tashi.network"
TASHI_CATALOG_URL = (
    "https://depin.tashi.network/_next/static/chunks/app/dashboard/page-d1eec4fd3763f282.js"
)
TASHI_TIMEOUT_SECONDS = 30.0


def default_orchestrator_resilience(base_url: str = TASHI_ORCHESTRATOR_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="tashi-orchestrator",
        base_url=base_url,
        timeout_seconds=TASHI_TIMEOUT_SECONDS,
        retry=None,
    )


def default_web_resilience(base_url: str = TASHI_WEB_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="tashi-missions",
        base_url=base_url,
        timeout_seconds=TASHI_TIMEOUT_SECONDS,
        retry=None,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
    )


def default_catalog_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="tashi-catalog",
        timeout_seconds=TASHI_TIMEOUT_SECONDS,
        retry=RetryPolicy(),
    )


@dataclass(frozen=True)
class TashiConfig:
    """Holds endpoint and account configuration for one run."""

    secret_source: str
    referral: str | None = None
    service_name: str = TASHI_SERVICE_NAME
    catalog_url: str = TASHI_CATALOG_URL
    orchestrator: ResilienceConfig = field(default_factory=default_orchestrator_resilience)
    web: ResilienceConfig = field(default_factory=default_web_resilience)
    catalog: ResilienceConfig = field(default_factory=default_catalog_resilience)


def get_tashi_config() -> TashiConfig:
    secret_source = require_env_var("SOL_PRIVATE_KEY").strip()
    orchestrator_url = optional_env_var("TASHI_ORCHESTRATOR_URL") or TASHI_ORCHESTRATOR_URL
    web_url = optional_env_var("TASHI_WEB_URL") or TASHI_WEB_URL
    return TashiConfig(
        secret_source=secret_source,
        referral=optional_env_var("TASHI_REFERRAL"),
        catalog_url=optional_env_var("TASHI_CATALOG_URL") or TASHI_CATALOG_URL,
        orchestrator=default_orchestrator_resilience(orchestrator_url),
        web=default_web_resilience(web_url),
    )
