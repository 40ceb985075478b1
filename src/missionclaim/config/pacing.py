"""Pacing defaults for account processing."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_CLAIM_INTERVAL_SECONDS = 0.4
DEFAULT_ACCOUNT_INTERVAL_SECONDS = 0.8
DEFAULT_CONCURRENCY = 1


@dataclass(frozen=True, slots=True)
class PacingConfig:
    claim_interval_seconds: float = DEFAULT_CLAIM_INTERVAL_SECONDS
    account_interval_seconds: float = DEFAULT_ACCOUNT_INTERVAL_SECONDS
    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self) -> None:
        if self.claim_interval_seconds < 0 or self.account_interval_seconds < 0:
            raise ConfigurationError("Pacing intervals must be non-negative")
        if self.concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")
