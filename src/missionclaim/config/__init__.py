"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidSecretKeyError,
    MissingConfigurationError,
    NoIdentitiesError,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .pacing import PacingConfig
from .tashi import TashiConfig, get_tashi_config

__all__ = [
    "ConfigurationError",
    "InvalidSecretKeyError",
    "MissingConfigurationError",
    "NoIdentitiesError",
    "PacingConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "TashiConfig",
    "configure_logging",
    "get_tashi_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
