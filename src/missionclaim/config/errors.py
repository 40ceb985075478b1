"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class InvalidSecretKeyError(ConfigurationError):
    """Raised when a secret key entry cannot be turned into an identity."""

    def __init__(self, message: str, *, ordinal: int) -> None:
        super().__init__(f"Secret key #{ordinal}: {message}")
        self.ordinal = ordinal


class NoIdentitiesError(ConfigurationError):
    """Raised when the secret key source yields no usable entries."""
