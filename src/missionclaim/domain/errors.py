"""Errors raised while talking to the remote mission service."""

from __future__ import annotations


class CatalogUnavailableError(RuntimeError):
    """Raised when the target mission catalog cannot be fetched at all."""


class MissionServiceError(RuntimeError):
    """Raised when the mission service answers a request unusably."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ChallengeError(MissionServiceError):
    """Raised when no usable sign-in challenge could be obtained."""


class CompletionFetchError(MissionServiceError):
    """Raised when the completed-missions lookup fails."""
