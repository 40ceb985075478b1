"""Public interface for the Tashi DePIN adapter."""

from __future__ import annotations

from .catalog import DashboardCatalogProvider, extract_mission_ids
from .client import TashiClient
from .schema import AccountRequest, ChallengeResponse, ClaimRequest

__all__ = [
    "AccountRequest",
    "ChallengeResponse",
    "ClaimRequest",
    "DashboardCatalogProvider",
    "TashiClient",
    "extract_mission_ids",
]
