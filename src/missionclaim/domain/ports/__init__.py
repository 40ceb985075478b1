"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogResult, TargetCatalogProvider
from .service import MissionService

__all__ = ["CatalogResult", "MissionService", "TargetCatalogProvider"]
