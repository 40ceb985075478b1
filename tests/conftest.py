from __future__ import annotations

import pytest

from missionclaim.domain.types import Identity
from tests.support.fakes import FakeMissionService, RecordingSleep, StaticCatalog
from tests.support.keys import make_identity


@pytest.fixture
def identities() -> list[Identity]:
    return [make_identity(index) for index in (1, 2, 3)]


@pytest.fixture
def fake_service() -> FakeMissionService:
    return FakeMissionService()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def static_catalog() -> StaticCatalog:
    return StaticCatalog(action_ids=(101, 102, 103))
