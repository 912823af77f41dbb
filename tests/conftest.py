from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rinkside.effects import DataEffects  # noqa: E402
from rinkside.provider import FixtureDataProvider  # noqa: E402
from rinkside.state import AppState  # noqa: E402

TODAY = date(2024, 1, 15)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def provider() -> FixtureDataProvider:
    from rinkside import fixtures
    return FixtureDataProvider(fixtures.sample_data(TODAY))


@pytest.fixture()
def effects(provider) -> DataEffects:
    return DataEffects(provider)


@pytest.fixture()
def state() -> AppState:
    return AppState.initial(today=TODAY)
