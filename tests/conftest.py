"""Shared test fixtures for vitalspan tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Never touch ~/.vitalspan from tests.
    monkeypatch.setenv("CACHE_DB_PATH", "")
    monkeypatch.setenv("ENCRYPTION_KEY", "")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from vitalspan.domains.impact.domain_logic.models import Gender, UserProfile  # noqa: E402


class FakeClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 3, 14, 9, 30)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

@pytest.fixture
def profile() -> UserProfile:
    """A 40-year-old with height on file."""
    return UserProfile(
        id="test-user",
        birth_year=datetime.now().year - 40,
        gender=Gender.FEMALE,
        height_cm=175.0,
    )


@pytest.fixture
def anonymous_profile() -> UserProfile:
    """A profile with no birth year, sex, or height."""
    return UserProfile(id="anonymous")


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def calculator_registry():
    from vitalspan.domains.impact.domain_logic.registry import CalculatorRegistry

    return CalculatorRegistry.default()


@pytest.fixture
def interaction_engine():
    from vitalspan.domains.impact.domain_logic.interaction_engine import InteractionEngine

    return InteractionEngine()


@pytest.fixture
def aggregator(calculator_registry, interaction_engine):
    from vitalspan.domains.impact.domain_logic.aggregator import ImpactAggregator

    return ImpactAggregator(calculator_registry, interaction_engine)


@pytest.fixture
def solver(calculator_registry):
    from vitalspan.domains.impact.domain_logic.target_solver import TargetSolver

    return TargetSolver(calculator_registry)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# In-memory storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_store():
    from vitalspan.core.storage.kv_store import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


@pytest.fixture
def cache_db():
    """Create an in-memory CacheDatabase for testing."""
    from vitalspan.core.storage.database import CacheDatabase

    db = CacheDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def field_encryptor():
    """Create a FieldEncryptor with a test key."""
    from cryptography.fernet import Fernet

    from vitalspan.core.storage.encryption import FieldEncryptor

    return FieldEncryptor(Fernet.generate_key().decode())


@pytest.fixture
def target_cache(memory_store, solver, clock):
    from vitalspan.domains.impact.domain_logic.daily_target_cache import DailyTargetCache

    return DailyTargetCache(memory_store, solver, clock=clock)
