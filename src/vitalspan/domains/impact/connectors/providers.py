"""Concrete HealthDataSource implementations."""

from __future__ import annotations

from vitalspan.domains.impact.connectors.mock_data import get_mock_metrics, get_mock_profile
from vitalspan.domains.impact.domain_logic.models import HealthMetric, UserProfile


class MockHealthDataSource:
    """Uses mock data generators. Always available."""

    async def get_metrics(self) -> list[HealthMetric]:
        return get_mock_metrics()

    async def get_profile(self) -> UserProfile:
        return get_mock_profile()

    def is_connected(self) -> bool:
        return False

    @property
    def data_source(self) -> str:
        return "mock"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": (
                "Using simulated health data. "
                "Connect a health data source for real measurements."
            ),
        }


class StaticHealthDataSource:
    """Serves a fixed set of readings, e.g. values entered by hand."""

    def __init__(self, metrics: list[HealthMetric], profile: UserProfile) -> None:
        self._metrics = list(metrics)
        self._profile = profile

    async def get_metrics(self) -> list[HealthMetric]:
        return list(self._metrics)

    async def get_profile(self) -> UserProfile:
        return self._profile

    def is_connected(self) -> bool:
        return bool(self._metrics)

    @property
    def data_source(self) -> str:
        return "manual"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": f"{len(self._metrics)} manually entered readings.",
        }
