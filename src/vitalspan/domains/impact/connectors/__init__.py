"""Sources of health readings and profile data for the impact tools."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vitalspan.domains.impact.domain_logic.models import HealthMetric, UserProfile


@runtime_checkable
class HealthDataSource(Protocol):
    """Abstract interface for the external health data layer.

    Tools call these methods without knowing whether readings come from a
    device health store, manual entry, or mock generators.
    """

    async def get_metrics(self) -> list[HealthMetric]:
        """Time-stamped readings, possibly several per metric type."""
        ...

    async def get_profile(self) -> UserProfile:
        """The user's personalisation data (birth year, sex, height)."""
        ...

    def is_connected(self) -> bool:
        """Whether real health data is available."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source: 'manual' or 'mock'."""
        ...

    def get_provenance(self) -> dict[str, str]:
        """Return provenance metadata suitable for merging into tool output."""
        ...
