"""Persistent cache of solved daily targets, keyed by (metric, period).

A cached target is served only while the user's live value stays within
the drift threshold of the value it was solved for, and only on the
calendar day it was created. Entries that no longer decrypt are treated
as misses and overwritten. Other store failures never reach the caller:
the cache logs them and falls back to an uncached solve.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable

from vitalspan.core.storage.kv_store import KeyValueStore, StorageError, UnreadableValueError
from vitalspan.domains.impact.domain_logic.models import (
    DailyTarget,
    HealthMetric,
    MetricType,
    Period,
    UserProfile,
)
from vitalspan.domains.impact.domain_logic.target_solver import TargetSolver

logger = logging.getLogger(__name__)

KEY_PREFIX = "daily_target"
INDEX_KEY = f"{KEY_PREFIX}:index"
DEFAULT_DRIFT_THRESHOLD = 0.01


def target_key(metric_type: MetricType, period: Period) -> str:
    return f"{KEY_PREFIX}:{metric_type.value}:{period.value}"


class DailyTargetCache:
    """Wraps a :class:`TargetSolver` with a staleness-aware persistent cache.

    Usage::

        cache = DailyTargetCache(InMemoryKeyValueStore(), TargetSolver())
        target = cache.get_or_solve(HealthMetric(MetricType.STEPS, 4200), Period.DAY, profile)
    """

    def __init__(
        self,
        store: KeyValueStore,
        solver: TargetSolver,
        *,
        drift_threshold: float = DEFAULT_DRIFT_THRESHOLD,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._solver = solver
        self._drift_threshold = drift_threshold
        self._clock = clock

    def get_or_solve(
        self, metric: HealthMetric, period: Period, profile: UserProfile
    ) -> DailyTarget:
        """Return today's target for ``metric``, re-solving when stale or missing."""
        now = self._clock()
        key = target_key(metric.type, period)

        try:
            self.sweep_expired()
            cached = self._read(key)
        except (StorageError, OSError) as exc:
            logger.warning("Target cache unavailable (%s); solving without cache", exc)
            return self._solve(metric, period, profile, now)

        if cached is not None:
            if not cached.is_valid_for(now):
                logger.info("Cached %s target expired", key)
            elif cached.drift(metric.value) < self._drift_threshold:
                return cached
            else:
                logger.info(
                    "Cached %s target stale: value moved %.2f -> %.2f",
                    key, cached.original_current_value, metric.value,
                )

        target = self._solve(metric, period, profile, now)
        try:
            self._write(key, target)
        except (StorageError, OSError) as exc:
            logger.warning("Failed to cache %s target: %s", key, exc)
        return target

    def sweep_expired(self) -> int:
        """Delete entries created before today. Returns the number removed.

        Raises:
            StorageError: If the backing store fails.
        """
        now = self._clock()
        index = self._load_index()
        kept: list[str] = []
        removed = 0
        for key in index:
            target = self._read(key)
            if target is not None and target.is_valid_for(now):
                kept.append(key)
                continue
            self._store.delete(key)
            removed += 1
        if removed:
            self._save_index(kept)
            logger.info("Swept %d expired daily targets", removed)
        return removed

    def clear(self) -> int:
        """Delete every cached target. Returns the number removed.

        Raises:
            StorageError: If the backing store fails.
        """
        index = self._load_index()
        for key in index:
            self._store.delete(key)
        self._store.delete(INDEX_KEY)
        logger.info("Cleared %d daily targets", len(index))
        return len(index)

    def cached_keys(self) -> list[str]:
        return self._load_index()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _solve(
        self, metric: HealthMetric, period: Period, profile: UserProfile, now: datetime
    ) -> DailyTarget:
        solution = self._solver.solve_target(metric, profile)
        return DailyTarget(
            metric_type=metric.type,
            period=period,
            target_value=solution.target_value,
            original_current_value=metric.value,
            benefit_minutes=solution.benefit_minutes * period.days,
            created_at=now,
        )

    def _read(self, key: str) -> DailyTarget | None:
        try:
            raw = self._store.get(key)
        except UnreadableValueError as exc:
            logger.warning("Dropping undecryptable cache entry %s: %s", key, exc)
            self._store.delete(key)
            return None
        if raw is None:
            return None
        try:
            return DailyTarget.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Discarding unreadable cache entry %s: %s", key, exc)
            return None

    def _write(self, key: str, target: DailyTarget) -> None:
        self._store.set(key, json.dumps(target.to_dict()).encode("utf-8"))
        index = self._load_index()
        if key not in index:
            index.append(key)
            self._save_index(index)

    def _load_index(self) -> list[str]:
        try:
            raw = self._store.get(INDEX_KEY)
        except UnreadableValueError as exc:
            # Rewritten by the next _write.
            logger.warning("Discarding undecryptable target index: %s", exc)
            return []
        if raw is None:
            return []
        try:
            keys = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable target index")
            return []
        return [key for key in keys if isinstance(key, str)] if isinstance(keys, list) else []

    def _save_index(self, keys: list[str]) -> None:
        self._store.set(INDEX_KEY, json.dumps(keys).encode("utf-8"))
