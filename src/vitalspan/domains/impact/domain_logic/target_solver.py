"""Bisection search for the metric value that reaches a goal impact.

The response curves are piecewise linear but not closed-form invertible
(relative-risk curves pass through an age-dependent conversion), so the
solver searches numerically. The bracket runs from the current value
toward the metric's ceiling, floor, or interior optimum depending on the
curve's shape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from vitalspan.domains.impact.domain_logic.calculator_base import ImpactCalculator
from vitalspan.domains.impact.domain_logic.models import (
    HealthMetric,
    MetricType,
    ResponseShape,
    UserProfile,
)
from vitalspan.domains.impact.domain_logic.registry import CalculatorRegistry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 25
DEFAULT_TOLERANCE_MINUTES = 0.5
DEFAULT_IMPROVEMENT_FACTOR = 0.2


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Neutral:
    """Reach zero marginal lifespan impact."""


@dataclass(frozen=True)
class RelativeImprovement:
    """Improve an already-positive impact by ``factor`` (0.2 = 20% more)."""

    factor: float = DEFAULT_IMPROVEMENT_FACTOR


Goal = Union[Neutral, RelativeImprovement]


def goal_impact(goal: Goal, current_impact: float) -> float:
    if isinstance(goal, RelativeImprovement):
        return current_impact * (1.0 + goal.factor)
    return 0.0


@dataclass(frozen=True)
class TargetSolution:
    """Outcome of a solve. ``benefit_minutes`` is per day."""

    metric_type: MetricType
    current_value: float
    target_value: float
    current_impact: float
    goal_impact: float
    benefit_minutes: float
    converged: bool
    iterations: int


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------

class TargetSolver:
    """Finds the metric value whose impact meets a goal.

    Usage::

        solver = TargetSolver(CalculatorRegistry.default())
        solution = solver.solve_target(HealthMetric(MetricType.STEPS, 4000), profile)
        solution.target_value  # ~8750 steps for the neutral point
    """

    def __init__(
        self,
        registry: CalculatorRegistry | None = None,
        *,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        tolerance_minutes: float = DEFAULT_TOLERANCE_MINUTES,
        improvement_factor: float = DEFAULT_IMPROVEMENT_FACTOR,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if tolerance_minutes <= 0:
            raise ValueError("tolerance_minutes must be positive")
        self._registry = registry or CalculatorRegistry.default()
        self._max_iterations = max_iterations
        self._tolerance = tolerance_minutes
        self._improvement_factor = improvement_factor

    @property
    def registry(self) -> CalculatorRegistry:
        return self._registry

    def default_goal(self, current_impact: float) -> Goal:
        """Neutral for a harmful value, a relative improvement for a helpful one."""
        if current_impact < 0:
            return Neutral()
        return RelativeImprovement(self._improvement_factor)

    def solve_target(
        self,
        metric: HealthMetric,
        profile: UserProfile,
        goal: Goal | None = None,
    ) -> TargetSolution:
        """Solve for the value of ``metric.type`` that reaches ``goal``.

        Never raises for numerical reasons: if the search does not converge
        within the iteration budget, the final midpoint is returned with
        ``converged=False``. A midpoint that scores below the current value
        is never returned; the current value comes back unchanged instead.
        """
        current = metric.value
        calculator = self._registry.get(metric.type)
        if calculator is None:
            logger.debug("No calculator for %s; returning current value", metric.type.value)
            return self._unchanged(metric.type, current, 0.0, 0.0, converged=False)

        current_impact = calculator.evaluate(current, profile).lifespan_impact_minutes
        if goal is None:
            goal = self.default_goal(current_impact)
        target_impact = goal_impact(goal, current_impact)

        if current_impact >= target_impact:
            return self._unchanged(metric.type, current, current_impact, target_impact, converged=True)

        near, far = current, self._far_bound(calculator, current, profile)
        if far == near:
            logger.debug("%s already at search boundary %.2f", metric.type.value, current)
            return self._unchanged(metric.type, current, current_impact, target_impact, converged=False)

        mid = near
        converged = False
        iterations = 0
        for iterations in range(1, self._max_iterations + 1):
            mid = (near + far) / 2.0
            impact = calculator.evaluate(mid, profile).lifespan_impact_minutes
            if abs(impact - target_impact) < self._tolerance:
                converged = True
                break
            if impact < target_impact:
                near = mid
            else:
                far = mid

        if not converged:
            logger.debug(
                "Bisection for %s did not converge in %d iterations; using %.2f",
                metric.type.value, self._max_iterations, mid,
            )

        target_impact_reached = calculator.evaluate(mid, profile).lifespan_impact_minutes
        if target_impact_reached < current_impact:
            logger.warning(
                "Search for %s ended at %.2f, worse than current %.2f; keeping current",
                metric.type.value, mid, current,
            )
            return self._unchanged(metric.type, current, current_impact, target_impact, converged=False)

        logger.info(
            "Solved %s target: %.2f -> %.2f (%+.2f min/day)",
            metric.type.value, current, mid, target_impact_reached - current_impact,
        )
        return TargetSolution(
            metric_type=metric.type,
            current_value=current,
            target_value=mid,
            current_impact=current_impact,
            goal_impact=target_impact,
            benefit_minutes=target_impact_reached - current_impact,
            converged=converged,
            iterations=iterations,
        )

    @staticmethod
    def _far_bound(calculator: ImpactCalculator, current: float, profile: UserProfile) -> float:
        floor, ceiling = calculator.search_range(profile)
        if calculator.shape is ResponseShape.DECREASING:
            return min(floor, current)
        if calculator.shape is ResponseShape.U_SHAPED and calculator.optimum is not None:
            return calculator.optimum
        return max(ceiling, current)

    @staticmethod
    def _unchanged(
        metric_type: MetricType,
        current: float,
        current_impact: float,
        target_impact: float,
        *,
        converged: bool,
    ) -> TargetSolution:
        return TargetSolution(
            metric_type=metric_type,
            current_value=current,
            target_value=current,
            current_impact=current_impact,
            goal_impact=target_impact,
            benefit_minutes=0.0,
            converged=converged,
            iterations=0,
        )
