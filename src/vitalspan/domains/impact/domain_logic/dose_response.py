"""Piecewise-linear dose-response curves and relative-risk conversion.

Every calculator expresses its research curve as an ordered table of
(value, response) breakpoints. The response is either a relative risk
(converted to minutes with :func:`relative_risk_to_daily_minutes`) or a
direct lifespan-minutes figure.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BASELINE_LIFE_EXPECTANCY_YEARS = 78.0
DAYS_PER_YEAR = 365.25
MINUTES_PER_DAY = 1440.0
BASELINE_LIFE_MINUTES = BASELINE_LIFE_EXPECTANCY_YEARS * DAYS_PER_YEAR * MINUTES_PER_DAY


@dataclass(frozen=True)
class BreakpointTable:
    """Ordered (x, y) breakpoints with linear interpolation.

    Inputs outside ``[lower, upper]`` are extrapolated from the nearest two
    breakpoints; flat end segments therefore act as clamps.

    Usage::

        table = BreakpointTable(((0, 1.6), (2700, 1.4), (4000, 1.3)))
        table.interpolate(3350)   # 1.35
        table.contains(5000)      # False
    """

    points: tuple[tuple[float, float], ...]

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError("A breakpoint table needs at least two points")
        xs = [x for x, _ in self.points]
        if any(b <= a for a, b in zip(xs, xs[1:])):
            raise ValueError(f"Breakpoints must be strictly increasing: {xs}")

    @property
    def lower(self) -> float:
        return self.points[0][0]

    @property
    def upper(self) -> float:
        return self.points[-1][0]

    def contains(self, x: float) -> bool:
        return self.lower <= x <= self.upper

    def interpolate(self, x: float) -> float:
        xs = [p[0] for p in self.points]
        index = bisect_right(xs, x)
        # Clamp the segment index so out-of-range inputs reuse the end segments.
        index = min(max(index, 1), len(self.points) - 1)
        (x0, y0), (x1, y1) = self.points[index - 1], self.points[index]
        return y0 + (y1 - y0) * (x - x0) / (x1 - x0)


def relative_risk_to_daily_minutes(relative_risk: float, age: float, scaling: float) -> float:
    """Convert a mortality relative risk into lifespan minutes per remaining day.

    Args:
        relative_risk: Hazard ratio versus the reference population (1.0 = neutral).
        age: User age in years.
        scaling: Fraction of the all-cause risk attributable to this metric.

    Returns:
        Signed minutes per day; positive when ``relative_risk < 1``.
    """
    total_minutes = BASELINE_LIFE_MINUTES * (1.0 - relative_risk) * scaling
    remaining_days = max(1.0, BASELINE_LIFE_EXPECTANCY_YEARS - age) * DAYS_PER_YEAR
    return total_minutes / remaining_days
