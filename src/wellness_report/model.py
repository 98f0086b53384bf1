"""Modelos tipados para la instantánea de métricas que alimenta el informe."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class GlucoseMetrics:
    """Glucose time-in-range statistics (all values are percentages)."""

    tir: float
    titr: float
    tbr: float
    tar: float
    cv: float


@dataclass(frozen=True)
class AGPSeries:
    """Ambulatory glucose profile: percentile values per hour-of-day bucket."""

    time_points: Sequence[int]
    p10: Sequence[float]
    p25: Sequence[float]
    p50: Sequence[float]
    p75: Sequence[float]
    p90: Sequence[float]

    @property
    def is_plottable(self) -> bool:
        """True when there are at least two points and every series matches."""
        n = len(self.time_points)
        if n < 2:
            return False
        return all(
            len(series) == n
            for series in (self.p10, self.p25, self.p50, self.p75, self.p90)
        )


@dataclass(frozen=True)
class MacroDistribution:
    """Carbohydrate/protein/fat fractions (normalised by their sum)."""

    carbs: float
    protein: float
    fat: float

    @property
    def total(self) -> float:
        return self.carbs + self.protein + self.fat


@dataclass(frozen=True)
class EnergyDistribution:
    """Energy totals for the four fixed day segments."""

    morning: float
    midday: float
    evening: float
    night: float

    @property
    def total(self) -> float:
        return self.morning + self.midday + self.evening + self.night


@dataclass(frozen=True)
class ScoredMetric:
    """A label with an optional 0-100 score and optional target text."""

    label: str
    score: int | None = None
    target: str | None = None
    value: str | None = None

    @property
    def display_value(self) -> str:
        if self.value is not None:
            return self.value
        return "–" if self.score is None else str(self.score)


@dataclass(frozen=True)
class ReportSnapshot:
    """Immutable input for one report render.

    Every optional field may be absent; the renderer shows a placeholder or
    omits the row instead of failing.
    """

    nickname: str
    start_date: date
    end_date: date
    wellness_score: int | None = None
    meal_impact_average: int | None = None
    glucose_score_average: int | None = None
    activity_score_average: float = 0.0
    sleep_score_average: int | None = None
    step_data_days: int = 0
    glucose_metrics: GlucoseMetrics | None = None
    post_meal_glucose_average: float | None = None
    post_meal_success_rate: float | None = None
    agp: AGPSeries | None = None
    meal_score_average: int | None = None
    macro_distribution: MacroDistribution | None = None
    energy_distribution: EnergyDistribution | None = None
    average_steps: float = 0.0
    step_goal_achievements: Mapping[int, int] = field(default_factory=dict)
    average_sleep_duration_hours: float | None = None
    sleep_regularity_score: int | None = None
