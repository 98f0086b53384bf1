from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pytest

from wellness_report.drawing import FontSpec
from wellness_report.model import (
    AGPSeries,
    EnergyDistribution,
    GlucoseMetrics,
    MacroDistribution,
    ReportSnapshot,
)
from wellness_report.text_metrics import TextSize


@dataclass(frozen=True)
class FakeTextMetrics:
    """Deterministic metrics: every glyph is half an em wide."""

    def measure(self, text: str, font: FontSpec) -> TextSize:
        return TextSize(width=len(text) * font.size * 0.5, height=font.size * 1.2)


@pytest.fixture
def metrics() -> FakeTextMetrics:
    return FakeTextMetrics()


@pytest.fixture
def agp() -> AGPSeries:
    hours = tuple(range(24))
    return AGPSeries(
        time_points=hours,
        p10=tuple(4.0 for _ in hours),
        p25=tuple(5.0 for _ in hours),
        p50=tuple(6.5 for _ in hours),
        p75=tuple(8.0 for _ in hours),
        p90=tuple(11.0 for _ in hours),
    )


@pytest.fixture
def full_snapshot(agp: AGPSeries) -> ReportSnapshot:
    return ReportSnapshot(
        nickname="Testi",
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 14),
        wellness_score=82,
        meal_impact_average=71,
        glucose_score_average=64,
        activity_score_average=77.6,
        sleep_score_average=85,
        step_data_days=14,
        glucose_metrics=GlucoseMetrics(tir=78.4, titr=52.0, tbr=3.2, tar=18.4, cv=31.5),
        post_meal_glucose_average=8.2,
        post_meal_success_rate=72.0,
        agp=agp,
        meal_score_average=76,
        macro_distribution=MacroDistribution(carbs=0.5, protein=0.3, fat=0.2),
        energy_distribution=EnergyDistribution(
            morning=500, midday=800, evening=700, night=100
        ),
        average_steps=8431.0,
        step_goal_achievements={},
        average_sleep_duration_hours=7.4,
        sleep_regularity_score=68,
    )


@pytest.fixture
def empty_snapshot() -> ReportSnapshot:
    return ReportSnapshot(
        nickname="Tyhjä",
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 14),
    )
