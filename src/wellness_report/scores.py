"""Visualización de puntuaciones: bandas de color, reglas por métrica, círculos e insignias."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from wellness_report.config import ReportConfig
from wellness_report.drawing import Color, DrawingRecorder, Point, Rect
from wellness_report.text_metrics import TextMetrics, measure_clipped

MISSING_GLYPH = "–"


class Band(enum.Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"
    NEUTRAL = "neutral"


def band_for_score(score: int | None) -> Band:
    """Map a score to its color band.

    Args:
        score: Score in 0-100, or None when unavailable.

    Returns:
        GOOD for 80-100, WARNING for 60-79, NEUTRAL for None and CRITICAL for
        anything else (including out-of-range values).
    """
    if score is None:
        return Band.NEUTRAL
    if 80 <= score <= 100:
        return Band.GOOD
    if 60 <= score <= 79:
        return Band.WARNING
    return Band.CRITICAL


def band_color(band: Band, config: ReportConfig) -> Color:
    palette = config.palette
    return {
        Band.GOOD: palette.good,
        Band.WARNING: palette.warning,
        Band.CRITICAL: palette.critical,
        Band.NEUTRAL: palette.neutral,
    }[band]


def color_for_score(score: int | None, config: ReportConfig) -> Color:
    return band_color(band_for_score(score), config)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if not math.isfinite(value):
        return 0
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


# --- per-metric score transforms ------------------------------------------


@dataclass(frozen=True)
class AtLeast:
    """First (threshold, score) pair whose threshold is reached wins."""

    steps: tuple[tuple[float, int], ...]
    otherwise: int

    def score(self, value: float) -> int:
        for threshold, score in self.steps:
            if value >= threshold:
                return score
        return self.otherwise


@dataclass(frozen=True)
class Below:
    """Strictly below `limit` is healthy."""

    limit: float
    inside: int
    otherwise: int

    def score(self, value: float) -> int:
        return self.inside if value < self.limit else self.otherwise


@dataclass(frozen=True)
class Within:
    """Closed healthy range with separate scores for each side."""

    low: float
    high: float
    inside: int
    below: int
    above: int

    def score(self, value: float) -> int:
        if self.low <= value <= self.high:
            return self.inside
        return self.below if value < self.low else self.above


class Metric(enum.Enum):
    TITR = "titr"
    CV = "cv"
    POST_MEAL_AVERAGE = "post_meal_average"
    POST_MEAL_SUCCESS = "post_meal_success"
    SLEEP_DURATION = "sleep_duration"
    STEP_GOAL_DAYS = "step_goal_days"


SCORE_RULES: dict[Metric, AtLeast | Below | Within] = {
    Metric.TITR: AtLeast(((50.0, 80),), otherwise=30),
    Metric.CV: Below(36.0, inside=80, otherwise=50),
    Metric.POST_MEAL_AVERAGE: Within(4.0, 10.0, inside=80, below=30, above=65),
    Metric.POST_MEAL_SUCCESS: AtLeast(((70.0, 80), (50.0, 65)), otherwise=30),
    Metric.SLEEP_DURATION: Within(7.0, 9.0, inside=80, below=50, above=50),
    Metric.STEP_GOAL_DAYS: AtLeast(((10, 80), (5, 65)), otherwise=30),
}


def rule_score(metric: Metric, value: float) -> int:
    """Apply the fixed threshold rule registered for `metric`."""
    return SCORE_RULES[metric].score(value)


def percentage_score(pct: float) -> int:
    return round_half_up(pct)


def inverted_percentage_score(pct: float) -> int:
    """Score for metrics where a lower raw percentage is better (TBR, TAR)."""
    return 100 - round_half_up(pct)


def data_days_score(days: int) -> int:
    return days * 5


# --- drawing ---------------------------------------------------------------


def draw_score_circle(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    center: Point,
    diameter: float,
    score: int | None,
    *,
    primary: bool,
) -> None:
    """Draw a filled score circle with its value centred inside."""
    palette = config.palette
    if score is None:
        fill = palette.neutral.with_alpha(0.4)
        text_color = palette.dark_gray
        text = MISSING_GLYPH
    else:
        fill = color_for_score(score, config)
        text_color = palette.white
        text = str(score)
    canvas.fill_ellipse(Rect.around(center, diameter), fill)

    font = config.fonts.strong(22 if primary else 14)
    size = measure_clipped(metrics, text, font, diameter)
    canvas.text(
        text,
        Point(center.x - size.width / 2, center.y - size.height / 2),
        font,
        text_color,
    )


def draw_badge(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    title: str,
    score: int | None,
    rect: Rect,
) -> None:
    """Draw a rounded badge: title top-left, bold value bottom-right."""
    palette = config.palette
    if score is None:
        fill = palette.neutral.with_alpha(0.15)
        stroke = palette.neutral.with_alpha(0.3)
        value_color = palette.neutral
    else:
        tint = color_for_score(score, config)
        fill = tint.with_alpha(0.18)
        stroke = tint.with_alpha(0.5)
        value_color = palette.black
    canvas.rounded_rect(rect, config.circles.badge_radius, fill, stroke)

    title_font = config.fonts.plain(10)
    canvas.text(
        title,
        Point(rect.x + 8, rect.y + 6),
        title_font,
        palette.black,
        clip_width=rect.width - 16,
    )

    value = MISSING_GLYPH if score is None else str(score)
    value_font = config.fonts.strong(16)
    size = measure_clipped(metrics, value, value_font, rect.width - 12)
    canvas.text(
        value,
        Point(rect.max_x - 8 - size.width, rect.max_y - size.height - 8),
        value_font,
        value_color,
    )


def draw_indicator(
    canvas: DrawingRecorder,
    config: ReportConfig,
    origin: Point,
    size: float,
    score: int | None,
) -> None:
    """Small band-colored dot in front of a metric row."""
    canvas.fill_ellipse(
        Rect(origin.x, origin.y, size, size), color_for_score(score, config)
    )
