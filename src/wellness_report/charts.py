"""Gráficos del informe: perfil AGP, torta de macronutrientes y barras de energía.

Every chart returns the vertical space it consumed. When data is missing or
degenerate a short italic message is drawn instead, and the chart still
reports its full footprint so sections below keep their positions.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from wellness_report.config import ReportConfig
from wellness_report.drawing import DrawingRecorder, Point, Rect
from wellness_report.model import AGPSeries, EnergyDistribution, MacroDistribution
from wellness_report.scores import round_half_up
from wellness_report.text_metrics import TextMetrics

NO_DATA_HEIGHT = 16

AGP_TITLE_HEIGHT = 20
AGP_CHART_HEIGHT = 120
AGP_AXIS_HEIGHT = 15
AGP_FOOTPRINT = AGP_TITLE_HEIGHT + AGP_CHART_HEIGHT + AGP_AXIS_HEIGHT
AGP_VALUE_MAX = 15.0
AGP_HOUR_MAX = 23
AGP_TARGET_RANGE = (3.9, 10.0)
AGP_Y_TICKS = (0, 3, 6, 9, 12, 15)
AGP_X_TICKS = (0, 6, 12, 18, 24)

PIE_SIZE = 65
PIE_LEGEND_HEIGHT = 25
PIE_FOOTPRINT = PIE_SIZE + PIE_LEGEND_HEIGHT

ENERGY_TITLE_HEIGHT = 20
ENERGY_BAR_HEIGHT = 16
ENERGY_BAR_SPACING = 4
ENERGY_LABEL_ROOM = 80
ENERGY_FOOTPRINT = (
    ENERGY_TITLE_HEIGHT + 4 * (ENERGY_BAR_HEIGHT + ENERGY_BAR_SPACING) + 8
)


def draw_no_data(
    canvas: DrawingRecorder, config: ReportConfig, message: str, x: float, y: float
) -> float:
    """Draw the italic gray 'no data' line; returns its height."""
    canvas.text(
        message, Point(x, y), config.fonts.slanted(10), config.palette.neutral
    )
    return NO_DATA_HEIGHT


def _draw_title(
    canvas: DrawingRecorder, config: ReportConfig, title: str, x: float, y: float
) -> None:
    canvas.text(title, Point(x, y), config.fonts.strong(12), config.palette.black)


# --- AGP -------------------------------------------------------------------


@dataclass(frozen=True)
class AGPFrame:
    """Maps (hour, glucose) onto the chart rectangle, y inverted."""

    rect: Rect

    def x_for(self, hour: float) -> float:
        clamped = max(0.0, min(float(AGP_HOUR_MAX), float(hour)))
        return self.rect.x + clamped / AGP_HOUR_MAX * self.rect.width

    def y_for(self, value: float) -> float:
        if math.isnan(value):
            value = 0.0
        clamped = max(0.0, min(AGP_VALUE_MAX, value))
        return self.rect.max_y - clamped / AGP_VALUE_MAX * self.rect.height

    def point(self, hour: float, value: float) -> Point:
        return Point(self.x_for(hour), self.y_for(value))


def band_polygon(
    frame: AGPFrame,
    hours: Sequence[int],
    upper: Sequence[float],
    lower: Sequence[float],
) -> list[Point]:
    """Walk `upper` forward then `lower` backwards to close a band."""
    forward = [frame.point(h, v) for h, v in zip(hours, upper)]
    backward = [frame.point(h, v) for h, v in zip(hours, lower)]
    return forward + backward[::-1]


def draw_agp_chart(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    agp: AGPSeries | None,
    x: float,
    y: float,
    width: float,
) -> float:
    """Draw the ambulatory glucose profile; returns ``AGP_FOOTPRINT``."""
    palette = config.palette
    _draw_title(canvas, config, config.labels.agp_title, x, y)
    if agp is None:
        draw_no_data(canvas, config, config.labels.no_agp, x, y + AGP_TITLE_HEIGHT)
        return AGP_FOOTPRINT

    frame = AGPFrame(Rect(x, y + AGP_TITLE_HEIGHT, width, AGP_CHART_HEIGHT))
    chart = frame.rect
    canvas.fill_rect(chart, palette.neutral.with_alpha(0.1))
    canvas.stroke_rect(chart, palette.neutral)

    low, high = AGP_TARGET_RANGE
    target_top = frame.y_for(high)
    canvas.fill_rect(
        Rect(chart.x, target_top, chart.width, frame.y_for(low) - target_top),
        palette.good.with_alpha(0.1),
    )

    if agp.is_plottable:
        hours = agp.time_points
        canvas.fill_polygon(
            band_polygon(frame, hours, agp.p90, agp.p10),
            palette.neutral.with_alpha(0.2),
        )
        canvas.fill_polygon(
            band_polygon(frame, hours, agp.p75, agp.p25),
            palette.neutral.with_alpha(0.4),
        )
        canvas.stroke_polyline(
            [frame.point(h, v) for h, v in zip(hours, agp.p50)],
            palette.blue,
            line_width=2,
        )

    tick_font = config.fonts.plain(10)
    for value in AGP_Y_TICKS:
        canvas.text(
            str(value),
            Point(x - 20, frame.y_for(value) - 6),
            tick_font,
            palette.neutral,
        )
    for hour in AGP_X_TICKS:
        label = f"{hour}:00"
        size = metrics.measure(label, tick_font)
        canvas.text(
            label,
            Point(frame.x_for(min(hour, AGP_HOUR_MAX)) - size.width / 2, chart.max_y + 2),
            tick_font,
            palette.neutral,
        )
    return AGP_FOOTPRINT


# --- macro pie -------------------------------------------------------------


def wedge_angles(macros: MacroDistribution | None) -> list[float] | None:
    """Sweep in degrees for carbs, protein and fat; None when there is no data.

    The last wedge takes whatever is left of 360 so the sweeps always close
    the circle.
    """
    if macros is None:
        return None
    parts = [max(0.0, macros.carbs), max(0.0, macros.protein), max(0.0, macros.fat)]
    total = sum(parts)
    if total <= 0:
        return None
    carbs = parts[0] / total * 360.0
    protein = parts[1] / total * 360.0
    return [carbs, protein, 360.0 - carbs - protein]


def draw_macro_pie(
    canvas: DrawingRecorder,
    config: ReportConfig,
    macros: MacroDistribution | None,
    x: float,
    y: float,
    width: float,
) -> float:
    """Draw the macro pie and its legend; returns ``PIE_FOOTPRINT``."""
    angles = wedge_angles(macros)
    if angles is None or macros is None:
        draw_no_data(canvas, config, config.labels.no_macros, x, y)
        return PIE_FOOTPRINT

    palette = config.palette
    labels = config.labels
    colors = (palette.orange, palette.blue, palette.good)
    center = Point(x + width / 2, y + PIE_SIZE / 2)
    radius = PIE_SIZE / 2 - 8

    start = -90.0
    for sweep, color in zip(angles, colors):
        if sweep > 0:
            canvas.fill_wedge(center, radius, start, sweep, color)
        start += sweep

    legend_y = y + PIE_SIZE + 4
    item_width = width / 3
    names = (labels.macro_carbs, labels.macro_protein, labels.macro_fat)
    for i, (name, sweep, color) in enumerate(zip(names, angles, colors)):
        item_x = x + i * item_width
        canvas.fill_rect(Rect(item_x, legend_y, 7, 7), color)
        canvas.text(
            f"{name}: {round_half_up(sweep / 360.0 * 100)}%",
            Point(item_x + 10, legend_y - 1),
            config.fonts.plain(9),
            palette.black,
        )
    return PIE_FOOTPRINT


# --- energy bars -----------------------------------------------------------


def energy_shares(dist: EnergyDistribution | None) -> list[float] | None:
    """Fraction of the total per day segment; None when there is no data."""
    if dist is None:
        return None
    parts = [
        max(0.0, dist.morning),
        max(0.0, dist.midday),
        max(0.0, dist.evening),
        max(0.0, dist.night),
    ]
    total = sum(parts)
    if total <= 0:
        return None
    return [p / total for p in parts]


def draw_energy_bars(
    canvas: DrawingRecorder,
    config: ReportConfig,
    dist: EnergyDistribution | None,
    x: float,
    y: float,
    width: float,
) -> float:
    """Draw one horizontal bar per day segment; returns ``ENERGY_FOOTPRINT``."""
    labels = config.labels
    palette = config.palette
    _draw_title(canvas, config, labels.energy_title, x, y)
    current_y = y + ENERGY_TITLE_HEIGHT

    shares = energy_shares(dist)
    if shares is None:
        draw_no_data(canvas, config, labels.no_energy, x, current_y)
        return ENERGY_FOOTPRINT

    max_bar = max(0.0, width - ENERGY_LABEL_ROOM)
    colors = (palette.orange, palette.blue, palette.good, palette.purple)
    for label, share, color in zip(labels.energy_segments, shares, colors):
        bar_width = max_bar * share
        canvas.fill_rect(
            Rect(x, current_y, bar_width, ENERGY_BAR_HEIGHT), color.with_alpha(0.7)
        )
        canvas.text(
            f"{label}: {round_half_up(share * 100)}%",
            Point(x + bar_width + 10, current_y + 1),
            config.fonts.plain(9),
            palette.black,
        )
        current_y += ENERGY_BAR_HEIGHT + ENERGY_BAR_SPACING
    return ENERGY_FOOTPRINT
