"""Secciones del informe.

Each ``draw_*`` function receives the vertical offset where it starts and
returns the vertical space it consumed, so the caller can place the next
section directly below without any reflow.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from wellness_report.charts import (
    draw_agp_chart,
    draw_energy_bars,
    draw_macro_pie,
    draw_no_data,
)
from wellness_report.config import ReportConfig, ReportLabels
from wellness_report.drawing import DrawingRecorder, Point, Rect
from wellness_report.layout import (
    RowMode,
    TwoColumnCursor,
    metric_row_height,
    plan_secondary_row,
    split_columns,
)
from wellness_report.model import ReportSnapshot, ScoredMetric
from wellness_report.scores import (
    Metric,
    data_days_score,
    draw_badge,
    draw_indicator,
    draw_score_circle,
    inverted_percentage_score,
    percentage_score,
    round_half_up,
    rule_score,
)
from wellness_report.text_metrics import TextMetrics, measure_clipped

logger = logging.getLogger(__name__)

COLUMN_HEADER_HEIGHT = 25
SECTION_HEADER_HEIGHT = 30
NOTE_HEIGHT = 20
GOAL_TITLE_HEIGHT = 15
GOAL_ROW_HEIGHT = 12
COLUMN_GAP = 20
SECTION_TRAILING_GAP = 8
INDICATOR_SIZE = 8


# --- headers ---------------------------------------------------------------


def draw_header(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    snapshot: ReportSnapshot,
    y: float,
) -> float:
    """Nickname on the left, date range right-aligned."""
    palette = config.palette
    canvas.text(
        snapshot.nickname,
        Point(config.margin, y),
        config.fonts.strong(20),
        palette.black,
    )
    date_range = (
        f"{config.format_date(snapshot.start_date)} - "
        f"{config.format_date(snapshot.end_date)}"
    )
    font = config.fonts.plain(12)
    size = measure_clipped(metrics, date_range, font, config.content_width)
    canvas.text(
        date_range,
        Point(config.page_width - config.margin - size.width, y + 5),
        font,
        palette.neutral,
    )
    return config.circles.header_height


def draw_column_header(
    canvas: DrawingRecorder, config: ReportConfig, title: str, x: float, y: float, width: float
) -> float:
    canvas.text(title, Point(x, y), config.fonts.strong(14), config.palette.black)
    canvas.line(Point(x, y + 20), Point(x + width, y + 20), config.palette.neutral, 1)
    return COLUMN_HEADER_HEIGHT


def draw_section_header(
    canvas: DrawingRecorder, config: ReportConfig, title: str, x: float, y: float, width: float
) -> float:
    canvas.text(title, Point(x, y), config.fonts.strong(16), config.palette.black)
    canvas.line(Point(x, y + 22), Point(x + width, y + 22), config.palette.neutral, 2)
    return SECTION_HEADER_HEIGHT


# --- central score ---------------------------------------------------------


def secondary_metrics(snapshot: ReportSnapshot, labels: ReportLabels) -> list[ScoredMetric]:
    """Metrics shown beside (or below) the wellness score."""
    activity = (
        round_half_up(snapshot.activity_score_average)
        if snapshot.step_data_days > 0
        else None
    )
    return [
        ScoredMetric(labels.meal_impact, snapshot.meal_impact_average),
        ScoredMetric(labels.glucose, snapshot.glucose_score_average),
        ScoredMetric(labels.activity, activity),
        ScoredMetric(labels.sleep, snapshot.sleep_score_average),
    ]


def draw_central_score(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    snapshot: ReportSnapshot,
    y: float,
) -> float:
    """Primary wellness circle plus the adaptive secondary-metric row.

    Returns:
        Height consumed from `y` down to the bottom of the lowest label or
        badge, including the trailing padding.
    """
    geometry = config.circles
    palette = config.palette
    row = secondary_metrics(snapshot, config.labels)

    primary_d = geometry.primary_diameter
    center = Point(config.page_width / 2, y + primary_d / 2)
    draw_score_circle(
        canvas, metrics, config, center, primary_d, snapshot.wellness_score, primary=True
    )

    label_font = config.fonts.plain(12)
    label = config.labels.wellness_score
    label_size = measure_clipped(metrics, label, label_font, primary_d + 40)
    label_origin = Point(center.x - label_size.width / 2, center.y + primary_d / 2 + 8)
    canvas.text(label, label_origin, label_font, palette.black, clip_width=primary_d + 40)
    label_bottom = label_origin.y + label_size.height

    first_left = center.x + primary_d / 2 + geometry.primary_gap
    available = max(0.0, (config.page_width - config.margin) - first_left)
    plan = plan_secondary_row(len(row), available, geometry)
    logger.debug(
        "secondary row: %s (d=%.1f, s=%.1f, available=%.1f)",
        plan.mode.value,
        plan.diameter,
        plan.spacing,
        available,
    )

    if plan.mode is RowMode.CIRCLES:
        small_font = config.fonts.plain(10)
        clip = plan.diameter + min(30.0, plan.spacing)
        for index, metric in enumerate(row):
            cx = first_left + plan.diameter / 2 + index * (plan.diameter + plan.spacing)
            small_center = Point(cx, center.y)
            draw_score_circle(
                canvas, metrics, config, small_center, plan.diameter, metric.score, primary=False
            )
            size = measure_clipped(metrics, metric.label, small_font, clip)
            origin = Point(cx - size.width / 2, center.y + plan.diameter / 2 + 6)
            canvas.text(metric.label, origin, small_font, palette.black, clip_width=clip)
            label_bottom = max(label_bottom, origin.y + size.height)
        return label_bottom + 12 - y

    badges_top = label_bottom + 18
    count = len(row)
    gaps = max(0, count - 1) * geometry.badge_spacing
    # badges narrow to the content width so the row never leaves the page
    badge_width = geometry.badge_width
    if count and count * badge_width + gaps > config.content_width:
        badge_width = max(0.0, (config.content_width - gaps) / count)
    total_width = count * badge_width + gaps
    start_x = center.x - total_width / 2
    for index, metric in enumerate(row):
        rect = Rect(
            start_x + index * (badge_width + geometry.badge_spacing),
            badges_top,
            badge_width,
            geometry.badge_height,
        )
        draw_badge(canvas, metrics, config, metric.label, metric.score, rect)
    return badges_top + geometry.badge_height + 10 - y


# --- metric rows -----------------------------------------------------------


def draw_metric_row(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    metric: ScoredMetric,
    x: float,
    y: float,
    width: float,
) -> float:
    """Indicator dot, label, right-aligned value and optional target line."""
    palette = config.palette
    draw_indicator(canvas, config, Point(x, y + 3), INDICATOR_SIZE, metric.score)
    text_x = x + INDICATOR_SIZE + 5
    canvas.text(metric.label, Point(text_x, y), config.fonts.plain(10), palette.black)

    value_font = config.fonts.strong(10)
    value = metric.display_value
    size = measure_clipped(metrics, value, value_font, 100)
    canvas.text(value, Point(x + width - size.width, y), value_font, palette.black)

    has_target = bool(metric.target)
    if has_target:
        canvas.text(
            metric.target or "",
            Point(text_x, y + 12),
            config.fonts.plain(9),
            palette.neutral,
        )
    return metric_row_height(has_target)


def draw_metric_rows(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    rows: Sequence[ScoredMetric],
    x: float,
    y: float,
    width: float,
) -> float:
    consumed = 0.0
    for row in rows:
        consumed += draw_metric_row(canvas, metrics, config, row, x, y + consumed, width)
    return consumed


def draw_note(
    canvas: DrawingRecorder, config: ReportConfig, text: str, x: float, y: float, width: float
) -> float:
    """Italic gray recommendation line clipped to the column."""
    canvas.text(
        text, Point(x, y), config.fonts.slanted(9), config.palette.neutral, clip_width=width
    )
    return NOTE_HEIGHT


def draw_step_goals(
    canvas: DrawingRecorder,
    config: ReportConfig,
    achievements: Mapping[int, int],
    x: float,
    y: float,
) -> float:
    """Days achieved per step goal, smallest goal first."""
    palette = config.palette
    labels = config.labels
    canvas.text(labels.goal_days_title, Point(x, y), config.fonts.plain(10), palette.black)
    current_y = y + GOAL_TITLE_HEIGHT
    for goal in sorted(achievements):
        days = achievements[goal]
        score = rule_score(Metric.STEP_GOAL_DAYS, days)
        draw_indicator(canvas, config, Point(x, current_y + 2), 6, score)
        canvas.text(
            labels.goal_days_row.format(goal=goal, days=days),
            Point(x + 10, current_y),
            config.fonts.plain(9),
            palette.black,
        )
        current_y += GOAL_ROW_HEIGHT
    return current_y - y


# --- glucose | AGP ---------------------------------------------------------


def glucose_rows(snapshot: ReportSnapshot, labels: ReportLabels) -> list[ScoredMetric]:
    """Compact glucose metrics; empty when the snapshot has no glucose data."""
    gm = snapshot.glucose_metrics
    if gm is None:
        return []
    rows = [
        ScoredMetric(
            labels.time_in_range,
            percentage_score(gm.tir),
            labels.target_tir,
            f"{round_half_up(gm.tir)}%",
        ),
        ScoredMetric(
            labels.time_in_tight_range,
            rule_score(Metric.TITR, gm.titr),
            labels.target_titr,
            f"{round_half_up(gm.titr)}%",
        ),
        ScoredMetric(
            labels.time_below_range,
            inverted_percentage_score(gm.tbr),
            labels.target_tbr,
            f"{round_half_up(gm.tbr)}%",
        ),
        ScoredMetric(
            labels.time_above_range,
            inverted_percentage_score(gm.tar),
            labels.target_tar,
            f"{round_half_up(gm.tar)}%",
        ),
        ScoredMetric(
            labels.cv, rule_score(Metric.CV, gm.cv), labels.target_cv, f"{gm.cv:.1f}%"
        ),
    ]
    if snapshot.post_meal_glucose_average is not None:
        avg = snapshot.post_meal_glucose_average
        rows.append(
            ScoredMetric(
                labels.post_meal_average,
                rule_score(Metric.POST_MEAL_AVERAGE, avg),
                labels.target_post_meal,
                f"{avg:.1f}",
            )
        )
    if snapshot.post_meal_success_rate is not None:
        rate = snapshot.post_meal_success_rate
        rows.append(
            ScoredMetric(
                labels.post_meal_success,
                rule_score(Metric.POST_MEAL_SUCCESS, rate),
                labels.target_post_meal_success,
                f"{round_half_up(rate)}%",
            )
        )
    return rows


def draw_glucose_section(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    snapshot: ReportSnapshot,
    y: float,
) -> float:
    """Two columns: glucose metric list (1/3) and AGP chart (2/3)."""
    cols = split_columns(config.margin, config.content_width, 1 / 3, COLUMN_GAP)
    cursor = TwoColumnCursor(top=y)

    cursor.advance_left(
        draw_column_header(
            canvas, config, config.labels.blood_sugar, cols.left_x, cursor.left_y, cols.left_width
        )
    )
    rows = glucose_rows(snapshot, config.labels)
    if rows:
        cursor.advance_left(
            draw_metric_rows(
                canvas, metrics, config, rows, cols.left_x, cursor.left_y, cols.left_width
            )
        )
    else:
        cursor.advance_left(
            draw_no_data(canvas, config, config.labels.no_glucose, cols.left_x, cursor.left_y)
        )

    cursor.advance_right(
        draw_agp_chart(
            canvas, metrics, config, snapshot.agp, cols.right_x, cursor.right_y, cols.right_width
        )
    )
    return cursor.height(SECTION_TRAILING_GAP)


# --- nutrition -------------------------------------------------------------


def draw_nutrition_section(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    snapshot: ReportSnapshot,
    y: float,
) -> float:
    """Meal score, macro pie and recommendation | energy distribution bars."""
    labels = config.labels
    header = draw_section_header(
        canvas, config, labels.nutrition, config.margin, y, config.content_width
    )
    cols = split_columns(config.margin, config.content_width, 1 / 2, COLUMN_GAP)
    cursor = TwoColumnCursor(top=y + header)

    meal = ScoredMetric(labels.meal_score, snapshot.meal_score_average, labels.target_meal_score)
    cursor.advance_left(
        draw_metric_row(canvas, metrics, config, meal, cols.left_x, cursor.left_y, cols.left_width)
    )
    cursor.advance_left(10)
    cursor.advance_left(
        draw_macro_pie(
            canvas, config, snapshot.macro_distribution, cols.left_x, cursor.left_y, cols.left_width
        )
    )
    cursor.advance_left(
        draw_note(
            canvas, config, labels.macro_recommendation, cols.left_x, cursor.left_y, cols.left_width
        )
    )

    cursor.advance_right(
        draw_energy_bars(
            canvas,
            config,
            snapshot.energy_distribution,
            cols.right_x,
            cursor.right_y,
            cols.right_width,
        )
    )
    return header + cursor.height(SECTION_TRAILING_GAP)


# --- activity & sleep ------------------------------------------------------


def activity_rows(snapshot: ReportSnapshot, labels: ReportLabels) -> list[ScoredMetric]:
    return [
        ScoredMetric(
            labels.average_steps,
            round_half_up(snapshot.activity_score_average),
            labels.target_steps,
            f"{snapshot.average_steps:.0f}",
        ),
        ScoredMetric(
            labels.data_days,
            data_days_score(snapshot.step_data_days),
            None,
            str(snapshot.step_data_days),
        ),
    ]


def sleep_rows(snapshot: ReportSnapshot, labels: ReportLabels) -> list[ScoredMetric]:
    """Sleep metrics; absent fields produce no row."""
    rows: list[ScoredMetric] = []
    if snapshot.sleep_score_average is not None:
        rows.append(
            ScoredMetric(
                labels.sleep_quality,
                snapshot.sleep_score_average,
                labels.target_sleep_quality,
            )
        )
    if snapshot.average_sleep_duration_hours is not None:
        hours = snapshot.average_sleep_duration_hours
        rows.append(
            ScoredMetric(
                labels.sleep_duration,
                rule_score(Metric.SLEEP_DURATION, hours),
                labels.target_sleep_duration,
                f"{hours:.1f}h",
            )
        )
    if snapshot.sleep_regularity_score is not None:
        rows.append(
            ScoredMetric(
                labels.sleep_regularity,
                snapshot.sleep_regularity_score,
                labels.target_sleep_regularity,
            )
        )
    return rows


def draw_activity_sleep_section(
    canvas: DrawingRecorder,
    metrics: TextMetrics,
    config: ReportConfig,
    snapshot: ReportSnapshot,
    y: float,
) -> float:
    """Step metrics and goal list | sleep metrics."""
    header = draw_section_header(
        canvas, config, config.labels.activity_sleep, config.margin, y, config.content_width
    )
    cols = split_columns(config.margin, config.content_width, 1 / 2, COLUMN_GAP)
    cursor = TwoColumnCursor(top=y + header)

    cursor.advance_left(
        draw_metric_rows(
            canvas,
            metrics,
            config,
            activity_rows(snapshot, config.labels),
            cols.left_x,
            cursor.left_y,
            cols.left_width,
        )
    )
    if snapshot.step_goal_achievements:
        cursor.advance_left(8)
        cursor.advance_left(
            draw_step_goals(
                canvas, config, snapshot.step_goal_achievements, cols.left_x, cursor.left_y
            )
        )

    cursor.advance_right(
        draw_metric_rows(
            canvas,
            metrics,
            config,
            sleep_rows(snapshot, config.labels),
            cols.right_x,
            cursor.right_y,
            cols.right_width,
        )
    )
    return header + cursor.height(SECTION_TRAILING_GAP)
