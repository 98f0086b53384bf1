from __future__ import annotations

from dataclasses import replace

import pytest

from wellness_report.config import CircleRowGeometry, ReportConfig
from wellness_report.document import build_report, render_report_pdf
from wellness_report.drawing import DrawText, FillEllipse, RoundedRect
from wellness_report.model import ReportSnapshot

SECTION_ORDER = ["header", "wellness", "glucose", "nutrition", "activity_sleep"]


def test_sections_flow_top_to_bottom(metrics, full_snapshot: ReportSnapshot) -> None:
    drawing = build_report(full_snapshot, metrics=metrics)

    assert list(drawing.sections) == SECTION_ORDER
    spans = [drawing.sections[name] for name in SECTION_ORDER]
    assert spans[0].top == 40
    assert spans[1].top == 76
    for above, below in zip(spans, spans[1:]):
        assert below.top >= above.bottom


def test_default_page_uses_circles(metrics, full_snapshot: ReportSnapshot) -> None:
    drawing = build_report(full_snapshot, metrics=metrics)
    wellness = drawing.sections["wellness"]

    circles = [
        c
        for c in drawing.commands
        if isinstance(c, FillEllipse)
        and wellness.top <= c.rect.y < wellness.bottom
        and c.rect.width > 10
    ]
    assert [c.rect.width for c in circles] == [68, 36, 36, 36, 36]
    assert not [c for c in drawing.commands if isinstance(c, RoundedRect)]
    right_edges = [c.rect.max_x for c in circles[1:]]
    left_edges = [c.rect.x for c in circles[1:]]
    assert all(r <= left for r, left in zip(right_edges, left_edges[1:]))
    assert right_edges[-1] <= 612 - 40


def test_narrow_page_switches_to_badges(metrics, full_snapshot: ReportSnapshot) -> None:
    config = ReportConfig(page_width=400)
    drawing = build_report(full_snapshot, config=config, metrics=metrics)

    badges = [c for c in drawing.commands if isinstance(c, RoundedRect)]
    assert len(badges) == 4
    assert [b.rect.width for b in badges] == pytest.approx([(320 - 3 * 14) / 4] * 4)
    circles = [
        c for c in drawing.commands if isinstance(c, FillEllipse) and c.rect.width == 68
    ]
    assert len(circles) == 1
    assert badges[0].rect.y > circles[0].rect.max_y
    assert badges[0].rect.x == pytest.approx(40)
    assert badges[-1].rect.max_x == pytest.approx(400 - 40)
    for left, right in zip(badges, badges[1:]):
        assert left.rect.max_x < right.rect.x


def test_badges_keep_full_width_and_centre_when_row_fits(
    metrics, full_snapshot: ReportSnapshot
) -> None:
    config = ReportConfig(circles=CircleRowGeometry(primary_gap=200))
    drawing = build_report(full_snapshot, config=config, metrics=metrics)

    badges = [c for c in drawing.commands if isinstance(c, RoundedRect)]
    assert len(badges) == 4
    assert {b.rect.width for b in badges} == {115}
    left_margin = badges[0].rect.x - 40
    right_margin = (612 - 40) - badges[-1].rect.max_x
    assert left_margin == pytest.approx(right_margin)
    assert left_margin > 0


def test_shrunken_circle_labels_do_not_overlap(metrics, full_snapshot: ReportSnapshot) -> None:
    config = ReportConfig(page_width=504)
    drawing = build_report(full_snapshot, config=config, metrics=metrics)
    wellness = drawing.sections["wellness"]

    small = [
        c
        for c in drawing.commands
        if isinstance(c, FillEllipse)
        and wellness.top <= c.rect.y < wellness.bottom
        and 10 < c.rect.width < 68
    ]
    assert len(small) == 4
    diameter = small[0].rect.width
    spacing = small[1].rect.x - small[0].rect.max_x
    assert diameter == pytest.approx(33)
    assert spacing == pytest.approx(6)

    labels = [
        c
        for c in drawing.commands
        if isinstance(c, DrawText)
        and c.clip_width is not None
        and c.font.size == 10
        and wellness.top <= c.origin.y < wellness.bottom
    ]
    assert len(labels) == 4
    extents = sorted(
        (c.origin.x, c.origin.x + min(metrics.measure(c.text, c.font).width, c.clip_width))
        for c in labels
    )
    for (_, right), (left, _) in zip(extents, extents[1:]):
        assert right <= left + 1e-9


def test_missing_post_meal_fields_shrink_only_glucose_section(
    metrics, full_snapshot: ReportSnapshot
) -> None:
    full = build_report(full_snapshot, metrics=metrics)
    trimmed = build_report(
        replace(full_snapshot, post_meal_glucose_average=None, post_meal_success_rate=None),
        metrics=metrics,
    )

    assert full.sections["glucose"].height == 25 + 7 * 28 + 8
    assert trimmed.sections["glucose"].height == 25 + 5 * 28 + 8
    for name in ("header", "wellness", "glucose"):
        assert trimmed.sections[name].top == full.sections[name].top


def test_missing_sleep_fields_shrink_activity_section(
    metrics, full_snapshot: ReportSnapshot
) -> None:
    full = build_report(full_snapshot, metrics=metrics)
    no_sleep = replace(
        full_snapshot,
        sleep_score_average=None,
        average_sleep_duration_hours=None,
        sleep_regularity_score=None,
    )
    trimmed = build_report(no_sleep, metrics=metrics)

    assert full.sections["activity_sleep"].height == 30 + 3 * 28 + 8
    assert trimmed.sections["activity_sleep"].height == 30 + 28 + 18 + 8
    for name in SECTION_ORDER:
        assert trimmed.sections[name].top == full.sections[name].top


def test_step_goals_listed_in_ascending_order(metrics, full_snapshot: ReportSnapshot) -> None:
    snapshot = replace(full_snapshot, step_goal_achievements={10000: 3, 6000: 12, 8000: 7})
    drawing = build_report(snapshot, metrics=metrics)

    rows = [c.text for c in drawing.commands if isinstance(c, DrawText) and "päivää" in c.text]
    assert rows == ["6000: 12 päivää", "8000: 7 päivää", "10000: 3 päivää"]


def test_empty_snapshot_renders_placeholders(metrics, empty_snapshot: ReportSnapshot) -> None:
    config = ReportConfig()
    drawing = build_report(empty_snapshot, config=config, metrics=metrics)

    texts = [c.text for c in drawing.commands if isinstance(c, DrawText)]
    labels = config.labels
    for message in (labels.no_glucose, labels.no_agp, labels.no_macros, labels.no_energy):
        assert message in texts
    assert drawing.sections["glucose"].height == 155 + 8


def test_header_shows_formatted_date_range(metrics, full_snapshot: ReportSnapshot) -> None:
    drawing = build_report(full_snapshot, metrics=metrics)
    texts = [c.text for c in drawing.commands if isinstance(c, DrawText)]
    assert "Testi" in texts
    assert "1.3.2025 - 14.3.2025" in texts


def test_labels_can_be_substituted(metrics, full_snapshot: ReportSnapshot) -> None:
    config = ReportConfig()
    english = replace(config, labels=replace(config.labels, nutrition="Nutrition"))
    drawing = build_report(full_snapshot, config=english, metrics=metrics)
    texts = [c.text for c in drawing.commands if isinstance(c, DrawText)]
    assert "Nutrition" in texts
    assert "Ravinto" not in texts


def test_layout_is_deterministic(metrics, full_snapshot: ReportSnapshot) -> None:
    assert build_report(full_snapshot, metrics=metrics).commands == build_report(
        full_snapshot, metrics=metrics
    ).commands


@pytest.mark.parametrize("snapshot_name", ["full_snapshot", "empty_snapshot"])
def test_pdf_bytes_are_identical_across_renders(
    snapshot_name: str, request: pytest.FixtureRequest
) -> None:
    snapshot = request.getfixturevalue(snapshot_name)
    first = render_report_pdf(snapshot)
    second = render_report_pdf(snapshot)

    assert first.startswith(b"%PDF")
    assert first == second
