"""Ensamblado del documento: secciones en orden fijo sobre una única página."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from wellness_report.config import ReportConfig
from wellness_report.drawing import DrawCommand, DrawingRecorder
from wellness_report.model import ReportSnapshot
from wellness_report.pdf_backend import render_pdf
from wellness_report.sections import (
    draw_activity_sleep_section,
    draw_central_score,
    draw_glucose_section,
    draw_header,
    draw_nutrition_section,
)
from wellness_report.sink import ReportResult, ReportSink, default_output_dir
from wellness_report.text_metrics import ReportLabTextMetrics, TextMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionSpan:
    """Where a section started and how much vertical space it used."""

    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class ReportDrawing:
    """In-memory result of laying out one report page."""

    config: ReportConfig
    commands: list[DrawCommand] = field(default_factory=list)
    sections: dict[str, SectionSpan] = field(default_factory=dict)


def build_report(
    snapshot: ReportSnapshot,
    config: ReportConfig | None = None,
    metrics: TextMetrics | None = None,
) -> ReportDrawing:
    """Lay out every section of the report, top to bottom.

    This is pure: no I/O, no clock, no state shared between calls. Content
    that runs past the bottom of the page is clipped by the page itself.

    Args:
        snapshot: Immutable metrics snapshot.
        config: Page/colour/label configuration (defaults to US Letter).
        metrics: Text measurement provider (defaults to ReportLab fonts).

    Returns:
        The drawing-command sequence plus the span of each section.
    """
    config = config or ReportConfig()
    metrics = metrics or ReportLabTextMetrics()
    canvas = DrawingRecorder()
    sections: dict[str, SectionSpan] = {}

    y = config.margin
    steps = (
        ("header", draw_header, 0.0),
        ("wellness", draw_central_score, config.spacing_after_score),
        ("glucose", draw_glucose_section, config.spacing_after_glucose),
        ("nutrition", draw_nutrition_section, config.spacing_after_nutrition),
        ("activity_sleep", draw_activity_sleep_section, 0.0),
    )
    for name, draw, spacing in steps:
        height = draw(canvas, metrics, config, snapshot, y)
        sections[name] = SectionSpan(top=y, height=height)
        y += height + spacing

    if y > config.page_height - config.margin:
        logger.debug("report content ends at %.1f, past the bottom margin", y)
    return ReportDrawing(config=config, commands=canvas.commands, sections=sections)


def render_report_pdf(
    snapshot: ReportSnapshot,
    config: ReportConfig | None = None,
    metrics: TextMetrics | None = None,
) -> bytes:
    """Render the snapshot to PDF bytes (identical input, identical bytes)."""
    drawing = build_report(snapshot, config, metrics)
    return render_pdf(drawing.commands, drawing.config)


def generate_report(
    snapshot: ReportSnapshot,
    out_dir: Path | None = None,
    *,
    filename: str | None = None,
    config: ReportConfig | None = None,
    metrics: TextMetrics | None = None,
) -> ReportResult:
    """Render the report and write it to disk.

    Args:
        snapshot: Immutable metrics snapshot.
        out_dir: Destination directory (default: ``~/Documents``).
        filename: File name; a unique ``wellness-report-<uuid>.pdf`` if omitted.
        config: Report configuration.
        metrics: Text measurement provider.

    Returns:
        A result carrying the written path, or the reason it failed.
    """
    data = render_report_pdf(snapshot, config, metrics)
    name = filename or f"wellness-report-{uuid.uuid4()}.pdf"
    sink = ReportSink(out_dir or default_output_dir())
    return sink.write(data, name)
