"""Reproduce la secuencia de comandos sobre un canvas de ReportLab."""

from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas
from reportlab.pdfgen.pathobject import PDFPathObject

from wellness_report.config import ReportConfig
from wellness_report.drawing import (
    Color,
    DrawCommand,
    DrawText,
    FillEllipse,
    FillPolygon,
    FillRect,
    FillWedge,
    Point,
    RoundedRect,
    StrokeLine,
    StrokePolyline,
    StrokeRect,
)


def render_pdf(commands: Sequence[DrawCommand], config: ReportConfig) -> bytes:
    """Replay drawing commands onto a single PDF page.

    The canvas runs in ReportLab's invariant mode, so no creation date or
    random document id ends up in the output.

    Args:
        commands: Commands in paint order, top-left coordinates.
        config: Supplies the page size.

    Returns:
        The complete PDF document.
    """
    buf = BytesIO()
    canvas = Canvas(
        buf, pagesize=(config.page_width, config.page_height), invariant=1
    )
    painter = _Painter(canvas, config.page_height)
    for command in commands:
        painter.paint(command)
    canvas.showPage()
    canvas.save()
    return buf.getvalue()


class _Painter:
    """Traduce coordenadas (origen arriba-izquierda) al sistema PDF."""

    def __init__(self, canvas: Canvas, page_height: float) -> None:
        self._c = canvas
        self._h = page_height

    def _y(self, y: float) -> float:
        return self._h - y

    def _fill(self, color: Color) -> None:
        self._c.setFillColorRGB(color.red, color.green, color.blue)
        self._c.setFillAlpha(color.alpha)

    def _stroke(self, color: Color, line_width: float) -> None:
        self._c.setStrokeColorRGB(color.red, color.green, color.blue)
        self._c.setStrokeAlpha(color.alpha)
        self._c.setLineWidth(line_width)

    def _path(self, points: Sequence[Point], close: bool) -> PDFPathObject:
        path = self._c.beginPath()
        first, *rest = points
        path.moveTo(first.x, self._y(first.y))
        for p in rest:
            path.lineTo(p.x, self._y(p.y))
        if close:
            path.close()
        return path

    def paint(self, command: DrawCommand) -> None:
        c = self._c
        if isinstance(command, FillRect):
            r = command.rect
            self._fill(command.color)
            c.rect(r.x, self._y(r.max_y), r.width, r.height, stroke=0, fill=1)
        elif isinstance(command, StrokeRect):
            r = command.rect
            self._stroke(command.color, command.line_width)
            c.rect(r.x, self._y(r.max_y), r.width, r.height, stroke=1, fill=0)
        elif isinstance(command, FillEllipse):
            r = command.rect
            self._fill(command.color)
            c.ellipse(r.x, self._y(r.max_y), r.max_x, self._y(r.y), stroke=0, fill=1)
        elif isinstance(command, RoundedRect):
            r = command.rect
            self._fill(command.fill)
            self._stroke(command.stroke, command.line_width)
            c.roundRect(
                r.x, self._y(r.max_y), r.width, r.height, command.radius, stroke=1, fill=1
            )
        elif isinstance(command, FillPolygon):
            if len(command.points) >= 3:
                self._fill(command.color)
                c.drawPath(self._path(command.points, close=True), stroke=0, fill=1)
        elif isinstance(command, StrokePolyline):
            if len(command.points) >= 2:
                self._stroke(command.color, command.line_width)
                c.drawPath(self._path(command.points, close=False), stroke=1, fill=0)
        elif isinstance(command, StrokeLine):
            self._stroke(command.color, command.line_width)
            c.line(
                command.start.x,
                self._y(command.start.y),
                command.end.x,
                self._y(command.end.y),
            )
        elif isinstance(command, FillWedge):
            self._wedge(command)
        elif isinstance(command, DrawText):
            self._text(command)
        else:
            raise TypeError(f"Unknown drawing command: {command!r}")

    def _wedge(self, command: FillWedge) -> None:
        # Clockwise on a y-down page is counter-clockwise in PDF space.
        cx, cy, r = command.center.x, self._y(command.center.y), command.radius
        start = -(command.start_angle + command.sweep)
        self._fill(command.color)
        self._c.wedge(cx - r, cy - r, cx + r, cy + r, start, command.sweep, stroke=0, fill=1)

    def _text(self, command: DrawText) -> None:
        c = self._c
        font = command.font
        ascent, _descent = pdfmetrics.getAscentDescent(font.name, font.size)
        baseline = self._y(command.origin.y + ascent)
        c.saveState()
        if command.clip_width is not None:
            clip = c.beginPath()
            clip.rect(
                command.origin.x,
                self._y(command.origin.y + font.size * 1.2),
                command.clip_width,
                font.size * 1.2,
            )
            c.clipPath(clip, stroke=0, fill=0)
        self._fill(command.color)
        c.setFont(font.name, font.size)
        c.drawString(command.origin.x, baseline, command.text)
        c.restoreState()
