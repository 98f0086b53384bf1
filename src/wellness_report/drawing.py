"""Primitivas de dibujo y secuencia de comandos independiente del backend.

Coordinates are page points with the origin at the top-left corner and y
growing downwards; the PDF backend flips them when replaying.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Union


@dataclass(frozen=True)
class Color:
    """RGBA color with components in [0, 1]."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def with_alpha(self, alpha: float) -> Color:
        return replace(self, alpha=alpha)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (top-left origin)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @classmethod
    def around(cls, center: Point, diameter: float) -> Rect:
        """Square of side `diameter` centred on `center`."""
        return cls(
            center.x - diameter / 2, center.y - diameter / 2, diameter, diameter
        )


@dataclass(frozen=True)
class FontSpec:
    """Font face name (a PDF base font) and size in points."""

    name: str
    size: float


@dataclass(frozen=True)
class FillRect:
    rect: Rect
    color: Color


@dataclass(frozen=True)
class StrokeRect:
    rect: Rect
    color: Color
    line_width: float = 1.0


@dataclass(frozen=True)
class FillEllipse:
    rect: Rect
    color: Color


@dataclass(frozen=True)
class RoundedRect:
    rect: Rect
    radius: float
    fill: Color
    stroke: Color
    line_width: float = 1.0


@dataclass(frozen=True)
class FillPolygon:
    points: tuple[Point, ...]
    color: Color


@dataclass(frozen=True)
class StrokePolyline:
    points: tuple[Point, ...]
    color: Color
    line_width: float = 1.0


@dataclass(frozen=True)
class StrokeLine:
    start: Point
    end: Point
    color: Color
    line_width: float = 1.0


@dataclass(frozen=True)
class FillWedge:
    """Pie wedge; angles in degrees, 0 = 3 o'clock, positive = clockwise."""

    center: Point
    radius: float
    start_angle: float
    sweep: float
    color: Color


@dataclass(frozen=True)
class DrawText:
    """Single line of text; `origin` is the top-left of its line box.

    `clip_width`, when set, hides everything right of origin.x + clip_width.
    """

    text: str
    origin: Point
    font: FontSpec
    color: Color
    clip_width: float | None = None


DrawCommand = Union[
    FillRect,
    StrokeRect,
    FillEllipse,
    RoundedRect,
    FillPolygon,
    StrokePolyline,
    StrokeLine,
    FillWedge,
    DrawText,
]


@dataclass
class DrawingRecorder:
    """Collects drawing commands in paint order (back to front)."""

    commands: list[DrawCommand] = field(default_factory=list)

    def fill_rect(self, rect: Rect, color: Color) -> None:
        self.commands.append(FillRect(rect, color))

    def stroke_rect(self, rect: Rect, color: Color, line_width: float = 1.0) -> None:
        self.commands.append(StrokeRect(rect, color, line_width))

    def fill_ellipse(self, rect: Rect, color: Color) -> None:
        self.commands.append(FillEllipse(rect, color))

    def rounded_rect(
        self,
        rect: Rect,
        radius: float,
        fill: Color,
        stroke: Color,
        line_width: float = 1.0,
    ) -> None:
        self.commands.append(RoundedRect(rect, radius, fill, stroke, line_width))

    def fill_polygon(self, points: Sequence[Point], color: Color) -> None:
        self.commands.append(FillPolygon(tuple(points), color))

    def stroke_polyline(
        self, points: Sequence[Point], color: Color, line_width: float = 1.0
    ) -> None:
        self.commands.append(StrokePolyline(tuple(points), color, line_width))

    def line(
        self, start: Point, end: Point, color: Color, line_width: float = 1.0
    ) -> None:
        self.commands.append(StrokeLine(start, end, color, line_width))

    def fill_wedge(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        sweep: float,
        color: Color,
    ) -> None:
        self.commands.append(FillWedge(center, radius, start_angle, sweep, color))

    def text(
        self,
        text: str,
        origin: Point,
        font: FontSpec,
        color: Color,
        clip_width: float | None = None,
    ) -> None:
        self.commands.append(DrawText(text, origin, font, color, clip_width))

    def of_type(self, kind: type) -> list[DrawCommand]:
        """Return the recorded commands of one command class, in order."""
        return [c for c in self.commands if isinstance(c, kind)]
