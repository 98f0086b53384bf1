"""Medición de texto inyectable para el motor de maquetación."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from reportlab.pdfbase import pdfmetrics

from wellness_report.drawing import FontSpec


@dataclass(frozen=True)
class TextSize:
    width: float
    height: float


class TextMetrics(Protocol):
    """Anything able to measure a single line of text."""

    def measure(self, text: str, font: FontSpec) -> TextSize:
        """Return the bounding box of `text` set in `font`."""
        ...


@dataclass(frozen=True)
class ReportLabTextMetrics:
    """Text metrics backed by ReportLab's built-in font tables.

    Heights use a fixed line-height factor so that line boxes match what the
    PDF backend lays out.
    """

    line_height_factor: float = 1.2

    def measure(self, text: str, font: FontSpec) -> TextSize:
        width = pdfmetrics.stringWidth(text, font.name, font.size)
        return TextSize(width=width, height=font.size * self.line_height_factor)


def measure_clipped(
    metrics: TextMetrics, text: str, font: FontSpec, max_width: float
) -> TextSize:
    """Measure text, capping the width to the visible clip box."""
    size = metrics.measure(text, font)
    return TextSize(width=min(size.width, max_width), height=size.height)
