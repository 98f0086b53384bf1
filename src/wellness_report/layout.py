"""Geometría del motor de maquetación: fila adaptativa, columnas y alturas de fila."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from wellness_report.config import CircleRowGeometry

ROW_HEIGHT_WITH_TARGET = 28
ROW_HEIGHT_PLAIN = 18


class RowMode(enum.Enum):
    CIRCLES = "circles"
    BADGES = "badges"


@dataclass(frozen=True)
class SecondaryRowPlan:
    """Outcome of the circle-vs-badge decision for one metric row."""

    mode: RowMode
    diameter: float
    spacing: float

    def required_width(self, count: int) -> float:
        if count <= 0:
            return 0.0
        return count * self.diameter + (count - 1) * self.spacing


def plan_secondary_row(
    count: int, available_width: float, geometry: CircleRowGeometry
) -> SecondaryRowPlan:
    """Choose circle sizes for `count` metrics, or fall back to badges.

    Spacing is shrunk first (down to ``geometry.min_spacing``); only then does
    the diameter give way. A diameter below ``geometry.min_diameter`` is not
    legible, so the whole row switches to badges.

    Args:
        count: Number of secondary metrics in the row.
        available_width: Horizontal room to the right of the primary circle.
        geometry: Default and minimum sizes.

    Returns:
        The plan applied uniformly to every metric in the row.
    """
    base_d = geometry.base_diameter
    base_s = geometry.base_spacing
    badges = SecondaryRowPlan(RowMode.BADGES, base_d, base_s)

    if available_width <= 0:
        return badges
    if count <= 0:
        return SecondaryRowPlan(RowMode.CIRCLES, base_d, base_s)

    gaps = count - 1
    required = count * base_d + gaps * base_s
    if required <= available_width:
        return SecondaryRowPlan(RowMode.CIRCLES, base_d, base_s)

    if gaps == 0:
        diameter = min(base_d, available_width)
        if diameter < geometry.min_diameter:
            return badges
        return SecondaryRowPlan(RowMode.CIRCLES, diameter, base_s)

    spacing = (available_width - count * base_d) / gaps
    if spacing >= geometry.min_spacing:
        return SecondaryRowPlan(RowMode.CIRCLES, base_d, spacing)

    spacing = geometry.min_spacing
    diameter = (available_width - gaps * spacing) / count
    if diameter < geometry.min_diameter:
        return badges
    return SecondaryRowPlan(RowMode.CIRCLES, diameter, spacing)


@dataclass(frozen=True)
class ColumnSplit:
    left_x: float
    left_width: float
    right_x: float
    right_width: float


def split_columns(
    x: float, width: float, left_ratio: float, gap: float
) -> ColumnSplit:
    """Split `width` into a left column of `left_ratio` and the remainder."""
    left_width = width * left_ratio
    return ColumnSplit(
        left_x=x,
        left_width=left_width,
        right_x=x + left_width + gap,
        right_width=width - left_width - gap,
    )


@dataclass
class TwoColumnCursor:
    """Independent vertical offsets for the two columns of a section."""

    top: float
    left: float = 0.0
    right: float = 0.0

    @property
    def left_y(self) -> float:
        return self.top + self.left

    @property
    def right_y(self) -> float:
        return self.top + self.right

    def advance_left(self, amount: float) -> None:
        self.left += amount

    def advance_right(self, amount: float) -> None:
        self.right += amount

    def height(self, gap: float = 0.0) -> float:
        """Height of the section: the taller column plus a trailing gap."""
        return max(self.left, self.right) + gap


def metric_row_height(has_target: bool) -> float:
    return ROW_HEIGHT_WITH_TARGET if has_target else ROW_HEIGHT_PLAIN
