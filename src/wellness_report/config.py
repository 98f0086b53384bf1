"""Configuración inmutable del informe (página, colores, fuentes, textos)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from wellness_report.drawing import Color, FontSpec


@dataclass(frozen=True)
class Palette:
    """Fixed colors; the first four are the score bands."""

    good: Color = Color(0.2, 0.7, 0.3)
    warning: Color = Color(0.9, 0.7, 0.1)
    critical: Color = Color(0.9, 0.2, 0.2)
    neutral: Color = Color(0.6, 0.6, 0.6)
    black: Color = Color(0.0, 0.0, 0.0)
    white: Color = Color(1.0, 1.0, 1.0)
    dark_gray: Color = Color(1 / 3, 1 / 3, 1 / 3)
    orange: Color = Color(1.0, 0.5, 0.0)
    blue: Color = Color(0.0, 0.0, 1.0)
    purple: Color = Color(0.5, 0.0, 0.5)


@dataclass(frozen=True)
class FontSet:
    """PDF base-14 font faces."""

    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    italic: str = "Helvetica-Oblique"

    def plain(self, size: float) -> FontSpec:
        return FontSpec(self.regular, size)

    def strong(self, size: float) -> FontSpec:
        return FontSpec(self.bold, size)

    def slanted(self, size: float) -> FontSpec:
        return FontSpec(self.italic, size)


@dataclass(frozen=True)
class CircleRowGeometry:
    """Sizes for the central score and its secondary metric row."""

    header_height: float = 36
    primary_diameter: float = 68
    primary_gap: float = 28
    base_diameter: float = 36
    base_spacing: float = 16
    min_spacing: float = 6
    min_diameter: float = 24
    badge_width: float = 115
    badge_height: float = 48
    badge_spacing: float = 14
    badge_radius: float = 12


@dataclass(frozen=True)
class ReportLabels:
    """User-visible strings; replace to localise the report."""

    wellness_score: str = "Wellness Score"
    meal_impact: str = "Meal Impact"
    glucose: str = "Glukoosi"
    activity: str = "Liikunta"
    sleep: str = "Uni"
    blood_sugar: str = "Verensokeri"
    time_in_range: str = "Aika tavoitteessa"
    time_in_tight_range: str = "TITR"
    time_below_range: str = "Aika alle 3,9"
    time_above_range: str = "Aika yli 10,0"
    cv: str = "CV"
    post_meal_average: str = "Ateria 2h ka."
    post_meal_success: str = "Aterianjälkeiset onnistumiset"
    no_glucose: str = "Ei glukoosidataa"
    agp_title: str = "Ambulatory Glucose Profile (AGP)"
    no_agp: str = "Ei AGP-dataa"
    nutrition: str = "Ravinto"
    meal_score: str = "Ateriapisteen ka."
    macro_recommendation: str = "Suositus: H 45-55%, P 15-25%, R 25-35%"
    macro_carbs: str = "H"
    macro_protein: str = "P"
    macro_fat: str = "R"
    no_macros: str = "Ei makrodataa"
    energy_title: str = "Energian jakautuminen vuorokauden aikana"
    energy_segments: tuple[str, str, str, str] = (
        "Aamu (03-09)",
        "Päivä (09-15)",
        "Ilta (15-21)",
        "Yö (21-03)",
    )
    no_energy: str = "Ei energiadataa"
    activity_sleep: str = "Liikunta & Uni"
    average_steps: str = "Askeleet ka."
    data_days: str = "Datapäivät"
    goal_days_title: str = "Tavoitepäivät:"
    goal_days_row: str = "{goal}: {days} päivää"
    sleep_quality: str = "Unen laatu"
    sleep_duration: str = "Unen kesto"
    sleep_regularity: str = "Säännöllisyys"
    target_tir: str = "Tavoite: >70%"
    target_titr: str = "Tavoite: >50%"
    target_tbr: str = "Tavoite: <5%"
    target_tar: str = "Tavoite: <25%"
    target_cv: str = "Tavoite: <36%"
    target_post_meal: str = "Tavoite: 4-10"
    target_post_meal_success: str = "Tavoite: >70%"
    target_meal_score: str = "Tavoite: >80"
    target_steps: str = "Tavoite: >8000"
    target_sleep_quality: str = "Tavoite: >80"
    target_sleep_duration: str = "Tavoite: 7-9h"
    target_sleep_regularity: str = "Tavoite: >70"


@dataclass(frozen=True)
class ReportConfig:
    """Everything the engine needs besides the snapshot and text metrics.

    Defaults reproduce a US-Letter page with 40 pt margins.
    """

    page_width: float = 612
    page_height: float = 792
    margin: float = 40
    palette: Palette = field(default_factory=Palette)
    fonts: FontSet = field(default_factory=FontSet)
    circles: CircleRowGeometry = field(default_factory=CircleRowGeometry)
    labels: ReportLabels = field(default_factory=ReportLabels)
    date_format: str = "{day}.{month}.{year}"
    spacing_after_score: float = 15
    spacing_after_glucose: float = 12
    spacing_after_nutrition: float = 15

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    def format_date(self, day: date) -> str:
        """Format a date for display; has no effect on geometry."""
        return self.date_format.format(day=day.day, month=day.month, year=day.year)
