"""Lectura de instantáneas exportadas en JSON (y perfil AGP opcional en CSV)."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
from dateutil import parser as date_parser

from wellness_report.model import (
    AGPSeries,
    EnergyDistribution,
    GlucoseMetrics,
    MacroDistribution,
    ReportSnapshot,
)
from wellness_report.scores import round_half_up
from wellness_report.sources.base import DataSource, SourcePaths

_AGP_COLUMNS = ("hour", "p10", "p25", "p50", "p75", "p90")


@dataclass(frozen=True)
class SnapshotPaths(SourcePaths):
    """Paths for snapshot exports."""

    # root: folder containing snapshot_*.json and optionally agp.csv
    agp_file: str = "agp.csv"


class SnapshotSource(DataSource):
    """Snapshot JSON reader."""

    def __init__(self, paths: SnapshotPaths) -> None:
        super().__init__(paths)
        self._snapshot_paths = paths

    def newest_json(self) -> Path:
        """Return newest snapshot_*.json by mtime."""
        return self.newest("snapshot_*.json")

    def agp_csv(self) -> Path | None:
        """Return the AGP CSV path when the export includes one."""
        path = self._snapshot_paths.root / self._snapshot_paths.agp_file
        return path if path.is_file() else None

    def load(self) -> ReportSnapshot:
        return self.load_snapshot(self.newest_json(), self.agp_csv())

    def load_snapshot(
        self, path: Path, agp_csv: Path | None = None
    ) -> ReportSnapshot:
        """Parse a snapshot JSON document.

        Args:
            path: Path to the JSON file.
            agp_csv: Optional CSV with one row per hour; replaces any AGP
                block found in the JSON.

        Returns:
            The parsed snapshot.

        Raises:
            ValueError: If the JSON shape is invalid.
        """
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("Snapshot JSON must be an object")
        snapshot = snapshot_from_dict(raw)
        if agp_csv is not None:
            snapshot = _replace_agp(snapshot, load_agp_csv(agp_csv))
        return snapshot


def load_agp_csv(path: Path) -> AGPSeries:
    """Read hourly percentiles (hour,p10,p25,p50,p75,p90) sorted by hour."""
    df = pd.read_csv(path)
    missing = [c for c in _AGP_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"AGP CSV missing columns: {', '.join(missing)}")
    df = df.dropna(subset=["hour"]).sort_values("hour").reset_index(drop=True)
    return AGPSeries(
        time_points=tuple(int(h) for h in df["hour"]),
        p10=tuple(df["p10"].astype(float)),
        p25=tuple(df["p25"].astype(float)),
        p50=tuple(df["p50"].astype(float)),
        p75=tuple(df["p75"].astype(float)),
        p90=tuple(df["p90"].astype(float)),
    )


def snapshot_from_dict(raw: dict[str, Any]) -> ReportSnapshot:
    """Build a ReportSnapshot from decoded JSON; absent keys stay absent."""
    nickname = raw.get("nickname")
    if not isinstance(nickname, str):
        raise ValueError("Snapshot needs a 'nickname' string")
    return ReportSnapshot(
        nickname=nickname,
        start_date=_parse_date(raw.get("start_date"), "start_date"),
        end_date=_parse_date(raw.get("end_date"), "end_date"),
        wellness_score=_opt_int(raw.get("wellness_score")),
        meal_impact_average=_opt_int(raw.get("meal_impact_average")),
        glucose_score_average=_opt_int(raw.get("glucose_score_average")),
        activity_score_average=float(raw.get("activity_score_average") or 0.0),
        sleep_score_average=_opt_int(raw.get("sleep_score_average")),
        step_data_days=int(raw.get("step_data_days") or 0),
        glucose_metrics=_glucose(raw.get("glucose_metrics")),
        post_meal_glucose_average=_opt_float(raw.get("post_meal_glucose_average")),
        post_meal_success_rate=_opt_float(raw.get("post_meal_success_rate")),
        agp=_agp(raw.get("agp")),
        meal_score_average=_opt_int(raw.get("meal_score_average")),
        macro_distribution=_macros(raw.get("macro_distribution")),
        energy_distribution=_energy(raw.get("energy_distribution")),
        average_steps=float(raw.get("average_steps") or 0.0),
        step_goal_achievements=_goals(raw.get("step_goal_achievements")),
        average_sleep_duration_hours=_opt_float(raw.get("average_sleep_duration_hours")),
        sleep_regularity_score=_opt_int(raw.get("sleep_regularity_score")),
    )


def _replace_agp(snapshot: ReportSnapshot, agp: AGPSeries) -> ReportSnapshot:
    """Devuelve una copia de la instantánea con otro perfil AGP."""
    return replace(snapshot, agp=agp)


def _parse_date(value: Any, key: str) -> date:
    """Acepta fechas ISO (con o sin hora)."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Snapshot needs an ISO date in '{key}'")
    return date_parser.isoparse(value).date()


def _opt_int(value: Any) -> int | None:
    """None se mantiene; números se redondean a entero."""
    if value is None:
        return None
    return round_half_up(float(value))


def _opt_float(value: Any) -> float | None:
    return None if value is None else float(value)


def _section(value: Any, name: str) -> dict[str, Any] | None:
    """Valida que un bloque opcional sea un objeto JSON."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"'{name}' must be an object")
    return value


def _required(block: dict[str, Any], key: str, name: str) -> float:
    if block.get(key) is None:
        raise ValueError(f"'{name}' is missing '{key}'")
    return float(block[key])


def _glucose(value: Any) -> GlucoseMetrics | None:
    block = _section(value, "glucose_metrics")
    if block is None:
        return None
    return GlucoseMetrics(
        tir=_required(block, "tir", "glucose_metrics"),
        titr=_required(block, "titr", "glucose_metrics"),
        tbr=_required(block, "tbr", "glucose_metrics"),
        tar=_required(block, "tar", "glucose_metrics"),
        cv=_required(block, "cv", "glucose_metrics"),
    )


def _agp(value: Any) -> AGPSeries | None:
    block = _section(value, "agp")
    if block is None:
        return None
    return AGPSeries(
        time_points=tuple(int(h) for h in block.get("time_points", ())),
        p10=tuple(float(v) for v in block.get("p10", ())),
        p25=tuple(float(v) for v in block.get("p25", ())),
        p50=tuple(float(v) for v in block.get("p50", ())),
        p75=tuple(float(v) for v in block.get("p75", ())),
        p90=tuple(float(v) for v in block.get("p90", ())),
    )


def _macros(value: Any) -> MacroDistribution | None:
    block = _section(value, "macro_distribution")
    if block is None:
        return None
    return MacroDistribution(
        carbs=float(block.get("carbs", 0.0)),
        protein=float(block.get("protein", 0.0)),
        fat=float(block.get("fat", 0.0)),
    )


def _energy(value: Any) -> EnergyDistribution | None:
    block = _section(value, "energy_distribution")
    if block is None:
        return None
    return EnergyDistribution(
        morning=float(block.get("morning", 0.0)),
        midday=float(block.get("midday", 0.0)),
        evening=float(block.get("evening", 0.0)),
        night=float(block.get("night", 0.0)),
    )


def _goals(value: Any) -> dict[int, int]:
    """Claves JSON son strings; se convierten a umbral entero."""
    block = _section(value, "step_goal_achievements")
    if block is None:
        return {}
    return {int(goal): int(days) for goal, days in block.items()}
