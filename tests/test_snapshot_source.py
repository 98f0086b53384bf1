from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from wellness_report.sources.snapshot import (
    SnapshotPaths,
    SnapshotSource,
    _parse_date,
    load_agp_csv,
    snapshot_from_dict,
)


def _minimal() -> dict[str, Any]:
    return {
        "nickname": "Testi",
        "start_date": "2025-03-01",
        "end_date": "2025-03-14T23:59:00+02:00",
    }


def _write(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_snapshot_parses_full_document(tmp_path: Path) -> None:
    data = _minimal() | {
        "wellness_score": 81.5,
        "glucose_score_average": 74,
        "activity_score_average": 63.4,
        "step_data_days": 12,
        "glucose_metrics": {"tir": 82.3, "titr": 61.0, "tbr": 2.4, "tar": 15.3, "cv": 31.2},
        "post_meal_glucose_average": 8.2,
        "agp": {
            "time_points": [0, 1],
            "p10": [4, 4.1],
            "p25": [5, 5.1],
            "p50": [6, 6.1],
            "p75": [7, 7.1],
            "p90": [9, 9.1],
        },
        "macro_distribution": {"carbs": 0.5, "protein": 0.3, "fat": 0.2},
        "energy_distribution": {"morning": 500, "midday": 800, "evening": 700, "night": 0},
        "step_goal_achievements": {"8000": 7, "10000": 3},
        "average_sleep_duration_hours": 7.4,
    }
    p = _write(tmp_path / "snapshot_2025-03-14.json", data)

    snap = SnapshotSource(SnapshotPaths(root=tmp_path)).load_snapshot(p)

    assert snap.nickname == "Testi"
    assert snap.start_date == date(2025, 3, 1)
    assert snap.end_date == date(2025, 3, 14)
    assert snap.wellness_score == 82
    assert snap.activity_score_average == pytest.approx(63.4)
    assert snap.glucose_metrics is not None
    assert snap.glucose_metrics.cv == pytest.approx(31.2)
    assert snap.agp is not None and snap.agp.is_plottable
    assert snap.macro_distribution is not None
    assert snap.macro_distribution.total == pytest.approx(1.0)
    assert snap.energy_distribution is not None
    assert snap.energy_distribution.night == 0.0
    assert snap.step_goal_achievements == {8000: 7, 10000: 3}
    assert snap.post_meal_success_rate is None
    assert snap.sleep_score_average is None


def test_absent_blocks_stay_absent() -> None:
    snap = snapshot_from_dict(_minimal())
    assert snap.wellness_score is None
    assert snap.glucose_metrics is None
    assert snap.agp is None
    assert snap.macro_distribution is None
    assert snap.energy_distribution is None
    assert snap.step_goal_achievements == {}
    assert snap.step_data_days == 0
    assert snap.average_steps == 0.0


def test_snapshot_requires_nickname() -> None:
    data = _minimal()
    del data["nickname"]
    with pytest.raises(ValueError, match="nickname"):
        snapshot_from_dict(data)


@pytest.mark.parametrize("value", [None, "", "   ", 20250301])
def test_parse_date_rejects_missing_or_non_string(value: Any) -> None:
    with pytest.raises(ValueError, match="start_date"):
        _parse_date(value, "start_date")


def test_glucose_metrics_needs_every_field() -> None:
    data = _minimal() | {"glucose_metrics": {"tir": 80, "titr": 60, "tbr": 2, "tar": 18}}
    with pytest.raises(ValueError, match="'cv'"):
        snapshot_from_dict(data)


def test_block_must_be_an_object() -> None:
    data = _minimal() | {"macro_distribution": [0.5, 0.3, 0.2]}
    with pytest.raises(ValueError, match="macro_distribution"):
        snapshot_from_dict(data)


def test_load_snapshot_not_object_raises(tmp_path: Path) -> None:
    p = _write(tmp_path / "snapshot_list.json", [1, 2, 3])
    src = SnapshotSource(SnapshotPaths(root=tmp_path))
    with pytest.raises(ValueError, match="must be an object"):
        src.load_snapshot(p)


def test_load_snapshot_invalid_json_raises(tmp_path: Path) -> None:
    p = tmp_path / "snapshot_bad.json"
    p.write_text("not json", encoding="utf-8")
    src = SnapshotSource(SnapshotPaths(root=tmp_path))
    with pytest.raises(json.JSONDecodeError):
        src.load_snapshot(p)


def test_validate_raises_when_root_missing(tmp_path: Path) -> None:
    missing = tmp_path / "noexiste"
    src = SnapshotSource(SnapshotPaths(root=missing))
    with pytest.raises(FileNotFoundError, match=str(missing)):
        src.validate()


def test_newest_json_raises_when_no_files(tmp_path: Path) -> None:
    src = SnapshotSource(SnapshotPaths(root=tmp_path))
    with pytest.raises(FileNotFoundError, match="No snapshot_"):
        src.newest_json()


def test_newest_json_ignores_other_files(tmp_path: Path) -> None:
    (tmp_path / "notes.json").write_text("{}", encoding="utf-8")
    p = _write(tmp_path / "snapshot_2025-03-14.json", _minimal())
    src = SnapshotSource(SnapshotPaths(root=tmp_path))
    assert src.newest_json() == p


def test_agp_csv_sorted_by_hour(tmp_path: Path) -> None:
    p = tmp_path / "agp.csv"
    p.write_text(
        "hour,p10,p25,p50,p75,p90\n"
        "2,4.2,5.2,6.2,7.2,9.2\n"
        "0,4.0,5.0,6.0,7.0,9.0\n"
        "1,4.1,5.1,6.1,7.1,9.1\n",
        encoding="utf-8",
    )
    agp = load_agp_csv(p)
    assert agp.time_points == (0, 1, 2)
    assert agp.p50 == pytest.approx((6.0, 6.1, 6.2))
    assert agp.is_plottable


def test_agp_csv_missing_columns_raises(tmp_path: Path) -> None:
    p = tmp_path / "agp.csv"
    p.write_text("hour,p10,p50\n0,4,6\n", encoding="utf-8")
    with pytest.raises(ValueError, match="p25, p75, p90"):
        load_agp_csv(p)


def test_load_prefers_agp_csv_over_json_block(tmp_path: Path) -> None:
    data = _minimal() | {
        "agp": {"time_points": [0], "p10": [1], "p25": [1], "p50": [1], "p75": [1], "p90": [1]}
    }
    _write(tmp_path / "snapshot_2025-03-14.json", data)
    (tmp_path / "agp.csv").write_text(
        "hour,p10,p25,p50,p75,p90\n0,4,5,6,7,9\n23,4,5,6,7,9\n", encoding="utf-8"
    )

    src = SnapshotSource(SnapshotPaths(root=tmp_path))
    snap = src.load()

    assert snap.agp is not None
    assert snap.agp.time_points == (0, 23)


def test_agp_csv_is_optional(tmp_path: Path) -> None:
    _write(tmp_path / "snapshot_2025-03-14.json", _minimal())
    src = SnapshotSource(SnapshotPaths(root=tmp_path))
    assert src.agp_csv() is None
    assert src.load().agp is None
