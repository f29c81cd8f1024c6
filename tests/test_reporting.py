import json
import math

import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402
import pytest  # noqa: E402
import yaml  # noqa: E402

from ttc_fusion.pipeline import RunReport, TTCRecord, run_sequence  # noqa: E402
from ttc_fusion.reporting import (  # noqa: E402
    compare_runs,
    create_summary_report,
    export_all,
    plot_run_comparison,
    plot_ttc_series,
    records_to_dataframe,
)


def _make_report(label="demo"):
    records = [
        TTCRecord(1, 0, 0, ttc_lidar=2.0, ttc_camera=2.1, lidar_points_curr=30, keypoint_matches=12),
        TTCRecord(2, 0, 0, ttc_lidar=float("nan"), ttc_camera=1.9),
    ]
    return RunReport(
        label=label,
        records=records,
        metrics={"num_records": 2.0, "ttc_lidar_mean": 2.0, "ttc_camera_mean": 2.0,
                 "mean_abs_ttc_difference": 0.1, "lidar_available": 1.0,
                 "camera_available": 2.0, "ttc_lidar_median": 2.0,
                 "ttc_lidar_min": 2.0, "ttc_camera_median": 2.0, "ttc_camera_min": 1.9},
        config={"ttc_model": "constant_velocity", "frame_rate": 10.0},
    )


def test_records_to_dataframe_columns():
    df = records_to_dataframe(_make_report().records)
    assert list(df.columns[:4]) == ["frame_index", "timestamp", "prev_box_id", "curr_box_id"]
    assert len(df) == 2
    assert math.isnan(df.loc[1, "ttc_lidar"])


def test_export_all_formats(tmp_path):
    report = _make_report()
    files = export_all(report, str(tmp_path))

    assert set(files) == {"csv", "json", "yaml"}

    df = pd.read_csv(files["csv"])
    assert df["ttc_camera"].tolist() == pytest.approx([2.1, 1.9])

    with open(files["json"], "r", encoding="utf-8") as f:
        payload = json.load(f)
    assert payload["label"] == "demo"
    assert payload["records"][1]["ttc_lidar"] is None

    with open(files["yaml"], "r", encoding="utf-8") as f:
        payload = yaml.safe_load(f)
    assert payload["records"][1]["ttc_lidar"] is None
    assert payload["metrics"]["num_records"] == 2.0


def test_export_rejects_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        export_all(_make_report(), str(tmp_path), formats=("html",))


def test_summary_report(tmp_path):
    path = create_summary_report(_make_report(), str(tmp_path))
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    assert "TIME-TO-COLLISION SUMMARY REPORT" in text
    assert "n/a" in text
    assert "constant_velocity" in text


def test_compare_runs(projection, approach_frames):
    fast = run_sequence(approach_frames, projection=projection, label="fast",
                        metadata={"detector": "FAST"})
    demo = _make_report()
    table = compare_runs([fast, demo])

    assert table["label"].tolist() == ["fast", "demo"]
    assert table.loc[0, "detector"] == "FAST"
    assert table.loc[0, "ttc_lidar_mean"] == pytest.approx(1.75)


def test_plots_are_written(tmp_path):
    report = _make_report()
    series = plot_ttc_series(report, str(tmp_path / "series.png"))
    comparison = plot_run_comparison([report, _make_report("other")], str(tmp_path / "cmp.png"))
    assert (tmp_path / "series.png").exists() and series.endswith("series.png")
    assert (tmp_path / "cmp.png").exists() and comparison.endswith("cmp.png")
