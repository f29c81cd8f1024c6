import math

import pytest

from ttc_fusion.pipeline import TTCRecord, compute_run_metrics, run_sequence


def test_run_sequence_report(projection, approach_frames):
    report = run_sequence(
        approach_frames, projection=projection, label="synthetic", metadata={"detector": "none"}
    )

    assert report.label == "synthetic"
    assert len(report.records) == 4
    assert report.metadata == {"detector": "none"}
    assert report.config["ttc_model"] == "constant_velocity"
    assert report.metrics["num_records"] == 4
    assert report.metrics["lidar_available"] == 4
    assert report.metrics["camera_available"] == 4
    assert report.metrics["ttc_lidar_mean"] == pytest.approx(1.75)
    assert report.metrics["ttc_lidar_min"] == pytest.approx(1.6)
    assert report.metrics["mean_abs_ttc_difference"] == pytest.approx(0.0, abs=1e-6)
    assert report.generated_at.endswith("Z")


def test_run_metrics_ignore_unavailable_values():
    records = [
        TTCRecord(1, 0, 0, ttc_lidar=2.0, ttc_camera=float("nan")),
        TTCRecord(2, 0, 0, ttc_lidar=float("nan"), ttc_camera=3.0),
        TTCRecord(3, 0, 0, ttc_lidar=4.0, ttc_camera=5.0),
    ]
    metrics = compute_run_metrics(records)

    assert metrics["lidar_available"] == 2
    assert metrics["camera_available"] == 2
    assert metrics["ttc_lidar_mean"] == pytest.approx(3.0)
    assert metrics["ttc_camera_median"] == pytest.approx(4.0)
    assert metrics["mean_abs_ttc_difference"] == pytest.approx(1.0)


def test_run_metrics_without_records():
    metrics = compute_run_metrics([])
    assert metrics["num_records"] == 0
    assert math.isnan(metrics["ttc_lidar_mean"])
    assert math.isnan(metrics["mean_abs_ttc_difference"])


def test_report_to_dict_is_plain(projection, approach_frames):
    report = run_sequence(approach_frames, projection=projection)
    payload = report.to_dict()
    assert payload["label"] == "run"
    assert len(payload["records"]) == 4
    assert set(payload["records"][0]) >= {"frame_index", "ttc_lidar", "ttc_camera"}
