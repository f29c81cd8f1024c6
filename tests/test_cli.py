import json

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402
import yaml  # noqa: E402

from ttc_fusion.cli.main import main  # noqa: E402
from ttc_fusion.io import save_frame  # noqa: E402

from ttc_helpers import make_approach_sequence  # noqa: E402


def _write_sequence(directory, distances=(10.0, 9.5, 9.0, 8.5)):
    for frame in make_approach_sequence(list(distances)):
        save_frame(frame, directory / f"{frame.frame_index:06d}.npz")
    return directory


def test_cli_run_writes_reports(tmp_path, capsys):
    seq = _write_sequence(tmp_path / "seq")
    out = tmp_path / "reports"

    main(["run", str(seq), "--output-dir", str(out), "--no-plots", "--label", "smoke"])

    assert (out / "smoke_ttc.csv").exists()
    assert (out / "smoke_ttc.yaml").exists()
    assert (out / "smoke_ttc_summary.txt").exists()
    with open(out / "smoke_ttc.json", "r", encoding="utf-8") as f:
        payload = json.load(f)
    # records are emitted even though the KITTI projection misses the object
    assert len(payload["records"]) == 3
    assert "TTC Estimation Complete!" in capsys.readouterr().out


def test_cli_config_file_and_overrides(tmp_path):
    seq = _write_sequence(tmp_path / "seq")
    out = tmp_path / "reports"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump({"frame_rate": 20.0, "association": {"iou_threshold": 0.5}}),
        encoding="utf-8",
    )

    main(["run", str(seq), "--config", str(config_path), "--model", "constant_acceleration",
          "--output", "yaml", "--output-dir", str(out), "--no-plots"])

    with open(out / "seq_ttc.yaml", "r", encoding="utf-8") as f:
        payload = yaml.safe_load(f)
    assert payload["config"]["frame_rate"] == 20.0
    assert payload["config"]["iou_threshold"] == 0.5
    assert payload["config"]["ttc_model"] == "constant_acceleration"


def test_cli_compare_mode(tmp_path):
    first = _write_sequence(tmp_path / "first")
    second = _write_sequence(tmp_path / "second", distances=(12.0, 11.0, 10.0))
    out = tmp_path / "reports"

    main(["compare", str(first), str(second), "--output-dir", str(out)])

    assert (out / "ttc_run_comparison.csv").exists()
    assert (out / "ttc_run_comparison.png").exists()


def test_cli_missing_input_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["run", str(tmp_path / "missing")])
    assert excinfo.value.code == 1


def test_cli_run_rejects_several_inputs(tmp_path):
    first = _write_sequence(tmp_path / "a")
    second = _write_sequence(tmp_path / "b")
    with pytest.raises(SystemExit):
        main(["run", str(first), str(second)])


def test_cli_reports_processing_errors(tmp_path, capsys):
    empty = tmp_path / "empty"
    empty.mkdir()
    with pytest.raises(SystemExit) as excinfo:
        main(["run", str(empty), "--output-dir", str(tmp_path / "out")])
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().out


def _write_forward_calib(directory):
    directory.mkdir()
    (directory / "calib_velo_to_cam.txt").write_text(
        "R: 1 0 0 0 1 0 0 0 1\nT: 0 0 0\n", encoding="utf-8"
    )
    (directory / "calib_cam_to_cam.txt").write_text(
        "R_rect_00: 1 0 0 0 1 0 0 0 1\n"
        "P_rect_00: 320 -100 0 0 240 0 -100 0 1 0 0 0\n",
        encoding="utf-8",
    )
    return directory


def test_cli_run_with_calibration_dir(tmp_path):
    seq = _write_sequence(tmp_path / "seq")
    calib = _write_forward_calib(tmp_path / "calib")
    out = tmp_path / "reports"

    main(["run", str(seq), "--calib-dir", str(calib), "--output", "json",
          "--output-dir", str(out)])

    with open(out / "seq_ttc.json", "r", encoding="utf-8") as f:
        payload = json.load(f)
    assert [r["ttc_lidar"] for r in payload["records"]] == pytest.approx([1.9, 1.8, 1.7])
    assert (out / "seq_ttc.png").exists()


def test_cli_label_with_path_separator(tmp_path):
    seq = _write_sequence(tmp_path / "seq")
    out = tmp_path / "reports"

    main(["run", str(seq), "--label", "FAST/BRIEF", "--output-dir", str(out)])

    assert (out / "FAST_BRIEF_ttc.csv").exists()
    assert (out / "FAST_BRIEF_ttc.png").exists()
