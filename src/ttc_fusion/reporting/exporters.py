"""
################################################################

File: ttc_fusion/reporting/exporters.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Export functionality for TTC run reports.

Supports exporting runs to:
- CSV (one row per matched object pair per frame)
- JSON (structured format)
- YAML (human-readable format)
- TXT (summary report)

Unavailable TTC values (NaN) are written as null in JSON and YAML.

################################################################

"""

from __future__ import annotations

import json
import math
import os
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd
import yaml

from ttc_fusion.pipeline.records import RECORD_COLUMNS, RunReport, TTCRecord

EXPORT_FORMATS = ("csv", "json", "yaml")


def file_stem(report: RunReport) -> str:
    """Label of the report reduced to a safe file-name stem."""
    safe = "".join(c if c.isalnum() or c in "-_" else "_" for c in report.label)
    return f"{safe or 'run'}_ttc"


def _nan_to_none(value: Any) -> Any:
    """Recursively replace NaN floats by None for JSON/YAML serialization."""
    if isinstance(value, dict):
        return {key: _nan_to_none(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_nan_to_none(item) for item in value]
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def records_to_dataframe(records: Sequence[TTCRecord]) -> pd.DataFrame:
    """Convert TTC records to a DataFrame with one row per record."""
    return pd.DataFrame([record.to_dict() for record in records], columns=RECORD_COLUMNS)


def export_csv(report: RunReport, output_dir: str) -> str:
    """
    Export the records of a run to a CSV file.

    Args:
        report: Run report
        output_dir: Directory to save the CSV file

    Returns:
        Path to CSV file
    """
    os.makedirs(output_dir, exist_ok=True)
    csv_path = os.path.join(output_dir, f"{file_stem(report)}.csv")
    records_to_dataframe(report.records).to_csv(csv_path, index=False)
    print(f"[INFO] Saved TTC records CSV: {csv_path}")
    return csv_path


def export_json(report: RunReport, output_dir: str) -> str:
    """
    Export a run report to a JSON file.

    Args:
        report: Run report
        output_dir: Directory to save the JSON file

    Returns:
        Path to JSON file
    """
    os.makedirs(output_dir, exist_ok=True)
    json_path = os.path.join(output_dir, f"{file_stem(report)}.json")
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(_nan_to_none(report.to_dict()), f, indent=2)
    print(f"[INFO] Saved JSON report: {json_path}")
    return json_path


def export_yaml(report: RunReport, output_dir: str) -> str:
    """
    Export a run report to a YAML file.

    Args:
        report: Run report
        output_dir: Directory to save the YAML file

    Returns:
        Path to YAML file
    """
    os.makedirs(output_dir, exist_ok=True)
    yaml_path = os.path.join(output_dir, f"{file_stem(report)}.yaml")
    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(_nan_to_none(report.to_dict()), f, sort_keys=False, default_flow_style=False)
    print(f"[INFO] Saved YAML report: {yaml_path}")
    return yaml_path


def export_all(
    report: RunReport,
    output_dir: str,
    formats: Iterable[str] = EXPORT_FORMATS,
) -> Dict[str, str]:
    """
    Export a run report to the requested formats.

    Args:
        report: Run report
        output_dir: Directory to save all reports
        formats: Any of "csv", "json", "yaml"

    Returns:
        Dictionary mapping format names to file paths
    """
    exporters = {"csv": export_csv, "json": export_json, "yaml": export_yaml}
    output_files = {}
    for fmt in formats:
        if fmt not in exporters:
            raise ValueError(f"Unknown export format '{fmt}'. Choose from {EXPORT_FORMATS}")
        output_files[fmt] = exporters[fmt](report, output_dir)
    return output_files


def _fmt(value: float, unit: str = " s") -> str:
    return "n/a" if value is None or math.isnan(value) else f"{value:.3f}{unit}"


def create_summary_report(report: RunReport, output_dir: str) -> str:
    """
    Create a human-readable text summary of a run.

    Args:
        report: Run report
        output_dir: Directory to save summary report

    Returns:
        Path to summary report file
    """
    os.makedirs(output_dir, exist_ok=True)
    summary_path = os.path.join(output_dir, f"{file_stem(report)}_summary.txt")
    m = report.metrics

    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("=" * 80 + "\n")
        f.write("TIME-TO-COLLISION SUMMARY REPORT\n")
        f.write("=" * 80 + "\n\n")

        f.write(f"Run: {report.label}\n")
        f.write(f"Generated: {report.generated_at}\n")
        f.write(f"Model: {report.config.get('ttc_model', 'n/a')}\n")
        f.write(f"Frame rate: {report.config.get('frame_rate', 'n/a')} Hz\n\n")

        f.write("OVERALL STATISTICS\n")
        f.write("-" * 80 + "\n")
        f.write(f"Object pairs processed: {int(m.get('num_records', 0))}\n")
        f.write(f"Lidar TTC available:    {int(m.get('lidar_available', 0))}\n")
        f.write(f"Camera TTC available:   {int(m.get('camera_available', 0))}\n")
        for sensor in ("lidar", "camera"):
            f.write(
                f"  {sensor.upper():7s} mean {_fmt(m.get(f'ttc_{sensor}_mean'))}, "
                f"median {_fmt(m.get(f'ttc_{sensor}_median'))}, "
                f"min {_fmt(m.get(f'ttc_{sensor}_min'))}\n"
            )
        f.write(f"Mean |lidar - camera|:  {_fmt(m.get('mean_abs_ttc_difference'))}\n\n")

        f.write("PER-FRAME TTC\n")
        f.write("-" * 80 + "\n")
        for record in report.records:
            f.write(
                f"  frame {record.frame_index:4d}  box {record.prev_box_id:3d} -> "
                f"{record.curr_box_id:3d}  lidar {_fmt(record.ttc_lidar):>10s}  "
                f"camera {_fmt(record.ttc_camera):>10s}  "
                f"({record.lidar_points_curr} pts, {record.keypoint_matches} matches)\n"
            )

        f.write("\n" + "=" * 80 + "\n")

    print(f"[INFO] Saved summary report: {summary_path}")
    return summary_path


def compare_runs(reports: Sequence[RunReport]) -> pd.DataFrame:
    """
    Tabulate aggregate metrics of several runs, one row per run label.

    Used to compare keypoint detector/descriptor combinations on the
    same sequence.
    """
    rows: List[Dict[str, Any]] = []
    for report in reports:
        row: Dict[str, Any] = {"label": report.label}
        row.update(report.metadata)
        row.update(report.metrics)
        rows.append(row)
    return pd.DataFrame(rows)
