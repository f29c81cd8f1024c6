"""
################################################################

File: ttc_fusion/pipeline/runner.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Run a TTCProcessor over a whole frame sequence and aggregate the
per-pair records into a RunReport.

################################################################

"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from ttc_fusion.calibration import ProjectionChain
from ttc_fusion.config import FusionConfig
from ttc_fusion.frame import SensorFrame
from ttc_fusion.pipeline.processor import TTCProcessor
from ttc_fusion.pipeline.records import RunReport, TTCRecord


def _summary(values: np.ndarray, prefix: str) -> Dict[str, float]:
    if values.size == 0:
        return {
            f"{prefix}_mean": float("nan"),
            f"{prefix}_median": float("nan"),
            f"{prefix}_min": float("nan"),
            f"{prefix}_max": float("nan"),
        }
    return {
        f"{prefix}_mean": float(np.mean(values)),
        f"{prefix}_median": float(np.median(values)),
        f"{prefix}_min": float(np.min(values)),
        f"{prefix}_max": float(np.max(values)),
    }


def compute_run_metrics(records: List[TTCRecord]) -> Dict[str, float]:
    """Aggregate statistics over the available TTC values of a run."""
    lidar = np.array([r.ttc_lidar for r in records], dtype=np.float64)
    camera = np.array([r.ttc_camera for r in records], dtype=np.float64)
    lidar_ok = ~np.isnan(lidar)
    camera_ok = ~np.isnan(camera)
    both_ok = lidar_ok & camera_ok

    metrics: Dict[str, float] = {
        "num_records": float(len(records)),
        "num_frames_with_records": float(len({r.frame_index for r in records})),
        "lidar_available": float(np.count_nonzero(lidar_ok)),
        "camera_available": float(np.count_nonzero(camera_ok)),
    }
    metrics.update(_summary(lidar[lidar_ok], "ttc_lidar"))
    metrics.update(_summary(camera[camera_ok], "ttc_camera"))
    metrics["mean_abs_ttc_difference"] = (
        float(np.mean(np.abs(lidar[both_ok] - camera[both_ok]))) if np.any(both_ok) else float("nan")
    )
    return metrics


def run_sequence(
    frames: Iterable[SensorFrame],
    config: Optional[FusionConfig] = None,
    projection: Optional[ProjectionChain] = None,
    label: str = "run",
    metadata: Optional[Dict[str, Any]] = None,
) -> RunReport:
    """
    Process a frame sequence from a fresh kinematic state.

    Args:
        frames: Frames in temporal order
        config: Run configuration
        projection: Lidar-to-image projection
        label: Name of the run (e.g. detector/descriptor combination)
        metadata: Extra information stored on the report

    Returns:
        RunReport with all records and aggregate metrics
    """
    processor = TTCProcessor(config=config, projection=projection)
    records: List[TTCRecord] = []
    for frame in frames:
        records.extend(processor.process_frame(frame))

    return RunReport(
        label=label,
        records=records,
        metrics=compute_run_metrics(records),
        config=processor.config.to_dict(),
        metadata=dict(metadata or {}),
    )
