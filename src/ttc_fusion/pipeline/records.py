"""
################################################################

File: ttc_fusion/pipeline/records.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Result containers returned by the TTC pipeline: one TTCRecord per
matched object pair per frame, and a RunReport aggregating the
records of a full frame sequence.

################################################################

"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

RECORD_COLUMNS = [
    "frame_index",
    "timestamp",
    "prev_box_id",
    "curr_box_id",
    "ttc_lidar",
    "ttc_camera",
    "lidar_points_prev",
    "lidar_points_curr",
    "keypoint_matches",
]


@dataclass
class TTCRecord:
    """TTC estimates for one matched object pair in one frame."""

    frame_index: int
    prev_box_id: int
    curr_box_id: int
    ttc_lidar: float
    ttc_camera: float
    lidar_points_prev: int = 0
    lidar_points_curr: int = 0
    keypoint_matches: int = 0
    timestamp: Optional[float] = None

    @property
    def lidar_available(self) -> bool:
        return not math.isnan(self.ttc_lidar)

    @property
    def camera_available(self) -> bool:
        return not math.isnan(self.ttc_camera)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RunReport:
    """Aggregate result of one run over a frame sequence."""

    label: str
    records: List[TTCRecord]
    metrics: Dict[str, float]
    config: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    report_files: Dict[str, str] = field(default_factory=dict)
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )

    def to_dict(self) -> Dict[str, Any]:
        """Serializing reports to a dictionary."""
        return {
            "label": self.label,
            "generated_at": self.generated_at,
            "metadata": self.metadata,
            "config": self.config,
            "metrics": self.metrics,
            "records": [record.to_dict() for record in self.records],
            "report_files": self.report_files,
        }
