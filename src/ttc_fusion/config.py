"""
################################################################

File: ttc_fusion/config.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Run configuration for TTC-Fusion. All thresholds used by the
association and estimation stages live in a single FusionConfig
dataclass which can be built in code or loaded from a YAML file.

Example YAML:

    frame_rate: 10.0
    ttc_model: constant_acceleration
    association:
      lidar_shrink_factor: 0.10
      iou_threshold: 0.7
    camera:
      min_keypoint_distance: 100.0
    lidar:
      lidar_intensity_sigma: 1.6

################################################################

"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ttc_fusion.constants import (
    DEFAULT_DISPLACEMENT_SIGMA,
    DEFAULT_FRAME_RATE_HZ,
    DEFAULT_IOU_THRESHOLD,
    DEFAULT_KEYPOINT_SHRINK_FACTOR,
    DEFAULT_LIDAR_DISTANCE_SIGMA,
    DEFAULT_LIDAR_INTENSITY_SIGMA,
    DEFAULT_LIDAR_SHRINK_FACTOR,
    DEFAULT_MIN_KEYPOINT_DISTANCE_PX,
)
from ttc_fusion.estimation.kinematics import TTCModel

CONFIG_SECTIONS = ("association", "camera", "lidar")


@dataclass
class FusionConfig:
    """Thresholds and model selection for one TTC run."""

    frame_rate: float = DEFAULT_FRAME_RATE_HZ
    lidar_shrink_factor: float = DEFAULT_LIDAR_SHRINK_FACTOR
    keypoint_shrink_factor: float = DEFAULT_KEYPOINT_SHRINK_FACTOR
    displacement_sigma: float = DEFAULT_DISPLACEMENT_SIGMA
    min_keypoint_distance: float = DEFAULT_MIN_KEYPOINT_DISTANCE_PX
    iou_threshold: float = DEFAULT_IOU_THRESHOLD
    unique_box_matches: bool = False
    lidar_distance_sigma: float = DEFAULT_LIDAR_DISTANCE_SIGMA
    lidar_intensity_sigma: float = DEFAULT_LIDAR_INTENSITY_SIGMA
    ttc_model: TTCModel = TTCModel.CONSTANT_VELOCITY

    def __post_init__(self) -> None:
        try:
            self.ttc_model = TTCModel(self.ttc_model)
        except ValueError as exc:
            choices = ", ".join(m.value for m in TTCModel)
            raise ValueError(
                f"Unknown ttc_model '{self.ttc_model}' (expected one of: {choices})"
            ) from exc

        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {self.frame_rate}")
        for name in ("lidar_shrink_factor", "keypoint_shrink_factor"):
            value = getattr(self, name)
            if not 0.0 <= value < 1.0:
                raise ValueError(f"{name} {value} outside bounds [0, 1)")
        if not 0.0 <= self.iou_threshold <= 1.0:
            raise ValueError(f"iou_threshold {self.iou_threshold} outside bounds [0, 1]")
        for name in (
            "displacement_sigma",
            "min_keypoint_distance",
            "lidar_distance_sigma",
            "lidar_intensity_sigma",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @property
    def dt(self) -> float:
        """Time between two frames in seconds."""
        return 1.0 / self.frame_rate

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FusionConfig":
        """
        Build a config from a flat or sectioned dictionary.

        Args:
            data: Mapping of field names to values. Values may also be
                grouped under the 'association', 'camera' and 'lidar' keys.

        Returns:
            FusionConfig instance
        """
        flat: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key in CONFIG_SECTIONS and isinstance(value, dict):
                flat.update(value)
            else:
                flat[key] = value

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(flat) - known)
        if unknown:
            raise ValueError(f"Unknown configuration key(s): {', '.join(unknown)}")
        return cls(**flat)

    def to_dict(self) -> Dict[str, Any]:
        """Serializing the config to a plain dictionary."""
        payload = asdict(self)
        payload["ttc_model"] = self.ttc_model.value
        return payload


def load_config(config_path: Union[str, Path]) -> FusionConfig:
    """Load a FusionConfig from a YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return FusionConfig.from_dict(data)


def save_config(config: FusionConfig, config_path: Union[str, Path]) -> str:
    """Write a FusionConfig to a YAML file and return its path."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False, default_flow_style=False)
    return str(path)
