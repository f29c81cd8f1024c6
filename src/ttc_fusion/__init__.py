"""
################################################################

File: ttc_fusion/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

TTC-Fusion: Time-To-Collision estimation for a preceding object from
fused camera keypoints and lidar points.

################################################################

"""

__version__ = "0.1.0"
__author__ = "TTC-Fusion Authors"

from ttc_fusion.calibration import ProjectionChain, load_kitti_calibration
from ttc_fusion.config import FusionConfig, load_config, save_config
from ttc_fusion.estimation import TTCModel, compute_ttc_camera, compute_ttc_lidar
from ttc_fusion.frame import BoundingBox, SensorFrame
from ttc_fusion.geometry import PixelRect
from ttc_fusion.pipeline import RunReport, TTCProcessor, TTCRecord, run_sequence

__all__ = [
    "ProjectionChain",
    "load_kitti_calibration",
    "FusionConfig",
    "load_config",
    "save_config",
    "TTCModel",
    "compute_ttc_camera",
    "compute_ttc_lidar",
    "BoundingBox",
    "SensorFrame",
    "PixelRect",
    "RunReport",
    "TTCProcessor",
    "TTCRecord",
    "run_sequence",
]
