"""
################################################################

File: ttc_fusion/calibration/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Camera-lidar projection chain and KITTI calibration loading.

################################################################

"""

from ttc_fusion.calibration.projection import ProjectionChain, load_kitti_calibration

__all__ = ["ProjectionChain", "load_kitti_calibration"]
