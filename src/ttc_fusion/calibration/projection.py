"""
################################################################

File: ttc_fusion/calibration/projection.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Lidar-to-image projection chain.

The chain is the fixed product P_rect * R_rect * RT of the camera
intrinsics after rectification, the rectifying rotation and the
lidar-to-camera extrinsics. It is supplied once per run; this
module only builds and applies it, it never estimates it.

################################################################

"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

import numpy as np

# KITTI 2011_09_26 calibration (velodyne -> rectified camera 0)
KITTI_P_RECT_00 = np.array(
    [
        [7.215377e02, 0.000000e00, 6.095593e02, 0.000000e00],
        [0.000000e00, 7.215377e02, 1.728540e02, 0.000000e00],
        [0.000000e00, 0.000000e00, 1.000000e00, 0.000000e00],
    ]
)
KITTI_R_RECT_00 = np.array(
    [
        [9.999239e-01, 9.837760e-03, -7.445048e-03],
        [-9.869795e-03, 9.999421e-01, -4.278459e-03],
        [7.402527e-03, 4.351614e-03, 9.999631e-01],
    ]
)
KITTI_RT_VELO_TO_CAM = np.array(
    [
        [7.533745e-03, -9.999714e-01, -6.166020e-04, -4.069766e-03],
        [1.480249e-02, 7.280733e-04, -9.998902e-01, -7.631618e-02],
        [9.998621e-01, 7.523790e-03, 1.480755e-02, -2.717806e-01],
        [0.0, 0.0, 0.0, 1.0],
    ]
)


def _to_homogeneous_4x4(matrix: np.ndarray, name: str) -> np.ndarray:
    """Promote a 3x3 rotation or 3x4 transform to a 4x4 matrix."""
    matrix = np.asarray(matrix, dtype=np.float64)
    out = np.eye(4)
    if matrix.shape == (4, 4):
        return matrix.copy()
    if matrix.shape == (3, 3):
        out[:3, :3] = matrix
        return out
    if matrix.shape == (3, 4):
        out[:3, :] = matrix
        return out
    raise ValueError(f"{name} must be 3x3, 3x4 or 4x4, got {matrix.shape}")


@dataclass(frozen=True, eq=False)
class ProjectionChain:
    """Fixed 3x4 sensor-to-pixel projection matrix."""

    matrix: np.ndarray

    def __post_init__(self) -> None:
        matrix = np.array(self.matrix, dtype=np.float64)
        if matrix.shape != (3, 4):
            raise ValueError(f"Projection matrix must be 3x4, got {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, "matrix", matrix)

    @classmethod
    def from_matrices(
        cls, p_rect: np.ndarray, r_rect: np.ndarray, rt: np.ndarray
    ) -> "ProjectionChain":
        """
        Compose the chain from its calibration factors.

        Args:
            p_rect: 3x4 projection matrix after rectification (intrinsics)
            r_rect: 3x3 or 4x4 rectifying rotation
            rt: 3x4 or 4x4 lidar-to-camera transform (extrinsics)

        Returns:
            ProjectionChain with matrix p_rect @ r_rect @ rt
        """
        p_rect = np.asarray(p_rect, dtype=np.float64)
        if p_rect.shape != (3, 4):
            raise ValueError(f"P_rect must be 3x4, got {p_rect.shape}")
        r_rect4 = _to_homogeneous_4x4(r_rect, "R_rect")
        rt4 = _to_homogeneous_4x4(rt, "RT")
        return cls(p_rect @ r_rect4 @ rt4)

    @classmethod
    def kitti(cls) -> "ProjectionChain":
        """Projection chain of the KITTI 2011_09_26 recordings."""
        return cls.from_matrices(KITTI_P_RECT_00, KITTI_R_RECT_00, KITTI_RT_VELO_TO_CAM)

    def project(self, points: np.ndarray) -> np.ndarray:
        """
        Project 3D sensor-frame points into the image.

        Args:
            points: Array of points (N, 3) or (N, 4+); only x, y, z are used

        Returns:
            Pixel coordinates (N, 2); rows are NaN for points with
            non-positive depth
        """
        points = np.asarray(points, dtype=np.float64)
        if points.size == 0:
            return np.empty((0, 2))
        pts_hom = np.hstack((points[:, :3], np.ones((points.shape[0], 1))))
        projected = self.matrix @ pts_hom.T

        depth = projected[2, :]
        pixels = np.full((points.shape[0], 2), np.nan)
        in_front = depth > 0
        pixels[in_front] = (projected[:2, in_front] / depth[in_front]).T
        return pixels


def _read_calib_file(path: Path) -> Dict[str, np.ndarray]:
    """Parse a KITTI 'key: v1 v2 ...' calibration file."""
    values: Dict[str, np.ndarray] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if ":" not in line:
                continue
            key, val = line.split(":", 1)
            try:
                values[key.strip()] = np.array(val.split(), dtype=np.float64)
            except ValueError:
                # calib_time and similar non-numeric entries
                continue
    return values


def load_kitti_calibration(
    calib_dir: Union[str, Path], camera_id: str = "image_00"
) -> ProjectionChain:
    """
    Load a KITTI calibration folder into a ProjectionChain.

    Args:
        calib_dir: Folder with calib_velo_to_cam.txt and calib_cam_to_cam.txt
        camera_id: Camera identifier (e.g., "image_02"); the default
            "image_00" matches ProjectionChain.kitti()

    Returns:
        ProjectionChain for the requested camera
    """
    calib_dir = Path(calib_dir)
    velo_to_cam_file = calib_dir / "calib_velo_to_cam.txt"
    cam_to_cam_file = calib_dir / "calib_cam_to_cam.txt"
    for path in (velo_to_cam_file, cam_to_cam_file):
        if not path.exists():
            raise FileNotFoundError(f"Calibration file not found: {path}")

    velo_to_cam = _read_calib_file(velo_to_cam_file)
    cam_to_cam = _read_calib_file(cam_to_cam_file)

    idx = camera_id.split("_")[-1]
    required = {
        "R": velo_to_cam,
        "T": velo_to_cam,
        "R_rect_00": cam_to_cam,
        f"P_rect_{idx}": cam_to_cam,
    }
    missing = [key for key, source in required.items() if key not in source]
    if missing:
        raise ValueError(f"Calibration in {calib_dir} is missing: {', '.join(missing)}")

    rt = np.hstack(
        (velo_to_cam["R"].reshape(3, 3), velo_to_cam["T"].reshape(3, 1))
    )
    return ProjectionChain.from_matrices(
        cam_to_cam[f"P_rect_{idx}"].reshape(3, 4),
        cam_to_cam["R_rect_00"].reshape(3, 3),
        rt,
    )
