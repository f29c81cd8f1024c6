"""
################################################################

File: ttc_fusion/frame/frame.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Per-frame data containers.

A SensorFrame owns the immutable arrays captured for one time
step (lidar points, keypoints, keypoint correspondences to the
previous frame). BoundingBox clusters never copy those arrays;
they hold index arrays into them, filled in by the association
stage.

################################################################

"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterator, List, Optional

import numpy as np

from ttc_fusion.geometry import PixelRect


def _empty_indices() -> np.ndarray:
    return np.empty(0, dtype=np.int64)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass
class BoundingBox:
    """
    Detected object in one frame together with the lidar points and
    keypoint correspondences associated with it.
    """

    box_id: int
    roi: PixelRect
    class_id: int = -1
    confidence: float = 0.0
    lidar_indices: np.ndarray = field(default_factory=_empty_indices)
    match_indices: np.ndarray = field(default_factory=_empty_indices)

    @property
    def num_lidar_points(self) -> int:
        return int(self.lidar_indices.size)

    @property
    def num_matches(self) -> int:
        return int(self.match_indices.size)


@dataclass
class SensorFrame:
    """Camera + lidar data captured at one time step."""

    frame_index: int
    boxes: List[BoundingBox]
    lidar_points: np.ndarray
    keypoints: np.ndarray
    keypoint_matches: Optional[np.ndarray] = None
    timestamp: Optional[float] = None

    def __post_init__(self) -> None:
        lidar = np.array(self.lidar_points, dtype=np.float64)
        if lidar.size == 0:
            lidar = np.empty((0, 4))
        if lidar.ndim != 2 or lidar.shape[1] != 4:
            raise ValueError(f"lidar_points must have shape (N, 4), got {lidar.shape}")

        keypoints = np.array(self.keypoints, dtype=np.float64)
        if keypoints.size == 0:
            keypoints = np.empty((0, 2))
        if keypoints.ndim != 2 or keypoints.shape[1] != 2:
            raise ValueError(f"keypoints must have shape (K, 2), got {keypoints.shape}")

        matches = self.keypoint_matches
        if matches is None:
            matches = np.empty((0, 2), dtype=np.int64)
        matches = np.array(matches, dtype=np.int64)
        if matches.size == 0:
            matches = np.empty((0, 2), dtype=np.int64)
        if matches.ndim != 2 or matches.shape[1] != 2:
            raise ValueError(f"keypoint_matches must have shape (M, 2), got {matches.shape}")
        if matches.size and (matches[:, 1].min() < 0 or matches[:, 1].max() >= len(keypoints)):
            raise ValueError("keypoint_matches reference keypoints outside the current frame")

        ids = [box.box_id for box in self.boxes]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate box ids in frame {self.frame_index}: {ids}")

        self.lidar_points = _frozen(lidar)
        self.keypoints = _frozen(keypoints)
        self.keypoint_matches = _frozen(matches)

    @property
    def num_lidar_points(self) -> int:
        return int(self.lidar_points.shape[0])

    def box_by_id(self, box_id: int) -> Optional[BoundingBox]:
        for box in self.boxes:
            if box.box_id == box_id:
                return box
        return None

    def lidar_points_of(self, box: BoundingBox) -> np.ndarray:
        """Lidar points (N, 4) currently assigned to box."""
        return self.lidar_points[box.lidar_indices]

    def matches_of(self, box: BoundingBox) -> np.ndarray:
        """Keypoint correspondences (M, 2) currently assigned to box."""
        return self.keypoint_matches[box.match_indices]


class FrameBuffer:
    """Ring buffer holding the most recent frames (two by default)."""

    def __init__(self, size: int = 2) -> None:
        if size < 2:
            raise ValueError(f"FrameBuffer needs room for at least two frames, got {size}")
        self._frames: Deque[SensorFrame] = deque(maxlen=size)

    def push(self, frame: SensorFrame) -> None:
        self._frames.append(frame)

    def clear(self) -> None:
        self._frames.clear()

    @property
    def current(self) -> Optional[SensorFrame]:
        return self._frames[-1] if self._frames else None

    @property
    def previous(self) -> Optional[SensorFrame]:
        return self._frames[-2] if len(self._frames) > 1 else None

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[SensorFrame]:
        return iter(self._frames)
