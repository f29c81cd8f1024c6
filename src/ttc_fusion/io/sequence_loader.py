"""
################################################################

File: ttc_fusion/io/sequence_loader.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Loading and saving pre-extracted sensor frames.

A sequence is a directory of ``*.npz`` files, one per frame, read in
file-name order. Each file holds:

- boxes     (B, 5) [id, x, y, w, h], optionally 7 columns with
            class id and confidence appended
- lidar     (N, 4) [x, y, z, reflectivity] in the lidar frame
- keypoints (K, 2) pixel positions
- matches   (M, 2) [previous keypoint index, current keypoint index]
            (may be absent for the first frame)
- timestamp optional scalar, seconds

################################################################

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from ttc_fusion.frame import BoundingBox, SensorFrame
from ttc_fusion.geometry import PixelRect

logger = logging.getLogger(__name__)

FRAME_SUFFIX = ".npz"


def _boxes_from_array(boxes: np.ndarray, path: Path) -> List[BoundingBox]:
    boxes = np.asarray(boxes, dtype=np.float64)
    if boxes.size == 0:
        return []
    if boxes.ndim != 2 or boxes.shape[1] not in (5, 7):
        raise ValueError(f"{path}: boxes must have shape (B, 5) or (B, 7), got {boxes.shape}")

    result = []
    for row in boxes:
        roi = PixelRect(float(row[1]), float(row[2]), float(row[3]), float(row[4]))
        class_id = int(row[5]) if boxes.shape[1] == 7 else -1
        confidence = float(row[6]) if boxes.shape[1] == 7 else 0.0
        result.append(BoundingBox(int(row[0]), roi, class_id=class_id, confidence=confidence))
    return result


def _boxes_to_array(boxes: List[BoundingBox]) -> np.ndarray:
    if not boxes:
        return np.empty((0, 7))
    return np.array(
        [
            [b.box_id, b.roi.x, b.roi.y, b.roi.width, b.roi.height, b.class_id, b.confidence]
            for b in boxes
        ],
        dtype=np.float64,
    )


def load_frame(path: Union[str, Path], frame_index: int = 0) -> SensorFrame:
    """
    Load a single frame file.

    Args:
        path: Path to the .npz file
        frame_index: Index assigned to the frame within its sequence

    Returns:
        SensorFrame with empty lidar/box associations
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Frame file not found: {path}")

    with np.load(path, allow_pickle=False) as data:
        missing = [key for key in ("boxes", "lidar", "keypoints") if key not in data.files]
        if missing:
            raise ValueError(f"{path}: missing arrays {missing}")
        boxes = _boxes_from_array(data["boxes"], path)
        lidar = np.array(data["lidar"], dtype=np.float64)
        keypoints = np.array(data["keypoints"], dtype=np.float64)
        matches = np.array(data["matches"], dtype=np.int64) if "matches" in data.files else None
        timestamp = float(data["timestamp"]) if "timestamp" in data.files else None

    return SensorFrame(
        frame_index=frame_index,
        boxes=boxes,
        lidar_points=lidar,
        keypoints=keypoints,
        keypoint_matches=matches,
        timestamp=timestamp,
    )


def load_sequence(path: Union[str, Path], max_frames: Optional[int] = None) -> List[SensorFrame]:
    """
    Load all frames of a sequence directory in file-name order.

    Args:
        path: Directory containing one .npz file per frame
        max_frames: Load at most this many frames

    Returns:
        List of SensorFrame, frame_index counting from 0
    """
    path = Path(path)
    if not path.is_dir():
        raise FileNotFoundError(f"Sequence directory not found: {path}")

    files = sorted(p for p in path.iterdir() if p.suffix == FRAME_SUFFIX)
    if max_frames is not None:
        files = files[:max_frames]
    if not files:
        raise ValueError(f"No {FRAME_SUFFIX} frame files found in {path}")

    frames = [load_frame(p, frame_index=i) for i, p in enumerate(files)]
    logger.info("Loaded %d frames from %s", len(frames), path)
    return frames


def save_frame(frame: SensorFrame, path: Union[str, Path]) -> str:
    """
    Write a frame in the sequence file format.

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    arrays = {
        "boxes": _boxes_to_array(frame.boxes),
        "lidar": np.asarray(frame.lidar_points),
        "keypoints": np.asarray(frame.keypoints),
        "matches": np.asarray(frame.keypoint_matches),
    }
    if frame.timestamp is not None:
        arrays["timestamp"] = np.asarray(frame.timestamp, dtype=np.float64)
    with open(path, "wb") as f:
        np.savez(f, **arrays)
    return str(path)
