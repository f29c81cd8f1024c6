"""
################################################################

File: ttc_fusion/association/bbox_matcher.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Bounding-box matching between consecutive frames.

Every previous box is paired with the current box of highest
Intersection-over-Union when that overlap exceeds a threshold.
The scan is greedy per previous box, so two previous boxes may
map to the same current box unless unique_current is requested.

################################################################

"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ttc_fusion.constants import DEFAULT_IOU_THRESHOLD
from ttc_fusion.frame import BoundingBox
from ttc_fusion.geometry import compute_iou

logger = logging.getLogger(__name__)


def _best_current_match(
    prev_box: BoundingBox, curr_boxes: Sequence[BoundingBox]
) -> Tuple[Optional[int], float]:
    """Return (current box id, IoU) of the first box with maximal overlap."""
    max_iou = -np.inf
    best_id: Optional[int] = None
    for curr_box in curr_boxes:
        iou = compute_iou(prev_box.roi, curr_box.roi)
        if iou > max_iou:
            max_iou = iou
            best_id = curr_box.box_id
    return best_id, float(max_iou)


def match_bounding_boxes(
    prev_boxes: Sequence[BoundingBox],
    curr_boxes: Sequence[BoundingBox],
    keypoint_matches: Optional[np.ndarray] = None,
    iou_threshold: float = DEFAULT_IOU_THRESHOLD,
    unique_current: bool = False,
) -> Dict[int, int]:
    """
    Associate bounding boxes of the previous frame with the current frame.

    Args:
        prev_boxes: Boxes of the previous frame
        curr_boxes: Boxes of the current frame
        keypoint_matches: Keypoint correspondences of the frame pair;
            accepted for interface compatibility, overlap alone decides
        iou_threshold: Minimum IoU (exclusive) for a pair to be recorded
        unique_current: Keep only the best-overlapping previous box for
            each current box

    Returns:
        Mapping previous box id -> current box id, in previous-box order
    """
    del keypoint_matches

    candidates: Dict[int, Tuple[int, float]] = {}
    for prev_box in prev_boxes:
        best_id, best_iou = _best_current_match(prev_box, curr_boxes)
        if best_id is not None and best_iou > iou_threshold:
            candidates[prev_box.box_id] = (best_id, best_iou)

    if unique_current:
        winners: Dict[int, Tuple[int, float]] = {}
        for prev_id, (curr_id, iou) in candidates.items():
            if curr_id not in winners or iou > winners[curr_id][1]:
                winners[curr_id] = (prev_id, iou)
        kept = {prev_id for prev_id, _ in winners.values()}
        candidates = {k: v for k, v in candidates.items() if k in kept}

    matches = {prev_id: curr_id for prev_id, (curr_id, _) in candidates.items()}
    logger.debug("Matched %d of %d previous boxes", len(matches), len(prev_boxes))
    return matches
