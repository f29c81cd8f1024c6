"""
################################################################

File: ttc_fusion/pipeline/processor.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Per-frame TTC processing. TTCProcessor keeps the previous frame
and the run's kinematic state, and for every incoming frame:

1. associates the frame's lidar points with its boxes,
2. matches boxes against the previous frame,
3. for each matched pair computes lidar TTC, assigns keypoint
   correspondences to the current box and computes camera TTC.

################################################################

"""

from __future__ import annotations

import logging
from typing import List, Optional

from ttc_fusion.association import (
    cluster_keypoint_matches_with_roi,
    cluster_lidar_with_roi,
    match_bounding_boxes,
)
from ttc_fusion.calibration import ProjectionChain
from ttc_fusion.config import FusionConfig
from ttc_fusion.estimation import KinematicState, compute_ttc_camera, compute_ttc_lidar, initial_state
from ttc_fusion.frame import BoundingBox, FrameBuffer, SensorFrame
from ttc_fusion.pipeline.records import TTCRecord

logger = logging.getLogger(__name__)


class TTCProcessor:
    """
    Stateful TTC engine for one run.

    The kinematic state is shared by all object pairs of the run and is
    threaded through the pairs of a frame in box-matching order.
    """

    def __init__(
        self,
        config: Optional[FusionConfig] = None,
        projection: Optional[ProjectionChain] = None,
    ) -> None:
        """
        Initialize the processor.

        Args:
            config: Thresholds and model selection (defaults if None)
            projection: Lidar-to-image projection (KITTI if None)
        """
        self.config = config or FusionConfig()
        self.projection = projection or ProjectionChain.kitti()
        self.buffer = FrameBuffer(size=2)
        self.state: KinematicState = initial_state()

    def reset(self) -> None:
        """Start a new run: forget the previous frame and the kinematic state."""
        self.buffer.clear()
        self.state = initial_state()

    def process_frame(self, frame: SensorFrame) -> List[TTCRecord]:
        """
        Process one frame.

        Args:
            frame: Current sensor frame

        Returns:
            One TTCRecord per matched object pair (empty for the first frame)
        """
        cfg = self.config
        previous = self.buffer.current
        if previous is not None:
            self._check_correspondences(previous, frame)
        self.buffer.push(frame)

        cluster_lidar_with_roi(
            frame.boxes, frame.lidar_points, self.projection, cfg.lidar_shrink_factor
        )

        if previous is None:
            return []

        bb_matches = match_bounding_boxes(
            previous.boxes,
            frame.boxes,
            frame.keypoint_matches,
            iou_threshold=cfg.iou_threshold,
            unique_current=cfg.unique_box_matches,
        )

        records: List[TTCRecord] = []
        for prev_id, curr_id in bb_matches.items():
            prev_box = previous.box_by_id(prev_id)
            curr_box = frame.box_by_id(curr_id)
            if prev_box is None or curr_box is None:
                logger.warning(
                    "Frame %d: skipping pair (%s, %s) with unknown box id",
                    frame.frame_index,
                    prev_id,
                    curr_id,
                )
                continue
            records.append(self._process_pair(previous, frame, prev_box, curr_box))

        return records

    def _process_pair(
        self,
        previous: SensorFrame,
        current: SensorFrame,
        prev_box: BoundingBox,
        curr_box: BoundingBox,
    ) -> TTCRecord:
        """Compute lidar and camera TTC for one matched box pair."""
        cfg = self.config

        ttc_lidar, self.state = compute_ttc_lidar(
            previous.lidar_points_of(prev_box),
            current.lidar_points_of(curr_box),
            cfg.frame_rate,
            self.state,
            cfg.ttc_model,
            distance_sigma=cfg.lidar_distance_sigma,
            intensity_sigma=cfg.lidar_intensity_sigma,
        )

        cluster_keypoint_matches_with_roi(
            curr_box,
            previous.keypoints,
            current.keypoints,
            current.keypoint_matches,
            shrink_factor=cfg.keypoint_shrink_factor,
            displacement_sigma=cfg.displacement_sigma,
        )
        ttc_camera = compute_ttc_camera(
            previous.keypoints,
            current.keypoints,
            current.matches_of(curr_box),
            cfg.frame_rate,
            min_distance=cfg.min_keypoint_distance,
        )

        logger.debug(
            "Frame %d pair (%d -> %d): TTC lidar %.3f s, camera %.3f s",
            current.frame_index,
            prev_box.box_id,
            curr_box.box_id,
            ttc_lidar,
            ttc_camera,
        )
        return TTCRecord(
            frame_index=current.frame_index,
            prev_box_id=prev_box.box_id,
            curr_box_id=curr_box.box_id,
            ttc_lidar=float(ttc_lidar),
            ttc_camera=float(ttc_camera),
            lidar_points_prev=prev_box.num_lidar_points,
            lidar_points_curr=curr_box.num_lidar_points,
            keypoint_matches=curr_box.num_matches,
            timestamp=current.timestamp,
        )

    @staticmethod
    def _check_correspondences(previous: SensorFrame, current: SensorFrame) -> None:
        matches = current.keypoint_matches
        if matches.size and (
            matches[:, 0].min() < 0 or matches[:, 0].max() >= previous.keypoints.shape[0]
        ):
            raise ValueError(
                f"Frame {current.frame_index}: keypoint_matches reference keypoints "
                f"outside the previous frame"
            )
