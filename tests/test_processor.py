import math

import numpy as np
import pytest

from ttc_fusion.config import FusionConfig
from ttc_fusion.estimation import TTCModel, VelocityAndAccelerationKnown
from ttc_fusion.frame import SensorFrame
from ttc_fusion.geometry import PixelRect
from ttc_fusion.pipeline import TTCProcessor

from ttc_helpers import make_box, make_lidar_patch, make_object_frame


def _run(processor, frames):
    return [processor.process_frame(frame) for frame in frames]


def test_first_frame_produces_no_records(projection, approach_frames):
    processor = TTCProcessor(projection=projection)
    assert processor.process_frame(approach_frames[0]) == []
    assert approach_frames[0].boxes[0].num_lidar_points == 25


def test_lidar_and_camera_agree_on_approach(projection, approach_frames):
    processor = TTCProcessor(projection=projection)
    per_frame = _run(processor, approach_frames)

    records = [r for frame_records in per_frame for r in frame_records]
    assert [r.frame_index for r in records] == [1, 2, 3, 4]

    expected = [1.9, 1.8, 1.7, 1.6]
    for record, ttc in zip(records, expected):
        assert record.prev_box_id == 0 and record.curr_box_id == 0
        assert record.ttc_lidar == pytest.approx(ttc)
        assert record.ttc_camera == pytest.approx(ttc, rel=1e-6)
        assert record.lidar_points_curr == 25
        assert record.keypoint_matches == 8


def test_constant_acceleration_model_threads_state(projection, approach_frames):
    config = FusionConfig(ttc_model=TTCModel.CONSTANT_ACCELERATION)
    processor = TTCProcessor(config=config, projection=projection)
    records = [r for rs in _run(processor, approach_frames) for r in rs]

    # uniform closing speed: zero acceleration, TTC = d / v
    assert [r.ttc_lidar for r in records] == pytest.approx([1.9, 1.8, 1.7, 1.6], rel=1e-6)
    assert isinstance(processor.state, VelocityAndAccelerationKnown)
    assert processor.state.velocity == pytest.approx(5.0)
    assert processor.state.acceleration == pytest.approx(0.0, abs=1e-6)


def test_reset_starts_a_new_run(projection, approach_frames):
    processor = TTCProcessor(
        config=FusionConfig(ttc_model="constant_acceleration"), projection=projection
    )
    _run(processor, approach_frames[:3])
    processor.reset()

    assert processor.process_frame(approach_frames[3]) == []
    assert type(processor.state).__name__ == "Uninitialized"


def test_empty_lidar_cluster_only_affects_lidar_ttc(projection):
    prev = make_object_frame(0, 10.0, 60.0, with_matches=False)
    curr = make_object_frame(1, 9.5, 60.0 * 10.0 / 9.5)
    curr = SensorFrame(
        frame_index=1,
        boxes=[make_box()],
        lidar_points=np.empty((0, 4)),
        keypoints=curr.keypoints,
        keypoint_matches=curr.keypoint_matches,
    )

    processor = TTCProcessor(projection=projection)
    processor.process_frame(prev)
    (record,) = processor.process_frame(curr)

    assert math.isnan(record.ttc_lidar)
    assert not record.lidar_available
    assert record.ttc_camera == pytest.approx(1.9, rel=1e-6)


def test_unmatched_boxes_produce_no_records(projection):
    prev = make_object_frame(0, 10.0, 60.0, with_matches=False)
    curr = make_object_frame(
        1, 9.5, 63.0, boxes=[make_box(3, PixelRect(0.0, 0.0, 50.0, 50.0))]
    )

    processor = TTCProcessor(projection=projection)
    processor.process_frame(prev)
    assert processor.process_frame(curr) == []


def test_correspondences_must_reference_previous_keypoints(projection):
    prev = make_object_frame(0, 10.0, 60.0, with_matches=False, n_keypoints=4)
    curr = make_object_frame(1, 9.5, 63.0, n_keypoints=8)

    processor = TTCProcessor(projection=projection)
    processor.process_frame(prev)
    with pytest.raises(ValueError):
        processor.process_frame(curr)


def test_default_processor_uses_kitti_projection():
    processor = TTCProcessor()
    assert processor.projection.matrix.shape == (3, 4)
    assert processor.config.frame_rate == 10.0


def test_negative_previous_keypoint_index_is_rejected(projection):
    prev = make_object_frame(0, 10.0, 60.0, with_matches=False)
    curr = make_object_frame(1, 9.5, 63.0)
    matches = np.array(curr.keypoint_matches)
    matches[0, 0] = -1
    curr = SensorFrame(1, [make_box()], curr.lidar_points, curr.keypoints, matches)

    processor = TTCProcessor(projection=projection)
    processor.process_frame(prev)
    with pytest.raises(ValueError):
        processor.process_frame(curr)


# --------------------------------------------------------------------------------------
# Two objects in one frame
# --------------------------------------------------------------------------------------

LEFT_ROI = PixelRect(100.0, 200.0, 100.0, 80.0)  # centered on u=150
RIGHT_ROI = PixelRect(400.0, 200.0, 100.0, 80.0)  # centered on u=450


def _make_object_points(distance, u_center):
    points = make_lidar_patch(distance, half_width=0.2, half_height=0.1)
    # shift sideways so the patch projects around u_center
    points[:, 1] += (320.0 - u_center) * distance / 100.0
    return points


def _make_two_object_frame(frame_index, left_distance, right_distance=None):
    lidar = [_make_object_points(left_distance, 150.0)]
    if right_distance is not None:
        lidar.append(_make_object_points(right_distance, 450.0))
    return SensorFrame(
        frame_index=frame_index,
        boxes=[make_box(0, LEFT_ROI), make_box(1, RIGHT_ROI)],
        lidar_points=np.vstack(lidar),
        keypoints=np.empty((0, 2)),
    )


def test_empty_cluster_leaves_other_object_unaffected(projection):
    processor = TTCProcessor(projection=projection)
    processor.process_frame(_make_two_object_frame(0, 10.0, 20.0))
    records = processor.process_frame(_make_two_object_frame(1, 9.0))

    assert [(r.prev_box_id, r.curr_box_id) for r in records] == [(0, 0), (1, 1)]
    assert records[0].ttc_lidar == pytest.approx(0.9)
    assert records[0].lidar_points_curr == 25
    assert math.isnan(records[1].ttc_lidar)
    assert records[1].lidar_points_curr == 0


def test_kinematic_state_is_threaded_across_objects(projection):
    config = FusionConfig(ttc_model=TTCModel.CONSTANT_ACCELERATION)
    processor = TTCProcessor(config=config, projection=projection)
    processor.process_frame(_make_two_object_frame(0, 10.0, 20.0))
    left, right = processor.process_frame(_make_two_object_frame(1, 9.0, 19.5))

    # left closes at 10 m/s, right at 5 m/s; both are constant-velocity
    # estimates while the shared state is being filled
    assert left.ttc_lidar == pytest.approx(0.9)
    assert right.ttc_lidar == pytest.approx(3.9)

    # the right object's sample follows the left one's in the same state
    assert isinstance(processor.state, VelocityAndAccelerationKnown)
    assert processor.state.velocity == pytest.approx(5.0)
    assert processor.state.acceleration == pytest.approx(-50.0)
