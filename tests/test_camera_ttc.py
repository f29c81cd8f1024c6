import math

import numpy as np
import pytest

from ttc_fusion.estimation import compute_ttc_camera
from ttc_fusion.estimation.camera_ttc import compute_distance_ratios

from ttc_helpers import identity_matches, make_keypoint_ring


@pytest.mark.parametrize("scale", [1.05, 1.1, 0.95])
def test_uniform_scale_gives_analytic_ttc(scale):
    prev = make_keypoint_ring(80.0)
    curr = make_keypoint_ring(80.0 * scale)
    matches = identity_matches(len(prev))

    ttc = compute_ttc_camera(prev, curr, matches, frame_rate=10.0)

    assert ttc == pytest.approx(-0.1 / (1.0 - scale), rel=1e-9)


def test_ratios_skip_short_current_distances():
    prev = np.array([[0.0, 0.0], [10.0, 0.0], [200.0, 0.0]])
    curr = prev * 1.1
    matches = identity_matches(3)

    ratios = compute_distance_ratios(prev, curr, matches, min_distance=100.0)

    # pair (0, 1) is 11 px apart in the current frame and skipped
    assert len(ratios) == 2
    np.testing.assert_allclose(ratios, 1.1)


def test_fewer_than_two_matches_is_unavailable():
    prev = make_keypoint_ring(80.0)
    assert math.isnan(compute_ttc_camera(prev, prev * 1.1, np.array([[0, 0]]), 10.0))
    assert math.isnan(compute_ttc_camera(prev, prev, np.empty((0, 2)), 10.0))


def test_no_scale_change_is_unavailable():
    prev = make_keypoint_ring(80.0)
    assert math.isnan(compute_ttc_camera(prev, prev.copy(), identity_matches(len(prev)), 10.0))


def test_invalid_frame_rate_is_unavailable():
    prev = make_keypoint_ring(80.0)
    curr = make_keypoint_ring(88.0)
    assert math.isnan(compute_ttc_camera(prev, curr, identity_matches(len(prev)), 0.0))


def test_coincident_previous_keypoints_are_skipped():
    prev = np.array([[0.0, 0.0], [0.0, 0.0], [300.0, 0.0]])
    curr = np.array([[0.0, 0.0], [0.0, 150.0], [330.0, 0.0]])
    ratios = compute_distance_ratios(prev, curr, identity_matches(3), min_distance=100.0)
    assert np.all(np.isfinite(ratios))
    assert len(ratios) == 2


def test_median_ignores_minority_of_bad_correspondences():
    prev = make_keypoint_ring(80.0)
    curr = make_keypoint_ring(88.0)
    curr[0] = curr[0] + np.array([150.0, 40.0])  # mismatched keypoint

    ttc = compute_ttc_camera(prev, curr, identity_matches(len(prev)), frame_rate=10.0)

    assert ttc == pytest.approx(-0.1 / (1.0 - 1.1), rel=1e-9)


def test_even_number_of_ratios_uses_mean_of_central_pair():
    prev = np.array([[0.0, 0.0], [100.0, 0.0], [300.0, 0.0], [600.0, 0.0]])
    curr = np.array([[0.0, 0.0], [120.0, 0.0], [330.0, 0.0], [1200.0, 0.0]])
    matches = identity_matches(4)

    ratios = np.sort(compute_distance_ratios(prev, curr, matches))
    np.testing.assert_allclose(ratios, [1.05, 1.1, 1.2, 2.0, 2.16, 2.9])

    # median (1.2 + 2.0) / 2 = 1.6
    ttc = compute_ttc_camera(prev, curr, matches, frame_rate=10.0)
    assert ttc == pytest.approx(-0.1 / (1.0 - 1.6))
