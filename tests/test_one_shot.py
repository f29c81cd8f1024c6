import pytest

from ttc_fusion.estimation import compute_ttc_lidar

from ttc_helpers import make_lidar_patch


def test_lidar_ttc_one_shot():
    """
    category: one-shot test
    """
    # Object at 10 m then 9 m, sampled at 10 Hz
    ttc, _ = compute_ttc_lidar(make_lidar_patch(10.0), make_lidar_patch(9.0), frame_rate=10.0)
    assert ttc == pytest.approx(0.9)
