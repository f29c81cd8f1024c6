import pytest

from ttc_fusion.config import FusionConfig
from ttc_fusion.pipeline import run_sequence

from ttc_helpers import make_approach_sequence


@pytest.mark.parametrize("step", [0.2, 0.5, 1.0])
def test_constant_closing_speed_pattern(projection, step):
    """
    category: pattern test
    justification: For any constant closing speed both sensors must report
                   TTC = d_curr * dT / step on every frame.
    """
    distances = [12.0 - i * step for i in range(4)]
    report = run_sequence(make_approach_sequence(distances), projection=projection)

    expected = [d * 0.1 / step for d in distances[1:]]
    assert [r.ttc_lidar for r in report.records] == pytest.approx(expected)
    assert [r.ttc_camera for r in report.records] == pytest.approx(expected, rel=1e-6)


@pytest.mark.parametrize("frame_rate", [5.0, 10.0, 20.0])
def test_ttc_scales_with_frame_interval_pattern(projection, frame_rate):
    """
    category: pattern test
    justification: The same per-frame geometry at a different frame rate only
                   rescales the TTC by the frame interval.
    """
    config = FusionConfig(frame_rate=frame_rate)
    report = run_sequence(make_approach_sequence([10.0, 9.0]), config=config, projection=projection)
    (record,) = report.records
    assert record.ttc_lidar == pytest.approx(9.0 / frame_rate)
