import ttc_fusion
from ttc_fusion.pipeline import run_sequence

from ttc_helpers import make_approach_sequence


def test_package_exports():
    """
    category: smoke test
    """
    assert ttc_fusion.__version__ == "0.1.0"
    for name in ttc_fusion.__all__:
        assert hasattr(ttc_fusion, name)


def test_run_sequence_smoke(projection):
    """
    category: smoke test
    """
    frames = make_approach_sequence([10.0, 9.8, 9.6])

    report = run_sequence(frames, projection=projection, label="smoke")

    # Smoke tests only care that the pipeline finished without crashing.
    assert report is not None
    assert report.records
