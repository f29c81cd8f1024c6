"""
################################################################

File: ttc_fusion/pipeline/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Frame-by-frame TTC pipeline and run aggregation.

################################################################

"""

from ttc_fusion.pipeline.records import RunReport, TTCRecord, RECORD_COLUMNS
from ttc_fusion.pipeline.processor import TTCProcessor
from ttc_fusion.pipeline.runner import compute_run_metrics, run_sequence

__all__ = [
    "RunReport",
    "TTCRecord",
    "RECORD_COLUMNS",
    "TTCProcessor",
    "compute_run_metrics",
    "run_sequence",
]
