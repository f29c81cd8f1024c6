"""
################################################################

File: ttc_fusion/reporting/__init__.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Report export (CSV, JSON, YAML, text) and plotting for TTC runs.

################################################################

"""

from ttc_fusion.reporting.exporters import (
    EXPORT_FORMATS,
    compare_runs,
    create_summary_report,
    export_all,
    export_csv,
    export_json,
    export_yaml,
    file_stem,
    records_to_dataframe,
)
from ttc_fusion.reporting.plots import plot_run_comparison, plot_ttc_series

__all__ = [
    "EXPORT_FORMATS",
    "compare_runs",
    "create_summary_report",
    "export_all",
    "export_csv",
    "export_json",
    "export_yaml",
    "file_stem",
    "records_to_dataframe",
    "plot_run_comparison",
    "plot_ttc_series",
]
