"""
################################################################

File: ttc_fusion/reporting/plots.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Static PNG plots of TTC runs.

################################################################

"""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ttc_fusion.pipeline.records import RunReport


def plot_ttc_series(report: RunReport, output_path: str) -> str:
    """
    Plot lidar and camera TTC against frame index.

    Unavailable values are left as gaps.

    Args:
        report: Run report
        output_path: Path to save PNG plot

    Returns:
        Path to the saved plot
    """
    sns.set_style("whitegrid")
    fig, ax = plt.subplots(figsize=(12, 6))

    frames = np.array([r.frame_index for r in report.records], dtype=np.float64)
    lidar = np.array([r.ttc_lidar for r in report.records], dtype=np.float64)
    camera = np.array([r.ttc_camera for r in report.records], dtype=np.float64)

    ax.plot(frames, lidar, marker="o", color="#3498db", label="Lidar TTC")
    ax.plot(frames, camera, marker="s", color="#e74c3c", label="Camera TTC")
    ax.set_xlabel("Frame", fontsize=12)
    ax.set_ylabel("TTC (s)", fontsize=12)
    ax.set_title(f"Time-To-Collision: {report.label}", fontsize=16, fontweight="bold")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"[INFO] Saved TTC plot: {output_path}")
    return output_path


def plot_run_comparison(reports: Sequence[RunReport], output_path: str) -> str:
    """Bar chart of the mean lidar and camera TTC per run."""
    sns.set_style("whitegrid")
    fig, ax = plt.subplots(figsize=(12, 6))

    x = np.arange(len(reports))
    width = 0.35
    lidar = [r.metrics.get("ttc_lidar_mean", float("nan")) for r in reports]
    camera = [r.metrics.get("ttc_camera_mean", float("nan")) for r in reports]

    ax.bar(x - width / 2, lidar, width, label="Lidar", color="#3498db", edgecolor="black", linewidth=0.5)
    ax.bar(x + width / 2, camera, width, label="Camera", color="#e74c3c", edgecolor="black", linewidth=0.5)
    ax.set_ylabel("Mean TTC (s)", fontsize=12)
    ax.set_title("Mean TTC per Run", fontsize=16, fontweight="bold")
    ax.set_xticks(x)
    ax.set_xticklabels([r.label for r in reports], rotation=45, ha="right")
    ax.legend()

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"[INFO] Saved run comparison plot: {output_path}")
    return output_path
