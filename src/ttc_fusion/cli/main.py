"""
################################################################

File: ttc_fusion/cli/main.py
Created: 2026-10-19
Created by: TTC-Fusion Authors
Last Modified: 2026-10-19
Last Modified by: TTC-Fusion Authors

#################################################################

Copyright: TTC-Fusion Authors
License: MIT License

################################################################

Command line entry point for TTC-Fusion.

################################################################

"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from ttc_fusion.calibration import ProjectionChain, load_kitti_calibration
from ttc_fusion.config import FusionConfig, load_config
from ttc_fusion.estimation import TTCModel
from ttc_fusion.io import load_sequence
from ttc_fusion.pipeline import RunReport, run_sequence
from ttc_fusion.reporting import (
    EXPORT_FORMATS,
    compare_runs,
    create_summary_report,
    export_all,
    file_stem,
    plot_run_comparison,
    plot_ttc_series,
)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ttc-fusion",
        description="TTC-Fusion: Time-To-Collision estimation from fused camera and lidar frames",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # TTC for one extracted frame sequence
  ttc-fusion run frames/

  # Constant-acceleration lidar model with KITTI calibration files
  ttc-fusion run frames/ --model constant_acceleration --calib-dir calib/

  # Compare sequences extracted with different keypoint detectors
  ttc-fusion compare frames_shitomasi_brisk/ frames_fast_orb/ --output-dir reports/
        """,
    )

    parser.add_argument(
        "mode",
        type=str,
        choices=["run", "compare"],
        help="Operation mode: 'run' for one sequence, 'compare' for several runs side by side",
    )

    parser.add_argument(
        "input_paths",
        nargs="+",
        type=str,
        help="Sequence directories of .npz frame files",
    )

    parser.add_argument("--config", type=str, help="Path to configuration YAML file")

    parser.add_argument(
        "--calib-dir",
        type=str,
        help="Directory with KITTI calib_velo_to_cam.txt and calib_cam_to_cam.txt "
        "(default: built-in KITTI 2011_09_26 matrices)",
    )

    parser.add_argument(
        "--camera-id",
        type=str,
        default="image_00",
        help="KITTI camera whose rectified projection is used "
        "(default: image_00, matching the built-in KITTI matrices)",
    )

    parser.add_argument(
        "--model",
        choices=[m.value for m in TTCModel],
        help="Lidar TTC motion model (default: constant_velocity)",
    )

    parser.add_argument("--frame-rate", type=float, help="Sensor frame rate in Hz (default: 10)")

    parser.add_argument("--max-frames", type=int, help="Maximum number of frames to process")

    parser.add_argument(
        "--output",
        choices=list(EXPORT_FORMATS) + ["all"],
        default="all",
        help="Output format (default: all)",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default="reports",
        help="Output directory for reports (default: reports)",
    )

    parser.add_argument("--no-plots", action="store_true", help="Disable plot generation")

    parser.add_argument("--label", type=str, help="Run label (default: sequence directory name)")

    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    return parser


def resolve_config(args: argparse.Namespace) -> FusionConfig:
    """Load the YAML config if given and apply CLI overrides (CLI takes precedence)."""
    config = load_config(args.config) if args.config else FusionConfig()
    overrides = config.to_dict()
    if args.model:
        overrides["ttc_model"] = args.model
    if args.frame_rate is not None:
        overrides["frame_rate"] = args.frame_rate
    return FusionConfig.from_dict(overrides)


def resolve_projection(args: argparse.Namespace) -> ProjectionChain:
    if args.calib_dir:
        return load_kitti_calibration(args.calib_dir, camera_id=args.camera_id)
    return ProjectionChain.kitti()


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    for input_path in args.input_paths:
        if not Path(input_path).exists():
            print(f"Error: Input path not found: {input_path}")
            sys.exit(1)
    if args.mode == "run" and len(args.input_paths) != 1:
        print("Error: 'run' mode takes exactly one sequence directory")
        sys.exit(1)

    print("=" * 60)
    print("TTC-Fusion: Time-To-Collision Estimation")
    print("=" * 60)
    print(f"Mode: {args.mode.upper()}")
    print(f"Input: {', '.join(args.input_paths)}")
    print(f"Output directory: {args.output_dir}")
    print()

    try:
        config = resolve_config(args)
        projection = resolve_projection(args)
        formats = EXPORT_FORMATS if args.output == "all" else (args.output,)
        include_plots = not args.no_plots

        if args.mode == "run":
            run_single(
                Path(args.input_paths[0]),
                config,
                projection,
                args.output_dir,
                formats,
                include_plots,
                args.max_frames,
                args.label,
                args.verbose,
            )
        else:
            run_comparison(
                [Path(p) for p in args.input_paths],
                config,
                projection,
                args.output_dir,
                include_plots,
                args.max_frames,
            )

    except KeyboardInterrupt:
        print("\n\nProcessing interrupted by user.")
        sys.exit(1)
    except Exception as e:  # pylint: disable=broad-except
        print(f"\nError: {e}")
        if args.verbose:
            import traceback  # pylint: disable=import-outside-toplevel

            traceback.print_exc()
        sys.exit(1)


def _run(
    sequence_dir: Path,
    config: FusionConfig,
    projection: ProjectionChain,
    max_frames: Optional[int],
    label: Optional[str],
) -> RunReport:
    frames = load_sequence(sequence_dir, max_frames=max_frames)
    return run_sequence(
        frames,
        config=config,
        projection=projection,
        label=label or sequence_dir.name,
        metadata={"sequence": str(sequence_dir), "num_frames": len(frames)},
    )


def run_single(
    sequence_dir: Path,
    config: FusionConfig,
    projection: ProjectionChain,
    output_dir: str,
    formats,
    include_plots: bool,
    max_frames: Optional[int],
    label: Optional[str],
    verbose: bool,
) -> RunReport:
    """Run TTC estimation on one sequence and export its reports."""
    print("Running TTC estimation...")
    print()

    report = _run(sequence_dir, config, projection, max_frames, label)

    os.makedirs(output_dir, exist_ok=True)
    report.report_files.update(export_all(report, output_dir, formats))
    report.report_files["summary"] = create_summary_report(report, output_dir)
    if include_plots:
        report.report_files["plot"] = plot_ttc_series(
            report, os.path.join(output_dir, f"{file_stem(report)}.png")
        )

    m = report.metrics
    print()
    print("=" * 60)
    print("TTC Estimation Complete!")
    print("=" * 60)
    print(f"\nModel: {config.ttc_model.value}")
    print(f"Object pairs processed: {int(m['num_records'])}")
    print(f"  Lidar TTC available:  {int(m['lidar_available'])}")
    print(f"  Camera TTC available: {int(m['camera_available'])}")
    print(f"  Mean lidar TTC:  {m['ttc_lidar_mean']:.3f} s")
    print(f"  Mean camera TTC: {m['ttc_camera_mean']:.3f} s")

    if verbose:
        print("\nPer-frame TTC:")
        for record in report.records:
            print(
                f"  frame {record.frame_index:4d}: lidar {record.ttc_lidar:8.3f} s, "
                f"camera {record.ttc_camera:8.3f} s"
            )

    print("\nGenerated Reports:")
    for format_name, file_path in report.report_files.items():
        print(f"  {format_name.upper()}: {file_path}")
    return report


def run_comparison(
    sequence_dirs: List[Path],
    config: FusionConfig,
    projection: ProjectionChain,
    output_dir: str,
    include_plots: bool,
    max_frames: Optional[int],
) -> List[RunReport]:
    """Run every sequence with the same config and tabulate their metrics."""
    print(f"Comparing {len(sequence_dirs)} runs...")
    print()

    reports = [_run(d, config, projection, max_frames, None) for d in sequence_dirs]
    table = compare_runs(reports)

    os.makedirs(output_dir, exist_ok=True)
    csv_path = os.path.join(output_dir, "ttc_run_comparison.csv")
    table.to_csv(csv_path, index=False)
    print(f"[INFO] Saved run comparison CSV: {csv_path}")
    if include_plots:
        plot_run_comparison(reports, os.path.join(output_dir, "ttc_run_comparison.png"))

    print()
    print("=" * 60)
    print("Run Comparison Complete!")
    print("=" * 60)
    for report in reports:
        m = report.metrics
        print(
            f"  {report.label:30s} lidar {m['ttc_lidar_mean']:8.3f} s  "
            f"camera {m['ttc_camera_mean']:8.3f} s  "
            f"|diff| {m['mean_abs_ttc_difference']:8.3f} s"
        )
    return reports


if __name__ == "__main__":
    main()
