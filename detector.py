#!/usr/bin/env python3
"""
Deadlock Detection Analyzer
Main entry point for the detection tool.

Educational tool for checking whether a resource allocation snapshot is
safe or deadlocked.
"""

import argparse
import sys
from typing import Optional

from models.snapshot import Snapshot, InvalidDimensions
from models.result import AnalysisResult
from algorithms.detection import analyze
from analysis.report import format_summary, format_rag_view, format_load_chart
from utils.scenario_loader import (
    ScenarioLoadError, get_preset, load_scenario, preset_names, random_scenario
)
from utils.parsing import snapshot_from_text
from utils.logger import DetectionLogger


EXIT_SAFE = 0
EXIT_ERROR = 1
EXIT_DEADLOCK = 2


def run_detection(
    snapshot: Snapshot,
    logger: DetectionLogger,
    show_graph: bool = True,
    show_chart: bool = True
) -> AnalysisResult:
    """
    Run deadlock detection on a snapshot and log the report.

    Args:
        snapshot: Snapshot to analyze
        logger: Logger receiving the report
        show_graph: Include the textual resource allocation graph
        show_chart: Include the per-process load chart

    Returns:
        AnalysisResult of the run

    Raises:
        InvalidDimensions: If the snapshot dimensions are inconsistent
    """
    result = analyze(snapshot)

    logger.log(f"\n{'='*60}")
    logger.log(f"DEADLOCK DETECTION: {snapshot.name or 'custom'}")
    if snapshot.description:
        logger.log(snapshot.description)
    logger.log(f"{'='*60}")

    logger.log_snapshot(snapshot)
    logger.log_trace(result)

    logger.log(f"\n{'-'*60}")
    logger.log_result(result, format_summary(result))

    if show_graph:
        logger.log("\n" + format_rag_view(snapshot))
    if show_chart:
        logger.log("\n" + format_load_chart(snapshot, result))

    return result


def _select_snapshot(args: argparse.Namespace) -> Snapshot:
    """Build the snapshot requested on the command line."""
    if args.file:
        return load_scenario(args.file)
    if args.alloc is not None:
        return snapshot_from_text(
            args.alloc, args.req, args.avail,
            process_count=args.processes, resource_count=args.resources
        )
    if args.scenario == 'random':
        return random_scenario(args.seed)
    return get_preset(args.scenario)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the detector."""
    parser = argparse.ArgumentParser(
        description='Deadlock Detection Analyzer (Work/Finish safety check)'
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--scenario',
        choices=preset_names() + ['random'],
        help='Built-in example scenario to analyze'
    )
    source.add_argument(
        '--file',
        type=str,
        help='Path to scenario JSON file'
    )
    source.add_argument(
        '--alloc',
        type=str,
        help='Allocation rows, e.g. "1 0; 0 1" (blank or invalid cells count as 0)'
    )
    parser.add_argument(
        '--req',
        type=str,
        default='',
        help='Request rows, same format as --alloc'
    )
    parser.add_argument(
        '--avail',
        type=str,
        default='',
        help='Available units per resource type, e.g. "0 1"'
    )
    parser.add_argument(
        '--processes',
        type=str,
        default=None,
        help='Process count for --alloc input (default: number of rows)'
    )
    parser.add_argument(
        '--resources',
        type=str,
        default=None,
        help='Resource type count for --alloc input (default: number of --avail cells)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for --scenario random'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write the report to this file'
    )
    parser.add_argument(
        '--no-graph',
        action='store_true',
        help='Skip the textual resource allocation graph'
    )
    parser.add_argument(
        '--no-chart',
        action='store_true',
        help='Skip the per-process load chart'
    )

    args = parser.parse_args(argv)

    if args.seed is not None and args.scenario != 'random':
        parser.error('--seed requires --scenario random')
    if args.alloc is None and (args.req or args.avail or args.processes or args.resources):
        parser.error('--req, --avail, --processes and --resources require --alloc')

    try:
        logger = DetectionLogger(verbose=args.verbose, log_file=args.log_file)
    except OSError as e:
        print(f"[ERROR] Cannot open log file {args.log_file}: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        snapshot = _select_snapshot(args)
        result = run_detection(
            snapshot, logger, show_graph=not args.no_graph, show_chart=not args.no_chart
        )
    except ScenarioLoadError as e:
        logger.log(f"Failed to load scenario: {e}", "error")
        return EXIT_ERROR
    except InvalidDimensions as e:
        logger.log(f"Invalid dimensions: {e}", "error")
        return EXIT_ERROR
    finally:
        logger.close()

    return EXIT_SAFE if result.is_safe else EXIT_DEADLOCK


if __name__ == '__main__':
    sys.exit(main())
