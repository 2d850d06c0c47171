"""Command-line interface for stationnet."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from stationnet.config import PipelineConfig
from stationnet.loader import load_dataset
from stationnet.logging import (
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    set_global_log_level,
)
from stationnet.pipeline import Pipeline
from stationnet.render import format_table
from stationnet.utils.output_paths import (
    ensure_parent_dir,
    figure_paths_for_run,
    results_path_for_run,
)

logger = get_logger(__name__)

_UNSET = object()


def _format_duration(seconds: float) -> str:
    """Format a duration in seconds into a short human-readable string."""
    if seconds < 1.0:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes, secs = divmod(seconds, 60.0)
    return f"{int(minutes)} min {secs:.0f} s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return singular or plural word based on count."""
    if n == 1:
        return singular
    return plural if plural is not None else f"{singular}s"


def _inspect_pipeline(path: Path) -> None:
    """Load and validate the dataset named by a pipeline file.

    Prints table paths, counts, the id shift and dropped sentinels. No metrics
    are computed and nothing is written.
    """
    logger.info(f"Inspecting pipeline from: {path}")
    try:
        pipeline = Pipeline.from_file(path)
        config = pipeline.config
        logger.info("✓ Pipeline file loaded and validated")

        dataset = load_dataset(config.stations, config.routes, config.loader)
        summary = dataset.summary()

        print("\n" + "=" * 60)
        print("PIPELINE")
        print("=" * 60)
        rows: List[List[Any]] = [
            ["stations", str(config.stations)],
            ["routes", str(config.routes)],
            ["seed", "unseeded" if config.seed is None else config.seed],
            ["render", "enabled" if config.render.enabled else "disabled"],
        ]
        print(format_table(["Setting", "Value"], rows, max_col_width=60))

        print("\nDATASET")
        print("-" * 60)
        stations = summary["station_count"]
        routes = summary["route_count"]
        print(f"   {stations:,} {_plural(stations, 'station')}")
        print(f"   {routes:,} {_plural(routes, 'route')}")
        print(f"   Id shift: {summary['id_shift']:+d}")
        dropped = summary["dropped_stations"]
        if dropped:
            print(
                f"   Dropped {len(dropped)} sentinel {_plural(len(dropped), 'station')}: "
                f"{', '.join(map(str, dropped))}"
            )
        else:
            print("   No sentinel stations dropped")
        print("\n✓ Dataset is valid")

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        print(f"❌ ERROR: File not found: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect pipeline: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to inspect pipeline: {type(e).__name__}: {e}")
        sys.exit(1)


def _run_pipeline(
    path: Path,
    results_override: Optional[Path],
    no_results: bool,
    stdout: bool,
    no_render: bool = False,
    seed: Any = _UNSET,
    output_dir: Optional[Path] = None,
) -> None:
    """Run a pipeline file, print the summary and export results as JSON.

    Args:
        path: Pipeline YAML file.
        results_override: Optional explicit path for the JSON results. When
            ``None``, defaults to ``<pipeline_name>.results.json`` in the
            current directory, or under ``output_dir`` if provided.
        no_results: Whether to disable results file generation.
        stdout: Whether to also print the results JSON to stdout.
        no_render: Skip writing the layout and histogram images.
        seed: Master seed override; ``_UNSET`` keeps the pipeline file value.
        output_dir: Directory for all generated artifacts.
    """
    logger.info(f"Loading pipeline from: {path}")
    _start_time = perf_counter()

    try:
        pipeline = Pipeline.from_file(path)
        config: PipelineConfig = pipeline.config
        if seed is not _UNSET:
            config = dataclasses.replace(config, seed=seed)
        if no_render:
            config = dataclasses.replace(
                config, render=dataclasses.replace(config.render, enabled=False)
            )
        pipeline.config = config

        if config.render.enabled:
            pipeline.layout_path, pipeline.histogram_path = figure_paths_for_run(
                path, output_dir
            )

        logger.info("Starting pipeline execution")
        pipeline.run()
        logger.info("Pipeline execution completed successfully")

        assert pipeline.rendering is not None
        print(pipeline.rendering.summary)
        if pipeline.rendering.layout_path is not None:
            print(f"\n✅ Layout written to: {pipeline.rendering.layout_path}")
        if pipeline.rendering.histogram_path is not None:
            print(f"✅ Histogram written to: {pipeline.rendering.histogram_path}")

        if not no_results or stdout:
            results_dict: Dict[str, Any] = pipeline.results.to_dict()
            json_str = json.dumps(results_dict, indent=2, default=str)

            if not no_results:
                effective_output = results_path_for_run(
                    pipeline_path=path,
                    output_dir=output_dir,
                    results_override=results_override,
                )
                ensure_parent_dir(effective_output)
                logger.info(f"Writing results to: {effective_output}")
                effective_output.write_text(json_str)
                print(f"✅ Results written to: {effective_output}")

            if stdout:
                print(json_str)

        _elapsed = perf_counter() - _start_time
        logger.info(
            f"Pipeline run completed successfully in {_format_duration(_elapsed)}"
        )

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        print(f"❌ ERROR: File not found: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run pipeline: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to run pipeline: {type(e).__name__}: {e}")
        sys.exit(1)


def _seed_arg(value: str) -> Optional[int]:
    if value.lower() in ("none", "null"):
        return None
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"seed must be an integer or 'none', got {value!r}"
        ) from None


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``stationnet`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="stationnet",
        description="Analyze station/route networks.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Run a pipeline")
    run_parser.add_argument("pipeline", type=Path, help="Path to pipeline YAML")
    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help=(
            "Output directory for generated artifacts. When provided, all files"
            " are written under this folder as '<prefix>.<suffix>'."
        ),
    )
    run_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help=(
            "Export results to JSON file (default: <pipeline_name>.results.json;"
            " placed under --output when provided)"
        ),
    )
    run_parser.add_argument(
        "--no-results",
        action="store_true",
        help="Disable results file generation",
    )
    run_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print results JSON to stdout",
    )
    run_parser.add_argument(
        "--no-render",
        action="store_true",
        help="Skip the layout and histogram images",
    )
    run_parser.add_argument(
        "--seed",
        type=_seed_arg,
        default=_UNSET,
        help="Override the master seed ('none' for an unseeded run)",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a pipeline file and its input tables"
    )
    inspect_parser.add_argument("pipeline", type=Path, help="Path to pipeline YAML")

    effective_args = sys.argv[1:] if argv is None else argv

    # No arguments: show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        enable_debug_logging()
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        disable_debug_logging()

    if args.command == "run":
        _run_pipeline(
            path=args.pipeline,
            results_override=args.results,
            no_results=args.no_results,
            stdout=args.stdout,
            no_render=args.no_render,
            seed=args.seed,
            output_dir=args.output,
        )
    elif args.command == "inspect":
        _inspect_pipeline(args.pipeline)


if __name__ == "__main__":
    main()
