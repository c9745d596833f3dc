"""CLI for running a simulation from a properties or JSON settings file."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from .config import SimulationSettings, load_settings
from .simulation import Simulation
from .statistics import StatisticsSummary

logger = logging.getLogger(__name__)


def print_settings(settings: SimulationSettings) -> None:
    for key, value in settings.as_properties().items():
        print(f"{key}: {value}")


def print_summary(summary: StatisticsSummary) -> None:
    if summary.total_passengers == 0:
        print("No passengers in the simulation.")
        return
    print(f"Average Time: {summary.average_time}")
    print(f"Longest Time: {summary.longest_time}")
    print(f"Shortest Time: {summary.shortest_time}")


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="liftsim", description=__doc__)
    parser.add_argument(
        "config",
        type=Path,
        nargs="?",
        help="Path to a .properties or .json settings file (defaults apply when omitted)",
    )
    parser.add_argument("--seed", type=int, help="Seed for the shared random source")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write settings and summary statistics as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    if args.seed is not None:
        settings = settings.model_copy(update={"random_seed": args.seed})

    print_settings(settings)
    simulation = Simulation.from_settings(settings)
    summary = simulation.run()
    logger.info(
        "Simulated %d ticks, %d passengers still waiting",
        simulation.current_time,
        simulation.building.waiting_count(),
    )
    print_summary(summary)

    save_results(
        args.output,
        {
            "settings": settings.as_properties(),
            "ticks": simulation.current_time,
            "summary": asdict(summary),
        },
    )
    if args.output:
        print(f"Saved results to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
