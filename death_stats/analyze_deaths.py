#!/usr/bin/env python3
"""Rank the deadliest players and weapons across a directory of match CSVs.

Every ``*.csv`` file in the input directory is read by a pool of worker
processes. The aggregated statistics are cut down to the top killers (with
their favourite weapons) and the top weapons, then written as JSON.

Example::

    python -m death_stats.analyze_deaths dataset/ 4 output.json
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, Optional

from death_stats.file_reading import InputDirectoryError, find_csv_in_dir
from death_stats.json_writing import save_as_json
from death_stats.stats import AggregationError, aggregate_files
from death_stats.time_tracking import Timer

PADRON = 110119

TOP_PLAYERS_COUNT = 10
TOP_WEAPONS_COUNT = 10
TOP_WEAPONS_OF_PLAYER_COUNT = 3


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("input_dir", type=Path, help="Directory containing the death CSV files")
    parser.add_argument("threads", type=_positive_int, help="Number of worker processes")
    parser.add_argument("output_file", type=Path, help="Path to write the JSON report")
    parser.add_argument(
        "--top-players",
        type=_non_negative_int,
        default=TOP_PLAYERS_COUNT,
        help="Number of killers to report (default: %(default)s)",
    )
    parser.add_argument(
        "--top-weapons",
        type=_non_negative_int,
        default=TOP_WEAPONS_COUNT,
        help="Number of weapons to report (default: %(default)s)",
    )
    parser.add_argument(
        "--top-player-weapons",
        type=_non_negative_int,
        default=TOP_WEAPONS_OF_PLAYER_COUNT,
        help="Number of weapons to report per killer (default: %(default)s)",
    )
    parser.add_argument(
        "--padron",
        type=int,
        default=PADRON,
        help="Identifier stamped into the report (default: %(default)s)",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    timer = Timer()

    try:
        csv_files = find_csv_in_dir(args.input_dir)
        stats = aggregate_files(csv_files, args.threads)
    except (InputDirectoryError, AggregationError) as exc:
        raise SystemExit(str(exc)) from exc
    timer.print_lap(f"Processing deaths ({len(csv_files)} files)")

    stats.filter_top_killers(args.top_players, args.top_player_weapons)
    timer.print_lap("Filtering top killers")

    stats.filter_top_weapons(args.top_weapons)
    timer.print_lap("Filtering top weapons")

    try:
        save_as_json(stats, args.output_file, args.padron)
    except OSError as exc:
        raise SystemExit(f"Failed to save stats as JSON: {exc}") from exc
    timer.print_lap("Saving as JSON")

    timer.print_total()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
