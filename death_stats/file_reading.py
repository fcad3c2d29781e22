"""Locate the per-match CSV files and stream their death records."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from death_stats.deaths import Death, MalformedRecordError

CSV_SUFFIX = ".csv"


class InputDirectoryError(RuntimeError):
    pass


def find_csv_in_dir(input_path: str | Path) -> list[Path]:
    """Return the ``*.csv`` files directly inside ``input_path``, sorted by name."""

    directory = Path(input_path)
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise InputDirectoryError(f"Error reading input path {directory}: {exc}") from exc
    return sorted(path for path in entries if path.is_file() and path.suffix == CSV_SUFFIX)


def iter_file_deaths(path: Path) -> Iterator[Death]:
    """Yield the records of one file, dropping only the lines that fail to parse.

    Each line is decoded and split on commas on its own, so a stray quote or an
    undecodable byte costs that line alone.
    """

    with path.open("rb") as handle:
        # Every extract starts with a header row.
        next(handle, None)
        for raw_line in handle:
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError:
                continue
            try:
                death = Death.from_csv_record(line)
            except MalformedRecordError:
                continue
            yield death


def iter_deaths(paths: Iterable[Path]) -> Iterator[Death]:
    """Yield every well-formed record of every file, skipping malformed lines."""

    for path in paths:
        yield from iter_file_deaths(Path(path))
