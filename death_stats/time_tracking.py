"""Stage timing printed while the analyzer runs."""

from __future__ import annotations

import sys
import time
from typing import TextIO


class Timer:
    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.start = time.perf_counter()
        self.last_lap = self.start

    def lap(self) -> float:
        """Seconds since the previous lap (or since the timer was created)."""

        now = time.perf_counter()
        elapsed = now - self.last_lap
        self.last_lap = now
        return elapsed

    def total(self) -> float:
        return time.perf_counter() - self.start

    def print_lap(self, message: str) -> None:
        print(f"{message}: {self.lap():.2f}s", file=self.stream or sys.stdout)

    def print_total(self) -> None:
        print(f"Total: {self.total():.2f}s", file=self.stream or sys.stdout)
