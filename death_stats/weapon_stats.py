"""Per-weapon kill totals and kill distances."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WeaponStats:
    death_count: int = 0
    death_count_with_distance: int = 0
    total_distance: float = 0.0

    def add_death(self, distance: float | None) -> None:
        self.death_count += 1
        if distance is not None:
            self.death_count_with_distance += 1
            self.total_distance += distance

    def merge(self, other: WeaponStats) -> None:
        self.death_count += other.death_count
        self.death_count_with_distance += other.death_count_with_distance
        self.total_distance += other.total_distance

    def average_distance(self) -> float:
        """Mean distance over the kills whose positions were known."""

        if self.death_count_with_distance == 0:
            return 0.0
        return self.total_distance / self.death_count_with_distance
