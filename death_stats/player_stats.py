"""Per-player kill totals and weapon histogram."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PlayerStats:
    """Mutable aggregate of the deaths a player caused."""

    deaths_count: int = 0
    weapons: dict[str, int] = field(default_factory=dict)

    def add_death(self, weapon: str | None) -> None:
        self.deaths_count += 1
        if weapon:
            self.weapons[weapon] = self.weapons.get(weapon, 0) + 1

    def merge(self, other: PlayerStats) -> None:
        self.deaths_count += other.deaths_count
        for weapon, count in other.weapons.items():
            self.weapons[weapon] = self.weapons.get(weapon, 0) + count
