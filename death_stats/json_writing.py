"""Serialize filtered statistics into the report JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from death_stats.float_calculations import calculate_average, calculate_percentage
from death_stats.player_stats import PlayerStats
from death_stats.stats import Stats
from death_stats.weapon_stats import WeaponStats


def _player_payload(player: PlayerStats) -> dict[str, Any]:
    return {
        "deaths": player.deaths_count,
        "weapons_percentage": {
            weapon: calculate_percentage(count, player.deaths_count)
            for weapon, count in player.weapons.items()
        },
    }


def _weapon_payload(weapon: WeaponStats, total_deaths: int) -> dict[str, float]:
    return {
        "deaths_percentage": calculate_percentage(weapon.death_count, total_deaths),
        "average_distance": calculate_average(weapon.total_distance, weapon.death_count_with_distance),
    }


def build_payload(stats: Stats, padron: int) -> dict[str, Any]:
    """Report structure for ``stats``; entries keep the ranking order of the maps."""

    return {
        "padron": padron,
        "top_killers": {name: _player_payload(player) for name, player in stats.players.items()},
        "top_weapons": {
            name: _weapon_payload(weapon, stats.total_deaths) for name, weapon in stats.weapons.items()
        },
    }


def save_as_json(stats: Stats, output_path: str | Path, padron: int) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = build_payload(stats, padron)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.write("\n")
    print(f"Stats saved as JSON in {path}")
    return path
