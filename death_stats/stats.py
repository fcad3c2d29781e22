"""Aggregate death records into player and weapon statistics.

Records are split into partitions, each partition is folded into its own
:class:`Stats` by a worker process, and the partial results are merged into a
single aggregate. Every merge is a plain sum, so the result does not depend on
how records were partitioned or in which order partials come back.
"""

from __future__ import annotations

import multiprocessing
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Callable, Iterable, Sequence, TypeVar

from death_stats.deaths import Death
from death_stats.file_reading import iter_deaths
from death_stats.player_stats import PlayerStats
from death_stats.top_k import retain_top_elements
from death_stats.weapon_stats import WeaponStats

T = TypeVar("T")


class InvalidWorkerCountError(ValueError):
    pass


class AggregationError(RuntimeError):
    pass


@dataclass
class Stats:
    total_deaths: int = 0
    players: dict[str, PlayerStats] = field(default_factory=dict)
    weapons: dict[str, WeaponStats] = field(default_factory=dict)

    @classmethod
    def from_deaths(cls, deaths: Iterable[Death]) -> "Stats":
        """Fold records sequentially into a fresh aggregate."""

        stats = cls()
        for death in deaths:
            stats.add_death(death)
        return stats

    def upsert_player(self, name: str) -> PlayerStats:
        player = self.players.get(name)
        if player is None:
            player = PlayerStats()
            self.players[name] = player
        return player

    def upsert_weapon(self, name: str) -> WeaponStats:
        weapon = self.weapons.get(name)
        if weapon is None:
            weapon = WeaponStats()
            self.weapons[name] = weapon
        return weapon

    def add_death(self, death: Death) -> None:
        self.total_deaths += 1
        if death.killer_name:
            self.upsert_player(death.killer_name).add_death(death.killed_by)
        if death.killed_by:
            self.upsert_weapon(death.killed_by).add_death(death.distance())

    def merge(self, other: "Stats") -> None:
        """Move everything held by ``other`` into this aggregate.

        ``other`` is left empty; its entries are adopted rather than copied.
        """

        self.total_deaths += other.total_deaths

        for name, other_player in other.players.items():
            player = self.players.get(name)
            if player is None:
                self.players[name] = other_player
            else:
                player.merge(other_player)

        for name, other_weapon in other.weapons.items():
            weapon = self.weapons.get(name)
            if weapon is None:
                self.weapons[name] = other_weapon
            else:
                weapon.merge(other_weapon)

        other.total_deaths = 0
        other.players = {}
        other.weapons = {}

    def filter_top_killers(self, player_count: int, weapon_count: int) -> None:
        """Keep the deadliest players, each with only their most used weapons."""

        retain_top_elements(self.players, player_count, value=lambda player: player.deaths_count)
        for player in self.players.values():
            retain_top_elements(player.weapons, weapon_count)

    def filter_top_weapons(self, weapon_count: int) -> None:
        retain_top_elements(self.weapons, weapon_count, value=lambda weapon: weapon.death_count)


def _merged(left: Stats, right: Stats) -> Stats:
    left.merge(right)
    return left


def _fold_records(deaths: Sequence[Death]) -> Stats:
    return Stats.from_deaths(deaths)


def _fold_files(paths: Sequence[Path]) -> Stats:
    return Stats.from_deaths(iter_deaths(paths))


def _check_worker_count(worker_count: int) -> None:
    if worker_count < 1:
        raise InvalidWorkerCountError(f"worker_count must be at least 1, got {worker_count}")


def _partition(items: Sequence[T], parts: int) -> list[Sequence[T]]:
    """Split ``items`` into at most ``parts`` contiguous, non-empty slices."""

    if not items:
        return []
    parts = min(parts, len(items))
    size, remainder = divmod(len(items), parts)
    partitions: list[Sequence[T]] = []
    start = 0
    for index in range(parts):
        end = start + size + (1 if index < remainder else 0)
        partitions.append(items[start:end])
        start = end
    return partitions


def _fold_partitions(
    fold: Callable[[Sequence[T]], Stats],
    partitions: list[Sequence[T]],
    worker_count: int,
) -> list[Stats]:
    try:
        if len(partitions) <= 1:
            return [fold(partition) for partition in partitions]
        with multiprocessing.Pool(processes=min(worker_count, len(partitions))) as pool:
            return pool.map(fold, partitions)
    except Exception as exc:
        raise AggregationError(f"Aggregation worker failed: {exc}") from exc


def _reduce(partials: list[Stats]) -> Stats:
    return reduce(_merged, partials, Stats())


def aggregate(records: Iterable[Death], worker_count: int) -> Stats:
    """Aggregate ``records`` using up to ``worker_count`` worker processes."""

    _check_worker_count(worker_count)
    deaths = records if isinstance(records, list) else list(records)
    partitions = _partition(deaths, worker_count)
    return _reduce(_fold_partitions(_fold_records, partitions, worker_count))


def aggregate_files(paths: Iterable[Path], worker_count: int) -> Stats:
    """Aggregate CSV files, letting each worker read and fold its own files."""

    _check_worker_count(worker_count)
    partitions = _partition([Path(path) for path in paths], worker_count)
    return _reduce(_fold_partitions(_fold_files, partitions, worker_count))


def filter_top(
    stats: Stats,
    player_count: int,
    weapon_count: int,
    weapon_count_per_player: int,
) -> Stats:
    """Truncate ``stats`` in place to its top players and weapons.

    ``total_deaths`` is left alone so percentages still refer to every record.
    Returns the same object for chaining.
    """

    stats.filter_top_killers(player_count, weapon_count_per_player)
    stats.filter_top_weapons(weapon_count)
    return stats
