"""Death records parsed from the per-match CSV extracts."""

from __future__ import annotations

import math
from dataclasses import dataclass

FIELD_COUNT = 12

KILLED_BY = 0
KILLER_NAME = 1
KILLER_POSITION_X = 3
KILLER_POSITION_Y = 4
VICTIM_POSITION_X = 10
VICTIM_POSITION_Y = 11


class MalformedRecordError(ValueError):
    pass


def _clean_str(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _to_float(value: str | None) -> float | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class Death:
    killed_by: str | None = None
    killer_name: str | None = None
    killer_position_x: float | None = None
    killer_position_y: float | None = None
    victim_position_x: float | None = None
    victim_position_y: float | None = None

    @classmethod
    def from_fields(cls, fields: list[str]) -> "Death":
        """Build a record from the twelve columns of one CSV row.

        Only the weapon, the killer and both positions are kept. Empty names and
        coordinates that do not parse are treated as missing. Names and
        coordinates are stripped of surrounding whitespace first, so ``" 1.0"``
        reads as ``1.0``; ``inf`` and ``nan`` coordinates count as missing since
        no distance can be computed from them.
        """

        if len(fields) != FIELD_COUNT:
            raise MalformedRecordError(f"Invalid number of fields: {len(fields)}")

        return cls(
            killed_by=_clean_str(fields[KILLED_BY]),
            killer_name=_clean_str(fields[KILLER_NAME]),
            killer_position_x=_to_float(fields[KILLER_POSITION_X]),
            killer_position_y=_to_float(fields[KILLER_POSITION_Y]),
            victim_position_x=_to_float(fields[VICTIM_POSITION_X]),
            victim_position_y=_to_float(fields[VICTIM_POSITION_Y]),
        )

    @classmethod
    def from_csv_record(cls, record: str) -> "Death":
        return cls.from_fields(record.rstrip("\r\n").split(","))

    def distance(self) -> float | None:
        """Euclidean distance between killer and victim, if both are located."""

        coordinates = (
            self.killer_position_x,
            self.killer_position_y,
            self.victim_position_x,
            self.victim_position_y,
        )
        if any(value is None for value in coordinates):
            return None
        killer_x, killer_y, victim_x, victim_y = coordinates
        return math.hypot(killer_x - victim_x, killer_y - victim_y)
