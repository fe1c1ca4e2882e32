"""Ship domain model for the Salvo engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate."""

    row: int
    col: int


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def is_vertical(self) -> bool:
        return self is Orientation.VERTICAL

    @classmethod
    def from_vertical(cls, vertical: bool) -> Orientation:
        return cls.VERTICAL if vertical else cls.HORIZONTAL


class ShipType(Enum):
    """Fleet classes in placement order."""

    CARRIER = "carrier"
    BATTLESHIP = "battleship"
    CRUISER = "cruiser"
    SUBMARINE = "submarine"
    DESTROYER = "destroyer"

    @property
    def length(self) -> int:
        """Return the number of contiguous cells the ship occupies."""
        return _SHIP_LENGTHS[self]


_SHIP_LENGTHS = {
    ShipType.CARRIER: 5,
    ShipType.BATTLESHIP: 4,
    ShipType.CRUISER: 3,
    ShipType.SUBMARINE: 3,
    ShipType.DESTROYER: 2,
}

FLEET: tuple[int, ...] = tuple(ship_type.length for ship_type in ShipType)


@dataclass(eq=False)
class Ship:
    """A single vessel tracking hit state per segment."""

    length: int
    _hits: list[bool] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Ship length must be positive.")
        self._hits = [False] * self.length

    @property
    def hits(self) -> tuple[bool, ...]:
        return tuple(self._hits)

    def hit(self, index: int) -> None:
        """Mark a segment as hit; indices outside the ship are ignored."""
        if 0 <= index < self.length:
            self._hits[index] = True

    def is_hit_at(self, index: int) -> bool:
        if 0 <= index < self.length:
            return self._hits[index]
        return False

    def is_sunk(self) -> bool:
        """Determine whether every segment has been hit."""
        return all(self._hits)
