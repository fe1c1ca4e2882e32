"""Single-player board management for the Salvo engine."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from salvo.telemetry import get_meter, get_tracer

from .ship import FLEET, Coordinate, Ship

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.board")
meter = get_meter("salvo.engine.board")

BOARD_SIZE = 10

PLACEMENT_COUNTER = meter.create_counter(
    "salvo_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

SHOT_COUNTER = meter.create_counter(
    "salvo_engine_shots",
    unit="1",
    description="Attacks received by a board",
)


@dataclass(frozen=True)
class Cell:
    """An occupied grid position: the ship and which of its segments sits here."""

    ship: Ship
    index: int


class CellState(Enum):
    """Rendering view of a single grid position."""

    EMPTY = "empty"
    SHIP = "ship"
    HIT = "hit"
    SUNK = "sunk"
    MISS = "miss"


class Board:
    """A 10×10 grid owning ship placements and recorded misses."""

    def __init__(self, owner: str = "unknown") -> None:
        self.owner = owner
        self._grid: list[list[Cell | None]] = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._ships: list[Ship] = []
        self._misses: list[Coordinate] = []

    @property
    def grid(self) -> tuple[tuple[Cell | None, ...], ...]:
        return tuple(tuple(row) for row in self._grid)

    @property
    def ships(self) -> tuple[Ship, ...]:
        return tuple(self._ships)

    @property
    def misses(self) -> tuple[Coordinate, ...]:
        return tuple(self._misses)

    @staticmethod
    def is_valid_coordinate(row: int, col: int) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def cell_at(self, row: int, col: int) -> Cell | None:
        return self._grid[row][col]

    def _span(self, length: int, row: int, col: int, vertical: bool) -> list[Coordinate]:
        if vertical:
            return [Coordinate(row + offset, col) for offset in range(length)]
        return [Coordinate(row, col + offset) for offset in range(length)]

    def can_place_ship(self, ship: Ship, row: int, col: int, vertical: bool) -> bool:
        """Determine whether every segment lands in bounds on an empty cell."""
        for coord in self._span(ship.length, row, col, vertical):
            if not self.is_valid_coordinate(coord.row, coord.col):
                return False
            if self._grid[coord.row][coord.col] is not None:
                return False
        return True

    def place_ship(self, ship: Ship, row: int, col: int, vertical: bool) -> bool:
        """Occupy the ship's span and register it, or leave the board untouched."""
        orientation = "vertical" if vertical else "horizontal"
        with tracer.start_as_current_span("board.place_ship") as span:
            span.set_attribute("ship.length", ship.length)
            span.set_attribute("ship.start.row", row)
            span.set_attribute("ship.start.col", col)
            span.set_attribute("board.owner", self.owner)
            if not self.can_place_ship(ship, row, col, vertical):
                PLACEMENT_COUNTER.add(1, attributes={"result": "failed", "owner": self.owner})
                logger.debug(
                    "ship_placement_failed",
                    extra={
                        "owner": self.owner,
                        "length": ship.length,
                        "orientation": orientation,
                        "row": row,
                        "col": col,
                    },
                )
                return False

            for index, coord in enumerate(self._span(ship.length, row, col, vertical)):
                self._grid[coord.row][coord.col] = Cell(ship, index)
            self._ships.append(ship)
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            logger.info(
                "ship_placed",
                extra={
                    "owner": self.owner,
                    "length": ship.length,
                    "orientation": orientation,
                    "row": row,
                    "col": col,
                },
            )
            return True

    def receive_attack(self, row: int, col: int) -> bool:
        """Resolve an attack and return True on a hit.

        Coordinates are not bounds-checked here; callers validate input at
        their own boundary. Repeated attacks on the same empty cell append
        repeated misses.
        """
        with tracer.start_as_current_span("board.receive_attack") as span:
            span.set_attribute("shot.row", row)
            span.set_attribute("shot.col", col)
            span.set_attribute("board.owner", self.owner)
            cell = self._grid[row][col]
            if cell is None:
                self._misses.append(Coordinate(row, col))
                span.set_attribute("shot.outcome", "miss")
                SHOT_COUNTER.add(1, attributes={"outcome": "miss", "owner": self.owner})
                logger.info("attack_miss", extra={"row": row, "col": col, "owner": self.owner})
                return False

            cell.ship.hit(cell.index)
            span.set_attribute("shot.outcome", "hit")
            SHOT_COUNTER.add(1, attributes={"outcome": "hit", "owner": self.owner})
            logger.info(
                "attack_hit",
                extra={
                    "row": row,
                    "col": col,
                    "segment": cell.index,
                    "sunk": cell.ship.is_sunk(),
                    "owner": self.owner,
                },
            )
            return True

    def all_ships_sunk(self) -> bool:
        """Check whether every registered ship is sunk (vacuously true when empty)."""
        return all(ship.is_sunk() for ship in self._ships)

    def cell_state(self, row: int, col: int) -> CellState:
        """Classify a grid position for rendering."""
        cell = self._grid[row][col]
        if cell is None:
            return CellState.MISS if Coordinate(row, col) in self._misses else CellState.EMPTY
        if cell.ship.is_sunk():
            return CellState.SUNK
        if cell.ship.is_hit_at(cell.index):
            return CellState.HIT
        return CellState.SHIP

    def random_placement(self, rng: random.Random, lengths: Iterable[int] = FLEET) -> None:
        """Place one ship per length, retrying random spots until each fits."""
        with tracer.start_as_current_span("board.random_placement") as span:
            span.set_attribute("board.owner", self.owner)
            for length in lengths:
                placed = False
                attempts = 0
                while not placed:
                    start_row = rng.randrange(BOARD_SIZE)
                    start_col = rng.randrange(BOARD_SIZE)
                    vertical = rng.random() < 0.5
                    placed = self.place_ship(Ship(length), start_row, start_col, vertical)
                    attempts += 1
                logger.debug(
                    "random_ship_placed",
                    extra={"length": length, "attempts": attempts, "owner": self.owner},
                )
