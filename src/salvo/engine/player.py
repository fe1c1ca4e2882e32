"""Players and their attack strategies."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .board import BOARD_SIZE, Board
from .ship import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shot:
    """Where an attack landed and whether it struck a ship."""

    row: int
    col: int
    hit: bool

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.row, self.col)


class AttackStrategy(ABC):
    """Decides how a player fires at an opposing board."""

    @abstractmethod
    def attack(self, target: Board, row: int | None = None, col: int | None = None) -> Shot:
        """Fire once at ``target`` and report the outcome."""


class ManualAttack(AttackStrategy):
    """Fires exactly where the caller aims."""

    def attack(self, target: Board, row: int | None = None, col: int | None = None) -> Shot:
        if row is None or col is None:
            raise ValueError("Manual attacks need a row and column.")
        return Shot(row, col, target.receive_attack(row, col))


class RandomAttack(AttackStrategy):
    """Picks uniformly random cells, skipping ones already recorded as misses.

    Previously hit cells are not excluded, so an unsunk segment may be struck
    again to no further effect.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def choose_target(self, target: Board) -> Coordinate:
        missed = set(target.misses)
        while True:
            coord = Coordinate(self._rng.randrange(BOARD_SIZE), self._rng.randrange(BOARD_SIZE))
            if coord not in missed:
                return coord

    def attack(self, target: Board, row: int | None = None, col: int | None = None) -> Shot:
        coord = self.choose_target(target)
        return Shot(coord.row, coord.col, target.receive_attack(coord.row, coord.col))


class Player:
    """Pairs a board with an attack strategy fixed for the player's lifetime."""

    def __init__(self, name: str, strategy: AttackStrategy) -> None:
        self.name = name
        self._strategy = strategy
        self._board = Board(owner=name)

    @classmethod
    def human(cls, name: str = "player") -> Player:
        return cls(name, ManualAttack())

    @classmethod
    def computer(cls, rng: random.Random | None = None, name: str = "computer") -> Player:
        return cls(name, RandomAttack(rng))

    @property
    def board(self) -> Board:
        return self._board

    @board.setter
    def board(self, new_board: Board) -> None:
        logger.debug("board_replaced", extra={"owner": self.name})
        self._board = new_board

    @property
    def is_computer(self) -> bool:
        return isinstance(self._strategy, RandomAttack)

    def attack(self, target: Board, row: int | None = None, col: int | None = None) -> Shot:
        return self._strategy.attack(target, row, col)

    def __repr__(self) -> str:
        return f"Player(name={self.name!r}, computer={self.is_computer})"
