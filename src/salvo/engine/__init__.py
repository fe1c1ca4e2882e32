"""Game rules: ships, boards, players, statistics and the session controller."""

from .board import BOARD_SIZE, Board, Cell, CellState
from .game import GamePhase, GameSession, SessionState, TurnResult
from .player import AttackStrategy, ManualAttack, Player, RandomAttack, Shot
from .ship import FLEET, Coordinate, Orientation, Ship, ShipType
from .statistics import Statistics, StatsSnapshot

__all__ = [
    "BOARD_SIZE",
    "FLEET",
    "AttackStrategy",
    "Board",
    "Cell",
    "CellState",
    "Coordinate",
    "GamePhase",
    "GameSession",
    "ManualAttack",
    "Orientation",
    "Player",
    "RandomAttack",
    "SessionState",
    "Ship",
    "ShipType",
    "Shot",
    "Statistics",
    "StatsSnapshot",
    "TurnResult",
]
