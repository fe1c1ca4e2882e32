"""Human-versus-computer game session controller."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from salvo.telemetry import get_meter, get_tracer

from .board import Board, Cell
from .player import Player
from .ship import FLEET, Coordinate, Ship
from .statistics import Statistics

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.game")
meter = get_meter("salvo.engine.game")

TURN_COUNTER = meter.create_counter(
    "salvo_engine_turns",
    unit="1",
    description="Number of turns played in a GameSession",
)


class GamePhase(Enum):
    """High-level lifecycle of a match."""

    PLACEMENT = "placement"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class TurnResult:
    """Outcome of a single ``play_turn`` call.

    ``row``/``col`` are only filled in for the computer's turn; the human
    caller already knows where it fired. ``accepted`` is False when the call
    was ignored because no game is in progress.
    """

    hit: bool
    game_over: bool
    winner: Player | None = None
    row: int | None = None
    col: int | None = None
    accepted: bool = True


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of a board for state queries."""

    grid: tuple[tuple[Cell | None, ...], ...]
    misses: tuple[Coordinate, ...]
    sunk: tuple[bool, ...]


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of the current session."""

    phase: GamePhase
    current_player: str
    winner: str | None
    remaining_ships: int
    boards: dict[str, BoardSnapshot]


class GameSession:
    """Coordinates placement, turns and win detection between two players."""

    def __init__(
        self,
        statistics: Statistics | None = None,
        rng_seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._statistics = statistics if statistics is not None else Statistics()
        self._rng = rng if rng is not None else random.Random(rng_seed)
        self._ship_lengths: tuple[int, ...] = FLEET
        self.initialize_game()

    def initialize_game(self) -> None:
        """Start a fresh match in the placement phase; statistics are kept."""
        self._player1 = Player.human()
        self._player2 = Player.computer(self._rng)
        self._current_player = self._player1
        self._phase = GamePhase.PLACEMENT
        self._current_ship_index = 0
        self._winner: Player | None = None
        logger.info("game_initialized", extra={"phase": self._phase.value})

    @property
    def player1(self) -> Player:
        return self._player1

    @property
    def player2(self) -> Player:
        return self._player2

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def statistics(self) -> Statistics:
        return self._statistics

    @property
    def ship_lengths(self) -> tuple[int, ...]:
        return tuple(self._ship_lengths)

    @property
    def remaining_ships(self) -> int:
        return len(self._ship_lengths) - self._current_ship_index

    @property
    def current_ship_length(self) -> int | None:
        if self._current_ship_index >= len(self._ship_lengths):
            return None
        return self._ship_lengths[self._current_ship_index]

    def is_placement_phase(self) -> bool:
        return self._phase is GamePhase.PLACEMENT

    def place_player_ship(self, row: int, col: int, vertical: bool) -> bool:
        """Place the next fleet ship on the human board; False leaves it pending."""
        length = self.current_ship_length
        if self._phase is not GamePhase.PLACEMENT or length is None:
            return False
        if not self._player1.board.place_ship(Ship(length), row, col, vertical):
            return False
        self._current_ship_index += 1
        logger.debug("player_ship_placed", extra={"remaining": self.remaining_ships})
        return True

    def reset_placement(self) -> bool:
        """Discard the human board and restart placement from the first ship."""
        if self._phase is not GamePhase.PLACEMENT:
            return False
        self._player1.board = Board(owner=self._player1.name)
        self._current_ship_index = 0
        logger.info("placement_reset")
        return True

    def end_placement_phase(self) -> bool:
        """Begin play once the human fleet is complete, placing the computer's fleet."""
        if self._phase is not GamePhase.PLACEMENT or self.remaining_ships > 0:
            logger.warning(
                "end_placement_rejected",
                extra={"phase": self._phase.value, "remaining": self.remaining_ships},
            )
            return False
        with tracer.start_as_current_span("game.end_placement_phase"):
            self._phase = GamePhase.IN_PROGRESS
            self._player2.board.random_placement(self._rng, self._ship_lengths)
            logger.info(
                "placement_complete",
                extra={"phase": self._phase.value, "current_player": self._current_player.name},
            )
        return True

    def play_turn(self, row: int | None = None, col: int | None = None) -> TurnResult:
        """Play exactly one attack for whoever's turn it is."""
        if self._phase is not GamePhase.IN_PROGRESS:
            logger.warning("turn_rejected_game_not_in_progress", extra={"phase": self._phase.value})
            return TurnResult(
                hit=False,
                game_over=self._phase is GamePhase.FINISHED,
                winner=self._winner,
                accepted=False,
            )

        with tracer.start_as_current_span("game.play_turn") as span:
            span.set_attribute("player", self._current_player.name)
            if self._current_player is self._player1:
                result = self._play_human_turn(row, col)
            else:
                result = self._play_computer_turn()
            span.set_attribute("hit", result.hit)
            span.set_attribute("game_over", result.game_over)
            return result

    def _play_human_turn(self, row: int | None, col: int | None) -> TurnResult:
        if row is None or col is None:
            logger.warning("turn_rejected_missing_target", extra={"player": self._player1.name})
            return TurnResult(hit=False, game_over=False, accepted=False)

        shot = self._player1.attack(self._player2.board, row, col)
        self._statistics.record_shot(shot.hit)
        self._count_turn(self._player1, shot.hit)
        if self._player2.board.all_ships_sunk():
            self._finish(self._player1)
            return TurnResult(hit=shot.hit, game_over=True, winner=self._player1)
        self._current_player = self._player2
        return TurnResult(hit=shot.hit, game_over=False)

    def _play_computer_turn(self) -> TurnResult:
        shot = self._player2.attack(self._player1.board)
        hit = self._player1.board.cell_at(shot.row, shot.col) is not None
        self._count_turn(self._player2, hit)
        if self._player1.board.all_ships_sunk():
            self._finish(self._player2)
            return TurnResult(
                hit=hit, game_over=True, winner=self._player2, row=shot.row, col=shot.col
            )
        self._current_player = self._player1
        return TurnResult(hit=hit, game_over=False, row=shot.row, col=shot.col)

    def _count_turn(self, player: Player, hit: bool) -> None:
        TURN_COUNTER.add(1, attributes={"player": player.name, "result": "hit" if hit else "miss"})
        logger.info("turn_played", extra={"player": player.name, "hit": hit})

    def _finish(self, winner: Player) -> None:
        self._phase = GamePhase.FINISHED
        self._winner = winner
        self._statistics.record_game(winner is self._player1)
        logger.info("game_finished", extra={"winner": winner.name})

    def get_state(self) -> SessionState:
        """Return an immutable view of the current session."""
        boards = {
            player.name: BoardSnapshot(
                grid=player.board.grid,
                misses=player.board.misses,
                sunk=tuple(ship.is_sunk() for ship in player.board.ships),
            )
            for player in (self._player1, self._player2)
        }
        return SessionState(
            phase=self._phase,
            current_player=self._current_player.name,
            winner=self._winner.name if self._winner else None,
            remaining_ships=self.remaining_ships,
            boards=boards,
        )
