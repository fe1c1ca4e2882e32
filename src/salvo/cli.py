"""Command-line driver for playing Salvo against the computer."""

from __future__ import annotations

import argparse
import random
from typing import Sequence

from salvo.config import load_session_config
from salvo.engine.board import BOARD_SIZE, Board, CellState
from salvo.engine.game import GamePhase, GameSession, TurnResult
from salvo.engine.ship import Coordinate, Orientation, ShipType
from salvo.engine.statistics import Statistics
from salvo.telemetry import init_telemetry

ROW_LABELS = "ABCDEFGHIJ"

OWN_SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.SHIP: "S",
    CellState.HIT: "X",
    CellState.SUNK: "#",
    CellState.MISS: "o",
}
ENEMY_SYMBOLS = {**OWN_SYMBOLS, CellState.SHIP: "."}

SHIP_NAMES = tuple(ship_type.name.title() for ship_type in ShipType)


class QuitGame(Exception):
    """Raised when the user asks to leave."""


class ResetRequested(Exception):
    """Raised when the user asks to restart ship placement."""


def coordinate_from_input(text: str) -> Coordinate:
    """Parse ``A5`` style or ``3 7`` style input into an in-bounds coordinate."""
    cleaned = text.strip().upper()
    if not cleaned:
        raise ValueError("Empty coordinate.")
    if cleaned[0].isalpha():
        if cleaned[0] not in ROW_LABELS:
            raise ValueError("Row must be between A and J.")
        row = ROW_LABELS.index(cleaned[0])
        try:
            col = int(cleaned[1:]) - 1
        except ValueError as exc:
            raise ValueError("Column must be a number between 1 and 10.") from exc
    else:
        parts = cleaned.split()
        if len(parts) != 2:
            raise ValueError("Use formats like A5 or '3 7'.")
        try:
            row, col = map(int, parts)
        except ValueError as exc:
            raise ValueError("Row and column must be numbers.") from exc
    if not Board.is_valid_coordinate(row, col):
        raise ValueError("Coordinates must be within the 10x10 board.")
    return Coordinate(row, col)


def label(row: int, col: int) -> str:
    return f"{ROW_LABELS[row]}{col + 1}"


def format_board(board: Board, show_ships: bool) -> str:
    symbols = OWN_SYMBOLS if show_ships else ENEMY_SYMBOLS
    header = "    " + " ".join(f"{col + 1:>2}" for col in range(BOARD_SIZE))
    rows = [header]
    for row in range(BOARD_SIZE):
        cells = [f"{symbols[board.cell_state(row, col)]:>2}" for col in range(BOARD_SIZE)]
        rows.append(f"{ROW_LABELS[row]} |" + " ".join(cells))
    return "\n".join(rows)


def format_stats(statistics: Statistics) -> str:
    stats = statistics.get_stats()
    return (
        f"Games played: {stats.games_played}  Wins: {stats.wins}  "
        f"Losses: {stats.losses}  Hit accuracy: {stats.hit_accuracy}%"
    )


def describe_player_turn(session: GameSession, target: Coordinate, result: TurnResult) -> str:
    where = label(target.row, target.col)
    if not result.hit:
        return f"You fired at {where}: miss."
    cell = session.player2.board.cell_at(target.row, target.col)
    if cell is not None and cell.ship.is_sunk():
        return f"You fired at {where}: you sunk a ship!"
    return f"You fired at {where}: hit!"


def describe_computer_turn(session: GameSession, result: TurnResult) -> str:
    if result.row is None or result.col is None:
        return "Computer did not fire."
    where = label(result.row, result.col)
    if not result.hit:
        return f"Computer fired at {where}: missed."
    cell = session.player1.board.cell_at(result.row, result.col)
    if cell is not None and cell.ship.is_sunk():
        return f"Computer fired at {where}: it sunk your ship!"
    return f"Computer fired at {where}: hit!"


def _prompt(message: str) -> str:
    raw = input(message).strip()
    if raw.lower() == "q":
        raise QuitGame
    return raw


def _prompt_orientation(name: str, length: int) -> Orientation:
    while True:
        raw = _prompt(f"Place your {name} (length {length}). Orientation [H/V, r=reset]: ").upper()
        if raw == "R":
            raise ResetRequested
        if raw in {"H", "HOR", "HORIZONTAL"}:
            return Orientation.HORIZONTAL
        if raw in {"V", "VER", "VERTICAL"}:
            return Orientation.VERTICAL
        print("Please enter H for horizontal or V for vertical.")


def manual_ship_placement(session: GameSession) -> None:
    while True:
        length = session.current_ship_length
        if length is None:
            return
        print("\nCurrent layout:")
        print(format_board(session.player1.board, show_ships=True))
        try:
            name = SHIP_NAMES[len(session.ship_lengths) - session.remaining_ships]
            orientation = _prompt_orientation(name, length)
            start_raw = _prompt("Enter starting coordinate (e.g., A1) or 'r' to reset: ")
            if start_raw.lower() == "r":
                raise ResetRequested
        except ResetRequested:
            session.reset_placement()
            print("Ship placement reset. Place your ships!")
            continue
        try:
            start = coordinate_from_input(start_raw)
        except ValueError as exc:
            print(f"Invalid coordinate: {exc}")
            continue
        if not session.place_player_ship(start.row, start.col, orientation.is_vertical):
            print("Ship cannot be placed there (out of bounds or overlaps). Try again.")
            continue
        if session.remaining_ships:
            print(f"Place your {session.remaining_ships} remaining ship(s).")


def auto_ship_placement(session: GameSession, rng: random.Random) -> None:
    while session.remaining_ships > 0:
        session.place_player_ship(
            rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE), rng.random() < 0.5
        )


def _prompt_for_target() -> Coordinate:
    while True:
        raw = _prompt("Enter target coordinate (e.g., A5) or 'q' to quit: ")
        try:
            return coordinate_from_input(raw)
        except ValueError as exc:
            print(f"Invalid input: {exc}")


def play_game(session: GameSession, auto_place: bool, rng: random.Random) -> None:
    session.initialize_game()
    if auto_place:
        auto_ship_placement(session, rng)
        print("\nYour ships have been positioned automatically.")
    else:
        manual_ship_placement(session)
    session.end_placement_phase()
    print("All ships placed. Attack the enemy's board!")

    while session.phase is GamePhase.IN_PROGRESS:
        print("\nYour Board:")
        print(format_board(session.player1.board, show_ships=True))
        print("\nEnemy Waters:")
        print(format_board(session.player2.board, show_ships=False))

        target = _prompt_for_target()
        result = session.play_turn(target.row, target.col)
        print(describe_player_turn(session, target, result))
        if result.game_over:
            break

        result = session.play_turn()
        print(describe_computer_turn(session, result))

    if session.winner is session.player1:
        print("\nCongratulations! You won!")
    else:
        print("\nGame over. Computer wins.")
    print(format_stats(session.statistics))


def _prompt_rematch() -> bool:
    while True:
        raw = input("Play again? [y/N]: ").strip().lower()
        if raw in {"y", "yes"}:
            return True
        if raw in {"", "n", "no", "q"}:
            return False
        print("Please answer with 'y' or 'n'.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Salvo (Battleship) against the computer.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--auto-place",
        action="store_true",
        default=None,
        help="Place your fleet randomly instead of prompting.",
    )
    return parser


def new_session(seed: int | None) -> tuple[GameSession, random.Random]:
    """Build a session that draws from the same random stream as the CLI."""
    rng = random.Random(seed)
    return GameSession(statistics=Statistics(), rng=rng), rng


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    config = load_session_config().model_copy(
        update={
            key: value
            for key, value in {"rng_seed": args.seed, "auto_place": args.auto_place}.items()
            if value is not None
        }
    )
    init_telemetry(log_level=config.log_level)

    session, rng = new_session(config.rng_seed)
    print("Welcome to Salvo!")
    try:
        while True:
            play_game(session, config.auto_place, rng)
            if not _prompt_rematch():
                break
    except (QuitGame, EOFError):
        print("\nGoodbye!")


if __name__ == "__main__":
    main()
