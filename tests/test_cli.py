"""Tests for the terminal front end."""

from __future__ import annotations

import itertools

import pytest

from salvo import cli
from salvo.config import load_session_config
from salvo.engine.board import Board
from salvo.engine.game import GameSession, TurnResult
from salvo.engine.ship import Coordinate, Ship
from salvo.engine.statistics import Statistics


@pytest.mark.parametrize(
    ("text", "expected"),
    [("A1", Coordinate(0, 0)), ("j10", Coordinate(9, 9)), ("3 7", Coordinate(3, 7))],
)
def test_coordinate_from_input(text: str, expected: Coordinate) -> None:
    assert cli.coordinate_from_input(text) == expected


@pytest.mark.parametrize("text", ["", "K1", "A11", "A", "1 2 3", "x y"])
def test_coordinate_from_input_rejects_bad_values(text: str) -> None:
    with pytest.raises(ValueError):
        cli.coordinate_from_input(text)


def test_format_board_hides_enemy_ships() -> None:
    board = Board()
    board.place_ship(Ship(2), 0, 0, False)
    board.receive_attack(0, 0)
    board.receive_attack(1, 1)

    own = cli.format_board(board, show_ships=True).splitlines()
    enemy = cli.format_board(board, show_ships=False).splitlines()
    assert own[1].split("|")[1].split()[:2] == ["X", "S"]
    assert enemy[1].split("|")[1].split()[:2] == ["X", "."]
    assert enemy[2].split("|")[1].split()[1] == "o"


def test_format_stats() -> None:
    stats = Statistics()
    stats.record_shot(True)
    stats.record_shot(False)
    assert "Hit accuracy: 50.00%" in cli.format_stats(stats)


def test_manual_placement_with_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(
        ["H", "A1", "r", "H", "A1", "V", "B1", "H", "A6", "H", "C2", "H", "E2"]
    )
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))
    session = GameSession(rng_seed=1)

    cli.manual_ship_placement(session)

    assert session.remaining_ships == 0
    assert [ship.length for ship in session.player1.board.ships] == [5, 4, 3, 3, 2]


def test_main_plays_a_full_auto_placed_game(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    for name in ("SALVO_RNG_SEED", "SALVO_AUTO_PLACE", "SALVO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    load_session_config.cache_clear()
    monkeypatch.setattr(cli, "init_telemetry", lambda **_: None)

    targets = itertools.cycle(
        f"{row} {col}" for row in range(10) for col in range(10)
    )

    def fake_input(prompt: str = "") -> str:
        if prompt.startswith("Play again"):
            return "n"
        return next(targets)

    monkeypatch.setattr("builtins.input", fake_input)
    cli.main(["--seed", "8", "--auto-place"])

    out = capsys.readouterr().out
    assert "Games played: 1" in out
    assert ("You won" in out) or ("Computer wins" in out)
    load_session_config.cache_clear()


def test_quit_during_placement(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("SALVO_AUTO_PLACE", raising=False)
    load_session_config.cache_clear()
    monkeypatch.setattr(cli, "init_telemetry", lambda **_: None)
    monkeypatch.setattr("builtins.input", lambda _prompt="": "q")
    cli.main(["--seed", "1"])
    assert "Goodbye" in capsys.readouterr().out
    load_session_config.cache_clear()


def _layout(board: Board) -> list[tuple[int, int, int]]:
    return [
        (row, col, cell.index)
        for row, cells in enumerate(board.grid)
        for col, cell in enumerate(cells)
        if cell is not None
    ]


def test_seeded_auto_placement_differs_from_computer_fleet() -> None:
    session, rng = cli.new_session(8)
    cli.auto_ship_placement(session, rng)
    assert session.end_placement_phase()

    assert _layout(session.player1.board) != _layout(session.player2.board)


def test_seeded_sessions_are_reproducible() -> None:
    layouts = []
    for _ in range(2):
        session, rng = cli.new_session(8)
        cli.auto_ship_placement(session, rng)
        session.end_placement_phase()
        layouts.append((_layout(session.player1.board), _layout(session.player2.board)))
    assert layouts[0] == layouts[1]


def test_describe_computer_turn_without_coordinates() -> None:
    session = GameSession(rng_seed=1)
    result = TurnResult(hit=False, game_over=False, accepted=False)
    assert cli.describe_computer_turn(session, result) == "Computer did not fire."
