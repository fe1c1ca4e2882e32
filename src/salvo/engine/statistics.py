"""Running game statistics for a process lifetime."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from salvo.telemetry import get_meter

logger = logging.getLogger(__name__)
meter = get_meter("salvo.engine.statistics")

GAMES_COUNTER = meter.create_counter(
    "salvo_games_recorded",
    unit="1",
    description="Completed games by result",
)


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time copy of the counters."""

    games_played: int
    wins: int
    losses: int
    shots_taken: int
    hits: int
    hit_accuracy: str

    def as_dict(self) -> dict[str, int | str]:
        return {
            "gamesPlayed": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "hitAccuracy": self.hit_accuracy,
        }


class Statistics:
    """Counts games, wins, losses, shots and hits until explicitly reset."""

    def __init__(self) -> None:
        self.reset_stats()

    def reset_stats(self) -> None:
        self._games_played = 0
        self._wins = 0
        self._losses = 0
        self._shots_taken = 0
        self._hits = 0

    def record_game(self, won: bool) -> None:
        self._games_played += 1
        if won:
            self._wins += 1
        else:
            self._losses += 1
        GAMES_COUNTER.add(1, attributes={"result": "win" if won else "loss"})
        logger.info("game_recorded", extra={"won": won, "games_played": self._games_played})

    def record_shot(self, is_hit: bool) -> None:
        self._shots_taken += 1
        if is_hit:
            self._hits += 1

    def get_stats(self) -> StatsSnapshot:
        if self._shots_taken > 0:
            accuracy = f"{self._hits / self._shots_taken * 100:.2f}"
        else:
            accuracy = "0.00"
        return StatsSnapshot(
            games_played=self._games_played,
            wins=self._wins,
            losses=self._losses,
            shots_taken=self._shots_taken,
            hits=self._hits,
            hit_accuracy=accuracy,
        )
