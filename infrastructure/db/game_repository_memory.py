from __future__ import annotations

from dataclasses import replace
from typing import List

from domain.models import Game
from domain.repositories import GameRepository


class InMemoryGameRepository(GameRepository):
    """Process-local, append-only implementation of `GameRepository`."""

    def __init__(self) -> None:
        self._games: List[Game] = []

    def create_game(self, game: Game) -> None:
        self._games.append(replace(game, id=len(self._games) + 1))

    def read_games_for_player(self, player_id: int) -> List[Game]:
        return [g for g in self._games if g.player_id == player_id]

    def snapshot(self) -> List[Game]:
        return list(self._games)

    def restore(self, games: List[Game]) -> None:
        self._games = list(games)
