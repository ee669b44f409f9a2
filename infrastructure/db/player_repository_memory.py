from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Tuple

from domain.models import Player
from domain.repositories import PlayerRepository


class InMemoryPlayerRepository(PlayerRepository):
    """
    Process-local implementation of `PlayerRepository`.

    Players are kept in insertion order and receive sequential IDs
    starting at 1. Nothing survives the process.
    """

    def __init__(self) -> None:
        self._players: Dict[int, Player] = {}
        self._next_id = 1

    def create_player(self, player: Player) -> Player:
        stored = replace(player, id=self._next_id)
        self._players[stored.id] = stored
        self._next_id += 1
        return stored

    def read_all_players(self) -> List[Player]:
        return list(self._players.values())

    def update_player_rating(self, player_id: int, new_rating: int, win_streak: int) -> None:
        player = self._players[player_id]
        self._players[player_id] = replace(
            player,
            current_rating=new_rating,
            account=replace(player.account, win_streak=win_streak),
        )

    def snapshot(self) -> Tuple[Dict[int, Player], int]:
        return dict(self._players), self._next_id

    def restore(self, state: Tuple[Dict[int, Player], int]) -> None:
        players, next_id = state
        self._players = dict(players)
        self._next_id = next_id
