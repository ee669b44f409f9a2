from __future__ import annotations

from typing import ContextManager, List, Protocol

from .models import Game, Player


class PlayerRepository(Protocol):
    """
    Abstraction over player persistence.

    Implementations are responsible for:
    - Assigning unique, stable player IDs.
    - Rebuilding each player's bound account from whatever they store.
    """

    def create_player(self, player: Player) -> Player:
        """Persist a new player and return it with its assigned ID."""

        ...

    def read_all_players(self) -> List[Player]:
        """Return all players in creation order."""

        ...

    def update_player_rating(self, player_id: int, new_rating: int, win_streak: int) -> None:
        """
        Store a player's new rating and account win streak in place.

        Raises `KeyError` if no player has the given ID.
        """

        ...


class GameRepository(Protocol):
    """
    Persistence abstraction for the append-only game history.
    """

    def create_game(self, game: Game) -> None:
        ...

    def read_games_for_player(self, player_id: int) -> List[Game]:
        """Return the games recorded for a player, oldest first."""

        ...


class UnitOfWork(Protocol):
    """
    Groups repository writes so they are stored together or not at all.
    """

    def transaction(self) -> ContextManager[None]:
        """
        Open a scope whose writes commit on normal exit and are discarded
        if the block raises.
        """

        ...
