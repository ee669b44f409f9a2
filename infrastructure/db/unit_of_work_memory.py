from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from domain.repositories import UnitOfWork
from infrastructure.db.game_repository_memory import InMemoryGameRepository
from infrastructure.db.player_repository_memory import InMemoryPlayerRepository


class InMemoryUnitOfWork(UnitOfWork):
    """
    `UnitOfWork` over the in-memory repositories.

    Snapshots both repositories when a transaction opens and puts the
    snapshots back if the block raises.
    """

    def __init__(
        self,
        player_repo: InMemoryPlayerRepository,
        game_repo: InMemoryGameRepository,
    ) -> None:
        self._player_repo = player_repo
        self._game_repo = game_repo

    @contextmanager
    def transaction(self) -> Iterator[None]:
        players = self._player_repo.snapshot()
        games = self._game_repo.snapshot()
        try:
            yield
        except BaseException:
            self._player_repo.restore(players)
            self._game_repo.restore(games)
            raise
