from __future__ import annotations

import sqlite3
from typing import List

from domain.models import Game, GameOutcome
from domain.repositories import GameRepository
from infrastructure.db.sqlite_database import SqliteDatabase


class SqliteGameRepository(GameRepository):
    """
    SQLite-backed implementation of `GameRepository`.

    Manages the append-only `games` table. Rows reference `players.id`;
    share one `SqliteDatabase` with the player repository so a game and
    the rating change it causes commit together.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._database = database
        self._ensure_table()

    def _ensure_table(self) -> None:
        with self._database.connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS games (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    player_id INTEGER NOT NULL,
                    opponent_name TEXT NOT NULL,
                    outcome TEXT NOT NULL,
                    rating INTEGER NOT NULL
                )
                """
            )

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Game:
        return Game(
            id=int(row[0]),
            player_id=int(row[1]),
            opponent_name=row[2],
            outcome=GameOutcome(row[3]),
            rating=int(row[4]),
        )

    def create_game(self, game: Game) -> None:
        with self._database.connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO games (player_id, opponent_name, outcome, rating)
                VALUES (?, ?, ?, ?)
                """,
                (game.player_id, game.opponent_name, game.outcome.value, game.rating),
            )

    def read_games_for_player(self, player_id: int) -> List[Game]:
        with self._database.connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT id, player_id, opponent_name, outcome, rating
                FROM games
                WHERE player_id = ?
                ORDER BY id
                """,
                (player_id,),
            )
            rows = cur.fetchall()
            return [self._to_domain(row) for row in rows]
