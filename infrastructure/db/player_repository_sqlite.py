from __future__ import annotations

import sqlite3
from dataclasses import replace
from typing import List

from domain.accounts import create_account
from domain.models import AccountType, Player
from domain.repositories import PlayerRepository
from infrastructure.db.sqlite_database import SqliteDatabase


class SqlitePlayerRepository(PlayerRepository):
    """
    SQLite-backed implementation of `PlayerRepository`.

    This repository owns the `players` table. The bound account is stored
    as its type name plus the win streak and rebuilt on every read, so a
    player keeps its rating scheme across lookups and restarts.
    """

    def __init__(self, database: SqliteDatabase) -> None:
        self._database = database
        self._ensure_table()

    def _ensure_table(self) -> None:
        with self._database.connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_name TEXT NOT NULL,
                    current_rating INTEGER NOT NULL,
                    account_type TEXT NOT NULL,
                    win_streak INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Player:
        return Player(
            id=int(row[0]),
            user_name=row[1],
            current_rating=int(row[2]),
            account=create_account(AccountType(row[3]), win_streak=int(row[4])),
        )

    def create_player(self, player: Player) -> Player:
        with self._database.connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO players (user_name, current_rating, account_type, win_streak)
                VALUES (?, ?, ?, ?)
                """,
                (
                    player.user_name,
                    player.current_rating,
                    player.account.account_type.value,
                    player.account.win_streak,
                ),
            )
            return replace(player, id=int(cur.lastrowid))

    def read_all_players(self) -> List[Player]:
        with self._database.connection() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT id, user_name, current_rating, account_type, win_streak FROM players ORDER BY id"
            )
            rows = cur.fetchall()
            return [self._to_domain(row) for row in rows]

    def update_player_rating(self, player_id: int, new_rating: int, win_streak: int) -> None:
        with self._database.connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                UPDATE players
                SET current_rating = ?, win_streak = ?
                WHERE id = ?
                """,
                (new_rating, win_streak, player_id),
            )
            if cur.rowcount == 0:
                raise KeyError(player_id)
