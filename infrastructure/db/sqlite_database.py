from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from domain.repositories import UnitOfWork


class SqliteDatabase(UnitOfWork):
    """
    Connection handling shared by the SQLite repositories.

    Outside a transaction every `connection()` block runs on its own
    connection and commits when it exits. Inside `transaction()` all
    repositories built on this database share one connection, and their
    writes are committed or rolled back together.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._active: Optional[sqlite3.Connection] = None

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        if self._active is not None:
            yield self._active
            return

        conn = self._get_connection()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._active is not None:
            yield
            return

        conn = self._get_connection()
        self._active = conn
        try:
            with conn:
                yield
        finally:
            self._active = None
            conn.close()
