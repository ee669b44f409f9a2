import logging
import os

from dotenv import load_dotenv

from infrastructure.db.game_repository_memory import InMemoryGameRepository
from infrastructure.db.game_repository_sqlite import SqliteGameRepository
from infrastructure.db.player_repository_memory import InMemoryPlayerRepository
from infrastructure.db.player_repository_sqlite import SqlitePlayerRepository
from infrastructure.db.sqlite_database import SqliteDatabase
from infrastructure.db.unit_of_work_memory import InMemoryUnitOfWork
from interfaces.console.dispatcher import create_console_app


load_dotenv()

DB_PATH = os.environ.get("DB_PATH", "")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")


def resolve_log_level(name: str) -> int:
    """Map a level name such as `debug` to its number; unknown names give WARNING."""

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def main() -> None:
    logging.basicConfig(
        level=resolve_log_level(LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if DB_PATH:
        database = SqliteDatabase(DB_PATH)
        player_repo = SqlitePlayerRepository(database)
        game_repo = SqliteGameRepository(database)
        unit_of_work = database
    else:
        player_repo = InMemoryPlayerRepository()
        game_repo = InMemoryGameRepository()
        unit_of_work = InMemoryUnitOfWork(player_repo, game_repo)

    app = create_console_app(player_repo, game_repo, unit_of_work=unit_of_work)
    try:
        app.run()
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
